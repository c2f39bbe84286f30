"""SQLAlchemy implementation of WalletRepository

Provides persistence for Wallet entities with pessimistic locking support
so that two settlements never spend the same cash.
"""

from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.wallet_repository import WalletRepository
from src.domain.wallet import Wallet


class SqlAlchemyWalletRepository(WalletRepository):
    """
    SQLAlchemy implementation of WalletRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Conditional cash deduction (never below zero)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, wallet_id: int, for_update: bool = False) -> Optional[Wallet]:
        """
        Retrieve wallet by ID with optional row-level locking

        Args:
            wallet_id: Wallet ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Wallet if found, None otherwise
        """
        stmt = select(Wallet).where(Wallet.id == wallet_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_for_project(
        self, repo_full_name: str, provider: str, for_update: bool = False
    ) -> Optional[Wallet]:
        stmt = (
            select(Wallet)
            .where(Wallet.repo_full_name == repo_full_name)
            .where(Wallet.provider == provider)
            .where(Wallet.active == True)  # noqa: E712
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_project(self, repo_full_name: str, provider: str) -> List[Wallet]:
        stmt = (
            select(Wallet)
            .where(Wallet.repo_full_name == repo_full_name)
            .where(Wallet.provider == provider)
            .order_by(Wallet.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def deduct_cash(self, wallet_id: int, amount: Decimal) -> bool:
        """
        Subtract amount from the wallet's cash if enough is left

        Args:
            wallet_id: Wallet ID
            amount: Amount in cents

        Returns:
            True if the row was updated, False if cash was insufficient

        Note:
            The cash check and the subtraction happen in one UPDATE statement
        """
        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id)
            .where(Wallet.cash >= amount)
            .values(cash=Wallet.cash - amount, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        wallet = await self.get_by_id(wallet_id)
        if wallet is not None:
            await self.session.refresh(wallet)
        return True

    async def activate(self, wallet: Wallet) -> Wallet:
        """
        Activate a wallet and deactivate the project's other wallets

        Args:
            wallet: Wallet to activate

        Returns:
            The activated Wallet
        """
        stmt = (
            update(Wallet)
            .where(Wallet.repo_full_name == wallet.repo_full_name)
            .where(Wallet.provider == wallet.provider)
            .where(Wallet.id != wallet.id)
            .values(active=False)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)

        wallet.active = True
        wallet.updated_at = datetime.utcnow()
        self.session.add(wallet)
        await self.session.flush()
        await self.session.refresh(wallet)
        return wallet
