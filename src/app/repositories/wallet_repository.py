"""Wallet Repository Interface

Defines the contract for wallet persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.wallet import Wallet


class WalletRepository(ABC):
    """
    Repository interface for Wallet persistence

    Settlement reads the wallet with pessimistic locking (SELECT FOR UPDATE)
    and deducts cash with a conditional update, so two concurrent payments
    can never both spend the same cash.
    """

    @abstractmethod
    async def get_by_id(self, wallet_id: int, for_update: bool = False) -> Optional[Wallet]:
        """
        Retrieve wallet by ID

        Args:
            wallet_id: Wallet ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Wallet if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_active_for_project(
        self, repo_full_name: str, provider: str, for_update: bool = False
    ) -> Optional[Wallet]:
        """
        Retrieve the active wallet of a project

        Args:
            repo_full_name: Project repository
            provider: Project provider
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Active Wallet if the project has one, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_project(self, repo_full_name: str, provider: str) -> List[Wallet]:
        pass

    @abstractmethod
    async def deduct_cash(self, wallet_id: int, amount: Decimal) -> bool:
        """
        Atomically subtract amount from the wallet's cash

        Performs a single conditional update that only succeeds while
        cash >= amount.

        Args:
            wallet_id: Wallet ID
            amount: Amount to deduct, in cents

        Returns:
            True if the cash was deducted, False if funds were insufficient
        """
        pass

    @abstractmethod
    async def activate(self, wallet: Wallet) -> Wallet:
        """
        Make the wallet the project's active one, deactivating its siblings

        Args:
            wallet: Wallet to activate

        Returns:
            The activated Wallet
        """
        pass
