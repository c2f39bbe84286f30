"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from decimal import Decimal
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.contract import ContractId
from src.domain.invoice import Invoice


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _for_contract(self, contract_id: ContractId):
        return (
            select(Invoice)
            .where(Invoice.repo_full_name == contract_id.repo_full_name)
            .where(Invoice.contributor_username == contract_id.contributor_username)
            .where(Invoice.provider == contract_id.provider)
            .where(Invoice.role == contract_id.role)
        )

    @staticmethod
    def _oldest_first(statement):
        return statement.order_by(Invoice.created_at.asc(), Invoice.id.asc())

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_contract(self, contract_id: ContractId) -> List[Invoice]:
        statement = self._oldest_first(self._for_contract(contract_id))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_unpaid_by_contract(self, contract_id: ContractId) -> List[Invoice]:
        statement = self._for_contract(contract_id).where(Invoice.is_paid == False)  # noqa: E712
        result = await self.session.execute(self._oldest_first(statement))
        return list(result.scalars().all())

    async def get_unpaid_by_project(self, repo_full_name: str, provider: str) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.repo_full_name == repo_full_name)
            .where(Invoice.provider == provider)
            .where(Invoice.is_paid == False)  # noqa: E712
        )
        result = await self.session.execute(self._oldest_first(statement))
        return list(result.scalars().all())

    async def get_payable(self, minimum_amount: Decimal) -> List[Invoice]:
        """
        Retrieve unpaid invoices whose total reached the minimum payable amount

        Args:
            minimum_amount: Minimum total, in cents

        Returns:
            List of unpaid invoices, oldest first
        """
        statement = (
            select(Invoice)
            .where(Invoice.is_paid == False)  # noqa: E712
            .where(Invoice.total_amount >= minimum_amount)
        )
        result = await self.session.execute(self._oldest_first(statement))
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice
