"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.contract import ContractId
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Every listing is ordered by created_at ascending (oldest first), with the
    id as tie-breaker.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_contract(self, contract_id: ContractId) -> List[Invoice]:
        """
        Retrieve all invoices of a contract, oldest first

        Args:
            contract_id: Composite contract id

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def get_unpaid_by_contract(self, contract_id: ContractId) -> List[Invoice]:
        """
        Retrieve unpaid invoices of a contract, oldest first

        Args:
            contract_id: Composite contract id

        Returns:
            List of unpaid invoices (at most one when the ledger rules hold)
        """
        pass

    @abstractmethod
    async def get_unpaid_by_project(self, repo_full_name: str, provider: str) -> List[Invoice]:
        """
        Retrieve unpaid invoices of every contract of a project

        Args:
            repo_full_name: Project repository
            provider: Project provider

        Returns:
            List of unpaid invoices
        """
        pass

    @abstractmethod
    async def get_payable(self, minimum_amount: Decimal) -> List[Invoice]:
        """
        Retrieve unpaid invoices whose total reached the minimum payable amount

        Used by the invoice settler worker.

        Args:
            minimum_amount: Minimum total, in cents

        Returns:
            List of unpaid invoices, oldest first
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass
