"""Invoiced Task Repository Interface

Defines the contract for invoiced task persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.contract import ContractId
from src.domain.invoiced_task import InvoicedTask


class InvoicedTaskRepository(ABC):
    """
    Repository interface for InvoicedTask persistence

    Invoiced tasks are immutable; there is no update operation.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoicedTask]:
        """
        Retrieve all tasks billed on an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoicedTask items
        """
        pass

    @abstractmethod
    async def create(self, invoiced_task: InvoicedTask) -> InvoicedTask:
        """
        Create a new invoiced task

        Args:
            invoiced_task: InvoicedTask entity to persist

        Returns:
            Created InvoicedTask with generated ID
        """
        pass

    @abstractmethod
    async def exists_for_contract(self, contract_id: ContractId, task_id: int) -> bool:
        """
        Check whether a task was already billed on any invoice of a contract

        Args:
            contract_id: Composite contract id
            task_id: Task ID

        Returns:
            True if the task is on one of the contract's invoices
        """
        pass
