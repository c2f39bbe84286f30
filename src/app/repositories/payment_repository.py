"""Payment Repository Interface

Payments are append-only: create and read, never update.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.payment import Payment


class PaymentRepository(ABC):

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment record

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[Payment]:
        """
        Retrieve every settlement attempt of an invoice, oldest first

        Args:
            invoice_id: Invoice ID

        Returns:
            List of payments
        """
        pass
