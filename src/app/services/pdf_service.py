"""PDF Generation Service Interface

Defines the contract for rendering invoices as PDF documents.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.invoiced_task import InvoicedTask
from src.domain.platform_invoice import PlatformInvoice


class PdfService(ABC):
    """
    Service interface for PDF generation

    Renders the contributor's invoice to the project and the platform's
    commission invoice to the contributor.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        invoiced_tasks: List[InvoicedTask],
    ) -> bytes:
        """
        Generate the PDF of a contributor invoice

        Args:
            invoice: Invoice entity with billing details
            invoiced_tasks: Tasks billed on the invoice

        Returns:
            PDF document as bytes
        """
        pass

    @abstractmethod
    def generate_platform_invoice(
        self,
        platform_invoice: PlatformInvoice,
        invoice: Invoice,
    ) -> bytes:
        """
        Generate the PDF of a platform commission invoice

        Args:
            platform_invoice: PlatformInvoice with commission and VAT
            invoice: The paid contributor invoice it refers to

        Returns:
            PDF document as bytes
        """
        pass
