"""GenerateInvoicePdf Use Case

Renders a contributor invoice and, once paid, its platform invoice.
"""

import base64
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoiced_task_repository import InvoicedTaskRepository
from src.app.repositories.platform_invoice_repository import PlatformInvoiceRepository
from src.app.services.pdf_service import PdfService
from .dtos import InvoicePdfResponseDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDFs

    Business Rules:
    1. Invoice must exist
    2. The contributor invoice lists every invoiced task
    3. The platform invoice exists only for paid invoices
    4. PDFs are returned base64-encoded

    Flow:
    1. Retrieve invoice by ID
    2. Retrieve invoiced tasks
    3. Generate contributor invoice PDF
    4. Generate platform invoice PDF if the invoice is paid
    5. Return response
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoiced_task_repo: InvoicedTaskRepository,
        platform_invoice_repo: PlatformInvoiceRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.invoiced_task_repo = invoiced_task_repo
        self.platform_invoice_repo = platform_invoice_repo
        self.pdf_service = pdf_service

    async def execute(self, invoice_id: int) -> Result[InvoicePdfResponseDTO]:
        """
        Execute invoice PDF generation

        Args:
            invoice_id: Invoice ID to render

        Returns:
            Result[InvoicePdfResponseDTO]: Success with PDFs or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Retrieve invoiced tasks
            invoiced_tasks = await self.invoiced_task_repo.get_by_invoice_id(invoice_id)

            # Step 3: Contributor invoice
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                invoiced_tasks=invoiced_tasks,
            )

            response = InvoicePdfResponseDTO(
                invoice_id=invoice.id,
                pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                generated_at=datetime.utcnow(),
            )

            # Step 4: Platform invoice
            if invoice.is_paid:
                platform_invoice = await self.platform_invoice_repo.get_by_invoice_id(invoice_id)
                if platform_invoice:
                    platform_pdf = self.pdf_service.generate_platform_invoice(
                        platform_invoice=platform_invoice,
                        invoice=invoice,
                    )
                    response.platform_invoice_serial = platform_invoice.serial_number
                    response.platform_invoice_pdf_base64 = base64.b64encode(platform_pdf).decode("utf-8")

            return Return.ok(response)

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
