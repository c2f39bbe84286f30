"""Unit tests for ReportLabPdfService"""

from datetime import datetime
from decimal import Decimal

from src.adapter.services.pdf_service import ReportLabPdfService
from src.domain import Invoice, InvoicedTask, PlatformInvoice


def make_invoice(is_paid=False):
    invoice = Invoice(
        id=1,
        repo_full_name="mihai/test",
        contributor_username="john",
        provider="github",
        role="DEV",
        amount=Decimal(19000),
        commission=Decimal(1000),
        total_amount=Decimal(20000),
        is_paid=is_paid,
        created_at=datetime(2024, 1, 1),
    )
    if is_paid:
        invoice.payment_time = datetime(2024, 2, 1)
        invoice.transaction_id = "pi_1"
        invoice.billed_by = "John Doe\nBrasov\nRO"
        invoice.billed_to = "mihai/test (github)"
    return invoice


def make_task():
    return InvoicedTask(
        id=1, invoice_id=1, task_id=1, issue_id="42",
        time_spent_minutes=60, value=Decimal(19000), commission=Decimal(1000),
    )


class TestReportLabPdfService:

    def test_active_invoice(self):
        pdf = ReportLabPdfService().generate_invoice(make_invoice(), [make_task()])

        assert pdf.startswith(b"%PDF")

    def test_paid_invoice_without_tasks(self):
        pdf = ReportLabPdfService().generate_invoice(make_invoice(is_paid=True), [])

        assert pdf.startswith(b"%PDF")

    def test_platform_invoice(self):
        platform_invoice = PlatformInvoice(
            id=12,
            invoice_id=1,
            billed_by="Platform SRL",
            billed_to="John Doe\nBrasov\nRO",
            commission=Decimal(1000),
            vat=Decimal(190),
            eur_to_ron=Decimal(492),
            transaction_id="pi_1",
            payment_time=datetime(2024, 2, 1),
            created_at=datetime(2024, 2, 1),
        )

        pdf = ReportLabPdfService().generate_platform_invoice(
            platform_invoice, make_invoice(is_paid=True)
        )

        assert pdf.startswith(b"%PDF")
