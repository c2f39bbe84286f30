"""ReportLab PDF Generation Service Implementation

Implements PDF generation using ReportLab library.
"""

from io import BytesIO
from typing import List
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice
from src.domain.invoiced_task import InvoicedTask
from src.domain.platform_invoice import PlatformInvoice

HEADER_COLOR = colors.HexColor("#2C3E50")
MUTED_COLOR = colors.HexColor("#7F8C8D")
GRID_COLOR = colors.HexColor("#BDC3C7")

COLUMN_WIDTHS = [80 * mm, 25 * mm, 30 * mm, 35 * mm]


def _money(cents: Decimal, currency: str = "EUR") -> str:
    return f"{currency} {Decimal(cents) / 100:,.2f}"


def _multiline(text: str) -> str:
    return (text or "-").replace("\n", "<br/>")


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Renders the contributor invoice (tasks billed to the project) and the
    platform invoice (commission and VAT billed to the contributor).
    """

    def __init__(self, currency: str = "EUR"):
        self.currency = currency.upper()
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=10,
            textColor=HEADER_COLOR,
        )
        self.status_style = ParagraphStyle(
            "StatusStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C"),
            spaceAfter=20,
        )
        self.normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        self.bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

    def _document(self, buffer: BytesIO) -> SimpleDocTemplate:
        return SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )

    def _details_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=[40 * mm, 100 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED_COLOR),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        return table

    def _lines_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=COLUMN_WIDTHS)
        table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return table

    def _totals_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=COLUMN_WIDTHS)
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 11),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, HEADER_COLOR),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return table

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
        buffer = BytesIO()
        doc = self._document(buffer)
        elements = []

        elements.append(Paragraph(f"Invoice #{invoice.id}", self.title_style))
        elements.append(
            Paragraph("PAID" if invoice.is_paid else "ACTIVE", self.status_style)
        )

        details = [
            ["Project:", f"{invoice.repo_full_name} ({invoice.provider})"],
            ["Contributor:", invoice.contributor_username],
            ["Role:", invoice.role],
            ["Created:", invoice.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")],
        ]
        if invoice.is_paid and invoice.payment_time:
            details.append(
                ["Paid:", invoice.payment_time.strftime("%Y-%m-%d %H:%M:%S UTC")]
            )
            details.append(["Transaction:", invoice.transaction_id or "-"])
        elements.append(self._details_table(details))
        elements.append(Spacer(1, 8 * mm))

        if invoice.is_paid:
            elements.append(Paragraph("Billed By:", self.bold_style))
            elements.append(Paragraph(_multiline(invoice.billed_by), self.normal_style))
            elements.append(Spacer(1, 4 * mm))
            elements.append(Paragraph("Billed To:", self.bold_style))
            elements.append(Paragraph(_multiline(invoice.billed_to), self.normal_style))
            elements.append(Spacer(1, 8 * mm))

        rows = [["Task", "Minutes", "Commission", "Value"]]
        for task in invoiced_tasks:
            rows.append(
                [
                    f"#{task.issue_id}",
                    str(task.time_spent_minutes),
                    _money(task.commission, self.currency),
                    _money(task.value, self.currency),
                ]
            )
        elements.append(self._lines_table(rows))
        elements.append(Spacer(1, 5 * mm))

        elements.append(
            self._totals_table(
                [
                    ["", "", "Amount:", _money(invoice.amount, self.currency)],
                    ["", "", "Commission:", _money(invoice.commission, self.currency)],
                    ["", "", "Total:", _money(invoice.total_amount, self.currency)],
                ]
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def generate_platform_invoice(
        self,
        platform_invoice: PlatformInvoice,
        invoice: Invoice,
    ) -> bytes:
        """
        Generate the PDF of a platform commission invoice

        Amounts are shown in EUR and, for Romanian bookkeeping, in RON at
        the exchange rate of the payment date.
        """
        buffer = BytesIO()
        doc = self._document(buffer)
        elements = []

        elements.append(
            Paragraph(f"Invoice {platform_invoice.serial_number}", self.title_style)
        )

        details = [
            ["Invoice Date:", platform_invoice.created_at.strftime("%Y-%m-%d")],
            ["Payment Date:", platform_invoice.payment_time.strftime("%Y-%m-%d")],
            ["Transaction:", platform_invoice.transaction_id],
            ["Refers To:", f"Invoice #{invoice.id} of {invoice.repo_full_name}"],
            ["EUR/RON:", f"{Decimal(platform_invoice.eur_to_ron) / 100:.2f}"],
        ]
        elements.append(self._details_table(details))
        elements.append(Spacer(1, 8 * mm))

        elements.append(Paragraph("Billed By:", self.bold_style))
        elements.append(Paragraph(_multiline(platform_invoice.billed_by), self.normal_style))
        elements.append(Spacer(1, 4 * mm))
        elements.append(Paragraph("Billed To:", self.bold_style))
        elements.append(Paragraph(_multiline(platform_invoice.billed_to), self.normal_style))
        elements.append(Spacer(1, 8 * mm))

        rows = [
            ["Description", "Quantity", "Unit Price", "Total"],
            [
                "Platform commission",
                "1",
                _money(platform_invoice.commission, self.currency),
                _money(platform_invoice.commission, self.currency),
            ],
        ]
        elements.append(self._lines_table(rows))
        elements.append(Spacer(1, 5 * mm))

        elements.append(
            self._totals_table(
                [
                    ["", "", "VAT:", _money(platform_invoice.vat, self.currency)],
                    ["", "", "Total:", _money(platform_invoice.total_amount, self.currency)],
                    ["", "", "Total (RON):", _money(platform_invoice.total_amount_ron, "RON")],
                ]
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
