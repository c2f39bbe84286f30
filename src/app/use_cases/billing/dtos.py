"""Data Transfer Objects for Billing Use Cases

Pydantic models for use case outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by InvoiceLedger.active and InvoiceLedger.invoices.
    """

    invoice_id: int = Field(
        ...,
        description="Invoice ID"
    )

    repo_full_name: str = Field(
        ...,
        description="Contract repository"
    )

    contributor_username: str = Field(
        ...,
        description="Contract contributor"
    )

    provider: str = Field(
        ...,
        description="Contract provider"
    )

    role: str = Field(
        ...,
        description="Contract role"
    )

    amount: Decimal = Field(
        ...,
        description="Sum of task values, in cents"
    )

    commission: Decimal = Field(
        ...,
        description="Sum of task commissions, in cents"
    )

    total_amount: Decimal = Field(
        ...,
        description="amount + commission, in cents"
    )

    is_paid: bool = Field(
        ...,
        description="Whether the invoice was settled"
    )

    transaction_id: Optional[str] = Field(
        default=None,
        description="Transaction of the successful payment"
    )

    payment_time: Optional[datetime] = Field(
        default=None,
        description="When the invoice was paid"
    )

    created_at: datetime = Field(
        ...,
        description="Invoice creation timestamp"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "repo_full_name": "amihaiemil/docker-java-api",
                "contributor_username": "john",
                "provider": "github",
                "role": "DEV",
                "amount": "19000.00",
                "commission": "1000.00",
                "total_amount": "20000.00",
                "is_paid": False,
                "transaction_id": None,
                "payment_time": None,
                "created_at": "2024-01-01T00:00:00Z"
            }
        }


class InvoicedTaskResponseDTO(BaseModel):
    """
    Response DTO for a task added to an invoice

    Returned by InvoiceLedger.add.
    """

    invoiced_task_id: int = Field(
        ...,
        description="Invoiced task ID"
    )

    invoice_id: int = Field(
        ...,
        description="Invoice the task was billed on"
    )

    task_id: int = Field(
        ...,
        description="Billed task ID"
    )

    issue_id: str = Field(
        ...,
        description="Issue number of the billed task"
    )

    time_spent_minutes: int = Field(
        ...,
        description="Time spent on the task, in minutes"
    )

    value: Decimal = Field(
        ...,
        description="Task value, in cents"
    )

    commission: Decimal = Field(
        ...,
        description="Platform commission, in cents"
    )

    invoice_total_amount: Decimal = Field(
        ...,
        description="Invoice total after adding the task, in cents"
    )


class PaymentResponseDTO(BaseModel):
    """
    Response DTO for a settlement attempt

    Returned by SettlementPipeline.pay and InvoiceLedger.payments.
    """

    payment_id: int = Field(
        ...,
        description="Payment ID"
    )

    invoice_id: int = Field(
        ...,
        description="Settled invoice ID"
    )

    transaction_id: str = Field(
        default="",
        description="Gateway transaction id (empty if none)"
    )

    payment_time: datetime = Field(
        ...,
        description="When the attempt was recorded"
    )

    value: Decimal = Field(
        ...,
        description="Attempted amount, in cents"
    )

    status: str = Field(
        ...,
        description="SUCCESSFUL, FAILED or ERROR"
    )

    fail_reason: str = Field(
        default="",
        description="Why the attempt failed (empty on success)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "payment_id": 7,
                "invoice_id": 1,
                "transaction_id": "pi_3Nq8Yz2eZvKYlo2C0n1Xk9ab",
                "payment_time": "2024-02-01T12:00:00Z",
                "value": "20000.00",
                "status": "SUCCESSFUL",
                "fail_reason": ""
            }
        }


class ElectionResponseDTO(BaseModel):
    """
    Response DTO for an elected contributor

    Returned by ContributorElector.elect (None when nobody was elected).
    """

    username: str = Field(
        ...,
        description="Elected contributor"
    )

    provider: str = Field(
        ...,
        description="Provider of the elected contributor"
    )

    role: str = Field(
        ...,
        description="Role of the contract the contributor was elected under"
    )

    hourly_rate: Decimal = Field(
        ...,
        description="Hourly rate of that contract, in cents"
    )

    cost: Decimal = Field(
        ...,
        description="Value plus commissions of the task under that contract, in cents"
    )

    available_funds: Decimal = Field(
        ...,
        description="Project funds available when the election ran, in cents"
    )


class ActivationResponseDTO(BaseModel):
    """Response DTO for wallet / payment method / payout method activation"""

    kind: str = Field(
        ...,
        description="wallet, payment_method or payout_method"
    )

    id: int = Field(
        ...,
        description="ID of the activated entity"
    )

    identifier: str = Field(
        ...,
        description="Gateway identifier of the activated entity"
    )

    active: bool = Field(
        default=True,
        description="Always True after activation"
    )


class PaymentSetupResponseDTO(BaseModel):
    """Response DTO for a payment method setup handle"""

    wallet_id: int = Field(
        ...,
        description="Wallet the handle is for"
    )

    setup_handle: str = Field(
        ...,
        description="Opaque token handed to the payer's UI"
    )


class InvoicePdfResponseDTO(BaseModel):
    """
    Response DTO for invoice PDF generation

    The platform invoice is only present for paid invoices.
    """

    invoice_id: int = Field(
        ...,
        description="Invoice ID"
    )

    pdf_base64: str = Field(
        ...,
        description="Contributor invoice PDF, base64-encoded"
    )

    platform_invoice_serial: Optional[str] = Field(
        default=None,
        description="Serial number of the platform invoice (e.g. SLF0000001)"
    )

    platform_invoice_pdf_base64: Optional[str] = Field(
        default=None,
        description="Platform invoice PDF, base64-encoded"
    )

    generated_at: datetime = Field(
        ...,
        description="Generation timestamp"
    )


class SettlementRunResultDTO(BaseModel):
    """Response DTO for one run of the invoice settler worker"""

    total_invoices: int = Field(
        ...,
        description="Payable invoices found"
    )

    successful: int = Field(
        default=0,
        description="Invoices settled"
    )

    failed: int = Field(
        default=0,
        description="Attempts declined by the gateway"
    )

    errored: int = Field(
        default=0,
        description="Attempts that hit a gateway malfunction"
    )

    rejected: int = Field(
        default=0,
        description="Invoices rejected before submission"
    )

    execution_time_ms: int = Field(
        ...,
        description="Run duration in milliseconds"
    )
