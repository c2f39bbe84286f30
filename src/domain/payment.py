"""Payment Domain Entity

One settlement attempt against an invoice. Append-only.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, id_column


class PaymentStatus(str, Enum):
    """Terminal outcome of a settlement attempt"""
    SUCCESSFUL = "SUCCESSFUL"  # gateway confirmed, invoice closed
    FAILED = "FAILED"          # gateway declined the transfer
    ERROR = "ERROR"            # gateway malfunction, outcome unknown


class Payment(BaseModel, table=True):
    """
    Payment - Immutable record of a settlement attempt

    Domain Rules:
    - Created exactly once per submitted attempt, whatever the outcome
    - Never updated or deleted; a retry creates a new Payment
    - transaction_id is empty when the gateway produced none
    - fail_reason is empty for SUCCESSFUL payments
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_invoice_id', 'invoice_id'),
        Index('ix_payments_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique payment identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    transaction_id: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False, default=""),
        description="Gateway transaction id (empty if none)"
    )

    payment_time: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the attempt was recorded"
    )

    value: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount of the attempt, in cents"
    )

    status: PaymentStatus = Field(
        description="SUCCESSFUL, FAILED or ERROR"
    )

    fail_reason: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Human-readable reason for FAILED/ERROR payments"
    )
