"""Platform Invoice Domain Entity

Invoice issued by the platform to the contributor for its commission,
created as a side effect of a successful payment.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, id_column


class PlatformInvoice(BaseModel, table=True):
    """
    Platform Invoice - Commission and VAT owed to the platform

    Domain Rules:
    - One platform invoice per paid invoice
    - total_amount = commission + vat
    - eur_to_ron is RON per EUR multiplied by 100 (e.g. 492 for 4.92)
    """

    __tablename__ = "platform_invoices"

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique platform invoice identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(
            BigInteger,
            ForeignKey("invoices.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        description="Foreign key to the paid Invoice"
    )

    billed_by: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Legal details of the platform"
    )

    billed_to: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Billing info of the contributor"
    )

    commission: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Platform commission, in cents"
    )

    vat: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="VAT on the commission, in cents"
    )

    eur_to_ron: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="EUR-RON exchange rate x100 on the payment date"
    )

    transaction_id: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Gateway transaction of the payment"
    )

    payment_time: datetime = Field(
        description="When the payment happened"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Platform invoice creation timestamp"
    )

    @property
    def serial_number(self) -> str:
        return f"SLF{self.id:07d}"

    @property
    def total_amount(self) -> Decimal:
        return self.commission + self.vat

    @property
    def total_amount_ron(self) -> Decimal:
        """Total converted to RON bani (cents)"""
        return (self.total_amount * self.eur_to_ron / Decimal(100)).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
