"""Invoice Domain Entity

Accumulates a contract's completed, not-yet-paid work.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Text, text
from src.domain.base import BaseModel, id_column
from src.domain.contract import ContractId


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing record of a contract

    Domain Rules:
    - At most one unpaid invoice per contract (partial unique index below)
    - total_amount = amount + commission = sum(value + commission) of its tasks
    - is_paid flips to True only through a successful payment
    - transaction_id and payment_time are set together with is_paid
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index(
            'ix_invoices_contract',
            'repo_full_name', 'contributor_username', 'provider', 'role',
        ),
        Index(
            'uq_invoices_one_unpaid_per_contract',
            'repo_full_name', 'contributor_username', 'provider', 'role',
            unique=True,
            sqlite_where=text("NOT is_paid"),
            postgresql_where=text("NOT is_paid"),
        ),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique invoice identifier (auto-increment)"
    )

    repo_full_name: str = Field(
        description="Contract repository"
    )

    contributor_username: str = Field(
        description="Contract contributor"
    )

    provider: str = Field(
        description="Contract provider"
    )

    role: str = Field(
        sa_column=Column(String(8), nullable=False),
        description="Contract role"
    )

    amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Sum of invoiced task values, in cents"
    )

    commission: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Sum of invoiced task commissions, in cents"
    )

    total_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="amount + commission, in cents"
    )

    is_paid: bool = Field(
        default=False,
        description="Whether a successful payment closed this invoice"
    )

    transaction_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Gateway transaction of the successful payment"
    )

    payment_time: Optional[datetime] = Field(
        default=None,
        description="When the successful payment happened"
    )

    billed_by: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Billing info of the contributor, frozen at payment time"
    )

    billed_to: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Billing info of the project, frozen at payment time"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    @property
    def contract_id(self) -> ContractId:
        return ContractId(
            repo_full_name=self.repo_full_name,
            contributor_username=self.contributor_username,
            provider=self.provider,
            role=self.role,
        )

    def belongs_to(self, contract_id: ContractId) -> bool:
        return self.contract_id == contract_id
