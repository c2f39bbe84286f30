"""Invoiced Task Domain Entity

A single completed task attached to an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Numeric
from src.domain.base import BaseModel, id_column


class InvoicedTask(BaseModel, table=True):
    """
    Invoiced Task - Billed unit of completed work

    Domain Rules:
    - Each invoiced task belongs to exactly one invoice
    - A task is invoiced at most once per contract
    - Immutable once created
    - commission = project commission + contributor commission
    """

    __tablename__ = "invoiced_tasks"
    __table_args__ = (
        Index('ix_invoiced_tasks_invoice_id', 'invoice_id'),
        Index('ix_invoiced_tasks_task_id', 'task_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique invoiced task identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    task_id: int = Field(
        description="Task that was billed"
    )

    issue_id: str = Field(
        description="Issue number of the billed task (kept after the task is closed)"
    )

    time_spent_minutes: int = Field(
        description="Time the contributor spent on the task, in minutes"
    )

    value: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Value of the task, in cents"
    )

    commission: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Platform commission for the task, in cents"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Billing timestamp"
    )

    @property
    def total_amount(self) -> Decimal:
        return self.value + self.commission
