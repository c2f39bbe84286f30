"""Integration tests for InvoiceLedger with a real database

Tests cover:
- Lazy creation of the active invoice
- Billing a task and recomputing the invoice totals
- A task billed once per contract
- One unpaid invoice per contract, enforced by the schema
"""

import pytest
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.depends import build_ledger
from src.domain import Invoice, Task


@pytest.mark.asyncio
class TestInvoiceLedgerIntegration:
    """Integration tests with real database"""

    async def test_active_invoice_is_created_once(self, db_session: AsyncSession, project_setup):
        """
        Given: A contract without invoices
        When: The active invoice is requested twice
        Then: The same empty invoice is returned both times
        """
        # Arrange
        ledger = build_ledger(db_session, project_setup["contract"].contract_id)

        # Act
        first = await ledger.active()
        second = await ledger.active()

        # Assert
        assert first.is_ok()
        assert first.value.invoice_id == second.value.invoice_id
        assert first.value.total_amount == Decimal(0)
        assert first.value.is_paid is False
        assert len((await ledger.invoices()).value) == 1

    async def test_add_task_updates_totals(self, db_session: AsyncSession, project_setup):
        """
        Given: A 60 minute DEV task of john at 120 EUR/h, 4% + 1% commission
        When: The task is billed
        Then: value 12000, commission 600, invoice total 12600
        """
        # Arrange
        ledger = build_ledger(db_session, project_setup["contract"].contract_id)

        # Act
        result = await ledger.add(project_setup["task"], time_spent_minutes=75)

        # Assert
        assert result.is_ok()
        billed = result.value
        assert billed.value == Decimal(12000)
        assert billed.commission == Decimal(600)
        assert billed.time_spent_minutes == 75
        assert billed.invoice_total_amount == Decimal(12600)

        invoice = await SqlAlchemyInvoiceRepository(db_session).get_by_id(billed.invoice_id)
        assert invoice.amount == Decimal(12000)
        assert invoice.commission == Decimal(600)
        assert invoice.total_amount == Decimal(12600)

    async def test_task_billed_once(self, db_session: AsyncSession, project_setup):
        ledger = build_ledger(db_session, project_setup["contract"].contract_id)
        await ledger.add(project_setup["task"], time_spent_minutes=60)

        result = await ledger.add(project_setup["task"], time_spent_minutes=60)

        assert result.is_err()
        assert result.error.code == "NOT_ELIGIBLE_TASK"
        assert result.error.reason == "task was already invoiced"

    async def test_tasks_accumulate_on_the_active_invoice(self, db_session: AsyncSession, project_setup):
        # Arrange
        ledger = build_ledger(db_session, project_setup["contract"].contract_id)
        other = Task(
            issue_id="43",
            repo_full_name="mihai/test",
            provider="github",
            role="DEV",
            assignee="john",
            estimation_minutes=30,
        )
        db_session.add(other)
        await db_session.commit()

        # Act
        first = await ledger.add(project_setup["task"], time_spent_minutes=60)
        second = await ledger.add(other, time_spent_minutes=30)

        # Assert
        assert first.value.invoice_id == second.value.invoice_id
        assert second.value.invoice_total_amount == Decimal(12600) + Decimal(6300)

    async def test_second_unpaid_invoice_is_rejected(self, db_session: AsyncSession, project_setup):
        """The partial unique index allows one unpaid invoice per contract"""
        ledger = build_ledger(db_session, project_setup["contract"].contract_id)
        await ledger.active()

        db_session.add(
            Invoice(
                repo_full_name="mihai/test",
                contributor_username="john",
                provider="github",
                role="DEV",
            )
        )
        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()
