"""Unit tests for InvoiceLedger use case

Tests cover:
- Oldest unpaid invoice is the active one
- Lazy creation of the active invoice
- Task eligibility (assignee, project, role, already invoiced)
- Amount recomputation after adding a task
- register_as_paid closes the invoice exactly once
- Invoices of other contracts are rejected with ValueError
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from datetime import datetime, timedelta

from src.app.use_cases.billing.invoice_ledger import InvoiceLedger
from src.domain import (
    Contract,
    ContractId,
    Invoice,
    InvoicedTask,
    Payment,
    PaymentStatus,
    PlatformInvoice,
    Project,
    Task,
)


CONTRACT_ID = ContractId(
    repo_full_name="mihai/test",
    contributor_username="john",
    provider="github",
    role="DEV",
)


def make_invoice(invoice_id=1, created_at=None, is_paid=False, username="john", total=Decimal(0)):
    return Invoice(
        id=invoice_id,
        repo_full_name="mihai/test",
        contributor_username=username,
        provider="github",
        role="DEV",
        amount=total,
        commission=Decimal(0),
        total_amount=total,
        is_paid=is_paid,
        created_at=created_at or datetime(2024, 1, 1),
    )


def make_task(**overrides):
    fields = dict(
        id=7,
        issue_id="42",
        repo_full_name="mihai/test",
        provider="github",
        role="DEV",
        assignee="john",
        estimation_minutes=60,
    )
    fields.update(overrides)
    return Task(**fields)


async def echo(entity):
    return entity


async def with_id(entity):
    entity.id = entity.id or 1
    return entity


@pytest.fixture
def repos():
    repos = MagicMock()
    repos.contract.get_by_contract_id = AsyncMock(
        return_value=Contract(
            id=3,
            repo_full_name="mihai/test",
            contributor_username="john",
            provider="github",
            role="DEV",
            hourly_rate=Decimal(19000),
        )
    )
    repos.project.get_by_repo = AsyncMock(
        return_value=Project(
            id=1,
            repo_full_name="mihai/test",
            provider="github",
            project_percentage=Decimal("5"),
            contributor_percentage=Decimal("0"),
        )
    )
    repos.invoice.update = AsyncMock(side_effect=echo)
    repos.invoiced_task.exists_for_contract = AsyncMock(return_value=False)
    repos.payment.create = AsyncMock(side_effect=echo)
    repos.platform_invoice.create = AsyncMock(side_effect=with_id)
    return repos


@pytest.fixture
def ledger(mock_uow, repos):
    return InvoiceLedger(
        uow=mock_uow,
        contract_id=CONTRACT_ID,
        contract_repo=repos.contract,
        project_repo=repos.project,
        invoice_repo=repos.invoice,
        invoiced_task_repo=repos.invoiced_task,
        payment_repo=repos.payment,
        platform_invoice_repo=repos.platform_invoice,
        platform_billed_by="Platform SRL",
    )


@pytest.mark.asyncio
class TestActive:

    async def test_returns_oldest_unpaid_invoice(self, ledger, repos):
        """
        Given: Two unpaid invoices created at T1 < T2
        When: active() is called
        Then: The invoice created at T1 is returned and nothing is created
        """
        # Arrange
        older = make_invoice(1, created_at=datetime(2024, 1, 1))
        newer = make_invoice(2, created_at=datetime(2024, 1, 1) + timedelta(days=1))
        repos.invoice.get_unpaid_by_contract = AsyncMock(return_value=[older, newer])
        repos.invoice.create = AsyncMock()

        # Act
        result = await ledger.active()

        # Assert
        assert result.is_ok()
        assert result.value.invoice_id == 1
        repos.invoice.create.assert_not_called()

    async def test_creates_invoice_when_none_is_unpaid(self, ledger, repos, mock_uow):
        # Arrange
        repos.invoice.get_unpaid_by_contract = AsyncMock(return_value=[])

        async def create(invoice):
            invoice.id = 9
            return invoice

        repos.invoice.create = AsyncMock(side_effect=create)

        # Act
        result = await ledger.active(CONTRACT_ID)

        # Assert
        assert result.is_ok()
        assert result.value.invoice_id == 9
        assert result.value.is_paid is False
        assert result.value.contributor_username == "john"
        created = repos.invoice.create.call_args[0][0]
        assert created.contract_id == CONTRACT_ID
        mock_uow.commit.assert_called_once()

    async def test_other_contract_id_is_a_programming_error(self, ledger):
        other = ContractId(
            repo_full_name="mihai/test",
            contributor_username="jane",
            provider="github",
            role="DEV",
        )

        with pytest.raises(ValueError):
            await ledger.active(other)


@pytest.mark.asyncio
class TestAdd:

    async def test_adds_task_and_recomputes_total(self, ledger, repos, mock_uow):
        """
        Given: An active invoice already billing a task worth 9500 + 475
        When: A one hour task at 190.00/h with 5% commission is added
        Then: The invoice amounts are recomputed from both tasks
        """
        # Arrange
        invoice = make_invoice(1)
        repos.invoice.get_unpaid_by_contract = AsyncMock(return_value=[invoice])
        previous = InvoicedTask(
            id=1, invoice_id=1, task_id=5, issue_id="40",
            time_spent_minutes=30, value=Decimal(9500), commission=Decimal(475),
        )

        async def create(invoiced_task):
            invoiced_task.id = 2
            return invoiced_task

        repos.invoiced_task.create = AsyncMock(side_effect=create)
        repos.invoiced_task.get_by_invoice_id = AsyncMock(
            side_effect=lambda invoice_id: [previous, repos.invoiced_task.create.call_args[0][0]]
        )

        # Act
        result = await ledger.add(make_task(), 75)

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.invoiced_task_id == 2
        assert response.value == Decimal(19000)
        assert response.commission == Decimal(950)
        assert response.time_spent_minutes == 75
        assert response.invoice_total_amount == Decimal(29925)

        assert invoice.amount == Decimal(28500)
        assert invoice.commission == Decimal(1425)
        assert invoice.total_amount == Decimal(29925)
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"assignee": "jane"},
            {"assignee": None},
            {"repo_full_name": "mihai/other"},
            {"provider": "gitlab"},
            {"role": "QA"},
        ],
    )
    async def test_rejects_ineligible_task(self, ledger, repos, mock_uow, overrides):
        # Arrange
        repos.invoiced_task.create = AsyncMock()

        # Act
        result = await ledger.add(make_task(**overrides), 60)

        # Assert
        assert result.is_err()
        assert result.error.code == "NOT_ELIGIBLE_TASK"
        repos.invoiced_task.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_rejects_already_invoiced_task(self, ledger, repos):
        """
        Given: The task is on one of the contract's invoices
        When: It is added again
        Then: NOT_ELIGIBLE_TASK
        """
        # Arrange
        repos.invoiced_task.exists_for_contract = AsyncMock(return_value=True)
        repos.invoiced_task.create = AsyncMock()

        # Act
        result = await ledger.add(make_task(), 60)

        # Assert
        assert result.is_err()
        assert result.error.code == "NOT_ELIGIBLE_TASK"
        assert result.error.reason == "task was already invoiced"
        repos.invoiced_task.exists_for_contract.assert_called_once_with(CONTRACT_ID, 7)

    async def test_any_role_contract_accepts_every_role(self, mock_uow, repos):
        # Arrange
        any_contract = ContractId(
            repo_full_name="mihai/test",
            contributor_username="john",
            provider="github",
            role="ANY",
        )
        ledger = InvoiceLedger(
            uow=mock_uow,
            contract_id=any_contract,
            contract_repo=repos.contract,
            project_repo=repos.project,
            invoice_repo=repos.invoice,
            invoiced_task_repo=repos.invoiced_task,
            payment_repo=repos.payment,
            platform_invoice_repo=repos.platform_invoice,
            platform_billed_by="Platform SRL",
        )
        invoice = make_invoice(1)
        invoice.role = "ANY"
        repos.invoice.get_unpaid_by_contract = AsyncMock(return_value=[invoice])
        repos.invoiced_task.create = AsyncMock(side_effect=with_id)
        repos.invoiced_task.get_by_invoice_id = AsyncMock(return_value=[])

        # Act
        result = await ledger.add(make_task(role="QA"), 60)

        # Assert
        assert result.is_ok()

    async def test_missing_contract(self, ledger, repos, mock_uow):
        repos.contract.get_by_contract_id = AsyncMock(return_value=None)

        result = await ledger.add(make_task(), 60)

        assert result.is_err()
        assert result.error.code == "CONTRACT_NOT_FOUND"

    async def test_storage_failure_rolls_back(self, ledger, repos, mock_uow):
        # Arrange
        repos.invoice.get_unpaid_by_contract = AsyncMock(side_effect=Exception("db down"))

        # Act
        result = await ledger.add(make_task(), 60)

        # Assert
        assert result.is_err()
        assert result.error.code == "ADD_TASK_FAILED"
        assert "db down" in result.error.reason
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestRegisterAsPaid:

    async def test_closes_invoice_and_creates_records(self, ledger, repos, mock_uow):
        """
        Given: An unpaid invoice with total 20000 and commission 1000
        When: register_as_paid is called
        Then: A SUCCESSFUL payment of 20000 and a platform invoice are created,
              the invoice is paid, and nothing is committed
        """
        # Arrange
        invoice = make_invoice(1, total=Decimal(20000))
        invoice.commission = Decimal(1000)
        paid_at = datetime(2024, 2, 1, 12, 0, 0)

        # Act
        result = await ledger.register_as_paid(
            invoice,
            vat=Decimal(190),
            eur_to_ron=Decimal(492),
            transaction_id="pi_123",
            payment_time=paid_at,
            billed_by="John Doe\nDE",
            billed_to="mihai/test (github)",
        )

        # Assert
        assert result.is_ok()
        payment = result.value
        assert isinstance(payment, Payment)
        assert payment.status == PaymentStatus.SUCCESSFUL
        assert payment.value == Decimal(20000)
        assert payment.transaction_id == "pi_123"
        assert payment.fail_reason == ""

        assert invoice.is_paid is True
        assert invoice.transaction_id == "pi_123"
        assert invoice.payment_time == paid_at
        assert invoice.billed_by == "John Doe\nDE"

        platform_invoice = repos.platform_invoice.create.call_args[0][0]
        assert isinstance(platform_invoice, PlatformInvoice)
        assert platform_invoice.commission == Decimal(1000)
        assert platform_invoice.vat == Decimal(190)
        assert platform_invoice.billed_by == "Platform SRL"
        assert platform_invoice.billed_to == "John Doe\nDE"
        mock_uow.commit.assert_not_called()

    async def test_already_paid(self, ledger, repos):
        invoice = make_invoice(1, is_paid=True)

        result = await ledger.register_as_paid(
            invoice, Decimal(0), Decimal(492), "pi_2", datetime.utcnow(), "", ""
        )

        assert result.is_err()
        assert result.error.code == "ALREADY_PAID"
        repos.payment.create.assert_not_called()

    async def test_invoice_of_other_contract_raises(self, ledger):
        with pytest.raises(ValueError):
            await ledger.register_as_paid(
                make_invoice(1, username="jane"),
                Decimal(0), Decimal(492), "pi_3", datetime.utcnow(), "", "",
            )


@pytest.mark.asyncio
class TestQueries:

    async def test_get_by_id_of_other_contract_is_not_found(self, ledger, repos):
        repos.invoice.get_by_id = AsyncMock(return_value=make_invoice(5, username="jane"))

        result = await ledger.get_by_id(5)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_get_by_id(self, ledger, repos):
        repos.invoice.get_by_id = AsyncMock(return_value=make_invoice(5))

        result = await ledger.get_by_id(5)

        assert result.is_ok()
        assert result.value.invoice_id == 5

    async def test_invoices_oldest_first(self, ledger, repos):
        repos.invoice.get_by_contract = AsyncMock(
            return_value=[make_invoice(1, is_paid=True), make_invoice(2)]
        )

        result = await ledger.invoices()

        assert [dto.invoice_id for dto in result.value] == [1, 2]
        repos.invoice.get_by_contract.assert_called_once_with(CONTRACT_ID)

    async def test_payments_of_invoice(self, ledger, repos):
        invoice = make_invoice(1)
        repos.payment.get_by_invoice_id = AsyncMock(
            return_value=[
                Payment(
                    id=1, invoice_id=1, value=Decimal(20000),
                    status=PaymentStatus.FAILED, fail_reason="card declined",
                    payment_time=datetime(2024, 2, 1),
                ),
            ]
        )

        result = await ledger.payments(invoice)

        assert result.is_ok()
        assert result.value[0].status == "FAILED"
        assert result.value[0].fail_reason == "card declined"

    async def test_payments_of_other_contract_raises(self, ledger):
        with pytest.raises(ValueError):
            await ledger.payments(make_invoice(1, username="jane"))
