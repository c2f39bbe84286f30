"""InvoiceLedger Use Case

Bookkeeping of a contract's invoices: which completed tasks were billed,
which invoice is active, and closing an invoice once it is paid.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services import pricing
from src.app.repositories.contract_repository import ContractRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoiced_task_repository import InvoicedTaskRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.platform_invoice_repository import PlatformInvoiceRepository
from src.app.repositories.project_repository import ProjectRepository
from src.domain.contract import ContractId, ContractRole
from src.domain.invoice import Invoice
from src.domain.invoiced_task import InvoicedTask
from src.domain.payment import Payment, PaymentStatus
from src.domain.platform_invoice import PlatformInvoice
from src.domain.task import Task
from .dtos import InvoiceResponseDTO, InvoicedTaskResponseDTO, PaymentResponseDTO

logger = logging.getLogger(__name__)


def to_invoice_dto(invoice: Invoice) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        invoice_id=invoice.id,
        repo_full_name=invoice.repo_full_name,
        contributor_username=invoice.contributor_username,
        provider=invoice.provider,
        role=invoice.role,
        amount=invoice.amount,
        commission=invoice.commission,
        total_amount=invoice.total_amount,
        is_paid=invoice.is_paid,
        transaction_id=invoice.transaction_id,
        payment_time=invoice.payment_time,
        created_at=invoice.created_at,
    )


def to_payment_dto(payment: Payment) -> PaymentResponseDTO:
    return PaymentResponseDTO(
        payment_id=payment.id,
        invoice_id=payment.invoice_id,
        transaction_id=payment.transaction_id,
        payment_time=payment.payment_time,
        value=payment.value,
        status=payment.status.value,
        fail_reason=payment.fail_reason,
    )


class InvoiceLedger:
    """
    Use Case: Invoice bookkeeping of one contract

    Business Rules:
    1. At most one unpaid (active) invoice per contract; the oldest unpaid
       one is the active one
    2. An invoice is created lazily, the first time a task needs billing
    3. A task is billed once per contract, only if it is assigned to the
       contract's contributor, on the contract's project, for its role
    4. total_amount = sum(value + commission) over the invoiced tasks
    5. An invoice is closed only by register_as_paid, exactly once

    Handing the ledger an invoice of another contract is a programming
    error and raises ValueError.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        contract_id: ContractId,
        contract_repo: ContractRepository,
        project_repo: ProjectRepository,
        invoice_repo: InvoiceRepository,
        invoiced_task_repo: InvoicedTaskRepository,
        payment_repo: PaymentRepository,
        platform_invoice_repo: PlatformInvoiceRepository,
        platform_billed_by: str,
    ):
        self.uow = uow
        self.contract_id = contract_id
        self.contract_repo = contract_repo
        self.project_repo = project_repo
        self.invoice_repo = invoice_repo
        self.invoiced_task_repo = invoiced_task_repo
        self.payment_repo = payment_repo
        self.platform_invoice_repo = platform_invoice_repo
        self.platform_billed_by = platform_billed_by

    def _ensure_own(self, invoice: Invoice) -> None:
        if not invoice.belongs_to(self.contract_id):
            raise ValueError(
                f"Invoice #{invoice.id} belongs to {invoice.contract_id}, "
                f"not to {self.contract_id}"
            )

    async def _active_invoice(self) -> Invoice:
        """Oldest unpaid invoice of the contract, created (flushed) if missing"""
        unpaid = await self.invoice_repo.get_unpaid_by_contract(self.contract_id)
        if unpaid:
            if len(unpaid) > 1:
                logger.warning(
                    f"Contract {self.contract_id} has {len(unpaid)} unpaid invoices, "
                    f"using the oldest #{unpaid[0].id}"
                )
            return unpaid[0]

        invoice = Invoice(
            repo_full_name=self.contract_id.repo_full_name,
            contributor_username=self.contract_id.contributor_username,
            provider=self.contract_id.provider,
            role=self.contract_id.role,
        )
        invoice = await self.invoice_repo.create(invoice)
        logger.info(f"Created invoice #{invoice.id} for {self.contract_id}")
        return invoice

    async def active(self, contract_id: Optional[ContractId] = None) -> Result[InvoiceResponseDTO]:
        """
        Get the active invoice of the contract, creating it if needed

        Args:
            contract_id: Optional, must equal the ledger's contract

        Returns:
            Result[InvoiceResponseDTO]: The oldest unpaid invoice
        """
        if contract_id is not None and contract_id != self.contract_id:
            raise ValueError(f"Ledger of {self.contract_id} asked for {contract_id}")

        try:
            invoice = await self._active_invoice()
            await self.uow.commit()
            return Return.ok(to_invoice_dto(invoice))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ACTIVE_INVOICE_FAILED",
                    message=f"Failed to get the active invoice of {self.contract_id}",
                    reason=str(e),
                )
            )

    async def add(self, task: Task, time_spent_minutes: int) -> Result[InvoicedTaskResponseDTO]:
        """
        Bill a completed task on the contract's active invoice

        Flow:
        1. Validate the task is eligible for this contract
        2. Load project (commission percentages) and contract (hourly rate)
        3. Get or create the active invoice
        4. Price the task and store the InvoicedTask
        5. Recompute the invoice amounts from its tasks
        6. Commit

        Args:
            task: Completed task
            time_spent_minutes: Time the contributor spent on it

        Returns:
            Result[InvoicedTaskResponseDTO]: The billed task or NOT_ELIGIBLE_TASK
        """
        try:
            # Step 1: Eligibility
            reason = None
            if task.assignee != self.contract_id.contributor_username:
                reason = f"task is assigned to {task.assignee!r}"
            elif (
                task.repo_full_name != self.contract_id.repo_full_name
                or task.provider != self.contract_id.provider
            ):
                reason = f"task belongs to {task.repo_full_name} ({task.provider})"
            elif (
                self.contract_id.role != ContractRole.ANY.value
                and task.role != self.contract_id.role
            ):
                reason = f"task role {task.role} does not match contract role {self.contract_id.role}"
            elif await self.invoiced_task_repo.exists_for_contract(self.contract_id, task.id):
                reason = "task was already invoiced"

            if reason is not None:
                return Return.err(
                    Error(
                        code="NOT_ELIGIBLE_TASK",
                        message=f"Task #{task.issue_id} cannot be billed to {self.contract_id.contributor_username}",
                        reason=reason,
                    )
                )

            # Step 2: Project and contract
            project = await self.project_repo.get_by_repo(
                self.contract_id.repo_full_name, self.contract_id.provider
            )
            if not project:
                return Return.err(
                    Error(
                        code="PROJECT_NOT_FOUND",
                        message=f"Project {self.contract_id.repo_full_name} not found",
                        reason="Project may have been removed",
                    )
                )

            contract = await self.contract_repo.get_by_contract_id(self.contract_id)
            if not contract:
                return Return.err(
                    Error(
                        code="CONTRACT_NOT_FOUND",
                        message=f"Contract {self.contract_id} not found",
                        reason="Contract may have been removed",
                    )
                )

            # Step 3: Active invoice
            invoice = await self._active_invoice()

            # Step 4: Price and store the task
            value = pricing.task_value(contract.hourly_rate, task.estimation_minutes)
            commission = pricing.task_commission(project, value)
            invoiced_task = await self.invoiced_task_repo.create(
                InvoicedTask(
                    invoice_id=invoice.id,
                    task_id=task.id,
                    issue_id=task.issue_id,
                    time_spent_minutes=time_spent_minutes,
                    value=value,
                    commission=commission,
                )
            )

            # Step 5: Recompute amounts from the stored tasks
            tasks = await self.invoiced_task_repo.get_by_invoice_id(invoice.id)
            invoice.amount = sum((Decimal(t.value) for t in tasks), Decimal(0))
            invoice.commission = sum((Decimal(t.commission) for t in tasks), Decimal(0))
            invoice.total_amount = invoice.amount + invoice.commission
            invoice = await self.invoice_repo.update(invoice)

            # Step 6: Commit
            await self.uow.commit()

            logger.info(
                f"Billed task #{task.issue_id} on invoice #{invoice.id}: "
                f"value={value}, commission={commission}, total={invoice.total_amount}"
            )

            return Return.ok(
                InvoicedTaskResponseDTO(
                    invoiced_task_id=invoiced_task.id,
                    invoice_id=invoice.id,
                    task_id=task.id,
                    issue_id=task.issue_id,
                    time_spent_minutes=time_spent_minutes,
                    value=value,
                    commission=commission,
                    invoice_total_amount=invoice.total_amount,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ADD_TASK_FAILED",
                    message=f"Failed to bill task #{task.issue_id}",
                    reason=str(e),
                )
            )

    async def get_by_id(self, invoice_id: int) -> Result[InvoiceResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice or not invoice.belongs_to(self.contract_id):
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                    reason=f"No such invoice for {self.contract_id}",
                )
            )
        return Return.ok(to_invoice_dto(invoice))

    async def invoices(self) -> Result[List[InvoiceResponseDTO]]:
        """All invoices of the contract, oldest first"""
        invoices = await self.invoice_repo.get_by_contract(self.contract_id)
        return Return.ok([to_invoice_dto(invoice) for invoice in invoices])

    async def payments(self, invoice: Invoice) -> Result[List[PaymentResponseDTO]]:
        """Every settlement attempt of one of the contract's invoices"""
        self._ensure_own(invoice)
        payments = await self.payment_repo.get_by_invoice_id(invoice.id)
        return Return.ok([to_payment_dto(payment) for payment in payments])

    async def register_as_paid(
        self,
        invoice: Invoice,
        vat: Decimal,
        eur_to_ron: Decimal,
        transaction_id: str,
        payment_time: datetime,
        billed_by: str,
        billed_to: str,
    ) -> Result[Payment]:
        """
        Close an invoice after a confirmed transfer

        Creates the SUCCESSFUL Payment and the PlatformInvoice, flips
        is_paid. Only flushes: the caller owns the transaction.

        Args:
            invoice: Invoice being closed
            vat: VAT on the invoice commission, in cents
            eur_to_ron: EUR-RON rate x100 on the payment date
            transaction_id: Gateway transaction id
            payment_time: When the gateway created the transaction
            billed_by: Billing info of the contributor (payee)
            billed_to: Billing info of the project (payer)

        Returns:
            Result[Payment]: The SUCCESSFUL payment or ALREADY_PAID
        """
        self._ensure_own(invoice)
        if invoice.is_paid:
            return Return.err(
                Error(
                    code="ALREADY_PAID",
                    message=f"Invoice #{invoice.id} is already paid",
                    reason=f"transaction_id={invoice.transaction_id}",
                )
            )

        payment = await self.payment_repo.create(
            Payment(
                invoice_id=invoice.id,
                transaction_id=transaction_id,
                payment_time=payment_time,
                value=invoice.total_amount,
                status=PaymentStatus.SUCCESSFUL,
            )
        )

        invoice.is_paid = True
        invoice.transaction_id = transaction_id
        invoice.payment_time = payment_time
        invoice.billed_by = billed_by
        invoice.billed_to = billed_to
        await self.invoice_repo.update(invoice)

        platform_invoice = await self.platform_invoice_repo.create(
            PlatformInvoice(
                invoice_id=invoice.id,
                billed_by=self.platform_billed_by,
                billed_to=billed_by,
                commission=invoice.commission,
                vat=vat,
                eur_to_ron=eur_to_ron,
                transaction_id=transaction_id,
                payment_time=payment_time,
            )
        )

        logger.info(
            f"Invoice #{invoice.id} registered as paid ({transaction_id}), "
            f"platform invoice {platform_invoice.serial_number}"
        )
        return Return.ok(payment)
