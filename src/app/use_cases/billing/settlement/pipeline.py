"""SettlementPipeline Use Case

Pays an invoice from the project's wallet to the contributor.
"""

import logging
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.wallet_repository import WalletRepository
from ..invoice_ledger import to_payment_dto
from ..dtos import PaymentResponseDTO
from .context import SettlementContext
from .preconditions import PreconditionStage
from .execution import ExecutionStage
from .recording import RecordingStage

logger = logging.getLogger(__name__)


class SettlementPipeline:
    """
    Use Case: Settle an invoice

    Business Rules:
    1. Invoice and wallet rows are locked (SELECT FOR UPDATE) for the whole attempt
    2. Rejections (precondition or missing instrument) return an error and
       record nothing
    3. Every submitted attempt records exactly one Payment and returns it,
       whatever the outcome (SUCCESSFUL, FAILED, ERROR)
       If recording itself fails, the attempt is rolled back and stored
       as an ERROR payment in a fresh transaction
    4. Wallet cash only decreases on SUCCESSFUL, through a conditional update
    5. No automatic retry

    Flow:
    1. Lock invoice and wallet (the project's active wallet unless one is given)
    2. Precondition stage
    3. Execution stage: resolve instruments, submit to the gateway
    4. Recording stage
    5. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        wallet_repo: WalletRepository,
        preconditions: PreconditionStage,
        execution: ExecutionStage,
        recording: RecordingStage,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.wallet_repo = wallet_repo
        self.preconditions = preconditions
        self.execution = execution
        self.recording = recording

    async def _reject(self, error: Error) -> Result[PaymentResponseDTO]:
        await self.uow.rollback()
        return Return.err(error)

    async def pay(
        self, invoice_id: int, wallet_id: Optional[int] = None
    ) -> Result[PaymentResponseDTO]:
        """
        Execute a settlement attempt

        Args:
            invoice_id: Invoice to pay
            wallet_id: Paying wallet; defaults to the active wallet of the
                invoice's project

        Returns:
            Result[PaymentResponseDTO]: The recorded payment, or the
            rejection error
        """
        submitted = False
        ctx = None
        total = Decimal(0)
        try:
            # Step 1: Lock invoice and wallet
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                return await self._reject(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            if wallet_id is not None:
                wallet = await self.wallet_repo.get_by_id(wallet_id, for_update=True)
            else:
                wallet = await self.wallet_repo.get_active_for_project(
                    invoice.repo_full_name, invoice.provider, for_update=True
                )
            if not wallet:
                return await self._reject(
                    Error(
                        code="NO_ACTIVE_WALLET",
                        message=f"No wallet to pay invoice #{invoice.id}",
                        reason=f"project={invoice.repo_full_name} ({invoice.provider}), wallet_id={wallet_id}",
                    )
                )

            ctx = SettlementContext(invoice=invoice, wallet=wallet)

            # Step 2: Preconditions
            error = self.preconditions.check(ctx)
            if error:
                return await self._reject(error)

            # Step 3: Execution
            error = await self.execution.prepare(ctx)
            if error:
                return await self._reject(error)

            total = Decimal(invoice.total_amount)
            submitted = True
            await self.execution.execute(ctx)

            # Step 4: Recording
            payment = await self.recording.record(ctx)

            # Step 5: Commit
            await self.uow.commit()

            return Return.ok(to_payment_dto(payment))

        except ValueError:
            await self.uow.rollback()
            raise
        except Exception as e:
            await self.uow.rollback()
            if not submitted:
                return self._failed(invoice_id, e)
            transaction_id = ctx.transfer.transaction_id if ctx.transfer else ""
            return await self._record_unsettled(invoice_id, total, transaction_id, e)

    async def _record_unsettled(
        self, invoice_id: int, total: Decimal, transaction_id: str, cause: Exception
    ) -> Result[PaymentResponseDTO]:
        logger.error(
            f"[Settlement] Invoice #{invoice_id} was submitted ({transaction_id or 'no transaction'}) "
            f"but could not be recorded, storing an ERROR payment: {cause}"
        )
        try:
            payment = await self.recording.record_unsettled(invoice_id, total, transaction_id, cause)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.critical(
                f"[Settlement] Invoice #{invoice_id} was submitted ({transaction_id}) "
                f"and no payment could be stored: {e}"
            )
            return self._failed(invoice_id, e)

        return Return.ok(to_payment_dto(payment))

    def _failed(self, invoice_id: int, cause: Exception) -> Result[PaymentResponseDTO]:
        return Return.err(
            Error(
                code="SETTLEMENT_FAILED",
                message=f"Failed to settle invoice #{invoice_id}",
                reason=str(cause),
            )
        )
