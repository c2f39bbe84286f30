"""Settlement recording stage

Turns a submitted attempt into exactly one Payment:
- confirmed: SUCCESSFUL, invoice closed, wallet cash reduced by the total
- declined: FAILED, no wallet change
- malfunction: ERROR, no wallet change
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.wallet_repository import WalletRepository
from src.app.services.exchange_rate_source import ExchangeRateSource
from src.app.services.payment_gateway import GatewayDeclinedError
from src.domain.contract import ContractId
from src.domain.payment import Payment, PaymentStatus
from ..invoice_ledger import InvoiceLedger
from .context import SettlementContext

logger = logging.getLogger(__name__)

CONCURRENT_CHANGE_REASON = "wallet balance changed concurrently; manual reconciliation"
UNRECORDED_REASON = "submitted but not recorded; manual reconciliation"


class RecordingStage:

    def __init__(
        self,
        payment_repo: PaymentRepository,
        wallet_repo: WalletRepository,
        ledger_factory: Callable[[ContractId], InvoiceLedger],
        exchange_rate_source: ExchangeRateSource,
    ):
        self.payment_repo = payment_repo
        self.wallet_repo = wallet_repo
        self.ledger_factory = ledger_factory
        self.exchange_rate_source = exchange_rate_source

    async def _unsuccessful(
        self, ctx: SettlementContext, status: PaymentStatus, reason: str
    ) -> Payment:
        transaction_id = ctx.transfer.transaction_id if ctx.transfer else ""
        return await self._create(
            ctx.invoice.id, Decimal(ctx.invoice.total_amount), transaction_id, status, reason
        )

    async def _create(
        self,
        invoice_id: int,
        value: Decimal,
        transaction_id: str,
        status: PaymentStatus,
        reason: str,
    ) -> Payment:
        return await self.payment_repo.create(
            Payment(
                invoice_id=invoice_id,
                transaction_id=transaction_id,
                payment_time=datetime.utcnow(),
                value=value,
                status=status,
                fail_reason=reason,
            )
        )

    async def record_unsettled(
        self, invoice_id: int, value: Decimal, transaction_id: str, cause: Exception
    ) -> Payment:
        """
        ERROR payment for a submitted attempt whose regular recording was
        rolled back. Takes plain values since the rolled back entities are expired.
        """
        reason = f"{UNRECORDED_REASON}: {type(cause).__name__}: {cause}"
        return await self._create(invoice_id, value, transaction_id, PaymentStatus.ERROR, reason)

    async def record(self, ctx: SettlementContext) -> Payment:
        invoice, wallet = ctx.invoice, ctx.wallet

        if isinstance(ctx.failure, GatewayDeclinedError):
            logger.warning(f"[Settlement] Invoice #{invoice.id} declined: {ctx.failure}")
            return await self._unsuccessful(ctx, PaymentStatus.FAILED, str(ctx.failure))

        if ctx.failure is not None:
            logger.error(f"[Settlement] Invoice #{invoice.id} gateway error: {ctx.failure}")
            return await self._unsuccessful(ctx, PaymentStatus.ERROR, str(ctx.failure))

        total = Decimal(invoice.total_amount)
        if not await self.wallet_repo.deduct_cash(wallet.id, total):
            logger.critical(
                f"[Settlement] Invoice #{invoice.id} confirmed as {ctx.transfer.transaction_id} "
                f"but wallet #{wallet.id} could not cover {total}"
            )
            return await self._unsuccessful(ctx, PaymentStatus.ERROR, CONCURRENT_CHANGE_REASON)

        eur_to_ron = await self.exchange_rate_source.rate("EUR", "RON")
        ledger = self.ledger_factory(invoice.contract_id)
        registered = await ledger.register_as_paid(
            invoice,
            vat=ctx.vat,
            eur_to_ron=eur_to_ron,
            transaction_id=ctx.transfer.transaction_id,
            payment_time=ctx.transfer.timestamp,
            billed_by=str(ctx.billing_info) if ctx.billing_info else "",
            billed_to=f"{wallet.repo_full_name} ({wallet.provider})",
        )
        if registered.is_err():
            # The invoice row is locked for the whole attempt, so it cannot be
            # closed by anyone else in between.
            raise RuntimeError(
                f"Invoice #{invoice.id} could not be registered as paid: {registered.error.message}"
            )

        logger.info(
            f"[Settlement] Invoice #{invoice.id} paid: {ctx.transfer.transaction_id}, "
            f"value={total}, vat={ctx.vat}"
        )
        return registered.value
