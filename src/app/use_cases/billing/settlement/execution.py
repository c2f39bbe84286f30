"""Settlement execution stage

Resolves the payer and payee instruments, then submits the transfer to the
gateway of the wallet's type. Once submitted, failures are captured on the
context for the recording stage instead of being raised.
"""

import logging
from typing import Dict, Optional
from libs.result import Error
from src.app.repositories.payment_method_repository import PaymentMethodRepository
from src.app.repositories.payout_method_repository import PayoutMethodRepository
from src.app.services.payment_gateway import (
    PaymentGateway,
    TransferStatus,
    GatewayError,
    GatewayDeclinedError,
)
from src.app.services.tax_calculator import TaxCalculator
from src.domain.wallet import WalletType
from .context import SettlementContext

logger = logging.getLogger(__name__)


class ExecutionStage:

    def __init__(
        self,
        gateways: Dict[WalletType, PaymentGateway],
        payout_method_repo: PayoutMethodRepository,
        payment_method_repo: PaymentMethodRepository,
        tax_calculator: TaxCalculator,
    ):
        self.gateways = gateways
        self.payout_method_repo = payout_method_repo
        self.payment_method_repo = payment_method_repo
        self.tax_calculator = tax_calculator

    async def prepare(self, ctx: SettlementContext) -> Optional[Error]:
        """
        Resolve gateway, payout destination and payment source

        FAKE wallets move no real money and need neither instrument.

        Returns:
            Error (MISSING_PAYOUT_DESTINATION, MISSING_PAYMENT_SOURCE,
            GATEWAY_NOT_CONFIGURED) or None
        """
        invoice, wallet = ctx.invoice, ctx.wallet
        wallet_type = WalletType(wallet.type)

        ctx.gateway = self.gateways.get(wallet_type)
        if ctx.gateway is None:
            return Error(
                code="GATEWAY_NOT_CONFIGURED",
                message=f"No payment gateway for {wallet_type.value} wallets",
                reason=f"wallet_id={wallet.id}",
            )

        if wallet_type == WalletType.FAKE:
            return None

        ctx.payout_method = await self.payout_method_repo.get_active_for_contributor(
            invoice.contributor_username, invoice.provider
        )
        if not ctx.payout_method:
            logger.error(f"[Payment-PreCheck] {invoice.contributor_username} has no active payout method")
            return Error(
                code="MISSING_PAYOUT_DESTINATION",
                message=f"Contributor {invoice.contributor_username} has no active payout method",
                reason=f"invoice_id={invoice.id}",
            )

        ctx.payment_method = await self.payment_method_repo.get_active_for_wallet(wallet.id)
        if not ctx.payment_method:
            logger.error(f"[Payment-PreCheck] Wallet #{wallet.id} has no active payment method")
            return Error(
                code="MISSING_PAYMENT_SOURCE",
                message=f"Wallet of {wallet.repo_full_name} has no active payment method",
                reason=f"wallet_id={wallet.id}",
            )

        return None

    async def execute(self, ctx: SettlementContext) -> None:
        """
        Fetch payee billing info, compute VAT and submit the transfer

        Never raises: a decline or malfunction is stored in ctx.failure.
        """
        invoice = ctx.invoice
        payout_id = ctx.payout_method.identifier if ctx.payout_method else ctx.wallet.identifier
        source_id = ctx.payment_method.identifier if ctx.payment_method else ctx.wallet.identifier

        try:
            ctx.billing_info = await ctx.gateway.fetch_payee_billing_info(payout_id)
            ctx.vat = self.tax_calculator.vat(
                invoice.commission,
                ctx.billing_info.country,
                ctx.billing_info.tax_id,
            )

            logger.info(
                f"[Settlement] Submitting invoice #{invoice.id}: total={invoice.total_amount}, "
                f"commission={invoice.commission}, vat={ctx.vat}, transfer={ctx.transfer_amount}"
            )
            ctx.transfer = await ctx.gateway.create_and_confirm_transfer(
                source_payment_method_id=source_id,
                destination_payout_id=payout_id,
                total_amount=invoice.total_amount,
                transfer_amount=ctx.transfer_amount,
                description=ctx.description,
            )
            if ctx.transfer.status == TransferStatus.DECLINED:
                ctx.failure = GatewayDeclinedError(
                    "DECLINED",
                    ctx.transfer.decline_reason or "Transfer declined by the gateway",
                )
        except GatewayError as e:
            ctx.failure = e
        except Exception as e:
            ctx.failure = GatewayError("UNEXPECTED_ERROR", f"{type(e).__name__}: {e}")
