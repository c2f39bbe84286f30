"""Settlement precondition stage

Rejects an attempt before anything leaves the system. A rejection never
produces a Payment.
"""

import logging
from decimal import Decimal
from typing import Optional
from libs.result import Error
from .context import SettlementContext

logger = logging.getLogger(__name__)


class PreconditionStage:
    """
    Business Rules (checked in this order):
    1. NOT_PART_OF_PROJECT: the invoice's contract is on another project than the wallet
    2. ALREADY_PAID: the invoice is closed
    3. BELOW_MINIMUM: total_amount < minimum payable amount
    4. INSUFFICIENT_FUNDS: wallet.cash - total_amount < 0
    """

    def __init__(self, minimum_amount: Decimal):
        self.minimum_amount = Decimal(minimum_amount)

    def check(self, ctx: SettlementContext) -> Optional[Error]:
        invoice, wallet = ctx.invoice, ctx.wallet
        error = None

        if (
            invoice.repo_full_name != wallet.repo_full_name
            or invoice.provider != wallet.provider
        ):
            error = Error(
                code="NOT_PART_OF_PROJECT",
                message=f"Invoice #{invoice.id} is not part of {wallet.repo_full_name}",
                reason=f"invoice project={invoice.repo_full_name} ({invoice.provider})",
            )
        elif invoice.is_paid:
            error = Error(
                code="ALREADY_PAID",
                message=f"Invoice #{invoice.id} is already paid",
                reason=f"transaction_id={invoice.transaction_id}",
            )
        elif Decimal(invoice.total_amount) < self.minimum_amount:
            error = Error(
                code="BELOW_MINIMUM",
                message=f"Invoice #{invoice.id} total is below the minimum payable amount",
                reason=f"total={invoice.total_amount}, minimum={self.minimum_amount}",
            )
        elif Decimal(wallet.cash) - Decimal(invoice.total_amount) < 0:
            error = Error(
                code="INSUFFICIENT_FUNDS",
                message=f"Wallet of {wallet.repo_full_name} cannot cover invoice #{invoice.id}",
                reason=f"cash={wallet.cash}, total={invoice.total_amount}",
            )

        if error:
            logger.error(f"[Payment-PreCheck] {error.code}: {error.message} ({error.reason})")
        return error
