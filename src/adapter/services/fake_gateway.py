"""Fake Payment Gateway Implementation

Simulated payment processor backing FAKE wallets.
"""

import logging
from decimal import Decimal
from datetime import datetime
from src.app.services.payment_gateway import (
    PaymentGateway,
    TransferResult,
    TransferStatus,
    GatewayError,
)
from src.domain.base import generate_uuid
from src.domain.billing_info import BillingInfo

logger = logging.getLogger(__name__)


class FakePaymentGateway(PaymentGateway):
    """
    Gateway that always confirms

    Useful for development and testing, or for projects trying the platform.
    Transaction ids look like fake_payment_<uuid hex>.
    """

    async def create_and_confirm_transfer(
        self,
        source_payment_method_id: str,
        destination_payout_id: str,
        total_amount: Decimal,
        transfer_amount: Decimal,
        description: str,
    ) -> TransferResult:
        transaction_id = f"fake_payment_{generate_uuid()}"
        logger.info(
            f"[FAKE] Confirmed transfer {transaction_id}: "
            f"charged {total_amount}, transferred {transfer_amount} ({description})"
        )
        return TransferResult(
            status=TransferStatus.CONFIRMED,
            transaction_id=transaction_id,
            timestamp=datetime.utcnow(),
        )

    async def fetch_payee_billing_info(self, payout_id: str) -> BillingInfo:
        # Outside every trade bloc, so no VAT is charged on fake payments.
        return BillingInfo(
            is_company=False,
            first_name="Fake",
            last_name="Contributor",
            country="FK",
            other="Fake billing info",
        )

    async def create_payment_setup_handle(self, wallet_identifier: str) -> str:
        raise GatewayError(
            "SETUP_NOT_SUPPORTED",
            "Fake wallets do not take payment methods"
        )
