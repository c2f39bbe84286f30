"""State shared by the settlement stages of one attempt"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from src.app.services.payment_gateway import PaymentGateway, TransferResult, GatewayError
from src.domain.billing_info import BillingInfo
from src.domain.contributor import PayoutMethod
from src.domain.invoice import Invoice
from src.domain.wallet import Wallet, PaymentMethod


@dataclass
class SettlementContext:
    invoice: Invoice
    wallet: Wallet

    # Filled by the execution stage before submission
    gateway: Optional[PaymentGateway] = None
    payout_method: Optional[PayoutMethod] = None
    payment_method: Optional[PaymentMethod] = None

    # Filled by the execution stage after submission
    billing_info: Optional[BillingInfo] = None
    vat: Decimal = Decimal(0)
    transfer: Optional[TransferResult] = None
    failure: Optional[GatewayError] = None

    @property
    def transfer_amount(self) -> Decimal:
        """What reaches the contributor: invoice total minus commission and VAT"""
        return Decimal(self.invoice.total_amount) - Decimal(self.invoice.commission) - self.vat

    @property
    def description(self) -> str:
        return (
            f"Invoice #{self.invoice.id} of {self.invoice.contributor_username} "
            f"({self.invoice.role}) at {self.invoice.repo_full_name}"
        )
