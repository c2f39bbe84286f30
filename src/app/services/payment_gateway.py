"""Payment Gateway Interface

Defines the contract of the external payment processor that moves funds
from a project's payment method to a contributor's payout account.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field
from src.domain.billing_info import BillingInfo


class TransferStatus(str, Enum):
    """Gateway-side status of a submitted transfer"""
    CONFIRMED = "confirmed"
    PROCESSING = "processing"  # accepted, funds still settling
    DECLINED = "declined"


class TransferResult(BaseModel):
    """Outcome reported by the gateway for a submitted transfer"""

    status: TransferStatus = Field(
        ...,
        description="confirmed, processing or declined"
    )

    transaction_id: str = Field(
        default="",
        description="Gateway transaction identifier"
    )

    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the gateway created the transaction"
    )

    decline_reason: str = Field(
        default="",
        description="Human-readable reason when declined"
    )


class GatewayError(Exception):
    """Gateway malfunction: network failure, malformed response, unexpected state"""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class GatewayDeclinedError(GatewayError):
    """The gateway explicitly refused the transfer"""


class PaymentGateway(ABC):
    """
    Payment processor capability

    Implementations:
    - StripePaymentGateway: real card payments (Stripe REST API)
    - FakePaymentGateway: simulated, always confirms
    """

    @abstractmethod
    async def create_and_confirm_transfer(
        self,
        source_payment_method_id: str,
        destination_payout_id: str,
        total_amount: Decimal,
        transfer_amount: Decimal,
        description: str,
    ) -> TransferResult:
        """
        Charge the payer and transfer funds to the payee in one confirmed operation

        Args:
            source_payment_method_id: Payer's payment method identifier
            destination_payout_id: Payee's payout account identifier
            total_amount: Amount charged to the payer, in cents
            transfer_amount: Amount transferred to the payee, in cents
            description: Statement description

        Returns:
            TransferResult with status and transaction id

        Raises:
            GatewayDeclinedError: The gateway refused the transfer
            GatewayError: The gateway malfunctioned
        """
        pass

    @abstractmethod
    async def fetch_payee_billing_info(self, payout_id: str) -> BillingInfo:
        """
        Retrieve legal billing details of a payout account

        Args:
            payout_id: Payout account identifier

        Returns:
            BillingInfo of the payee

        Raises:
            GatewayError: The gateway malfunctioned
        """
        pass

    @abstractmethod
    async def create_payment_setup_handle(self, wallet_identifier: str) -> str:
        """
        Create a token a payer's UI uses to attach a funding source

        Args:
            wallet_identifier: Gateway customer id of the wallet

        Returns:
            Opaque setup token

        Raises:
            GatewayError: The gateway malfunctioned or does not support setup
        """
        pass
