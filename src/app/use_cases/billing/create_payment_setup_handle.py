"""CreatePaymentSetupHandle Use Case

Hands the payer's UI a token to attach a card to the project's wallet.
"""

from typing import Dict
from libs.result import Result, Return, Error
from src.app.repositories.wallet_repository import WalletRepository
from src.app.services.payment_gateway import PaymentGateway, GatewayError
from src.domain.wallet import WalletType
from .dtos import PaymentSetupResponseDTO


class CreatePaymentSetupHandle:
    """
    Use Case: Create a payment method setup handle

    Business Rules:
    1. The project must have an active wallet
    2. FAKE wallets take no payment methods
    3. The handle comes from the gateway of the wallet's type
    """

    def __init__(
        self,
        wallet_repo: WalletRepository,
        gateways: Dict[WalletType, PaymentGateway],
    ):
        self.wallet_repo = wallet_repo
        self.gateways = gateways

    async def execute(self, repo_full_name: str, provider: str) -> Result[PaymentSetupResponseDTO]:
        wallet = await self.wallet_repo.get_active_for_project(repo_full_name, provider)
        if not wallet:
            return Return.err(
                Error(
                    code="NO_ACTIVE_WALLET",
                    message=f"{repo_full_name} has no active wallet",
                    reason=f"provider={provider}",
                )
            )

        wallet_type = WalletType(wallet.type)
        gateway = self.gateways.get(wallet_type)
        if wallet_type == WalletType.FAKE or gateway is None:
            return Return.err(
                Error(
                    code="SETUP_NOT_SUPPORTED",
                    message=f"{wallet_type.value} wallets do not take payment methods",
                    reason=f"wallet_id={wallet.id}",
                )
            )

        try:
            handle = await gateway.create_payment_setup_handle(wallet.identifier)
        except GatewayError as e:
            return Return.err(
                Error(
                    code="PAYMENT_SETUP_FAILED",
                    message="Failed to create payment setup handle",
                    reason=str(e),
                )
            )

        return Return.ok(PaymentSetupResponseDTO(wallet_id=wallet.id, setup_handle=handle))
