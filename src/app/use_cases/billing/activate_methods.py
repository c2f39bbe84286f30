"""Activation Use Cases

A project has one active wallet, a wallet one active payment method and a
contributor one active payout method. Activating one deactivates its
siblings in the same transaction.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.wallet_repository import WalletRepository
from src.app.repositories.payment_method_repository import PaymentMethodRepository
from src.app.repositories.payout_method_repository import PayoutMethodRepository
from .dtos import ActivationResponseDTO

logger = logging.getLogger(__name__)


class ActivateWallet:

    def __init__(self, uow: UnitOfWork, wallet_repo: WalletRepository):
        self.uow = uow
        self.wallet_repo = wallet_repo

    async def execute(self, wallet_id: int) -> Result[ActivationResponseDTO]:
        try:
            wallet = await self.wallet_repo.get_by_id(wallet_id, for_update=True)
            if not wallet:
                return Return.err(
                    Error(
                        code="WALLET_NOT_FOUND",
                        message=f"Wallet with ID {wallet_id} not found",
                        reason="Wallet does not exist",
                    )
                )

            wallet = await self.wallet_repo.activate(wallet)
            await self.uow.commit()

            logger.info(f"Activated {wallet.type} wallet #{wallet.id} of {wallet.repo_full_name}")
            return Return.ok(
                ActivationResponseDTO(kind="wallet", id=wallet.id, identifier=wallet.identifier)
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ACTIVATE_WALLET_FAILED",
                    message="Failed to activate wallet",
                    reason=str(e),
                )
            )


class ActivatePaymentMethod:

    def __init__(self, uow: UnitOfWork, payment_method_repo: PaymentMethodRepository):
        self.uow = uow
        self.payment_method_repo = payment_method_repo

    async def execute(self, payment_method_id: int) -> Result[ActivationResponseDTO]:
        try:
            payment_method = await self.payment_method_repo.get_by_id(payment_method_id)
            if not payment_method:
                return Return.err(
                    Error(
                        code="PAYMENT_METHOD_NOT_FOUND",
                        message=f"Payment method with ID {payment_method_id} not found",
                        reason="Payment method does not exist",
                    )
                )

            payment_method = await self.payment_method_repo.activate(payment_method)
            await self.uow.commit()

            logger.info(f"Activated payment method #{payment_method.id} of wallet #{payment_method.wallet_id}")
            return Return.ok(
                ActivationResponseDTO(
                    kind="payment_method",
                    id=payment_method.id,
                    identifier=payment_method.identifier,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ACTIVATE_PAYMENT_METHOD_FAILED",
                    message="Failed to activate payment method",
                    reason=str(e),
                )
            )


class ActivatePayoutMethod:

    def __init__(self, uow: UnitOfWork, payout_method_repo: PayoutMethodRepository):
        self.uow = uow
        self.payout_method_repo = payout_method_repo

    async def execute(self, payout_method_id: int) -> Result[ActivationResponseDTO]:
        try:
            payout_method = await self.payout_method_repo.get_by_id(payout_method_id)
            if not payout_method:
                return Return.err(
                    Error(
                        code="PAYOUT_METHOD_NOT_FOUND",
                        message=f"Payout method with ID {payout_method_id} not found",
                        reason="Payout method does not exist",
                    )
                )

            payout_method = await self.payout_method_repo.activate(payout_method)
            await self.uow.commit()

            logger.info(
                f"Activated payout method #{payout_method.id} of {payout_method.contributor_username}"
            )
            return Return.ok(
                ActivationResponseDTO(
                    kind="payout_method",
                    id=payout_method.id,
                    identifier=payout_method.identifier,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ACTIVATE_PAYOUT_METHOD_FAILED",
                    message="Failed to activate payout method",
                    reason=str(e),
                )
            )
