"""Unit tests for CreatePaymentSetupHandle use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.fake_gateway import FakePaymentGateway
from src.app.services.payment_gateway import GatewayError
from src.app.use_cases.billing import CreatePaymentSetupHandle
from src.domain import Wallet, WalletType


def make_wallet(wallet_type):
    return Wallet(
        id=1, repo_full_name="mihai/test", provider="github",
        type=wallet_type, cash=Decimal(0), active=True, identifier="cus_1",
    )


@pytest.fixture
def wallet_repo():
    repo = MagicMock()
    repo.get_active_for_project = AsyncMock(return_value=make_wallet(WalletType.STRIPE))
    return repo


@pytest.fixture
def stripe():
    gateway = MagicMock()
    gateway.create_payment_setup_handle = AsyncMock(return_value="seti_1_secret_abc")
    return gateway


@pytest.mark.asyncio
class TestCreatePaymentSetupHandle:

    async def test_returns_handle(self, wallet_repo, stripe):
        """
        Given: The project's active wallet is a STRIPE wallet
        When: A setup handle is requested
        Then: The Stripe gateway creates it for the wallet's customer id
        """
        # Arrange
        use_case = CreatePaymentSetupHandle(
            wallet_repo, {WalletType.STRIPE: stripe, WalletType.FAKE: FakePaymentGateway()}
        )

        # Act
        result = await use_case.execute("mihai/test", "github")

        # Assert
        assert result.is_ok()
        assert result.value.wallet_id == 1
        assert result.value.setup_handle == "seti_1_secret_abc"
        stripe.create_payment_setup_handle.assert_called_once_with("cus_1")

    async def test_no_active_wallet(self, wallet_repo, stripe):
        wallet_repo.get_active_for_project = AsyncMock(return_value=None)

        result = await CreatePaymentSetupHandle(wallet_repo, {WalletType.STRIPE: stripe}).execute(
            "mihai/test", "github"
        )

        assert result.error.code == "NO_ACTIVE_WALLET"

    async def test_fake_wallet_not_supported(self, wallet_repo, stripe):
        wallet_repo.get_active_for_project = AsyncMock(return_value=make_wallet(WalletType.FAKE))

        result = await CreatePaymentSetupHandle(
            wallet_repo, {WalletType.STRIPE: stripe, WalletType.FAKE: FakePaymentGateway()}
        ).execute("mihai/test", "github")

        assert result.error.code == "SETUP_NOT_SUPPORTED"
        stripe.create_payment_setup_handle.assert_not_called()

    async def test_gateway_error(self, wallet_repo, stripe):
        stripe.create_payment_setup_handle = AsyncMock(
            side_effect=GatewayError("GATEWAY_UNAVAILABLE", "connection refused")
        )

        result = await CreatePaymentSetupHandle(wallet_repo, {WalletType.STRIPE: stripe}).execute(
            "mihai/test", "github"
        )

        assert result.error.code == "PAYMENT_SETUP_FAILED"
        assert "connection refused" in result.error.reason
