"""Unit tests for wallet / payment method / payout method activation"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing import (
    ActivateWallet,
    ActivatePaymentMethod,
    ActivatePayoutMethod,
)
from src.domain import PaymentMethod, PayoutMethod, Wallet, WalletType


async def mark_active(entity):
    entity.active = True
    return entity


@pytest.mark.asyncio
class TestActivateWallet:

    async def test_activates_wallet(self, mock_uow):
        """
        Given: An inactive STRIPE wallet
        When: It is activated
        Then: The repository activates it and the transaction commits
        """
        # Arrange
        wallet = Wallet(
            id=3, repo_full_name="mihai/test", provider="github",
            type=WalletType.STRIPE, cash=Decimal(1000), active=False, identifier="cus_3",
        )
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=wallet)
        repo.activate = AsyncMock(side_effect=mark_active)

        # Act
        result = await ActivateWallet(mock_uow, repo).execute(3)

        # Assert
        assert result.is_ok()
        assert result.value.kind == "wallet"
        assert result.value.id == 3
        assert result.value.identifier == "cus_3"
        repo.get_by_id.assert_called_once_with(3, for_update=True)
        repo.activate.assert_called_once_with(wallet)
        mock_uow.commit.assert_called_once()

    async def test_wallet_not_found(self, mock_uow):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=None)

        result = await ActivateWallet(mock_uow, repo).execute(42)

        assert result.error.code == "WALLET_NOT_FOUND"
        mock_uow.commit.assert_not_called()

    async def test_failure_rolls_back(self, mock_uow):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(side_effect=Exception("Database error"))

        result = await ActivateWallet(mock_uow, repo).execute(3)

        assert result.error.code == "ACTIVATE_WALLET_FAILED"
        assert "Database error" in result.error.reason
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestActivatePaymentMethod:

    async def test_activates_payment_method(self, mock_uow):
        method = PaymentMethod(id=5, wallet_id=3, identifier="pm_5", active=False)
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=method)
        repo.activate = AsyncMock(side_effect=mark_active)

        result = await ActivatePaymentMethod(mock_uow, repo).execute(5)

        assert result.value.kind == "payment_method"
        assert result.value.identifier == "pm_5"
        assert method.active is True
        mock_uow.commit.assert_called_once()

    async def test_payment_method_not_found(self, mock_uow):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=None)

        result = await ActivatePaymentMethod(mock_uow, repo).execute(5)

        assert result.error.code == "PAYMENT_METHOD_NOT_FOUND"


@pytest.mark.asyncio
class TestActivatePayoutMethod:

    async def test_activates_payout_method(self, mock_uow):
        method = PayoutMethod(
            id=8, contributor_username="john", provider="github",
            identifier="acct_8", active=False,
        )
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=method)
        repo.activate = AsyncMock(side_effect=mark_active)

        result = await ActivatePayoutMethod(mock_uow, repo).execute(8)

        assert result.value.kind == "payout_method"
        assert result.value.id == 8
        assert result.value.active is True

    async def test_payout_method_not_found(self, mock_uow):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=None)

        result = await ActivatePayoutMethod(mock_uow, repo).execute(8)

        assert result.error.code == "PAYOUT_METHOD_NOT_FOUND"
        mock_uow.commit.assert_not_called()
