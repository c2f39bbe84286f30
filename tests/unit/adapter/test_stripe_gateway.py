"""Unit tests for StripePaymentGateway against a mocked Stripe API"""

import httpx
import pytest
from datetime import datetime
from decimal import Decimal
from urllib.parse import parse_qs

from src.adapter.services.stripe_gateway import StripePaymentGateway
from src.app.services.payment_gateway import (
    TransferStatus,
    GatewayError,
    GatewayDeclinedError,
)


def gateway_for(handler, api_token="sk_test_123"):
    return StripePaymentGateway(
        api_url="https://api.stripe.test/v1",
        api_token=api_token,
        transport=httpx.MockTransport(handler),
    )


async def transfer(gateway):
    return await gateway.create_and_confirm_transfer(
        source_payment_method_id="pm_1",
        destination_payout_id="acct_1",
        total_amount=Decimal(20000),
        transfer_amount=Decimal(18810),
        description="Invoice #1",
    )


@pytest.mark.asyncio
class TestCreateAndConfirmTransfer:

    async def test_succeeded_intent(self):
        """
        Given: Stripe answers with a succeeded PaymentIntent
        When: A transfer is submitted
        Then: The result is CONFIRMED with the intent id and creation time
        """
        # Arrange
        captured = {}

        def handler(request):
            captured["request"] = request
            return httpx.Response(
                200, json={"id": "pi_1", "status": "succeeded", "created": 1706788800}
            )

        # Act
        result = await transfer(gateway_for(handler))

        # Assert
        assert result.status == TransferStatus.CONFIRMED
        assert result.transaction_id == "pi_1"
        assert result.timestamp == datetime(2024, 2, 1, 12, 0, 0)

        request = captured["request"]
        assert request.method == "POST"
        assert request.url.path == "/v1/payment_intents"
        assert request.headers["Authorization"] == "Bearer sk_test_123"
        form = parse_qs(request.content.decode())
        assert form["amount"] == ["20000"]
        assert form["transfer_data[amount]"] == ["18810"]
        assert form["transfer_data[destination]"] == ["acct_1"]
        assert form["payment_method"] == ["pm_1"]
        assert form["confirm"] == ["true"]

    async def test_processing_intent(self):
        def handler(request):
            return httpx.Response(200, json={"id": "pi_2", "status": "processing"})

        result = await transfer(gateway_for(handler))

        assert result.status == TransferStatus.PROCESSING

    async def test_card_error_is_decline(self):
        def handler(request):
            return httpx.Response(
                402,
                json={"error": {"type": "card_error", "code": "card_declined",
                                "message": "Your card was declined."}},
            )

        with pytest.raises(GatewayDeclinedError) as exc:
            await transfer(gateway_for(handler))

        assert exc.value.code == "card_declined"
        assert exc.value.message == "Your card was declined."

    async def test_unpaid_intent_is_decline(self):
        def handler(request):
            return httpx.Response(200, json={"id": "pi_3", "status": "requires_payment_method"})

        with pytest.raises(GatewayDeclinedError) as exc:
            await transfer(gateway_for(handler))

        assert exc.value.code == "REQUIRES_PAYMENT_METHOD"

    async def test_server_error_is_malfunction(self):
        def handler(request):
            return httpx.Response(500, json={"error": {"type": "api_error", "message": "boom"}})

        with pytest.raises(GatewayError) as exc:
            await transfer(gateway_for(handler))

        assert not isinstance(exc.value, GatewayDeclinedError)
        assert exc.value.code == "HTTP_500"

    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(GatewayError) as exc:
            await transfer(gateway_for(handler))

        assert exc.value.code == "GATEWAY_TIMEOUT"

    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(GatewayError) as exc:
            await transfer(gateway_for(handler))

        assert exc.value.code == "MALFORMED_RESPONSE"

    async def test_unexpected_status(self):
        def handler(request):
            return httpx.Response(200, json={"id": "pi_4", "status": "requires_capture"})

        with pytest.raises(GatewayError) as exc:
            await transfer(gateway_for(handler))

        assert exc.value.code == "UNEXPECTED_STATUS"

    async def test_missing_token(self):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(GatewayError) as exc:
            await transfer(gateway_for(handler, api_token=""))

        assert exc.value.code == "STRIPE_NOT_CONFIGURED"


@pytest.mark.asyncio
class TestFetchPayeeBillingInfo:

    async def test_individual_account(self):
        def handler(request):
            assert request.url.path == "/v1/accounts/acct_1"
            return httpx.Response(
                200,
                json={
                    "id": "acct_1",
                    "business_type": "individual",
                    "country": "RO",
                    "individual": {
                        "first_name": "John",
                        "last_name": "Doe",
                        "email": "john@example.com",
                        "address": {"line1": "Str. Lunga 1", "city": "Brasov", "country": "RO"},
                    },
                    "metadata": {},
                },
            )

        info = await gateway_for(handler).fetch_payee_billing_info("acct_1")

        assert info.is_company is False
        assert info.first_name == "John"
        assert info.country == "RO"
        assert info.tax_id is None

    async def test_company_account_with_tax_id(self):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "id": "acct_2",
                    "business_type": "company",
                    "company": {"name": "Acme GmbH", "address": {"country": "DE"}},
                    "metadata": {"tax_id": "DE123456789"},
                },
            )

        info = await gateway_for(handler).fetch_payee_billing_info("acct_2")

        assert info.is_company is True
        assert info.legal_name == "Acme GmbH"
        assert info.country == "DE"
        assert info.tax_id == "DE123456789"


@pytest.mark.asyncio
class TestCreatePaymentSetupHandle:

    async def test_returns_client_secret(self):
        def handler(request):
            form = parse_qs(request.content.decode())
            assert form["customer"] == ["cus_1"]
            return httpx.Response(200, json={"id": "seti_1", "client_secret": "seti_1_secret_x"})

        handle = await gateway_for(handler).create_payment_setup_handle("cus_1")

        assert handle == "seti_1_secret_x"
