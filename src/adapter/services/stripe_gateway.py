"""Stripe Payment Gateway Implementation

Talks to the Stripe REST API with httpx. The payer is charged through a
confirmed PaymentIntent whose transfer_data moves the contributor's share
to their connected account.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
import httpx
from src.app.services.payment_gateway import (
    PaymentGateway,
    TransferResult,
    TransferStatus,
    GatewayError,
    GatewayDeclinedError,
)
from src.domain.billing_info import BillingInfo

logger = logging.getLogger(__name__)

DECLINED_STATUSES = ("requires_payment_method", "requires_action", "canceled")


class StripePaymentGateway(PaymentGateway):
    """
    Stripe implementation of PaymentGateway

    Status mapping:
    - succeeded -> CONFIRMED
    - processing -> PROCESSING
    - requires_payment_method, requires_action, canceled, card errors -> GatewayDeclinedError
    - 5xx, timeouts, malformed bodies -> GatewayError
    """

    def __init__(
        self,
        api_url: str,
        api_token: str,
        timeout: float = 30.0,
        currency: str = "eur",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Stripe gateway

        Args:
            api_url: Base URL of the Stripe API (e.g. https://api.stripe.com/v1)
            api_token: Secret API key
            timeout: Request timeout in seconds
            currency: Charge currency
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self.currency = currency
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self.api_token:
            raise GatewayError("STRIPE_NOT_CONFIGURED", "Stripe API token is not set")
        return httpx.AsyncClient(
            base_url=self.api_url,
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self.api_token}"},
            transport=self.transport,
        )

    async def _request(self, method: str, path: str, data: Optional[dict] = None) -> dict:
        try:
            async with self._client() as client:
                response = await client.request(method, path, data=data)
        except httpx.TimeoutException as e:
            raise GatewayError("GATEWAY_TIMEOUT", f"Stripe request {path} timed out: {e}")
        except httpx.HTTPError as e:
            raise GatewayError("GATEWAY_UNAVAILABLE", f"Stripe request {path} failed: {e}")

        try:
            body = response.json()
        except ValueError:
            raise GatewayError(
                "MALFORMED_RESPONSE",
                f"Stripe returned a non-JSON body (HTTP {response.status_code})"
            )

        if response.status_code >= 400:
            error = body.get("error", {}) if isinstance(body, dict) else {}
            message = error.get("message", f"HTTP {response.status_code}")
            if error.get("type") == "card_error" or response.status_code == 402:
                raise GatewayDeclinedError(error.get("code") or "CARD_DECLINED", message)
            raise GatewayError(error.get("code") or f"HTTP_{response.status_code}", message)

        if not isinstance(body, dict):
            raise GatewayError("MALFORMED_RESPONSE", "Stripe returned an unexpected body")
        return body

    async def create_and_confirm_transfer(
        self,
        source_payment_method_id: str,
        destination_payout_id: str,
        total_amount: Decimal,
        transfer_amount: Decimal,
        description: str,
    ) -> TransferResult:
        """
        Create a confirmed PaymentIntent transferring funds to the payee

        Args:
            source_payment_method_id: Stripe payment method of the payer
            destination_payout_id: Stripe connected account of the payee
            total_amount: Charged amount, in cents
            transfer_amount: Transferred amount, in cents
            description: Statement description

        Returns:
            TransferResult (CONFIRMED or PROCESSING)

        Raises:
            GatewayDeclinedError: Card declined or intent left unpaid
            GatewayError: Network failure or malformed response
        """
        data = {
            "amount": str(int(total_amount)),
            "currency": self.currency,
            "payment_method": source_payment_method_id,
            "confirm": "true",
            "description": description,
            "transfer_data[destination]": destination_payout_id,
            "transfer_data[amount]": str(int(transfer_amount)),
        }
        intent = await self._request("POST", "/payment_intents", data=data)

        intent_id = intent.get("id")
        status = intent.get("status")
        if not intent_id or not status:
            raise GatewayError("MALFORMED_RESPONSE", "PaymentIntent without id or status")

        created = intent.get("created")
        timestamp = datetime.utcfromtimestamp(created) if created else datetime.utcnow()

        if status == "succeeded":
            logger.info(f"[Stripe] PaymentIntent {intent_id} succeeded")
            return TransferResult(
                status=TransferStatus.CONFIRMED,
                transaction_id=intent_id,
                timestamp=timestamp,
            )
        if status == "processing":
            logger.info(f"[Stripe] PaymentIntent {intent_id} is processing")
            return TransferResult(
                status=TransferStatus.PROCESSING,
                transaction_id=intent_id,
                timestamp=timestamp,
            )
        if status in DECLINED_STATUSES:
            raise GatewayDeclinedError(
                status.upper(),
                f"Stripe PaymentIntent {intent_id} status \"{status}\""
            )
        raise GatewayError(
            "UNEXPECTED_STATUS",
            f"Stripe PaymentIntent {intent_id} status \"{status}\""
        )

    async def fetch_payee_billing_info(self, payout_id: str) -> BillingInfo:
        """
        Read billing details from the payee's connected account

        Args:
            payout_id: Stripe connected account id

        Returns:
            BillingInfo of the payee
        """
        account = await self._request("GET", f"/accounts/{payout_id}")
        metadata = account.get("metadata") or {}

        if account.get("business_type") == "company":
            company = account.get("company") or {}
            address = company.get("address") or {}
            return BillingInfo(
                is_company=True,
                legal_name=company.get("name") or "",
                country=address.get("country") or account.get("country") or "",
                address=address.get("line1") or "",
                city=address.get("city") or "",
                zipcode=address.get("postal_code") or "",
                email=account.get("email") or "",
                tax_id=metadata.get("tax_id"),
                other=metadata.get("other", ""),
            )

        individual = account.get("individual") or {}
        address = individual.get("address") or {}
        return BillingInfo(
            is_company=False,
            first_name=individual.get("first_name") or "",
            last_name=individual.get("last_name") or "",
            country=address.get("country") or account.get("country") or "",
            address=address.get("line1") or "",
            city=address.get("city") or "",
            zipcode=address.get("postal_code") or "",
            email=individual.get("email") or account.get("email") or "",
            tax_id=metadata.get("tax_id"),
            other=metadata.get("other", ""),
        )

    async def create_payment_setup_handle(self, wallet_identifier: str) -> str:
        """
        Create a SetupIntent for the wallet's Stripe customer

        Returns:
            The SetupIntent client secret
        """
        intent = await self._request(
            "POST",
            "/setup_intents",
            data={"customer": wallet_identifier, "usage": "off_session"},
        )
        secret = intent.get("client_secret")
        if not secret:
            raise GatewayError("MALFORMED_RESPONSE", "SetupIntent without client_secret")
        return secret
