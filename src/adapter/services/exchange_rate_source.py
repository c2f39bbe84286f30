"""Exchange Rate Source Implementations

The National Bank of Romania (BNR) publishes daily reference rates as XML.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional
from xml.etree import ElementTree
import httpx
from src.app.services.exchange_rate_source import ExchangeRateSource

logger = logging.getLogger(__name__)


class FixedExchangeRateSource(ExchangeRateSource):
    """Exchange rate source returning a constant rate"""

    def __init__(self, rate: Decimal):
        self._rate = Decimal(rate)

    async def rate(self, from_currency: str, to_currency: str) -> Decimal:
        return self._rate


class BnrExchangeRateSource(ExchangeRateSource):
    """
    Reads RON reference rates from the BNR XML feed

    The feed lists <Rate currency="EUR">4.9215</Rate> entries, each the
    number of RON per unit of currency. The rate is rounded half-up to 2
    decimals and multiplied by 100 (4.9215 -> 492). Any failure yields
    the fallback rate.
    """

    def __init__(
        self,
        url: str,
        fallback: Decimal = Decimal(492),
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.fallback = Decimal(fallback)
        self.timeout = timeout
        self.transport = transport

    async def rate(self, from_currency: str, to_currency: str) -> Decimal:
        """
        Get the from_currency -> RON rate x100

        Args:
            from_currency: Currency listed in the feed (e.g. EUR)
            to_currency: Only RON is published by BNR

        Returns:
            Rate x100, or the fallback on any failure
        """
        if to_currency.upper() != "RON":
            logger.warning(f"[BNR] No {from_currency}->{to_currency} rate, using fallback {self.fallback}")
            return self.fallback

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
            value = self._parse(response.text, from_currency.upper())
        except (httpx.HTTPError, ElementTree.ParseError, InvalidOperation, AttributeError) as e:
            logger.error(f"[BNR] Could not read {from_currency} rate from {self.url}: {e}")
            return self.fallback

        if value is None:
            logger.warning(f"[BNR] {from_currency} not listed, using fallback {self.fallback}")
            return self.fallback

        rate = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) * 100
        logger.info(f"[BNR] {from_currency}->RON rate x100: {rate}")
        return rate.quantize(Decimal("1"))

    @staticmethod
    def _parse(document: str, currency: str) -> Optional[Decimal]:
        root = ElementTree.fromstring(document)
        for element in root.iter():
            # Tags carry the feed's XML namespace.
            if element.tag.rsplit("}", 1)[-1] != "Rate":
                continue
            if element.get("currency") != currency:
                continue
            multiplier = Decimal(element.get("multiplier", "1"))
            return Decimal(element.text.strip()) / multiplier
        return None
