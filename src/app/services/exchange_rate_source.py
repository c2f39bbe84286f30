"""Exchange Rate Source Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal


class ExchangeRateSource(ABC):
    """
    Supplier of foreign-exchange rates

    Implementations must never raise: on any I/O or parsing failure they
    return their documented fallback rate.
    """

    @abstractmethod
    async def rate(self, from_currency: str, to_currency: str) -> Decimal:
        """
        Get the exchange rate

        Args:
            from_currency: ISO 4217 code of the source currency (e.g. EUR)
            to_currency: ISO 4217 code of the target currency (e.g. RON)

        Returns:
            Units of to_currency per unit of from_currency, multiplied by 100
        """
        pass
