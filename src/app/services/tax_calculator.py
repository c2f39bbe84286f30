"""VAT on platform commission

The platform charges VAT on its commission depending on where the payee
is established:

- home country: always VAT
- other country of the trade bloc without a tax id: VAT
- other country of the trade bloc with a tax id: reverse charge, no VAT
- outside the bloc: no VAT
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional


class TaxCalculator:

    def __init__(
        self,
        home_country: str,
        vat_percentage: Decimal,
        trade_bloc: Iterable[str],
    ):
        self.home_country = home_country.upper()
        self.vat_percentage = Decimal(str(vat_percentage))
        self.trade_bloc = frozenset(country.upper() for country in trade_bloc)

    def vat(
        self,
        commission: Decimal,
        payee_country: Optional[str],
        tax_id: Optional[str] = None,
    ) -> Decimal:
        """
        Compute the VAT owed on a commission

        Args:
            commission: Commission in cents
            payee_country: ISO 3166 alpha-2 code of the payee
            tax_id: Payee's tax identifier, if any

        Returns:
            VAT in cents, rounded half-up to a whole cent
        """
        country = (payee_country or "").strip().upper()
        if country == self.home_country:
            return self._percent_of(commission)
        if country in self.trade_bloc:
            if tax_id is None or not tax_id.strip():
                return self._percent_of(commission)
            return Decimal(0)
        return Decimal(0)

    def _percent_of(self, commission: Decimal) -> Decimal:
        return (Decimal(commission) * self.vat_percentage / Decimal(100)).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
