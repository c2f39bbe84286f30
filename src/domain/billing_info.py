"""Billing Info Value Object

Legal details of a payer or payee as reported by the payment gateway.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class BillingInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_company: bool = False
    legal_name: str = ""
    first_name: str = ""
    last_name: str = ""
    country: str = ""
    address: str = ""
    city: str = ""
    zipcode: str = ""
    email: str = ""
    tax_id: Optional[str] = None
    other: str = ""

    def __str__(self) -> str:
        if self.is_company:
            name = self.legal_name
        else:
            name = f"{self.first_name} {self.last_name}".strip()
        lines = [
            name,
            ", ".join(part for part in (self.address, self.city, self.zipcode) if part),
            self.country,
        ]
        if self.tax_id:
            lines.append(f"Tax ID: {self.tax_id}")
        if self.email:
            lines.append(self.email)
        return "\n".join(line for line in lines if line)
