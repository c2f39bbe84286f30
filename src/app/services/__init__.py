from .unit_of_work import UnitOfWork
from .payment_gateway import (
    PaymentGateway,
    TransferResult,
    TransferStatus,
    GatewayError,
    GatewayDeclinedError,
)
from .exchange_rate_source import ExchangeRateSource
from .tax_calculator import TaxCalculator
from .pdf_service import PdfService

__all__ = [
    "UnitOfWork",
    "PaymentGateway",
    "TransferResult",
    "TransferStatus",
    "GatewayError",
    "GatewayDeclinedError",
    "ExchangeRateSource",
    "TaxCalculator",
    "PdfService",
]
