from .unit_of_work import SqlAlchemyUnitOfWork
from .stripe_gateway import StripePaymentGateway
from .fake_gateway import FakePaymentGateway
from .exchange_rate_source import BnrExchangeRateSource, FixedExchangeRateSource
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "StripePaymentGateway",
    "FakePaymentGateway",
    "BnrExchangeRateSource",
    "FixedExchangeRateSource",
    "ReportLabPdfService",
]
