import random
from decimal import Decimal
from functools import partial
from typing import Dict, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyProjectRepository,
    SqlAlchemyContractRepository,
    SqlAlchemyTaskRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoicedTaskRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyPlatformInvoiceRepository,
    SqlAlchemyWalletRepository,
    SqlAlchemyPaymentMethodRepository,
    SqlAlchemyPayoutMethodRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.stripe_gateway import StripePaymentGateway
from src.adapter.services.fake_gateway import FakePaymentGateway
from src.adapter.services.exchange_rate_source import BnrExchangeRateSource
from src.app.services.exchange_rate_source import ExchangeRateSource
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.tax_calculator import TaxCalculator
from src.app.use_cases.billing import (
    InvoiceLedger,
    ProjectFunds,
    ContributorElector,
    PreconditionStage,
    ExecutionStage,
    RecordingStage,
    SettlementPipeline,
)
from src.domain.contract import ContractId
from src.domain.wallet import WalletType

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def build_gateways() -> Dict[WalletType, PaymentGateway]:
    return {
        WalletType.FAKE: FakePaymentGateway(),
        WalletType.STRIPE: StripePaymentGateway(
            api_url=ApplicationConfig.STRIPE_API_URL,
            api_token=ApplicationConfig.STRIPE_API_TOKEN,
            timeout=ApplicationConfig.GATEWAY_TIMEOUT,
            currency=ApplicationConfig.PAYMENT_CURRENCY,
        ),
    }


def build_exchange_rate_source() -> ExchangeRateSource:
    return BnrExchangeRateSource(
        url=ApplicationConfig.BNR_RATES_URL,
        fallback=Decimal(ApplicationConfig.DEFAULT_EUR_TO_RON),
    )


def build_tax_calculator() -> TaxCalculator:
    return TaxCalculator(
        home_country=ApplicationConfig.PLATFORM_COUNTRY,
        vat_percentage=Decimal(str(ApplicationConfig.VAT_PERCENTAGE)),
        trade_bloc=ApplicationConfig.EU_COUNTRIES,
    )


def build_ledger(session: AsyncSession, contract_id: ContractId) -> InvoiceLedger:
    return InvoiceLedger(
        uow=SqlAlchemyUnitOfWork(session),
        contract_id=contract_id,
        contract_repo=SqlAlchemyContractRepository(session),
        project_repo=SqlAlchemyProjectRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoiced_task_repo=SqlAlchemyInvoicedTaskRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        platform_invoice_repo=SqlAlchemyPlatformInvoiceRepository(session),
        platform_billed_by=ApplicationConfig.PLATFORM_BILLED_BY,
    )


def build_elector(session: AsyncSession, rng: Optional[random.Random] = None) -> ContributorElector:
    if rng is None:
        rng = random.Random(ApplicationConfig.ELECTION_RANDOM_SEED)
    contract_repo = SqlAlchemyContractRepository(session)
    task_repo = SqlAlchemyTaskRepository(session)
    return ContributorElector(
        project_repo=SqlAlchemyProjectRepository(session),
        contract_repo=contract_repo,
        task_repo=task_repo,
        wallet_repo=SqlAlchemyWalletRepository(session),
        funds=ProjectFunds(
            contract_repo=contract_repo,
            task_repo=task_repo,
            invoice_repo=SqlAlchemyInvoiceRepository(session),
        ),
        rng=rng,
    )


def build_settlement_pipeline(
    session: AsyncSession,
    gateways: Optional[Dict[WalletType, PaymentGateway]] = None,
    exchange_rate_source: Optional[ExchangeRateSource] = None,
) -> SettlementPipeline:
    wallet_repo = SqlAlchemyWalletRepository(session)
    return SettlementPipeline(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        wallet_repo=wallet_repo,
        preconditions=PreconditionStage(
            minimum_amount=Decimal(ApplicationConfig.MINIMUM_PAYABLE_AMOUNT)
        ),
        execution=ExecutionStage(
            gateways=gateways if gateways is not None else build_gateways(),
            payout_method_repo=SqlAlchemyPayoutMethodRepository(session),
            payment_method_repo=SqlAlchemyPaymentMethodRepository(session),
            tax_calculator=build_tax_calculator(),
        ),
        recording=RecordingStage(
            payment_repo=SqlAlchemyPaymentRepository(session),
            wallet_repo=wallet_repo,
            ledger_factory=partial(build_ledger, session),
            exchange_rate_source=exchange_rate_source or build_exchange_rate_source(),
        ),
    )
