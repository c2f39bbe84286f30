"""Invoice Settlement Background Worker

Periodically pays every unpaid invoice whose total reached the minimum
payable amount. Can be run as a standalone script or integrated with a
scheduler.
"""

import asyncio
import logging
import time
from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.app.services.exchange_rate_source import ExchangeRateSource
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.billing import SettlementRunResultDTO
from src.depends import build_gateways, build_exchange_rate_source, build_settlement_pipeline
from src.domain.payment import PaymentStatus
from src.domain.wallet import WalletType

logger = logging.getLogger(__name__)


class InvoiceSettlerWorker:
    """
    Background worker for invoice settlement

    Features:
    - Settles payable invoices oldest first
    - One session (one transaction) per invoice, so one bad invoice does
      not block the others
    - Can run once or continuously
    - Configurable interval (default: daily)

    Usage:
        # Run once
        worker = InvoiceSettlerWorker()
        result = await worker.run_once()

        # Run continuously
        worker = InvoiceSettlerWorker()
        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        minimum_amount: Optional[Decimal] = None,
        gateways: Optional[Dict[WalletType, PaymentGateway]] = None,
        exchange_rate_source: Optional[ExchangeRateSource] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            minimum_amount: Minimum payable total in cents
                (defaults to ApplicationConfig.MINIMUM_PAYABLE_AMOUNT)
            gateways: Gateways by wallet type (defaults to FAKE + STRIPE)
            exchange_rate_source: EUR-RON source (defaults to BNR)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.minimum_amount = Decimal(
            minimum_amount if minimum_amount is not None
            else ApplicationConfig.MINIMUM_PAYABLE_AMOUNT
        )
        self.gateways = gateways if gateways is not None else build_gateways()
        self.exchange_rate_source = exchange_rate_source or build_exchange_rate_source()

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info(f"InvoiceSettlerWorker initialized with minimum={self.minimum_amount}")

    async def run_once(self) -> SettlementRunResultDTO:
        """
        Settle every payable invoice once

        Returns:
            SettlementRunResultDTO with the outcome counts
        """
        start_time = time.time()

        if not ApplicationConfig.SETTLEMENT_ENABLED:
            logger.info("Invoice settlement is disabled, skipping")
            return SettlementRunResultDTO(total_invoices=0, execution_time_ms=0)

        async with self.async_session_factory() as session:
            invoices = await SqlAlchemyInvoiceRepository(session).get_payable(self.minimum_amount)
            invoice_ids = [invoice.id for invoice in invoices]

        logger.info(f"Found {len(invoice_ids)} payable invoices")

        counts = {status: 0 for status in PaymentStatus}
        rejected = 0

        for invoice_id in invoice_ids:
            async with self.async_session_factory() as session:
                pipeline = build_settlement_pipeline(
                    session,
                    gateways=self.gateways,
                    exchange_rate_source=self.exchange_rate_source,
                )
                result = await pipeline.pay(invoice_id)

            if result.is_err():
                rejected += 1
                logger.error(
                    f"Invoice #{invoice_id} not settled: {result.error.code} - {result.error.message}"
                )
                continue

            counts[PaymentStatus(result.value.status)] += 1

        return SettlementRunResultDTO(
            total_invoices=len(invoice_ids),
            successful=counts[PaymentStatus.SUCCESSFUL],
            failed=counts[PaymentStatus.FAILED],
            errored=counts[PaymentStatus.ERROR],
            rejected=rejected,
            execution_time_ms=int((time.time() - start_time) * 1000),
        )

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run settlement continuously at specified interval

        Args:
            interval_seconds: Seconds between runs (default: 24 hours)
        """
        logger.info(
            f"Starting continuous invoice settlement with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Settlement cycle complete. "
                    f"{result.total_invoices} invoices: {result.successful} paid, "
                    f"{result.failed} failed, {result.errored} errored, "
                    f"{result.rejected} rejected in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Settlement cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("InvoiceSettlerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.invoice_settler --once

        # Run continuously (default: SETTLEMENT_INTERVAL_SECONDS)
        python -m src.worker.invoice_settler

        # Run continuously with custom interval (in seconds)
        python -m src.worker.invoice_settler --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Invoice Settlement Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.SETTLEMENT_INTERVAL_SECONDS,
        help="Interval between runs in seconds"
    )
    args = parser.parse_args()

    worker = InvoiceSettlerWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Settlement complete:")
            print(f"  Payable invoices: {result.total_invoices}")
            print(f"  Successful: {result.successful}")
            print(f"  Failed: {result.failed}")
            print(f"  Errored: {result.errored}")
            print(f"  Rejected: {result.rejected}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


def run():
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
