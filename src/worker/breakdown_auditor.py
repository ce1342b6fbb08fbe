"""Booking Breakdown Audit Background Worker

Periodically itemizes every booking and reports charge data that does not
reconcile. Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.booking_repository import SqlAlchemyBookingRepository
from src.adapter.services.booking_reader import SqlAlchemyBookingReader
from src.app.documents.booking_record import BookingRecordLoader
from src.app.pricing.rates import RateTable
from src.app.use_cases.documents import AuditBookingBreakdowns, BreakdownAuditResultDTO

logger = logging.getLogger(__name__)


class BreakdownAuditWorker:
    """
    Background worker for booking breakdown audits

    Features:
    - Flags reconciliation fallbacks, unbalanced breakdowns and missing extras
    - Read-only; findings are logged for investigation
    - Can run once or continuously
    - Configurable interval (default: daily)

    Usage:
        # Run once
        worker = BreakdownAuditWorker()
        result = await worker.run_once()

        # Run continuously
        worker = BreakdownAuditWorker()
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        batch_size: Optional[int] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            batch_size: Bookings per page (defaults to BREAKDOWN_AUDIT_BATCH_SIZE)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.batch_size = batch_size or ApplicationConfig.BREAKDOWN_AUDIT_BATCH_SIZE

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )
        self.rate_defaults = RateTable.from_config(ApplicationConfig)

        logger.info("BreakdownAuditWorker initialized")

    async def run_once(self) -> BreakdownAuditResultDTO:
        """
        Run the audit once

        Returns:
            BreakdownAuditResultDTO with audit findings
        """
        if not ApplicationConfig.BREAKDOWN_AUDIT_ENABLED:
            logger.info("Breakdown audit is disabled, skipping")
            return BreakdownAuditResultDTO(
                bookings_checked=0,
                issues_found=0,
                issues=[],
                audit_time=datetime.utcnow(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            record_loader = BookingRecordLoader(
                SqlAlchemyBookingReader(self.async_session_factory), self.rate_defaults
            )
            use_case = AuditBookingBreakdowns(
                booking_repo=SqlAlchemyBookingRepository(session),
                record_loader=record_loader,
                batch_size=self.batch_size,
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Breakdown audit failed: {result.error.message}")
                raise RuntimeError(f"Breakdown audit failed: {result.error.message}")

            return result.value

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run the audit continuously at specified interval

        Args:
            interval_seconds: Seconds between runs (default: 24 hours)
        """
        logger.info(f"Starting continuous breakdown audit with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Audit cycle complete. Checked {result.bookings_checked} bookings, "
                    f"found {result.issues_found} issues in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Audit cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("BreakdownAuditWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.breakdown_auditor --once

        # Run continuously with custom interval (in seconds)
        python -m src.worker.breakdown_auditor --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Booking Breakdown Audit Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.BREAKDOWN_AUDIT_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: 86400 = 24 hours)"
    )
    args = parser.parse_args()

    worker = BreakdownAuditWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Breakdown audit complete:")
            print(f"  Bookings checked: {result.bookings_checked}")
            print(f"  Issues found: {result.issues_found}")
            print(f"  Execution time: {result.execution_time_ms}ms")
            for issue in result.issues:
                print(
                    f"  - {issue.booking_code} ({issue.booking_id}): "
                    f"fell_back={issue.fell_back}, balanced={issue.is_balanced}, "
                    f"discrepancy={issue.discrepancy}, extras_missing={issue.extras_likely_missing}"
                )
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
