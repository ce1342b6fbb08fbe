"""AuditBookingBreakdowns Use Case

Scans bookings for charge data that does not itemize cleanly.
"""

import logging
import time
from datetime import datetime
from typing import List
from libs.result import Result, Return, Error
from src.app.documents.assembler import breakdown_for
from src.app.documents.booking_record import BookingRecordLoader
from src.app.repositories.booking_repository import BookingRepository
from .dtos import BreakdownAuditResultDTO, BreakdownIssueDTO

logger = logging.getLogger(__name__)


class AuditBookingBreakdowns:
    """
    Use Case: Data-quality audit of booking charges

    Business Rules:
    1. Read-only; nothing is modified
    2. A booking is reported when reconciliation fell back to rate x days,
       the line items do not sum to the subtotal, or the subtotal suggests
       extras that have no rows
    3. A booking that fails to load is logged and skipped

    Flow:
    1. Page through booking IDs
    2. Compute each breakdown
    3. Collect findings
    """

    def __init__(
        self,
        booking_repo: BookingRepository,
        record_loader: BookingRecordLoader,
        batch_size: int = 200,
    ):
        self.booking_repo = booking_repo
        self.record_loader = record_loader
        self.batch_size = batch_size

    async def execute(self) -> Result[BreakdownAuditResultDTO]:
        start_time = time.time()
        audit_time = datetime.utcnow()

        try:
            logger.info("Starting booking breakdown audit")

            issues: List[BreakdownIssueDTO] = []
            checked = 0
            offset = 0

            while True:
                booking_ids = await self.booking_repo.list_ids(limit=self.batch_size, offset=offset)
                if not booking_ids:
                    break
                offset += len(booking_ids)

                for booking_id in booking_ids:
                    try:
                        record = await self.record_loader.load(booking_id)
                    except Exception as e:
                        logger.error(f"Skipping booking {booking_id} in audit: {e}")
                        continue
                    if record is None:
                        continue

                    checked += 1
                    breakdown = breakdown_for(record)
                    reconciliation = breakdown.reconciliation
                    if reconciliation.fell_back or not breakdown.is_balanced or reconciliation.extras_likely_missing:
                        issue = BreakdownIssueDTO(
                            booking_id=booking_id,
                            booking_code=breakdown.booking_code,
                            fell_back=reconciliation.fell_back,
                            is_balanced=breakdown.is_balanced,
                            discrepancy=breakdown.discrepancy,
                            extras_likely_missing=reconciliation.extras_likely_missing,
                        )
                        issues.append(issue)
                        logger.warning(
                            f"Breakdown issue for booking {breakdown.booking_code} ({booking_id}): "
                            f"fell_back={issue.fell_back}, balanced={issue.is_balanced}, "
                            f"discrepancy={issue.discrepancy}, extras_missing={issue.extras_likely_missing}"
                        )

                if len(booking_ids) < self.batch_size:
                    break

            execution_time_ms = int((time.time() - start_time) * 1000)
            response = BreakdownAuditResultDTO(
                bookings_checked=checked,
                issues_found=len(issues),
                issues=issues,
                audit_time=audit_time,
                execution_time_ms=execution_time_ms,
            )

            if issues:
                logger.warning(
                    f"Breakdown audit complete. Found {len(issues)} issues "
                    f"out of {checked} bookings in {execution_time_ms}ms"
                )
            else:
                logger.info(f"Breakdown audit complete. All {checked} bookings itemize cleanly in {execution_time_ms}ms")

            return Return.ok(response)

        except Exception as e:
            logger.error(f"Breakdown audit failed: {e}")
            return Return.err(
                Error(
                    code="BREAKDOWN_AUDIT_FAILED",
                    message="Failed to audit booking breakdowns",
                    reason=str(e),
                )
            )
