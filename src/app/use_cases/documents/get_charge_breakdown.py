"""GetChargeBreakdown Use Case

Builds the itemized charge summary for a booking from its persisted totals.
"""

import logging
from libs.result import Result, Return, Error
from src.app.documents.assembler import breakdown_for
from src.app.documents.booking_record import BookingRecordLoader
from .dtos import ChargeBreakdownResponseDTO
from .mappers import breakdown_to_dto

logger = logging.getLogger(__name__)


class GetChargeBreakdown:
    """
    Use Case: Itemize a booking's charges

    Business Rules:
    1. Booking must exist
    2. The persisted subtotal and tax total are authoritative
    3. Vehicle charge is reconciled from the subtotal when plausible
    4. Secondary data that cannot be read degrades to placeholders
    """

    def __init__(self, record_loader: BookingRecordLoader):
        self.record_loader = record_loader

    async def execute(self, booking_id: str) -> Result[ChargeBreakdownResponseDTO]:
        """
        Execute breakdown computation

        Args:
            booking_id: Booking ID

        Returns:
            Result[ChargeBreakdownResponseDTO]: Itemized charges or error
        """
        try:
            record = await self.record_loader.load(booking_id)
            if record is None:
                return Return.err(
                    Error(
                        code="BOOKING_NOT_FOUND",
                        message=f"Booking {booking_id} not found",
                        reason="Booking does not exist",
                    )
                )

            breakdown = breakdown_for(record)
            return Return.ok(breakdown_to_dto(booking_id, breakdown))

        except Exception as e:
            logger.error(f"Breakdown failed for booking {booking_id}: {e}")
            return Return.err(
                Error(
                    code="BREAKDOWN_FAILED",
                    message="Failed to compute charge breakdown",
                    reason=str(e),
                )
            )
