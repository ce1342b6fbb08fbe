"""Booking API Routes

Operational charge summary for a booking.
"""

from fastapi import APIRouter, Depends, status

from src.app.documents.booking_record import BookingRecordLoader
from src.app.use_cases.documents.dtos import ChargeBreakdownResponseDTO
from src.app.use_cases.documents.get_charge_breakdown import GetChargeBreakdown
from src.depends import get_record_loader
from src.api.error import ClientError, status_for

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get(
    "/{booking_id}/breakdown",
    response_model=ChargeBreakdownResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Booking not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "BOOKING_NOT_FOUND",
                            "message": "Booking 6f1c2a9e-... not found"
                        }
                    }
                }
            }
        }
    }
)
async def get_charge_breakdown(
    booking_id: str,
    record_loader: BookingRecordLoader = Depends(get_record_loader),
):
    """
    Itemize a booking's charges.

    Line items always sum to the persisted subtotal when the vehicle charge
    can be reconciled; otherwise `is_balanced` is false and `discrepancy`
    shows the difference.

    **Returns:**
    - 200: Breakdown computed
    - 404: Booking not found
    """
    result = await GetChargeBreakdown(record_loader).execute(booking_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value
