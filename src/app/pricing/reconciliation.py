"""Reconciliation Engine

Resolves the vehicle rental charge against the persisted subtotal.

Staff can adjust a booking's subtotal directly (weekend surcharges,
duration discounts, goodwill credits) without an itemized row. The vehicle
line absorbs that difference so displayed items still sum to the displayed
subtotal, unless the implied value is non-positive or implausibly large,
in which case the plain rate x days is shown and the mismatch is logged.
"""

import logging

from .models import ReconciliationResult

logger = logging.getLogger(__name__)


def reconcile_vehicle_charge(
    persisted_subtotal_cents: int,
    non_vehicle_cents: int,
    naive_base_cents: int,
    sanity_multiplier: int = 10,
    has_itemized_extras: bool = True,
    booking_code: str = "",
) -> ReconciliationResult:
    """
    Resolve the vehicle charge for a breakdown

    Args:
        persisted_subtotal_cents: Booking subtotal as stored
        non_vehicle_cents: Sum of every other charge category
        naive_base_cents: daily_rate x days
        sanity_multiplier: Upper bound on remainder, in multiples of naive base
        has_itemized_extras: Booking has add-on or driver rows
        booking_code: Used in log messages only

    Returns:
        ReconciliationResult with the vehicle charge to display
    """
    remainder = persisted_subtotal_cents - non_vehicle_cents
    use_remainder = 0 < remainder <= naive_base_cents * sanity_multiplier

    if not use_remainder:
        logger.warning(
            f"Subtotal inconsistency for booking {booking_code}: "
            f"remainder={remainder} cents outside (0, {naive_base_cents * sanity_multiplier}], "
            f"using rate x days={naive_base_cents} cents"
        )

    # Remainder above 1.5x base with no extras rows: extras were probably never persisted
    extras_likely_missing = (
        not has_itemized_extras
        and remainder > 0
        and remainder * 2 > naive_base_cents * 3
    )
    if extras_likely_missing:
        logger.warning(
            f"Missing join rows for booking {booking_code}: "
            f"base={naive_base_cents} cents, remainder={remainder} cents, "
            f"unpersisted_extras={remainder - naive_base_cents} cents"
        )

    return ReconciliationResult(
        vehicle_cents=remainder if use_remainder else naive_base_cents,
        naive_base_cents=naive_base_cents,
        remainder_cents=remainder,
        used_remainder=use_remainder,
        extras_likely_missing=extras_likely_missing,
    )
