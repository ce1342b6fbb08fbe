"""Charge breakdown orchestration

Runs calculator, reconciliation, line-item builder and tax splitter for a
single booking. Pure and synchronous; the caller loads the rate table.
"""

import logging

from .calculator import compute_category_totals
from .line_items import build_line_items, sum_line_items
from .models import BookingCharges, ChargeBreakdown
from .money import from_minor_units, to_minor_units
from .rates import RateResolver, RateTable
from .reconciliation import reconcile_vehicle_charge
from .tax import build_tax_breakdown

logger = logging.getLogger(__name__)


def compute_charge_breakdown(charges: BookingCharges, rate_table: RateTable) -> ChargeBreakdown:
    """
    Compute the itemized, reconciled charge breakdown for a booking

    The persisted subtotal, tax and total are authoritative. Line items sum
    to the subtotal unless reconciliation fell back, in which case the
    discrepancy is reported rather than hidden.
    """
    resolver = RateResolver(rate_table)
    totals = compute_category_totals(charges, resolver)

    subtotal_cents = to_minor_units(charges.subtotal)
    tax_cents = to_minor_units(charges.tax_amount)
    total_cents = to_minor_units(charges.total_amount)

    reconciliation = reconcile_vehicle_charge(
        persisted_subtotal_cents=subtotal_cents,
        non_vehicle_cents=totals.non_vehicle,
        naive_base_cents=totals.vehicle_base,
        sanity_multiplier=rate_table.sanity_multiplier,
        has_itemized_extras=bool(charges.add_ons or charges.drivers),
        booking_code=charges.booking_code,
    )

    items = build_line_items(charges, totals, reconciliation, resolver)
    itemized_cents = sum_line_items(items)
    discrepancy_cents = subtotal_cents - itemized_cents
    is_balanced = abs(discrepancy_cents) <= rate_table.tolerance_cents
    if not is_balanced:
        logger.warning(
            f"Breakdown for booking {charges.booking_code} is unbalanced: "
            f"itemized={itemized_cents} subtotal={subtotal_cents} cents"
        )

    taxes = build_tax_breakdown(
        subtotal_cents,
        tax_cents,
        rate_table.pst_rate,
        rate_table.gst_rate,
    )

    # Older bookings may carry a zero total; derive it rather than show $0
    if total_cents <= 0 and subtotal_cents > 0:
        total_cents = subtotal_cents + tax_cents

    return ChargeBreakdown(
        booking_code=charges.booking_code,
        total_days=charges.total_days,
        daily_rate=from_minor_units(to_minor_units(charges.daily_rate)),
        currency=rate_table.currency,
        line_items=items,
        protection=totals.protection_rate,
        vehicle_total=from_minor_units(reconciliation.vehicle_cents),
        add_ons_total=from_minor_units(totals.add_ons),
        drivers_total=from_minor_units(totals.drivers),
        regulatory_total=from_minor_units(totals.regulatory),
        subtotal=from_minor_units(subtotal_cents),
        itemized_total=from_minor_units(itemized_cents),
        discrepancy=from_minor_units(discrepancy_cents),
        is_balanced=is_balanced,
        taxes=taxes,
        grand_total=from_minor_units(total_cents),
        deposit=from_minor_units(to_minor_units(charges.deposit_amount)),
        reconciliation=reconciliation,
    )
