"""Line-Item Builder

Assembles ChargeLineItems in a fixed order: vehicle rental, protection,
add-ons, additional drivers, young-driver fee, drop-off fee, delivery fee,
upgrade, regulatory fees. Taxes and totals are appended by the caller.
"""

from typing import List, Optional

from .calculator import CategoryTotals
from .models import BookingCharges, ChargeLineItem, DriverCharge, ReconciliationResult
from .money import format_amount, format_money, from_minor_units, to_minor_units
from .rates import YOUNG_AGE_BAND, RateResolver


def _days_label(days: int) -> str:
    return "1 day" if days == 1 else f"{days} days"


def vehicle_description(daily_rate_cents: int, days: int, has_adjustments: bool) -> str:
    if has_adjustments:
        return f"Vehicle Rental ({_days_label(days)}, incl. surcharges/discounts)"
    return f"Vehicle Rental ({format_money(daily_rate_cents)}/day × {_days_label(days)})"


def add_on_description(name: str, quantity: int) -> str:
    if quantity and quantity > 1:
        return f"{name} ×{quantity}"
    return name


def driver_description(driver: DriverCharge, index: int, days: int, resolver: RateResolver) -> str:
    """Driver label with the band rate; a fee override is shown as a flat amount"""
    name = (driver.name or "").strip() or f"Driver {index}"
    band = "Young" if driver.age_band == YOUNG_AGE_BAND else "Standard"
    if to_minor_units(driver.fee_override) > 0:
        return f"{name} ({band})"
    rate = resolver.resolve_driver_rate(driver.age_band)
    return f"{name} ({band} {format_amount(rate)}/day × {days}d)"


def _fee_with_rate(label: str, total_cents: int, days: int) -> str:
    if days <= 0:
        return label
    daily = total_cents // days if total_cents % days == 0 else None
    if daily is None:
        return f"{label} ({_days_label(days)})"
    return f"{label} ({format_money(daily)}/day × {_days_label(days)})"


def build_line_items(
    charges: BookingCharges,
    totals: CategoryTotals,
    reconciliation: ReconciliationResult,
    resolver: RateResolver,
) -> List[ChargeLineItem]:
    """
    Build the ordered, itemized charge list for a booking

    Zero-amount optional categories are omitted. Protection always renders,
    as "No Coverage" at $0 when no plan applies.
    """
    days = max(charges.total_days, 0)
    items: List[ChargeLineItem] = []

    items.append(
        ChargeLineItem(
            description=vehicle_description(
                to_minor_units(charges.daily_rate), days, reconciliation.has_adjustments
            ),
            amount=from_minor_units(reconciliation.vehicle_cents),
            category="vehicle",
        )
    )

    protection = totals.protection_rate
    if protection is not None:
        description = f"{protection.label} ({format_amount(protection.daily_rate)}/day × {_days_label(days)})"
    else:
        description = "No Coverage"
    items.append(
        ChargeLineItem(
            description=description,
            amount=from_minor_units(totals.protection),
            category="protection",
        )
    )

    for add_on, cents in zip(charges.add_ons, totals.add_on_lines):
        items.append(
            ChargeLineItem(
                description=add_on_description(add_on.name, add_on.quantity),
                amount=from_minor_units(cents),
                quantity=add_on.quantity,
                category="add_on",
            )
        )

    for index, (driver, cents) in enumerate(zip(charges.drivers, totals.driver_lines), start=1):
        items.append(
            ChargeLineItem(
                description=driver_description(driver, index, days, resolver),
                amount=from_minor_units(cents),
                category="driver",
            )
        )

    if totals.young_driver > 0:
        items.append(
            ChargeLineItem(
                description=_fee_with_rate("Young Renter Fee", totals.young_driver, days),
                amount=from_minor_units(totals.young_driver),
                category="young_driver",
            )
        )

    if totals.dropoff > 0:
        items.append(
            ChargeLineItem(
                description="Different Drop-off Location Fee",
                amount=from_minor_units(totals.dropoff),
                category="dropoff",
            )
        )

    if totals.delivery > 0:
        items.append(
            ChargeLineItem(
                description="Delivery Fee",
                amount=from_minor_units(totals.delivery),
                category="delivery",
            )
        )

    if totals.upgrade > 0:
        upgrade_daily = to_minor_units(charges.upgrade_daily_fee)
        items.append(
            ChargeLineItem(
                description=f"Upgrade ({format_money(upgrade_daily)}/day × {_days_label(days)})",
                amount=from_minor_units(totals.upgrade),
                category="upgrade",
            )
        )

    for fee, cents in zip(resolver.regulatory_fees(), totals.regulatory_lines):
        items.append(
            ChargeLineItem(
                description=f"{fee.code} ({format_amount(fee.daily_fee)}/day × {_days_label(days)})",
                amount=from_minor_units(cents),
                category="regulatory",
            )
        )

    return items


def sum_line_items(items: List[ChargeLineItem]) -> int:
    """Total of line item amounts in cents"""
    return sum(to_minor_units(item.amount) for item in items)


def find_line(items: List[ChargeLineItem], category: str) -> Optional[ChargeLineItem]:
    for item in items:
        if item.category == category:
            return item
    return None
