"""Cent-Precision Calculator

Computes independent integer-cent totals per charge category.
"""

from typing import List, Optional
from pydantic import BaseModel

from .money import to_minor_units
from .models import BookingCharges, DriverCharge
from .rates import ProtectionRate, RateResolver


class CategoryTotals(BaseModel):
    """Per-category totals in cents"""

    vehicle_base: int
    protection: int
    protection_rate: Optional[ProtectionRate] = None
    add_on_lines: List[int]
    driver_lines: List[int]
    young_driver: int
    dropoff: int
    delivery: int
    upgrade: int
    regulatory_lines: List[int]

    @property
    def add_ons(self) -> int:
        return sum(self.add_on_lines)

    @property
    def drivers(self) -> int:
        return sum(self.driver_lines)

    @property
    def regulatory(self) -> int:
        return sum(self.regulatory_lines)

    @property
    def non_vehicle(self) -> int:
        """Every category except the vehicle rental itself"""
        return (
            self.protection
            + self.add_ons
            + self.drivers
            + self.young_driver
            + self.dropoff
            + self.delivery
            + self.upgrade
            + self.regulatory
        )


def driver_charge_cents(driver: DriverCharge, days: int, resolver: RateResolver) -> int:
    """Positive explicit override wins; otherwise age band rate x days"""
    override = to_minor_units(driver.fee_override)
    if override > 0:
        return override
    return to_minor_units(resolver.resolve_driver_rate(driver.age_band)) * days


def compute_category_totals(charges: BookingCharges, resolver: RateResolver) -> CategoryTotals:
    """
    Compute integer-cent totals for every charge category of a booking

    Add-ons are summed as persisted and never recomputed from a rate table.
    """
    days = max(charges.total_days, 0)

    protection_rate = resolver.resolve_protection_rate(
        charges.protection_plan, charges.vehicle_category
    )
    protection = to_minor_units(protection_rate.daily_rate) * days if protection_rate else 0

    upgrade_daily = to_minor_units(charges.upgrade_daily_fee)

    return CategoryTotals(
        vehicle_base=to_minor_units(charges.daily_rate) * days,
        protection=protection,
        protection_rate=protection_rate,
        add_on_lines=[to_minor_units(a.price) for a in charges.add_ons],
        driver_lines=[driver_charge_cents(d, days, resolver) for d in charges.drivers],
        young_driver=to_minor_units(charges.young_driver_fee),
        dropoff=to_minor_units(charges.different_dropoff_fee),
        delivery=to_minor_units(charges.delivery_fee),
        upgrade=upgrade_daily * days if upgrade_daily > 0 else 0,
        regulatory_lines=[to_minor_units(fee.daily_fee) * days for fee in resolver.regulatory_fees()],
    )
