"""Charge engine value objects

Inputs (BookingCharges) are built from a persisted booking and its joined
rows; outputs (ChargeLineItem, TaxBreakdown, ChargeBreakdown) are derived
fresh on every request and only persisted inside a document snapshot.
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from .rates import ProtectionRate


class AddOnCharge(BaseModel):
    """Persisted add-on line: price is the line total"""

    name: str = "Add-on"
    price: Decimal = Decimal("0")
    quantity: int = 1


class DriverCharge(BaseModel):
    """Registered additional driver"""

    name: Optional[str] = None
    age_band: Optional[str] = None
    fee_override: Optional[Decimal] = None


class BookingCharges(BaseModel):
    """Everything the charge engine reads from a booking"""

    booking_code: str = ""
    total_days: int = 0
    daily_rate: Decimal = Decimal("0")
    vehicle_category: Optional[str] = None
    protection_plan: Optional[str] = None
    add_ons: List[AddOnCharge] = Field(default_factory=list)
    drivers: List[DriverCharge] = Field(default_factory=list)
    young_driver_fee: Optional[Decimal] = None
    different_dropoff_fee: Optional[Decimal] = None
    delivery_fee: Optional[Decimal] = None
    upgrade_daily_fee: Optional[Decimal] = None
    subtotal: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    deposit_amount: Optional[Decimal] = None


class ChargeLineItem(BaseModel):
    """One itemized charge row"""

    description: str
    amount: Decimal
    quantity: Optional[int] = None
    category: str = Field(
        default="other",
        description="vehicle, protection, add_on, driver, young_driver, dropoff, delivery, upgrade, regulatory"
    )


class TaxBreakdown(BaseModel):
    """Two tax components that always sum to the persisted tax total"""

    primary_label: str = "PST"
    primary_rate: Decimal
    primary_amount: Decimal
    secondary_label: str = "GST"
    secondary_rate: Decimal
    secondary_amount: Decimal
    total: Decimal


class ReconciliationResult(BaseModel):
    """Outcome of resolving the vehicle charge against the persisted subtotal"""

    vehicle_cents: int
    naive_base_cents: int
    remainder_cents: int
    used_remainder: bool
    extras_likely_missing: bool = False

    @property
    def has_adjustments(self) -> bool:
        """The reconciled vehicle charge differs from rate x days"""
        return self.used_remainder and self.remainder_cents != self.naive_base_cents

    @property
    def fell_back(self) -> bool:
        return not self.used_remainder


class ChargeBreakdown(BaseModel):
    """Itemized, reconciled charges for one booking"""

    booking_code: str
    total_days: int
    daily_rate: Decimal
    currency: str
    line_items: List[ChargeLineItem]
    protection: Optional[ProtectionRate] = None
    vehicle_total: Decimal
    add_ons_total: Decimal
    drivers_total: Decimal
    regulatory_total: Decimal
    subtotal: Decimal
    itemized_total: Decimal
    discrepancy: Decimal
    is_balanced: bool
    taxes: TaxBreakdown
    grand_total: Decimal
    deposit: Decimal
    reconciliation: ReconciliationResult
