from .breakdown import compute_charge_breakdown
from .calculator import CategoryTotals, compute_category_totals
from .models import (
    AddOnCharge,
    BookingCharges,
    ChargeBreakdown,
    ChargeLineItem,
    DriverCharge,
    ReconciliationResult,
    TaxBreakdown,
)
from .money import format_amount, format_money, from_minor_units, to_minor_units
from .rates import ProtectionRate, RateResolver, RateTable, load_rate_table
from .reconciliation import reconcile_vehicle_charge
from .tax import build_tax_breakdown, split_tax

__all__ = [
    "AddOnCharge",
    "BookingCharges",
    "CategoryTotals",
    "ChargeBreakdown",
    "ChargeLineItem",
    "DriverCharge",
    "ProtectionRate",
    "RateResolver",
    "RateTable",
    "ReconciliationResult",
    "TaxBreakdown",
    "build_tax_breakdown",
    "compute_category_totals",
    "compute_charge_breakdown",
    "format_amount",
    "format_money",
    "from_minor_units",
    "load_rate_table",
    "reconcile_vehicle_charge",
    "split_tax",
    "to_minor_units",
]
