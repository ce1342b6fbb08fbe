"""Tax Splitter

Reconstructs the two tax components from the single persisted tax total.
The secondary component is always the remainder, so the pair sums to the
persisted total exactly.
"""

from decimal import Decimal
from typing import Tuple

from .money import apply_rate, from_minor_units
from .models import TaxBreakdown


def split_tax(subtotal_cents: int, tax_total_cents: int, primary_rate: Decimal) -> Tuple[int, int]:
    """
    Split a persisted tax total into (primary, secondary) cents

    primary = round_half_up(subtotal x primary_rate)
    secondary = tax_total - primary
    """
    primary = apply_rate(subtotal_cents, primary_rate)
    return primary, tax_total_cents - primary


def build_tax_breakdown(
    subtotal_cents: int,
    tax_total_cents: int,
    primary_rate: Decimal,
    secondary_rate: Decimal,
    primary_label: str = "PST",
    secondary_label: str = "GST",
) -> TaxBreakdown:
    primary, secondary = split_tax(subtotal_cents, tax_total_cents, primary_rate)
    return TaxBreakdown(
        primary_label=primary_label,
        primary_rate=primary_rate,
        primary_amount=from_minor_units(primary),
        secondary_label=secondary_label,
        secondary_rate=secondary_rate,
        secondary_amount=from_minor_units(secondary),
        total=from_minor_units(tax_total_cents),
    )
