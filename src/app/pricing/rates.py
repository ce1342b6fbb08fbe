"""Rate & Fee Resolver

Resolves protection-plan, additional-driver and regulatory daily rates.
Defaults come from ApplicationConfig; driver rates can be overridden by
system_settings rows, and a failure to read those rows falls back to the
defaults so fee resolution never blocks document generation.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Awaitable, Callable, Dict, List, Optional
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

YOUNG_AGE_BAND = "20_24"

PROTECTION_PLAN_LABELS: Dict[str, str] = {
    "premium": "All Inclusive Coverage",
    "smart": "Smart Coverage",
    "basic": "Basic Coverage",
    "none": "No Coverage",
}

# First key wins; the second is the pre-rename key still present on older installs
STANDARD_DRIVER_RATE_KEYS = ("additional_driver_daily_rate_standard", "additional_driver_daily_rate")
YOUNG_DRIVER_RATE_KEYS = ("additional_driver_daily_rate_young", "young_additional_driver_daily_rate")
RATE_SETTING_KEYS = STANDARD_DRIVER_RATE_KEYS + YOUNG_DRIVER_RATE_KEYS


class ProtectionRate(BaseModel):
    """Resolved protection plan for a booking"""

    plan_id: str
    label: str
    daily_rate: Decimal
    group: int

    class Config:
        frozen = True


class RegulatoryFee(BaseModel):
    """Fixed per-rental-day surcharge"""

    code: str
    daily_fee: Decimal

    class Config:
        frozen = True


class RateTable(BaseModel):
    """
    Rate configuration for one render request

    Built from ApplicationConfig (documented defaults) and optionally
    overlaid with system_settings values.
    """

    protection_group_rates: Dict[int, Dict[str, Decimal]] = Field(
        ...,
        description="Daily protection rate by pricing group and plan"
    )
    driver_rate_standard: Decimal = Field(..., description="Additional driver daily rate, 25+")
    driver_rate_young: Decimal = Field(..., description="Additional driver daily rate, 20-24")
    pvrt_daily_fee: Decimal = Field(..., description="PVRT per rental day")
    acsrch_daily_fee: Decimal = Field(..., description="ACSRCH per rental day")
    pst_rate: Decimal = Field(..., description="Provincial sales tax rate (primary)")
    gst_rate: Decimal = Field(..., description="Goods and services tax rate (secondary)")
    sanity_multiplier: int = Field(
        default=10,
        description="Reconciled vehicle charge may be at most this many times rate x days"
    )
    tolerance_cents: int = Field(
        default=1,
        description="Allowed |itemized - subtotal| before a breakdown is unbalanced"
    )
    currency: str = Field(default="CAD")

    class Config:
        frozen = True

    @classmethod
    def from_config(cls, config) -> "RateTable":
        """Build the default table from an ApplicationConfig-like object"""
        group_rates = {
            int(group): {plan: Decimal(str(rate)) for plan, rate in plans.items()}
            for group, plans in config.PROTECTION_GROUP_RATES.items()
        }
        return cls(
            protection_group_rates=group_rates,
            driver_rate_standard=Decimal(str(config.ADDITIONAL_DRIVER_DAILY_RATE_STANDARD)),
            driver_rate_young=Decimal(str(config.ADDITIONAL_DRIVER_DAILY_RATE_YOUNG)),
            pvrt_daily_fee=Decimal(str(config.PVRT_DAILY_FEE)),
            acsrch_daily_fee=Decimal(str(config.ACSRCH_DAILY_FEE)),
            pst_rate=Decimal(str(config.PST_RATE)),
            gst_rate=Decimal(str(config.GST_RATE)),
            sanity_multiplier=int(config.RECONCILIATION_SANITY_MULTIPLIER),
            tolerance_cents=int(config.SUBTOTAL_TOLERANCE_CENTS),
            currency=config.CURRENCY,
        )

    def with_settings(self, settings: Dict[str, str]) -> "RateTable":
        """Overlay driver rates from system_settings values"""
        standard = _first_rate(settings, STANDARD_DRIVER_RATE_KEYS)
        young = _first_rate(settings, YOUNG_DRIVER_RATE_KEYS)
        return self.model_copy(
            update={
                "driver_rate_standard": standard if standard is not None else self.driver_rate_standard,
                "driver_rate_young": young if young is not None else self.driver_rate_young,
            }
        )


def _first_rate(settings: Dict[str, str], keys) -> Optional[Decimal]:
    for key in keys:
        raw = settings.get(key)
        if raw is None:
            continue
        try:
            rate = Decimal(str(raw).strip())
        except InvalidOperation:
            logger.warning(f"Ignoring non-numeric rate setting {key}={raw!r}")
            continue
        if rate > 0:
            return rate
    return None


def protection_group_for(category_name: Optional[str]) -> int:
    """
    Map a vehicle category to its protection pricing group

    Group 3: Large SUV. Group 2: Minivan, Standard SUV. Group 1: everything
    else, including an unknown category.
    """
    if not category_name:
        return 1
    name = category_name.upper()
    if "LARGE" in name and "SUV" in name:
        return 3
    if "MINIVAN" in name:
        return 2
    if "STANDARD" in name and "SUV" in name:
        return 2
    return 1


class RateResolver:
    """Looks up daily rates against a RateTable"""

    def __init__(self, table: RateTable):
        self.table = table

    def resolve_protection_rate(
        self, plan_id: Optional[str], category_name: Optional[str]
    ) -> Optional[ProtectionRate]:
        """
        Resolve the protection plan daily rate for a vehicle category

        Returns None when no plan is selected or the plan is unknown.
        """
        if not plan_id or plan_id == "none":
            return None
        group = protection_group_for(category_name)
        rates = self.table.protection_group_rates.get(group) or self.table.protection_group_rates.get(1, {})
        rate = rates.get(plan_id)
        if rate is None:
            logger.warning(f"Unknown protection plan '{plan_id}' for category '{category_name}'")
            return None
        return ProtectionRate(
            plan_id=plan_id,
            label=PROTECTION_PLAN_LABELS.get(plan_id, plan_id.title()),
            daily_rate=rate,
            group=group,
        )

    def resolve_driver_rate(self, age_band: Optional[str]) -> Decimal:
        """Additional driver daily rate for an age band (young or standard)"""
        if age_band == YOUNG_AGE_BAND:
            return self.table.driver_rate_young
        return self.table.driver_rate_standard

    def regulatory_fees(self) -> List[RegulatoryFee]:
        """Regulatory per-day fees in display order"""
        return [
            RegulatoryFee(code="PVRT", daily_fee=self.table.pvrt_daily_fee),
            RegulatoryFee(code="ACSRCH", daily_fee=self.table.acsrch_daily_fee),
        ]


SettingsFetcher = Callable[[List[str]], Awaitable[Dict[str, str]]]


async def load_rate_table(fetch_settings: SettingsFetcher, defaults: RateTable) -> RateTable:
    """
    Load the rate table for a render request

    Any failure reading system_settings is logged and the defaults are used.
    """
    try:
        settings = await fetch_settings(list(RATE_SETTING_KEYS))
    except Exception as e:
        logger.warning(f"Rate settings unavailable, using configured defaults: {e}")
        return defaults
    return defaults.with_settings(settings)
