"""Unit tests for rate and fee resolution"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from config import ApplicationConfig
from src.app.pricing.rates import RateResolver, RateTable, load_rate_table, protection_group_for


class TestProtectionGroups:
    @pytest.mark.parametrize(
        "category,group",
        [
            ("Large SUV", 3),
            ("large suv (7 seats)", 3),
            ("Minivan", 2),
            ("Standard SUV", 2),
            ("Compact", 1),
            ("Standard Sedan", 1),
            (None, 1),
            ("", 1),
        ],
    )
    def test_category_to_group(self, category, group):
        assert protection_group_for(category) == group


class TestRateResolver:
    def test_resolve_protection_rate(self, rate_table):
        rate = RateResolver(rate_table).resolve_protection_rate("smart", "Minivan")

        assert rate.daily_rate == Decimal("57.99")
        assert rate.label == "Smart Coverage"
        assert rate.group == 2

    @pytest.mark.parametrize("plan", [None, "", "none", "platinum"])
    def test_no_or_unknown_plan(self, rate_table, plan):
        assert RateResolver(rate_table).resolve_protection_rate(plan, "Compact") is None

    def test_driver_rate_by_age_band(self, rate_table):
        resolver = RateResolver(rate_table)

        assert resolver.resolve_driver_rate("20_24") == Decimal("19.99")
        assert resolver.resolve_driver_rate("25_70") == Decimal("14.99")
        assert resolver.resolve_driver_rate(None) == Decimal("14.99")

    def test_regulatory_fee_order(self, rate_table):
        fees = RateResolver(rate_table).regulatory_fees()

        assert [fee.code for fee in fees] == ["PVRT", "ACSRCH"]


class TestRateTable:
    def test_from_config_defaults(self):
        table = RateTable.from_config(ApplicationConfig)

        assert table.pst_rate == Decimal("0.07")
        assert table.gst_rate == Decimal("0.05")
        assert table.pvrt_daily_fee == Decimal("1.50")
        assert table.protection_group_rates[1]["basic"] == Decimal("32.99")

    def test_settings_override_driver_rates(self, rate_table):
        table = rate_table.with_settings(
            {
                "additional_driver_daily_rate_standard": "12.50",
                "young_additional_driver_daily_rate": "17.00",
            }
        )

        assert table.driver_rate_standard == Decimal("12.50")
        assert table.driver_rate_young == Decimal("17.00")

    def test_current_key_wins_over_legacy_key(self, rate_table):
        table = rate_table.with_settings(
            {"additional_driver_daily_rate_standard": "13.00", "additional_driver_daily_rate": "11.00"}
        )

        assert table.driver_rate_standard == Decimal("13.00")

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_unusable_settings_are_ignored(self, rate_table, raw):
        table = rate_table.with_settings({"additional_driver_daily_rate_standard": raw})

        assert table.driver_rate_standard == Decimal("14.99")


@pytest.mark.asyncio
class TestLoadRateTable:
    async def test_overlays_fetched_settings(self, rate_table):
        fetch = AsyncMock(return_value={"additional_driver_daily_rate_young": "21.00"})

        table = await load_rate_table(fetch, rate_table)

        assert table.driver_rate_young == Decimal("21.00")
        fetch.assert_awaited_once()

    async def test_fetch_failure_falls_back_to_defaults(self, rate_table):
        fetch = AsyncMock(side_effect=RuntimeError("settings table unavailable"))

        table = await load_rate_table(fetch, rate_table)

        assert table == rate_table
