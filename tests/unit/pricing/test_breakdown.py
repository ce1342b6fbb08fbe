"""Unit tests for charge breakdown computation

Tests cover:
- Worked examples (reconciled vehicle line, tax split, add-on quantity)
- Fixed line ordering and always-present protection/regulatory lines
- Additional driver pricing and fee overrides
- Sum invariant and fallback reporting
"""

import pytest
from decimal import Decimal

from src.app.pricing.breakdown import compute_charge_breakdown
from src.app.pricing.line_items import find_line, sum_line_items
from src.app.pricing.models import AddOnCharge, BookingCharges, DriverCharge


@pytest.fixture
def worked_example():
    """$50/day x 3, delivery $52.50, regulatory $7.50, subtotal $200"""
    return BookingCharges(
        booking_code="C2C-0001",
        total_days=3,
        daily_rate=Decimal("50.00"),
        vehicle_category="Economy",
        protection_plan="none",
        delivery_fee=Decimal("52.50"),
        subtotal=Decimal("200.00"),
        tax_amount=Decimal("24.00"),
        total_amount=Decimal("224.00"),
        deposit_amount=Decimal("250.00"),
    )


class TestWorkedExamples:
    def test_vehicle_line_is_reconciled_remainder(self, worked_example, rate_table):
        breakdown = compute_charge_breakdown(worked_example, rate_table)

        vehicle = find_line(breakdown.line_items, "vehicle")
        assert vehicle.amount == Decimal("140.00")
        assert vehicle.description == "Vehicle Rental (3 days, incl. surcharges/discounts)"
        assert breakdown.vehicle_total == Decimal("140.00")
        assert breakdown.reconciliation.used_remainder is True

    def test_tax_split(self, rate_table):
        charges = BookingCharges(
            booking_code="C2C-0002",
            total_days=2,
            daily_rate=Decimal("47.50"),
            subtotal=Decimal("100.00"),
            tax_amount=Decimal("12.00"),
            total_amount=Decimal("112.00"),
        )

        breakdown = compute_charge_breakdown(charges, rate_table)

        assert breakdown.taxes.primary_amount == Decimal("7.00")
        assert breakdown.taxes.secondary_amount == Decimal("5.00")
        assert breakdown.taxes.primary_amount + breakdown.taxes.secondary_amount == Decimal("12.00")

    def test_add_on_quantity_renders_single_persisted_line(self, fee_free_rate_table):
        charges = BookingCharges(
            booking_code="C2C-0003",
            total_days=2,
            daily_rate=Decimal("40.00"),
            add_ons=[AddOnCharge(name="Child Seat", price=Decimal("58.00"), quantity=2)],
            subtotal=Decimal("138.00"),
        )

        breakdown = compute_charge_breakdown(charges, fee_free_rate_table)

        add_ons = [item for item in breakdown.line_items if item.category == "add_on"]
        assert len(add_ons) == 1
        assert add_ons[0].description == "Child Seat ×2"
        assert add_ons[0].amount == Decimal("58.00")
        assert add_ons[0].quantity == 2


class TestLineItems:
    def test_fixed_order(self, rate_table):
        charges = BookingCharges(
            booking_code="C2C-0004",
            total_days=2,
            daily_rate=Decimal("60.00"),
            vehicle_category="Compact",
            protection_plan="basic",
            add_ons=[AddOnCharge(name="GPS", price=Decimal("20.00"))],
            drivers=[DriverCharge(name="Sam", age_band="25_70")],
            young_driver_fee=Decimal("30.00"),
            different_dropoff_fee=Decimal("75.00"),
            delivery_fee=Decimal("25.00"),
            upgrade_daily_fee=Decimal("10.00"),
            subtotal=Decimal("500.00"),
        )

        breakdown = compute_charge_breakdown(charges, rate_table)

        assert [item.category for item in breakdown.line_items] == [
            "vehicle",
            "protection",
            "add_on",
            "driver",
            "young_driver",
            "dropoff",
            "delivery",
            "upgrade",
            "regulatory",
            "regulatory",
        ]

    def test_protection_always_renders(self, worked_example, rate_table):
        breakdown = compute_charge_breakdown(worked_example, rate_table)

        protection = find_line(breakdown.line_items, "protection")
        assert protection.description == "No Coverage"
        assert protection.amount == Decimal("0.00")

    def test_protection_rate_by_category_group(self, rate_table):
        charges = BookingCharges(
            booking_code="C2C-0005",
            total_days=2,
            daily_rate=Decimal("100.00"),
            vehicle_category="Large SUV",
            protection_plan="premium",
            subtotal=Decimal("370.98"),
        )

        breakdown = compute_charge_breakdown(charges, rate_table)

        protection = find_line(breakdown.line_items, "protection")
        assert protection.amount == Decimal("165.98")
        assert protection.description == "All Inclusive Coverage ($82.99/day × 2 days)"
        assert breakdown.protection.group == 3

    def test_regulatory_lines(self, worked_example, rate_table):
        breakdown = compute_charge_breakdown(worked_example, rate_table)

        regulatory = [item for item in breakdown.line_items if item.category == "regulatory"]
        assert [item.description for item in regulatory] == [
            "PVRT ($1.50/day × 3 days)",
            "ACSRCH ($1.00/day × 3 days)",
        ]
        assert [item.amount for item in regulatory] == [Decimal("4.50"), Decimal("3.00")]
        assert breakdown.regulatory_total == Decimal("7.50")

    def test_driver_rates_and_override(self, fee_free_rate_table):
        charges = BookingCharges(
            booking_code="C2C-0006",
            total_days=3,
            daily_rate=Decimal("50.00"),
            drivers=[
                DriverCharge(name="Sam", age_band="20_24"),
                DriverCharge(name="", age_band="25_70"),
                DriverCharge(name="Alex", age_band="25_70", fee_override=Decimal("25.00")),
            ],
            subtotal=Decimal("279.94"),
        )

        breakdown = compute_charge_breakdown(charges, fee_free_rate_table)

        drivers = [item for item in breakdown.line_items if item.category == "driver"]
        assert [item.description for item in drivers] == [
            "Sam (Young $19.99/day × 3d)",
            "Driver 2 (Standard $14.99/day × 3d)",
            "Alex (Standard)",
        ]
        assert [item.amount for item in drivers] == [Decimal("59.97"), Decimal("44.97"), Decimal("25.00")]
        assert breakdown.drivers_total == Decimal("129.94")
        assert breakdown.vehicle_total == Decimal("150.00")
        assert breakdown.is_balanced is True

    def test_unadjusted_vehicle_description(self, fee_free_rate_table):
        charges = BookingCharges(
            booking_code="C2C-0007",
            total_days=1,
            daily_rate=Decimal("45.00"),
            subtotal=Decimal("45.00"),
        )

        breakdown = compute_charge_breakdown(charges, fee_free_rate_table)

        vehicle = find_line(breakdown.line_items, "vehicle")
        assert vehicle.description == "Vehicle Rental ($45.00/day × 1 day)"


class TestSumInvariant:
    @pytest.mark.parametrize(
        "subtotal",
        [Decimal("200.00"), Decimal("160.01"), Decimal("1559.99"), Decimal("60.01")],
    )
    def test_line_items_sum_to_subtotal_when_reconciled(self, worked_example, rate_table, subtotal):
        charges = worked_example.model_copy(update={"subtotal": subtotal})

        breakdown = compute_charge_breakdown(charges, rate_table)

        assert breakdown.reconciliation.used_remainder is True
        assert sum_line_items(breakdown.line_items) == int(subtotal * 100)
        assert breakdown.is_balanced is True
        assert breakdown.discrepancy == Decimal("0.00")

    def test_fallback_reports_discrepancy(self, worked_example, rate_table):
        charges = worked_example.model_copy(update={"subtotal": Decimal("50.00")})

        breakdown = compute_charge_breakdown(charges, rate_table)

        assert breakdown.reconciliation.fell_back is True
        assert breakdown.vehicle_total == Decimal("150.00")
        assert breakdown.itemized_total == Decimal("210.00")
        assert breakdown.discrepancy == Decimal("-160.00")
        assert breakdown.is_balanced is False

    def test_zero_total_is_derived(self, rate_table):
        charges = BookingCharges(
            booking_code="C2C-0008",
            total_days=2,
            daily_rate=Decimal("47.50"),
            subtotal=Decimal("100.00"),
            tax_amount=Decimal("12.00"),
            total_amount=Decimal("0"),
        )

        breakdown = compute_charge_breakdown(charges, rate_table)

        assert breakdown.grand_total == Decimal("112.00")
