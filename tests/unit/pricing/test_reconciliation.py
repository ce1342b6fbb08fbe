"""Unit tests for vehicle charge reconciliation

Tests cover:
- Worked example: remainder within bound becomes the vehicle line
- Both sides of the zero and sanity-multiplier thresholds
- Missing-extras diagnostic threshold (1.5x base)
"""

import pytest

from src.app.pricing.reconciliation import reconcile_vehicle_charge


class TestRemainderSelection:
    def test_worked_example_uses_remainder(self):
        """
        Given: $50/day x 3 days, subtotal $200, other categories $60
        When: the vehicle charge is reconciled
        Then: the vehicle line is $140 (remainder), not $150
        """
        result = reconcile_vehicle_charge(
            persisted_subtotal_cents=20000,
            non_vehicle_cents=6000,
            naive_base_cents=15000,
        )

        assert result.used_remainder is True
        assert result.vehicle_cents == 14000
        assert result.remainder_cents == 14000
        assert result.has_adjustments is True
        assert result.fell_back is False

    def test_remainder_equal_to_base_has_no_adjustments(self):
        result = reconcile_vehicle_charge(21000, 6000, 15000)

        assert result.vehicle_cents == 15000
        assert result.used_remainder is True
        assert result.has_adjustments is False

    @pytest.mark.parametrize(
        "remainder,used",
        [(-1, False), (0, False), (1, True)],
    )
    def test_lower_bound(self, remainder, used):
        result = reconcile_vehicle_charge(6000 + remainder, 6000, 15000)

        assert result.used_remainder is used
        assert result.vehicle_cents == (remainder if used else 15000)

    @pytest.mark.parametrize(
        "remainder,used",
        [(150000, True), (150001, False)],
    )
    def test_upper_bound_is_ten_times_base(self, remainder, used):
        result = reconcile_vehicle_charge(remainder, 0, 15000)

        assert result.used_remainder is used
        assert result.vehicle_cents == (remainder if used else 15000)

    def test_multiplier_is_configurable(self):
        result = reconcile_vehicle_charge(30001, 0, 15000, sanity_multiplier=2)

        assert result.used_remainder is False
        assert result.vehicle_cents == 15000

    def test_zero_rate_booking_cannot_use_remainder(self):
        result = reconcile_vehicle_charge(5000, 0, 0)

        assert result.used_remainder is False
        assert result.vehicle_cents == 0

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            reconcile_vehicle_charge(1000, 2000, 15000, booking_code="C2C-0042")

        assert "C2C-0042" in caplog.text


class TestMissingExtrasDiagnostic:
    @pytest.mark.parametrize(
        "remainder,expected",
        [(15000, False), (15001, True)],
    )
    def test_threshold_is_one_and_a_half_base(self, remainder, expected):
        result = reconcile_vehicle_charge(remainder, 0, 10000, has_itemized_extras=False)

        assert result.extras_likely_missing is expected

    def test_not_flagged_when_extras_rows_exist(self):
        result = reconcile_vehicle_charge(50000, 0, 10000, has_itemized_extras=True)

        assert result.extras_likely_missing is False
