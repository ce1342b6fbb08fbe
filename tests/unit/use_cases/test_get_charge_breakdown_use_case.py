"""Unit tests for GetChargeBreakdown use case

Tests cover:
- Itemized breakdown for an existing booking
- Missing booking
- Unexpected loader failure
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.documents import GetChargeBreakdown


@pytest.mark.asyncio
class TestGetChargeBreakdown:
    async def test_breakdown_success(self, mock_record_loader, sample_booking):
        """
        Given: A 3-day booking with a delivery fee
        When: The breakdown is requested
        Then: Line items sum to the persisted subtotal
        """
        result = await GetChargeBreakdown(mock_record_loader).execute(sample_booking.id)

        assert result.is_ok()
        breakdown = result.value
        assert breakdown.booking_code == "C2C-0001"
        assert breakdown.subtotal == Decimal("200.00")
        assert sum(item.amount for item in breakdown.line_items) == breakdown.subtotal
        assert breakdown.is_balanced is True
        assert breakdown.discrepancy == Decimal("0.00")
        assert breakdown.grand_total == Decimal("224.00")
        assert breakdown.taxes.total == Decimal("24.00")

    async def test_booking_not_found(self, mock_record_loader):
        mock_record_loader.load = AsyncMock(return_value=None)

        result = await GetChargeBreakdown(mock_record_loader).execute("missing")

        assert result.is_err()
        assert result.error.code == "BOOKING_NOT_FOUND"

    async def test_unexpected_failure(self, mock_record_loader):
        mock_record_loader.load = AsyncMock(side_effect=RuntimeError("database unavailable"))

        result = await GetChargeBreakdown(mock_record_loader).execute("booking")

        assert result.is_err()
        assert result.error.code == "BREAKDOWN_FAILED"
        assert "database unavailable" in result.error.reason
