"""Unit tests for BookingRecordLoader

Tests cover:
- Missing booking is reported as None
- Secondary reads degrade to placeholders
- Rate settings overlay and fallback
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.documents.booking_record import BookingRecordLoader
from src.app.documents.payloads import NOT_AVAILABLE
from src.domain.additional_driver import AdditionalDriver
from src.domain.booking_add_on import AddOn, BookingAddOn
from src.domain.reference_data import CustomerProfile, Location, VehicleCategory


@pytest.fixture
def mock_reader(sample_booking):
    reader = MagicMock()
    reader.get_booking = AsyncMock(return_value=sample_booking)
    reader.get_profile = AsyncMock(
        return_value=CustomerProfile(id="profile_1", full_name="Jane Doe", email="jane@example.com")
    )
    reader.get_vehicle_category = AsyncMock(return_value=VehicleCategory(id="cat_1", name="Economy"))
    reader.get_add_ons = AsyncMock(
        return_value=[
            (
                BookingAddOn(booking_id=sample_booking.id, add_on_id="ao_1", price=Decimal("58.00"), quantity=2),
                AddOn(id="ao_1", name="Child Seat"),
            ),
            (BookingAddOn(booking_id=sample_booking.id, add_on_id=None, price=Decimal("10.00"), quantity=1), None),
        ]
    )
    reader.get_additional_drivers = AsyncMock(
        return_value=[AdditionalDriver(booking_id=sample_booking.id, driver_name="Sam", driver_age_band="20_24")]
    )
    reader.get_location = AsyncMock(return_value=Location(id="loc_1", name="Surrey Downtown", city="Surrey"))
    reader.get_setting_values = AsyncMock(return_value={})
    return reader


@pytest.mark.asyncio
class TestBookingRecordLoader:
    async def test_missing_booking_returns_none(self, mock_reader, rate_table):
        mock_reader.get_booking = AsyncMock(return_value=None)

        record = await BookingRecordLoader(mock_reader, rate_table).load("missing")

        assert record is None
        mock_reader.get_profile.assert_not_called()

    async def test_loads_joined_records(self, mock_reader, rate_table, sample_booking):
        record = await BookingRecordLoader(mock_reader, rate_table).load(sample_booking.id)

        assert record.booking is sample_booking
        assert record.customer_info().name == "Jane Doe"
        assert record.vehicle_info().category == "Economy"
        assert [(a.name, a.price, a.quantity) for a in record.add_ons] == [
            ("Child Seat", Decimal("58.00"), 2),
            ("Add-on", Decimal("10.00"), 1),
        ]
        assert record.drivers[0].driver_name == "Sam"

    async def test_return_location_defaults_to_pickup(self, mock_reader, rate_table, sample_booking):
        record = await BookingRecordLoader(mock_reader, rate_table).load(sample_booking.id)

        locations = record.location_info()
        assert locations.pickup == "Surrey Downtown, Surrey"
        assert locations.same_return is True

    async def test_failed_secondary_reads_degrade(self, mock_reader, rate_table, sample_booking, caplog):
        mock_reader.get_profile = AsyncMock(side_effect=RuntimeError("connection reset"))
        mock_reader.get_add_ons = AsyncMock(side_effect=RuntimeError("connection reset"))
        mock_reader.get_location = AsyncMock(side_effect=RuntimeError("connection reset"))

        with caplog.at_level("WARNING"):
            record = await BookingRecordLoader(mock_reader, rate_table).load(sample_booking.id)

        assert record is not None
        assert record.customer_info().name == NOT_AVAILABLE
        assert record.add_ons == []
        assert record.location_info().pickup == NOT_AVAILABLE
        assert "profile" in caplog.text

    async def test_email_as_name_is_hidden(self, mock_reader, rate_table, sample_booking):
        mock_reader.get_profile = AsyncMock(
            return_value=CustomerProfile(id="profile_1", full_name="jane@example.com", email="jane@example.com")
        )

        record = await BookingRecordLoader(mock_reader, rate_table).load(sample_booking.id)

        assert record.customer_info().name == NOT_AVAILABLE
        assert record.customer_info().email == "jane@example.com"

    async def test_rate_settings_overlay(self, mock_reader, rate_table, sample_booking):
        mock_reader.get_setting_values = AsyncMock(return_value={"additional_driver_daily_rate_young": "22.00"})

        record = await BookingRecordLoader(mock_reader, rate_table).load(sample_booking.id)

        assert record.rate_table.driver_rate_young == Decimal("22.00")

    async def test_rate_settings_failure_uses_defaults(self, mock_reader, rate_table, sample_booking):
        mock_reader.get_setting_values = AsyncMock(side_effect=RuntimeError("timeout"))

        record = await BookingRecordLoader(mock_reader, rate_table).load(sample_booking.id)

        assert record.rate_table.driver_rate_young == Decimal("19.99")
