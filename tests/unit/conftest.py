import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.pricing.rates import RateTable
from src.domain.booking import Booking


@pytest.fixture
def mock_uow():
    """Mock unit of work with async commit/rollback"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def rate_table():
    """Rate table with the documented default rates"""
    return RateTable(
        protection_group_rates={
            1: {"basic": Decimal("32.99"), "smart": Decimal("37.99"), "premium": Decimal("49.99")},
            2: {"basic": Decimal("52.99"), "smart": Decimal("57.99"), "premium": Decimal("69.99")},
            3: {"basic": Decimal("64.99"), "smart": Decimal("69.99"), "premium": Decimal("82.99")},
        },
        driver_rate_standard=Decimal("14.99"),
        driver_rate_young=Decimal("19.99"),
        pvrt_daily_fee=Decimal("1.50"),
        acsrch_daily_fee=Decimal("1.00"),
        pst_rate=Decimal("0.07"),
        gst_rate=Decimal("0.05"),
    )


@pytest.fixture
def fee_free_rate_table(rate_table):
    """Rate table without regulatory fees, for isolating other categories"""
    return rate_table.model_copy(
        update={"pvrt_daily_fee": Decimal("0"), "acsrch_daily_fee": Decimal("0")}
    )


@pytest.fixture
def sample_booking():
    """3-day Economy booking, $50/day, subtotal $200 with a $52.50 delivery fee"""
    return Booking(
        id="6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
        booking_code="C2C-0001",
        user_id="profile_1",
        vehicle_category_id="cat_1",
        location_id="loc_1",
        start_at=datetime(2025, 3, 6, 9, 45),
        end_at=datetime(2025, 3, 9, 9, 45),
        total_days=3,
        daily_rate=Decimal("50.00"),
        protection_plan="none",
        delivery_fee=Decimal("52.50"),
        subtotal=Decimal("200.00"),
        tax_amount=Decimal("24.00"),
        total_amount=Decimal("224.00"),
        deposit_amount=Decimal("250.00"),
        created_at=datetime(2025, 3, 1),
        updated_at=datetime(2025, 3, 1),
    )


@pytest.fixture
def sample_record(sample_booking, rate_table):
    """Fully loaded record for sample_booking"""
    from src.app.documents.booking_record import BookingRecord
    from src.domain.reference_data import CustomerProfile, Location, VehicleCategory

    return BookingRecord(
        booking=sample_booking,
        rate_table=rate_table,
        profile=CustomerProfile(id="profile_1", full_name="Jane Doe", email="jane@example.com", phone="604-555-0100"),
        category=VehicleCategory(
            id="cat_1", name="Economy", fuel_type="Gasoline", transmission="Automatic", seats=5, tank_capacity_liters=45
        ),
        pickup=Location(id="loc_1", name="Surrey Downtown", address="10355 King George Blvd", city="Surrey"),
    )


@pytest.fixture
def mock_record_loader(sample_record):
    """Record loader returning sample_record"""
    loader = MagicMock()
    loader.load = AsyncMock(return_value=sample_record)
    return loader


@pytest.fixture
def mock_asset_service():
    """Asset service with no logo and no signature image"""
    service = MagicMock()
    service.fetch_logo = AsyncMock(return_value=None)
    service.fetch_image = AsyncMock(return_value=None)
    return service
