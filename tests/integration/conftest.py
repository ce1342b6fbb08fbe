import pytest_asyncio
from datetime import datetime
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.depends import get_asset_service, get_session, get_session_factory
from src.domain import (
    AddOn,
    Booking,
    BookingAddOn,
    CustomerProfile,
    Location,
    SystemSetting,
    VehicleCategory,
)

BOOKING_ID = "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20"


class NoAssetService:
    """Asset service that never finds an image"""

    async def fetch_logo(self):
        return None

    async def fetch_image(self, url):
        return None


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database file for each test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_booking(db_session):
    """
    3-day Economy booking at $50/day with a $30 child seat

    Subtotal $200 (staff-adjusted), tax $24, total $224, deposit $250.
    """
    db_session.add(CustomerProfile(id="profile_1", full_name="Jane Doe", email="jane@example.com", phone="604-555-0100"))
    db_session.add(
        VehicleCategory(id="cat_1", name="Economy", fuel_type="Gasoline", transmission="Automatic", seats=5)
    )
    db_session.add(Location(id="loc_1", name="Surrey Downtown", address="10355 King George Blvd", city="Surrey"))
    db_session.add(AddOn(id="addon_1", name="Child Seat", daily_rate=Decimal("10.00")))
    booking = Booking(
        id=BOOKING_ID,
        booking_code="C2C-0001",
        user_id="profile_1",
        vehicle_category_id="cat_1",
        location_id="loc_1",
        start_at=datetime(2025, 3, 6, 9, 45),
        end_at=datetime(2025, 3, 9, 9, 45),
        total_days=3,
        daily_rate=Decimal("50.00"),
        protection_plan="none",
        subtotal=Decimal("200.00"),
        tax_amount=Decimal("24.00"),
        total_amount=Decimal("224.00"),
        deposit_amount=Decimal("250.00"),
        created_at=datetime(2025, 3, 1),
        updated_at=datetime(2025, 3, 1),
    )
    db_session.add(booking)
    await db_session.flush()
    db_session.add(
        BookingAddOn(
            booking_id=BOOKING_ID,
            add_on_id="addon_1",
            price=Decimal("30.00"),
            quantity=1,
            created_at=datetime(2025, 3, 1),
        )
    )
    db_session.add(SystemSetting(key="additional_driver_daily_rate_standard", value="14.99", updated_at=datetime(2025, 1, 1)))
    await db_session.commit()
    return booking


@pytest_asyncio.fixture
async def client(db_session, session_factory):
    """Create test client with database and asset overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_asset_service] = NoAssetService

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
