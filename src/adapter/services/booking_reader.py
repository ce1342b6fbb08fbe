"""SQLAlchemy Booking Reader Implementation

Each read opens its own session from the factory, so the reads behind one
document can run concurrently without sharing an AsyncSession.
"""

from typing import Callable, Dict, List, Optional, Tuple
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories.booking_repository import SqlAlchemyBookingRepository
from src.adapter.repositories.reference_data_repository import SqlAlchemyReferenceDataRepository
from src.adapter.repositories.system_setting_repository import SqlAlchemySystemSettingRepository
from src.app.services.booking_reader import BookingReader
from src.domain.additional_driver import AdditionalDriver
from src.domain.booking import Booking
from src.domain.booking_add_on import AddOn, BookingAddOn
from src.domain.reference_data import CustomerProfile, Location, VehicleCategory


class SqlAlchemyBookingReader(BookingReader):
    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        async with self.session_factory() as session:
            return await SqlAlchemyBookingRepository(session).get_by_id(booking_id)

    async def get_add_ons(self, booking_id: str) -> List[Tuple[BookingAddOn, Optional[AddOn]]]:
        async with self.session_factory() as session:
            return await SqlAlchemyBookingRepository(session).get_add_ons(booking_id)

    async def get_additional_drivers(self, booking_id: str) -> List[AdditionalDriver]:
        async with self.session_factory() as session:
            return await SqlAlchemyBookingRepository(session).get_additional_drivers(booking_id)

    async def get_profile(self, profile_id: str) -> Optional[CustomerProfile]:
        async with self.session_factory() as session:
            return await SqlAlchemyReferenceDataRepository(session).get_profile(profile_id)

    async def get_vehicle_category(self, category_id: str) -> Optional[VehicleCategory]:
        async with self.session_factory() as session:
            return await SqlAlchemyReferenceDataRepository(session).get_vehicle_category(category_id)

    async def get_location(self, location_id: str) -> Optional[Location]:
        async with self.session_factory() as session:
            return await SqlAlchemyReferenceDataRepository(session).get_location(location_id)

    async def get_setting_values(self, keys: List[str]) -> Dict[str, str]:
        async with self.session_factory() as session:
            return await SqlAlchemySystemSettingRepository(session).get_values(keys)
