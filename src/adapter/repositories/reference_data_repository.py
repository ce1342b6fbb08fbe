"""SQLAlchemy Reference Data Repository Implementation"""

from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.reference_data_repository import ReferenceDataRepository
from src.domain.reference_data import CustomerProfile, Location, VehicleCategory


class SqlAlchemyReferenceDataRepository(ReferenceDataRepository):
    """Primary-key lookups through the async session"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_profile(self, profile_id: str) -> Optional[CustomerProfile]:
        return await self.session.get(CustomerProfile, profile_id)

    async def get_vehicle_category(self, category_id: str) -> Optional[VehicleCategory]:
        return await self.session.get(VehicleCategory, category_id)

    async def get_location(self, location_id: str) -> Optional[Location]:
        return await self.session.get(Location, location_id)
