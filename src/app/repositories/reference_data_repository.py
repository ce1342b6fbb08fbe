"""Reference Data Repository Interface

Lookups for records joined into documents: customer profile, vehicle
category and rental locations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.reference_data import CustomerProfile, Location, VehicleCategory


class ReferenceDataRepository(ABC):
    """Read-only access to reference records"""

    @abstractmethod
    async def get_profile(self, profile_id: str) -> Optional[CustomerProfile]:
        pass

    @abstractmethod
    async def get_vehicle_category(self, category_id: str) -> Optional[VehicleCategory]:
        pass

    @abstractmethod
    async def get_location(self, location_id: str) -> Optional[Location]:
        pass
