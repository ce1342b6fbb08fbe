"""Booking Reader Interface

Read-only access to a booking and everything joined into its documents.
Each read is independent so callers can run them concurrently.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple
from src.domain.additional_driver import AdditionalDriver
from src.domain.booking import Booking
from src.domain.booking_add_on import AddOn, BookingAddOn
from src.domain.reference_data import CustomerProfile, Location, VehicleCategory


class BookingReader(ABC):
    """
    Concurrent-safe booking reads

    Implementations must not share a database session between calls.
    """

    @abstractmethod
    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_add_ons(self, booking_id: str) -> List[Tuple[BookingAddOn, Optional[AddOn]]]:
        pass

    @abstractmethod
    async def get_additional_drivers(self, booking_id: str) -> List[AdditionalDriver]:
        pass

    @abstractmethod
    async def get_profile(self, profile_id: str) -> Optional[CustomerProfile]:
        pass

    @abstractmethod
    async def get_vehicle_category(self, category_id: str) -> Optional[VehicleCategory]:
        pass

    @abstractmethod
    async def get_location(self, location_id: str) -> Optional[Location]:
        pass

    @abstractmethod
    async def get_setting_values(self, keys: List[str]) -> Dict[str, str]:
        pass
