"""Booking Repository Interface

Defines the contract for reading bookings and their joined charge rows.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.booking import Booking
from src.domain.booking_add_on import AddOn, BookingAddOn
from src.domain.additional_driver import AdditionalDriver


class BookingRepository(ABC):
    """
    Repository interface for Booking persistence

    Bookings are created by the booking workflow; this service only reads
    them and their add-on and driver rows.
    """

    @abstractmethod
    async def create(self, booking: Booking) -> Booking:
        """
        Persist a booking

        Args:
            booking: Booking entity to persist

        Returns:
            Created Booking
        """
        pass

    @abstractmethod
    async def get_by_id(self, booking_id: str) -> Optional[Booking]:
        """
        Retrieve booking by ID

        Args:
            booking_id: Booking ID

        Returns:
            Booking if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_add_ons(self, booking_id: str) -> List[Tuple[BookingAddOn, Optional[AddOn]]]:
        """
        Retrieve add-on rows with their catalog entries

        Args:
            booking_id: Booking ID

        Returns:
            (BookingAddOn, AddOn) pairs in persisted order; the catalog entry
            is None when it has been deleted
        """
        pass

    @abstractmethod
    async def get_additional_drivers(self, booking_id: str) -> List[AdditionalDriver]:
        """
        Retrieve additional drivers in registration order

        Args:
            booking_id: Booking ID

        Returns:
            List of AdditionalDriver
        """
        pass

    @abstractmethod
    async def list_ids(self, limit: int = 200, offset: int = 0) -> List[str]:
        """
        List booking IDs, oldest first

        Args:
            limit: Maximum number of IDs to return
            offset: Offset for pagination

        Returns:
            List of booking IDs
        """
        pass
