"""SQLAlchemy Booking Repository Implementation

Implements booking reads using SQLAlchemy async session.
"""

from typing import List, Optional, Tuple
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.booking_repository import BookingRepository
from src.domain.additional_driver import AdditionalDriver
from src.domain.booking import Booking
from src.domain.booking_add_on import AddOn, BookingAddOn


class SqlAlchemyBookingRepository(BookingRepository):
    """
    SQLAlchemy implementation of BookingRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, booking: Booking) -> Booking:
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def get_by_id(self, booking_id: str) -> Optional[Booking]:
        """
        Retrieve booking by ID

        Args:
            booking_id: Booking ID

        Returns:
            Booking if found, None otherwise
        """
        statement = select(Booking).where(Booking.id == booking_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_add_ons(self, booking_id: str) -> List[Tuple[BookingAddOn, Optional[AddOn]]]:
        """
        Retrieve add-on rows with their catalog entries in persisted order

        Args:
            booking_id: Booking ID

        Returns:
            List of (BookingAddOn, AddOn or None)
        """
        statement = (
            select(BookingAddOn, AddOn)
            .join(AddOn, AddOn.id == BookingAddOn.add_on_id, isouter=True)
            .where(BookingAddOn.booking_id == booking_id)
            .order_by(BookingAddOn.created_at, BookingAddOn.id)
        )
        result = await self.session.execute(statement)
        return [(row[0], row[1]) for row in result.all()]

    async def get_additional_drivers(self, booking_id: str) -> List[AdditionalDriver]:
        """
        Retrieve additional drivers in registration order

        Args:
            booking_id: Booking ID

        Returns:
            List of AdditionalDriver
        """
        statement = (
            select(AdditionalDriver)
            .where(AdditionalDriver.booking_id == booking_id)
            .order_by(AdditionalDriver.created_at, AdditionalDriver.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_ids(self, limit: int = 200, offset: int = 0) -> List[str]:
        statement = (
            select(Booking.id)
            .order_by(Booking.created_at, Booking.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
