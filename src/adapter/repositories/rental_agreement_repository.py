"""SQLAlchemy Rental Agreement Repository Implementation

Implements rental agreement persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.rental_agreement_repository import RentalAgreementRepository
from src.domain.rental_agreement import RentalAgreement


class SqlAlchemyRentalAgreementRepository(RentalAgreementRepository):
    """
    SQLAlchemy implementation of RentalAgreementRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, agreement: RentalAgreement) -> RentalAgreement:
        """
        Create a new agreement

        Args:
            agreement: RentalAgreement entity to persist

        Returns:
            Created RentalAgreement
        """
        self.session.add(agreement)
        await self.session.flush()
        await self.session.refresh(agreement)
        return agreement

    async def get_by_id(self, agreement_id: str) -> Optional[RentalAgreement]:
        statement = select(RentalAgreement).where(RentalAgreement.id == agreement_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_booking_id(self, booking_id: str) -> Optional[RentalAgreement]:
        statement = select(RentalAgreement).where(RentalAgreement.booking_id == booking_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, agreement: RentalAgreement) -> RentalAgreement:
        """
        Update an existing agreement

        Args:
            agreement: RentalAgreement entity with updated values

        Returns:
            Updated RentalAgreement
        """
        agreement.updated_at = datetime.utcnow()
        self.session.add(agreement)
        await self.session.flush()
        await self.session.refresh(agreement)
        return agreement
