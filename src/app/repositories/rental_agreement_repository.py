"""Rental Agreement Repository Interface

Defines the contract for rental agreement persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.rental_agreement import RentalAgreement


class RentalAgreementRepository(ABC):
    """
    Repository interface for RentalAgreement persistence

    One agreement per booking.
    """

    @abstractmethod
    async def create(self, agreement: RentalAgreement) -> RentalAgreement:
        """
        Create a new agreement

        Args:
            agreement: RentalAgreement entity to persist

        Returns:
            Created RentalAgreement
        """
        pass

    @abstractmethod
    async def get_by_id(self, agreement_id: str) -> Optional[RentalAgreement]:
        """
        Retrieve agreement by ID

        Args:
            agreement_id: Agreement ID

        Returns:
            RentalAgreement if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_booking_id(self, booking_id: str) -> Optional[RentalAgreement]:
        """
        Retrieve the agreement for a booking

        Args:
            booking_id: Booking ID

        Returns:
            RentalAgreement if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, agreement: RentalAgreement) -> RentalAgreement:
        """
        Update an existing agreement

        Args:
            agreement: RentalAgreement entity with updated values

        Returns:
            Updated RentalAgreement
        """
        pass
