"""Invoice Repository Interface

Invoices are keyed by booking. A voided invoice stays on file but no longer
counts as the booking's invoice, so a replacement can be drafted.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """Persistence contract for rental invoices"""

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """Insert a draft invoice and return it with its generated id"""
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def get_by_booking_id(self, booking_id: str) -> Optional[Invoice]:
        """
        Latest live invoice for a booking

        Args:
            booking_id: Booking ID

        Returns:
            Most recently created non-voided Invoice, or None
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """Persist status, snapshot and adjustment changes"""
        pass

    @abstractmethod
    async def exists_for_booking(self, booking_id: str) -> bool:
        """True when the booking already has a live (non-voided) invoice"""
        pass

    @abstractmethod
    async def generate_invoice_number(self, year: Optional[int] = None) -> str:
        """
        Next invoice number in the yearly sequence

        Numbers look like INV-2025-000042; the sequence restarts at 000001
        each calendar year.

        Args:
            year: Sequence year (defaults to the current UTC year)
        """
        pass
