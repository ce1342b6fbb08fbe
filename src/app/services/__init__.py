from .unit_of_work import UnitOfWork
from .booking_reader import BookingReader
from .asset_service import AssetService
from .pdf_service import PdfService

__all__ = [
    "UnitOfWork",
    "BookingReader",
    "AssetService",
    "PdfService",
]
