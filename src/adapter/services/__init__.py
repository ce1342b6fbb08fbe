from .unit_of_work import SqlAlchemyUnitOfWork
from .booking_reader import SqlAlchemyBookingReader
from .asset_service import HttpAssetService
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyBookingReader",
    "HttpAssetService",
    "ReportLabPdfService",
]
