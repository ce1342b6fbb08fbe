from .booking_repository import SqlAlchemyBookingRepository
from .reference_data_repository import SqlAlchemyReferenceDataRepository
from .system_setting_repository import SqlAlchemySystemSettingRepository
from .rental_agreement_repository import SqlAlchemyRentalAgreementRepository
from .invoice_repository import SqlAlchemyInvoiceRepository

__all__ = [
    "SqlAlchemyBookingRepository",
    "SqlAlchemyReferenceDataRepository",
    "SqlAlchemySystemSettingRepository",
    "SqlAlchemyRentalAgreementRepository",
    "SqlAlchemyInvoiceRepository",
]
