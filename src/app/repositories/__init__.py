from .booking_repository import BookingRepository
from .reference_data_repository import ReferenceDataRepository
from .system_setting_repository import SystemSettingRepository
from .rental_agreement_repository import RentalAgreementRepository
from .invoice_repository import InvoiceRepository

__all__ = [
    "BookingRepository",
    "ReferenceDataRepository",
    "SystemSettingRepository",
    "RentalAgreementRepository",
    "InvoiceRepository",
]
