from .base import BaseModel, generate_uuid
from .booking import Booking, ProtectionPlan
from .booking_add_on import AddOn, BookingAddOn
from .additional_driver import AdditionalDriver, DriverAgeBand
from .reference_data import CustomerProfile, VehicleCategory, Location
from .system_setting import SystemSetting
from .rental_agreement import RentalAgreement, AgreementStatus
from .invoice import Invoice, InvoiceStatus

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Booking",
    "ProtectionPlan",
    "AddOn",
    "BookingAddOn",
    "AdditionalDriver",
    "DriverAgeBand",
    "CustomerProfile",
    "VehicleCategory",
    "Location",
    "SystemSetting",
    "RentalAgreement",
    "AgreementStatus",
    "Invoice",
    "InvoiceStatus",
]
