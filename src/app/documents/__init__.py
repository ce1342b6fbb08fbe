from .payloads import (
    AgreementTerms,
    CustomerInfo,
    DocumentAssets,
    InvoiceAdjustments,
    InvoiceSnapshot,
    LocationInfo,
    RentalPeriod,
    RentalPolicies,
    SignatureInfo,
    VehicleInfo,
)
from .sources import DocumentSource, LegacySource, StructuredSource, resolve_agreement_source
from .booking_record import BookingRecord, BookingRecordLoader
from .filenames import agreement_filename, invoice_filename, record_code
from .assembler import (
    breakdown_for,
    build_agreement_terms,
    build_invoice_snapshot,
    gather_assets,
    signature_info,
)

__all__ = [
    "AgreementTerms",
    "BookingRecord",
    "BookingRecordLoader",
    "CustomerInfo",
    "DocumentAssets",
    "DocumentSource",
    "InvoiceAdjustments",
    "InvoiceSnapshot",
    "LegacySource",
    "LocationInfo",
    "RentalPeriod",
    "RentalPolicies",
    "SignatureInfo",
    "StructuredSource",
    "VehicleInfo",
    "agreement_filename",
    "breakdown_for",
    "build_agreement_terms",
    "build_invoice_snapshot",
    "gather_assets",
    "invoice_filename",
    "record_code",
    "resolve_agreement_source",
    "signature_info",
]
