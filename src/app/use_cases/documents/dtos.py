"""Data Transfer Objects for Document Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class LineItemDTO(BaseModel):
    """Single non-tax charge line"""

    description: str = Field(..., description="Display text, e.g. 'Vehicle (3 days @ $40.00/day)'")
    amount: Decimal = Field(..., description="Line total")
    quantity: Optional[int] = Field(default=None, description="Quantity for add-on lines")
    category: str = Field(..., description="vehicle, protection, add_on, driver, young_driver, dropoff, delivery, upgrade or regulatory")


class TaxDTO(BaseModel):
    """Persisted tax total split into its two components"""

    primary_label: str
    primary_rate: Decimal
    primary_amount: Decimal
    secondary_label: str
    secondary_rate: Decimal
    secondary_amount: Decimal
    total: Decimal


class ChargeBreakdownResponseDTO(BaseModel):
    """
    Response DTO for the operational charge summary

    Returned by GetChargeBreakdown use case.
    """

    booking_id: str = Field(..., description="Booking ID")
    booking_code: str = Field(..., description="Human-readable booking code")
    currency: str = Field(..., description="Three-letter currency code")
    total_days: int = Field(..., description="Rental days")
    daily_rate: Decimal = Field(..., description="Base vehicle daily rate")
    line_items: List[LineItemDTO] = Field(..., description="Non-tax charge lines in display order")
    protection_plan: Optional[str] = Field(default=None, description="Resolved protection plan label")
    protection_daily_rate: Optional[Decimal] = Field(default=None, description="Resolved protection daily rate")
    vehicle_total: Decimal = Field(..., description="Reconciled vehicle charge")
    add_ons_total: Decimal
    drivers_total: Decimal
    regulatory_total: Decimal
    subtotal: Decimal = Field(..., description="Persisted booking subtotal")
    itemized_total: Decimal = Field(..., description="Sum of line items")
    discrepancy: Decimal = Field(..., description="subtotal - itemized_total")
    is_balanced: bool = Field(..., description="Line items sum to the subtotal within tolerance")
    taxes: TaxDTO
    grand_total: Decimal = Field(..., description="Subtotal plus taxes")
    deposit: Decimal = Field(..., description="Refundable security deposit")
    used_remainder: bool = Field(..., description="Vehicle charge derived from the persisted subtotal")
    extras_likely_missing: bool = Field(
        default=False,
        description="Subtotal suggests add-ons or drivers that have no rows"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "booking_id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "booking_code": "C2C-0001",
                "currency": "CAD",
                "total_days": 3,
                "daily_rate": "40.00",
                "line_items": [
                    {"description": "Vehicle (3 days @ $40.00/day)", "amount": "140.00", "category": "vehicle"}
                ],
                "subtotal": "140.00",
                "itemized_total": "140.00",
                "discrepancy": "0.00",
                "is_balanced": True,
                "grand_total": "156.80",
            }
        }


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating a draft invoice

    Used as input to CreateInvoice use case.
    """

    booking_id: str = Field(..., description="Booking to invoice")
    late_fees: Decimal = Field(default=Decimal("0"), ge=0, description="Late return fees")
    damage_charges: Decimal = Field(default=Decimal("0"), ge=0, description="Damage charges")
    payments_received: Decimal = Field(default=Decimal("0"), ge=0, description="Payments already collected")
    deposit_held: Decimal = Field(default=Decimal("0"), ge=0)
    deposit_released: Decimal = Field(default=Decimal("0"), ge=0)
    deposit_captured: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = Field(default=None, description="Free-text notes printed on the invoice")


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice and IssueInvoice use cases.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    booking_id: str = Field(..., description="Booking ID")
    invoice_number: str = Field(..., description="Invoice number (INV-YYYY-NNNNNN)")
    status: str = Field(..., description="draft, issued, paid or voided")
    currency: str
    late_fees: Decimal
    damage_charges: Decimal
    payments_received: Decimal
    has_snapshot: bool = Field(..., description="Financial snapshot captured at issue")
    issued_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "booking_id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "invoice_number": "INV-2025-000001",
                "status": "draft",
                "currency": "CAD",
                "late_fees": "0.00",
                "damage_charges": "0.00",
                "payments_received": "0.00",
                "has_snapshot": False,
                "issued_at": None,
                "created_at": "2025-03-06T09:45:00Z",
            }
        }


class GeneratedDocumentDTO(BaseModel):
    """
    Response DTO for a rendered PDF

    Returned by GenerateInvoiceDocument and GenerateAgreementDocument.
    """

    filename: str = Field(..., description="Download filename")
    pdf_base64: str = Field(..., description="PDF bytes, base64-encoded")
    generated_at: datetime = Field(..., description="Timestamp printed in the footer")
    source: str = Field(..., description="snapshot, live or legacy")

    class Config:
        json_schema_extra = {
            "example": {
                "filename": "Invoice-INV-2025-000001.pdf",
                "pdf_base64": "JVBERi0xLjQKJeLjz9...",
                "generated_at": "2025-03-06T09:45:00Z",
                "source": "snapshot",
            }
        }


class CreateAgreementCommandDTO(BaseModel):
    booking_id: str = Field(..., description="Booking the agreement covers")


class SignAgreementCommandDTO(BaseModel):
    """
    Command DTO for customer signature

    Used as input to SignAgreement use case.
    """

    agreement_id: str = Field(..., description="Agreement ID")
    signer_name: str = Field(..., min_length=1, description="Typed signer name")
    signature_image_url: Optional[str] = Field(
        default=None,
        description="Captured signature image (http(s) or data: URL)"
    )
    signed_manually: bool = Field(
        default=False,
        description="Signed in person on paper; also confirms the agreement"
    )
    staff_id: Optional[str] = Field(default=None, description="Staff member recording a manual signature")


class ConfirmAgreementCommandDTO(BaseModel):
    agreement_id: str = Field(..., description="Agreement ID")
    staff_id: str = Field(..., min_length=1, description="Confirming staff member")


class AgreementResponseDTO(BaseModel):
    """
    Response DTO for agreement operations

    Returned by CreateAgreement, SignAgreement, ConfirmAgreement and VoidAgreement.
    """

    agreement_id: str
    booking_id: str
    status: str = Field(..., description="pending, signed, confirmed or voided")
    signer_name: Optional[str] = None
    signed_at: Optional[datetime] = None
    signed_manually: bool = False
    confirmed_by: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    has_structured_terms: bool = Field(..., description="Terms snapshot stored")
    is_legacy: bool = Field(..., description="Carries free-text content from the previous generator")
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "agreement_id": "0b8f5a52-8a3e-4f5e-9f0b-1d7e2c3a4b5c",
                "booking_id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "status": "signed",
                "signer_name": "Jane Doe",
                "signed_at": "2025-03-06T09:45:00Z",
                "signed_manually": False,
                "has_structured_terms": True,
                "is_legacy": False,
                "created_at": "2025-03-05T12:00:00Z",
            }
        }


class BreakdownIssueDTO(BaseModel):
    """Data-quality finding for one booking"""

    booking_id: str
    booking_code: str
    fell_back: bool = Field(..., description="Reconciliation fell back to rate x days")
    is_balanced: bool
    discrepancy: Decimal
    extras_likely_missing: bool


class BreakdownAuditResultDTO(BaseModel):
    """
    Response DTO for breakdown audit

    Returned by AuditBookingBreakdowns use case.
    """

    bookings_checked: int = Field(..., description="Bookings scanned")
    issues_found: int = Field(..., description="Bookings with at least one finding")
    issues: List[BreakdownIssueDTO] = Field(default_factory=list)
    audit_time: datetime = Field(..., description="When the audit started")
    execution_time_ms: int = Field(..., description="Audit duration in milliseconds")
