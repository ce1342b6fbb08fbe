"""Request schemas for invoice and agreement endpoints

Pydantic models for validating incoming HTTP requests.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating a draft invoice

    Used for POST /billing/invoices endpoint.
    """

    booking_id: str = Field(..., min_length=1, description="Booking to invoice")
    late_fees: Decimal = Field(default=Decimal("0"), ge=0, description="Late return fees")
    damage_charges: Decimal = Field(default=Decimal("0"), ge=0, description="Damage charges")
    payments_received: Decimal = Field(default=Decimal("0"), ge=0, description="Payments already collected")
    deposit_held: Decimal = Field(default=Decimal("0"), ge=0)
    deposit_released: Decimal = Field(default=Decimal("0"), ge=0)
    deposit_captured: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator(
        "late_fees", "damage_charges", "payments_received",
        "deposit_held", "deposit_released", "deposit_captured",
    )
    @classmethod
    def validate_cents(cls, v: Decimal) -> Decimal:
        """Amounts are whole cents"""
        if v.as_tuple().exponent < -2:
            raise ValueError("Amounts must have at most 2 decimal places")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "booking_id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "late_fees": "25.00",
                "damage_charges": "0.00",
                "payments_received": "156.80",
                "notes": "Returned 40 minutes late",
            }
        }


class CreateAgreementRequestSchema(BaseModel):
    booking_id: str = Field(..., min_length=1, description="Booking the agreement covers")


class SignAgreementRequestSchema(BaseModel):
    """
    Request schema for signing an agreement

    Used for POST /agreements/{id}/sign endpoint.
    """

    signer_name: str = Field(..., min_length=1, max_length=255, description="Typed signer name")
    signature_image_url: Optional[str] = Field(
        default=None,
        description="Captured signature image (http(s) or data: URL)"
    )
    signed_manually: bool = Field(default=False, description="Signed in person on paper")
    staff_id: Optional[str] = Field(default=None, description="Staff member recording a manual signature")

    @field_validator("signer_name")
    @classmethod
    def validate_signer_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("signer_name must not be blank")
        return v.strip()


class ConfirmAgreementRequestSchema(BaseModel):
    staff_id: str = Field(..., min_length=1, max_length=255, description="Confirming staff member")
