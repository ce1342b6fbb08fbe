"""Rental Agreement Domain Entity

Tracks the agreement document a customer signs before pickup.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, String, Text
from src.domain.base import BaseModel, generate_uuid


class AgreementStatus(str, Enum):
    """Agreement status types"""
    PENDING = "pending"
    SIGNED = "signed"
    CONFIRMED = "confirmed"
    VOIDED = "voided"


class RentalAgreement(BaseModel, table=True):
    """
    RentalAgreement - Customer-facing rental contract

    Domain Rules:
    - One agreement per booking
    - Status transitions: pending -> signed -> confirmed (or voided)
    - terms_json is written exactly once, at signing; afterwards it is the
      permanent source of truth for the rendered agreement
    - Agreements created before the structured schema only carry
      agreement_content (free text) and are rendered through the legacy path
    """

    __tablename__ = "rental_agreements"
    __table_args__ = (
        Index("ix_rental_agreements_booking_id", "booking_id", unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Agreement UUID"
    )

    booking_id: str = Field(
        foreign_key="bookings.id",
        description="Booking this agreement covers"
    )

    agreement_content: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Legacy pre-formatted agreement text"
    )

    terms_json: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Structured terms/financial snapshot (JSON), set at signing"
    )

    status: AgreementStatus = Field(
        default=AgreementStatus.PENDING,
        description="Agreement status (pending, signed, confirmed, voided)"
    )

    customer_signature: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Signer identity (typed name)"
    )

    customer_signed_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp the customer signed"
    )

    signature_image_url: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Captured signature image location"
    )

    staff_confirmed_by: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Staff member who confirmed the signature"
    )

    staff_confirmed_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp staff confirmed the signature"
    )

    signed_manually: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Signed in person on paper"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Agreement creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def is_signed(self) -> bool:
        return self.customer_signed_at is not None

    @property
    def has_structured_terms(self) -> bool:
        return bool(self.terms_json)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "0b8f5a52-8a3e-4f5e-9f0b-1d7e2c3a4b5c",
                "booking_id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "status": "signed",
                "customer_signature": "Jane Doe",
                "customer_signed_at": "2025-03-06T09:45:00Z",
                "staff_confirmed_at": None,
            }
        }
