"""Invoice Domain Entity

Tracks rental invoices and payment status.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Integer, Numeric, String, Text
from src.domain.base import BaseModel


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    ISSUED = "issued"
    PAID = "paid"
    VOIDED = "voided"


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing invoice for a rental booking

    Domain Rules:
    - invoice_number must be unique
    - One invoice per booking
    - Status transitions: draft -> issued -> paid (or voided)
    - Charges are derived from the booking while draft; snapshot_json is
      written once at issue and is the source of truth afterwards
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_booking_id', 'booking_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_invoice_number', 'invoice_number', unique=True),
    )

    id: int = Field(
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    booking_id: str = Field(
        foreign_key="bookings.id",
        description="Invoiced booking"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., INV-2025-000001)"
    )

    status: InvoiceStatus = Field(
        description="Invoice status (draft, issued, paid, voided)"
    )

    currency: str = Field(
        default="CAD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    late_fees: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Late return fees"
    )

    damage_charges: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Damage charges"
    )

    payments_received: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Payments collected so far"
    )

    deposit_held: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Security deposit currently held"
    )

    deposit_released: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Security deposit released"
    )

    deposit_captured: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Security deposit captured"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text notes printed on the invoice"
    )

    snapshot_json: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Issued invoice payload (JSON), written once at issue"
    )

    issued_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was issued"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was paid"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "booking_id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "invoice_number": "INV-2025-000001",
                "status": "issued",
                "currency": "CAD",
                "late_fees": "0.00",
                "damage_charges": "0.00",
                "payments_received": "224.00",
                "issued_at": "2025-03-09T12:00:00Z",
                "paid_at": None,
                "created_at": "2025-03-09T11:00:00Z",
                "updated_at": "2025-03-09T12:00:00Z"
            }
        }
