"""Booking Domain Entity

Core rental facts and the persisted aggregate totals the charge engine
reconciles against.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class ProtectionPlan(str, Enum):
    """Protection plan tiers"""
    NONE = "none"
    BASIC = "basic"
    SMART = "smart"
    PREMIUM = "premium"


class Booking(BaseModel, table=True):
    """
    Booking - A vehicle rental reservation

    Domain Rules:
    - Immutable once active: rates, days and aggregates are what the
      customer agreed to
    - subtotal may carry ad-hoc staff adjustments with no itemized row
    - subtotal + tax_amount == total_amount (maintained upstream)
    """

    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_booking_code", "booking_code", unique=True),
        Index("ix_bookings_user_id", "user_id"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Booking UUID"
    )

    booking_code: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Human readable booking code (e.g., C2C7K3QX)"
    )

    user_id: Optional[str] = Field(
        default=None,
        description="Customer profile ID"
    )

    vehicle_category_id: Optional[str] = Field(
        default=None,
        description="Booked vehicle category ID"
    )

    location_id: Optional[str] = Field(
        default=None,
        description="Pickup location ID"
    )

    return_location_id: Optional[str] = Field(
        default=None,
        description="Return location ID (None = same as pickup)"
    )

    delivery_address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Delivery address when the vehicle is brought to the customer"
    )

    start_at: datetime = Field(description="Rental start timestamp")

    end_at: datetime = Field(description="Rental end timestamp")

    total_days: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Rental duration in days"
    )

    daily_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Vehicle daily rate"
    )

    protection_plan: Optional[str] = Field(
        default=ProtectionPlan.NONE.value,
        sa_column=Column(String(20), nullable=True),
        description="Protection plan ID (none, basic, smart, premium)"
    )

    young_driver_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Young renter fee for the primary driver (rental total)"
    )

    different_dropoff_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="One-way / different drop-off location fee"
    )

    delivery_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Vehicle delivery fee"
    )

    upgrade_daily_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Daily category upgrade fee"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Persisted pre-tax subtotal"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Persisted combined tax total (PST + GST)"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Persisted grand total"
    )

    deposit_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Refundable security deposit"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Booking creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
                "booking_code": "C2C7K3QX",
                "start_at": "2025-03-06T10:00:00Z",
                "end_at": "2025-03-09T10:00:00Z",
                "total_days": 3,
                "daily_rate": "50.00",
                "protection_plan": "smart",
                "subtotal": "200.00",
                "tax_amount": "24.00",
                "total_amount": "224.00",
            }
        }
