"""Add-on Domain Entities

AddOn is the catalog product; BookingAddOn is the line the booking flow
persisted, with its price already computed (quantity, days, one-time fee).
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Integer, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class AddOn(BaseModel, table=True):
    """
    AddOn - Catalog extra (child seat, GPS, ...)
    """

    __tablename__ = "add_ons"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name"
    )

    daily_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Catalog daily rate (informational; bookings keep their own price)"
    )

    one_time_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Catalog one-time fee"
    )


class BookingAddOn(BaseModel, table=True):
    """
    BookingAddOn - Add-on attached to a booking

    Domain Rules:
    - price is the persisted LINE TOTAL, never recomputed from the catalog
    - rows are displayed in creation order
    """

    __tablename__ = "booking_add_ons"
    __table_args__ = (
        Index("ix_booking_add_ons_booking_id", "booking_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    booking_id: str = Field(
        foreign_key="bookings.id",
        description="Owning booking"
    )

    add_on_id: Optional[str] = Field(
        default=None,
        foreign_key="add_ons.id",
        description="Catalog add-on"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Persisted line total"
    )

    quantity: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, default=1),
        description="Units booked"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Row creation timestamp (display order)"
    )
