"""Additional Driver Domain Entity"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, generate_uuid


class DriverAgeBand(str, Enum):
    """Additional driver age bands"""
    YOUNG = "20_24"
    STANDARD = "25_70"


class AdditionalDriver(BaseModel, table=True):
    """
    AdditionalDriver - Extra driver registered on a booking

    Domain Rules:
    - young_driver_fee, when positive, overrides the age band rate and is
      the driver's rental total
    - rows are displayed in registration order
    """

    __tablename__ = "booking_additional_drivers"
    __table_args__ = (
        Index("ix_booking_additional_drivers_booking_id", "booking_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    booking_id: str = Field(
        foreign_key="bookings.id",
        description="Owning booking"
    )

    driver_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Driver full name"
    )

    driver_age_band: Optional[str] = Field(
        default=DriverAgeBand.STANDARD.value,
        sa_column=Column(String(10), nullable=True),
        description="Age band (20_24 = young, 25_70 = standard)"
    )

    young_driver_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Explicit fee override for this driver (rental total)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Registration timestamp (display order)"
    )
