"""Reference Data Entities

Records joined onto a booking for display: customer profile, vehicle
category and rental locations.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Integer, String
from src.domain.base import BaseModel, generate_uuid


class CustomerProfile(BaseModel, table=True):
    """Customer profile"""

    __tablename__ = "profiles"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    full_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))


class VehicleCategory(BaseModel, table=True):
    """Vehicle category (fleet class)"""

    __tablename__ = "vehicle_categories"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    name: str = Field(sa_column=Column(String(100), nullable=False))
    fuel_type: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    transmission: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    seats: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
    tank_capacity_liters: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))


class Location(BaseModel, table=True):
    """Pickup / return location"""

    __tablename__ = "locations"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    address: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    def display(self) -> str:
        """Name, address and city joined for a document line"""
        return ", ".join(part for part in (self.name, self.address, self.city) if part)
