"""Booking record loader

Loads a booking together with its joined rows and rate settings. The booking
itself is required; every secondary read runs concurrently and a failure
degrades to a placeholder instead of failing the document.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from src.app.pricing.models import AddOnCharge, BookingCharges, DriverCharge
from src.app.pricing.rates import RateTable, load_rate_table
from src.app.services.booking_reader import BookingReader
from src.domain.additional_driver import AdditionalDriver
from src.domain.booking import Booking
from src.domain.reference_data import CustomerProfile, Location, VehicleCategory
from .payloads import NOT_AVAILABLE, CustomerInfo, LocationInfo, RentalPeriod, VehicleInfo

logger = logging.getLogger(__name__)


@dataclass
class BookingRecord:
    """A booking and its joined records, ready for pricing and rendering"""

    booking: Booking
    rate_table: RateTable
    profile: Optional[CustomerProfile] = None
    category: Optional[VehicleCategory] = None
    add_ons: List[AddOnCharge] = field(default_factory=list)
    drivers: List[AdditionalDriver] = field(default_factory=list)
    pickup: Optional[Location] = None
    return_location: Optional[Location] = None

    def to_charges(self) -> BookingCharges:
        booking = self.booking
        return BookingCharges(
            booking_code=booking.booking_code,
            total_days=booking.total_days or 0,
            daily_rate=booking.daily_rate or 0,
            vehicle_category=self.category.name if self.category else None,
            protection_plan=booking.protection_plan,
            add_ons=self.add_ons,
            drivers=[
                DriverCharge(
                    name=driver.driver_name,
                    age_band=driver.driver_age_band,
                    fee_override=driver.young_driver_fee,
                )
                for driver in self.drivers
            ],
            young_driver_fee=booking.young_driver_fee,
            different_dropoff_fee=booking.different_dropoff_fee,
            delivery_fee=booking.delivery_fee,
            upgrade_daily_fee=booking.upgrade_daily_fee,
            subtotal=booking.subtotal or 0,
            tax_amount=booking.tax_amount or 0,
            total_amount=booking.total_amount or 0,
            deposit_amount=booking.deposit_amount,
        )

    def customer_info(self) -> CustomerInfo:
        profile = self.profile
        if profile is None:
            return CustomerInfo()
        name = profile.full_name or ""
        # Some profiles were created with the email as full_name
        if not name or "@" in name:
            name = NOT_AVAILABLE
        return CustomerInfo(name=name, email=profile.email or "", phone=profile.phone)

    def vehicle_info(self) -> VehicleInfo:
        category = self.category
        if category is None:
            return VehicleInfo()
        return VehicleInfo(
            category=category.name or NOT_AVAILABLE,
            fuel_type=category.fuel_type,
            transmission=category.transmission,
            seats=category.seats,
            tank_capacity_liters=category.tank_capacity_liters,
        )

    def rental_period(self) -> RentalPeriod:
        return RentalPeriod(
            start_at=self.booking.start_at,
            end_at=self.booking.end_at,
            total_days=self.booking.total_days or 0,
        )

    def location_info(self) -> LocationInfo:
        pickup = self.pickup.display() if self.pickup else NOT_AVAILABLE
        return_location = self.return_location.display() if self.return_location else pickup
        return LocationInfo(
            pickup=pickup or NOT_AVAILABLE,
            return_location=return_location or NOT_AVAILABLE,
            delivery_address=self.booking.delivery_address,
        )


async def _none() -> None:
    return None


class BookingRecordLoader:
    """
    Loads BookingRecords through a BookingReader

    Secondary reads fan out with asyncio.gather, one session per read.
    """

    def __init__(self, reader: BookingReader, rate_defaults: RateTable):
        self.reader = reader
        self.rate_defaults = rate_defaults

    async def load(self, booking_id: str) -> Optional[BookingRecord]:
        """
        Load a booking record

        Args:
            booking_id: Booking ID

        Returns:
            BookingRecord, or None when the booking does not exist
        """
        booking = await self.reader.get_booking(booking_id)
        if booking is None:
            return None

        results = await asyncio.gather(
            self.reader.get_profile(booking.user_id) if booking.user_id else _none(),
            self.reader.get_vehicle_category(booking.vehicle_category_id) if booking.vehicle_category_id else _none(),
            self.reader.get_add_ons(booking_id),
            self.reader.get_additional_drivers(booking_id),
            self.reader.get_location(booking.location_id) if booking.location_id else _none(),
            self.reader.get_location(booking.return_location_id) if booking.return_location_id else _none(),
            load_rate_table(self.reader.get_setting_values, self.rate_defaults),
            return_exceptions=True,
        )
        profile, category, add_on_rows, drivers, pickup, return_location, rate_table = (
            self._degrade(booking_id, "profile", results[0], None),
            self._degrade(booking_id, "vehicle category", results[1], None),
            self._degrade(booking_id, "add-ons", results[2], []),
            self._degrade(booking_id, "additional drivers", results[3], []),
            self._degrade(booking_id, "pickup location", results[4], None),
            self._degrade(booking_id, "return location", results[5], None),
            self._degrade(booking_id, "rate settings", results[6], self.rate_defaults),
        )

        add_ons = [
            AddOnCharge(
                name=(catalog.name if catalog and catalog.name else "Add-on"),
                price=row.price if row.price is not None else 0,
                quantity=row.quantity or 1,
            )
            for row, catalog in add_on_rows
        ]

        return BookingRecord(
            booking=booking,
            profile=profile,
            category=category,
            add_ons=add_ons,
            drivers=drivers,
            pickup=pickup,
            return_location=return_location,
            rate_table=rate_table,
        )

    @staticmethod
    def _degrade(booking_id: str, what: str, result: Any, fallback: Any) -> Any:
        if isinstance(result, BaseException):
            logger.warning(f"Could not load {what} for booking {booking_id}, using placeholder: {result}")
            return fallback
        return result
