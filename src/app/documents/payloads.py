"""Document payloads

Everything a rendered agreement or invoice shows, as plain values. A signed
agreement stores AgreementTerms in terms_json and an issued invoice stores
InvoiceSnapshot in snapshot_json; later edits to the booking never reach a
document rendered from a stored payload.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from src.app.pricing.models import ChargeBreakdown

NOT_AVAILABLE = "N/A"


class CustomerInfo(BaseModel):
    name: str = NOT_AVAILABLE
    email: str = ""
    phone: Optional[str] = None


class VehicleInfo(BaseModel):
    category: str = NOT_AVAILABLE
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    seats: Optional[int] = None
    tank_capacity_liters: Optional[int] = None


class RentalPeriod(BaseModel):
    start_at: datetime
    end_at: datetime
    total_days: int


class LocationInfo(BaseModel):
    pickup: str = NOT_AVAILABLE
    return_location: str = NOT_AVAILABLE
    delivery_address: Optional[str] = None

    @property
    def same_return(self) -> bool:
        return self.pickup == self.return_location


class RentalPolicies(BaseModel):
    """Standard rental terms shown on every agreement"""

    min_age: int = 21
    late_fee_per_hour: Decimal = Decimal("25.00")
    grace_period_minutes: int = 30
    fuel_return_policy: str = "Return with same fuel level as pickup"
    smoking_allowed: bool = False
    pets_allowed: bool = False
    international_travel: bool = False
    third_party_liability_included: bool = True


class AgreementTerms(BaseModel):
    """Structured agreement payload (terms_json)"""

    booking_code: str
    customer: CustomerInfo
    vehicle: VehicleInfo
    rental: RentalPeriod
    locations: LocationInfo
    breakdown: ChargeBreakdown
    policies: RentalPolicies = Field(default_factory=RentalPolicies)
    pvrt_daily_fee: Decimal
    acsrch_daily_fee: Decimal
    captured_at: datetime


class SignatureInfo(BaseModel):
    """Signature state rendered in an agreement signature block"""

    signer_name: Optional[str] = None
    signed_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    signed_manually: bool = False
    image_url: Optional[str] = None


class InvoiceAdjustments(BaseModel):
    """Post-rental amounts recorded on the invoice itself"""

    late_fees: Decimal = Decimal("0.00")
    damage_charges: Decimal = Decimal("0.00")
    payments_received: Decimal = Decimal("0.00")
    deposit_held: Decimal = Decimal("0.00")
    deposit_released: Decimal = Decimal("0.00")
    deposit_captured: Decimal = Decimal("0.00")


class InvoiceSnapshot(BaseModel):
    """Invoice payload (snapshot_json once issued)"""

    invoice_number: str
    status: str
    issued_at: Optional[datetime] = None
    booking_code: str
    customer: CustomerInfo
    vehicle_name: str = NOT_AVAILABLE
    rental: RentalPeriod
    locations: LocationInfo
    breakdown: ChargeBreakdown
    adjustments: InvoiceAdjustments = Field(default_factory=InvoiceAdjustments)
    grand_total: Decimal = Field(..., description="Booking total plus late fees and damage charges")
    amount_due: Decimal
    notes: Optional[str] = None


class DocumentAssets(BaseModel):
    """Images fetched before layout starts"""

    logo: Optional[bytes] = None
    signature_image: Optional[bytes] = None
