"""Document assembly

Builds agreement and invoice payloads from a loaded booking record and
gathers their images before any layout happens.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from src.app.pricing.breakdown import compute_charge_breakdown
from src.app.pricing.models import ChargeBreakdown
from src.app.pricing.money import from_minor_units, to_minor_units
from src.app.services.asset_service import AssetService
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.rental_agreement import RentalAgreement
from .booking_record import BookingRecord
from .payloads import (
    AgreementTerms,
    DocumentAssets,
    InvoiceAdjustments,
    InvoiceSnapshot,
    RentalPolicies,
    SignatureInfo,
)

logger = logging.getLogger(__name__)


def breakdown_for(record: BookingRecord) -> ChargeBreakdown:
    return compute_charge_breakdown(record.to_charges(), record.rate_table)


def build_agreement_terms(
    record: BookingRecord,
    captured_at: datetime,
    policies: Optional[RentalPolicies] = None,
) -> AgreementTerms:
    """Structured agreement payload from the live booking"""
    return AgreementTerms(
        booking_code=record.booking.booking_code,
        customer=record.customer_info(),
        vehicle=record.vehicle_info(),
        rental=record.rental_period(),
        locations=record.location_info(),
        breakdown=breakdown_for(record),
        policies=policies or RentalPolicies(),
        pvrt_daily_fee=record.rate_table.pvrt_daily_fee,
        acsrch_daily_fee=record.rate_table.acsrch_daily_fee,
        captured_at=captured_at,
    )


def invoice_adjustments(invoice: Invoice) -> InvoiceAdjustments:
    return InvoiceAdjustments(
        late_fees=from_minor_units(to_minor_units(invoice.late_fees)),
        damage_charges=from_minor_units(to_minor_units(invoice.damage_charges)),
        payments_received=from_minor_units(to_minor_units(invoice.payments_received)),
        deposit_held=from_minor_units(to_minor_units(invoice.deposit_held)),
        deposit_released=from_minor_units(to_minor_units(invoice.deposit_released)),
        deposit_captured=from_minor_units(to_minor_units(invoice.deposit_captured)),
    )


def build_invoice_snapshot(invoice: Invoice, record: BookingRecord) -> InvoiceSnapshot:
    """
    Invoice payload from the live booking

    grand total = booking total + late fees + damage charges
    amount due  = grand total - payments received - deposit captured
                  (never negative)
    """
    breakdown = breakdown_for(record)
    adjustments = invoice_adjustments(invoice)

    grand_total_cents = (
        to_minor_units(breakdown.grand_total)
        + to_minor_units(adjustments.late_fees)
        + to_minor_units(adjustments.damage_charges)
    )
    amount_due_cents = max(
        grand_total_cents
        - to_minor_units(adjustments.payments_received)
        - to_minor_units(adjustments.deposit_captured),
        0,
    )

    return InvoiceSnapshot(
        invoice_number=invoice.invoice_number,
        status=InvoiceStatus(invoice.status).value,
        issued_at=invoice.issued_at,
        booking_code=record.booking.booking_code,
        customer=record.customer_info(),
        vehicle_name=record.vehicle_info().category,
        rental=record.rental_period(),
        locations=record.location_info(),
        breakdown=breakdown,
        adjustments=adjustments,
        grand_total=from_minor_units(grand_total_cents),
        amount_due=from_minor_units(amount_due_cents),
        notes=invoice.notes,
    )


def signature_info(agreement: RentalAgreement) -> SignatureInfo:
    return SignatureInfo(
        signer_name=agreement.customer_signature,
        signed_at=agreement.customer_signed_at,
        confirmed_at=agreement.staff_confirmed_at,
        signed_manually=bool(agreement.signed_manually),
        image_url=agreement.signature_image_url,
    )


async def gather_assets(
    asset_service: AssetService, signature_url: Optional[str] = None
) -> DocumentAssets:
    """Fetch logo and signature image concurrently"""

    async def _no_image() -> Optional[bytes]:
        return None

    logo, signature = await asyncio.gather(
        asset_service.fetch_logo(),
        asset_service.fetch_image(signature_url) if signature_url else _no_image(),
        return_exceptions=True,
    )
    if isinstance(logo, BaseException):
        logger.warning(f"Logo unavailable: {logo}")
        logo = None
    if isinstance(signature, BaseException):
        logger.warning(f"Signature image unavailable: {signature}")
        signature = None
    return DocumentAssets(logo=logo, signature_image=signature)
