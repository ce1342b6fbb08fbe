"""Rental agreement layout

Structured agreements render from their terms payload; older agreements
render their stored text through the legacy parser. The source is chosen
once, before layout.
"""

import logging
from datetime import datetime
from typing import List

from src.app.documents.payloads import AgreementTerms, DocumentAssets, SignatureInfo
from src.app.documents.sources import DocumentSource, LegacySource
from src.app.pricing.money import format_amount, format_percent, to_minor_units
from src.app.documents.filenames import record_code
from .formatting import format_datetime_long, format_record_stamp
from .layout import LayoutContext
from .legacy import parse_legacy_text, render_legacy_blocks
from .renderer import BOLD, GRAND_TOTAL, MUTED, DocumentRenderer

logger = logging.getLogger(__name__)

DEFAULT_TANK_LITERS = 50

ACKNOWLEDGMENT = (
    "BY SIGNING BELOW, I (1) ACKNOWLEDGE THAT I HAVE READ, UNDERSTAND, ACCEPT AND AGREE TO THE ABOVE AND THE "
    "RENTAL AGREEMENT TERMS AND CONDITIONS. (2) I ACKNOWLEDGE RECEIPT OF THE RENTAL VEHICLE IN THE CONDITION "
    "DESCRIBED. (3) I AGREE TO RETURN THE VEHICLE BY THE DUE DATE AND TIME SPECIFIED ABOVE. (4) I CERTIFY THAT "
    "I AM A VALID DRIVER'S LICENSE HOLDER AND THAT ANY PERSON WHO OPERATES THE VEHICLE IS AUTHORIZED TO DO SO."
)


def policy_lines(terms: AgreementTerms) -> List[str]:
    policies = terms.policies
    tank = terms.vehicle.tank_capacity_liters or DEFAULT_TANK_LITERS
    restrictions = ["racing", "towing", "off-road use"]
    if not policies.smoking_allowed:
        restrictions.insert(0, "smoking")
    if not policies.pets_allowed:
        restrictions.insert(1 if not policies.smoking_allowed else 0, "pets (without approval)")
    lines = [
        f"Driver must be {policies.min_age}+ with a valid license and government ID. "
        "Additional drivers must be registered.",
        f"No {', '.join(restrictions)}.",
        f"{policies.fuel_return_policy} (tank: {tank}L). Refueling charges apply if returned low.",
        f"Grace period: {policies.grace_period_minutes} min past scheduled return. "
        f"Late fee: {format_amount(policies.late_fee_per_hour)} per hour after grace period.",
        "Renter is responsible for all damage during the rental period and must report it immediately. "
        "The security deposit may be applied to cover damages.",
        "Renter is liable for traffic violations and tolls. Early return does not guarantee a refund.",
    ]
    if not policies.international_travel:
        lines.append("No international travel without prior authorization.")
    if policies.third_party_liability_included:
        lines.append("Third party liability included. Optional coverage available at pickup.")
    lines.append(
        f"Taxes: {terms.breakdown.taxes.primary_label} {format_percent(terms.breakdown.taxes.primary_rate)}, "
        f"{terms.breakdown.taxes.secondary_label} {format_percent(terms.breakdown.taxes.secondary_rate)}, "
        f"PVRT {format_amount(terms.pvrt_daily_fee)}/day, ACSRCH {format_amount(terms.acsrch_daily_fee)}/day."
    )
    return lines


def _render_structured(
    renderer: DocumentRenderer,
    ctx: LayoutContext,
    terms: AgreementTerms,
    code: str,
    assets: DocumentAssets,
    currency: str,
) -> None:
    renderer.header(
        ctx,
        "RENTAL RECORD",
        logo=assets.logo,
        right_lines=[f"RENTAL RECORD:  {code}", f"FORM#  {code}-01"],
    )

    renderer.section_heading(ctx, "CUSTOMER")
    renderer.key_value_pair(ctx, "Name:", terms.customer.name.upper())
    renderer.key_value_pair(ctx, "Email:", terms.customer.email or "N/A")
    if terms.customer.phone:
        renderer.key_value_pair(ctx, "Phone:", terms.customer.phone)
    renderer.rule(ctx)

    rental = terms.rental
    renderer.section_heading(ctx, "RENTAL PERIOD")
    renderer.key_value_pair(ctx, "Rental:", format_record_stamp(rental.start_at))
    renderer.key_value_pair(ctx, "Due:", format_record_stamp(rental.end_at))
    renderer.key_value_pair(ctx, "Duration:", f"{rental.total_days} DAY(S)")
    renderer.rule(ctx)

    vehicle = terms.vehicle
    renderer.section_heading(ctx, "VEHICLE")
    renderer.key_value_pair(ctx, "Veh Class:", vehicle.category.upper())
    renderer.key_value_pair(ctx, "Fuel:", (vehicle.fuel_type or "N/A").upper())
    renderer.key_value_pair(ctx, "Trans:", (vehicle.transmission or "N/A").upper())
    renderer.key_value_pair(ctx, "Seats:", str(vehicle.seats) if vehicle.seats else "N/A")
    renderer.key_value_pair(ctx, "Tank Cap:", f"{vehicle.tank_capacity_liters or DEFAULT_TANK_LITERS}L")
    renderer.rule(ctx)

    locations = terms.locations
    renderer.section_heading(ctx, "LOCATIONS")
    renderer.key_value_row(ctx, "Pickup:", locations.pickup.upper())
    if locations.delivery_address:
        renderer.key_value_row(ctx, "Delivery:", locations.delivery_address.upper())
    renderer.key_value_row(
        ctx, "Return:", "SAME AS PICKUP" if locations.same_return else locations.return_location.upper()
    )
    renderer.rule(ctx)

    breakdown = terms.breakdown
    renderer.section_heading(ctx, "CHARGES")
    renderer.table_header(ctx, "Charge Description", "Amount")
    for item in breakdown.line_items:
        renderer.table_row(ctx, item.description, item.amount)
    renderer.table_row(ctx, "SUBTOTAL", breakdown.subtotal, emphasis=BOLD, indent=0)
    taxes = breakdown.taxes
    renderer.table_row(ctx, f"{taxes.primary_label} ({format_percent(taxes.primary_rate)})", taxes.primary_amount)
    renderer.table_row(ctx, f"{taxes.secondary_label} ({format_percent(taxes.secondary_rate)})", taxes.secondary_amount)
    renderer.table_row(ctx, "TOTAL:", breakdown.grand_total, emphasis=GRAND_TOTAL, currency=currency)
    if to_minor_units(breakdown.deposit) > 0:
        renderer.table_row(ctx, "Security Deposit (refundable)", breakdown.deposit, indent=0)
    renderer.rule(ctx)

    renderer.section_heading(ctx, "TERMS & CONDITIONS")
    renderer.bullet_list(ctx, policy_lines(terms), size=6)
    renderer.spacer(ctx, 4)
    renderer.paragraph(ctx, ACKNOWLEDGMENT, size=5.5, color=MUTED)


def _render_legacy(
    renderer: DocumentRenderer,
    ctx: LayoutContext,
    text: str,
    company_name: str,
    assets: DocumentAssets,
) -> None:
    renderer.header(
        ctx,
        company_name.upper(),
        subtitle="VEHICLE RENTAL AGREEMENT",
        logo=assets.logo,
    )
    blocks = parse_legacy_text(text)
    skipped = render_legacy_blocks(renderer, ctx, blocks)
    if skipped:
        logger.warning(f"Legacy agreement rendered with {skipped} skipped blocks")


def render_agreement_document(
    source: DocumentSource,
    signature: SignatureInfo,
    assets: DocumentAssets,
    company_name: str,
    booking_ref: str,
    generated_at: datetime,
    currency: str = "CAD",
) -> bytes:
    """
    Lay out a rental agreement

    Args:
        source: StructuredSource or LegacySource
        signature: Signature state
        assets: Pre-fetched logo and signature image
        company_name: Printed company name
        booking_ref: Booking ID or code; the first 8 characters are printed
        generated_at: Footer timestamp
        currency: Currency code on the total row

    Returns:
        PDF bytes
    """
    code = record_code(booking_ref)
    footer = f"{company_name}  |  Generated {format_datetime_long(generated_at)}  |  Record {code}"
    renderer = DocumentRenderer(f"Rental Agreement {code}", footer_text=footer, author=company_name)
    ctx = LayoutContext()

    if isinstance(source, LegacySource):
        _render_legacy(renderer, ctx, source.text, company_name, assets)
    else:
        _render_structured(renderer, ctx, source.terms, code, assets, currency)

    ctx.section = None
    renderer.signature_block(
        ctx,
        signature.signer_name,
        signature.signed_at,
        image_bytes=assets.signature_image,
        confirmed_at=signature.confirmed_at,
        signed_manually=signature.signed_manually,
    )
    return renderer.finish(ctx)
