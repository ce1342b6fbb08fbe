"""Invoice layout"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from src.app.documents.payloads import DocumentAssets, InvoiceSnapshot
from src.app.pricing.money import format_amount, format_percent, to_minor_units
from .formatting import DASH, format_date_long, format_date_short, format_datetime_long
from .layout import LayoutContext
from .renderer import ALERT_ROW, BOLD, GRAND_TOTAL, MUTED, DocumentRenderer


def render_invoice_document(
    snapshot: InvoiceSnapshot,
    assets: DocumentAssets,
    company_name: str,
    contact_line: str,
    currency: str,
    generated_at: datetime,
    website_line: Optional[str] = None,
) -> bytes:
    """
    Lay out an invoice

    Sections: header, customer, booking, itemized charges, subtotal and
    taxes, grand total, deposits, payment summary, notes.
    """
    footer = f"{company_name}  |  Invoice {snapshot.invoice_number}  |  Generated {format_datetime_long(generated_at)}"
    renderer = DocumentRenderer(f"Invoice {snapshot.invoice_number}", footer_text=footer, author=company_name)
    ctx = LayoutContext()
    breakdown = snapshot.breakdown
    adjustments = snapshot.adjustments

    renderer.header(
        ctx,
        company_name.upper(),
        subtitle="INVOICE",
        logo=assets.logo,
        right_lines=[f"STATUS: {snapshot.status.upper()}"],
    )
    renderer.banner(ctx, contact_line)
    renderer.key_value_pair(ctx, "Invoice Number:", snapshot.invoice_number)
    renderer.key_value_pair(ctx, "Date Issued:", format_date_long(snapshot.issued_at))
    renderer.rule(ctx)

    renderer.section_heading(ctx, "CUSTOMER INFORMATION")
    renderer.key_value_pair(ctx, "Name:", snapshot.customer.name or DASH)
    renderer.key_value_pair(ctx, "Email:", snapshot.customer.email or DASH)
    if snapshot.customer.phone:
        renderer.key_value_pair(ctx, "Phone:", snapshot.customer.phone)
    renderer.rule(ctx)

    renderer.section_heading(ctx, "BOOKING DETAILS")
    renderer.key_value_pair(ctx, "Booking Code:", snapshot.booking_code)
    renderer.key_value_pair(ctx, "Vehicle:", snapshot.vehicle_name or DASH)
    renderer.key_value_pair(ctx, "Pickup:", snapshot.locations.pickup)
    renderer.key_value_pair(ctx, "Return:", snapshot.locations.return_location)
    if snapshot.locations.delivery_address:
        renderer.key_value_row(ctx, "Delivery:", snapshot.locations.delivery_address)
    rental = snapshot.rental
    renderer.key_value_row(
        ctx,
        "Rental Period:",
        f"{format_date_short(rental.start_at)} — {format_date_short(rental.end_at)} ({rental.total_days} days)",
    )
    renderer.rule(ctx)

    renderer.section_heading(ctx, "CHARGES")
    renderer.table_header(ctx, "Description", "Amount")
    for item in breakdown.line_items:
        renderer.table_row(ctx, item.description, item.amount)
    renderer.spacer(ctx, 2)
    renderer.rule(ctx)

    renderer.table_row(ctx, "SUBTOTAL:", breakdown.subtotal, emphasis=BOLD, indent=0)
    renderer.section_heading(ctx, "TAXES")
    taxes = breakdown.taxes
    if to_minor_units(taxes.primary_amount) > 0 or to_minor_units(taxes.secondary_amount) > 0:
        renderer.table_row(
            ctx, f"{taxes.primary_label} ({format_percent(taxes.primary_rate)}):", taxes.primary_amount, indent=8
        )
        renderer.table_row(
            ctx, f"{taxes.secondary_label} ({format_percent(taxes.secondary_rate)}):", taxes.secondary_amount, indent=8
        )
    else:
        renderer.table_row(ctx, f"Taxes ({taxes.primary_label} + {taxes.secondary_label})", taxes.total, indent=8)

    if to_minor_units(adjustments.late_fees) > 0:
        renderer.table_row(ctx, "Late Return Fees", adjustments.late_fees, indent=8)
    if to_minor_units(adjustments.damage_charges) > 0:
        renderer.table_row(ctx, "Damage Charges", adjustments.damage_charges, emphasis=ALERT_ROW, indent=8)

    renderer.table_row(ctx, "GRAND TOTAL:", snapshot.grand_total, emphasis=GRAND_TOTAL, currency=currency)

    for label, amount in (
        ("Security Deposit (held):", adjustments.deposit_held),
        ("Deposit Captured:", adjustments.deposit_captured),
        ("Deposit Released:", adjustments.deposit_released),
    ):
        if to_minor_units(amount) > 0:
            renderer.table_row(ctx, label, amount, indent=0)
    renderer.rule(ctx)

    renderer.section_heading(ctx, "PAYMENT SUMMARY")
    renderer.table_row(ctx, "Grand Total:", snapshot.grand_total, indent=0)
    if to_minor_units(adjustments.payments_received) > 0:
        renderer.table_row(ctx, "Payments Received:", adjustments.payments_received, indent=0)
    if to_minor_units(snapshot.amount_due) > 0:
        renderer.status_box(ctx, "AMOUNT DUE:", f"{format_amount(snapshot.amount_due)} {currency}", settled=False)
    else:
        renderer.status_box(ctx, "PAID IN FULL", format_amount(Decimal("0")), settled=True)

    if snapshot.notes:
        renderer.rule(ctx)
        renderer.section_heading(ctx, "NOTES")
        renderer.paragraph(ctx, snapshot.notes, size=6.5, color=MUTED)

    ctx.section = None
    renderer.rule(ctx)
    renderer.paragraph(ctx, f"This invoice is generated for booking {snapshot.booking_code}.", size=5.5, color=MUTED)
    if website_line:
        renderer.paragraph(ctx, website_line, size=5.5, color=MUTED)
    renderer.paragraph(
        ctx,
        "Refund and cancellation policies apply as per your rental agreement terms.",
        size=5.5,
        color=MUTED,
    )
    return renderer.finish(ctx)
