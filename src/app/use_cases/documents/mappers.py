"""Entity and value-object to DTO mapping shared by document use cases"""

from src.app.pricing.models import ChargeBreakdown
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.rental_agreement import AgreementStatus, RentalAgreement
from .dtos import (
    AgreementResponseDTO,
    ChargeBreakdownResponseDTO,
    InvoiceResponseDTO,
    LineItemDTO,
    TaxDTO,
)


def breakdown_to_dto(booking_id: str, breakdown: ChargeBreakdown) -> ChargeBreakdownResponseDTO:
    return ChargeBreakdownResponseDTO(
        booking_id=booking_id,
        booking_code=breakdown.booking_code,
        currency=breakdown.currency,
        total_days=breakdown.total_days,
        daily_rate=breakdown.daily_rate,
        line_items=[
            LineItemDTO(
                description=item.description,
                amount=item.amount,
                quantity=item.quantity,
                category=item.category,
            )
            for item in breakdown.line_items
        ],
        protection_plan=breakdown.protection.label if breakdown.protection else None,
        protection_daily_rate=breakdown.protection.daily_rate if breakdown.protection else None,
        vehicle_total=breakdown.vehicle_total,
        add_ons_total=breakdown.add_ons_total,
        drivers_total=breakdown.drivers_total,
        regulatory_total=breakdown.regulatory_total,
        subtotal=breakdown.subtotal,
        itemized_total=breakdown.itemized_total,
        discrepancy=breakdown.discrepancy,
        is_balanced=breakdown.is_balanced,
        taxes=TaxDTO(**breakdown.taxes.model_dump()),
        grand_total=breakdown.grand_total,
        deposit=breakdown.deposit,
        used_remainder=breakdown.reconciliation.used_remainder,
        extras_likely_missing=breakdown.reconciliation.extras_likely_missing,
    )


def invoice_to_dto(invoice: Invoice) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        invoice_id=invoice.id,
        booking_id=invoice.booking_id,
        invoice_number=invoice.invoice_number,
        status=InvoiceStatus(invoice.status).value,
        currency=invoice.currency,
        late_fees=invoice.late_fees,
        damage_charges=invoice.damage_charges,
        payments_received=invoice.payments_received,
        has_snapshot=bool(invoice.snapshot_json),
        issued_at=invoice.issued_at,
        created_at=invoice.created_at,
    )


def agreement_to_dto(agreement: RentalAgreement) -> AgreementResponseDTO:
    return AgreementResponseDTO(
        agreement_id=agreement.id,
        booking_id=agreement.booking_id,
        status=AgreementStatus(agreement.status).value,
        signer_name=agreement.customer_signature,
        signed_at=agreement.customer_signed_at,
        signed_manually=bool(agreement.signed_manually),
        confirmed_by=agreement.staff_confirmed_by,
        confirmed_at=agreement.staff_confirmed_at,
        has_structured_terms=agreement.has_structured_terms,
        is_legacy=bool(agreement.agreement_content and agreement.agreement_content.strip()),
        created_at=agreement.created_at,
    )
