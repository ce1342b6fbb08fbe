"""Unit tests for ReportLabPdfService"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from src.adapter.services import pdf_service as pdf_service_module
from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.documents.assembler import build_agreement_terms, build_invoice_snapshot
from src.app.documents.payloads import DocumentAssets, SignatureInfo
from src.app.documents.sources import LegacySource, StructuredSource
from src.domain.invoice import Invoice, InvoiceStatus

GENERATED_AT = datetime(2025, 3, 6, 10, 0)


def test_render_agreement_logs_size(sample_record, caplog):
    service = ReportLabPdfService(company_name="C2C Car Rental")
    terms = build_agreement_terms(sample_record, captured_at=datetime(2025, 3, 6, 9, 45))

    with caplog.at_level("INFO"):
        pdf_bytes = service.render_agreement(
            StructuredSource(terms=terms),
            SignatureInfo(),
            DocumentAssets(),
            "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20",
            GENERATED_AT,
        )

    assert pdf_bytes.startswith(b"%PDF")
    assert f"({len(pdf_bytes)} bytes)" in caplog.text


def test_issued_invoice_keeps_snapshot_currency(sample_record, monkeypatch):
    render = MagicMock(return_value=b"%PDF-1.4")
    monkeypatch.setattr(pdf_service_module, "render_invoice_document", render)
    invoice = Invoice(
        id=1,
        booking_id=sample_record.booking.id,
        invoice_number="INV-2025-000001",
        status=InvoiceStatus.ISSUED,
        late_fees=Decimal("0"),
        damage_charges=Decimal("0"),
        payments_received=Decimal("0"),
        deposit_captured=Decimal("0"),
    )
    snapshot = build_invoice_snapshot(invoice, sample_record)
    snapshot = snapshot.model_copy(
        update={"breakdown": snapshot.breakdown.model_copy(update={"currency": "USD"})}
    )

    ReportLabPdfService(currency="CAD").render_invoice(snapshot, DocumentAssets(), GENERATED_AT)

    assert render.call_args.kwargs["currency"] == "USD"


def test_agreement_currency_follows_source(sample_record, monkeypatch):
    render = MagicMock(return_value=b"%PDF-1.4")
    monkeypatch.setattr(pdf_service_module, "render_agreement_document", render)
    terms = build_agreement_terms(sample_record, captured_at=datetime(2025, 3, 6, 9, 45))
    terms = terms.model_copy(update={"breakdown": terms.breakdown.model_copy(update={"currency": "USD"})})
    service = ReportLabPdfService(currency="CAD")

    service.render_agreement(StructuredSource(terms=terms), SignatureInfo(), DocumentAssets(), "6F1C2A9E", GENERATED_AT)
    assert render.call_args.kwargs["currency"] == "USD"

    service.render_agreement(LegacySource(text="TERMS"), SignatureInfo(), DocumentAssets(), "6F1C2A9E", GENERATED_AT)
    assert render.call_args.kwargs["currency"] == "CAD"
