"""Unit tests for GenerateInvoiceDocument use case

Tests cover:
- Draft invoices render live booking data
- Issued invoices render the stored snapshot without reading the booking
- Unreadable snapshots fall back to live data
- The header status tracks the invoice row after issue
- Filename and base64 payload
"""

import base64
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.documents.assembler import build_invoice_snapshot
from src.app.use_cases.documents import GenerateInvoiceDocument
from src.domain.invoice import Invoice, InvoiceStatus

GENERATED_AT = datetime(2025, 3, 10, 8, 0)


@pytest.fixture
def invoice(sample_booking):
    return Invoice(
        id=1,
        booking_id=sample_booking.id,
        invoice_number="INV-2025-000001",
        status=InvoiceStatus.DRAFT,
        currency="CAD",
        late_fees=Decimal("0"),
        damage_charges=Decimal("0"),
        payments_received=Decimal("0"),
        deposit_held=Decimal("0"),
        deposit_released=Decimal("0"),
        deposit_captured=Decimal("0"),
    )


@pytest.fixture
def mock_invoice_repo(invoice):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=invoice)
    return repo


@pytest.fixture
def mock_pdf_service():
    service = MagicMock()
    service.render_invoice = MagicMock(return_value=b"%PDF-1.4 invoice")
    return service


@pytest.fixture
def use_case(mock_invoice_repo, mock_record_loader, mock_asset_service, mock_pdf_service):
    return GenerateInvoiceDocument(
        invoice_repo=mock_invoice_repo,
        record_loader=mock_record_loader,
        asset_service=mock_asset_service,
        pdf_service=mock_pdf_service,
    )


@pytest.mark.asyncio
class TestGenerateInvoiceDocument:
    async def test_draft_renders_live(self, use_case, mock_pdf_service, mock_record_loader):
        result = await use_case.execute(1, generated_at=GENERATED_AT)

        assert result.is_ok()
        document = result.value
        assert document.source == "live"
        assert document.filename == "Invoice-INV-2025-000001.pdf"
        assert base64.b64decode(document.pdf_base64) == b"%PDF-1.4 invoice"
        assert document.generated_at == GENERATED_AT
        mock_record_loader.load.assert_awaited_once()

        snapshot, assets, generated_at = mock_pdf_service.render_invoice.call_args.args
        assert snapshot.breakdown.subtotal == Decimal("200.00")
        assert assets.logo is None
        assert generated_at == GENERATED_AT

    async def test_issued_renders_stored_snapshot(
        self, use_case, invoice, sample_record, mock_record_loader, mock_pdf_service
    ):
        """
        Given: An issued invoice whose booking was edited afterwards
        When: The document is rendered
        Then: The stored amounts are used and the booking is not read
        """
        invoice.status = InvoiceStatus.ISSUED
        invoice.snapshot_json = build_invoice_snapshot(invoice, sample_record).model_dump_json()
        sample_record.booking.subtotal = Decimal("999.00")

        result = await use_case.execute(1, generated_at=GENERATED_AT)

        assert result.is_ok()
        assert result.value.source == "snapshot"
        mock_record_loader.load.assert_not_called()
        snapshot = mock_pdf_service.render_invoice.call_args.args[0]
        assert snapshot.breakdown.subtotal == Decimal("200.00")

    async def test_status_follows_invoice_after_issue(
        self, use_case, invoice, sample_record, mock_pdf_service
    ):
        invoice.status = InvoiceStatus.ISSUED
        invoice.snapshot_json = build_invoice_snapshot(invoice, sample_record).model_dump_json()
        invoice.status = InvoiceStatus.PAID

        result = await use_case.execute(1, generated_at=GENERATED_AT)

        assert result.is_ok()
        snapshot = mock_pdf_service.render_invoice.call_args.args[0]
        assert snapshot.status == "paid"
        assert snapshot.breakdown.subtotal == Decimal("200.00")

    async def test_unreadable_snapshot_falls_back_to_live(self, use_case, invoice, caplog):
        invoice.snapshot_json = '{"invoice_number": 5}'

        with caplog.at_level("WARNING"):
            result = await use_case.execute(1, generated_at=GENERATED_AT)

        assert result.is_ok()
        assert result.value.source == "live"
        assert "unreadable" in caplog.text

    async def test_invoice_not_found(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(42)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_render_failure(self, use_case, mock_pdf_service):
        mock_pdf_service.render_invoice.side_effect = RuntimeError("layout failed")

        result = await use_case.execute(1)

        assert result.is_err()
        assert result.error.code == "GENERATE_INVOICE_DOCUMENT_FAILED"
