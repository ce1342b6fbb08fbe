"""Unit tests for document payload assembly"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.documents.assembler import build_agreement_terms, build_invoice_snapshot, gather_assets
from src.domain.invoice import Invoice, InvoiceStatus


@pytest.fixture
def draft_invoice(sample_booking):
    return Invoice(
        id=1,
        booking_id=sample_booking.id,
        invoice_number="INV-2025-000001",
        status=InvoiceStatus.DRAFT,
        currency="CAD",
        late_fees=Decimal("25.00"),
        damage_charges=Decimal("100.00"),
        payments_received=Decimal("224.00"),
        deposit_held=Decimal("250.00"),
        deposit_released=Decimal("0"),
        deposit_captured=Decimal("0"),
        created_at=datetime(2025, 3, 9),
        updated_at=datetime(2025, 3, 9),
    )


class TestInvoiceSnapshot:
    def test_grand_total_includes_late_and_damage(self, draft_invoice, sample_record):
        snapshot = build_invoice_snapshot(draft_invoice, sample_record)

        assert snapshot.breakdown.grand_total == Decimal("224.00")
        assert snapshot.grand_total == Decimal("349.00")
        assert snapshot.amount_due == Decimal("125.00")
        assert snapshot.status == "draft"

    def test_amount_due_is_never_negative(self, draft_invoice, sample_record):
        draft_invoice.payments_received = Decimal("500.00")

        snapshot = build_invoice_snapshot(draft_invoice, sample_record)

        assert snapshot.amount_due == Decimal("0.00")

    def test_captured_deposit_settles_balance(self, draft_invoice, sample_record):
        draft_invoice.late_fees = Decimal("0")
        draft_invoice.damage_charges = Decimal("0")
        draft_invoice.payments_received = Decimal("0")
        draft_invoice.deposit_captured = Decimal("250.00")

        snapshot = build_invoice_snapshot(draft_invoice, sample_record)

        assert snapshot.grand_total == Decimal("224.00")
        assert snapshot.amount_due == Decimal("0.00")

    def test_captured_deposit_reduces_amount_due(self, draft_invoice, sample_record):
        draft_invoice.deposit_captured = Decimal("25.00")

        snapshot = build_invoice_snapshot(draft_invoice, sample_record)

        assert snapshot.amount_due == Decimal("100.00")

    def test_carries_customer_and_vehicle(self, draft_invoice, sample_record):
        snapshot = build_invoice_snapshot(draft_invoice, sample_record)

        assert snapshot.customer.name == "Jane Doe"
        assert snapshot.vehicle_name == "Economy"
        assert snapshot.booking_code == "C2C-0001"


class TestAgreementTerms:
    def test_terms_capture_breakdown_and_fees(self, sample_record):
        captured_at = datetime(2025, 3, 6, 9, 45)

        terms = build_agreement_terms(sample_record, captured_at=captured_at)

        assert terms.breakdown.vehicle_total == Decimal("140.00")
        assert terms.pvrt_daily_fee == Decimal("1.50")
        assert terms.acsrch_daily_fee == Decimal("1.00")
        assert terms.captured_at == captured_at
        assert terms.vehicle.tank_capacity_liters == 45

    def test_snapshot_is_independent_of_later_booking_edits(self, sample_record):
        terms = build_agreement_terms(sample_record, captured_at=datetime(2025, 3, 6))
        stored = terms.model_dump_json()

        sample_record.booking.subtotal = Decimal("999.00")
        sample_record.booking.daily_rate = Decimal("300.00")

        assert terms.model_dump_json() == stored
        assert terms.breakdown.subtotal == Decimal("200.00")


@pytest.mark.asyncio
class TestGatherAssets:
    async def test_fetches_logo_and_signature(self):
        asset_service = MagicMock()
        asset_service.fetch_logo = AsyncMock(return_value=b"logo")
        asset_service.fetch_image = AsyncMock(return_value=b"sig")

        assets = await gather_assets(asset_service, "https://cdn.example.com/sig.png")

        assert assets.logo == b"logo"
        assert assets.signature_image == b"sig"
        asset_service.fetch_image.assert_awaited_once_with("https://cdn.example.com/sig.png")

    async def test_failures_become_none(self):
        asset_service = MagicMock()
        asset_service.fetch_logo = AsyncMock(side_effect=OSError("disk"))
        asset_service.fetch_image = AsyncMock(side_effect=RuntimeError("network"))

        assets = await gather_assets(asset_service, "https://cdn.example.com/sig.png")

        assert assets.logo is None
        assert assets.signature_image is None

    async def test_no_signature_url_skips_fetch(self):
        asset_service = MagicMock()
        asset_service.fetch_logo = AsyncMock(return_value=None)
        asset_service.fetch_image = AsyncMock()

        assets = await gather_assets(asset_service)

        assert assets.signature_image is None
        asset_service.fetch_image.assert_not_called()
