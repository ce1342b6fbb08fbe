"""Unit tests for GenerateAgreementDocument use case

Tests cover:
- Source selection: stored terms, legacy text, live booking
- Signature image fetched only when a URL is stored
- Filename uses the booking record code
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.documents.assembler import build_agreement_terms
from src.app.documents.sources import LegacySource, StructuredSource
from src.app.use_cases.documents import GenerateAgreementDocument
from src.domain.rental_agreement import AgreementStatus, RentalAgreement

GENERATED_AT = datetime(2025, 3, 6, 10, 0)


@pytest.fixture
def agreement(sample_booking):
    return RentalAgreement(id="agreement_1", booking_id=sample_booking.id, status=AgreementStatus.PENDING)


@pytest.fixture
def mock_agreement_repo(agreement):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=agreement)
    return repo


@pytest.fixture
def mock_pdf_service():
    service = MagicMock()
    service.render_agreement = MagicMock(return_value=b"%PDF-1.4 agreement")
    return service


@pytest.fixture
def use_case(mock_agreement_repo, mock_record_loader, mock_asset_service, mock_pdf_service):
    return GenerateAgreementDocument(
        agreement_repo=mock_agreement_repo,
        record_loader=mock_record_loader,
        asset_service=mock_asset_service,
        pdf_service=mock_pdf_service,
    )


@pytest.mark.asyncio
class TestGenerateAgreementDocument:
    async def test_unsigned_renders_live_booking(self, use_case, mock_pdf_service, mock_record_loader):
        result = await use_case.execute("agreement_1", generated_at=GENERATED_AT)

        assert result.is_ok()
        assert result.value.source == "live"
        assert result.value.filename == "C2C-Rental-6F1C2A9E.pdf"
        mock_record_loader.load.assert_awaited_once()

        source, signature, assets, booking_ref, generated_at = mock_pdf_service.render_agreement.call_args.args
        assert isinstance(source, StructuredSource)
        assert signature.signer_name is None
        assert booking_ref == "6f1c2a9e-3b7d-4a53-9a55-0c8d2f4e1b20"
        assert generated_at == GENERATED_AT

    async def test_signed_renders_stored_terms(
        self, use_case, agreement, sample_record, mock_record_loader, mock_pdf_service, mock_asset_service
    ):
        """
        Given: A signed agreement whose booking changed after signing
        When: The document is rendered
        Then: Stored terms are used and the booking is not read
        """
        terms = build_agreement_terms(sample_record, captured_at=datetime(2025, 3, 6, 9, 50))
        agreement.terms_json = terms.model_dump_json()
        agreement.status = AgreementStatus.SIGNED
        agreement.customer_signature = "Jane Doe"
        agreement.customer_signed_at = datetime(2025, 3, 6, 9, 50)
        agreement.signature_image_url = "https://cdn.example.com/sig.png"
        sample_record.booking.daily_rate = Decimal("300.00")

        result = await use_case.execute("agreement_1", generated_at=GENERATED_AT)

        assert result.is_ok()
        assert result.value.source == "snapshot"
        mock_record_loader.load.assert_not_called()
        mock_asset_service.fetch_image.assert_awaited_once_with("https://cdn.example.com/sig.png")
        source, signature = mock_pdf_service.render_agreement.call_args.args[:2]
        assert source.terms.breakdown.daily_rate == Decimal("50.00")
        assert signature.signer_name == "Jane Doe"

    async def test_legacy_text(self, use_case, agreement, mock_record_loader, mock_pdf_service, mock_asset_service):
        agreement.agreement_content = "RENTAL AGREEMENT\nName: Jane Doe"

        result = await use_case.execute("agreement_1", generated_at=GENERATED_AT)

        assert result.is_ok()
        assert result.value.source == "legacy"
        mock_record_loader.load.assert_not_called()
        mock_asset_service.fetch_image.assert_not_called()
        assert isinstance(mock_pdf_service.render_agreement.call_args.args[0], LegacySource)

    async def test_agreement_not_found(self, use_case, mock_agreement_repo):
        mock_agreement_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("missing")

        assert result.is_err()
        assert result.error.code == "AGREEMENT_NOT_FOUND"

    async def test_booking_not_found(self, use_case, mock_record_loader):
        mock_record_loader.load = AsyncMock(return_value=None)

        result = await use_case.execute("agreement_1")

        assert result.is_err()
        assert result.error.code == "BOOKING_NOT_FOUND"
