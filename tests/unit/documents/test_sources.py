"""Unit tests for agreement source resolution"""

import pytest
from datetime import datetime

from src.app.documents.assembler import build_agreement_terms
from src.app.documents.sources import LegacySource, StructuredSource, parse_terms, resolve_agreement_source
from src.domain.rental_agreement import AgreementStatus, RentalAgreement


@pytest.fixture
def terms(sample_record):
    return build_agreement_terms(sample_record, captured_at=datetime(2025, 3, 6, 9, 45))


class TestResolveAgreementSource:
    def test_stored_terms_win(self, terms):
        agreement = RentalAgreement(
            booking_id="b1", terms_json=terms.model_dump_json(), agreement_content="OLD TEXT"
        )

        source = resolve_agreement_source(agreement)

        assert isinstance(source, StructuredSource)
        assert source.terms == terms

    def test_legacy_text_before_live_terms(self, terms):
        agreement = RentalAgreement(booking_id="b1", agreement_content="RENTAL AGREEMENT\nName: Jane")

        source = resolve_agreement_source(agreement, live_terms=terms)

        assert isinstance(source, LegacySource)
        assert source.text.startswith("RENTAL AGREEMENT")

    def test_blank_legacy_text_is_ignored(self, terms):
        agreement = RentalAgreement(booking_id="b1", agreement_content="   \n ")

        source = resolve_agreement_source(agreement, live_terms=terms)

        assert isinstance(source, StructuredSource)

    def test_nothing_available(self):
        assert resolve_agreement_source(RentalAgreement(booking_id="b1")) is None

    def test_signed_without_stored_terms_warns(self, terms, caplog):
        agreement = RentalAgreement(
            id="a1", booking_id="b1", status=AgreementStatus.SIGNED, customer_signed_at=datetime(2025, 3, 6)
        )

        with caplog.at_level("WARNING"):
            source = resolve_agreement_source(agreement, live_terms=terms)

        assert isinstance(source, StructuredSource)
        assert "a1" in caplog.text


class TestParseTerms:
    def test_unreadable_terms_are_ignored(self):
        assert parse_terms('{"booking_code": 1}') is None
        assert parse_terms(None) is None

    def test_round_trip_preserves_amounts(self, terms):
        parsed = parse_terms(terms.model_dump_json())

        assert parsed.breakdown.subtotal == terms.breakdown.subtotal
        assert parsed.breakdown.line_items == terms.breakdown.line_items
