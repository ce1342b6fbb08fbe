"""Agreement document sources

An agreement renders from exactly one source: a structured terms payload or
the free-text content stored by the previous agreement generator.
"""

import logging
from typing import Optional, Union
from pydantic import BaseModel, ValidationError

from src.domain.rental_agreement import RentalAgreement
from .payloads import AgreementTerms

logger = logging.getLogger(__name__)


class StructuredSource(BaseModel):
    terms: AgreementTerms


class LegacySource(BaseModel):
    text: str


DocumentSource = Union[StructuredSource, LegacySource]


def parse_terms(terms_json: Optional[str]) -> Optional[AgreementTerms]:
    """Parse stored terms_json; unreadable payloads are logged and ignored"""
    if not terms_json:
        return None
    try:
        return AgreementTerms.model_validate_json(terms_json)
    except ValidationError as e:
        logger.warning(f"Stored agreement terms are unreadable: {e.error_count()} validation errors")
        return None


def resolve_agreement_source(
    agreement: RentalAgreement, live_terms: Optional[AgreementTerms] = None
) -> Optional[DocumentSource]:
    """
    Pick the source an agreement renders from

    Order: stored terms snapshot, stored legacy text, terms built from the
    live booking. Returns None when none is available.
    """
    stored = parse_terms(agreement.terms_json)
    if stored is not None:
        return StructuredSource(terms=stored)
    if agreement.agreement_content and agreement.agreement_content.strip():
        return LegacySource(text=agreement.agreement_content)
    if live_terms is not None:
        if agreement.is_signed:
            logger.warning(f"Signed agreement {agreement.id} has no stored terms, rendering live booking data")
        return StructuredSource(terms=live_terms)
    return None
