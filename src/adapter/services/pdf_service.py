"""ReportLab PDF Generation Service Implementation

Implements PDF generation using ReportLab's canvas API with a cursor-based
layout, so section placement and page breaks are under our control.
"""

import logging
from datetime import datetime

from src.app.documents.payloads import DocumentAssets, InvoiceSnapshot, SignatureInfo
from src.app.documents.sources import DocumentSource, StructuredSource
from src.app.services.pdf_service import PdfService
from .pdf import render_agreement_document, render_invoice_document

logger = logging.getLogger(__name__)


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates invoices and rental agreements on US Letter pages with
    "Page X of Y" footers.
    """

    def __init__(
        self,
        company_name: str = "C2C Car Rental",
        contact_line: str = "",
        currency: str = "CAD",
    ):
        self.company_name = company_name
        self.contact_line = contact_line
        self.currency = currency

    def render_invoice(
        self,
        snapshot: InvoiceSnapshot,
        assets: DocumentAssets,
        generated_at: datetime,
    ) -> bytes:
        pdf_bytes = render_invoice_document(
            snapshot,
            assets,
            company_name=self.company_name,
            contact_line=self.contact_line,
            currency=snapshot.breakdown.currency or self.currency,
            generated_at=generated_at,
        )
        logger.info(f"Rendered invoice {snapshot.invoice_number} ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def render_agreement(
        self,
        source: DocumentSource,
        signature: SignatureInfo,
        assets: DocumentAssets,
        record_code: str,
        generated_at: datetime,
    ) -> bytes:
        pdf_bytes = render_agreement_document(
            source,
            signature,
            assets,
            company_name=self.company_name,
            booking_ref=record_code,
            generated_at=generated_at,
            currency=self._currency_for(source),
        )
        logger.info(f"Rendered agreement {record_code} ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _currency_for(self, source: DocumentSource) -> str:
        """Signed terms keep the currency they were captured in"""
        if isinstance(source, StructuredSource) and source.terms.breakdown.currency:
            return source.terms.breakdown.currency
        return self.currency
