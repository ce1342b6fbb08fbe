"""PDF Generation Service Interface

Defines the contract for rendering rental documents.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from src.app.documents.payloads import DocumentAssets, InvoiceSnapshot, SignatureInfo
from src.app.documents.sources import DocumentSource


class PdfService(ABC):
    """
    Service interface for PDF generation

    Rendering is synchronous and deterministic: identical arguments produce
    identical bytes. Assets must be fetched before calling.
    """

    @abstractmethod
    def render_invoice(
        self,
        snapshot: InvoiceSnapshot,
        assets: DocumentAssets,
        generated_at: datetime,
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            snapshot: Invoice payload (stored snapshot or live draft)
            assets: Pre-fetched images
            generated_at: Timestamp printed in the page footer

        Returns:
            PDF document as bytes
        """
        pass

    @abstractmethod
    def render_agreement(
        self,
        source: DocumentSource,
        signature: SignatureInfo,
        assets: DocumentAssets,
        record_code: str,
        generated_at: datetime,
    ) -> bytes:
        """
        Render a rental agreement PDF

        Args:
            source: Structured terms or legacy text
            signature: Signature state for the signature block
            assets: Pre-fetched images
            record_code: Short booking reference printed on the document
            generated_at: Timestamp printed in the page footer

        Returns:
            PDF document as bytes
        """
        pass
