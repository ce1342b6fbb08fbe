"""GenerateInvoiceDocument Use Case

Renders an invoice PDF from its issued snapshot, or from live booking data
while the invoice is still a draft.
"""

import base64
import logging
from datetime import datetime
from typing import Optional
from pydantic import ValidationError
from libs.result import Result, Return, Error
from src.app.documents.assembler import build_invoice_snapshot, gather_assets
from src.app.documents.booking_record import BookingRecordLoader
from src.app.documents.filenames import invoice_filename
from src.app.documents.payloads import InvoiceSnapshot
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.asset_service import AssetService
from src.app.services.pdf_service import PdfService
from src.domain.invoice import InvoiceStatus
from .dtos import GeneratedDocumentDTO

logger = logging.getLogger(__name__)


class GenerateInvoiceDocument:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist
    2. An issued invoice renders amounts from its stored snapshot only;
       the header status follows the invoice row
    3. A draft renders from the current booking
    4. Logo failures never block the document

    Flow:
    1. Retrieve invoice
    2. Resolve snapshot (stored or live)
    3. Fetch assets
    4. Render PDF and return it base64-encoded
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        record_loader: BookingRecordLoader,
        asset_service: AssetService,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.record_loader = record_loader
        self.asset_service = asset_service
        self.pdf_service = pdf_service

    async def execute(
        self, invoice_id: int, generated_at: Optional[datetime] = None
    ) -> Result[GeneratedDocumentDTO]:
        """
        Execute invoice rendering

        Args:
            invoice_id: Invoice ID
            generated_at: Footer timestamp (defaults to current UTC time)

        Returns:
            Result[GeneratedDocumentDTO]: PDF or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Resolve snapshot
            snapshot = self._stored_snapshot(invoice.id, invoice.snapshot_json)
            source = "snapshot"
            if snapshot is not None:
                # Amounts are frozen at issue; paid/voided status is not
                snapshot = snapshot.model_copy(update={"status": InvoiceStatus(invoice.status).value})
            if snapshot is None:
                record = await self.record_loader.load(invoice.booking_id)
                if record is None:
                    return Return.err(
                        Error(
                            code="BOOKING_NOT_FOUND",
                            message=f"Booking {invoice.booking_id} not found",
                            reason="Invoiced booking no longer exists",
                        )
                    )
                snapshot = build_invoice_snapshot(invoice, record)
                source = "live"

            # Step 3: Fetch assets
            assets = await gather_assets(self.asset_service)

            # Step 4: Render
            generated_at = generated_at or datetime.utcnow()
            pdf_bytes = self.pdf_service.render_invoice(snapshot, assets, generated_at)

            return Return.ok(
                GeneratedDocumentDTO(
                    filename=invoice_filename(invoice.invoice_number),
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=generated_at,
                    source=source,
                )
            )

        except Exception as e:
            logger.error(f"Invoice document generation failed for invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_DOCUMENT_FAILED",
                    message="Failed to generate invoice document",
                    reason=str(e),
                )
            )

    @staticmethod
    def _stored_snapshot(invoice_id: int, snapshot_json: Optional[str]) -> Optional[InvoiceSnapshot]:
        if not snapshot_json:
            return None
        try:
            return InvoiceSnapshot.model_validate_json(snapshot_json)
        except ValidationError as e:
            logger.warning(
                f"Invoice {invoice_id} snapshot is unreadable ({e.error_count()} errors), rendering live data"
            )
            return None
