"""GenerateAgreementDocument Use Case

Renders a rental agreement PDF from its stored terms, its legacy text, or
(before signing) the live booking.
"""

import base64
import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.documents.assembler import build_agreement_terms, gather_assets, signature_info
from src.app.documents.booking_record import BookingRecordLoader
from src.app.documents.filenames import agreement_filename
from src.app.documents.sources import LegacySource, resolve_agreement_source
from src.app.repositories.rental_agreement_repository import RentalAgreementRepository
from src.app.services.asset_service import AssetService
from src.app.services.pdf_service import PdfService
from .dtos import GeneratedDocumentDTO

logger = logging.getLogger(__name__)


class GenerateAgreementDocument:
    """
    Use Case: Generate rental agreement PDF

    Business Rules:
    1. Agreement must exist
    2. Stored terms win over legacy text, which wins over live booking data
    3. The live booking is only read when nothing is stored
    4. A signature image that cannot be fetched is omitted, never fatal
    """

    def __init__(
        self,
        agreement_repo: RentalAgreementRepository,
        record_loader: BookingRecordLoader,
        asset_service: AssetService,
        pdf_service: PdfService,
        filename_prefix: str = "C2C-Rental",
    ):
        self.agreement_repo = agreement_repo
        self.record_loader = record_loader
        self.asset_service = asset_service
        self.pdf_service = pdf_service
        self.filename_prefix = filename_prefix

    async def execute(
        self, agreement_id: str, generated_at: Optional[datetime] = None
    ) -> Result[GeneratedDocumentDTO]:
        """
        Execute agreement rendering

        Args:
            agreement_id: Agreement ID
            generated_at: Footer timestamp (defaults to current UTC time)

        Returns:
            Result[GeneratedDocumentDTO]: PDF or error
        """
        try:
            agreement = await self.agreement_repo.get_by_id(agreement_id)
            if not agreement:
                return Return.err(
                    Error(
                        code="AGREEMENT_NOT_FOUND",
                        message=f"Agreement {agreement_id} not found",
                        reason="Agreement does not exist",
                    )
                )

            generated_at = generated_at or datetime.utcnow()

            source = resolve_agreement_source(agreement)
            origin = "legacy" if isinstance(source, LegacySource) else "snapshot"
            if source is None:
                record = await self.record_loader.load(agreement.booking_id)
                if record is None:
                    return Return.err(
                        Error(
                            code="BOOKING_NOT_FOUND",
                            message=f"Booking {agreement.booking_id} not found",
                            reason="Agreement booking no longer exists",
                        )
                    )
                live_terms = build_agreement_terms(record, captured_at=generated_at)
                source = resolve_agreement_source(agreement, live_terms)
                origin = "live"

            signature = signature_info(agreement)
            assets = await gather_assets(self.asset_service, signature.image_url)

            pdf_bytes = self.pdf_service.render_agreement(
                source, signature, assets, agreement.booking_id, generated_at
            )

            return Return.ok(
                GeneratedDocumentDTO(
                    filename=agreement_filename(self.filename_prefix, agreement.booking_id),
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=generated_at,
                    source=origin,
                )
            )

        except Exception as e:
            logger.error(f"Agreement document generation failed for agreement {agreement_id}: {e}")
            return Return.err(
                Error(
                    code="GENERATE_AGREEMENT_DOCUMENT_FAILED",
                    message="Failed to generate agreement document",
                    reason=str(e),
                )
            )
