"""SignAgreement Use Case

Records the customer signature and freezes the agreement terms.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.documents.assembler import build_agreement_terms
from src.app.documents.booking_record import BookingRecordLoader
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.rental_agreement_repository import RentalAgreementRepository
from src.domain.rental_agreement import AgreementStatus
from .dtos import AgreementResponseDTO, SignAgreementCommandDTO
from .mappers import agreement_to_dto

logger = logging.getLogger(__name__)


class SignAgreement:
    """
    Use Case: Customer signs the rental agreement

    Business Rules:
    1. Agreement must exist, not be voided and not already be signed
    2. Structured terms are captured from the live booking exactly once,
       at signing; legacy agreements keep their stored text
    3. A manual (in-person) signature is confirmed in the same step

    Flow:
    1. Retrieve and validate agreement
    2. Capture terms snapshot
    3. Record signature (and confirmation for manual signing)
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        agreement_repo: RentalAgreementRepository,
        record_loader: BookingRecordLoader,
    ):
        self.uow = uow
        self.agreement_repo = agreement_repo
        self.record_loader = record_loader

    async def execute(
        self, command: SignAgreementCommandDTO, now: Optional[datetime] = None
    ) -> Result[AgreementResponseDTO]:
        """
        Execute agreement signing

        Args:
            command: SignAgreementCommandDTO with signer details
            now: Signing timestamp (defaults to current UTC time)

        Returns:
            Result[AgreementResponseDTO]: Signed agreement or error
        """
        try:
            # Step 1: Retrieve and validate agreement
            agreement = await self.agreement_repo.get_by_id(command.agreement_id)
            if not agreement:
                return Return.err(
                    Error(
                        code="AGREEMENT_NOT_FOUND",
                        message=f"Agreement {command.agreement_id} not found",
                        reason="Agreement does not exist",
                    )
                )
            if agreement.status == AgreementStatus.VOIDED:
                return Return.err(
                    Error(
                        code="AGREEMENT_VOIDED",
                        message=f"Agreement {command.agreement_id} is voided",
                        reason="Voided agreements cannot be signed",
                    )
                )
            if agreement.is_signed:
                return Return.err(
                    Error(
                        code="AGREEMENT_ALREADY_SIGNED",
                        message=f"Agreement {command.agreement_id} was already signed",
                        reason="Signature and terms snapshot are write-once",
                    )
                )

            signed_at = now or datetime.utcnow()

            # Step 2: Capture terms snapshot
            is_legacy = bool(agreement.agreement_content and agreement.agreement_content.strip())
            if not is_legacy and not agreement.terms_json:
                record = await self.record_loader.load(agreement.booking_id)
                if record is None:
                    return Return.err(
                        Error(
                            code="BOOKING_NOT_FOUND",
                            message=f"Booking {agreement.booking_id} not found",
                            reason="Agreement booking no longer exists",
                        )
                    )
                terms = build_agreement_terms(record, captured_at=signed_at)
                agreement.terms_json = terms.model_dump_json()

            # Step 3: Record signature
            agreement.customer_signature = command.signer_name.strip()
            agreement.customer_signed_at = signed_at
            agreement.signature_image_url = command.signature_image_url
            agreement.signed_manually = command.signed_manually
            agreement.status = AgreementStatus.SIGNED
            if command.signed_manually:
                agreement.staff_confirmed_by = command.staff_id
                agreement.staff_confirmed_at = signed_at
                agreement.status = AgreementStatus.CONFIRMED
            agreement.updated_at = signed_at

            updated = await self.agreement_repo.update(agreement)

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Agreement {updated.id} signed for booking {updated.booking_id} "
                f"(manual={command.signed_manually}, legacy={is_legacy})"
            )
            return Return.ok(agreement_to_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SIGN_AGREEMENT_FAILED",
                    message="Failed to sign agreement",
                    reason=str(e),
                )
            )
