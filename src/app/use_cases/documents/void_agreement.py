"""VoidAgreement Use Case"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.rental_agreement_repository import RentalAgreementRepository
from src.domain.rental_agreement import AgreementStatus
from .dtos import AgreementResponseDTO
from .mappers import agreement_to_dto

logger = logging.getLogger(__name__)


class VoidAgreement:
    """
    Use Case: Void an agreement

    Stored terms and signature are kept for the record; voiding an already
    voided agreement is a no-op.
    """

    def __init__(self, uow: UnitOfWork, agreement_repo: RentalAgreementRepository):
        self.uow = uow
        self.agreement_repo = agreement_repo

    async def execute(self, agreement_id: str, now: Optional[datetime] = None) -> Result[AgreementResponseDTO]:
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
            if agreement.status == AgreementStatus.VOIDED:
                return Return.ok(agreement_to_dto(agreement))

            agreement.status = AgreementStatus.VOIDED
            agreement.updated_at = now or datetime.utcnow()
            updated = await self.agreement_repo.update(agreement)
            await self.uow.commit()

            logger.info(f"Agreement {agreement_id} voided")
            return Return.ok(agreement_to_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="VOID_AGREEMENT_FAILED",
                    message="Failed to void agreement",
                    reason=str(e),
                )
            )
