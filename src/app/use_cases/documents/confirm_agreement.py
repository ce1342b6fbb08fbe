"""ConfirmAgreement Use Case

Staff confirmation of a signed agreement.
"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.rental_agreement_repository import RentalAgreementRepository
from src.domain.rental_agreement import AgreementStatus
from .dtos import AgreementResponseDTO, ConfirmAgreementCommandDTO
from .mappers import agreement_to_dto


class ConfirmAgreement:
    """
    Use Case: Staff confirms a customer signature

    Business Rules:
    1. Agreement must be signed and not voided
    2. Confirming an already confirmed agreement returns it unchanged
    """

    def __init__(self, uow: UnitOfWork, agreement_repo: RentalAgreementRepository):
        self.uow = uow
        self.agreement_repo = agreement_repo

    async def execute(
        self, command: ConfirmAgreementCommandDTO, now: Optional[datetime] = None
    ) -> Result[AgreementResponseDTO]:
        try:
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
                        reason="Voided agreements cannot be confirmed",
                    )
                )
            if not agreement.is_signed:
                return Return.err(
                    Error(
                        code="AGREEMENT_NOT_SIGNED",
                        message=f"Agreement {command.agreement_id} has not been signed",
                        reason="Only signed agreements can be confirmed",
                    )
                )
            if agreement.status == AgreementStatus.CONFIRMED:
                return Return.ok(agreement_to_dto(agreement))

            confirmed_at = now or datetime.utcnow()
            agreement.staff_confirmed_by = command.staff_id
            agreement.staff_confirmed_at = confirmed_at
            agreement.status = AgreementStatus.CONFIRMED
            agreement.updated_at = confirmed_at

            updated = await self.agreement_repo.update(agreement)
            await self.uow.commit()

            return Return.ok(agreement_to_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CONFIRM_AGREEMENT_FAILED",
                    message="Failed to confirm agreement",
                    reason=str(e),
                )
            )
