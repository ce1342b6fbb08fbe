"""CreateAgreement Use Case

Opens the rental agreement for a booking.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.booking_repository import BookingRepository
from src.app.repositories.rental_agreement_repository import RentalAgreementRepository
from src.domain.rental_agreement import AgreementStatus, RentalAgreement
from .dtos import AgreementResponseDTO, CreateAgreementCommandDTO
from .mappers import agreement_to_dto


class CreateAgreement:
    """
    Use Case: Create pending agreement

    Business Rules:
    1. Booking must exist
    2. One agreement per booking; an existing agreement is returned as-is
    3. A voided agreement is not reopened
    4. Terms are not captured here; they are frozen at signing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        agreement_repo: RentalAgreementRepository,
        booking_repo: BookingRepository,
    ):
        self.uow = uow
        self.agreement_repo = agreement_repo
        self.booking_repo = booking_repo

    async def execute(self, command: CreateAgreementCommandDTO) -> Result[AgreementResponseDTO]:
        try:
            booking = await self.booking_repo.get_by_id(command.booking_id)
            if not booking:
                return Return.err(
                    Error(
                        code="BOOKING_NOT_FOUND",
                        message=f"Booking {command.booking_id} not found",
                        reason="Booking does not exist",
                    )
                )

            existing = await self.agreement_repo.get_by_booking_id(command.booking_id)
            if existing:
                if existing.status == AgreementStatus.VOIDED:
                    return Return.err(
                        Error(
                            code="AGREEMENT_VOIDED",
                            message=f"Agreement for booking {command.booking_id} was voided",
                            reason="Voided agreements are not reopened",
                        )
                    )
                return Return.ok(agreement_to_dto(existing))

            agreement = await self.agreement_repo.create(
                RentalAgreement(booking_id=command.booking_id, status=AgreementStatus.PENDING)
            )
            await self.uow.commit()

            return Return.ok(agreement_to_dto(agreement))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_AGREEMENT_FAILED",
                    message="Failed to create agreement",
                    reason=str(e),
                )
            )
