"""CreateInvoice Use Case

Creates a draft invoice for a rental booking.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.booking_repository import BookingRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .mappers import invoice_to_dto


class CreateInvoice:
    """
    Use Case: Create draft invoice for a booking

    Business Rules:
    1. Booking must exist
    2. One live (non-voided) invoice per booking
    3. Invoice number is auto-generated (INV-YYYY-NNNNNN)
    4. Invoice is created with status=draft; charges stay live until issue

    Flow:
    1. Verify booking exists
    2. Check for duplicate invoice
    3. Generate unique invoice number
    4. Create invoice with status=draft
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        booking_repo: BookingRepository,
        currency: str = "CAD",
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.booking_repo = booking_repo
        self.currency = currency

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with booking_id and post-rental extras

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        try:
            # Step 1: Verify booking
            booking = await self.booking_repo.get_by_id(command.booking_id)
            if not booking:
                return Return.err(
                    Error(
                        code="BOOKING_NOT_FOUND",
                        message=f"Booking {command.booking_id} not found",
                        reason="Booking does not exist",
                    )
                )

            # Step 2: Check for duplicate invoice
            if await self.invoice_repo.exists_for_booking(command.booking_id):
                return Return.err(
                    Error(
                        code="INVOICE_ALREADY_EXISTS",
                        message=f"Invoice already exists for booking {command.booking_id}",
                        reason="Duplicate invoice prevention",
                    )
                )

            # Step 3: Generate unique invoice number
            invoice_number = await self.invoice_repo.generate_invoice_number()

            # Step 4: Create invoice with status=draft
            invoice = Invoice(
                booking_id=command.booking_id,
                invoice_number=invoice_number,
                status=InvoiceStatus.DRAFT,
                currency=self.currency,
                late_fees=command.late_fees,
                damage_charges=command.damage_charges,
                payments_received=command.payments_received,
                deposit_held=command.deposit_held,
                deposit_released=command.deposit_released,
                deposit_captured=command.deposit_captured,
                notes=command.notes,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            # Step 5: Commit transaction
            await self.uow.commit()

            return Return.ok(invoice_to_dto(created_invoice))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
