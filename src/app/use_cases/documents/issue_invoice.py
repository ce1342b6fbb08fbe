"""IssueInvoice Use Case

Issues a draft invoice and freezes its financial snapshot.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.documents.assembler import build_invoice_snapshot
from src.app.documents.booking_record import BookingRecordLoader
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO
from .mappers import invoice_to_dto

logger = logging.getLogger(__name__)


class IssueInvoice:
    """
    Use Case: Issue invoice

    Business Rules:
    1. Invoice must exist and be in draft
    2. The snapshot is captured from the live booking exactly once
    3. After issue, documents render from the snapshot only; later booking
       edits never change an issued invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        record_loader: BookingRecordLoader,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.record_loader = record_loader

    async def execute(self, invoice_id: int, now: Optional[datetime] = None) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice issue

        Args:
            invoice_id: Invoice ID
            now: Issue timestamp (defaults to current UTC time)

        Returns:
            Result[InvoiceResponseDTO]: Issued invoice or error
        """
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            if invoice.status != InvoiceStatus.DRAFT or invoice.snapshot_json:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Only draft invoices can be issued. "
                                f"Current status: {InvoiceStatus(invoice.status).value}",
                        reason="Invoice snapshot is write-once",
                    )
                )

            record = await self.record_loader.load(invoice.booking_id)
            if record is None:
                return Return.err(
                    Error(
                        code="BOOKING_NOT_FOUND",
                        message=f"Booking {invoice.booking_id} not found",
                        reason="Invoiced booking no longer exists",
                    )
                )

            issued_at = now or datetime.utcnow()
            invoice.status = InvoiceStatus.ISSUED
            invoice.issued_at = issued_at
            invoice.updated_at = issued_at
            snapshot = build_invoice_snapshot(invoice, record)
            invoice.snapshot_json = snapshot.model_dump_json()

            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Issued invoice {updated_invoice.invoice_number} for booking {invoice.booking_id} "
                f"(grand_total={snapshot.grand_total}, amount_due={snapshot.amount_due})"
            )
            return Return.ok(invoice_to_dto(updated_invoice))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ISSUE_INVOICE_FAILED",
                    message="Failed to issue invoice",
                    reason=str(e),
                )
            )
