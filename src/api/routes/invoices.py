"""Invoice API Routes

FastAPI routes for invoice lifecycle and invoice PDF generation.
"""

import base64
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.document_request import CreateInvoiceRequestSchema
from src.app.documents.booking_record import BookingRecordLoader
from src.app.use_cases.documents.dtos import (
    CreateInvoiceCommandDTO,
    GeneratedDocumentDTO,
    InvoiceResponseDTO,
)
from src.app.use_cases.documents.create_invoice import CreateInvoice
from src.app.use_cases.documents.generate_invoice_document import GenerateInvoiceDocument
from src.app.use_cases.documents.issue_invoice import IssueInvoice
from src.adapter.repositories.booking_repository import SqlAlchemyBookingRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.asset_service import HttpAssetService
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_asset_service, get_pdf_service, get_record_loader, get_session
from src.api.error import ClientError, status_for
from config import ApplicationConfig

router = APIRouter(prefix="/billing/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice with ID 123 not found"
                    }
                }
            }
        }
    }
}


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        **NOT_FOUND_RESPONSE,
        409: {"description": "Invoice already exists for booking"},
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice for a booking.

    Charges stay live (derived from the booking) until the invoice is issued.

    **Returns:**
    - 201: Draft invoice created
    - 404: Booking not found
    - 409: Booking already has an invoice
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    booking_repo = SqlAlchemyBookingRepository(session)

    command = CreateInvoiceCommandDTO(**request.model_dump())

    use_case = CreateInvoice(uow, invoice_repo, booking_repo, currency=ApplicationConfig.CURRENCY)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


@router.post(
    "/{invoice_id}/issue",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        **NOT_FOUND_RESPONSE,
        400: {"description": "Invoice is not a draft"},
    }
)
async def issue_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    record_loader: BookingRecordLoader = Depends(get_record_loader),
):
    """
    Issue a draft invoice and freeze its financial snapshot.

    **Returns:**
    - 200: Invoice issued
    - 400: Invoice is not a draft
    - 404: Invoice or booking not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    result = await IssueInvoice(uow, invoice_repo, record_loader).execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


async def _render_invoice(
    invoice_id: int,
    session: AsyncSession,
    record_loader: BookingRecordLoader,
    asset_service: HttpAssetService,
    pdf_service: ReportLabPdfService,
) -> GeneratedDocumentDTO:
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    use_case = GenerateInvoiceDocument(invoice_repo, record_loader, asset_service, pdf_service)
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


@router.get(
    "/{invoice_id}/document",
    response_model=GeneratedDocumentDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_invoice_document(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    record_loader: BookingRecordLoader = Depends(get_record_loader),
    asset_service: HttpAssetService = Depends(get_asset_service),
    pdf_service: ReportLabPdfService = Depends(get_pdf_service),
):
    """
    Generate the invoice PDF, base64-encoded.

    Issued invoices render from their snapshot; drafts render live booking data.

    **Returns:**
    - 200: Document generated
    - 404: Invoice not found
    """
    return await _render_invoice(invoice_id, session, record_loader, asset_service, pdf_service)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        **NOT_FOUND_RESPONSE,
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    record_loader: BookingRecordLoader = Depends(get_record_loader),
    asset_service: HttpAssetService = Depends(get_asset_service),
    pdf_service: ReportLabPdfService = Depends(get_pdf_service),
):
    """
    Download the invoice as a PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Invoice not found
    """
    document = await _render_invoice(invoice_id, session, record_loader, asset_service, pdf_service)

    return Response(
        content=base64.b64decode(document.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={document.filename}"
        }
    )
