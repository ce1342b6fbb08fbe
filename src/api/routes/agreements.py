"""Rental Agreement API Routes

FastAPI routes for agreement signing workflow and agreement PDF generation.
"""

import base64
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.document_request import (
    ConfirmAgreementRequestSchema,
    CreateAgreementRequestSchema,
    SignAgreementRequestSchema,
)
from src.app.documents.booking_record import BookingRecordLoader
from src.app.use_cases.documents.dtos import (
    AgreementResponseDTO,
    ConfirmAgreementCommandDTO,
    CreateAgreementCommandDTO,
    GeneratedDocumentDTO,
    SignAgreementCommandDTO,
)
from src.app.use_cases.documents.confirm_agreement import ConfirmAgreement
from src.app.use_cases.documents.create_agreement import CreateAgreement
from src.app.use_cases.documents.generate_agreement_document import GenerateAgreementDocument
from src.app.use_cases.documents.sign_agreement import SignAgreement
from src.app.use_cases.documents.void_agreement import VoidAgreement
from src.adapter.repositories.booking_repository import SqlAlchemyBookingRepository
from src.adapter.repositories.rental_agreement_repository import SqlAlchemyRentalAgreementRepository
from src.adapter.services.asset_service import HttpAssetService
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_asset_service, get_pdf_service, get_record_loader, get_session
from src.api.error import ClientError, status_for
from config import ApplicationConfig

router = APIRouter(prefix="/agreements", tags=["Agreements"])

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Agreement not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "AGREEMENT_NOT_FOUND",
                        "message": "Agreement 0b8f5a52-... not found"
                    }
                }
            }
        }
    }
}


@router.post(
    "",
    response_model=AgreementResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_agreement(
    request: CreateAgreementRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Open the agreement for a booking (returns the existing one if present).

    **Returns:**
    - 201: Agreement available
    - 404: Booking not found
    - 409: The booking's agreement was voided
    """
    uow = SqlAlchemyUnitOfWork(session)
    agreement_repo = SqlAlchemyRentalAgreementRepository(session)
    booking_repo = SqlAlchemyBookingRepository(session)

    command = CreateAgreementCommandDTO(booking_id=request.booking_id)
    result = await CreateAgreement(uow, agreement_repo, booking_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


@router.post(
    "/{agreement_id}/sign",
    response_model=AgreementResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        **NOT_FOUND_RESPONSE,
        409: {"description": "Agreement already signed or voided"},
    }
)
async def sign_agreement(
    agreement_id: str,
    request: SignAgreementRequestSchema,
    session: AsyncSession = Depends(get_session),
    record_loader: BookingRecordLoader = Depends(get_record_loader),
):
    """
    Record the customer signature and freeze the agreement terms.

    **Returns:**
    - 200: Agreement signed
    - 404: Agreement or booking not found
    - 409: Already signed, or voided
    """
    uow = SqlAlchemyUnitOfWork(session)
    agreement_repo = SqlAlchemyRentalAgreementRepository(session)

    command = SignAgreementCommandDTO(agreement_id=agreement_id, **request.model_dump())
    result = await SignAgreement(uow, agreement_repo, record_loader).execute(command)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


@router.post(
    "/{agreement_id}/confirm",
    response_model=AgreementResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        **NOT_FOUND_RESPONSE,
        400: {"description": "Agreement not signed"},
    }
)
async def confirm_agreement(
    agreement_id: str,
    request: ConfirmAgreementRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Staff confirmation of a signed agreement.

    **Returns:**
    - 200: Agreement confirmed
    - 400: Agreement has not been signed
    - 404: Agreement not found
    - 409: Agreement voided
    """
    uow = SqlAlchemyUnitOfWork(session)
    agreement_repo = SqlAlchemyRentalAgreementRepository(session)

    command = ConfirmAgreementCommandDTO(agreement_id=agreement_id, staff_id=request.staff_id)
    result = await ConfirmAgreement(uow, agreement_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


@router.post(
    "/{agreement_id}/void",
    response_model=AgreementResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def void_agreement(
    agreement_id: str,
    session: AsyncSession = Depends(get_session),
):
    """Void an agreement; stored terms and signature are kept."""
    uow = SqlAlchemyUnitOfWork(session)
    agreement_repo = SqlAlchemyRentalAgreementRepository(session)

    result = await VoidAgreement(uow, agreement_repo).execute(agreement_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


async def _render_agreement(
    agreement_id: str,
    session: AsyncSession,
    record_loader: BookingRecordLoader,
    asset_service: HttpAssetService,
    pdf_service: ReportLabPdfService,
) -> GeneratedDocumentDTO:
    agreement_repo = SqlAlchemyRentalAgreementRepository(session)
    use_case = GenerateAgreementDocument(
        agreement_repo,
        record_loader,
        asset_service,
        pdf_service,
        filename_prefix=ApplicationConfig.AGREEMENT_FILENAME_PREFIX,
    )
    result = await use_case.execute(agreement_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))

    return result.value


@router.get(
    "/{agreement_id}/document",
    response_model=GeneratedDocumentDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_agreement_document(
    agreement_id: str,
    session: AsyncSession = Depends(get_session),
    record_loader: BookingRecordLoader = Depends(get_record_loader),
    asset_service: HttpAssetService = Depends(get_asset_service),
    pdf_service: ReportLabPdfService = Depends(get_pdf_service),
):
    """
    Generate the agreement PDF, base64-encoded.

    **Returns:**
    - 200: Document generated
    - 404: Agreement not found
    """
    return await _render_agreement(agreement_id, session, record_loader, asset_service, pdf_service)


@router.get(
    "/{agreement_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        **NOT_FOUND_RESPONSE,
    }
)
async def download_agreement_pdf(
    agreement_id: str,
    session: AsyncSession = Depends(get_session),
    record_loader: BookingRecordLoader = Depends(get_record_loader),
    asset_service: HttpAssetService = Depends(get_asset_service),
    pdf_service: ReportLabPdfService = Depends(get_pdf_service),
):
    """
    Download the agreement as a PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Agreement not found
    """
    document = await _render_agreement(agreement_id, session, record_loader, asset_service, pdf_service)

    return Response(
        content=base64.b64decode(document.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={document.filename}"
        }
    )
