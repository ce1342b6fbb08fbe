from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.asset_service import HttpAssetService
from src.adapter.services.booking_reader import SqlAlchemyBookingReader
from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.documents.booking_record import BookingRecordLoader
from src.app.pricing.rates import RateTable

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory():
    """Factory for reads that need their own session (concurrent fan-out)"""
    return AsyncSessionLocal


def get_record_loader(session_factory=Depends(get_session_factory)) -> BookingRecordLoader:
    return BookingRecordLoader(
        SqlAlchemyBookingReader(session_factory),
        RateTable.from_config(ApplicationConfig),
    )


def get_asset_service() -> HttpAssetService:
    return HttpAssetService(
        ApplicationConfig.LOGO_PATH,
        timeout=float(ApplicationConfig.ASSET_FETCH_TIMEOUT_SECONDS),
    )


def get_pdf_service() -> ReportLabPdfService:
    return ReportLabPdfService(
        company_name=ApplicationConfig.COMPANY_NAME,
        contact_line=ApplicationConfig.COMPANY_CONTACT_LINE,
        currency=ApplicationConfig.CURRENCY,
    )
