"""SQLAlchemy Invoice Repository Implementation"""

from datetime import datetime
from typing import Optional
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus

INVOICE_NUMBER_PREFIX = "INV"
SEQUENCE_WIDTH = 6


def _live_invoices_for(booking_id: str):
    return (
        select(Invoice)
        .where(Invoice.booking_id == booking_id)
        .where(Invoice.status != InvoiceStatus.VOIDED)
    )


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    Invoice persistence on an AsyncSession

    Writes are flushed, never committed; the caller's unit of work owns the
    transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def create(self, invoice: Invoice) -> Invoice:
        return await self._save(invoice)

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        result = await self.session.execute(select(Invoice).where(Invoice.id == invoice_id))
        return result.scalar_one_or_none()

    async def get_by_booking_id(self, booking_id: str) -> Optional[Invoice]:
        statement = _live_invoices_for(booking_id).order_by(Invoice.created_at.desc())
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = datetime.utcnow()
        return await self._save(invoice)

    async def exists_for_booking(self, booking_id: str) -> bool:
        statement = select(func.count()).select_from(_live_invoices_for(booking_id).subquery())
        result = await self.session.execute(statement)
        return result.scalar_one() > 0

    async def generate_invoice_number(self, year: Optional[int] = None) -> str:
        """
        Next INV-YYYY-NNNNNN number

        Zero-padded numbers sort lexically, so the max of the year's prefix is
        the latest issued. Uniqueness is still enforced by the column
        constraint when two drafts race.
        """
        prefix = f"{INVOICE_NUMBER_PREFIX}-{year or datetime.utcnow().year}-"
        statement = select(func.max(Invoice.invoice_number)).where(
            Invoice.invoice_number.like(f"{prefix}%")
        )
        result = await self.session.execute(statement)
        latest = result.scalar_one_or_none()

        sequence = int(latest[len(prefix):]) + 1 if latest else 1
        return f"{prefix}{sequence:0{SEQUENCE_WIDTH}d}"
