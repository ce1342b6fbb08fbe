import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Transaction boundary over one AsyncSession

    Invoice and agreement writes flush through their repositories and only
    become visible on commit. Leaving the context without a commit rolls
    back whatever was flushed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        if not self.session.in_transaction():
            return
        logger.debug("Rolling back uncommitted document changes")
        await self.session.rollback()
