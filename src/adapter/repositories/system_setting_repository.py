"""SQLAlchemy System Setting Repository Implementation"""

from datetime import datetime
from typing import Dict, List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.system_setting_repository import SystemSettingRepository
from src.domain.system_setting import SystemSetting


class SqlAlchemySystemSettingRepository(SystemSettingRepository):
    """SQLAlchemy implementation of SystemSettingRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_values(self, keys: List[str]) -> Dict[str, str]:
        if not keys:
            return {}
        statement = select(SystemSetting).where(SystemSetting.key.in_(keys))
        result = await self.session.execute(statement)
        return {setting.key: setting.value for setting in result.scalars().all()}

    async def set_value(self, key: str, value: str) -> None:
        setting = await self.session.get(SystemSetting, key)
        if setting is None:
            setting = SystemSetting(key=key, value=value)
        else:
            setting.value = value
            setting.updated_at = datetime.utcnow()
        self.session.add(setting)
        await self.session.flush()
