"""System Setting Repository Interface

Defines the contract for reading runtime key/value settings.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class SystemSettingRepository(ABC):
    """Repository interface for system_settings key/value rows"""

    @abstractmethod
    async def get_values(self, keys: List[str]) -> Dict[str, str]:
        """
        Retrieve the values for a set of keys

        Args:
            keys: Setting keys to look up

        Returns:
            Mapping of key to raw value; missing keys are absent
        """
        pass

    @abstractmethod
    async def set_value(self, key: str, value: str) -> None:
        """
        Insert or update a setting

        Args:
            key: Setting key
            value: Raw value
        """
        pass

    async def get_value(self, key: str) -> Optional[str]:
        values = await self.get_values([key])
        return values.get(key)
