"""System Setting Domain Entity

Key/value runtime configuration edited by administrators.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel


class SystemSetting(BaseModel, table=True):
    """
    SystemSetting - Runtime configuration value

    Values are stored as text and parsed by the consumer.
    """

    __tablename__ = "system_settings"

    key: str = Field(
        sa_column=Column(String(100), primary_key=True),
        description="Setting key (e.g., additional_driver_daily_rate_young)"
    )

    value: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Setting value as text"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
