# arab_insights/models/db/system_setting.py

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func
from arab_insights.core.database import Base


class SystemSetting(Base):
    """Admin-editable key/value overrides (inference endpoints, token)."""

    __tablename__ = "system_settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
