# arab_insights/models/db/forecast.py

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func
from arab_insights.core.database import Base


class Forecast(Base):
    __tablename__ = "forecasts"

    id = Column(String, primary_key=True, index=True)
    analysis_id = Column(
        String, ForeignKey("text_analyses.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String, nullable=True, index=True)
    project_id = Column(String, nullable=True, index=True)

    horizon_days = Column(Integer, nullable=False)
    forecast_json = Column(JSON, nullable=False)  # {"historical": [...], "forecast": [...]}
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
