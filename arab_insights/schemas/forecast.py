from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ForecastRequest(BaseModel):
    project_id: Optional[str] = None
    user_id: Optional[str] = None
    days: int = Field(default=7, ge=1, le=30)


class ForecastPoint(BaseModel):
    date: str
    sentiment_score: float
    is_forecast: bool = False


class ForecastData(BaseModel):
    id: str
    analysis_id: str
    historical: List[ForecastPoint]
    forecast: List[ForecastPoint]


class StoredForecast(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    analysis_id: str
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    horizon_days: int
    forecast_json: Dict[str, Any]
    start_date: datetime
    end_date: datetime
    created_at: Optional[datetime] = None
