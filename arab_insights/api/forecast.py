from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.api.deps import get_forecast_service
from arab_insights.core.database import get_db
from arab_insights.messages.forecast_messages import FORECAST_SUCCESS, FORECASTS_FETCHED
from arab_insights.schemas.forecast import ForecastRequest, StoredForecast
from arab_insights.services.forecast_service import ForecastService
from arab_insights.utils.exceptions import BadRequestError
from arab_insights.utils.response_builder import success_response

router = APIRouter(prefix="/api/forecasts", tags=["Forecasts"])


def _require_scope(user_id: Optional[str], project_id: Optional[str]) -> None:
    if not user_id and not project_id:
        raise BadRequestError(
            code="SCOPE_REQUIRED", message="Provide user_id or project_id."
        )


@router.post("")
async def create_forecast(
    req: ForecastRequest,
    db: AsyncSession = Depends(get_db),
    service: ForecastService = Depends(get_forecast_service),
):
    _require_scope(req.user_id, req.project_id)
    data = await service.generate(db, req)
    return success_response(message=FORECAST_SUCCESS, data=data)


@router.get("")
async def list_forecasts(
    user_id: Optional[str] = Query(None),
    project_id: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    service: ForecastService = Depends(get_forecast_service),
):
    _require_scope(user_id, project_id)
    rows = await service.list_forecasts(
        db, user_id=user_id, project_id=project_id, limit=limit
    )
    return success_response(
        message=FORECASTS_FETCHED,
        data=[StoredForecast.model_validate(r) for r in rows],
    )
