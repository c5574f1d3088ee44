from __future__ import annotations
import logging
import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import uuid4

import pandas as pd
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.messages.forecast_messages import (
    FORECAST_NOT_ENOUGH_DATA,
    FORECAST_NOT_SAVED,
)
from arab_insights.models.db.forecast import Forecast
from arab_insights.models.db.text_analysis import TextAnalysis
from arab_insights.schemas.forecast import ForecastData, ForecastPoint, ForecastRequest
from arab_insights.utils.exceptions import BadRequestError, ServerError
from arab_insights.utils.telemetry import step

logger = logging.getLogger(__name__)

MIN_ANALYSES = 5
WINDOW = 3
PRECISION = 4


def daily_average(rows: Iterable[TextAnalysis]) -> pd.Series:
    """Mean ``sentiment_score`` per UTC calendar day, oldest day first."""
    df = pd.DataFrame(
        [{"created_at": r.created_at, "sentiment_score": r.sentiment_score} for r in rows],
        columns=["created_at", "sentiment_score"],
    )
    days = pd.to_datetime(df["created_at"], utc=True).dt.strftime("%Y-%m-%d")
    return (
        df.assign(day=days)
        .groupby("day")["sentiment_score"]
        .mean()
        .astype(float)
        .sort_index()
    )


def project(daily: pd.Series, days: int, window: int = WINDOW) -> List[ForecastPoint]:
    """
    Moving average with trend.

    The trend is the mean gap between each day and the average of the
    ``window`` days before it. Projection starts from the last window's
    average and adds the trend once per day, clamped to [0, 1].
    """
    preceding = daily.rolling(window).mean().shift(1)
    gaps = (daily - preceding).dropna()
    trend = float(gaps.mean()) if len(gaps) else 0.0
    level = float(daily.tail(window).mean())
    if not math.isfinite(level):
        level = 0.5

    last_day = pd.Timestamp(daily.index[-1])
    points: List[ForecastPoint] = []
    for i in range(1, days + 1):
        level = min(1.0, max(0.0, level + trend))
        points.append(
            ForecastPoint(
                date=(last_day + pd.Timedelta(days=i)).strftime("%Y-%m-%d"),
                sentiment_score=round(level, PRECISION),
                is_forecast=True,
            )
        )
    return points


class ForecastService:
    async def _history(
        self,
        db: AsyncSession,
        *,
        user_id: Optional[str],
        project_id: Optional[str],
    ) -> List[TextAnalysis]:
        stmt = select(TextAnalysis)
        if user_id:
            stmt = stmt.where(TextAnalysis.user_id == user_id)
        if project_id:
            stmt = stmt.where(TextAnalysis.project_id == project_id)
        stmt = stmt.order_by(TextAnalysis.created_at, TextAnalysis.id)
        return list((await db.execute(stmt)).scalars().all())

    async def generate(self, db: AsyncSession, req: ForecastRequest) -> ForecastData:
        rows = await self._history(db, user_id=req.user_id, project_id=req.project_id)
        if len(rows) < MIN_ANALYSES:
            raise BadRequestError(
                code="FORECAST_NOT_ENOUGH_DATA", message=FORECAST_NOT_ENOUGH_DATA
            )

        with step("forecast.project", analyses=len(rows), days=req.days):
            daily = daily_average(rows)
            historical = [
                ForecastPoint(date=day, sentiment_score=round(float(score), PRECISION))
                for day, score in daily.items()
            ]
            forecast = project(daily, req.days)

        latest = rows[-1]
        row = Forecast(
            id=str(uuid4()),
            analysis_id=latest.id,
            user_id=req.user_id,
            project_id=req.project_id,
            horizon_days=req.days,
            forecast_json={
                "historical": [p.model_dump() for p in historical],
                "forecast": [p.model_dump() for p in forecast],
            },
            start_date=datetime.now(timezone.utc),
            end_date=datetime.strptime(forecast[-1].date, "%Y-%m-%d").replace(
                tzinfo=timezone.utc
            ),
        )
        try:
            db.add(row)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to store forecast for {latest.id}: {e}")
            await db.rollback()
            raise ServerError(code="FORECAST_NOT_SAVED", message=FORECAST_NOT_SAVED)

        logger.info(
            f"Forecast {row.id}: {len(historical)} day(s) of history, {req.days} projected"
        )
        return ForecastData(
            id=row.id,
            analysis_id=latest.id,
            historical=historical,
            forecast=forecast,
        )

    async def list_forecasts(
        self,
        db: AsyncSession,
        *,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: int = 20,
    ) -> List[Forecast]:
        stmt = select(Forecast)
        if user_id:
            stmt = stmt.where(Forecast.user_id == user_id)
        if project_id:
            stmt = stmt.where(Forecast.project_id == project_id)
        stmt = stmt.order_by(Forecast.created_at.desc(), Forecast.id).limit(limit)
        return list((await db.execute(stmt)).scalars().all())
