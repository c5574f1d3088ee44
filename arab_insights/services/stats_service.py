from __future__ import annotations
import math
from typing import Dict, Iterable, List, Optional

import pandas as pd
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.models.db.text_analysis import TextAnalysis
from arab_insights.schemas.stats import AnalysisStats, Breakdown, TimelinePoint

_SENTIMENTS = ("positive", "negative", "neutral")


def _safe_pct(n: int, d: int) -> float:
    if not d:
        return 0.0
    v = (n / d) * 100.0
    return 0.0 if not math.isfinite(v) else round(v, 1)


def _breakdown(series: pd.Series, total: int) -> Breakdown:
    counts = series.fillna("unknown").value_counts()
    as_dict: Dict[str, int] = {str(k): int(v) for k, v in counts.items()}
    return Breakdown(
        counts=as_dict,
        percentages={k: _safe_pct(v, total) for k, v in as_dict.items()},
    )


def _timeline(df: pd.DataFrame) -> List[TimelinePoint]:
    days = pd.to_datetime(df["created_at"], utc=True).dt.strftime("%Y-%m-%d")
    table = (
        df.assign(day=days)
        .groupby(["day", "sentiment"])
        .size()
        .unstack(fill_value=0)
        .reindex(columns=list(_SENTIMENTS), fill_value=0)
        .sort_index()
    )
    return [
        TimelinePoint(date=day, **{s: int(row[s]) for s in _SENTIMENTS})
        for day, row in table.iterrows()
    ]


def compute_stats(rows: Iterable[TextAnalysis]) -> AnalysisStats:
    df = pd.DataFrame(
        [
            {
                "sentiment": r.sentiment,
                "sentiment_score": r.sentiment_score,
                "dialect": r.dialect,
                "emotion": r.emotion,
                "category": r.category,
                "created_at": r.created_at,
            }
            for r in rows
        ],
        columns=[
            "sentiment",
            "sentiment_score",
            "dialect",
            "emotion",
            "category",
            "created_at",
        ],
    )
    total = len(df)
    empty = Breakdown(counts={}, percentages={})
    if not total:
        return AnalysisStats(
            total=0,
            average_confidence=0.0,
            sentiment=empty,
            dialect=empty,
            emotion=empty,
            category=empty,
            timeline=[],
        )

    mean = float(df["sentiment_score"].mean())
    return AnalysisStats(
        total=total,
        average_confidence=round(mean, 4) if math.isfinite(mean) else 0.0,
        sentiment=_breakdown(df["sentiment"], total),
        dialect=_breakdown(df["dialect"], total),
        emotion=_breakdown(df["emotion"], total),
        category=_breakdown(df["category"], total),
        timeline=_timeline(df),
    )


class StatsService:
    async def for_scope(
        self,
        db: AsyncSession,
        *,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> AnalysisStats:
        stmt = select(TextAnalysis)
        if user_id:
            stmt = stmt.where(TextAnalysis.user_id == user_id)
        if project_id:
            stmt = stmt.where(TextAnalysis.project_id == project_id)
        rows = (await db.execute(stmt)).scalars().all()
        return compute_stats(rows)
