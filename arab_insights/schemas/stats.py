from typing import Dict, List
from pydantic import BaseModel


class Breakdown(BaseModel):
    counts: Dict[str, int]
    percentages: Dict[str, float]


class TimelinePoint(BaseModel):
    date: str
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class AnalysisStats(BaseModel):
    total: int
    average_confidence: float
    sentiment: Breakdown
    dialect: Breakdown
    emotion: Breakdown
    category: Breakdown
    timeline: List[TimelinePoint]
