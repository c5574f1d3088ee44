from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalysisRequest(BaseModel):
    text: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None

    user_id: Optional[str] = None  # omitted -> analysed, not persisted
    project_id: Optional[str] = None
    article_id: Optional[str] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sentiment: str
    confidence: float
    positive_prob: float
    negative_prob: float
    dialect: str
    dialect_confidence: float
    dialect_indicators: List[str] = []
    emotion: str
    category: str
    keywords: List[str] = []
    model_source: str = Field(alias="modelSource")
    content_source: str
    analyzed_text: str
    fallback_reason: Optional[str] = None


class AnalysisData(BaseModel):
    id: Optional[str] = None
    saved: bool
    warning: Optional[str] = None
    result: AnalysisResult


class StoredAnalysis(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    project_id: Optional[str] = None
    article_id: Optional[str] = None
    input_text: str
    sentiment: str
    sentiment_score: float
    positive_prob: float
    negative_prob: float
    dialect: str
    dialect_confidence: float
    dialect_indicators: Optional[List[str]] = None
    emotional_markers: Optional[List[str]] = None
    emotion: Optional[str] = None
    category: Optional[str] = None
    keywords: Optional[List[str]] = None
    model_source: str
    content_source: Optional[str] = None
    fallback_reason: Optional[str] = None
    created_at: datetime
