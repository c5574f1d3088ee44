from typing import List, Optional
from pydantic import BaseModel, Field

from arab_insights.schemas.analysis import AnalysisResult


class BatchAnalysisRequest(BaseModel):
    project_id: str
    user_id: str
    article_ids: Optional[List[str]] = Field(default=None, max_length=100)


class BatchItemResult(BaseModel):
    article_id: str
    success: bool
    saved: bool = False
    analysis_id: Optional[str] = None
    content_source: Optional[str] = None
    quality_score: Optional[int] = None
    result: Optional[AnalysisResult] = None
    error_code: Optional[str] = None
    error: Optional[str] = None


class BatchAnalysisData(BaseModel):
    processed: int
    errors: int
    total: int
    results: List[BatchItemResult]
