from typing import Optional
from pydantic import BaseModel


class SummaryRequest(BaseModel):
    text: Optional[str] = None
    analysis_id: Optional[str] = None


class SummaryData(BaseModel):
    id: Optional[str] = None
    summary: str
    model_used: str
    source_length: int
    analysis_id: Optional[str] = None
