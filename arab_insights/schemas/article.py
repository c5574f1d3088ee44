from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ArticleIn(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    source_name: Optional[str] = None
    published_at: Optional[datetime] = None


class ArticleIngestRequest(BaseModel):
    project_id: str
    user_id: str
    articles: List[ArticleIn] = Field(min_length=1, max_length=200)


class ArticleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    source_name: Optional[str] = None
    published_at: Optional[datetime] = None
    is_analyzed: bool
    sentiment: Optional[str] = None
    dialect: Optional[str] = None
