from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.api.deps import get_article_service
from arab_insights.core.database import get_db
from arab_insights.messages.article_messages import ARTICLES_FETCHED, ARTICLES_STORED
from arab_insights.schemas.article import ArticleIngestRequest, ArticleOut
from arab_insights.services.article_service import ArticleService
from arab_insights.utils.response_builder import success_response

router = APIRouter(prefix="/api/articles", tags=["Articles"])


@router.post("")
async def ingest_articles(
    req: ArticleIngestRequest,
    db: AsyncSession = Depends(get_db),
    service: ArticleService = Depends(get_article_service),
):
    rows = await service.ingest(db, req)
    return success_response(
        message=ARTICLES_STORED,
        data=[ArticleOut.model_validate(r) for r in rows],
        status_code=201,
    )


@router.get("")
async def list_articles(
    project_id: str = Query(...),
    user_id: Optional[str] = Query(None),
    analyzed: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    service: ArticleService = Depends(get_article_service),
):
    rows = await service.list_articles(
        db, project_id=project_id, user_id=user_id, analyzed=analyzed, limit=limit
    )
    return success_response(
        message=ARTICLES_FETCHED, data=[ArticleOut.model_validate(r) for r in rows]
    )
