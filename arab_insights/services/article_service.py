from __future__ import annotations
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.models.db.news_article import NewsArticle
from arab_insights.schemas.article import ArticleIngestRequest


class ArticleService:
    """Stores scraped articles so batch analysis can pick them up."""

    async def ingest(
        self, db: AsyncSession, req: ArticleIngestRequest
    ) -> List[NewsArticle]:
        rows = [
            NewsArticle(
                id=str(uuid4()),
                user_id=req.user_id,
                project_id=req.project_id,
                is_analyzed=False,
                **a.model_dump(),
            )
            for a in req.articles
        ]
        db.add_all(rows)
        await db.commit()
        return rows

    async def list_articles(
        self,
        db: AsyncSession,
        *,
        project_id: str,
        user_id: Optional[str] = None,
        analyzed: Optional[bool] = None,
        limit: int = 50,
    ) -> List[NewsArticle]:
        stmt = select(NewsArticle).where(NewsArticle.project_id == project_id)
        if user_id:
            stmt = stmt.where(NewsArticle.user_id == user_id)
        if analyzed is not None:
            stmt = stmt.where(NewsArticle.is_analyzed.is_(analyzed))
        stmt = stmt.order_by(NewsArticle.created_at.desc(), NewsArticle.id).limit(limit)
        return list((await db.execute(stmt)).scalars().all())
