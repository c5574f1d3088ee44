from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.core.content.extractor import ContentExtractor
from arab_insights.core.inference.errors import UpstreamError
from arab_insights.core.sentiment.parser import SentimentParseError
from arab_insights.core.validation.validator import TextValidationError, ValidatedText
from arab_insights.messages.analysis_messages import (
    BATCH_TOO_LARGE,
    NO_USABLE_CONTENT,
    PERSISTENCE_FAILED,
)
from arab_insights.models.db.news_article import NewsArticle
from arab_insights.schemas.batch import (
    BatchAnalysisData,
    BatchAnalysisRequest,
    BatchItemResult,
)
from arab_insights.services.analysis_service import AnalysisService, Computation
from arab_insights.services.inference_settings_service import InferenceConfig
from arab_insights.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


@dataclass
class _Item:
    article_id: str
    content_source: str = "none"
    quality: int = 0
    computation: Optional[Computation] = None
    error_code: Optional[str] = None
    error: Optional[str] = None


class BatchAnalysisService:
    """
    Analyses a project's scraped articles.

    Remote calls run in a bounded pool; storage happens afterwards, one item
    at a time on the request's session (AsyncSession is not safe to share
    between concurrent tasks).
    """

    def __init__(
        self,
        analysis: AnalysisService,
        *,
        concurrency: int = 4,
        max_articles: int = 20,
        extractor: ContentExtractor | None = None,
    ):
        self.analysis = analysis
        self.concurrency = max(1, concurrency)
        self.max_articles = max_articles
        self.extractor = extractor or ContentExtractor()

    async def _load_articles(
        self, db: AsyncSession, req: BatchAnalysisRequest
    ) -> List[NewsArticle]:
        stmt = select(NewsArticle).where(
            NewsArticle.project_id == req.project_id,
            NewsArticle.user_id == req.user_id,
        )
        if req.article_ids:
            stmt = stmt.where(NewsArticle.id.in_(req.article_ids))
        else:
            stmt = stmt.where(NewsArticle.is_analyzed.is_(False))
        stmt = stmt.order_by(NewsArticle.created_at, NewsArticle.id).limit(
            self.max_articles
        )
        return list((await db.execute(stmt)).scalars().all())

    async def _analyze_one(
        self,
        sem: asyncio.Semaphore,
        article: NewsArticle,
        inference: InferenceConfig,
    ) -> _Item:
        item = _Item(article_id=article.id)
        extracted = self.extractor.extract(
            title=article.title,
            description=article.description,
            content=article.content,
        )
        item.content_source, item.quality = extracted.source, extracted.quality
        if not self.extractor.is_usable(extracted):
            item.error_code, item.error = "NO_USABLE_CONTENT", NO_USABLE_CONTENT
            return item

        max_len = self.analysis.validator.cfg.max_length
        try:
            checked = self.analysis.validator.validate(extracted.text[:max_len])
        except TextValidationError as e:
            item.error_code, item.error = e.code, e.message
            return item
        validated = ValidatedText(
            text=checked.text,
            content_type=checked.content_type,
            content_source=extracted.source,
        )

        async with sem:
            try:
                item.computation = await self.analysis.compute(validated, inference)
            except (UpstreamError, SentimentParseError) as e:
                logger.warning(f"Batch item {article.id} failed: {e}")
                item.error_code, item.error = "INFERENCE_FAILED", str(e)
        return item

    async def _store(
        self, db: AsyncSession, item: _Item, req: BatchAnalysisRequest
    ) -> Optional[str]:
        row = self.analysis.build_row(
            item.computation,
            user_id=req.user_id,
            project_id=req.project_id,
            article_id=item.article_id,
        )
        result = item.computation.result
        try:
            db.add(row)
            await db.execute(
                update(NewsArticle)
                .where(NewsArticle.id == item.article_id)
                .values(
                    is_analyzed=True,
                    sentiment=result.sentiment,
                    sentiment_score=result.confidence,
                    dialect=result.dialect,
                    analyzed_at=datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to store batch item {item.article_id}: {e}")
            await db.rollback()
            return None
        return row.id

    async def run(self, db: AsyncSession, req: BatchAnalysisRequest) -> BatchAnalysisData:
        if req.article_ids and len(req.article_ids) > self.max_articles:
            raise BadRequestError(code="BATCH_TOO_LARGE", message=BATCH_TOO_LARGE)

        inference = (await self.analysis.inference.resolve(db)).require_sentiment()
        articles = await self._load_articles(db, req)
        if not articles:
            return BatchAnalysisData(processed=0, errors=0, total=0, results=[])

        # plain values only from here on; a rollback would expire the ORM objects
        article_ids = [a.id for a in articles]
        sem = asyncio.Semaphore(self.concurrency)
        outcomes = await asyncio.gather(
            *(self._analyze_one(sem, a, inference) for a in articles),
            return_exceptions=True,
        )

        results: List[BatchItemResult] = []
        for article_id, outcome in zip(article_ids, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    f"Batch item {article_id} crashed: {outcome!r}", exc_info=outcome
                )
                results.append(
                    BatchItemResult(
                        article_id=article_id,
                        success=False,
                        error_code="INTERNAL_ERROR",
                        error=str(outcome),
                    )
                )
                continue

            if outcome.computation is None:
                results.append(
                    BatchItemResult(
                        article_id=article_id,
                        success=False,
                        content_source=outcome.content_source,
                        quality_score=outcome.quality,
                        error_code=outcome.error_code,
                        error=outcome.error,
                    )
                )
                continue

            analysis_id = await self._store(db, outcome, req)
            results.append(
                BatchItemResult(
                    article_id=article_id,
                    success=True,
                    saved=analysis_id is not None,
                    analysis_id=analysis_id,
                    content_source=outcome.content_source,
                    quality_score=outcome.quality,
                    result=outcome.computation.result,
                    error=None if analysis_id else PERSISTENCE_FAILED,
                )
            )

        processed = sum(1 for r in results if r.success)
        logger.info(
            f"Batch for project {req.project_id}: {processed}/{len(results)} analysed"
        )
        return BatchAnalysisData(
            processed=processed,
            errors=len(results) - processed,
            total=len(results),
            results=results,
        )
