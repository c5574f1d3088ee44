from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional
from uuid import uuid4

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.core.categorization.categorizer import KeywordCategorizer
from arab_insights.core.config import Settings
from arab_insights.core.dialect.base import DialectResult, DialectScorer
from arab_insights.core.dialect.scorer import JordanianDialectScorer
from arab_insights.core.keywords.extractor import KeywordExtractor
from arab_insights.core.sentiment.client import HuggingFaceSentimentClient
from arab_insights.core.sentiment.parser import SentimentParseError, neutral_scores
from arab_insights.core.stopword_removal.config import StopwordConfig
from arab_insights.core.stopword_removal.removal import ArabicStopwordRemover
from arab_insights.core.validation.config import TextValidationConfig
from arab_insights.core.validation.validator import ArabicTextValidator, ValidatedText
from arab_insights.messages.analysis_messages import (
    ANALYSIS_NOT_FOUND,
    PERSISTENCE_FAILED,
)
from arab_insights.models.db.text_analysis import TextAnalysis
from arab_insights.schemas.analysis import AnalysisRequest, AnalysisResult
from arab_insights.services.inference_settings_service import (
    InferenceConfig,
    InferenceSettingsService,
)
from arab_insights.utils.exceptions import NotFoundError
from arab_insights.utils.telemetry import astep, step

logger = logging.getLogger(__name__)

ANALYZED_TEXT_PREVIEW = 200
PARSE_FALLBACK_REASON = "unparseable_model_response"


def map_emotion(sentiment: str, emotional_markers: List[str]) -> str:
    """Coarse emotion label from polarity and dialect emotional markers."""
    if sentiment == "positive":
        return "سعادة" if emotional_markers else "تفاؤل"
    if sentiment == "negative":
        return "غضب" if emotional_markers else "استياء"
    return "محايد"


def preview(text: str, limit: int = ANALYZED_TEXT_PREVIEW) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


@dataclass(frozen=True)
class Computation:
    """Everything one analysis produced, before it is stored."""

    input_text: str
    result: AnalysisResult
    dialect: DialectResult


@dataclass
class AnalysisOutcome:
    result: AnalysisResult
    saved: bool
    id: Optional[str] = None
    warning: Optional[str] = None


class AnalysisService:
    """
    Validate -> remote sentiment -> local heuristics -> assemble -> persist.

    Validation runs before anything leaves the process. Only a sentiment
    call can fail the request; dialect, keywords and category are local and
    deterministic. Storage is best effort: a failed insert is reported on
    the outcome, never raised.
    """

    def __init__(
        self,
        settings: Settings,
        http: httpx.AsyncClient,
        inference: InferenceSettingsService,
        *,
        dialect_scorer: DialectScorer | None = None,
        keywords: KeywordExtractor | None = None,
        categorizer: KeywordCategorizer | None = None,
    ):
        self.settings = settings
        self.inference = inference
        self.validator = ArabicTextValidator(
            TextValidationConfig(max_length=settings.MAX_TEXT_LENGTH)
        )
        self.sentiment = HuggingFaceSentimentClient(
            http, timeout=settings.HF_TIMEOUT_SECONDS
        )
        self.dialect_scorer = dialect_scorer or JordanianDialectScorer()
        self.keywords = keywords or KeywordExtractor(
            remover=ArabicStopwordRemover(
                StopwordConfig(use_nltk=settings.NLTK_STOPWORDS)
            )
        )
        self.categorizer = categorizer or KeywordCategorizer()

    async def compute(
        self, validated: ValidatedText, inference: InferenceConfig
    ) -> Computation:
        async with astep(
            "analysis.sentiment",
            model_source=inference.model_source,
            text_len=len(validated.text),
        ):
            try:
                scores = await self.sentiment.classify(
                    validated.text, inference.sentiment_endpoint, inference.api_token
                )
                fallback_reason = scores.fallback_reason
            except SentimentParseError as e:
                if self.settings.STRICT_SENTIMENT_PARSING:
                    raise
                logger.warning(f"Falling back to neutral sentiment: {e}")
                scores = neutral_scores()
                fallback_reason = PARSE_FALLBACK_REASON

        with step("analysis.heuristics"):
            dialect = self.dialect_scorer.score(validated.text)
            keywords = self.keywords.extract(validated.text)
            category = self.categorizer.categorize(validated.text)

        result = AnalysisResult(
            sentiment=scores.sentiment,
            confidence=scores.confidence,
            positive_prob=scores.positive_prob,
            negative_prob=scores.negative_prob,
            dialect=dialect.dialect,
            dialect_confidence=round(dialect.confidence, 4),
            dialect_indicators=dialect.indicators,
            emotion=map_emotion(scores.sentiment, dialect.emotional_markers),
            category=category,
            keywords=keywords,
            model_source=inference.model_source,
            content_source=validated.content_source,
            analyzed_text=preview(validated.text),
            fallback_reason=fallback_reason,
        )
        return Computation(input_text=validated.text, result=result, dialect=dialect)

    def build_row(
        self,
        computation: Computation,
        *,
        user_id: str,
        project_id: Optional[str] = None,
        article_id: Optional[str] = None,
    ) -> TextAnalysis:
        r = computation.result
        return TextAnalysis(
            id=str(uuid4()),
            user_id=user_id,
            project_id=project_id,
            article_id=article_id,
            input_text=computation.input_text,
            sentiment=r.sentiment,
            sentiment_score=r.confidence,
            positive_prob=r.positive_prob,
            negative_prob=r.negative_prob,
            dialect=r.dialect,
            dialect_confidence=r.dialect_confidence,
            dialect_indicators=list(r.dialect_indicators),
            emotional_markers=list(computation.dialect.emotional_markers),
            emotion=r.emotion,
            category=r.category,
            keywords=list(r.keywords),
            model_source=r.model_source,
            content_source=r.content_source,
            fallback_reason=r.fallback_reason,
            model_response=r.model_dump(mode="json", by_alias=True),
        )

    async def persist(self, db: AsyncSession, row: TextAnalysis) -> bool:
        async with astep("analysis.persist", user_id=row.user_id):
            try:
                db.add(row)
                await db.commit()
            except SQLAlchemyError as e:
                logger.error(f"Failed to store analysis {row.id}: {e}")
                await db.rollback()
                return False
        return True

    async def analyze(self, db: AsyncSession, req: AnalysisRequest) -> AnalysisOutcome:
        validated = self.validator.select_content(req.text, req.title, req.description)
        inference = (await self.inference.resolve(db)).require_sentiment()

        computation = await self.compute(validated, inference)

        if not req.user_id:
            return AnalysisOutcome(result=computation.result, saved=False)

        row = self.build_row(
            computation,
            user_id=req.user_id,
            project_id=req.project_id,
            article_id=req.article_id,
        )
        if await self.persist(db, row):
            logger.info(f"Stored analysis {row.id} for user {req.user_id}")
            return AnalysisOutcome(result=computation.result, saved=True, id=row.id)
        return AnalysisOutcome(
            result=computation.result, saved=False, warning=PERSISTENCE_FAILED
        )

    async def list_analyses(
        self,
        db: AsyncSession,
        *,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[TextAnalysis]:
        stmt = select(TextAnalysis)
        if user_id:
            stmt = stmt.where(TextAnalysis.user_id == user_id)
        if project_id:
            stmt = stmt.where(TextAnalysis.project_id == project_id)
        stmt = (
            stmt.order_by(TextAnalysis.created_at.desc(), TextAnalysis.id)
            .offset(offset)
            .limit(limit)
        )
        return list((await db.execute(stmt)).scalars().all())

    async def get_analysis(self, db: AsyncSession, analysis_id: str) -> TextAnalysis:
        row = await db.get(TextAnalysis, analysis_id)
        if row is None:
            raise NotFoundError(code="ANALYSIS_NOT_FOUND", message=ANALYSIS_NOT_FOUND)
        return row
