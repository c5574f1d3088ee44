from __future__ import annotations
import logging
from uuid import uuid4

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.core.config import Settings
from arab_insights.core.summarization.client import HuggingFaceSummaryClient
from arab_insights.messages.analysis_messages import ANALYSIS_NOT_FOUND
from arab_insights.messages.summary_messages import SUMMARY_NO_TEXT
from arab_insights.models.db.summary import Summary
from arab_insights.models.db.text_analysis import TextAnalysis
from arab_insights.schemas.summary import SummaryData, SummaryRequest
from arab_insights.services.inference_settings_service import InferenceSettingsService
from arab_insights.utils.exceptions import BadRequestError, NotFoundError
from arab_insights.utils.telemetry import astep

logger = logging.getLogger(__name__)


class SummaryService:
    def __init__(
        self,
        settings: Settings,
        http: httpx.AsyncClient,
        inference: InferenceSettingsService,
    ):
        self.inference = inference
        self.client = HuggingFaceSummaryClient(
            http, timeout=settings.HF_TIMEOUT_SECONDS
        )

    async def summarize(self, db: AsyncSession, req: SummaryRequest) -> SummaryData:
        text = (req.text or "").strip()
        if req.analysis_id:
            analysis = await db.get(TextAnalysis, req.analysis_id)
            if analysis is None:
                raise NotFoundError(code="ANALYSIS_NOT_FOUND", message=ANALYSIS_NOT_FOUND)
            text = text or analysis.input_text
        if not text:
            raise BadRequestError(code="SUMMARY_NO_TEXT", message=SUMMARY_NO_TEXT)

        cfg = (await self.inference.resolve(db)).require_summary()
        async with astep("summary.remote", text_len=len(text)):
            summary = await self.client.summarize(
                text, cfg.summary_endpoint, cfg.api_token
            )

        data = SummaryData(
            summary=summary,
            model_used=self.client.cfg.model_label,
            source_length=len(text),
            analysis_id=req.analysis_id,
        )
        if not req.analysis_id:
            return data

        row = Summary(
            id=str(uuid4()),
            analysis_id=req.analysis_id,
            summary_text=summary,
            model_used=data.model_used,
            source_length=data.source_length,
        )
        try:
            db.add(row)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to store summary for {req.analysis_id}: {e}")
            await db.rollback()
            return data
        return data.model_copy(update={"id": row.id})
