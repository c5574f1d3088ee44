from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from arab_insights.core.database import get_db
from arab_insights.core.inference.errors import InferenceNotConfiguredError, UpstreamError
from arab_insights.core.sentiment.parser import SentimentParseError
from arab_insights.core.validation.validator import TextValidationError
from arab_insights.api.deps import (
    get_analysis_service,
    get_batch_service,
    get_stats_service,
)
from arab_insights.messages.analysis_messages import (
    ANALYSES_FETCHED,
    ANALYSIS_FETCHED,
    ANALYSIS_NOT_SAVED,
    ANALYSIS_SUCCESS,
    BATCH_COMPLETED,
    BATCH_NO_ARTICLES,
    INFERENCE_NOT_CONFIGURED,
    INFERENCE_UPSTREAM_FAILED,
    STATS_FETCHED,
)
from arab_insights.middlewares.security import analyze_rate_limit, limiter
from arab_insights.schemas.analysis import AnalysisData, AnalysisRequest, StoredAnalysis
from arab_insights.schemas.batch import BatchAnalysisRequest
from arab_insights.services.analysis_service import AnalysisService
from arab_insights.services.batch_analysis_service import BatchAnalysisService
from arab_insights.services.stats_service import StatsService
from arab_insights.utils.exceptions import BadGatewayError, BadRequestError, ServerError
from arab_insights.utils.response_builder import success_response

router = APIRouter(prefix="/api", tags=["Analysis"])
# edge-function path kept for existing frontends, answers without the envelope
edge_router = APIRouter(tags=["Analysis"])
logger = logging.getLogger(__name__)


def _inference_errors(e: Exception):
    """Map inference failures onto API errors."""
    if isinstance(e, InferenceNotConfiguredError):
        logger.error(str(e))
        return ServerError(code="INFERENCE_NOT_CONFIGURED", message=INFERENCE_NOT_CONFIGURED)
    if isinstance(e, UpstreamError):
        return BadGatewayError(code="INFERENCE_UPSTREAM_ERROR", message=INFERENCE_UPSTREAM_FAILED)
    return BadGatewayError(code="INFERENCE_RESPONSE_INVALID", message=INFERENCE_UPSTREAM_FAILED)


async def _analyze(service: AnalysisService, db: AsyncSession, req: AnalysisRequest):
    try:
        return await service.analyze(db, req)
    except TextValidationError as e:
        raise BadRequestError(code=e.code, message=e.message)
    except (InferenceNotConfiguredError, UpstreamError, SentimentParseError) as e:
        raise _inference_errors(e)


@router.post("/analysis/text")
@limiter.limit(analyze_rate_limit)
async def analyze_text(
    request: Request,
    req: AnalysisRequest,
    db: AsyncSession = Depends(get_db),
    service: AnalysisService = Depends(get_analysis_service),
):
    outcome = await _analyze(service, db, req)
    data = AnalysisData(
        id=outcome.id,
        saved=outcome.saved,
        warning=outcome.warning,
        result=outcome.result,
    )
    message = ANALYSIS_NOT_SAVED if outcome.warning else ANALYSIS_SUCCESS
    return success_response(message=message, data=data)


@edge_router.post("/analyze-text")
@limiter.limit(analyze_rate_limit)
async def analyze_text_flat(
    request: Request,
    req: AnalysisRequest,
    db: AsyncSession = Depends(get_db),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Bare result object, the shape the edge-function clients read."""
    outcome = await _analyze(service, db, req)
    return JSONResponse(content=outcome.result.model_dump(mode="json", by_alias=True))


@router.post("/analysis/batch")
async def analyze_batch(
    req: BatchAnalysisRequest,
    db: AsyncSession = Depends(get_db),
    service: BatchAnalysisService = Depends(get_batch_service),
):
    try:
        data = await service.run(db, req)
    except InferenceNotConfiguredError as e:
        raise _inference_errors(e)

    message = BATCH_COMPLETED if data.total else BATCH_NO_ARTICLES
    return success_response(message=message, data=data)


@router.get("/analyses")
async def list_analyses(
    user_id: Optional[str] = Query(None),
    project_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    service: AnalysisService = Depends(get_analysis_service),
):
    if not user_id and not project_id:
        raise BadRequestError(
            code="SCOPE_REQUIRED", message="Provide user_id or project_id."
        )
    rows = await service.list_analyses(
        db, user_id=user_id, project_id=project_id, limit=limit, offset=offset
    )
    return success_response(
        message=ANALYSES_FETCHED,
        data=[StoredAnalysis.model_validate(r) for r in rows],
    )


# declared before /analyses/{analysis_id} so "stats" is not taken for an id
@router.get("/analyses/stats")
async def analysis_stats(
    user_id: Optional[str] = Query(None),
    project_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    service: StatsService = Depends(get_stats_service),
):
    if not user_id and not project_id:
        raise BadRequestError(
            code="SCOPE_REQUIRED", message="Provide user_id or project_id."
        )
    stats = await service.for_scope(db, user_id=user_id, project_id=project_id)
    return success_response(message=STATS_FETCHED, data=stats)


@router.get("/analyses/{analysis_id}")
async def get_analysis(
    analysis_id: str,
    db: AsyncSession = Depends(get_db),
    service: AnalysisService = Depends(get_analysis_service),
):
    row = await service.get_analysis(db, analysis_id)
    return success_response(
        message=ANALYSIS_FETCHED, data=StoredAnalysis.model_validate(row)
    )
