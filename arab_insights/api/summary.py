from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from arab_insights.api.deps import get_summary_service
from arab_insights.core.database import get_db
from arab_insights.core.inference.errors import InferenceNotConfiguredError, UpstreamError
from arab_insights.messages.summary_messages import (
    SUMMARY_NOT_CONFIGURED,
    SUMMARY_SUCCESS,
    SUMMARY_UPSTREAM_FAILED,
)
from arab_insights.schemas.summary import SummaryRequest
from arab_insights.services.summary_service import SummaryService
from arab_insights.utils.exceptions import BadGatewayError, ServerError
from arab_insights.utils.response_builder import success_response

router = APIRouter(prefix="/api/summaries", tags=["Summaries"])
logger = logging.getLogger(__name__)


@router.post("")
async def create_summary(
    req: SummaryRequest,
    db: AsyncSession = Depends(get_db),
    service: SummaryService = Depends(get_summary_service),
):
    try:
        data = await service.summarize(db, req)
    except InferenceNotConfiguredError as e:
        logger.error(str(e))
        raise ServerError(code="INFERENCE_NOT_CONFIGURED", message=SUMMARY_NOT_CONFIGURED)
    except UpstreamError:
        raise BadGatewayError(code="INFERENCE_UPSTREAM_ERROR", message=SUMMARY_UPSTREAM_FAILED)

    return success_response(message=SUMMARY_SUCCESS, data=data)
