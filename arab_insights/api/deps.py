import hmac

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from arab_insights.core.config import Settings
from arab_insights.messages.settings_messages import (
    ADMIN_KEY_INVALID,
    ADMIN_KEY_NOT_CONFIGURED,
)
from arab_insights.services.analysis_service import AnalysisService
from arab_insights.services.article_service import ArticleService
from arab_insights.services.batch_analysis_service import BatchAnalysisService
from arab_insights.services.forecast_service import ForecastService
from arab_insights.services.inference_settings_service import InferenceSettingsService
from arab_insights.services.stats_service import StatsService
from arab_insights.services.summary_service import SummaryService
from arab_insights.utils.exceptions import ServerError, UnauthorizedError

_bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_analysis_service(request: Request) -> AnalysisService:
    return request.app.state.services.analysis


def get_batch_service(request: Request) -> BatchAnalysisService:
    return request.app.state.services.batch


def get_summary_service(request: Request) -> SummaryService:
    return request.app.state.services.summary


def get_inference_settings(request: Request) -> InferenceSettingsService:
    return request.app.state.services.inference


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.services.stats


def get_article_service(request: Request) -> ArticleService:
    return request.app.state.services.articles


def get_forecast_service(request: Request) -> ForecastService:
    return request.app.state.services.forecast


def require_admin_key(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.ADMIN_API_KEY:
        raise ServerError(code="ADMIN_KEY_NOT_CONFIGURED", message=ADMIN_KEY_NOT_CONFIGURED)
    if credentials is None or not hmac.compare_digest(
        credentials.credentials, settings.ADMIN_API_KEY
    ):
        raise UnauthorizedError(code="ADMIN_KEY_INVALID", message=ADMIN_KEY_INVALID)
