from contextlib import asynccontextmanager
from dataclasses import dataclass
import asyncio
import logging

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded

from arab_insights.core.config import Settings, settings as default_settings
from arab_insights.core.database import Database
from arab_insights.api import (
    analysis,
    articles,
    forecast,
    settings as settings_api,
    summary,
)
from arab_insights.middlewares.access_logger import AccessLoggingMiddleware
from arab_insights.middlewares.logging import setup_logging
from arab_insights.middlewares.security import (
    SecurityHeadersMiddleware,
    add_cors_middleware,
    add_rate_limit,
)
from arab_insights.services.analysis_service import AnalysisService
from arab_insights.services.article_service import ArticleService
from arab_insights.services.batch_analysis_service import BatchAnalysisService
from arab_insights.services.forecast_service import ForecastService
from arab_insights.services.inference_settings_service import InferenceSettingsService
from arab_insights.services.stats_service import StatsService
from arab_insights.services.summary_service import SummaryService
from arab_insights.utils.exception_handlers import (
    generic_exception_handler,
    http_exception_handler,
    rate_limit_exceeded_handler,
    validation_exception_handler,
)
from arab_insights.utils.telemetry import setup_observability

logger = logging.getLogger(__name__)


@dataclass
class Services:
    inference: InferenceSettingsService
    analysis: AnalysisService
    batch: BatchAnalysisService
    summary: SummaryService
    stats: StatsService
    articles: ArticleService
    forecast: ForecastService


def build_services(settings: Settings, http_client: httpx.AsyncClient) -> Services:
    inference = InferenceSettingsService(settings)
    analysis_service = AnalysisService(settings, http_client, inference)
    return Services(
        inference=inference,
        analysis=analysis_service,
        batch=BatchAnalysisService(
            analysis_service,
            concurrency=settings.BATCH_CONCURRENCY,
            max_articles=settings.BATCH_MAX_ARTICLES,
        ),
        summary=SummaryService(settings, http_client, inference),
        stats=StatsService(),
        articles=ArticleService(),
        forecast=ForecastService(),
    )


async def wait_for_database(database: Database, settings: Settings) -> None:
    for attempt in range(settings.DB_CONNECT_RETRIES):
        try:
            await database.ping()
            logger.info("✅ Successfully connected to the database!")
            return
        except Exception as e:  # driver-specific connect errors
            logger.warning(
                f"❌ Database not ready (attempt {attempt + 1}/{settings.DB_CONNECT_RETRIES}) - {e}"
            )
            await asyncio.sleep(settings.DB_CONNECT_DELAY_SECONDS)
    raise RuntimeError("🚨 Could not connect to the database after retries!")


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    settings = settings or default_settings

    database = Database(settings.SQLALCHEMY_DATABASE_URI)
    http_client = http_client or httpx.AsyncClient(
        timeout=settings.HF_TIMEOUT_SECONDS
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await wait_for_database(database, settings)
        if settings.AUTO_CREATE_TABLES:
            await database.create_all()
        app.state.is_ready = True

        yield

        app.state.is_ready = False
        await http_client.aclose()
        await database.dispose()

    app = FastAPI(
        title="Arab Insights Analysis API",
        description="Sentiment, Jordanian dialect and summarisation for Arabic text",
        version="1.0.0",
        lifespan=lifespan,
        debug=(not settings.ENV == "production"),
    )
    app.state.settings = settings
    app.state.database = database
    app.state.http_client = http_client
    app.state.services = build_services(settings, http_client)
    app.state.is_ready = False

    # ===============
    # Middlewares
    # ===============
    add_cors_middleware(app, settings)
    add_rate_limit(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLoggingMiddleware)

    # ===============
    # Routers
    # ===============
    app.include_router(analysis.router)
    app.include_router(analysis.edge_router)
    app.include_router(articles.router)
    app.include_router(summary.router)
    app.include_router(forecast.router)
    app.include_router(settings_api.router)

    # ===============
    # Health Checks
    # ===============
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/liveness", status_code=204)
    def liveness():
        return Response(status_code=204)

    @app.api_route("/readiness", methods=["GET", "HEAD"], status_code=200)
    def readiness(request: Request):
        if request.app.state.is_ready:
            return {"status": "ready"}
        return Response(status_code=503)

    # ===============
    # Global Error Handlers
    # ===============
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    if settings.OTEL_ENABLED:
        setup_observability(app, settings, sqlalchemy_engine=database.sync_engine)

    return app


# ✅ SETUP LOGGING FIRST
setup_logging()

app = create_app()
