# arab_insights/utils/telemetry.py
from __future__ import annotations
import contextlib, time
from dataclasses import dataclass
from typing import Optional, AsyncIterator, Iterator, Any

from fastapi import FastAPI
from opentelemetry import trace, metrics
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from arab_insights.core.config import Settings
import logging

logger = logging.getLogger("arab_insights.obs")


@dataclass
class ObsConfig:
    env: str
    service_name: str
    service_version: str
    sample_ratio: Optional[str | float]
    enable_metrics: Optional[str | bool]
    betterstack_host: Optional[str]  # e.g. https://in-otel.betterstack.com
    betterstack_api_key: Optional[str]

    @classmethod
    def from_settings(cls, s: Settings) -> "ObsConfig":
        return cls(
            env=s.ENV,
            service_name=s.OTEL_SERVICE_NAME,
            service_version=s.OTEL_SERVICE_VERSION,
            sample_ratio=s.OTEL_SAMPLE_RATIO,
            enable_metrics=s.OTEL_ENABLE_METRICS,
            betterstack_host=s.BETTERSTACK_HOST,
            betterstack_api_key=s.BETTERSTACK_API_KEY,
        )


_tracer = trace.get_tracer(__name__)
_meter = None
_step_hist = None


def _to_float(x, default=1.0) -> float:
    try:
        v = float(x)
        return max(0.0, min(1.0, v))
    except (TypeError, ValueError):
        return default


def _to_bool(x) -> bool:
    if isinstance(x, bool):
        return x
    return str(x).strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _join(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path if path.startswith("/") else "/" + path
    return base + path


def _build_resource(cfg: ObsConfig) -> Resource:
    return Resource.create(
        {
            "service.name": cfg.service_name,
            "service.version": cfg.service_version,
            "deployment.environment": cfg.env,
        }
    )


def _build_exporters(cfg: ObsConfig, enable_metrics: bool):
    # Prod → Better Stack; anything else → local collector
    if cfg.env.lower() == "production" and cfg.betterstack_host:
        base = cfg.betterstack_host
        headers = {"Authorization": f"Bearer {cfg.betterstack_api_key}"}
    else:
        base = (cfg.betterstack_host or "http://localhost:4318").rstrip("/")
        headers = None

    traces_ep = _join(base, "/v1/traces")
    metrics_ep = _join(base, "/metrics")
    span_exp = OTLPSpanExporter(endpoint=traces_ep, headers=headers)
    metric_exp = (
        OTLPMetricExporter(endpoint=metrics_ep, headers=headers)
        if enable_metrics
        else None
    )
    logger.info("OTEL traces_ep=%s metrics_ep=%s", traces_ep, metrics_ep)
    return span_exp, metric_exp


def setup_observability(
    app: FastAPI, settings: Settings, *, sqlalchemy_engine=None
) -> None:
    cfg = ObsConfig.from_settings(settings)
    sample_ratio = _to_float(cfg.sample_ratio, 1.0)
    enable_metrics = _to_bool(cfg.enable_metrics)

    resource = _build_resource(cfg)
    tp = TracerProvider(
        resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_ratio))
    )
    span_exporter, metric_exporter = _build_exporters(cfg, enable_metrics)
    tp.add_span_processor(BatchSpanProcessor(span_exporter))
    trace.set_tracer_provider(tp)

    if enable_metrics and metric_exporter:
        mp = MeterProvider(
            resource=resource,
            metric_readers=[PeriodicExportingMetricReader(metric_exporter)],
        )
        metrics.set_meter_provider(mp)

    global _meter, _step_hist
    _meter = metrics.get_meter("arab_insights.obs")
    if enable_metrics:
        _step_hist = _meter.create_histogram(
            "app.step.duration", unit="ms", description="Business step duration"
        )

    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls="^/health$|^/liveness$|^/readiness$|^/docs$",
    )
    RequestsInstrumentor().instrument()
    HTTPXClientInstrumentor().instrument()
    if sqlalchemy_engine is not None:
        SQLAlchemyInstrumentor().instrument(engine=sqlalchemy_engine)
    LoggingInstrumentor().instrument(set_logging_format=True)


# helpers
def _open_span(name: str, attrs: dict):
    span = _tracer.start_span(name)
    for k, v in attrs.items():
        if v is not None:
            span.set_attribute(f"app.{k}", v)
    return span


def _close_span(span, name: str, start: float, error: BaseException | None) -> None:
    if error is None:
        span.set_attribute("app.success", True)
    else:
        span.record_exception(error)
        span.set_attribute("app.success", False)
        span.set_status(trace.Status(trace.StatusCode.ERROR, str(error)))
    span.end()
    if _step_hist:
        _step_hist.record((time.perf_counter() - start) * 1000, {"step": name})


@contextlib.contextmanager
def step(name: str, **attrs: Any) -> Iterator[None]:
    """Span + duration histogram around a synchronous block."""
    start = time.perf_counter()
    span = _open_span(name, attrs)
    with trace.use_span(
        span, end_on_exit=False, record_exception=False, set_status_on_exception=False
    ):
        try:
            yield
        except Exception as e:
            _close_span(span, name, start, e)
            raise
    _close_span(span, name, start, None)


@contextlib.asynccontextmanager
async def astep(name: str, **attrs: Any) -> AsyncIterator[None]:
    """Async twin of ``step`` for awaited I/O (inference calls, commits)."""
    start = time.perf_counter()
    span = _open_span(name, attrs)
    with trace.use_span(
        span, end_on_exit=False, record_exception=False, set_status_on_exception=False
    ):
        try:
            yield
        except Exception as e:
            _close_span(span, name, start, e)
            raise
    _close_span(span, name, start, None)
