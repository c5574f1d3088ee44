import os

# Must be set before arab_insights.core.config builds its module-level settings
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./.pytest-arab-insights.db")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("NLTK_STOPWORDS", "false")

from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from arab_insights.core.config import Settings
from arab_insights.main import create_app

SENTIMENT_HOSTS = {"sentiment.test", "sentiment2.test"}
SUMMARY_HOSTS = {"summary.test"}


def sentiment_reply(positive: float, negative: float) -> Callable:
    def reply(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                [
                    {"label": "positive", "score": positive},
                    {"label": "negative", "score": negative},
                ]
            ],
        )

    return reply


class FakeHuggingFace:
    """Stands in for the inference endpoints; records every request."""

    def __init__(self):
        self.calls: List[httpx.Request] = []
        self.sentiment: Callable = sentiment_reply(0.9, 0.1)
        self.summary: Callable = lambda request: httpx.Response(
            200, json=[{"summary_text": "ملخص الخبر"}]
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.host in SENTIMENT_HOSTS:
            return self.sentiment(request)
        if request.url.host in SUMMARY_HOSTS:
            return self.summary(request)
        return httpx.Response(404, json={"error": "unknown model"})

    def calls_to(self, host: str) -> List[httpx.Request]:
        return [c for c in self.calls if c.url.host == host]


def make_settings(tmp_path, **overrides) -> Settings:
    values: Dict = dict(
        ENV="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        AUTO_CREATE_TABLES=True,
        DB_CONNECT_RETRIES=1,
        DB_CONNECT_DELAY_SECONDS=0,
        HF_SENTIMENT_ENDPOINT="https://sentiment.test/models/marbert",
        HF_SUMMARY_ENDPOINT="https://summary.test/models/mt5",
        HF_API_TOKEN="hf_test_token",
        HF_MODEL_SOURCE="MARBERT",
        ADMIN_API_KEY="admin-secret",
        RATE_LIMIT_ENABLED=False,
        NLTK_STOPWORDS=False,
        OTEL_ENABLED=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fake_hf() -> FakeHuggingFace:
    return FakeHuggingFace()


@pytest.fixture
def make_client(tmp_path, fake_hf):
    """Factory so a test can tweak settings; clients are closed at teardown."""
    opened = []

    def _make(**overrides) -> TestClient:
        app = create_app(
            make_settings(tmp_path, **overrides),
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(fake_hf)),
        )
        client = TestClient(app)
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()

