from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.core.config import Settings
from arab_insights.core.inference.errors import InferenceNotConfiguredError
from arab_insights.core.inference.http import bearer_headers
from arab_insights.models.db.system_setting import SystemSetting
from arab_insights.schemas.settings import (
    InferenceSettingsUpdate,
    InferenceSettingsView,
    InferenceTestData,
)
from arab_insights.utils.exceptions import BadRequestError
from arab_insights.messages.settings_messages import (
    ENDPOINT_NOT_HTTPS,
    TOKEN_FORMAT_INVALID,
)

logger = logging.getLogger(__name__)

# system_settings keys
SENTIMENT_ENDPOINT_KEY = "hf_sentiment_endpoint"
SUMMARY_ENDPOINT_KEY = "hf_summary_endpoint"
API_TOKEN_KEY = "hf_api_token"
MODEL_SOURCE_KEY = "hf_model_source"

_UPDATE_FIELDS = {
    "sentiment_endpoint": SENTIMENT_ENDPOINT_KEY,
    "summary_endpoint": SUMMARY_ENDPOINT_KEY,
    "api_token": API_TOKEN_KEY,
    "model_source": MODEL_SOURCE_KEY,
}


@dataclass(frozen=True)
class InferenceConfig:
    sentiment_endpoint: Optional[str]
    summary_endpoint: Optional[str]
    api_token: Optional[str]
    model_source: str

    def require_sentiment(self) -> "InferenceConfig":
        if not self.sentiment_endpoint:
            raise InferenceNotConfiguredError("HF_SENTIMENT_ENDPOINT")
        if not self.api_token:
            raise InferenceNotConfiguredError("HF_API_TOKEN")
        return self

    def require_summary(self) -> "InferenceConfig":
        if not self.summary_endpoint:
            raise InferenceNotConfiguredError("HF_SUMMARY_ENDPOINT")
        if not self.api_token:
            raise InferenceNotConfiguredError("HF_API_TOKEN")
        return self


def mask_token(token: Optional[str]) -> Optional[str]:
    if not token:
        return None
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:3]}{'*' * (len(token) - 7)}{token[-4:]}"


def check_endpoint_and_token(endpoint: Optional[str], token: Optional[str]) -> None:
    if endpoint is not None and urlparse(endpoint).scheme != "https":
        raise BadRequestError(code="ENDPOINT_NOT_HTTPS", message=ENDPOINT_NOT_HTTPS)
    if token is not None and not token.startswith("hf_"):
        raise BadRequestError(code="TOKEN_FORMAT_INVALID", message=TOKEN_FORMAT_INVALID)


class InferenceSettingsService:
    """Env settings, overridden key by key by rows of ``system_settings``."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def _overrides(self, db: AsyncSession) -> Dict[str, Optional[str]]:
        try:
            rows = (await db.execute(select(SystemSetting))).scalars().all()
        except SQLAlchemyError as e:
            # unreadable table must not take analysis down with it
            logger.warning(f"system_settings unavailable, using env only: {e}")
            await db.rollback()
            return {}
        return {r.key: r.value for r in rows if r.value}

    async def resolve(self, db: AsyncSession) -> InferenceConfig:
        o = await self._overrides(db)
        s = self.settings
        return InferenceConfig(
            sentiment_endpoint=o.get(SENTIMENT_ENDPOINT_KEY) or s.HF_SENTIMENT_ENDPOINT,
            summary_endpoint=o.get(SUMMARY_ENDPOINT_KEY) or s.HF_SUMMARY_ENDPOINT,
            api_token=o.get(API_TOKEN_KEY) or s.HF_API_TOKEN,
            model_source=o.get(MODEL_SOURCE_KEY) or s.HF_MODEL_SOURCE,
        )

    async def view(self, db: AsyncSession) -> InferenceSettingsView:
        cfg = await self.resolve(db)
        return InferenceSettingsView(
            sentiment_endpoint=cfg.sentiment_endpoint,
            summary_endpoint=cfg.summary_endpoint,
            model_source=cfg.model_source,
            api_token=mask_token(cfg.api_token),
            has_token=bool(cfg.api_token),
        )

    async def update(
        self, db: AsyncSession, patch: InferenceSettingsUpdate
    ) -> InferenceSettingsView:
        changes = patch.model_dump(exclude_unset=True)
        check_endpoint_and_token(
            changes.get("sentiment_endpoint"), changes.get("api_token")
        )
        check_endpoint_and_token(changes.get("summary_endpoint"), None)

        for field_name, value in changes.items():
            key = _UPDATE_FIELDS[field_name]
            row = await db.get(SystemSetting, key)
            if row is None:
                db.add(SystemSetting(key=key, value=value))
            else:
                row.value = value
        await db.commit()

        logger.info(f"Inference settings updated: {sorted(changes)}")
        return await self.view(db)

    async def test_endpoint(
        self,
        http: httpx.AsyncClient,
        db: AsyncSession,
        *,
        endpoint: Optional[str] = None,
        token: Optional[str] = None,
    ) -> InferenceTestData:
        cfg = await self.resolve(db)
        endpoint = endpoint or cfg.sentiment_endpoint
        token = token or cfg.api_token
        if not endpoint or not token:
            return InferenceTestData(ok=False, detail="Endpoint or token missing.")
        check_endpoint_and_token(endpoint, token)

        try:
            response = await http.post(
                endpoint,
                json={"inputs": "مرحبا", "parameters": {}},
                headers=bearer_headers(token),
                timeout=self.settings.HF_TIMEOUT_SECONDS,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Inference endpoint test failed: {e}")
            return InferenceTestData(ok=False, detail=f"Connection failed: {e}")

        return InferenceTestData(
            ok=response.is_success,
            status_code=response.status_code,
            detail="Endpoint reachable."
            if response.is_success
            else response.text[:200],
        )
