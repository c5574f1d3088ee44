from __future__ import annotations
import json
import logging
from typing import Any

import httpx

from arab_insights.core.inference.http import post_json
from arab_insights.core.summarization.config import SummaryConfig

logger = logging.getLogger(__name__)

_SUMMARY_KEYS = ("summary_text", "generated_text")


def extract_summary(payload: Any) -> str:
    """Pull the generated text out of a text2text / summarization response.

    Accepts ``[{"summary_text": ...}]``, ``{"summary_text": ...}`` and the
    ``generated_text`` variants; anything else is returned as its JSON dump.
    """
    item = payload[0] if isinstance(payload, list) and payload else payload
    if isinstance(item, dict):
        for key in _SUMMARY_KEYS:
            value = item.get(key)
            if isinstance(value, str):
                return value.strip()
    if isinstance(item, str):
        return item.strip()
    return json.dumps(payload, ensure_ascii=False)


class HuggingFaceSummaryClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        timeout: float | None = None,
        config: SummaryConfig | None = None,
    ):
        self.http = http
        self.timeout = timeout
        self.cfg = config or SummaryConfig()

    def build_payload(self, text: str) -> dict:
        return {
            "inputs": text[: self.cfg.max_input_chars],
            "parameters": {
                "max_length": self.cfg.max_length,
                "min_length": self.cfg.min_length,
                "do_sample": self.cfg.do_sample,
            },
        }

    async def summarize(self, text: str, endpoint: str, token: str) -> str:
        response = await post_json(
            self.http,
            endpoint,
            token,
            self.build_payload(text),
            timeout=self.timeout,
        )
        try:
            payload = response.json()
        except json.JSONDecodeError:
            logger.warning("Summary endpoint returned non-JSON body; using raw text")
            return response.text.strip()
        return extract_summary(payload)
