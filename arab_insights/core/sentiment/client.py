from __future__ import annotations
import json
import logging

import httpx

from arab_insights.core.inference.http import post_json
from arab_insights.core.sentiment.config import SentimentConfig
from arab_insights.core.sentiment.parser import (
    SentimentParseError,
    SentimentScores,
    parse_sentiment_payload,
)

logger = logging.getLogger(__name__)


class HuggingFaceSentimentClient:
    """MARBERT/AraBERT text-classification endpoint.

    One attempt per call. Transport and HTTP failures raise UpstreamError;
    a body that is not a known classifier shape raises SentimentParseError.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        timeout: float | None = None,
        config: SentimentConfig | None = None,
    ):
        self.http = http
        self.timeout = timeout
        self.cfg = config or SentimentConfig()

    async def classify(self, text: str, endpoint: str, token: str) -> SentimentScores:
        response = await post_json(
            self.http,
            endpoint,
            token,
            {"inputs": text, "parameters": {}},
            timeout=self.timeout,
        )

        try:
            payload = response.json()
        except json.JSONDecodeError as e:
            raise SentimentParseError(f"Sentiment response is not JSON: {e}") from e

        logger.debug(f"Sentiment endpoint payload: {payload}")
        return parse_sentiment_payload(payload, self.cfg)
