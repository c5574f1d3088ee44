from __future__ import annotations
import logging
from typing import Any, Dict

import httpx

from arab_insights.core.inference.errors import UpstreamError

logger = logging.getLogger(__name__)


def bearer_headers(token: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


async def post_json(
    http: httpx.AsyncClient,
    endpoint: str,
    token: str,
    payload: Dict[str, Any],
    *,
    timeout: float | None = None,
) -> httpx.Response:
    """Single POST, no retries. Raises UpstreamError on transport or HTTP failure."""
    try:
        response = await http.post(
            endpoint, json=payload, headers=bearer_headers(token), timeout=timeout
        )
    except httpx.HTTPError as e:
        logger.error(f"Inference request to {endpoint} failed: {e}")
        raise UpstreamError(f"Could not reach inference endpoint: {e}") from e

    if response.is_error:
        body = response.text[:500]
        logger.error(f"Inference endpoint error {response.status_code}: {body}")
        raise UpstreamError(
            f"Inference endpoint returned {response.status_code}",
            status_code=response.status_code,
            body=body,
        )
    return response
