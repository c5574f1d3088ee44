from __future__ import annotations
from typing import Optional


class InferenceError(Exception):
    """Base for failures talking to a remote inference endpoint."""


class InferenceNotConfiguredError(InferenceError):
    def __init__(self, missing: str):
        super().__init__(f"Inference endpoint is not configured: {missing} missing")
        self.missing = missing


class UpstreamError(InferenceError):
    """Transport failure or non-2xx answer from the endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
