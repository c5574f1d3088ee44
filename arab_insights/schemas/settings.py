from typing import Optional
from pydantic import BaseModel


class InferenceSettingsView(BaseModel):
    sentiment_endpoint: Optional[str] = None
    summary_endpoint: Optional[str] = None
    model_source: str
    api_token: Optional[str] = None  # masked
    has_token: bool


class InferenceSettingsUpdate(BaseModel):
    sentiment_endpoint: Optional[str] = None
    summary_endpoint: Optional[str] = None
    model_source: Optional[str] = None
    api_token: Optional[str] = None


class InferenceTestRequest(BaseModel):
    endpoint: Optional[str] = None  # defaults to the configured sentiment endpoint
    api_token: Optional[str] = None


class InferenceTestData(BaseModel):
    ok: bool
    status_code: Optional[int] = None
    detail: str
