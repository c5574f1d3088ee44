from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.api.deps import get_inference_settings, require_admin_key
from arab_insights.core.database import get_db
from arab_insights.messages.settings_messages import (
    SETTINGS_FETCHED,
    SETTINGS_TEST_DONE,
    SETTINGS_UPDATED,
)
from arab_insights.schemas.settings import InferenceSettingsUpdate, InferenceTestRequest
from arab_insights.services.inference_settings_service import InferenceSettingsService
from arab_insights.utils.response_builder import success_response

router = APIRouter(
    prefix="/api/settings",
    tags=["Settings"],
    dependencies=[Depends(require_admin_key)],
)


@router.get("/inference")
async def read_inference_settings(
    db: AsyncSession = Depends(get_db),
    service: InferenceSettingsService = Depends(get_inference_settings),
):
    return success_response(message=SETTINGS_FETCHED, data=await service.view(db))


@router.put("/inference")
async def write_inference_settings(
    req: InferenceSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    service: InferenceSettingsService = Depends(get_inference_settings),
):
    return success_response(
        message=SETTINGS_UPDATED, data=await service.update(db, req)
    )


@router.post("/inference/test")
async def check_inference_endpoint(
    request: Request,
    req: InferenceTestRequest,
    db: AsyncSession = Depends(get_db),
    service: InferenceSettingsService = Depends(get_inference_settings),
):
    data = await service.test_endpoint(
        request.app.state.http_client,
        db,
        endpoint=req.endpoint,
        token=req.api_token,
    )
    return success_response(message=SETTINGS_TEST_DONE, data=data)
