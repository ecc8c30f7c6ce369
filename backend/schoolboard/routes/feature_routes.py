"""
Feature flag routes.

Endpoints:
- GET    /api/feature-flags
- GET    /api/feature-flags/{flag_id}
- PUT    /api/feature-flags/{flag_id}
- DELETE /api/feature-flags/{flag_id}
- GET    /api/feature-flags/{flag_id}/schools/{school_id}
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..database import get_database
from ..errors import RecordNotFoundError
from ..models import FeatureFlagUpsert
from ..services import FeatureFlagService
from .errors import to_http_exception


async def get_feature_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> FeatureFlagService:
    return FeatureFlagService(db)


def create_feature_routes() -> APIRouter:
    """Create feature flag routes."""

    router = APIRouter(prefix="/api/feature-flags", tags=["feature-flags"])

    @router.get("")
    async def list_flags(service: FeatureFlagService = Depends(get_feature_service)):
        try:
            return {"feature_flags": await service.list_flags()}
        except Exception as e:
            raise to_http_exception(e, "retrieve feature flags")

    @router.get("/{flag_id}")
    async def get_flag(flag_id: str, service: FeatureFlagService = Depends(get_feature_service)):
        try:
            flag = await service.get_flag(flag_id)
            if not flag:
                raise RecordNotFoundError("Feature flag not found")
            return {"feature_flag": flag}
        except Exception as e:
            raise to_http_exception(e, "retrieve feature flag")

    @router.put("/{flag_id}")
    async def upsert_flag(
        flag_id: str,
        flag: FeatureFlagUpsert,
        service: FeatureFlagService = Depends(get_feature_service)
    ):
        try:
            saved = await service.upsert_flag(flag_id, flag.model_dump())
            return {"feature_flag": saved}
        except Exception as e:
            raise to_http_exception(e, "save feature flag")

    @router.delete("/{flag_id}")
    async def delete_flag(flag_id: str, service: FeatureFlagService = Depends(get_feature_service)):
        try:
            if not await service.delete_flag(flag_id):
                raise RecordNotFoundError("Feature flag not found")
            return {"message": "Feature flag deleted successfully"}
        except Exception as e:
            raise to_http_exception(e, "delete feature flag")

    @router.get("/{flag_id}/schools/{school_id}")
    async def check_flag_for_school(
        flag_id: str,
        school_id: str,
        service: FeatureFlagService = Depends(get_feature_service)
    ):
        enabled = await service.is_enabled_for_school(flag_id, school_id)
        return {"flag_id": flag_id, "school_id": school_id, "enabled": enabled}

    return router
