"""
Feature flag service - global toggles with per-school overrides.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..errors import StoreError
from ..repositories import DocumentRepository

logger = logging.getLogger(__name__)


class FeatureFlagService:
    """Stores feature flags and resolves whether a feature is on for a school."""

    COLLECTION = "feature_flags"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.repository = DocumentRepository(
            db[self.COLLECTION],
            id_field="flag_id",
            id_prefix="flag",
            entity="feature flag"
        )

    async def upsert_flag(self, flag_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.repository.upsert(flag_id, data)

    async def get_flag(self, flag_id: str) -> Optional[Dict[str, Any]]:
        return await self.repository.get(flag_id)

    async def list_flags(self) -> List[Dict[str, Any]]:
        return await self.repository.list({}, sort=[("flag_id", 1)])

    async def delete_flag(self, flag_id: str) -> bool:
        return await self.repository.delete(flag_id)

    async def is_enabled_for_school(self, flag_id: str, school_id: str) -> bool:
        """
        Resolve a flag for one school.

        A per-school override wins over the global ``enabled`` value. Unknown
        flags and lookup failures resolve to disabled.
        """
        try:
            flag = await self.repository.get(flag_id)
        except StoreError as e:
            logger.error(f"Error checking feature '{flag_id}' for school '{school_id}': {e}")
            return False

        if not flag:
            logger.warning(f"Feature flag '{flag_id}' not found. Defaulting to disabled.")
            return False

        override = (flag.get("enabled_for_schools") or {}).get(school_id)
        if isinstance(override, bool):
            return override

        return bool(flag.get("enabled", False))
