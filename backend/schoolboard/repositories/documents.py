"""Generic CRUD repository over a MongoDB collection."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from ..config.settings import settings
from ..errors import DuplicateRecordError, StoreError
from ..utils import generate_id, utc_now_iso

logger = logging.getLogger(__name__)


class DocumentRepository:
    """
    CRUD for one entity collection.

    Records are keyed by a string id field (``school_id``, ``exam_id``, ...)
    rather than Mongo's ``_id``, which is never returned to callers.
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        id_field: str,
        id_prefix: str,
        entity: str
    ):
        self.collection = collection
        self.id_field = id_field
        self.id_prefix = id_prefix
        self.entity = entity

    async def create(self, data: Dict[str, Any], record_id: Optional[str] = None) -> Dict[str, Any]:
        """Insert a record, generating its id unless one is supplied."""
        try:
            if record_id is not None:
                existing = await self.collection.find_one({self.id_field: record_id}, {"_id": 1})
                if existing:
                    raise DuplicateRecordError(f"{self.entity.capitalize()} {record_id} already exists")

            now = utc_now_iso()
            record = {
                **data,
                self.id_field: record_id or generate_id(self.id_prefix),
                "created_at": now,
                "updated_at": now
            }
            await self.collection.insert_one(record)
            record.pop("_id", None)
            return record
        except PyMongoError as e:
            logger.error(f"Error adding {self.entity}: {e}")
            raise StoreError(f"Failed to add {self.entity}.") from e

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one({self.id_field: record_id}, {"_id": 0})
        except PyMongoError as e:
            logger.error(f"Error getting {self.entity} {record_id}: {e}")
            raise StoreError(f"Failed to retrieve {self.entity} with ID {record_id}.") from e

    async def list(
        self,
        filters: Dict[str, Any],
        sort: Optional[Sequence[Tuple[str, int]]] = None,
        limit: int = settings.MAX_LIST_RESULTS
    ) -> List[Dict[str, Any]]:
        """Equality-filtered listing."""
        try:
            cursor = self.collection.find(filters, {"_id": 0})
            if sort:
                cursor = cursor.sort(list(sort))
            return await cursor.to_list(limit)
        except PyMongoError as e:
            logger.error(f"Error listing {self.entity} records with filters {filters}: {e}")
            raise StoreError(f"Failed to retrieve {self.entity} records.") from e

    async def update(self, record_id: str, fields: Dict[str, Any]) -> bool:
        """Partial update. Returns False when no record matched."""
        try:
            result = await self.collection.update_one(
                {self.id_field: record_id},
                {"$set": {**fields, "updated_at": utc_now_iso()}}
            )
            return result.matched_count > 0
        except PyMongoError as e:
            logger.error(f"Error updating {self.entity} {record_id}: {e}")
            raise StoreError(f"Failed to update {self.entity} with ID {record_id}.") from e

    async def delete(self, record_id: str) -> bool:
        try:
            result = await self.collection.delete_one({self.id_field: record_id})
            return result.deleted_count > 0
        except PyMongoError as e:
            logger.error(f"Error deleting {self.entity} {record_id}: {e}")
            raise StoreError(f"Failed to delete {self.entity} with ID {record_id}.") from e

    async def upsert(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace fields of a record, preserving its created_at."""
        try:
            now = utc_now_iso()
            result = await self.collection.update_one(
                {self.id_field: record_id},
                {
                    "$set": {**data, "updated_at": now},
                    "$setOnInsert": {"created_at": now}
                },
                upsert=True
            )
            if result.upserted_id is not None:
                logger.info(f"Created {self.entity} {record_id}")
            return await self.collection.find_one({self.id_field: record_id}, {"_id": 0})
        except PyMongoError as e:
            logger.error(f"Error upserting {self.entity} {record_id}: {e}")
            raise StoreError(f"Failed to upsert {self.entity} {record_id}.") from e
