"""
Collaborators consumed by the ranking engine.

ResultStore: equality-filter reads with optional ordering and limit, plus
independent per-record partial writes (no multi-record transaction).

StudentDirectory: display name and roll number lookup by student id.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from ..errors import StoreError

logger = logging.getLogger(__name__)

SortSpec = Sequence[Tuple[str, int]]


class ResultStore(Protocol):
    async def find(
        self,
        filters: Mapping[str, Any],
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        ...

    async def update(self, result_id: str, fields: Dict[str, Any]) -> None:
        ...


class StudentDirectory(Protocol):
    async def get_student(self, student_id: str) -> Optional[Dict[str, Any]]:
        ...


class MongoResultStore:
    """ResultStore backed by the ``exam_results`` collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def find(
        self,
        filters: Mapping[str, Any],
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.find(dict(filters), {"_id": 0})
            if sort:
                cursor = cursor.sort(list(sort))
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Exam result query failed for {dict(filters)}: {e}")
            raise StoreError(f"Exam result query failed: {e}") from e

    async def update(self, result_id: str, fields: Dict[str, Any]) -> None:
        try:
            result = await self.collection.update_one(
                {"result_id": result_id},
                {"$set": fields}
            )
        except PyMongoError as e:
            logger.error(f"Exam result update failed for {result_id}: {e}")
            raise StoreError(f"Exam result update failed: {e}") from e

        if result.matched_count == 0:
            raise StoreError(f"Exam result {result_id} not found")


class MongoStudentDirectory:
    """StudentDirectory backed by the ``students`` collection."""

    PROJECTION = {"_id": 0, "first_name": 1, "last_name": 1, "roll_number": 1}

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def get_student(self, student_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one({"student_id": student_id}, self.PROJECTION)
        except PyMongoError as e:
            logger.error(f"Student lookup failed for {student_id}: {e}")
            raise StoreError(f"Student lookup failed: {e}") from e
