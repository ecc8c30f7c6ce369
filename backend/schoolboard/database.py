"""MongoDB connection holder, FastAPI dependency and index setup."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

# Global database reference, set by the application lifespan
_db: Optional[AsyncIOMotorDatabase] = None


def init_database(db: AsyncIOMotorDatabase) -> None:
    global _db
    _db = db


def close_database() -> None:
    global _db
    if _db is not None:
        _db.client.close()
        logger.info("✅ Database connection closed")
    _db = None


def is_connected() -> bool:
    return _db is not None


async def get_database() -> AsyncIOMotorDatabase:
    """Get database instance for route handlers."""
    if _db is None:
        raise RuntimeError("Database not initialized")
    return _db


async def create_indexes(db: AsyncIOMotorDatabase):
    """Create database indexes for lookups and ranking queries."""
    try:
        # Organization
        await db.schools.create_index("school_id", unique=True)
        await db.classes.create_index("class_id", unique=True)
        await db.classes.create_index("school_id")
        await db.sections.create_index("section_id", unique=True)
        await db.sections.create_index("class_id")
        await db.students.create_index("student_id", unique=True)
        await db.students.create_index([("school_id", 1), ("class_id", 1), ("section_id", 1)])
        await db.subjects.create_index("subject_id", unique=True)
        await db.subjects.create_index("school_id")
        await db.subject_materials.create_index("material_id", unique=True)
        await db.subject_materials.create_index("subject_id")
        await db.school_users.create_index("user_id", unique=True)

        # Assessments
        await db.questions.create_index("question_id", unique=True)
        await db.exams.create_index("exam_id", unique=True)
        await db.exam_attempts.create_index("attempt_id", unique=True)
        await db.exam_attempts.create_index([("exam_id", 1), ("student_id", 1)])

        # Exam results: exact scope plus score order
        await db.exam_results.create_index("result_id", unique=True)
        await db.exam_results.create_index([
            ("school_id", 1),
            ("class_id", 1),
            ("section_id", 1),
            ("subject_id", 1),
            ("score", -1),
        ])
        await db.exam_results.create_index("student_id")

        await db.feature_flags.create_index("flag_id", unique=True)

    except Exception as e:
        logger.warning(f"Index creation warning: {e}")
        # Don't fail startup if indexes already exist
