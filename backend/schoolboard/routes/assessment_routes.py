"""
Assessment routes.

Endpoints (each with POST, GET list, GET/PUT/DELETE by id):
- /api/questions
- /api/exams
- /api/exam-attempts
"""

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from ..errors import RecordNotFoundError
from ..models import (
    ExamAttemptCreate,
    ExamAttemptUpdate,
    ExamCreate,
    ExamUpdate,
    QuestionCreate,
    QuestionUpdate,
)
from ..repositories import DocumentRepository
from .crud import Resource, create_crud_routes


async def merge_question_update(
    repository: DocumentRepository,
    record_id: str,
    fields: Dict[str, Any]
) -> Dict[str, Any]:
    """Check that the merged correct_answer is one of the merged option keys."""
    if "options" not in fields and "correct_answer" not in fields:
        return fields

    stored = await repository.get(record_id)
    if not stored:
        raise RecordNotFoundError("Question not found")

    options = fields.get("options", stored.get("options"))
    correct_answer = fields.get("correct_answer", stored.get("correct_answer"))
    if not options:
        raise HTTPException(status_code=422, detail="options must not be empty")
    if correct_answer not in options:
        raise HTTPException(status_code=422, detail="correct_answer must be one of the option keys")
    return fields


ASSESSMENT_RESOURCES = [
    Resource(
        path="questions",
        collection="questions",
        id_field="question_id",
        id_prefix="question",
        name="question",
        plural="questions",
        create_model=QuestionCreate,
        update_model=QuestionUpdate,
        filters=("subject_material_id",),
        prepare_update=merge_question_update,
    ),
    Resource(
        path="exams",
        collection="exams",
        id_field="exam_id",
        id_prefix="exam",
        name="exam",
        plural="exams",
        create_model=ExamCreate,
        update_model=ExamUpdate,
        filters=("school_id", "class_id", "subject_material_id"),
        sort=[("created_at", -1)],
    ),
    Resource(
        path="exam-attempts",
        collection="exam_attempts",
        id_field="attempt_id",
        id_prefix="attempt",
        name="exam_attempt",
        plural="exam_attempts",
        create_model=ExamAttemptCreate,
        update_model=ExamAttemptUpdate,
        filters=("student_id", "exam_id", "school_id", "class_id", "section_id"),
        sort=[("start_time", -1)],
    ),
]


def create_assessment_routes() -> List[APIRouter]:
    """Create routers for questions, exams and attempts."""
    return [create_crud_routes(resource, tag="assessments") for resource in ASSESSMENT_RESOURCES]
