"""
Exam result and leaderboard routes.

Endpoints:
- POST /api/exam-results/calculate-ranks
- /api/exam-results (POST, GET list, GET/PUT/DELETE by id)
- GET /api/top-rankers/subject-wise
- GET /api/top-rankers/overall
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..config.settings import settings
from ..database import get_database
from ..errors import RecordNotFoundError
from ..models import ExamResultCreate, ExamResultUpdate, RankScope
from ..repositories import DocumentRepository, MongoResultStore, MongoStudentDirectory
from ..services import RankingEngine
from ..utils import calculate_percentage
from .crud import Resource, create_crud_routes
from .errors import to_http_exception


async def merge_result_update(
    repository: DocumentRepository,
    record_id: str,
    fields: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Validate a partial exam result update against the stored record.

    score and max_marks are checked as merged values. percentage is
    re-derived when either changes, unless the caller supplies one.
    """
    stored = await repository.get(record_id)
    if not stored:
        raise RecordNotFoundError("Exam result not found")

    score = fields.get("score", stored.get("score"))
    max_marks = fields.get("max_marks", stored.get("max_marks"))
    if score > max_marks:
        raise HTTPException(status_code=422, detail="score must not exceed max_marks")

    marks_changed = "score" in fields or "max_marks" in fields
    if fields.get("percentage") is None and (marks_changed or "percentage" in fields):
        fields["percentage"] = calculate_percentage(score, max_marks)
    return fields


EXAM_RESULTS = Resource(
    path="exam-results",
    collection="exam_results",
    id_field="result_id",
    id_prefix="result",
    name="exam_result",
    plural="exam_results",
    create_model=ExamResultCreate,
    update_model=ExamResultUpdate,
    filters=("school_id", "class_id", "section_id", "student_id", "subject_id"),
    sort=[("result_date", -1)],
    prepare_update=merge_result_update,
)


async def get_ranking_engine(db: AsyncIOMotorDatabase = Depends(get_database)) -> RankingEngine:
    return RankingEngine(
        MongoResultStore(db[EXAM_RESULTS.collection]),
        MongoStudentDirectory(db.students)
    )


def create_result_routes() -> List[APIRouter]:
    """Create exam result, rank calculation and leaderboard routes."""

    ranking_router = APIRouter(prefix="/api", tags=["rankings"])

    @ranking_router.post("/exam-results/calculate-ranks")
    async def calculate_ranks(
        scope: RankScope,
        engine: RankingEngine = Depends(get_ranking_engine)
    ):
        """
        Recalculate ranks for one subject in a section.

        Ranks are written onto each exam result as rank_in_class and
        rank_in_section.
        """
        try:
            await engine.compute_and_assign_ranks(
                scope.school_id,
                scope.class_id,
                scope.section_id,
                scope.subject_id
            )
            return {"message": "Ranks calculated and assigned successfully."}
        except Exception as e:
            raise to_http_exception(e, "calculate ranks")

    @ranking_router.get("/top-rankers/subject-wise")
    async def top_students_by_subject(
        school_id: Optional[str] = None,
        class_id: Optional[str] = None,
        section_id: Optional[str] = None,
        subject_id: Optional[str] = None,
        top_n: int = Query(settings.DEFAULT_TOP_N, ge=1),
        engine: RankingEngine = Depends(get_ranking_engine)
    ):
        """Top N exam results for one subject, highest score first."""
        try:
            top_students = await engine.get_top_students_by_subject(
                school_id, class_id, section_id, subject_id, top_n=top_n
            )
            return {"top_students": top_students}
        except Exception as e:
            raise to_http_exception(e, "retrieve top students by subject")

    @ranking_router.get("/top-rankers/overall")
    async def overall_top_students(
        school_id: Optional[str] = None,
        class_id: Optional[str] = None,
        section_id: Optional[str] = None,
        top_n: int = Query(settings.DEFAULT_TOP_N, ge=1),
        engine: RankingEngine = Depends(get_ranking_engine)
    ):
        """Top N students by average percentage across all subjects."""
        try:
            top_students = await engine.get_overall_top_students(
                school_id, class_id, section_id, top_n=top_n
            )
            return {"top_students": [entry.model_dump() for entry in top_students]}
        except Exception as e:
            raise to_http_exception(e, "retrieve overall top students")

    # Rank calculation is registered first so its path wins over /{record_id}
    return [ranking_router, create_crud_routes(EXAM_RESULTS, tag="exam-results")]
