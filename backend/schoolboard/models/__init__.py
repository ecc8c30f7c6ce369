"""Pydantic models for SchoolBoard application"""

from .organization import (
    SchoolCreate,
    SchoolUpdate,
    SchoolClassCreate,
    SchoolClassUpdate,
    SectionCreate,
    SectionUpdate,
    StudentCreate,
    StudentUpdate,
    SubjectCreate,
    SubjectUpdate,
    SubjectMaterialCreate,
    SubjectMaterialUpdate,
    SchoolUserCreate,
    SchoolUserUpdate,
)
from .assessment import (
    QuestionCreate,
    QuestionUpdate,
    ExamCreate,
    ExamUpdate,
    ExamAttemptCreate,
    ExamAttemptUpdate,
)
from .results import ExamResultCreate, ExamResultUpdate, RankScope, StudentAverage
from .features import FeatureFlagUpsert

__all__ = [
    # Organization models
    "SchoolCreate",
    "SchoolUpdate",
    "SchoolClassCreate",
    "SchoolClassUpdate",
    "SectionCreate",
    "SectionUpdate",
    "StudentCreate",
    "StudentUpdate",
    "SubjectCreate",
    "SubjectUpdate",
    "SubjectMaterialCreate",
    "SubjectMaterialUpdate",
    "SchoolUserCreate",
    "SchoolUserUpdate",

    # Assessment models
    "QuestionCreate",
    "QuestionUpdate",
    "ExamCreate",
    "ExamUpdate",
    "ExamAttemptCreate",
    "ExamAttemptUpdate",

    # Result models
    "ExamResultCreate",
    "ExamResultUpdate",
    "RankScope",
    "StudentAverage",

    # Feature flags
    "FeatureFlagUpsert",
]
