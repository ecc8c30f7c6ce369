"""Exam result models, ranking scope and derived leaderboard entries."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils import calculate_percentage


# ============ EXAM RESULT ============
class ExamResultCreate(BaseModel):
    """One student's outcome on one subject within a school/class/section."""
    student_id: str = Field(min_length=1)
    exam_attempt_id: Optional[str] = None
    school_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    section_id: str = Field(min_length=1)
    subject_id: str = Field(min_length=1)
    score: float = Field(ge=0)
    max_marks: float = Field(gt=0)
    percentage: Optional[float] = None  # Derived from score/max_marks when omitted
    grade: Optional[str] = None
    result_date: datetime

    @model_validator(mode="after")
    def check_score(self):
        if self.score > self.max_marks:
            raise ValueError("score must not exceed max_marks")
        if self.percentage is None:
            self.percentage = calculate_percentage(self.score, self.max_marks)
        return self


class ExamResultUpdate(BaseModel):
    """Partial update. Checks against the stored record happen in the route."""
    model_config = ConfigDict(extra="ignore")
    score: Optional[float] = Field(default=None, ge=0)
    max_marks: Optional[float] = Field(default=None, gt=0)
    percentage: Optional[float] = None  # null re-derives from score/max_marks
    grade: Optional[str] = None
    result_date: Optional[datetime] = None

    @field_validator("score", "max_marks", "result_date")
    @classmethod
    def reject_null(cls, value):
        # Only runs for fields present in the body
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    @model_validator(mode="after")
    def check_score(self):
        if self.score is not None and self.max_marks is not None:
            if self.score > self.max_marks:
                raise ValueError("score must not exceed max_marks")
        return self


# ============ RANKING ============
class RankScope(BaseModel):
    """Body of a rank calculation request. Presence is checked by the engine."""
    school_id: Optional[str] = None
    class_id: Optional[str] = None
    section_id: Optional[str] = None
    subject_id: Optional[str] = None


class StudentAverage(BaseModel):
    """A student's aggregate across all subjects in a scope. Never stored."""
    student_id: str
    total_score: float
    total_max_marks: float
    subject_count: int
    average_percentage: float
    rank: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    roll_number: Optional[str] = None
    subject_results: List[Dict[str, Any]] = []
