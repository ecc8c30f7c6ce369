"""Assessment models: questions, exams and exam attempts."""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


ExamSource = Literal["ai_from_document", "ai_from_content", "admin_manual"]
AttemptStatus = Literal["started", "completed", "graded"]


# ============ QUESTION ============
class QuestionCreate(BaseModel):
    subject_material_id: str = Field(min_length=1)
    question_text: str = Field(min_length=1)
    options: Dict[str, str]  # {"a": "Option A", "b": "Option B"}
    correct_answer: str  # Key into options
    is_generated_by_ai: bool = False
    source_document_url: Optional[str] = None

    @model_validator(mode="after")
    def check_correct_answer(self):
        if not self.options:
            raise ValueError("options must not be empty")
        if self.correct_answer not in self.options:
            raise ValueError("correct_answer must be one of the option keys")
        return self


class QuestionUpdate(BaseModel):
    """Partial update. The answer is checked against the merged options in the route."""
    model_config = ConfigDict(extra="ignore")
    question_text: Optional[str] = None
    options: Optional[Dict[str, str]] = None
    correct_answer: Optional[str] = None
    source_document_url: Optional[str] = None

    @field_validator("question_text", "options", "correct_answer")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field cannot be cleared")
        return value


# ============ EXAM ============
class ExamCreate(BaseModel):
    subject_material_id: str = Field(min_length=1)
    generated_by: ExamSource = "admin_manual"
    questions: List[str] = Field(min_length=1)  # Question ids
    school_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    section_id: Optional[str] = None  # Set when the exam targets one section
    title: str = Field(min_length=1)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    max_marks: Optional[float] = Field(default=None, gt=0)


class ExamUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    questions: Optional[List[str]] = None
    section_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    max_marks: Optional[float] = Field(default=None, gt=0)


# ============ EXAM ATTEMPT ============
class ExamAttemptCreate(BaseModel):
    exam_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    school_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    section_id: str = Field(min_length=1)
    start_time: datetime
    end_time: Optional[datetime] = None
    submitted_answers: Dict[str, str] = {}  # {question_id: chosen option key}
    score: Optional[float] = Field(default=None, ge=0)
    total_questions: int = Field(ge=0)
    correct_answers_count: Optional[int] = Field(default=None, ge=0)
    incorrect_answers_count: Optional[int] = Field(default=None, ge=0)
    status: AttemptStatus = "started"


class ExamAttemptUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    end_time: Optional[datetime] = None
    submitted_answers: Optional[Dict[str, str]] = None
    score: Optional[float] = Field(default=None, ge=0)
    correct_answers_count: Optional[int] = Field(default=None, ge=0)
    incorrect_answers_count: Optional[int] = Field(default=None, ge=0)
    status: Optional[AttemptStatus] = None
