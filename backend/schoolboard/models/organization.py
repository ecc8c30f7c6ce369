"""Organization models: schools, classes, sections, students, subjects, users."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Gender = Literal["Male", "Female", "Other"]
UserRole = Literal["application_admin", "school_admin", "principal", "teacher", "student"]


# ============ SCHOOL ============
class SchoolCreate(BaseModel):
    name: str = Field(min_length=1)
    address: str = ""
    contact_email: str = ""
    contact_phone: str = ""


class SchoolUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


# ============ CLASS ============
class SchoolClassCreate(BaseModel):
    school_id: str = Field(min_length=1)
    name: str = Field(min_length=1)  # e.g. "Grade 10"


class SchoolClassUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1)


# ============ SECTION ============
class SectionCreate(BaseModel):
    school_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    name: str = Field(min_length=1)  # e.g. "Section A"


class SectionUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1)


# ============ STUDENT ============
class StudentCreate(BaseModel):
    school_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    section_id: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    admission_number: str = Field(min_length=1)
    roll_number: str = Field(min_length=1)  # Unique within class/section
    user_id: Optional[str] = None  # Linked login account, if any
    date_of_birth: Optional[datetime] = None
    gender: Optional[Gender] = None
    parent_name: str = ""
    parent_contact: str = ""
    parent_email: str = ""


class StudentUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    school_id: Optional[str] = None
    class_id: Optional[str] = None
    section_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    admission_number: Optional[str] = None
    roll_number: Optional[str] = None
    user_id: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    gender: Optional[Gender] = None
    parent_name: Optional[str] = None
    parent_contact: Optional[str] = None
    parent_email: Optional[str] = None


# ============ SUBJECT ============
class SubjectCreate(BaseModel):
    school_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: Optional[str] = None
    is_custom: bool = False  # True when added by a school admin


class SubjectUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_custom: Optional[bool] = None


# ============ SUBJECT MATERIAL ============
class SubjectMaterialCreate(BaseModel):
    """Metadata for a document that has already been uploaded to storage."""
    subject_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    school_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    file_url: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    file_type: str = Field(min_length=1)  # pdf, docx, ...
    uploaded_by: str = Field(min_length=1)
    test_key_file_url: Optional[str] = None


class SubjectMaterialUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: Optional[str] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    test_key_file_url: Optional[str] = None


# ============ SCHOOL USER ============
class SchoolUserCreate(BaseModel):
    user_id: str = Field(min_length=1)  # Identity provider uid
    school_id: str = Field(min_length=1)
    role: UserRole
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone_number: Optional[str] = None
    assigned_classes: List[str] = []
    assigned_sections: List[str] = []
    is_active: bool = True


class SchoolUserUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    school_id: Optional[str] = None
    role: Optional[UserRole] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    assigned_classes: Optional[List[str]] = None
    assigned_sections: Optional[List[str]] = None
    is_active: Optional[bool] = None
