"""
Organization management routes.

Endpoints (each with POST, GET list, GET/PUT/DELETE by id):
- /api/schools
- /api/classes            (list requires school_id)
- /api/sections           (list requires class_id)
- /api/students
- /api/subjects           (list requires school_id)
- /api/subject-materials  (list requires subject_id)
- /api/users
"""

from typing import List

from fastapi import APIRouter

from ..models import (
    SchoolClassCreate,
    SchoolClassUpdate,
    SchoolCreate,
    SchoolUpdate,
    SchoolUserCreate,
    SchoolUserUpdate,
    SectionCreate,
    SectionUpdate,
    StudentCreate,
    StudentUpdate,
    SubjectCreate,
    SubjectMaterialCreate,
    SubjectMaterialUpdate,
    SubjectUpdate,
)
from .crud import Resource, create_crud_routes

ORGANIZATION_RESOURCES = [
    Resource(
        path="schools",
        collection="schools",
        id_field="school_id",
        id_prefix="school",
        name="school",
        plural="schools",
        create_model=SchoolCreate,
        update_model=SchoolUpdate,
        sort=[("name", 1)],
    ),
    Resource(
        path="classes",
        collection="classes",
        id_field="class_id",
        id_prefix="class",
        name="class",
        plural="classes",
        create_model=SchoolClassCreate,
        update_model=SchoolClassUpdate,
        filters=("school_id",),
        required_filters=("school_id",),
        sort=[("name", 1)],
    ),
    Resource(
        path="sections",
        collection="sections",
        id_field="section_id",
        id_prefix="section",
        name="section",
        plural="sections",
        create_model=SectionCreate,
        update_model=SectionUpdate,
        filters=("class_id",),
        required_filters=("class_id",),
        sort=[("name", 1)],
    ),
    Resource(
        path="students",
        collection="students",
        id_field="student_id",
        id_prefix="student",
        name="student",
        plural="students",
        create_model=StudentCreate,
        update_model=StudentUpdate,
        filters=("school_id", "class_id", "section_id"),
        sort=[("roll_number", 1)],
    ),
    Resource(
        path="subjects",
        collection="subjects",
        id_field="subject_id",
        id_prefix="subject",
        name="subject",
        plural="subjects",
        create_model=SubjectCreate,
        update_model=SubjectUpdate,
        filters=("school_id",),
        required_filters=("school_id",),
        sort=[("name", 1)],
    ),
    Resource(
        path="subject-materials",
        collection="subject_materials",
        id_field="material_id",
        id_prefix="material",
        name="subject_material",
        plural="subject_materials",
        create_model=SubjectMaterialCreate,
        update_model=SubjectMaterialUpdate,
        filters=("subject_id",),
        required_filters=("subject_id",),
    ),
    Resource(
        path="users",
        collection="school_users",
        id_field="user_id",
        id_prefix="user",
        name="user",
        plural="users",
        create_model=SchoolUserCreate,
        update_model=SchoolUserUpdate,
        filters=("school_id", "role"),
        supplied_id=True,
    ),
]


def create_organization_routes() -> List[APIRouter]:
    """Create routers for schools and their structure."""
    return [create_crud_routes(resource, tag="organization") for resource in ORGANIZATION_RESOURCES]
