"""Data access: generic entity repositories and ranking collaborators."""

from .documents import DocumentRepository
from .stores import (
    MongoResultStore,
    MongoStudentDirectory,
    ResultStore,
    StudentDirectory,
)

__all__ = [
    "DocumentRepository",
    "MongoResultStore",
    "MongoStudentDirectory",
    "ResultStore",
    "StudentDirectory",
]
