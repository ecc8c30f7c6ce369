"""
CRUD route factory shared by every managed entity.

Endpoints per resource (``/api/{path}``):
- POST   ""            create, 201 {name: record}
- GET    ""            list with equality filters, {plural: [...]}
- GET    "/{id}"       fetch one
- PUT    "/{id}"       partial update, optionally checked against the stored record
- DELETE "/{id}"       delete
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Tuple, Type

from fastapi import APIRouter, Depends, HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel

from ..database import get_database
from ..errors import RecordNotFoundError
from ..repositories import DocumentRepository
from ..utils import pick_filters
from .errors import to_http_exception


@dataclass
class Resource:
    """Description of one entity collection exposed over HTTP."""
    path: str                      # URL segment, e.g. "subject-materials"
    collection: str                # Mongo collection name
    id_field: str                  # e.g. "material_id"
    id_prefix: str                 # e.g. "material"
    name: str                      # Singular response key, e.g. "subject_material"
    plural: str                    # List response key
    create_model: Type[BaseModel]
    update_model: Type[BaseModel]
    filters: Tuple[str, ...] = ()
    required_filters: Tuple[str, ...] = ()
    sort: Optional[Sequence[Tuple[str, int]]] = None
    supplied_id: bool = False      # Caller provides the id in the create body
    # Checks a partial update against the stored record, returns the fields to write
    prepare_update: Optional[Callable[[DocumentRepository, str, Dict[str, Any]], Awaitable[Dict[str, Any]]]] = None

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()


def create_crud_routes(resource: Resource, tag: str) -> APIRouter:
    """Create CRUD routes for one resource."""

    router = APIRouter(prefix=f"/api/{resource.path}", tags=[tag])

    async def get_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> DocumentRepository:
        return DocumentRepository(
            db[resource.collection],
            id_field=resource.id_field,
            id_prefix=resource.id_prefix,
            entity=resource.name.replace("_", " ")
        )

    @router.post("", status_code=201)
    async def create_record(
        payload: resource.create_model,
        repository: DocumentRepository = Depends(get_repository)
    ):
        try:
            data = payload.model_dump(mode="json")
            record_id = data.pop(resource.id_field) if resource.supplied_id else None
            record = await repository.create(data, record_id=record_id)
            return {resource.name: record}
        except Exception as e:
            raise to_http_exception(e, f"add {resource.name}")

    @router.get("")
    async def list_records(
        request: Request,
        repository: DocumentRepository = Depends(get_repository)
    ):
        try:
            filters = pick_filters(request.query_params, resource.filters)
            missing = [field for field in resource.required_filters if field not in filters]
            if missing:
                raise HTTPException(
                    status_code=400,
                    detail=f"{', '.join(missing)} required to list {resource.plural.replace('_', ' ')}"
                )

            records = await repository.list(filters, sort=resource.sort)
            return {resource.plural: records}
        except Exception as e:
            raise to_http_exception(e, f"list {resource.plural}")

    @router.get("/{record_id}")
    async def get_record(
        record_id: str,
        repository: DocumentRepository = Depends(get_repository)
    ):
        try:
            record = await repository.get(record_id)
            if not record:
                raise RecordNotFoundError(f"{resource.label} not found")
            return {resource.name: record}
        except Exception as e:
            raise to_http_exception(e, f"get {resource.name}")

    @router.put("/{record_id}")
    async def update_record(
        record_id: str,
        payload: resource.update_model,
        repository: DocumentRepository = Depends(get_repository)
    ):
        try:
            fields = payload.model_dump(mode="json", exclude_unset=True)
            if not fields:
                raise HTTPException(status_code=400, detail="No fields to update")
            if resource.prepare_update:
                fields = await resource.prepare_update(repository, record_id, fields)

            updated = await repository.update(record_id, fields)
            if not updated:
                raise RecordNotFoundError(f"{resource.label} not found")
            return {"message": f"{resource.label} updated successfully"}
        except Exception as e:
            raise to_http_exception(e, f"update {resource.name}")

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str,
        repository: DocumentRepository = Depends(get_repository)
    ):
        try:
            deleted = await repository.delete(record_id)
            if not deleted:
                raise RecordNotFoundError(f"{resource.label} not found")
            return {"message": f"{resource.label} deleted successfully"}
        except Exception as e:
            raise to_http_exception(e, f"delete {resource.name}")

    return router
