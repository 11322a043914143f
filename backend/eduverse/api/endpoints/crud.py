"""
CRUD router factory

Builds the ``/api/<collection>`` router for one entity kind:

- GET    ?id=<id>                       single record
- GET    ?search=&<filters>&limit=&offset=  filtered, sorted, paginated list
- POST   JSON body                      create (201)
- PUT    ?id=<id> + partial JSON body   update
- DELETE ?id=<id>                       delete
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from eduverse.core.database import get_db
from eduverse.core.exceptions import InvalidIdError
from eduverse.core.logging_config import set_entity
from eduverse.services.filter_builder import build_filter
from eduverse.services.repository import EntityRepository
from eduverse.services.request_validator import parse_json_object, validate_create, validate_update
from eduverse.services.response_mapper import (
    deleted_response,
    list_response,
    map_unexpected_errors,
    record_response,
)
from eduverse.services.schema_registry import EntitySchema


def require_id(request: Request) -> str:
    record_id: Optional[str] = request.query_params.get("id")
    if record_id is None or not record_id.strip():
        raise InvalidIdError()
    return record_id.strip()


def build_crud_router(schema: EntitySchema) -> APIRouter:
    router = APIRouter(prefix=f"/{schema.collection}", tags=[schema.label])
    context = schema.name

    @router.get("")
    async def read_records(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
        set_entity(schema.collection)
        params = request.query_params
        with map_unexpected_errors(f"{context}.read"):
            repository = EntityRepository(schema, db)
            record_id = params.get("id")
            if record_id:
                row = await repository.get(record_id.strip())
                return record_response(schema, row)

            descriptor = build_filter(schema, params)
            rows = await repository.list(descriptor)
            return list_response(schema, rows)

    @router.post("")
    async def create_record(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
        set_entity(schema.collection)
        with map_unexpected_errors(f"{context}.create"):
            payload = parse_json_object(await request.body())
            record = validate_create(schema, payload)
            row = await EntityRepository(schema, db).create(record)
            return record_response(schema, row, status_code=201)

    @router.put("")
    async def update_record(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
        set_entity(schema.collection)
        with map_unexpected_errors(f"{context}.update"):
            record_id = require_id(request)
            repository = EntityRepository(schema, db)
            # Existence is checked before the body is judged
            await repository.get(record_id)
            payload = parse_json_object(await request.body())
            patch = validate_update(schema, payload)
            row = await repository.update(record_id, patch)
            return record_response(schema, row)

    @router.delete("")
    async def delete_record(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
        set_entity(schema.collection)
        with map_unexpected_errors(f"{context}.delete"):
            record_id = require_id(request)
            row = await EntityRepository(schema, db).delete(record_id)
            return deleted_response(schema, row)

    return router
