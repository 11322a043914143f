from fastapi import APIRouter

from eduverse.api.endpoints import health
from eduverse.api.endpoints.crud import build_crud_router
from eduverse.services.schema_registry import all_schemas

api_router = APIRouter()

api_router.include_router(health.router)

# One CRUD router per entity kind: /assignments, /notices, /resources, /submissions, /timetable
for _schema in all_schemas():
    api_router.include_router(build_crud_router(_schema))
