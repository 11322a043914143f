"""
Response Mapper

Shapes repository results and pipeline failures into the portal's wire format:

- success: the record, a list of records, or ``{message, <key>: record}``
  for deletes
- failure: ``{error, code}`` with 400 for validation problems, 404 for
  missing records and 500 for store failures
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from eduverse.core.exceptions import BackingStoreError, EduverseError, ErrorKind
from eduverse.core.logging_config import logger
from eduverse.schemas import RESPONSE_MODELS
from eduverse.services.schema_registry import EntitySchema


def serialize_record(schema: EntitySchema, row: Any) -> Dict[str, Any]:
    model = RESPONSE_MODELS[schema.kind]
    return model.model_validate(row).model_dump(by_alias=True)


def serialize_records(schema: EntitySchema, rows: Iterable[Any]) -> List[Dict[str, Any]]:
    return [serialize_record(schema, row) for row in rows]


def record_response(schema: EntitySchema, row: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=serialize_record(schema, row))


def list_response(schema: EntitySchema, rows: Iterable[Any]) -> JSONResponse:
    return JSONResponse(status_code=200, content=serialize_records(schema, rows))


def deleted_response(schema: EntitySchema, row: Any) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "message": f"{schema.label} deleted successfully",
            schema.response_key: serialize_record(schema, row),
        },
    )


def error_response(error: EduverseError) -> JSONResponse:
    """Convert exception to API error response format"""
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@contextmanager
def map_unexpected_errors(context: str) -> Iterator[None]:
    """
    Let pipeline errors through untouched; anything else becomes a
    BackingStoreError carrying the original message.
    """
    try:
        yield
    except EduverseError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, context=context)
        raise BackingStoreError(str(e)) from e


async def eduverse_error_handler(request: Request, exc: EduverseError) -> JSONResponse:
    path = request.url.path
    if exc.kind in (ErrorKind.MISSING_FIELD, ErrorKind.INVALID_FIELD, ErrorKind.INVALID_ID, ErrorKind.INVALID_BODY):
        logger.warning(f"Rejected {request.method} {path}: {exc.code} - {exc.message}")
    elif exc.kind is ErrorKind.NOT_FOUND:
        logger.info(f"{request.method} {path}: {exc.message} (id={exc.details.get('id')})")
    else:
        logger.error(f"{request.method} {path} failed: {exc.message}")
    return error_response(exc)


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return error_response(BackingStoreError(str(exc)))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Global exception: {exc}", exc_info=True)
    return error_response(BackingStoreError(str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EduverseError, eduverse_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
