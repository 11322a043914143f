"""
Entity Repository

One instance per entity kind and session. Executes single-row operations
against the store: fetch by id, list by filter descriptor, insert, update by
id and delete by id. Update and delete always read the row first and raise
RecordNotFoundError when it is absent.
"""
import time
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, false, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eduverse.core.exceptions import BackingStoreError, RecordNotFoundError
from eduverse.core.logging_config import logger
from eduverse.core.types import fits_int64
from eduverse.services.filter_builder import FilterDescriptor
from eduverse.services.request_validator import coerce_integer
from eduverse.services.schema_registry import EntitySchema


class EntityRepository:
    """CRUD access to the table behind one entity kind"""

    def __init__(self, schema: EntitySchema, db: AsyncSession):
        self.schema = schema
        self.model = schema.model
        self.db = db

    # ---------------------------------------------------------------- helpers

    def _to_columns(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Wire-keyed data -> column-keyed data; ``createdAt`` maps to created_at"""
        columns = {}
        for name, value in data.items():
            if name == "createdAt":
                columns["created_at"] = value
            elif self.schema.has_field(name):
                columns[self.schema.get_field(name).column] = value
        return columns

    def _log(self, operation: str, started: float, rows: int = 0) -> None:
        logger.log_db_query(
            operation,
            self.model.__tablename__,
            (time.perf_counter() - started) * 1000,
            rows_affected=rows,
        )

    def _store_failure(self, operation: str, error: SQLAlchemyError) -> BackingStoreError:
        logger.log_error_with_context(error, context=f"{self.schema.name}.{operation}")
        return BackingStoreError(str(error), operation=operation)

    # ------------------------------------------------------------- operations

    async def get(self, record_id: Any) -> Any:
        """Row by id; malformed ids are reported as not found"""
        row = await self.find(record_id)
        if row is None:
            raise RecordNotFoundError(self.schema.label, record_id)
        return row

    async def find(self, record_id: Any) -> Optional[Any]:
        key = coerce_integer(record_id)
        if key is None or not fits_int64(key):
            return None
        started = time.perf_counter()
        try:
            row = await self.db.get(self.model, key)
        except SQLAlchemyError as e:
            raise self._store_failure("get", e) from e
        self._log("get", started, rows=int(row is not None))
        return row

    async def list(self, descriptor: FilterDescriptor) -> List[Any]:
        query = select(self.model)

        conditions = []
        if descriptor.matches_nothing:
            conditions.append(false())
        if descriptor.search is not None:
            conditions.append(or_(*[
                getattr(self.model, column).icontains(descriptor.search.term, autoescape=True)
                for column in descriptor.search.columns
            ]))
        for column, value in descriptor.exact:
            conditions.append(getattr(self.model, column) == value)
        if conditions:
            query = query.where(and_(*conditions))

        order_by = []
        for key in descriptor.sort:
            column = getattr(self.model, key.column)
            order_by.append(column.desc() if key.descending else column.asc())
        # id as tie-breaker keeps pages stable
        order_by.append(self.model.id.asc())

        query = query.order_by(*order_by).offset(descriptor.offset).limit(descriptor.limit)

        started = time.perf_counter()
        try:
            result = await self.db.execute(query)
            rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._store_failure("list", e) from e
        self._log("list", started, rows=len(rows))
        return rows

    async def create(self, record: Dict[str, Any]) -> Any:
        """Insert a sanitized record; the store assigns the id"""
        columns = self._to_columns(record)
        columns.pop("id", None)
        row = self.model(**columns)

        started = time.perf_counter()
        try:
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._store_failure("create", e) from e
        self._log("insert", started, rows=1)
        logger.info(f"[{self.schema.name}] Created id={row.id}")
        return row

    async def update(self, record_id: Any, patch: Dict[str, Any]) -> Any:
        """Apply a sanitized patch to an existing row"""
        row = await self.get(record_id)

        columns = self._to_columns(patch)
        columns.pop("created_at", None)
        for column, value in columns.items():
            setattr(row, column, value)

        started = time.perf_counter()
        try:
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._store_failure("update", e) from e
        self._log("update", started, rows=1)
        logger.info(f"[{self.schema.name}] Updated id={row.id} fields={sorted(patch)}")
        return row

    async def delete(self, record_id: Any) -> Any:
        """Remove an existing row and return it as it was"""
        row = await self.get(record_id)

        started = time.perf_counter()
        try:
            await self.db.delete(row)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._store_failure("delete", e) from e
        self._log("delete", started, rows=1)
        logger.info(f"[{self.schema.name}] Deleted id={row.id}")
        return row
