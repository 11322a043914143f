"""
Filter Builder

Translates list-query parameters into a store-agnostic filter descriptor:
an optional case-insensitive search across the entity's text fields (OR),
exact matches on its filterable fields (AND), the entity's fixed sort order
and clamped pagination. Nothing is executed here.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from eduverse.core.types import fits_int64
from eduverse.services.request_validator import coerce_integer
from eduverse.services.schema_registry import EntitySchema, FieldType, SortKey
from eduverse.utils.pagination import PaginationParams


@dataclass(frozen=True)
class SearchClause:
    term: str
    columns: Tuple[str, ...]


@dataclass(frozen=True)
class FilterDescriptor:
    search: Optional[SearchClause]
    exact: Tuple[Tuple[str, Any], ...]  # (column, value) pairs
    sort: Tuple[SortKey, ...]
    limit: int
    offset: int
    matches_nothing: bool = False  # a filter value no stored row can hold

    @property
    def is_unfiltered(self) -> bool:
        return self.search is None and not self.exact and not self.matches_nothing


def build_filter(schema: EntitySchema, params: Mapping[str, Any]) -> FilterDescriptor:
    """
    Descriptor for listing ``schema`` records.

    Empty parameters are ignored. Integer filter values that do not parse as
    integers are ignored as well; parseable values match by plain equality, so
    an out-of-range value simply matches nothing. Values beyond the 64-bit
    column range mark the descriptor as matching nothing.
    """
    search = None
    term = params.get("search")
    if isinstance(term, str) and term.strip():
        columns = tuple(schema.get_field(name).column for name in schema.search_fields)
        search = SearchClause(term=term.strip(), columns=columns)

    exact = []
    matches_nothing = False
    for name in schema.filter_fields:
        raw = params.get(name)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            continue
        spec = schema.get_field(name)
        if spec.type is FieldType.INTEGER:
            value = coerce_integer(raw)
            if value is None:
                continue
            if not fits_int64(value):
                matches_nothing = True
                continue
        else:
            value = str(raw).strip()
        exact.append((spec.column, value))

    page = PaginationParams.from_query(params.get("limit"), params.get("offset"))

    return FilterDescriptor(
        search=search,
        exact=tuple(exact),
        sort=schema.sort,
        limit=page.limit,
        offset=page.offset,
        matches_nothing=matches_nothing,
    )
