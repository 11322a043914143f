"""
Pagination Utility Module

Limit/offset helpers shared by every list endpoint.
"""
from typing import Any, Optional

from pydantic import BaseModel

from eduverse.core.config import settings


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class PaginationParams(BaseModel):
    """Standard limit/offset pair, already clamped"""
    limit: int = settings.DEFAULT_PAGE_LIMIT
    offset: int = 0

    @classmethod
    def from_query(cls, limit: Any = None, offset: Any = None) -> "PaginationParams":
        """
        Build from raw query values.

        - limit: unparseable -> default, below 1 -> 1, above the cap -> cap
        - offset: unparseable or negative -> 0
        """
        parsed_limit = _parse_int(limit)
        if parsed_limit is None:
            parsed_limit = settings.DEFAULT_PAGE_LIMIT
        parsed_limit = max(1, min(settings.MAX_PAGE_LIMIT, parsed_limit))

        parsed_offset = _parse_int(offset)
        if parsed_offset is None or parsed_offset < 0:
            parsed_offset = 0

        return cls(limit=parsed_limit, offset=parsed_offset)
