from typing import Literal

from eduverse.schemas.base import RecordResponse


class NoticeResponse(RecordResponse):
    title: str
    content: str
    author: str
    author_role: Literal["faculty", "admin"]
    department: str
    priority: Literal["low", "medium", "high"]
