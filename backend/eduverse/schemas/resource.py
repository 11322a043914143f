from typing import Literal

from eduverse.schemas.base import RecordResponse


class ResourceResponse(RecordResponse):
    title: str
    type: Literal["pdf", "video", "link", "document"]
    subject: str
    uploaded_by: str
    upload_date: str
    url: str
    department: str
