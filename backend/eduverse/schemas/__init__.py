from typing import Dict, Type

from eduverse.schemas.base import RecordResponse
from eduverse.schemas.assignment import AssignmentResponse
from eduverse.schemas.notice import NoticeResponse
from eduverse.schemas.resource import ResourceResponse
from eduverse.schemas.submission import SubmissionResponse
from eduverse.schemas.timetable import TimetableEntryResponse
from eduverse.services.schema_registry import EntityKind

RESPONSE_MODELS: Dict[EntityKind, Type[RecordResponse]] = {
    EntityKind.ASSIGNMENT: AssignmentResponse,
    EntityKind.NOTICE: NoticeResponse,
    EntityKind.RESOURCE: ResourceResponse,
    EntityKind.SUBMISSION: SubmissionResponse,
    EntityKind.TIMETABLE_ENTRY: TimetableEntryResponse,
}

__all__ = [
    "RecordResponse",
    "AssignmentResponse",
    "NoticeResponse",
    "ResourceResponse",
    "SubmissionResponse",
    "TimetableEntryResponse",
    "RESPONSE_MODELS",
]
