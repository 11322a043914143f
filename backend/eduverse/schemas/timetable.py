from typing import Literal

from eduverse.schemas.base import RecordResponse


class TimetableEntryResponse(RecordResponse):
    day: str
    time: str
    subject: str
    faculty: str
    room: str
    type: Literal["lecture", "lab", "tutorial"]
