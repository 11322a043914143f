from typing import Literal, Optional

from eduverse.schemas.base import RecordResponse


class SubmissionResponse(RecordResponse):
    assignment_id: int
    student_id: str
    student_name: str
    submitted_date: str
    file_url: Optional[str] = None
    grade: Optional[int] = None
    feedback: Optional[str] = None
    status: Literal["submitted", "graded", "late"]
