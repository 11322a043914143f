from eduverse.schemas.base import RecordResponse


class AssignmentResponse(RecordResponse):
    title: str
    description: str
    subject: str
    faculty_name: str
    due_date: str
    total_marks: int
    department: str
    year: int
