# Re-export all models for convenient imports
from eduverse.models.assignment import Assignment
from eduverse.models.notice import Notice, AuthorRole, NoticePriority
from eduverse.models.resource import Resource, ResourceType
from eduverse.models.submission import Submission, SubmissionStatus
from eduverse.models.timetable import TimetableEntry, SessionType

__all__ = [
    "Assignment",
    "Notice",
    "AuthorRole",
    "NoticePriority",
    "Resource",
    "ResourceType",
    "Submission",
    "SubmissionStatus",
    "TimetableEntry",
    "SessionType",
]
