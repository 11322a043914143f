"""
Schema Registry

Static, per-entity declaration of the fields the portal stores: wire name,
column, type, create-time requirement and the enum or range constraint.
The validator, filter builder, repository and router factory are all driven
off these descriptors; nothing here executes against the store.
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Type

from eduverse.models import (
    Assignment,
    Notice,
    Resource,
    Submission,
    TimetableEntry,
    AuthorRole,
    NoticePriority,
    ResourceType,
    SubmissionStatus,
    SessionType,
)


class EntityKind(str, enum.Enum):
    ASSIGNMENT = "assignment"
    NOTICE = "notice"
    RESOURCE = "resource"
    SUBMISSION = "submission"
    TIMETABLE_ENTRY = "timetable_entry"


class FieldType(str, enum.Enum):
    STRING = "string"
    INTEGER = "integer"


@dataclass(frozen=True)
class FieldSpec:
    name: str  # wire (camelCase) name
    column: str  # model attribute
    label: str  # human label used in error messages
    type: FieldType = FieldType.STRING
    required: bool = True  # must be present and non-blank on create
    nullable: bool = False
    creatable: bool = True  # False: ignored on create, stored as null
    choices: Optional[Tuple[str, ...]] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None


@dataclass(frozen=True)
class SortKey:
    column: str
    descending: bool = False


# (sanitized patch, raw payload) -> patch; runs after field validation in update mode
UpdateHook = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]


@dataclass(frozen=True)
class EntitySchema:
    kind: EntityKind
    name: str  # "Assignment"
    label: str  # "Assignment" / "Timetable entry"
    collection: str  # URL segment under the API prefix
    response_key: str  # key holding the record in delete responses
    model: Type[Any]
    fields: Tuple[FieldSpec, ...]
    search_fields: Tuple[str, ...]  # wire names, OR-ed substring match
    filter_fields: Tuple[str, ...]  # wire names, AND-ed equality match
    sort: Tuple[SortKey, ...]
    update_hook: Optional[UpdateHook] = None
    _by_name: Dict[str, FieldSpec] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        self._by_name.update({f.name: f for f in self.fields})

    def get_field(self, name: str) -> FieldSpec:
        return self._by_name[name]

    def has_field(self, name: str) -> bool:
        return name in self._by_name


def _values(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


def grade_marks_submission_graded(patch: Dict[str, Any], raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    A non-null grade forces status to "graded", overriding any status sent in
    the same request. An explicit status is kept only when no grade is set.
    """
    if patch.get("grade") is not None:
        patch["status"] = SubmissionStatus.graded.value
    return patch


ASSIGNMENT_SCHEMA = EntitySchema(
    kind=EntityKind.ASSIGNMENT,
    name="Assignment",
    label="Assignment",
    collection="assignments",
    response_key="assignment",
    model=Assignment,
    fields=(
        FieldSpec("title", "title", "Title"),
        FieldSpec("description", "description", "Description"),
        FieldSpec("subject", "subject", "Subject"),
        FieldSpec("facultyName", "faculty_name", "Faculty name"),
        FieldSpec("dueDate", "due_date", "Due date"),
        FieldSpec("totalMarks", "total_marks", "Total marks", type=FieldType.INTEGER, minimum=1),
        FieldSpec("department", "department", "Department"),
        FieldSpec("year", "year", "Year", type=FieldType.INTEGER, minimum=1, maximum=4),
    ),
    search_fields=("title", "description"),
    filter_fields=("subject", "department", "year"),
    sort=(SortKey("due_date"),),
)

NOTICE_SCHEMA = EntitySchema(
    kind=EntityKind.NOTICE,
    name="Notice",
    label="Notice",
    collection="notices",
    response_key="notice",
    model=Notice,
    fields=(
        FieldSpec("title", "title", "Title"),
        FieldSpec("content", "content", "Content"),
        FieldSpec("author", "author", "Author"),
        FieldSpec("authorRole", "author_role", "Author role", choices=_values(AuthorRole)),
        FieldSpec("department", "department", "Department"),
        FieldSpec("priority", "priority", "Priority", choices=_values(NoticePriority)),
    ),
    search_fields=("title", "content"),
    filter_fields=("priority", "department", "authorRole"),
    sort=(SortKey("created_at", descending=True),),
)

RESOURCE_SCHEMA = EntitySchema(
    kind=EntityKind.RESOURCE,
    name="Resource",
    label="Resource",
    collection="resources",
    response_key="resource",
    model=Resource,
    fields=(
        FieldSpec("title", "title", "Title"),
        FieldSpec("type", "type", "Type", choices=_values(ResourceType)),
        FieldSpec("subject", "subject", "Subject"),
        FieldSpec("uploadedBy", "uploaded_by", "Uploaded by"),
        FieldSpec("uploadDate", "upload_date", "Upload date"),
        FieldSpec("url", "url", "URL"),
        FieldSpec("department", "department", "Department"),
    ),
    search_fields=("title", "subject"),
    filter_fields=("type", "subject", "department"),
    sort=(SortKey("upload_date", descending=True),),
)

SUBMISSION_SCHEMA = EntitySchema(
    kind=EntityKind.SUBMISSION,
    name="Submission",
    label="Submission",
    collection="submissions",
    response_key="submission",
    model=Submission,
    fields=(
        FieldSpec("assignmentId", "assignment_id", "Assignment ID", type=FieldType.INTEGER, minimum=1),
        FieldSpec("studentId", "student_id", "Student ID"),
        FieldSpec("studentName", "student_name", "Student name"),
        FieldSpec("submittedDate", "submitted_date", "Submitted date"),
        FieldSpec("fileUrl", "file_url", "File URL", required=False, nullable=True),
        FieldSpec("grade", "grade", "Grade", type=FieldType.INTEGER, required=False, nullable=True,
                  creatable=False, minimum=0, maximum=100),
        FieldSpec("feedback", "feedback", "Feedback", required=False, nullable=True, creatable=False),
        FieldSpec("status", "status", "Status", choices=_values(SubmissionStatus)),
    ),
    search_fields=("studentName",),
    filter_fields=("assignmentId", "studentId", "status"),
    sort=(SortKey("submitted_date", descending=True),),
    update_hook=grade_marks_submission_graded,
)

TIMETABLE_SCHEMA = EntitySchema(
    kind=EntityKind.TIMETABLE_ENTRY,
    name="TimetableEntry",
    label="Timetable entry",
    collection="timetable",
    response_key="timetableEntry",
    model=TimetableEntry,
    fields=(
        FieldSpec("day", "day", "Day"),
        FieldSpec("time", "time", "Time"),
        FieldSpec("subject", "subject", "Subject"),
        FieldSpec("faculty", "faculty", "Faculty"),
        FieldSpec("room", "room", "Room"),
        FieldSpec("type", "type", "Type", choices=_values(SessionType)),
    ),
    search_fields=("subject", "faculty", "room"),
    filter_fields=("day", "type"),
    sort=(SortKey("day"), SortKey("time")),
)


REGISTRY: Dict[EntityKind, EntitySchema] = {
    schema.kind: schema
    for schema in (
        ASSIGNMENT_SCHEMA,
        NOTICE_SCHEMA,
        RESOURCE_SCHEMA,
        SUBMISSION_SCHEMA,
        TIMETABLE_SCHEMA,
    )
}


def get_schema(kind: EntityKind) -> EntitySchema:
    """Descriptor for an entity kind; an unknown kind is a programming error (KeyError)"""
    return REGISTRY[kind]


def all_schemas() -> Tuple[EntitySchema, ...]:
    return tuple(REGISTRY.values())
