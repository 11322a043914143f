"""
Custom Exceptions for Eduverse
==============================

Every failure the CRUD pipeline can report is one of a fixed set of kinds.
Each exception carries the structured context (field, allowed values, bound)
from which both its machine-readable code and its human message are derived,
so the two never drift apart.

Usage:
    from eduverse.core.exceptions import MissingFieldError, RecordNotFoundError

    if "title" not in payload:
        raise MissingFieldError("title", "Title")

    if record is None:
        raise RecordNotFoundError("Assignment", record_id)
"""

import enum
import re
from typing import Optional, Any, Dict, Sequence


class ErrorKind(str, enum.Enum):
    """Closed taxonomy of pipeline failures"""
    MISSING_FIELD = "missing_field"
    INVALID_FIELD = "invalid_field"
    INVALID_ID = "invalid_id"
    INVALID_BODY = "invalid_body"
    NOT_FOUND = "not_found"
    BACKING_STORE = "backing_store"


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def field_code(field: str) -> str:
    """
    Upper snake-case form of a wire field name.

    >>> field_code("facultyName")
    'FACULTY_NAME'
    """
    return _CAMEL_BOUNDARY.sub("_", field).upper()


class EduverseError(Exception):
    """Base exception for all Eduverse errors"""

    kind: ErrorKind = ErrorKind.BACKING_STORE
    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "code": self.code,
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class FieldError(EduverseError):
    """Base class for errors tied to a single payload field"""

    status_code = 400

    def __init__(self, message: str, code: str, field: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details={"field": field, **(details or {})})
        self.field = field


class MissingFieldError(FieldError):
    """Required field absent or blank"""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str, label: Optional[str] = None):
        label = label or field
        super().__init__(f"{label} is required", f"MISSING_{field_code(field)}", field)


class InvalidFieldError(FieldError):
    """
    Field present but failing a type, range or enum check.

    Exactly one of the context groups is expected: ``allowed`` for enums,
    ``minimum``/``maximum`` for bounded integers, ``expected`` for type errors.
    """

    kind = ErrorKind.INVALID_FIELD

    def __init__(
        self,
        field: str,
        label: Optional[str] = None,
        allowed: Optional[Sequence[str]] = None,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        expected: Optional[str] = None,
        value: Any = None,
    ):
        label = label or field
        details: Dict[str, Any] = {"value": value}
        if allowed is not None:
            message = f"{label} must be one of: {', '.join(allowed)}"
            details["allowed"] = list(allowed)
        elif minimum is not None and maximum is not None:
            message = f"{label} must be between {minimum} and {maximum}"
            details.update(minimum=minimum, maximum=maximum)
        elif minimum is not None:
            message = f"{label} must be a positive integer" if minimum == 1 else f"{label} must be at least {minimum}"
            details["minimum"] = minimum
        elif expected is not None:
            message = f"{label} must be {expected}"
            details["expected"] = expected
        else:
            message = f"{label} is invalid"
        super().__init__(message, f"INVALID_{field_code(field)}", field, details)
        self.allowed = list(allowed) if allowed is not None else None
        self.minimum = minimum
        self.maximum = maximum


class InvalidIdError(EduverseError):
    """Identifier query parameter missing where one is required"""

    kind = ErrorKind.INVALID_ID
    status_code = 400

    def __init__(self, message: str = "Valid ID is required"):
        super().__init__(message, code="INVALID_ID")


class InvalidBodyError(EduverseError):
    """Request body is not a JSON object"""

    kind = ErrorKind.INVALID_BODY
    status_code = 400

    def __init__(self, message: str = "Request body must be a JSON object"):
        super().__init__(message, code="INVALID_BODY")


# ============================================
# Resource Errors (404-type)
# ============================================

class RecordNotFoundError(EduverseError):
    """Operation targets an identifier absent from the store"""

    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, entity: str, record_id: Any):
        super().__init__(
            f"{entity} not found",
            code="NOT_FOUND",
            details={"entity": entity, "id": record_id}
        )
        self.entity = entity
        self.record_id = record_id


# ============================================
# Store Errors (500-type)
# ============================================

class BackingStoreError(EduverseError):
    """The store call itself failed; carries the underlying message verbatim"""

    kind = ErrorKind.BACKING_STORE
    status_code = 500

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(f"Internal server error: {message}", code="INTERNAL_ERROR")
        self.cause_message = message
        if operation:
            self.details["operation"] = operation
