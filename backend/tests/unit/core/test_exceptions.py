"""
Unit Tests for the error taxonomy
"""
import pytest

from eduverse.core.exceptions import (
    BackingStoreError,
    ErrorKind,
    InvalidBodyError,
    InvalidFieldError,
    InvalidIdError,
    MissingFieldError,
    RecordNotFoundError,
    field_code,
)


class TestFieldCode:
    """Wire field names map to upper snake-case codes"""

    @pytest.mark.parametrize('field, expected', [
        ('title', 'TITLE'),
        ('facultyName', 'FACULTY_NAME'),
        ('totalMarks', 'TOTAL_MARKS'),
        ('assignmentId', 'ASSIGNMENT_ID'),
        ('authorRole', 'AUTHOR_ROLE'),
        ('url', 'URL'),
    ])
    def test_field_code(self, field, expected):
        assert field_code(field) == expected


class TestMissingFieldError:

    def test_code_and_message(self):
        error = MissingFieldError('facultyName', 'Faculty name')

        assert error.code == 'MISSING_FACULTY_NAME'
        assert error.message == 'Faculty name is required'
        assert error.status_code == 400
        assert error.kind is ErrorKind.MISSING_FIELD
        assert error.field == 'facultyName'

    def test_label_defaults_to_field(self):
        assert MissingFieldError('room').message == 'room is required'


class TestInvalidFieldError:

    def test_enum_message_lists_allowed_values(self):
        error = InvalidFieldError('priority', 'Priority', allowed=('low', 'medium', 'high'), value='urgent')

        assert error.code == 'INVALID_PRIORITY'
        assert error.message == 'Priority must be one of: low, medium, high'
        assert error.allowed == ['low', 'medium', 'high']
        assert error.details['value'] == 'urgent'

    def test_range_message(self):
        error = InvalidFieldError('year', 'Year', minimum=1, maximum=4, value=5)

        assert error.code == 'INVALID_YEAR'
        assert error.message == 'Year must be between 1 and 4'

    def test_positive_integer_message(self):
        error = InvalidFieldError('totalMarks', 'Total marks', minimum=1, value=0)
        assert error.message == 'Total marks must be a positive integer'

    def test_type_message(self):
        error = InvalidFieldError('title', 'Title', expected='a string', value=42)
        assert error.message == 'Title must be a string'
        assert error.status_code == 400


class TestOtherErrors:

    def test_invalid_id(self):
        error = InvalidIdError()
        assert error.to_dict() == {'error': 'Valid ID is required', 'code': 'INVALID_ID'}
        assert error.status_code == 400

    def test_invalid_body(self):
        error = InvalidBodyError()
        assert error.code == 'INVALID_BODY'
        assert error.kind is ErrorKind.INVALID_BODY

    def test_not_found(self):
        error = RecordNotFoundError('Timetable entry', '42')

        assert error.to_dict() == {'error': 'Timetable entry not found', 'code': 'NOT_FOUND'}
        assert error.status_code == 404
        assert error.details['id'] == '42'

    def test_backing_store_carries_message(self):
        error = BackingStoreError('disk I/O error', operation='insert')

        assert error.to_dict() == {'error': 'Internal server error: disk I/O error', 'code': 'INTERNAL_ERROR'}
        assert error.status_code == 500
        assert error.cause_message == 'disk I/O error'
        assert error.details['operation'] == 'insert'
