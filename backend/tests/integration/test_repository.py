"""
Integration Tests for EntityRepository against a real SQLite store
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from eduverse.core.exceptions import RecordNotFoundError
from eduverse.services.filter_builder import build_filter
from eduverse.services.repository import EntityRepository
from eduverse.services.request_validator import validate_create, validate_update
from eduverse.services.schema_registry import EntityKind, get_schema

RESOURCE = get_schema(EntityKind.RESOURCE)
SUBMISSION = get_schema(EntityKind.SUBMISSION)


def resource_body(**overrides):
    body = {
        'title': 'DBMS Lecture Notes', 'type': 'pdf', 'subject': 'DBMS',
        'uploadedBy': 'Dr. Michael Chen', 'uploadDate': '2024-12-15',
        'url': '/resources/dbms.pdf', 'department': 'Computer Science',
    }
    body.update(overrides)
    return body


class TestEntityRepository:

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)

        first = await repository.create(validate_create(RESOURCE, resource_body()))
        second = await repository.create(validate_create(RESOURCE, resource_body(title='Other')))

        assert first.id is not None
        assert second.id != first.id
        assert first.uploaded_by == 'Dr. Michael Chen'

    @pytest.mark.asyncio
    async def test_create_ignores_id(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)
        record = validate_create(RESOURCE, resource_body())
        record['id'] = 500

        row = await repository.create(record)

        assert row.id != 500

    @pytest.mark.asyncio
    async def test_find_malformed_id(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)

        assert await repository.find('not-a-number') is None
        with pytest.raises(RecordNotFoundError):
            await repository.get('not-a-number')

    @pytest.mark.asyncio
    async def test_find_id_beyond_column_range(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)
        await repository.create(validate_create(RESOURCE, resource_body()))

        assert await repository.find('99999999999999999999') is None
        assert await repository.find(-(2 ** 63) - 1) is None

    @pytest.mark.asyncio
    async def test_list_matching_nothing(self, db_session: AsyncSession):
        repository = EntityRepository(SUBMISSION, db_session)
        await repository.create(validate_create(SUBMISSION, {
            'assignmentId': 1, 'studentId': 'STU001', 'studentName': 'Rahul Sharma',
            'submittedDate': '2024-01-18', 'status': 'submitted',
        }))

        rows = await repository.list(build_filter(SUBMISSION, {'assignmentId': '99999999999999999999'}))

        assert rows == []

    @pytest.mark.asyncio
    async def test_update_writes_only_patch(self, db_session: AsyncSession):
        repository = EntityRepository(SUBMISSION, db_session)
        row = await repository.create(validate_create(SUBMISSION, {
            'assignmentId': 1, 'studentId': 'STU001', 'studentName': 'Rahul Sharma',
            'submittedDate': '2024-01-18', 'status': 'submitted', 'fileUrl': '/uploads/a.pdf',
        }))
        created_at = row.created_at

        updated = await repository.update(row.id, validate_update(SUBMISSION, {'grade': 90}))

        assert updated.grade == 90
        assert updated.status == 'graded'
        assert updated.file_url == '/uploads/a.pdf'
        assert updated.created_at == created_at

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)

        with pytest.raises(RecordNotFoundError) as exc_info:
            await repository.update(404, {'title': 'x'})
        assert exc_info.value.message == 'Resource not found'

    @pytest.mark.asyncio
    async def test_delete_returns_prior_state(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)
        row = await repository.create(validate_create(RESOURCE, resource_body()))

        deleted = await repository.delete(str(row.id))

        assert deleted.title == 'DBMS Lecture Notes'
        assert await repository.find(row.id) is None
        with pytest.raises(RecordNotFoundError):
            await repository.delete(row.id)

    @pytest.mark.asyncio
    async def test_list_applies_descriptor(self, db_session: AsyncSession):
        repository = EntityRepository(RESOURCE, db_session)
        await repository.create(validate_create(RESOURCE, resource_body(uploadDate='2024-12-01')))
        await repository.create(validate_create(RESOURCE, resource_body(uploadDate='2024-12-20', type='video')))
        await repository.create(validate_create(RESOURCE, resource_body(uploadDate='2024-12-10')))

        rows = await repository.list(build_filter(RESOURCE, {'type': 'pdf', 'search': 'dbms'}))

        assert [row.upload_date for row in rows] == ['2024-12-10', '2024-12-01']
