"""
Unit Tests for identifier, body and store error handling shared by every collection
"""
import pytest
from httpx import AsyncClient

COLLECTIONS = ['assignments', 'notices', 'resources', 'submissions', 'timetable']


class TestIdentifierHandling:

    @pytest.mark.asyncio
    @pytest.mark.parametrize('collection', COLLECTIONS)
    async def test_put_without_id(self, client: AsyncClient, collection):
        response = await client.put(f'/api/{collection}', json={'title': 'x'})

        assert response.status_code == 400
        assert response.json() == {'error': 'Valid ID is required', 'code': 'INVALID_ID'}

    @pytest.mark.asyncio
    @pytest.mark.parametrize('collection', COLLECTIONS)
    async def test_delete_without_id(self, client: AsyncClient, collection):
        response = await client.delete(f'/api/{collection}')

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_ID'

    @pytest.mark.asyncio
    @pytest.mark.parametrize('record_id', ['abc', '1.5', '-1', '999999', '99999999999999999999'])
    async def test_malformed_or_unknown_id_is_not_found(self, client: AsyncClient, record_id):
        response = await client.get('/api/notices', params={'id': record_id})

        assert response.status_code == 404
        assert response.json()['code'] == 'NOT_FOUND'

    @pytest.mark.asyncio
    async def test_delete_unknown_leaves_store_unchanged(self, client: AsyncClient, assignment_payload):
        created = (await client.post('/api/assignments', json=assignment_payload())).json()

        response = await client.delete('/api/assignments', params={'id': created['id'] + 100})

        assert response.status_code == 404
        listing = (await client.get('/api/assignments')).json()
        assert [a['id'] for a in listing] == [created['id']]

    @pytest.mark.asyncio
    async def test_update_unknown_checked_before_body(self, client: AsyncClient):
        response = await client.put('/api/resources', params={'id': '555'}, content=b'not json')

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method', ['PUT', 'DELETE'])
    async def test_id_beyond_column_range_is_not_found(self, client: AsyncClient, method):
        response = await client.request(
            method, '/api/assignments', params={'id': '99999999999999999999'}, json={'title': 'x'}
        )

        assert response.status_code == 404
        assert response.json() == {'error': 'Assignment not found', 'code': 'NOT_FOUND'}


class TestIntegerRange:
    """Integers that do not fit the store's 64-bit columns"""

    @pytest.mark.asyncio
    async def test_filter_beyond_range_returns_empty_list(self, client: AsyncClient, assignment_payload):
        await client.post('/api/assignments', json=assignment_payload(year=2))

        response = await client.get('/api/assignments', params={'year': '99999999999999999999'})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_with_huge_total_marks_rejected(self, client: AsyncClient, assignment_payload):
        response = await client.post('/api/assignments', json=assignment_payload(totalMarks=10 ** 30))

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_TOTAL_MARKS'
        assert (await client.get('/api/assignments')).json() == []

    @pytest.mark.asyncio
    async def test_update_with_huge_assignment_id_rejected(self, client: AsyncClient, submission_payload):
        created = (await client.post('/api/submissions', json=submission_payload())).json()

        response = await client.put(
            '/api/submissions', params={'id': created['id']}, json={'assignmentId': '1' + '0' * 25}
        )

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_ASSIGNMENT_ID'


class TestBodyHandling:

    @pytest.mark.asyncio
    async def test_malformed_json(self, client: AsyncClient):
        response = await client.post(
            '/api/assignments',
            content=b'{"title": ',
            headers={'Content-Type': 'application/json'},
        )

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_BODY'

    @pytest.mark.asyncio
    async def test_array_body(self, client: AsyncClient):
        response = await client.post('/api/notices', json=[{'title': 'x'}])

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_BODY'

    @pytest.mark.asyncio
    async def test_empty_body(self, client: AsyncClient):
        response = await client.post('/api/timetable')

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_BODY'


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_store_failure_is_internal_error(self, client: AsyncClient, monkeypatch):
        from eduverse.services.repository import EntityRepository

        async def broken_list(self, descriptor):
            raise RuntimeError('database is locked')

        monkeypatch.setattr(EntityRepository, 'list', broken_list)

        response = await client.get('/api/resources')

        assert response.status_code == 500
        assert response.json() == {'error': 'Internal server error: database is locked', 'code': 'INTERNAL_ERROR'}


class TestResponseHeaders:

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get('/api/notices', headers={'X-Request-ID': 'req-123'})

        assert response.headers['X-Request-ID'] == 'req-123'
        assert response.headers['X-Response-Time'].endswith('ms')

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client: AsyncClient):
        response = await client.get('/api/notices')
        assert response.headers['X-Request-ID']
