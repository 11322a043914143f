"""
Integration Tests for sample data seeding
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from eduverse.db.seed_data import SAMPLE_DATA, clear_all, count_rows, seed_all
from eduverse.services.schema_registry import all_schemas


class TestSeedData:

    @pytest.mark.asyncio
    async def test_seed_every_table(self, db_session: AsyncSession):
        created = await seed_all()

        for schema in all_schemas():
            expected = len(SAMPLE_DATA[schema.kind])
            assert created[schema.collection] == expected
            assert await count_rows(db_session, schema) == expected

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session: AsyncSession):
        await seed_all()
        second = await seed_all()

        assert set(second.values()) == {0}

    @pytest.mark.asyncio
    async def test_seeded_rows_served_by_api(self, client, db_session: AsyncSession):
        await seed_all()

        response = await client.get('/api/resources', params={'type': 'pdf', 'search': 'DBMS'})

        titles = [r['title'] for r in response.json()]
        assert titles == ['DBMS Lecture Notes - Chapter 5: Normalization']

    @pytest.mark.asyncio
    async def test_clear_all(self, db_session: AsyncSession):
        await seed_all()
        await clear_all()

        for schema in all_schemas():
            assert await count_rows(db_session, schema) == 0

    def test_sample_data_is_valid(self):
        """Sample rows respect the same enums and bounds as API input"""
        for schema in all_schemas():
            for row in SAMPLE_DATA[schema.kind]:
                for spec in schema.fields:
                    value = row.get(spec.name)
                    if value is None:
                        assert not spec.required, f'{schema.name}.{spec.name}'
                        continue
                    if spec.choices:
                        assert value in spec.choices
                    if spec.minimum is not None:
                        assert value >= spec.minimum
                    if spec.maximum is not None:
                        assert value <= spec.maximum
