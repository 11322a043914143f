"""
Eduverse - Test Configuration and Fixtures
"""
import os
from typing import Any, AsyncGenerator, Callable, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_eduverse.db'
os.environ['LOG_FILE'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['DB_WATCHDOG_ENABLED'] = 'false'
os.environ['SEED_ON_STARTUP'] = 'false'

from eduverse.main import app
from eduverse.core.database import Base, get_db

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_eduverse.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


# ==================== Payload factories ====================

@pytest.fixture
def assignment_payload() -> Callable[..., Dict[str, Any]]:
    """Valid assignment create payload; keyword overrides replace fields"""
    def _make(**overrides) -> Dict[str, Any]:
        payload = {
            'title': fake.sentence(nb_words=4),
            'description': fake.paragraph(),
            'subject': 'Data Structures',
            'facultyName': fake.name(),
            'dueDate': '2025-01-15',
            'totalMarks': 50,
            'department': 'Computer Science',
            'year': 2,
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def notice_payload() -> Callable[..., Dict[str, Any]]:
    def _make(**overrides) -> Dict[str, Any]:
        payload = {
            'title': fake.sentence(nb_words=5),
            'content': fake.paragraph(),
            'author': fake.name(),
            'authorRole': 'faculty',
            'department': 'Computer Science',
            'priority': 'medium',
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def resource_payload() -> Callable[..., Dict[str, Any]]:
    def _make(**overrides) -> Dict[str, Any]:
        payload = {
            'title': fake.sentence(nb_words=4),
            'type': 'pdf',
            'subject': 'Operating Systems',
            'uploadedBy': fake.name(),
            'uploadDate': '2024-12-15',
            'url': fake.url(),
            'department': 'Computer Science',
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def submission_payload() -> Callable[..., Dict[str, Any]]:
    def _make(**overrides) -> Dict[str, Any]:
        payload = {
            'assignmentId': 1,
            'studentId': f'STU{fake.random_int(min=100, max=999)}',
            'studentName': fake.name(),
            'submittedDate': '2024-01-18T14:30:00.000Z',
            'fileUrl': '/uploads/assignments/report.pdf',
            'status': 'submitted',
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def timetable_payload() -> Callable[..., Dict[str, Any]]:
    def _make(**overrides) -> Dict[str, Any]:
        payload = {
            'day': 'Monday',
            'time': '9:00 AM - 10:00 AM',
            'subject': 'DBMS',
            'faculty': fake.name(),
            'room': 'CS-101',
            'type': 'lecture',
        }
        payload.update(overrides)
        return payload
    return _make
