import os

TEST_DB_FILE = "test_report_cards.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before the app (and its cached settings) is imported
os.environ["DATABASE_URL"] = TEST_DB_URL

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import DEFAULT_LEARNING_SKILLS, get_settings
from app.core.deps import get_db
from app.main import app
from app.repositories.grade_entries import GradeEntryRepository
from app.services.mapper import RecordMapper
from app.store.memory import InMemoryTabularStore
from app.store.schema import TableSchema
from app.store.sql import SqlTabularStore, build_table

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create the grades table once for the whole test session."""
    table = build_table(get_settings().table_schema())
    table.drop(bind=engine, checkfirst=True)
    table.create(bind=engine)
    yield
    table.drop(bind=engine, checkfirst=True)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def clean_table():
    """Every test starts from a header-only table."""
    db = TestingSessionLocal()
    try:
        SqlTabularStore(db, get_settings().table_schema()).delete_all_data_rows()
        yield
    finally:
        db.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def schema() -> TableSchema:
    return TableSchema(table_name="Grades", skills=tuple(DEFAULT_LEARNING_SKILLS))


@pytest.fixture()
def mapper(schema) -> RecordMapper:
    return RecordMapper(schema)


@pytest.fixture()
def memory_store(schema) -> InMemoryTabularStore:
    store = InMemoryTabularStore(schema)
    store.ensure_initialized()
    return store


@pytest.fixture()
def repository(memory_store, mapper) -> GradeEntryRepository:
    return GradeEntryRepository(memory_store, mapper)


@pytest.fixture()
def make_payload():
    """Front-end style submission with every required field filled in."""

    def _make(**overrides) -> dict:
        payload = {
            "teacherEmail": "teacher1@school.edu",
            "teacherName": "Ms. Johnson",
            "course": "Math 7A",
            "student": "Test Student",
            "percentageMark": 85,
            "classesMissed": 2,
            "timesLate": 1,
            "grade": 85,
            "skills": {
                "Responsibility": "Excellent",
                "Organization": "Good",
                "Independent Work": "Excellent",
                "Collaboration": "Satisfactory",
                "Initiative": "Good",
                "Self-Regulation": "Excellent",
            },
            "comment": "This is a test comment for the report card entry system.",
            "timestamp": "2026-09-01T08:00:00.000Z",
        }
        payload.update(overrides)
        return payload

    return _make
