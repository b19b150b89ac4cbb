# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys
from datetime import date

# Make repo root importable as "wpquery"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from wpquery.db import Base
from wpquery.main import app
from wpquery.models import Enumeration, Status, Type, WorkPackage

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    connection = engine.connect()
    trans = connection.begin()
    try:
        session = TestingSessionLocal(bind=connection)
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db_session):
    from wpquery.db.session import get_db  # late import to avoid circulars

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def seeded(db_session):
    """
    Five work packages over two projects.

    id  subject               status        type  priority           assignee  due
    1   Write docs            New           Task  Normal (pos 2)     5         2024-01-10
    2   Fix login bug         In progress   Bug   High (pos 3)       7         2024-01-03
    3   Release 100% done     Closed        Task  Low (pos 1)        -         -
    4   O'Brien's request     New           Bug   -                  5         -
    5   snake_case cleanup    In progress   Task  (activity row 20)  -         -
    """
    db_session.add_all(
        [
            Status(id=1, name="New", is_closed=False, is_default=True, position=1),
            Status(id=2, name="In progress", is_closed=False, position=2),
            Status(id=3, name="Closed", is_closed=True, position=3),
            Type(id=1, name="Task", position=1),
            Type(id=2, name="Bug", position=2),
            Enumeration(id=10, name="Low", type="IssuePriority", position=1),
            Enumeration(id=11, name="Normal", type="IssuePriority", position=2, is_default=True),
            Enumeration(id=12, name="High", type="IssuePriority", position=3),
            Enumeration(id=20, name="Development", type="TimeEntryActivity", position=1),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            WorkPackage(
                id=1, subject="Write docs", project_id=1, type_id=1, status_id=1,
                priority_id=11, author_id=5, assigned_to_id=5,
                due_date=date(2024, 1, 10), estimated_hours=2.0,
            ),
            WorkPackage(
                id=2, subject="Fix login bug", project_id=1, type_id=2, status_id=2,
                priority_id=12, author_id=5, assigned_to_id=7,
                due_date=date(2024, 1, 3), estimated_hours=5.5,
            ),
            WorkPackage(
                id=3, subject="Release 100% done", project_id=2, type_id=1, status_id=3,
                priority_id=10, author_id=7, done_ratio=100,
            ),
            WorkPackage(
                id=4, subject="O'Brien's request", project_id=2, type_id=2, status_id=1,
                author_id=7, assigned_to_id=5, parent_id=1,
            ),
            WorkPackage(
                id=5, subject="snake_case cleanup", project_id=1, type_id=1, status_id=2,
                priority_id=20, author_id=5,
            ),
        ]
    )
    db_session.flush()
    return db_session
