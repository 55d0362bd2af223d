"""Test configuration and fixtures."""

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classroom.auth import AuthService, Requester
from classroom.database import create_tables, set_sqlite_pragma


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def engine():
    """Create a fresh test database engine per test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", set_sqlite_pragma)
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create test database session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """TestClient whose requests use the test database."""
    from fastapi.testclient import TestClient
    from classroom.main import app
    from classroom.database import get_db

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def as_requester():
    """Build the authenticated identity a token for ``user`` would carry."""
    def build(user):
        return Requester(id=user.id, role=user.role, name=user.name)
    return build


@pytest.fixture
def auth_headers(db_session):
    """Build bearer headers for a user."""
    def build(user):
        token = AuthService(db_session).create_access_token(user)
        return {"Authorization": f"Bearer {token}"}
    return build


@pytest.fixture
def teacher(db_session):
    from classroom.models import User, UserRole
    user = User(name="Ada Lovelace", role=UserRole.teacher, personal_id="T01")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_teacher(db_session):
    from classroom.models import User, UserRole
    user = User(name="Emmy Noether", role=UserRole.teacher, personal_id="T02")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def students(db_session):
    """Three students, as in the demo roster."""
    from classroom.models import User, UserRole
    users = [
        User(name="Charles Babbage", role=UserRole.student, personal_id="S01"),
        User(name="Grace Hopper", role=UserRole.student, personal_id="S02"),
        User(name="Alan Turing", role=UserRole.student, personal_id="S03"),
    ]
    db_session.add_all(users)
    db_session.commit()
    for user in users:
        db_session.refresh(user)
    return users


@pytest.fixture
def outsider(db_session):
    """A student who is not on the sample group's roster."""
    from classroom.models import User, UserRole
    user = User(name="Kurt Godel", role=UserRole.student, personal_id="S99")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def sample_group(db_session, teacher, students):
    from classroom.models import Group
    group = Group(name="Mathematics Pioneers", teacher_id=teacher.id, students=list(students))
    db_session.add(group)
    db_session.commit()
    db_session.refresh(group)
    return group


@pytest.fixture
def task_a(db_session, teacher):
    """Two multiple-choice questions with correct answers 1 and 0."""
    from classroom.models import Task, MultipleChoiceQuestion
    task = Task(
        title="Arithmetic",
        description="Warm-up",
        questions=[
            MultipleChoiceQuestion(question="2 + 2?", options=["3", "4", "5"], correct_answer=1),
            MultipleChoiceQuestion(question="0 * 7?", options=["0", "7"], correct_answer=0),
        ],
        teacher_id=teacher.id,
    )
    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)
    return task


@pytest.fixture
def task_b(db_session, teacher):
    """A single open-ended question."""
    from classroom.models import Task, OpenEndedQuestion
    task = Task(
        title="Reflection",
        description="Explain your reasoning",
        questions=[OpenEndedQuestion(question="Why is zero special?")],
        teacher_id=teacher.id,
    )
    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)
    return task


@pytest.fixture
def sample_lesson(db_session, teacher, sample_group, task_a, task_b, as_requester):
    """Lesson bundling task A then task B."""
    from classroom.lessons import LessonLifecycle
    return LessonLifecycle(db_session).start_lesson(
        as_requester(teacher), sample_group.id, [task_a.id, task_b.id]
    )
