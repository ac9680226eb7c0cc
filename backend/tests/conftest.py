"""
Shared fixtures for the EduHub test suite.

The environment is forced to the in-memory SQLite engine before the
application is imported.
"""
import itertools
import os

os.environ["TESTING"] = "True"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient

from eduhub.core import Base, SessionLocal, engine, get_db
from eduhub.core.security import create_access_token, get_password_hash
from eduhub.main import app
from eduhub.models import Course, Lesson, User, UserRole


DEFAULT_PASSWORD = "secret123"


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(role=UserRole.STUDENT.value, password=DEFAULT_PASSWORD, **fields):
        n = next(counter)
        user = User(
            name=fields.pop("name", f"{role.title()} {n}"),
            email=fields.pop("email", f"{role}{n}@eduhub.io"),
            hashed_password=get_password_hash(password),
            role=role,
            **fields
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def student(make_user):
    return make_user(UserRole.STUDENT.value)


@pytest.fixture
def instructor(make_user):
    return make_user(UserRole.INSTRUCTOR.value)


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN.value)


@pytest.fixture
def make_course(db):
    counter = itertools.count(1)

    def _make(owner=None, lessons=0, **fields):
        n = next(counter)
        data = {
            "title": f"Sample Course {n}",
            "description": "A thorough course description for testing purposes.",
            "instructor": owner.name if owner else "Guest Instructor",
            "category": "Programming",
            "level": "Beginner",
            "price": 10.0,
            "tags": ["python"],
        }
        data.update(fields)
        course = Course(instructor_id=owner.id if owner else None, **data)
        course.lessons = [
            Lesson(title=f"Lesson {i}", content="Lesson body", duration=10, order=i)
            for i in range(1, lessons + 1)
        ]
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make


@pytest.fixture
def course(make_course, instructor):
    return make_course(owner=instructor)


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}

    return _headers


@pytest.fixture
def course_payload():
    return {
        "title": "Intro to Testing",
        "description": "Learn how to write reliable automated tests.",
        "instructor": "Test Instructor",
        "category": "Programming",
        "level": "Beginner",
        "price": 49.5,
        "tags": [" Pytest ", "QA"],
        "totalHours": 6,
        "lessons": [
            {"title": "Second", "content": "More content", "duration": 20, "order": 2},
            {"title": "First", "content": "Some content", "duration": 15, "order": 1,
             "videoUrl": "https://videos.example.org/1",
             "resources": [{"title": "Slides", "url": "https://example.org/s.pdf", "type": "pdf"}]},
        ],
        "isFeatured": True,
    }
