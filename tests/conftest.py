import os

# До импорта приложения: без миграций на старте и без файла school.db
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classbook.api.deps import get_db
from classbook.core.security import create_access_token
from classbook.crud import user as crud_user
from classbook.db import Base, ClassGroup, Student
from classbook.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(role="admin", email=None, password="secret123"):
        return crud_user.create_user(
            db,
            email=email or f"{role}@school.test",
            password=password,
            full_name=f"Test {role}",
            role=role,
        )
    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token(data={"sub": user.email})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_class(db):
    def _make(class_id, schedule=None, **fields):
        class_group = ClassGroup(id=class_id, name=fields.pop("name", class_id), default_schedule=schedule, **fields)
        db.add(class_group)
        db.commit()
        return class_group
    return _make


@pytest.fixture
def make_student(db):
    def _make(student_id, classes=()):
        student = Student(id=student_id, name=student_id, attendance=0)
        student.classes = list(classes)
        db.add(student)
        db.commit()
        return student
    return _make
