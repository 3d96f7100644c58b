from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tryout.db.base import Base
from tryout.db.session import enable_sqlite_foreign_keys, get_db
from tryout.main import app
from tryout.models.package import Package, PackageType, Subtest, SubtestType
from tryout.models.question import Answer, Question, QuestionType
from tryout.models.user import User


class FixedDateTime(datetime):
    fixed_now = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)

    @classmethod
    def now(cls, tz=None):
        if tz is not None:
            return cls.fixed_now.astimezone(tz)
        return cls.fixed_now


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def student(db):
    u = User(id=2, email="student2@demo.local", full_name="Student 2", role="student", is_active=True)
    db.add(u)
    db.commit()
    return u


@pytest.fixture
def other_student(db):
    u = User(id=3, email="student3@demo.local", full_name="Student 3", role="student", is_active=True)
    db.add(u)
    db.commit()
    return u


@pytest.fixture
def admin(db):
    u = User(id=1, email="teacher1@demo.local", full_name="Teacher 1", role="admin", is_active=True)
    db.add(u)
    db.commit()
    return u


def build_package(
    db,
    *,
    to_end_delta: timedelta,
    package_type: PackageType = PackageType.tryout,
    now: datetime | None = None,
) -> Package:
    """Package with one subtest: a choice question (key 1, 10 pts) and an essay
    question (expected "Jakarta", 5 pts)."""
    now = now or datetime.now(timezone.utc)
    package = Package(
        name="Tryout 1",
        type=package_type,
        to_start=now - timedelta(days=7),
        to_end=now + to_end_delta,
    )
    choice = Question(
        index=1,
        content="2 + 2 = ?",
        type=QuestionType.choice,
        score=10,
        explanation="Basic arithmetic",
        correct_answer_choice=1,
        answers=[Answer(index=0, content="3"), Answer(index=1, content="4"), Answer(index=2, content="5")],
    )
    essay = Question(
        index=2,
        content="Capital of Indonesia?",
        type=QuestionType.essay,
        score=5,
        explanation="Jakarta is the capital",
        correct_answer_choice=None,
        answers=[Answer(index=0, content="Jakarta")],
    )
    package.subtests = [Subtest(type=SubtestType.pu, duration=30, questions=[essay, choice])]
    db.add(package)
    db.commit()
    db.refresh(package)
    return package


@pytest.fixture
def closed_package(db):
    return build_package(db, to_end_delta=-timedelta(days=1))


@pytest.fixture
def open_package(db):
    return build_package(db, to_end_delta=timedelta(days=1))


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def headers(user_id: int, role: str = "student") -> dict:
    return {"X-User-Id": str(user_id), "X-User-Role": role}
