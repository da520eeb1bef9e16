"""
Shared fixtures: a real SQLite-backed `Storage` and an in-memory double,
both injected through `create_app(storage=...)`.
"""
from __future__ import annotations

import datetime as dt
import uuid

import pytest
from fastapi.testclient import TestClient

from config import Settings
from core.errors import StorageError
from core.models.exercise import Exercise, NewExercise
from core.models.user import NewUser, User
from main import create_app
from services.db import Storage


class FakeStorage:
    """Dict-backed stand-in with the same coroutine surface as `Storage`."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.exercises: list[Exercise] = []
        self.closed = False

    async def init_schema(self) -> None:
        pass

    async def close(self) -> None:
        self.closed = True

    async def create_user(self, new: NewUser) -> User:
        user = User(id=uuid.uuid4().hex, username=new.username)
        self.users[user.id] = user
        return user

    async def list_users(self) -> list[User]:
        return list(self.users.values())

    async def get_user(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    async def add_exercise(self, new: NewExercise) -> Exercise:
        ex = Exercise(id=uuid.uuid4().hex, **new.model_dump())
        self.exercises.append(ex)
        return ex

    async def find_exercises(
        self,
        user_id: str,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
        limit: int | None = None,
    ) -> list[Exercise]:
        rows = [
            e for e in self.exercises
            if e.user_id == user_id
            and (date_from is None or e.date >= date_from)
            and (date_to is None or e.date <= date_to)
        ]
        rows.sort(key=lambda e: e.date)
        return rows[:limit] if limit is not None else rows


class BrokenStorage(FakeStorage):
    """Every data call fails the way a dropped connection would."""

    async def create_user(self, new: NewUser) -> User:
        raise StorageError("connection lost")

    async def list_users(self) -> list[User]:
        raise StorageError("connection lost")

    async def get_user(self, user_id: str) -> User | None:
        raise StorageError("connection lost")


class ExerciseFailureStorage(FakeStorage):
    """Users resolve fine; exercise writes and reads fail."""

    async def add_exercise(self, new: NewExercise) -> Exercise:
        raise StorageError("insert failed")

    async def find_exercises(self, user_id, date_from=None, date_to=None, limit=None):
        raise StorageError("read failed")


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "env_name": "test",
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def storage(settings) -> Storage:
    return Storage.from_url(settings.database_url)


@pytest.fixture
def client(settings, storage):
    with TestClient(create_app(settings, storage=storage)) as c:
        yield c


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fake_client(settings, fake_storage):
    with TestClient(create_app(settings, storage=fake_storage)) as c:
        yield c


@pytest.fixture
def broken_client(settings):
    with TestClient(create_app(settings, storage=BrokenStorage())) as c:
        yield c


@pytest.fixture
def failing_exercises_client(settings):
    with TestClient(create_app(settings, storage=ExerciseFailureStorage())) as c:
        yield c


@pytest.fixture
def user_id(client) -> str:
    r = client.post("/api/users", json={"username": "fcc_test"})
    assert r.status_code == 201
    return r.json()["id"]
