"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 models for the two record types
* `Storage`: the explicitly constructed storage client handed to routers
* `get_storage`: FastAPI dependency that resolves the app's client
"""
from __future__ import annotations

import datetime as dt
import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import Date, DateTime, Float, String, Text, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from core.errors import StorageError
from core.models.exercise import Exercise as ExerciseRecord, NewExercise
from core.models.user import NewUser, User as UserRecord

_LOG = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_now)


class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    # plain column, no FK: the router checks the user exists before insert
    user_id: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False)  # minutes
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_now)


# ───────── storage client ────────────────────────────────────────────
class Storage:
    """
    Thin async facade over the two tables.

    Every public method opens its own short-lived session and turns any
    database / driver failure into `StorageError`.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> "Storage":
        return cls(create_async_engine(database_url, pool_pre_ping=True))

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessions() as session:
                yield session
        except (SQLAlchemyError, OSError, OverflowError) as exc:
            _LOG.exception("storage operation failed")
            raise StorageError(f"storage failure: {type(exc).__name__}") from exc

    # ---- lifecycle --------------------------------------------------
    async def init_schema(self) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            _LOG.exception("could not create schema")
            raise StorageError("could not create schema") from exc

    async def close(self) -> None:
        await self._engine.dispose()

    # ---- users ------------------------------------------------------
    async def create_user(self, new: NewUser) -> UserRecord:
        async with self._session() as db:
            row = User(username=new.username)
            db.add(row)
            await db.commit()
            return UserRecord.model_validate(row)

    async def list_users(self) -> list[UserRecord]:
        async with self._session() as db:
            rows = (await db.execute(select(User))).scalars().all()
            return [UserRecord.model_validate(r) for r in rows]

    async def get_user(self, user_id: str) -> UserRecord | None:
        async with self._session() as db:
            row = await db.get(User, user_id)
            return UserRecord.model_validate(row) if row else None

    # ---- exercises --------------------------------------------------
    async def add_exercise(self, new: NewExercise) -> ExerciseRecord:
        async with self._session() as db:
            row = Exercise(**new.model_dump())
            db.add(row)
            await db.commit()
            return ExerciseRecord.model_validate(row)

    async def find_exercises(
        self,
        user_id: str,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
        limit: int | None = None,
    ) -> list[ExerciseRecord]:
        stmt = select(Exercise).where(Exercise.user_id == user_id)
        if date_from is not None:
            stmt = stmt.where(Exercise.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Exercise.date <= date_to)
        stmt = stmt.order_by(Exercise.date, Exercise.created_at)
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._session() as db:
            rows = (await db.execute(stmt)).scalars().all()
            return [ExerciseRecord.model_validate(r) for r in rows]


# ───────── dependency ────────────────────────────────────────────────
def get_storage(request: Request) -> Storage:
    return request.app.state.storage
