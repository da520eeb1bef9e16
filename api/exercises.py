"""
Exercise routes – nested under the user resource:

    POST /api/users/{user_id}/exercises
    GET  /api/users/{user_id}/logs
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status

from api.payload import read_payload
from api.schemas import ErrorOut, ExerciseOut, LogEntry, LogOut
from core.errors import NotFoundError, StorageError
from core.models.exercise import (
    format_date,
    format_minutes,
    parse_log_query,
    parse_new_exercise,
)
from core.models.user import User
from services.db import Storage, get_storage

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _require_user(storage: Storage, user_id: str) -> User:
    user = await storage.get_user(user_id)
    if user is None:
        _LOG.warning("unknown user id %r", user_id)
        raise NotFoundError("User not found")
    return user


# ───────────────────────── log one exercise ─────────────────
@router.post(
    "/{user_id}/exercises",
    response_model=ExerciseOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorOut},
        404: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def add_exercise(
    user_id: str,
    payload: dict[str, Any] = Depends(read_payload),
    storage: Storage = Depends(get_storage),
) -> ExerciseOut:
    new = parse_new_exercise(user_id, payload)
    try:
        user = await _require_user(storage, user_id)
        ex = await storage.add_exercise(new)
    except StorageError as exc:
        raise StorageError("Error adding exercise") from exc

    _LOG.info("logged exercise %s for user %s", ex.id, user.id)
    return ExerciseOut(
        username=user.username,
        description=ex.description,
        duration=format_minutes(ex.duration),
        date=format_date(ex.date),
        id=ex.id,
    )


# ───────────────────────── read log ─────────────────────────
@router.get(
    "/{user_id}/logs",
    response_model=LogOut,
    responses={
        400: {"model": ErrorOut},
        404: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def get_log(
    user_id: str,
    request: Request,
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    limit: str | None = Query(None),
    storage: Storage = Depends(get_storage),
) -> LogOut:
    query = parse_log_query(
        date_from,
        date_to,
        limit,
        default_limit=request.app.state.settings.default_log_limit,
    )
    try:
        user = await _require_user(storage, user_id)
        exercises = await storage.find_exercises(
            user_id,
            date_from=query.date_from,
            date_to=query.date_to,
            limit=query.limit,
        )
    except StorageError as exc:
        raise StorageError("Error fetching logs") from exc

    log = [LogEntry.from_record(ex) for ex in exercises]
    return LogOut(username=user.username, count=len(log), id=user.id, log=log)
