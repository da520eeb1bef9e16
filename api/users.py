from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, status

from api.payload import read_payload
from api.schemas import ErrorOut, UserOut
from core.errors import StorageError
from core.models.user import parse_new_user
from services.db import Storage, get_storage

router = APIRouter()
_LOG = logging.getLogger(__name__)


# ───────────────────────── create ──────────────────────────
@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def create_user(
    payload: dict[str, Any] = Depends(read_payload),
    storage: Storage = Depends(get_storage),
) -> UserOut:
    new = parse_new_user(payload)
    try:
        user = await storage.create_user(new)
    except StorageError as exc:
        raise StorageError("error creating user") from exc

    _LOG.info("created user %s (%r)", user.id, user.username)
    return UserOut.model_validate(user, from_attributes=True)


# ───────────────────────── list ─────────────────────────────
@router.get(
    "",
    response_model=list[UserOut],
    responses={500: {"model": ErrorOut}},
)
async def list_users(storage: Storage = Depends(get_storage)) -> list[UserOut]:
    try:
        users = await storage.list_users()
    except StorageError as exc:
        raise StorageError("Error fetching users") from exc
    return [UserOut.model_validate(u, from_attributes=True) for u in users]
