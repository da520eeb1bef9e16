from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, field_validator

from core.errors import ValidationError


class User(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class NewUser(BaseModel):
    username: str

    @field_validator("username", mode="before")
    @classmethod
    def _non_empty(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("username must be provided")
        return v


def parse_new_user(payload: dict[str, Any]) -> NewUser:
    """Validate a user-creation body before it reaches storage."""
    try:
        return NewUser.model_validate({"username": payload.get("username")})
    except PydanticValidationError as exc:
        raise ValidationError("username must be provided") from exc
