"""
core/models/exercise.py
────────────────────────────────────────────────────────────────────────
Typed exercise records plus the parsing rules for:

1. the exercise-logging body (description / duration / date)
2. the log query string   (from / to / limit)

All checks run before any storage call.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
)

from core.errors import ValidationError

# `toDateString()` layout: "Sun Jan 15 2023"
DATE_FORMAT = "%a %b %d %Y"

# upper bounds keep values inside what every backend can bind
MAX_DURATION = 2**31 - 1
MAX_LOG_LIMIT = 2**31 - 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def format_date(value: dt.date) -> str:
    return value.strftime(DATE_FORMAT)


def format_minutes(value: float) -> int | float:
    """30.0 -> 30, 12.5 -> 12.5"""
    return int(value) if float(value).is_integer() else value


def parse_calendar_date(raw: Any) -> dt.date:
    """
    Accept a `date`, a `datetime` or an ISO string. Date-time strings keep
    only their calendar date.
    """
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    if not isinstance(raw, str):
        raise ValueError("expected an ISO date string")
    text = raw.strip()
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    return dt.datetime.fromisoformat(text).date()


def _blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


# ──────────────────────────────────────────────────────────────────────
#  Records
# ──────────────────────────────────────────────────────────────────────
class Exercise(BaseModel):
    id: str
    user_id: str
    description: str
    duration: float
    date: dt.date

    model_config = ConfigDict(from_attributes=True)


class NewExercise(BaseModel):
    user_id: str
    description: str
    duration: float = Field(gt=0, le=MAX_DURATION)
    date: dt.date

    @field_validator("description", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("duration", mode="before")
    @classmethod
    def _no_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("duration must be a number")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, v: Any) -> dt.date:
        return parse_calendar_date(v)


def parse_new_exercise(
    user_id: str,
    payload: dict[str, Any],
    today: dt.date | None = None,
) -> NewExercise:
    description = payload.get("description")
    duration = payload.get("duration")
    if _blank(description) or _blank(duration):
        raise ValidationError("Description and duration are required")

    raw_date = payload.get("date")
    if _blank(raw_date):
        raw_date = today or dt.date.today()

    try:
        return NewExercise.model_validate(
            {
                "user_id": user_id,
                "description": description,
                "duration": duration,
                "date": raw_date,
            }
        )
    except PydanticValidationError as exc:
        field = exc.errors()[0]["loc"][0]
        if field == "duration":
            raise ValidationError(
                "duration must be a positive number of minutes"
            ) from exc
        if field == "date":
            raise ValidationError("date must be a calendar date (YYYY-MM-DD)") from exc
        raise ValidationError(f"invalid {field}") from exc


# ──────────────────────────────────────────────────────────────────────
#  Log query
# ──────────────────────────────────────────────────────────────────────
class LogQuery(BaseModel):
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    limit: int


def _parse_limit(raw: str | None, default: int) -> int:
    """
    parseInt-style: leading digits count ("5abc" -> 5). Anything without
    them, or not positive, falls back to `default`; huge values are capped.
    """
    match = _LEADING_INT.match(raw or "")
    if not match:
        return default
    value = int(match.group(1))
    if value <= 0:
        return default
    return min(value, MAX_LOG_LIMIT)


def parse_log_query(
    date_from: str | None,
    date_to: str | None,
    limit: str | None,
    default_limit: int = 500,
) -> LogQuery:
    bounds: dict[str, dt.date | None] = {}
    for name, raw in (("from", date_from), ("to", date_to)):
        if _blank(raw):
            bounds[name] = None
            continue
        try:
            bounds[name] = parse_calendar_date(raw)
        except ValueError as exc:
            raise ValidationError(f"'{name}' must be a calendar date (YYYY-MM-DD)") from exc

    return LogQuery(
        date_from=bounds["from"],
        date_to=bounds["to"],
        limit=_parse_limit(limit, default_limit),
    )
