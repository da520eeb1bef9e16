# api/schemas/exercise.py
from __future__ import annotations
from typing import List

from pydantic import BaseModel

from core.models.exercise import Exercise, format_date, format_minutes


class ExerciseOut(BaseModel):
    username:    str
    description: str
    duration:    int | float   # minutes; whole values come back as int
    date:        str      # "Sun Jan 15 2023"
    id:          str      # exercise id


class LogEntry(BaseModel):
    description: str
    duration:    int | float   # minutes; whole values come back as int
    date:        str

    @classmethod
    def from_record(cls, ex: Exercise) -> "LogEntry":
        return cls(
            description=ex.description,
            duration=format_minutes(ex.duration),
            date=format_date(ex.date),
        )


class LogOut(BaseModel):
    username: str
    count:    int
    id:       str         # user id
    log:      List[LogEntry]
