"""Re-export individual schema modules for easy imports."""

from .user import UserOut
from .exercise import ExerciseOut, LogEntry, LogOut
from .error import ErrorOut

__all__ = [
    "UserOut",
    "ExerciseOut",
    "LogEntry",
    "LogOut",
    "ErrorOut",
]
