"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Error taxonomy shared by the storage client and the HTTP layer.

Every error carries the HTTP status it maps to; the app-level exception
handler in `main.py` renders it as ``{"error": <message>}``.
"""

from __future__ import annotations


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Required input missing or malformed."""

    status_code = 400


class NotFoundError(AppError):
    """Referenced user id does not exist."""

    status_code = 404


class StorageError(AppError):
    """Any failure of the underlying database."""

    status_code = 500
