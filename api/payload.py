"""
Request-body reader shared by the POST routes.

Accepts a JSON object or an HTML form (urlencoded / multipart), so the
landing page forms and JSON clients hit the same handlers.
"""
from __future__ import annotations

from typing import Any

from fastapi import Request

from core.errors import ValidationError

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationError("request body is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data
