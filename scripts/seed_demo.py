"""
Seed a demo user and a handful of exercises.

Usage
-----

    # one user called "demo" with the default trio of exercises
    python -m scripts.seed_demo

    # custom username, exercises loaded from a JSON file
    python -m scripts.seed_demo --username alice --file path/to/exercises.json
"""
from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import json
from pathlib import Path
from typing import Any, List

from dotenv import load_dotenv
load_dotenv()

from config import Settings
from core.models.exercise import parse_new_exercise
from core.models.user import parse_new_user
from services.db import Storage

# ────────────────────────────────────────────────────────────────────
_DEFAULT_EXERCISES: List[dict[str, Any]] = [
    {"description": "easy run", "duration": 30, "days_ago": 6},
    {"description": "push-ups", "duration": 10, "days_ago": 3},
    {"description": "cycling", "duration": 45, "days_ago": 1},
]


async def _seed(database_url: str, username: str, exercises: list[dict[str, Any]]) -> str:
    storage = Storage.from_url(database_url)
    try:
        await storage.init_schema()
        user = await storage.create_user(parse_new_user({"username": username}))
        today = dt.date.today()
        for e in exercises:
            body = dict(e)
            days_ago = body.pop("days_ago", None)
            if days_ago is not None and not body.get("date"):
                body["date"] = (today - dt.timedelta(days=days_ago)).isoformat()
            await storage.add_exercise(parse_new_exercise(user.id, body, today=today))
    finally:
        await storage.close()

    print(f"✓ inserted {len(exercises)} exercises for user {user.username} ({user.id})")
    return user.id


def _load_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of exercise dictionaries")
    return data


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--username", default="demo", help="name for the new user")
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with exercises to seed (overrides defaults)",
    )
    parser.add_argument("--database-url", help="override DATABASE_URL")
    args = parser.parse_args()

    exercises = _load_json(args.file) if args.file else _DEFAULT_EXERCISES
    database_url = args.database_url or Settings().database_url
    asyncio.run(_seed(database_url, args.username, exercises))


if __name__ == "__main__":
    main()
