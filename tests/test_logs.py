# tests/test_logs.py
from __future__ import annotations

import datetime as dt

import pytest

START = dt.date(2023, 1, 1)
DATES = [START + dt.timedelta(days=i) for i in range(10)]


@pytest.fixture
def seeded(client, user_id):
    # log out of order, the log comes back sorted by date
    for i, d in reversed(list(enumerate(DATES))):
        r = client.post(
            f"/api/users/{user_id}/exercises",
            json={"description": f"ex{i}", "duration": 10 + i, "date": d.isoformat()},
        )
        assert r.status_code == 201
    return user_id


def _log(client, user_id, **params):
    r = client.get(f"/api/users/{user_id}/logs", params=params)
    assert r.status_code == 200, r.text
    return r.json()


# ── end-to-end scenario ─────────────────────────────────────────────
def test_fcc_scenario(client):
    user = client.post("/api/users", json={"username": "fcc_test"}).json()
    uid = user["id"]

    ex = client.post(
        f"/api/users/{uid}/exercises",
        json={"description": "test run", "duration": 30, "date": "2023-01-15"},
    )
    assert ex.status_code == 201
    assert ex.json()["date"] == "Sun Jan 15 2023"

    assert _log(client, uid) == {
        "username": "fcc_test",
        "count": 1,
        "id": uid,
        "log": [{"description": "test run", "duration": 30, "date": "Sun Jan 15 2023"}],
    }


def test_empty_log(client, user_id):
    body = _log(client, user_id)
    assert body["count"] == 0
    assert body["log"] == []


def test_full_log_is_date_ordered(client, seeded):
    body = _log(client, seeded)
    assert body["count"] == len(DATES)
    assert [e["description"] for e in body["log"]] == [f"ex{i}" for i in range(10)]


# ── limit ────────────────────────────────────────────────────────────
@pytest.mark.parametrize("k", [1, 3, 10, 25])
def test_limit_returns_min_n_k(client, seeded, k):
    body = _log(client, seeded, limit=k)
    assert body["count"] == min(len(DATES), k)
    assert len(body["log"]) == body["count"]


@pytest.mark.parametrize("raw", ["abc", "0", "-2", ""])
def test_bad_limit_falls_back_to_default(client, seeded, raw):
    assert _log(client, seeded, limit=raw)["count"] == len(DATES)


def test_huge_limit_is_capped(client, seeded):
    body = _log(client, seeded, limit="99999999999999999999")
    assert body["count"] == len(DATES)


@pytest.mark.parametrize("raw, expected", [("5abc", 5), (" 3", 3), ("2.9", 2), ("+4", 4)])
def test_limit_takes_leading_digits(client, seeded, raw, expected):
    assert _log(client, seeded, limit=raw)["count"] == expected


# ── date range ───────────────────────────────────────────────────────
def test_from_to_inclusive(client, seeded):
    body = _log(client, seeded, **{"from": "2023-01-03", "to": "2023-01-06"})
    dates = [e["date"] for e in body["log"]]
    assert dates == ["Tue Jan 03 2023", "Wed Jan 04 2023", "Thu Jan 05 2023", "Fri Jan 06 2023"]


def test_from_only(client, seeded):
    body = _log(client, seeded, **{"from": "2023-01-09"})
    assert body["count"] == 2


def test_to_only(client, seeded):
    body = _log(client, seeded, to="2023-01-01")
    assert [e["description"] for e in body["log"]] == ["ex0"]


def test_range_and_limit(client, seeded):
    body = _log(client, seeded, **{"from": "2023-01-02", "to": "2023-01-08", "limit": "2"})
    assert [e["description"] for e in body["log"]] == ["ex1", "ex2"]


def test_empty_range(client, seeded):
    body = _log(client, seeded, **{"from": "2023-02-01", "to": "2023-01-01"})
    assert body["count"] == 0


def test_bad_from(client, seeded):
    r = client.get(f"/api/users/{seeded}/logs", params={"from": "yesterday"})
    assert r.status_code == 400
    assert "from" in r.json()["error"]


def test_logs_only_include_own_exercises(client, seeded):
    other = client.post("/api/users", json={"username": "other"}).json()["id"]
    client.post(f"/api/users/{other}/exercises", json={"description": "x", "duration": 1})
    assert _log(client, other)["count"] == 1
    assert _log(client, seeded)["count"] == len(DATES)


# ── errors ───────────────────────────────────────────────────────────
def test_unknown_user(client):
    r = client.get("/api/users/doesnotexist/logs")
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_storage_failure(broken_client):
    r = broken_client.get("/api/users/abc/logs")
    assert r.status_code == 500
    assert r.json() == {"error": "Error fetching logs"}


def test_read_failure(failing_exercises_client):
    c = failing_exercises_client
    uid = c.post("/api/users", json={"username": "ann"}).json()["id"]
    r = c.get(f"/api/users/{uid}/logs")
    assert r.status_code == 500
    assert r.json() == {"error": "Error fetching logs"}
