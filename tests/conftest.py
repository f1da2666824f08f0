"""
Shared fixtures for API tests.

Provides:
- `store`: in-memory stand-in for the PostgreSQL pool, patched into `core.db`
- `client`: FastAPI TestClient with the lifespan running against `store`
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core import db


class FakeStore:
    """
    Answers the handful of statements the schools repository issues.

    Every statement is recorded in `statements` so tests can assert that
    rejected requests never reached the store.
    """

    def __init__(self) -> None:
        self.tables: set[str] = set()
        self.rows: list[dict[str, Any]] = []
        self.statements: list[str] = []
        self.fail = False
        self._next_id = 1

    def _run(self, sql: str, args: tuple[Any, ...]) -> list[dict[str, Any]]:
        self.statements.append(sql)
        if self.fail:
            raise db.StoreError("connection refused")

        normalized = " ".join(sql.split())
        if normalized.startswith("SELECT 1 + 1"):
            return [{"solution": 2}]
        if normalized.startswith("CREATE TABLE IF NOT EXISTS schools"):
            self.tables.add("schools")
            return []
        if normalized.startswith("INSERT INTO schools"):
            name, address, latitude, longitude = args
            row = {
                "id": self._next_id,
                "name": name,
                "address": address,
                "latitude": latitude,
                "longitude": longitude,
                "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            }
            self._next_id += 1
            self.rows.append(row)
            return [{"id": row["id"]}]
        if normalized.startswith("SELECT id, name, address"):
            return [dict(r) for r in sorted(self.rows, key=lambda r: r["id"])]
        raise AssertionError(f"unexpected statement: {normalized}")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        rows = self._run(sql, args)
        return rows[0] if rows else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return self._run(sql, args)

    async def execute(self, sql: str, *args: Any) -> None:
        self._run(sql, args)


async def _noop() -> None:
    return None


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    monkeypatch.setattr(db, "execute", fake.execute)
    monkeypatch.setattr(db, "init_pool", _noop)
    monkeypatch.setattr(db, "close_pool", _noop)
    return fake


@pytest.fixture
def client(store):
    from main import app

    with TestClient(app) as test_client:
        yield test_client
