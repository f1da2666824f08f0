import asyncio

import pytest

from core import db


class _BrokenPool:
    async def fetch(self, sql, *args):
        raise ConnectionRefusedError("connection refused")

    async def fetchrow(self, sql, *args):
        raise asyncio.TimeoutError()

    async def execute(self, sql, *args):
        raise OSError("network unreachable")


class _RowPool:
    async def fetch(self, sql, *args):
        return [{"solution": 2}]

    async def fetchrow(self, sql, *args):
        return None


def test_database_url_strips_sslmode(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", " postgresql://u:p@db:5432/schools?sslmode=require&application_name=api ")

    assert db.database_url() == "postgresql://u:p@db:5432/schools?application_name=api"


def test_database_url_is_required(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "   ")

    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        db.database_url()


def test_pool_must_be_initialized(monkeypatch):
    monkeypatch.setattr(db, "_pool", None)

    with pytest.raises(RuntimeError, match="not initialized"):
        db.pool()


@pytest.mark.parametrize(
    "call",
    [
        lambda: db.fetch_all("SELECT 1"),
        lambda: db.fetch_one("SELECT 1"),
        lambda: db.execute("SELECT 1"),
    ],
)
def test_driver_failures_become_store_errors(monkeypatch, call):
    monkeypatch.setattr(db, "_pool", _BrokenPool())

    with pytest.raises(db.StoreError):
        asyncio.run(call())


def test_rows_come_back_as_dicts(monkeypatch):
    monkeypatch.setattr(db, "_pool", _RowPool())

    assert asyncio.run(db.fetch_all("SELECT 1 + 1 AS solution")) == [{"solution": 2}]
    assert asyncio.run(db.fetch_one("SELECT 1")) is None
