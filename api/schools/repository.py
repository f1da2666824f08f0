"""
School persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal

from core import db

SCHOOLS_TABLE = "schools"

CREATE_SCHOOLS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schools (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    address VARCHAR(255) NOT NULL,
    latitude NUMERIC(10, 8) NOT NULL CHECK (latitude BETWEEN -90 AND 90),
    longitude NUMERIC(11, 8) NOT NULL CHECK (longitude BETWEEN -180 AND 180),
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


async def ping() -> list[dict]:
    return await db.fetch_all("SELECT 1 + 1 AS solution")


async def create_schools_table() -> None:
    await db.execute(CREATE_SCHOOLS_TABLE_SQL)


async def insert_school(*, name: str, address: str, latitude: float, longitude: float) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO schools (name, address, latitude, longitude)
        VALUES ($1, $2, $3, $4)
        RETURNING id
        """,
        name,
        address,
        # NUMERIC columns bind Decimal; str() keeps the shortest float repr.
        Decimal(str(latitude)),
        Decimal(str(longitude)),
    )
    if row is None:
        raise RuntimeError("Failed to insert school.")
    return int(row["id"])


async def list_schools() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, address, latitude, longitude, created_at
        FROM schools
        ORDER BY id ASC
        """
    )
