"""
School business logic.

Scope:
- store connectivity check
- idempotent table creation
- inserting a validated school
- ranking every stored school by distance from a query point

Store failures are logged here with full detail and surfaced to the caller
as an opaque 500.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import db

from . import distance, repository, schemas

logger = logging.getLogger(__name__)

CONNECTION_FAILED = "could not connect to the database"
CREATE_TABLE_FAILED = "some error occured while creating schools table"
ADD_SCHOOL_FAILED = "some error occured while adding new school data"
LIST_SCHOOLS_FAILED = "some error occured while getting the list of schools"


def _store_failure(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


async def check_connection() -> list[dict]:
    logger.info("db_check_started")
    try:
        return await repository.ping()
    except db.StoreError as exc:
        logger.exception("db_check_failed")
        raise _store_failure(CONNECTION_FAILED) from exc


async def create_table() -> str:
    logger.info("create_table_started table=%s", repository.SCHOOLS_TABLE)
    try:
        await repository.create_schools_table()
    except db.StoreError as exc:
        logger.exception("create_table_failed table=%s", repository.SCHOOLS_TABLE)
        raise _store_failure(CREATE_TABLE_FAILED) from exc
    return repository.SCHOOLS_TABLE


async def add_school(payload: schemas.AddSchoolRequest) -> int:
    try:
        school_id = await repository.insert_school(
            name=payload.name,
            address=payload.address,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    except db.StoreError as exc:
        logger.exception("school_add_failed name=%r", payload.name)
        raise _store_failure(ADD_SCHOOL_FAILED) from exc
    logger.info("school_added id=%s", school_id)
    return school_id


def rank_by_distance(
    rows: list[dict],
    *,
    latitude: float,
    longitude: float,
) -> list[schemas.RankedSchool]:
    """
    Annotate each row with its distance from (latitude, longitude) and sort
    ascending. `sorted` is stable, so equal distances keep store order.
    """
    ranked = [
        schemas.RankedSchool(
            id=int(row["id"]),
            name=str(row["name"]),
            address=str(row["address"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            created_at=row.get("created_at"),
            distance=distance.haversine_km(
                latitude,
                longitude,
                float(row["latitude"]),
                float(row["longitude"]),
            ),
        )
        for row in rows
    ]
    return sorted(ranked, key=lambda school: school.distance)


async def list_schools_by_distance(query: schemas.LocationQuery) -> list[schemas.RankedSchool]:
    try:
        rows = await repository.list_schools()
    except db.StoreError as exc:
        logger.exception("school_list_failed")
        raise _store_failure(LIST_SCHOOLS_FAILED) from exc

    ranked = rank_by_distance(rows, latitude=query.latitude, longitude=query.longitude)
    logger.info(
        "school_list_ranked count=%s latitude=%s longitude=%s",
        len(ranked),
        query.latitude,
        query.longitude,
    )
    return ranked
