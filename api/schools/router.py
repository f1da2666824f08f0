"""
School API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service

router = APIRouter()


@router.get("/test-db")
async def test_db() -> dict:
    result = await service.check_connection()
    return {"message": "successful database connection", "result": result}


@router.post("/create-table")
async def create_table() -> dict:
    table = await service.create_table()
    return {"message": "successfully created the schools table", "table": table}


@router.post("/addSchool", status_code=status.HTTP_201_CREATED)
async def add_school(
    payload: schemas.AddSchoolRequest = Depends(dependencies.add_school_request),
) -> dict:
    school_id = await service.add_school(payload)
    return {"message": "successfully added the new school data", "result": school_id}


@router.get("/getSchools")
async def get_schools(
    query: schemas.LocationQuery = Depends(dependencies.location_query),
) -> list[schemas.RankedSchool]:
    """
    All stored schools, nearest first, each with `distance` in kilometres.
    """
    return await service.list_schools_by_distance(query)
