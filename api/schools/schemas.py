"""
Pydantic schemas for school endpoints.

Request constraints live in `rules.py`; the request models here are the typed
result of a payload that already passed those rules.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class AddSchoolRequest(BaseModel):
    name: str
    address: str
    latitude: float
    longitude: float


class LocationQuery(BaseModel):
    latitude: float
    longitude: float


class School(BaseModel):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    created_at: datetime | None = None


class RankedSchool(School):
    # Kilometres from the query point; request-scoped, never stored.
    distance: float = Field(..., ge=0)
