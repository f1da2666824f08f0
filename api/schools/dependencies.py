"""
Request-validation dependencies for school routes.

Bodies are read and checked against the rule tables in `rules.py` before the
route body runs, so a rejected request never reaches the store.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from core.errors import FieldValidationError, FieldViolation

from . import rules, schemas

_NOT_JSON = object()


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit are all ValueError.
        return _NOT_JSON


def _raise_if_invalid(violations: list[FieldViolation]) -> None:
    if violations:
        raise FieldValidationError(violations)


async def add_school_request(request: Request) -> schemas.AddSchoolRequest:
    payload = await _read_json(request)
    if payload is _NOT_JSON:
        _raise_if_invalid([FieldViolation(field="body", msg="Request body must be valid JSON")])

    values, violations = rules.apply_rules(payload, rules.ADD_SCHOOL_RULES)
    _raise_if_invalid(violations)
    return schemas.AddSchoolRequest(**values)


async def location_query(request: Request) -> schemas.LocationQuery:
    """
    Coordinates come from the JSON body. Clients that cannot send a body with
    GET may pass them as query parameters instead.
    """
    payload = await _read_json(request)
    if payload is _NOT_JSON:
        _raise_if_invalid([FieldViolation(field="body", msg="Request body must be valid JSON")])

    if payload is None and request.query_params:
        values, violations = rules.apply_rules(
            dict(request.query_params),
            rules.LOCATION_RULES,
            location="query",
        )
    else:
        values, violations = rules.apply_rules(payload, rules.LOCATION_RULES)
    _raise_if_invalid(violations)
    return schemas.LocationQuery(**values)
