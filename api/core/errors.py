"""
HTTP error envelopes.

Response shapes:
- field validation -> 400 {"errors": [{"field", "msg", "location"}, ...]}
- unmatched route  -> 404 {"error": "Not found"}
- HTTPException    -> <status> {"error": detail}
- anything else    -> 500 {"error": "Internal Server Error"}
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Not found"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@dataclass(frozen=True)
class FieldViolation:
    field: str
    msg: str
    location: str = "body"

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


class FieldValidationError(Exception):
    def __init__(self, violations: list[FieldViolation]) -> None:
        super().__init__("; ".join(f"{v.field}: {v.msg}" for v in violations))
        self.violations = list(violations)


async def _field_validation_handler(_: Request, exc: FieldValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [v.as_dict() for v in exc.violations]},
    )


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path hit with the wrong method is still an unmatched route.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": NOT_FOUND_MESSAGE},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FieldValidationError, _field_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
