"""
Declarative field rules for school payloads.

Each endpoint owns a tuple of `FieldRule`s. `apply_rules()` is the only
evaluator: it walks the rules in order, reports at most one violation per
field, and returns the cleaned values alongside the violations.

Parsing and bounds are delegated to a pydantic `TypeAdapter` built from the
rule; pydantic errors are mapped back onto the rule's messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Mapping

from pydantic import Field, TypeAdapter, ValidationError

from core.errors import FieldViolation

TEXT = "text"
NUMBER = "number"

MAX_TEXT_LENGTH = 255


@dataclass(frozen=True)
class FieldRule:
    name: str
    label: str
    kind: str
    required: bool = True
    minimum: float | None = None
    maximum: float | None = None

    def required_message(self) -> str:
        return f"{self.label} is required"

    def type_message(self) -> str:
        if self.kind == TEXT:
            return f"{self.label} must be a String"
        if self.minimum is not None and self.maximum is not None:
            return f"{self.label} must be a valid number between {self.minimum:g} and {self.maximum:g}"
        return f"{self.label} must be a valid number"

    def length_message(self) -> str:
        return f"{self.label} must be at most {MAX_TEXT_LENGTH} characters"


ADD_SCHOOL_RULES: tuple[FieldRule, ...] = (
    FieldRule("name", "Name", TEXT),
    FieldRule("address", "Address", TEXT),
    FieldRule("latitude", "Latitude", NUMBER, minimum=-90, maximum=90),
    FieldRule("longitude", "Longitude", NUMBER, minimum=-180, maximum=180),
)

LOCATION_RULES: tuple[FieldRule, ...] = (
    FieldRule("latitude", "Latitude", NUMBER, minimum=-90, maximum=90),
    FieldRule("longitude", "Longitude", NUMBER, minimum=-180, maximum=180),
)


@lru_cache(maxsize=None)
def _adapter(rule: FieldRule) -> TypeAdapter:
    if rule.kind == TEXT:
        return TypeAdapter(Annotated[str, Field(strict=True, max_length=MAX_TEXT_LENGTH)])
    return TypeAdapter(
        Annotated[float, Field(ge=rule.minimum, le=rule.maximum, allow_inf_nan=False)]
    )


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _check(rule: FieldRule, raw: Any) -> tuple[Any, str | None]:
    if _is_blank(raw):
        return None, rule.required_message() if rule.required else None

    # bool is an int subclass; `true` is not a coordinate.
    if rule.kind == NUMBER and isinstance(raw, bool):
        return None, rule.type_message()

    candidate = raw.strip() if isinstance(raw, str) else raw
    try:
        return _adapter(rule).validate_python(candidate), None
    except ValidationError as exc:
        if any(err["type"] == "string_too_long" for err in exc.errors()):
            return None, rule.length_message()
        return None, rule.type_message()
    except OverflowError:
        # Integers beyond float range.
        return None, rule.type_message()


def apply_rules(
    payload: Mapping[str, Any] | None,
    rules: tuple[FieldRule, ...],
    *,
    location: str = "body",
) -> tuple[dict[str, Any], list[FieldViolation]]:
    """
    Evaluate `payload` against `rules`.

    Returns `(values, violations)`. `values` holds the cleaned value of every
    field that passed; it is only meaningful when `violations` is empty.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        return {}, [FieldViolation(field="body", msg="Request body must be a JSON object", location=location)]

    values: dict[str, Any] = {}
    violations: list[FieldViolation] = []
    for rule in rules:
        value, message = _check(rule, payload.get(rule.name))
        if message is not None:
            violations.append(FieldViolation(field=rule.name, msg=message, location=location))
        elif value is not None:
            values[rule.name] = value
    return values, violations
