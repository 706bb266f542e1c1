# src/taskdesk/core/forms.py

"""
Typed form input.

Form surfaces hand over a list of named values (FieldValue). Before the
controllers trust them, the list is checked against the form's schema:
- every name must belong to the form
- every value must be a string
Missing fields read as "" and a repeated name keeps its last value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class FormFieldError(ValueError):
    """A field list does not match the expected form schema."""


@dataclass(frozen=True, slots=True)
class FieldValue:
    name: str
    value: str


def collect_fields(items: Iterable[FieldValue], schema: Iterable[str]) -> dict[str, str]:
    allowed = tuple(schema)
    out = {name: "" for name in allowed}

    for item in items:
        if not isinstance(item, FieldValue):
            raise FormFieldError(f"Expected FieldValue, got {type(item).__name__}")
        if item.name not in out:
            raise FormFieldError(f"Unknown field: {item.name!r} (expected one of {', '.join(allowed)})")
        if not isinstance(item.value, str):
            raise FormFieldError(f"Field {item.name!r} must be a string")
        out[item.name] = item.value

    return out


def missing_required(values: dict[str, str], required: Iterable[str]) -> list[str]:
    """Names of required fields whose value is empty."""
    return [name for name in required if not values.get(name)]
