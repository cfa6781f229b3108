"""
Engine input normalization.

Entity collections may arrive as model instances (from the data-service
client or a FastAPI body) or as plain mappings (from callers holding raw
JSON). Both are accepted. Anything else is a caller contract violation and
raises pydantic.ValidationError rather than being skipped, so a malformed
entity can never silently vanish from a count or a matrix cell.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, NonNegativeInt, TypeAdapter

ModelT = TypeVar("ModelT", bound=BaseModel)

_COUNT = TypeAdapter(NonNegativeInt)


def coerce_entities(items: Iterable[Any] | None, model: type[ModelT]) -> list[ModelT]:
    """Validate every item as `model`. None is treated as an empty collection."""
    if items is None:
        return []
    return [item if isinstance(item, model) else model.model_validate(item) for item in items]


def as_utc(value: datetime) -> datetime:
    """Naive datetimes from the data service are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def coerce_count(value: Any) -> int:
    """None is 0. Negative or fractional counts raise ValidationError; 2.0 is 2."""
    if value is None:
        return 0
    return _COUNT.validate_python(value)
