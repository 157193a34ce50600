"""Shape checks for untrusted language model output.

Every payload coming back from the model, the HTTP API or browser-style storage
goes through one of these functions before the rest of the application trusts
it. Rejections are values, not exceptions.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError as PydanticValidationError

from simple_explain.schemas.lesson import LessonPayload

T = TypeVar("T")


@dataclass(frozen=True)
class Accepted(Generic[T]):
    """A payload that satisfied its contract."""

    value: T


@dataclass(frozen=True)
class Rejected:
    """A payload that did not satisfy its contract, with a short reason."""

    reason: str


def _describe(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "payload"
    return f"{location}: {first['msg']}"


def validate_lesson(raw: Any) -> Accepted[LessonPayload] | Rejected:
    """Validate a structured lesson.

    Accepts a mapping with non-blank string ``schema_version`` (or
    ``schemaVersion``) and ``topic``, plus a ``lesson`` mapping holding
    non-blank ``beginner``, ``intermediate`` and ``advance`` strings.
    Anything else is rejected as a whole.

    Args:
        raw: Decoded JSON of unknown shape.

    Returns:
        Accepted with a freshly built LessonPayload, or Rejected.
    """
    if not isinstance(raw, Mapping):
        return Rejected(f"expected an object, got {type(raw).__name__}")

    try:
        payload = LessonPayload.model_validate(dict(raw))
    except PydanticValidationError as e:
        return Rejected(_describe(e))
    except (RecursionError, ValueError, TypeError) as e:
        return Rejected(f"unusable payload: {type(e).__name__}")
    return Accepted(payload)


def validate_essay(raw: Any) -> Accepted[str] | Rejected:
    """Validate a freeform essay: it must be a string with visible text."""
    if not isinstance(raw, str):
        return Rejected(f"expected a string, got {type(raw).__name__}")
    essay = raw.strip()
    if not essay:
        return Rejected("essay is blank")
    return Accepted(essay)
