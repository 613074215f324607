"""
Total accessors over untyped onboarding response payloads.

Questionnaire responses arrive as arbitrary JSON: step-keyed objects,
strings, lists of uploaded files, or nothing at all. Every helper here is a
total function: a missing key or a value of the wrong shape resolves to the
supplied default (or an empty value of the expected type) instead of raising.
Rule conditions and generators read responses only through these helpers.

Example:
    >>> responses = flatten_responses({"step1": {"logo_upload": [{"url": "logo.png"}]}})
    >>> has_files(responses, "logo_upload")
    True
    >>> get_text(responses, "design_style", "modern")
    'modern'
"""

from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, TypeVar

T = TypeVar("T")

_FILE_MARKERS = ("url", "name", "file")


def flatten_responses(responses: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Merge step-keyed payloads into one flat response map.

    ``{"step1": {"a": 1}, "step2": {"b": 2}}`` becomes ``{"a": 1, "b": 2}``.
    Later steps win on key collisions. Top-level values that are not mappings
    are kept under their own key.

    Args:
        responses: Raw response payload (may be None)

    Returns:
        New flat dictionary; the input is never modified
    """
    flat: dict[str, Any] = {}
    if not isinstance(responses, Mapping):
        return flat

    for key, value in responses.items():
        if isinstance(value, Mapping):
            flat.update(value)
        else:
            flat[key] = value
    return flat


def get_value(responses: Mapping[str, Any], key: str, default: T | None = None) -> Any:
    """
    Get a response value, falling back to ``default`` when absent.

    A key that is present with a ``None`` value counts as absent. When a
    non-None default is given, a value of a different type also resolves to
    the default. ``bool`` is not accepted for an ``int`` or ``float``
    default, nor numbers for a ``str`` default.
    """
    if not isinstance(responses, Mapping):
        return default
    value = responses.get(key)
    if value is None:
        return default
    if default is not None:
        if not isinstance(value, type(default)):
            return default
        if isinstance(value, bool) and not isinstance(default, bool):
            return default
    return value


def get_text(responses: Mapping[str, Any], key: str, default: str = "") -> str:
    """Get a trimmed text response, or ``default`` when missing or blank."""
    value = get_value(responses, key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def get_list(responses: Mapping[str, Any], key: str) -> list[Any]:
    """Get a list response, or an empty list."""
    value = get_value(responses, key)
    return list(value) if isinstance(value, list) else []


def has_value(responses: Mapping[str, Any], key: str) -> bool:
    """Check whether a key is present with a non-None value."""
    return get_value(responses, key) is not None


def has_text(responses: Mapping[str, Any], key: str) -> bool:
    """Check whether a key holds non-blank text."""
    return bool(get_text(responses, key))


def _is_upload(entry: Any) -> bool:
    return isinstance(entry, Mapping) and any(entry.get(marker) for marker in _FILE_MARKERS)


def get_file_count(responses: Mapping[str, Any], key: str) -> int:
    """Count entries under ``key`` that look like uploaded files."""
    return sum(1 for entry in get_list(responses, key) if _is_upload(entry))


def has_files(responses: Mapping[str, Any], key: str) -> bool:
    """Check whether a key holds at least one uploaded file."""
    return get_file_count(responses, key) > 0


def array_includes(responses: Mapping[str, Any], key: str, value: Any) -> bool:
    """Check whether a list response contains ``value``."""
    return value in get_list(responses, key)


def count_answered(responses: Mapping[str, Any]) -> int:
    """Count keys holding something other than None, blank text or an empty list."""
    if not isinstance(responses, Mapping):
        return 0
    answered = 0
    for value in responses.values():
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, (list, dict)) and not value:
            continue
        answered += 1
    return answered


def parse_date(value: Any, reference: datetime | None = None) -> datetime | None:
    """
    Parse a date-shaped response value.

    Accepts ``datetime``, ``date`` and ISO-8601 strings (a trailing ``Z`` is
    accepted). When ``reference`` is given, a naive result borrows the
    reference's timezone so the two can be compared.

    Returns:
        Parsed datetime, or None if the value cannot be interpreted
    """
    parsed: datetime | None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if reference is not None:
        if parsed.tzinfo is None and reference.tzinfo is not None:
            parsed = parsed.replace(tzinfo=reference.tzinfo)
        elif parsed.tzinfo is not None and reference.tzinfo is None:
            parsed = parsed.replace(tzinfo=None)
    return parsed


def calculate_due_date(base: datetime, days: int) -> datetime:
    """Return ``base`` shifted by ``days`` (negative values move earlier)."""
    return base + timedelta(days=days)
