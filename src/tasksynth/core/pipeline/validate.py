"""
Validation of generated items.

Validation detects problems and reports them; it never mutates or drops
items. Callers decide whether to reject, warn, or persist as-is.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from tasksynth.core.items.models import (
    TITLE_MAX_LENGTH,
    GeneratedItem,
    ItemPriority,
    ItemStatus,
    ValidationReport,
)

logger = logging.getLogger(__name__)

_STATUSES = {status.value for status in ItemStatus}
_PRIORITIES = {priority.value for priority in ItemPriority}


def _aligned(due: datetime, reference: datetime) -> datetime:
    if due.tzinfo is None and reference.tzinfo is not None:
        return due.replace(tzinfo=reference.tzinfo)
    if due.tzinfo is not None and reference.tzinfo is None:
        return due.replace(tzinfo=None)
    return due


def validate_items(
    items: Sequence[GeneratedItem], completion_timestamp: datetime | None = None
) -> ValidationReport:
    """
    Check items against the item invariants.

    Checks, per item (numbered from 1 in messages):
    - title is non-blank and at most 200 characters
    - due date is not before the completion timestamp
    - status and priority, when set, are allowed values
    - every dependency points at an earlier item in the same batch

    Args:
        items: Items to check
        completion_timestamp: Questionnaire completion time (skips the due date
            check when None)

    Returns:
        ValidationReport with one message per finding
    """
    errors: list[str] = []

    for index, item in enumerate(items):
        label = f"Item {index + 1}"

        if not item.title or not item.title.strip():
            errors.append(f"{label}: Title is required")
        elif len(item.title) > TITLE_MAX_LENGTH:
            errors.append(f"{label}: Title too long (max {TITLE_MAX_LENGTH} characters)")

        if item.due_date is not None and completion_timestamp is not None:
            if _aligned(item.due_date, completion_timestamp) < completion_timestamp:
                errors.append(f"{label}: Due date is before the completion timestamp")

        if item.status is not None and item.status not in _STATUSES:
            errors.append(f"{label}: Invalid status '{item.status}'")

        if item.priority is not None and item.priority not in _PRIORITIES:
            errors.append(f"{label}: Invalid priority '{item.priority}'")

        for dependency in item.dependencies or []:
            if not 0 <= dependency < index:
                errors.append(
                    f"{label}: Dependency {dependency} does not reference an earlier item"
                )

    if errors:
        logger.info("Validation found %d issue(s) in %d items", len(errors), len(items))

    return ValidationReport(valid=not errors, errors=errors)
