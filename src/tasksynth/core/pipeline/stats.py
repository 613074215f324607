"""
Summary statistics for generated items.
"""

from collections import Counter
from collections.abc import Sequence

from tasksynth.core.items.models import GeneratedItem, ItemPriority, ItemStats, ItemStatus


def compute_stats(items: Sequence[GeneratedItem]) -> ItemStats:
    """
    Count items by status, priority and category.

    Every allowed status and priority appears in the result with a zero
    count when unused; categories appear only when used.
    """
    statuses = Counter(item.status for item in items)
    priorities = Counter(item.priority for item in items)
    categories = Counter(item.category for item in items if item.category)

    return ItemStats(
        total=len(items),
        by_status={status.value: statuses.get(status.value, 0) for status in ItemStatus},
        by_priority={
            priority.value: priorities.get(priority.value, 0)
            for priority in (ItemPriority.HIGH, ItemPriority.MEDIUM, ItemPriority.LOW)
        },
        by_category=dict(categories),
        with_due_date=sum(1 for item in items if item.due_date is not None),
        with_assignee=sum(1 for item in items if item.assigned_to),
        estimated_minutes_total=sum(item.estimated_minutes or 0 for item in items),
    )


def group_by_priority(items: Sequence[GeneratedItem]) -> dict[str, list[GeneratedItem]]:
    """Group items by priority; a missing priority counts as medium."""
    groups: dict[str, list[GeneratedItem]] = {}
    for item in items:
        groups.setdefault(item.priority or ItemPriority.MEDIUM.value, []).append(item)
    return groups
