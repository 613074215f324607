"""
Category-based dependency detection.

There is no user-supplied dependency graph. Dependencies are inferred from
categories with two fixed heuristics:

- an ``integration`` item depends on the nearest preceding ``setup`` item
- a ``review`` item depends on the nearest preceding ``content`` item that
  came from the same rule (items without a rule id form one group)

Dependencies are sibling batch indices and always point backwards.
"""

from collections.abc import Sequence

from tasksynth.core.items.models import GeneratedItem

# category -> category it depends on, and whether the match must share a rule
DEPENDENCY_HEURISTICS: dict[str, tuple[str, bool]] = {
    "integration": ("setup", False),
    "review": ("content", True),
}


def _category(item: GeneratedItem) -> str:
    return (item.category or "").strip().lower()


def _rule_id(item: GeneratedItem) -> object:
    return item.source_metadata.get("ruleId")


def _nearest_preceding(
    items: Sequence[GeneratedItem], index: int, category: str, same_rule: bool
) -> int | None:
    rule_id = _rule_id(items[index])
    for candidate in range(index - 1, -1, -1):
        other = items[candidate]
        if _category(other) != category:
            continue
        if same_rule and _rule_id(other) != rule_id:
            continue
        return candidate
    return None


def detect_dependencies(items: Sequence[GeneratedItem]) -> list[GeneratedItem]:
    """
    Annotate items with inferred dependencies.

    Args:
        items: Deduplicated items, in batch order

    Returns:
        New list; items with a qualifying predecessor get ``dependencies``
        extended with its index, others are returned unchanged
    """
    result: list[GeneratedItem] = []
    for index, item in enumerate(items):
        heuristic = DEPENDENCY_HEURISTICS.get(_category(item))
        if heuristic is None:
            result.append(item)
            continue

        target, same_rule = heuristic
        found = _nearest_preceding(items, index, target, same_rule)
        if found is None:
            result.append(item)
            continue

        existing = [d for d in (item.dependencies or []) if 0 <= d < index]
        if found not in existing:
            existing.append(found)
        result.append(item.model_copy(update={"dependencies": sorted(existing)}))
    return result
