"""
Priority ordering that respects dependencies.
"""

from collections.abc import Sequence

from tasksynth.core.items.models import GeneratedItem


def prioritize(items: Sequence[GeneratedItem]) -> list[GeneratedItem]:
    """
    Stable sort by priority rank (high, medium, low; missing counts as medium).

    An item is never placed ahead of an item it depends on: when the plain
    sort would do so, the item waits until its dependencies have been
    placed. Dependency indices are rewritten to the new positions, so every
    dependency still points at an earlier item. Items with equal rank keep
    their relative order.

    Args:
        items: Items whose dependencies point at earlier positions

    Returns:
        New, reordered list
    """
    count = len(items)
    pending = sorted(range(count), key=lambda i: items[i].priority_rank)
    placed: set[int] = set()
    order: list[int] = []

    while pending:
        for position, old in enumerate(pending):
            deps = [d for d in (items[old].dependencies or []) if 0 <= d < count and d != old]
            if all(d in placed for d in deps):
                order.append(old)
                placed.add(old)
                del pending[position]
                break
        else:
            # Only reachable with cyclic input; keep the remaining sort order
            order.extend(pending)
            break

    new_position = {old: new for new, old in enumerate(order)}

    result: list[GeneratedItem] = []
    for new, old in enumerate(order):
        item = items[old]
        if item.dependencies is None:
            result.append(item)
            continue
        remapped = sorted(
            new_position[d]
            for d in item.dependencies
            if d in new_position and new_position[d] < new
        )
        result.append(item.model_copy(update={"dependencies": remapped or None}))
    return result
