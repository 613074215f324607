"""
Title-based deduplication.
"""

from collections.abc import Sequence

from tasksynth.core.items.models import GeneratedItem


def deduplicate(items: Sequence[GeneratedItem]) -> list[GeneratedItem]:
    """
    Drop items whose normalized title was already seen.

    The first occurrence wins and keeps its description, due date and other
    fields. Kept titles are trimmed. Any dependency indices already present
    are remapped to the shortened batch; references to dropped items are
    removed. Running this twice is a no-op the second time.

    Args:
        items: Candidate items

    Returns:
        New list of items; inputs are not modified
    """
    seen: set[str] = set()
    kept: list[tuple[int, GeneratedItem]] = []
    for index, item in enumerate(items):
        key = item.normalized_title
        if key in seen:
            continue
        seen.add(key)
        kept.append((index, item))

    new_index = {old: new for new, (old, _) in enumerate(kept)}

    result: list[GeneratedItem] = []
    for old, item in kept:
        update: dict[str, object] = {}
        if item.title != item.title.strip():
            update["title"] = item.title.strip()
        if item.dependencies is not None:
            remapped = [new_index[d] for d in item.dependencies if d in new_index]
            update["dependencies"] = remapped or None
        result.append(item.model_copy(update=update) if update else item)
    return result
