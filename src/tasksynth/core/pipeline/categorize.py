"""
Keyword categorization and effort estimation.

Two vocabularies exist:

- the work taxonomy (design, development, content, marketing, other) that
  the pipeline assigns to uncategorized items
- the todo vocabulary (compliance, integration, content, setup, review,
  technical, planning) that the AI path asks the model to use, and that
  ``categorize_todo`` reproduces when the model leaves a todo uncategorized

Keywords are plain substrings of the lower-cased title and description, so
``design`` matches "redesign" and ``ui`` also matches "build".
"""

from collections.abc import Sequence

from tasksynth.core.items.models import GeneratedItem

OTHER_CATEGORY = "other"

# Checked in order; the first category with a matching keyword wins
TAXONOMY: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("design", ("design", "logo", "brand", "ui", "ux", "moodboard", "wireframe")),
    ("development", ("develop", "code", "implement", "integrat", "api", "database")),
    ("content", ("content", "copy", "write", "writing", "text", "script")),
    ("marketing", ("market", "seo", "analytics", "campaign", "lead")),
)

TODO_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("compliance", ("compliance", "legal", "hipaa", "gdpr", "tcpa", "dnc")),
    ("integration", ("integrat", "api", "connect", "webhook")),
    ("content", ("content", "copy", "script", "write")),
    ("setup", ("setup", "set up", "configur", "install")),
    ("review", ("review", "approv", "check")),
    ("technical", ("technical", "code", "develop")),
)
TODO_DEFAULT_CATEGORY = "planning"

# Base effort per todo category, in minutes
CATEGORY_ESTIMATES: dict[str, int] = {
    "setup": 30,
    "compliance": 45,
    "content": 60,
    "integration": 90,
    "review": 20,
    "technical": 120,
    "planning": 30,
}
DEFAULT_ESTIMATE = 30


def _text(title: str, description: str | None) -> str:
    return f"{title} {description or ''}".lower()


def _first_match(
    text: str, table: tuple[tuple[str, tuple[str, ...]], ...], default: str
) -> str:
    for category, keywords in table:
        if any(keyword in text for keyword in keywords):
            return category
    return default


def categorize_text(title: str, description: str | None = "") -> str:
    """Assign a work taxonomy category from title and description."""
    return _first_match(_text(title, description), TAXONOMY, OTHER_CATEGORY)


def categorize_todo(title: str, description: str | None = "") -> str:
    """Assign a todo category from title and description."""
    return _first_match(_text(title, description), TODO_CATEGORIES, TODO_DEFAULT_CATEGORY)


def estimate_duration(title: str, description: str | None, category: str | None) -> int:
    """
    Estimate effort in minutes for a todo.

    Starts from the category's base estimate and scales it by 1.5 for
    complexity keywords (complex, advanced, custom) and by 0.7 for
    simplicity keywords (simple, basic, quick).
    """
    estimate = float(CATEGORY_ESTIMATES.get((category or "").lower(), DEFAULT_ESTIMATE))
    text = _text(title, description)
    if any(word in text for word in ("complex", "advanced", "custom")):
        estimate *= 1.5
    if any(word in text for word in ("simple", "basic", "quick")):
        estimate *= 0.7
    return round(estimate)


def categorize(items: Sequence[GeneratedItem]) -> list[GeneratedItem]:
    """
    Fill in categories for items that have none.

    Items that already carry a category keep it, lower-cased and trimmed.

    Args:
        items: Items in batch order

    Returns:
        New list in the same order
    """
    result: list[GeneratedItem] = []
    for item in items:
        current = (item.category or "").strip().lower()
        category = current or categorize_text(item.title, item.description)
        if category == item.category:
            result.append(item)
        else:
            result.append(item.model_copy(update={"category": category}))
    return result


def group_by_category(items: Sequence[GeneratedItem]) -> dict[str, list[GeneratedItem]]:
    """
    Group items by work taxonomy.

    Every taxonomy category is present in the result, possibly empty.
    Items are classified from their text, ignoring any stored category.
    """
    groups: dict[str, list[GeneratedItem]] = {name: [] for name, _ in TAXONOMY}
    groups[OTHER_CATEGORY] = []
    for item in items:
        groups[categorize_text(item.title, item.description)].append(item)
    return groups
