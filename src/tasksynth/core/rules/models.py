"""
Rule model for response-driven task generation.

A Rule pairs a pure predicate over the flattened response map with a pure
generator that turns the responses into work items. Rules are created once
at import time, are immutable, and are shared read-only by every invocation.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tasksynth.core.items.models import GeneratedItem, GenerationContext, ItemStatus

Responses = Mapping[str, Any]
Condition = Callable[[Responses], bool]
Generator = Callable[[Responses, GenerationContext], list[GeneratedItem]]


@dataclass(frozen=True)
class Rule:
    """A named, prioritized (condition, generator) pair.

    Attributes:
        id: Unique identifier within a registry
        name: Human-readable name
        description: What the rule produces
        response_keys: Response fields the rule reads (a single key is accepted)
        condition: Predicate deciding whether the rule fires
        generate: Produces the rule's items when it fires
        priority: Higher runs first; equal priorities keep registry order
    """

    id: str
    name: str
    description: str
    response_keys: tuple[str, ...]
    condition: Condition = field(repr=False, compare=False)
    generate: Generator = field(repr=False, compare=False)
    priority: int = 0

    def __post_init__(self) -> None:
        keys: str | Sequence[str] = self.response_keys
        if isinstance(keys, str):
            object.__setattr__(self, "response_keys", (keys,))
        else:
            object.__setattr__(self, "response_keys", tuple(keys))


def make_item(
    title: str,
    description: str,
    *,
    priority: str,
    due_date: datetime | None = None,
    category: str | None = None,
) -> GeneratedItem:
    """Build a rule item in the initial ``todo`` state.

    ``category`` is kept by the categorizer; items left without one are
    categorized from their text. Tagging ``setup``/``integration`` or
    ``content``/``review`` pairs lets dependency detection link them.
    """
    return GeneratedItem(
        title=title,
        description=description,
        status=ItemStatus.TODO.value,
        priority=priority,
        due_date=due_date,
        category=category,
    )


def bullets(lines: Sequence[str]) -> str:
    """Render lines as a dash-prefixed list."""
    return "\n".join(f"- {line}" for line in lines)
