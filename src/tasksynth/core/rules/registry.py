"""
Rule registry keyed by project type.

Project type labels are free text ("Web Design", "outbound_calling",
"SaaS App"). A label is normalized (lower-cased, whitespace and hyphens
removed) and matched by substring against fixed keyword sets; very short
keywords such as ``ai`` must instead be a whole word. Every matching
set is selected, in registry order, and the generic set is always appended.
A label that matches nothing yields only the generic rules.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from functools import lru_cache

from tasksynth.core.errors import DuplicateRuleError
from tasksynth.core.rules.models import Rule

logger = logging.getLogger(__name__)

GENERIC_RULE_SET = "generic"

# Order matters: matching sets are concatenated in this order
RULE_SET_KEYWORDS: dict[str, tuple[str, ...]] = {
    "web_design": ("web", "website", "design"),
    "voice_ai": ("voice", "ai", "campaign", "call", "outbound", "inbound"),
    "software_dev": ("software", "app", "development", "saas"),
}

# Keywords this short only match a whole word of the label
WHOLE_WORD_MAX_LENGTH = 2


def normalize_project_type(label: str | None) -> str:
    """Lower-case a project type label and strip whitespace and hyphens."""
    if not label:
        return ""
    return re.sub(r"[\s\-]+", "", str(label).lower())


def _label_words(label: str | None) -> set[str]:
    if not label:
        return set()
    return set(re.split(r"[^a-z0-9]+", str(label).lower())) - {""}


def matches_keywords(label: str | None, keywords: Sequence[str]) -> bool:
    """
    Check whether any keyword occurs in the label.

    Keywords longer than WHOLE_WORD_MAX_LENGTH match as substrings of the
    normalized label. Shorter ones must be a whole word of the label, so
    ``ai`` matches "Voice AI" and "voice_ai" but not "email" or "retail".
    """
    normalized = normalize_project_type(label)
    words = _label_words(label)
    for keyword in keywords:
        if len(keyword) <= WHOLE_WORD_MAX_LENGTH:
            if keyword in words:
                return True
        elif keyword in normalized:
            return True
    return False


class RuleRegistry:
    """
    Immutable collection of rule sets.

    Example:
        >>> registry = get_default_registry()
        >>> registry.rule_set_names("Web Design")
        ['web_design', 'generic']
        >>> [r.id for r in registry.for_project_type("unknown")][:1]
        ['generic-kickoff']
    """

    def __init__(
        self,
        rule_sets: Mapping[str, Sequence[Rule]],
        keywords: Mapping[str, Sequence[str]] | None = None,
        generic_set: str = GENERIC_RULE_SET,
    ) -> None:
        """
        Build a registry and check rule id uniqueness.

        Args:
            rule_sets: Rule sets by name, including the generic set
            keywords: Keyword sets by rule set name (defaults to RULE_SET_KEYWORDS)
            generic_set: Name of the set appended to every selection

        Raises:
            DuplicateRuleError: If two rules share an id
        """
        self._rule_sets: dict[str, tuple[Rule, ...]] = {
            name: tuple(rules) for name, rules in rule_sets.items()
        }
        self._keywords: dict[str, tuple[str, ...]] = {
            name: tuple(words)
            for name, words in (keywords if keywords is not None else RULE_SET_KEYWORDS).items()
        }
        self._generic_set = generic_set

        self._by_id: dict[str, Rule] = {}
        for rules in self._rule_sets.values():
            for rule in rules:
                if rule.id in self._by_id:
                    raise DuplicateRuleError(rule.id)
                self._by_id[rule.id] = rule

    @property
    def rule_sets(self) -> dict[str, tuple[Rule, ...]]:
        """Copy of the rule sets by name."""
        return dict(self._rule_sets)

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, rule_id: str) -> Rule | None:
        """Look up a rule by id."""
        return self._by_id.get(rule_id)

    def rule_set_names(self, project_type_label: str | None) -> list[str]:
        """Names of the rule sets selected for a label, generic last."""
        names = [
            name
            for name, words in self._keywords.items()
            if name in self._rule_sets and matches_keywords(project_type_label, words)
        ]
        if self._generic_set in self._rule_sets:
            names.append(self._generic_set)
        return names

    def for_project_type(self, project_type_label: str | None) -> list[Rule]:
        """
        Get the rules for a project type label, in registry order.

        Args:
            project_type_label: Free-text project type

        Returns:
            Rules of every matching set followed by the generic rules
        """
        names = self.rule_set_names(project_type_label)
        logger.debug("Rule sets for project type %r: %s", project_type_label, names)
        rules: list[Rule] = []
        for name in names:
            rules.extend(self._rule_sets[name])
        return rules


@lru_cache(maxsize=1)
def get_default_registry() -> RuleRegistry:
    """Build the process-wide registry once."""
    from tasksynth.core.rules.generic import GENERIC_RULES
    from tasksynth.core.rules.software_dev import SOFTWARE_DEV_RULES
    from tasksynth.core.rules.voice_ai import VOICE_AI_RULES
    from tasksynth.core.rules.web_design import WEB_DESIGN_RULES

    return RuleRegistry(
        {
            "web_design": WEB_DESIGN_RULES,
            "voice_ai": VOICE_AI_RULES,
            "software_dev": SOFTWARE_DEV_RULES,
            GENERIC_RULE_SET: GENERIC_RULES,
        }
    )
