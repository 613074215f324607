"""
Declarative task generation rules.

Rules are grouped into per-project-type sets held by an immutable registry.
The evaluator applies a selection of rules to a flattened response map.
"""

from tasksynth.core.rules.evaluator import (
    RuleRun,
    apply_rule,
    evaluate_condition,
    run_rules,
    sort_rules,
    synthesize_from_rules,
)
from tasksynth.core.rules.models import Rule, make_item
from tasksynth.core.rules.registry import (
    GENERIC_RULE_SET,
    RULE_SET_KEYWORDS,
    RuleRegistry,
    get_default_registry,
    matches_keywords,
    normalize_project_type,
)

__all__ = [
    # Models
    "Rule",
    "make_item",
    # Registry
    "GENERIC_RULE_SET",
    "RULE_SET_KEYWORDS",
    "RuleRegistry",
    "get_default_registry",
    "matches_keywords",
    "normalize_project_type",
    # Evaluation
    "RuleRun",
    "apply_rule",
    "evaluate_condition",
    "run_rules",
    "sort_rules",
    "synthesize_from_rules",
]
