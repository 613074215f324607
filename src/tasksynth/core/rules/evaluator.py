"""
Condition evaluation and rule-based synthesis.

Rules are evaluated in priority order (descending, stable). Each predicate
and generator runs inside its own error boundary: a rule that raises is
treated as not matching and never aborts the batch. Matching rules' items
are stamped with their provenance and concatenated. No deduplication or
dependency inference happens here; that is the pipeline's job.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from tasksynth.core.items.models import GeneratedItem, GenerationContext, SourceType
from tasksynth.core.rules.models import Responses, Rule

logger = logging.getLogger(__name__)


@dataclass
class RuleRun:
    """Items produced by a rule pass and the rules that contributed items."""

    items: list[GeneratedItem] = field(default_factory=list)
    fired_rule_ids: list[str] = field(default_factory=list)


def sort_rules(rules: Sequence[Rule]) -> list[Rule]:
    """Sort rules by priority, highest first; ties keep their input order."""
    return sorted(rules, key=lambda rule: -rule.priority)


def evaluate_condition(rule: Rule, responses: Responses) -> bool:
    """
    Evaluate a rule's predicate, treating any exception as False.

    Args:
        rule: Rule to evaluate
        responses: Flattened response map

    Returns:
        True if the rule should fire
    """
    try:
        return bool(rule.condition(responses))
    except Exception as e:
        logger.warning("Condition for rule %s raised %s: %s", rule.id, type(e).__name__, e)
        return False


def _stamp(item: GeneratedItem, rule: Rule, context: GenerationContext) -> GeneratedItem:
    return item.model_copy(
        update={
            "source_type": SourceType.RULE,
            "source_id": context.session_id,
            "source_metadata": {
                "ruleId": rule.id,
                "ruleName": rule.name,
                "responseKeys": list(rule.response_keys),
                "timestamp": context.completion_timestamp.isoformat(),
            },
        }
    )


def apply_rule(
    rule: Rule, responses: Responses, context: GenerationContext
) -> list[GeneratedItem]:
    """
    Apply a single rule.

    Returns an empty list when the condition is false or the rule raises.
    """
    if not evaluate_condition(rule, responses):
        return []

    try:
        items = rule.generate(responses, context)
    except Exception as e:
        logger.warning("Generator for rule %s raised %s: %s", rule.id, type(e).__name__, e)
        return []

    return [_stamp(item, rule, context) for item in items]


def run_rules(
    rules: Sequence[Rule], responses: Responses, context: GenerationContext
) -> RuleRun:
    """
    Apply rules in priority order and collect their items.

    Args:
        rules: Rules to apply (any order)
        responses: Flattened response map
        context: Generation context

    Returns:
        RuleRun with the concatenated items and the ids of contributing rules
    """
    run = RuleRun()
    for rule in sort_rules(rules):
        items = apply_rule(rule, responses, context)
        if items:
            run.fired_rule_ids.append(rule.id)
            run.items.extend(items)

    logger.debug(
        "Rule pass: %d/%d rules fired, %d candidate items",
        len(run.fired_rule_ids),
        len(rules),
        len(run.items),
    )
    return run


def synthesize_from_rules(
    rules: Sequence[Rule], responses: Responses, context: GenerationContext
) -> list[GeneratedItem]:
    """Flat candidate list produced by the matching rules."""
    return run_rules(rules, responses, context).items
