"""
Tests for condition evaluation and rule-based synthesis.
"""

import logging
from datetime import timedelta

from tasksynth.core.items.models import SourceType
from tasksynth.core.responses import flatten_responses
from tasksynth.core.rules import (
    Rule,
    apply_rule,
    evaluate_condition,
    get_default_registry,
    make_item,
    run_rules,
    sort_rules,
    synthesize_from_rules,
)


def _rule(rule_id, priority=0, condition=None, generate=None, title=None):
    return Rule(
        id=rule_id,
        name=f"Rule {rule_id}",
        description="",
        response_keys=("a", "b"),
        priority=priority,
        condition=condition or (lambda r: True),
        generate=generate or (lambda r, c: [make_item(title or rule_id, "", priority="medium")]),
    )


def _boom(*args):
    raise KeyError("boom")


def _rule_items(label, responses, context):
    rules = get_default_registry().for_project_type(label)
    return synthesize_from_rules(rules, flatten_responses(responses), context)


class TestSortRules:
    """Test priority ordering."""

    def test_descending(self):
        rules = [_rule("low", 1), _rule("high", 9), _rule("mid", 5)]
        assert [r.id for r in sort_rules(rules)] == ["high", "mid", "low"]

    def test_stable_for_equal_priority(self):
        """Test equal-priority rules keep their registry order."""
        rules = [_rule("a", 5), _rule("b", 7), _rule("c", 5), _rule("d", 7), _rule("e", 5)]
        assert [r.id for r in sort_rules(rules)] == ["b", "d", "a", "c", "e"]


class TestEvaluateCondition:
    """Test predicate isolation."""

    def test_true_and_false(self):
        assert evaluate_condition(_rule("t"), {}) is True
        assert evaluate_condition(_rule("f", condition=lambda r: False), {}) is False

    def test_truthy_result_coerced(self):
        assert evaluate_condition(_rule("t", condition=lambda r: "yes"), {}) is True

    def test_raising_predicate_is_false(self, caplog):
        """Test a predicate that raises counts as non-matching and is logged."""
        with caplog.at_level(logging.WARNING):
            assert evaluate_condition(_rule("bad", condition=_boom), {}) is False
        assert "bad" in caplog.text


class TestApplyRule:
    """Test applying a single rule."""

    def test_stamps_provenance(self, context):
        items = apply_rule(_rule("r1", priority=3), {}, context)
        assert len(items) == 1
        item = items[0]
        assert item.source_type == SourceType.RULE
        assert item.source_id == "session-123"
        assert item.source_metadata == {
            "ruleId": "r1",
            "ruleName": "Rule r1",
            "responseKeys": ["a", "b"],
            "timestamp": context.completion_timestamp.isoformat(),
        }

    def test_condition_false(self, context):
        assert apply_rule(_rule("r", condition=lambda r: False), {}, context) == []

    def test_raising_generator_isolated(self, context):
        assert apply_rule(_rule("r", generate=_boom), {}, context) == []


class TestRunRules:
    """Test the full rule pass."""

    def test_faulty_rule_does_not_abort_batch(self, context):
        rules = [_rule("ok1", 5), _rule("bad", 4, condition=_boom), _rule("ok2", 3)]
        run = run_rules(rules, {}, context)
        assert [i.title for i in run.items] == ["ok1", "ok2"]
        assert run.fired_rule_ids == ["ok1", "ok2"]

    def test_concatenates_in_rule_order(self, context):
        def two(r, c):
            return [make_item("x1", "", priority="low"), make_item("x2", "", priority="low")]

        rules = [_rule("y", 1), _rule("x", 2, generate=two)]
        items = synthesize_from_rules(rules, {}, context)
        assert [i.title for i in items] == ["x1", "x2", "y"]

    def test_no_deduplication(self, context):
        rules = [_rule("a", title="Same"), _rule("b", title="Same")]
        assert len(synthesize_from_rules(rules, {}, context)) == 2


class TestScenarios:
    """End-to-end rule scenarios on the built-in registry."""

    def test_logo_upload(self, context):
        """Uploaded logo yields a high-priority review item due in two days."""
        responses = {"step1": {"logo_upload": [{"url": "logo.png"}]}}
        items = _rule_items("web_design", responses, context)

        matches = [i for i in items if i.title == "Review and optimize logo files"]
        assert len(matches) == 1
        assert matches[0].priority == "high"
        assert matches[0].due_date == context.completion_timestamp + timedelta(days=2)

    def test_calendar_integration_requires_calendar(self, context):
        """A calendar item appears only when a calendar system is named."""
        with_calendar = {
            "step2": {"primary_goal": "appointment_setting", "calendar_system": "Calendly"}
        }
        items = _rule_items("outbound_calling", with_calendar, context)
        calendar_titles = [i.title for i in items if "calendar" in i.title.lower()]
        assert calendar_titles == ["Set up Calendly calendar integration"]

        without_calendar = {"step2": {"primary_goal": "appointment_setting"}}
        items = _rule_items("outbound_calling", without_calendar, context)
        assert not [i for i in items if "calendar" in i.title.lower()]
        assert "Define appointment qualification criteria" in [i.title for i in items]

    def test_empty_responses_fire_only_unconditional_rules(self, context):
        """Rules gated on a non-empty response map stay silent for {}."""
        titles = [i.title for i in _rule_items("web_design", {}, context)]
        assert titles == ["Create quality assurance checklist"]
        assert "Schedule project kickoff meeting" not in titles

    def test_empty_responses_software(self, context):
        titles = [i.title for i in _rule_items("SaaS App", {}, context)]
        assert "Set up testing framework" in titles
        assert "Create technical documentation" in titles
        assert "Create quality assurance checklist" in titles

    def test_deterministic(self, context, web_responses):
        first = _rule_items("web_design", web_responses, context)
        second = _rule_items("web_design", web_responses, context)
        assert [i.model_dump() for i in first] == [i.model_dump() for i in second]
