"""
Tests for the rule registry and project type selection.
"""

import pytest

from tasksynth.core.errors import DuplicateRuleError
from tasksynth.core.rules import (
    GENERIC_RULE_SET,
    Rule,
    RuleRegistry,
    get_default_registry,
    make_item,
    matches_keywords,
    normalize_project_type,
)


def _rule(rule_id: str, priority: int = 0) -> Rule:
    return Rule(
        id=rule_id,
        name=rule_id,
        description="",
        response_keys="key",
        priority=priority,
        condition=lambda r: True,
        generate=lambda r, c: [make_item(rule_id, "", priority="medium")],
    )


class TestNormalization:
    """Test project type label normalization."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Web Design", "webdesign"),
            ("outbound_calling", "outbound_calling"),
            ("SaaS-App", "saasapp"),
            ("  Voice  AI ", "voiceai"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, label, expected):
        assert normalize_project_type(label) == expected

    def test_matches_keywords(self):
        assert matches_keywords("Web-Site Redesign", ("website",)) is True
        assert matches_keywords("Bookkeeping", ("web", "saas")) is False

    @pytest.mark.parametrize("label", ["Voice AI", "voice_ai", "AI calling", "ai-agent"])
    def test_short_keyword_matches_whole_word(self, label):
        assert matches_keywords(label, ("ai",)) is True

    @pytest.mark.parametrize("label", ["Email Marketing", "retail", "maintenance", "Training"])
    def test_short_keyword_ignored_inside_words(self, label):
        assert matches_keywords(label, ("ai",)) is False
        assert "voice_ai" not in get_default_registry().rule_set_names(label)


class TestDefaultRegistry:
    """Test rule set selection on the built-in registry."""

    @pytest.mark.parametrize(
        "label,sets",
        [
            ("web_design", ["web_design", GENERIC_RULE_SET]),
            ("Website", ["web_design", GENERIC_RULE_SET]),
            ("outbound_calling", ["voice_ai", GENERIC_RULE_SET]),
            ("Voice AI Campaign", ["voice_ai", GENERIC_RULE_SET]),
            ("SaaS App", ["software_dev", GENERIC_RULE_SET]),
            ("bookkeeping", [GENERIC_RULE_SET]),
            ("", [GENERIC_RULE_SET]),
        ],
    )
    def test_rule_set_names(self, label, sets):
        assert get_default_registry().rule_set_names(label) == sets

    def test_generic_always_appended(self):
        """Test the generic rules close every selection."""
        registry = get_default_registry()
        generic_ids = [r.id for r in registry.rule_sets[GENERIC_RULE_SET]]
        for label in ("web_design", "outbound_calling", "SaaS App", "unknown"):
            ids = [r.id for r in registry.for_project_type(label)]
            assert ids[-len(generic_ids):] == generic_ids

    def test_unmatched_label_yields_generic_only(self):
        registry = get_default_registry()
        rules = registry.for_project_type("interior decorating")
        assert {r.id for r in rules} == {r.id for r in registry.rule_sets[GENERIC_RULE_SET]}

    def test_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()

    def test_rule_ids_unique(self):
        registry = get_default_registry()
        total = sum(len(rules) for rules in registry.rule_sets.values())
        assert len(registry) == total

    def test_get(self):
        rule = get_default_registry().get("web-design-logo-upload")
        assert rule is not None
        assert rule.priority == 10
        assert get_default_registry().get("missing") is None


class TestCustomRegistry:
    """Test building registries from custom rule sets."""

    def test_duplicate_ids_rejected(self):
        """Test the same rule id in two sets is rejected."""
        with pytest.raises(DuplicateRuleError) as exc_info:
            RuleRegistry({"a": [_rule("dup")], GENERIC_RULE_SET: [_rule("dup")]}, {"a": ("a",)})
        assert exc_info.value.rule_id == "dup"
        assert "dup" in str(exc_info.value)

    def test_response_keys_string_normalized(self):
        assert _rule("one").response_keys == ("key",)

    def test_keyword_order_defines_set_order(self):
        registry = RuleRegistry(
            {
                "first": [_rule("f")],
                "second": [_rule("s")],
                GENERIC_RULE_SET: [_rule("g")],
            },
            {"second": ("beta",), "first": ("alpha",)},
        )
        assert registry.rule_set_names("alpha beta") == ["second", "first", GENERIC_RULE_SET]
        assert [r.id for r in registry.for_project_type("alphabeta")] == ["s", "f", "g"]
