"""
Tests for SynthesisEngine.

The AI adapter is replaced with AsyncMock stand-ins so both the AI path and
every fallback trigger can be exercised without a network.
"""

import asyncio
import json
import logging
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from tasksynth.core.config.models import AIConfig, PipelineConfig, SynthConfig
from tasksynth.core.errors import ConfigurationAbsent, GenerationFailure, InvalidContextError
from tasksynth.core.items.models import (
    GeneratedItem,
    SourceType,
    SynthesisAnalysis,
    TodoSynthesis,
)
from tasksynth.core.pipeline import validate_items
from tasksynth.core.rules import GENERIC_RULE_SET, Rule, RuleRegistry, make_item
from tasksynth.core.synthesis import SynthesisEngine, ensure_context


def _failing_adapter(exc: Exception) -> AsyncMock:
    adapter = AsyncMock()
    adapter.generate.side_effect = exc
    return adapter


def _ai_result(context) -> TodoSynthesis:
    def todo(title, category, priority, index, audience="admin"):
        return GeneratedItem(
            title=title,
            status="todo",
            priority=priority,
            category=category,
            source_type=SourceType.AI,
            source_id=context.session_id,
            source_metadata={"orderIndex": index, "audience": audience, "aiGenerated": True},
        )

    return TodoSynthesis(
        admin_todos=[
            todo("Connect CRM", "integration", "high", 0),
            todo("Install dialer", "setup", "low", 1),
            todo("Connect calendar", "integration", "high", 2),
            todo("connect crm", "integration", "high", 3),
        ],
        client_todos=[todo("Approve script", "review", "high", 0, "client")],
        analysis=SynthesisAnalysis(complexity="low"),
    )


class TestContext:
    """Test context validation."""

    def test_blank_session_id_rejected(self, context):
        bad = context.model_copy(update={"session_id": "   "})
        with pytest.raises(InvalidContextError):
            ensure_context(bad)

    def test_mapping_context_accepted(self, completed_at):
        ctx = ensure_context(
            {"sessionId": "s-1", "completionTimestamp": completed_at.isoformat()}
        )
        assert ctx.session_id == "s-1"
        assert ctx.completion_timestamp == completed_at

    @pytest.mark.parametrize(
        "data",
        [{}, {"sessionId": ""}, {"sessionId": "s", "completionTimestamp": "yesterday"}],
    )
    def test_malformed_mapping_rejected(self, data):
        with pytest.raises(InvalidContextError):
            ensure_context(data)

    def test_tasks_reject_bad_context(self):
        with pytest.raises(InvalidContextError):
            SynthesisEngine().synthesize_tasks("web_design", {}, {"sessionId": ""})

    @pytest.mark.asyncio
    async def test_todos_reject_bad_context(self):
        with pytest.raises(InvalidContextError):
            await SynthesisEngine().synthesize_todos("web_design", {}, {"sessionId": ""})


class TestSynthesizeTasks:
    """Test the rule-only task path."""

    def test_logo_scenario(self, context):
        responses = {"step1": {"logo_upload": [{"url": "logo.png"}]}}
        items = SynthesisEngine().synthesize_tasks("web_design", responses, context)
        logo = next(i for i in items if i.title == "Review and optimize logo files")
        assert logo.priority == "high"
        assert logo.due_date == context.completion_timestamp + timedelta(days=2)
        assert logo.category == "design"
        assert logo.source_type == SourceType.RULE

    def test_deterministic(self, context, web_responses):
        engine = SynthesisEngine()
        first = engine.synthesize_tasks("web_design", web_responses, context)
        second = SynthesisEngine().synthesize_tasks("web_design", web_responses, context)
        dump = [i.model_dump(by_alias=True, mode="json") for i in first]
        assert json.dumps(dump) == json.dumps(
            [i.model_dump(by_alias=True, mode="json") for i in second]
        )

    def test_output_satisfies_invariants(self, context, web_responses, voice_responses):
        engine = SynthesisEngine()
        for label, responses in (("web_design", web_responses), ("outbound", voice_responses)):
            items = engine.synthesize_tasks(label, responses, context)
            assert items
            assert validate_items(items, context.completion_timestamp).valid
            titles = [i.title.lower() for i in items]
            assert len(titles) == len(set(titles))

    def test_high_priority_first(self, context, web_responses):
        items = SynthesisEngine().synthesize_tasks("web_design", web_responses, context)
        ranks = [i.priority_rank for i in items]
        assert ranks == sorted(ranks)

    def test_rule_items_gain_dependencies(self, context):
        """Test tagged rule items are linked by the dependency heuristics."""
        responses = {
            "step1": {"campaign_goal": "Book demos", "voice_preference": "Warm"},
            "step2": {"crm_system": "HubSpot"},
        }
        items = SynthesisEngine().synthesize_tasks("outbound_calling", responses, context)
        titles = [i.title for i in items]

        draft = titles.index("Draft initial voice AI script")
        refine = titles.index("Test and refine script with AI voice")
        voice = titles.index("Configure Warm voice with Friendly tone")
        crm = titles.index("Integrate with HubSpot CRM")

        assert items[draft].category == "content"
        assert items[refine].dependencies == [draft]
        assert items[crm].dependencies == [voice]
        for index, item in enumerate(items):
            assert all(dep < index for dep in item.dependencies or [])

    def test_web_review_depends_on_moodboard(self, context, web_responses):
        items = SynthesisEngine().synthesize_tasks("web_design", web_responses, context)
        titles = [i.title for i in items]
        moodboard = titles.index("Create minimalist design moodboard")
        review = titles.index("Present design direction to client")
        assert items[review].dependencies == [moodboard]
        assert moodboard < review

    def test_duplicate_titles_across_rules(self, context):
        """Two rules yielding the kickoff item leave exactly one, from the first rule."""

        def kickoff(description):
            return lambda r, c: [make_item("Schedule project kickoff meeting", description,
                                           priority="high")]

        registry = RuleRegistry(
            {
                GENERIC_RULE_SET: [
                    Rule("first", "First", "", "k", lambda r: True, kickoff("first"), priority=5),
                    Rule("second", "Second", "", "k", lambda r: True, kickoff("second"), priority=1),
                ]
            },
            {},
        )
        items = SynthesisEngine(registry=registry).synthesize_tasks("any", {}, context)
        assert len(items) == 1
        assert items[0].description == "first"
        assert items[0].source_metadata["ruleId"] == "first"

    def test_empty_responses(self, context):
        items = SynthesisEngine().synthesize_tasks("web_design", None, context)
        assert [i.title for i in items] == ["Create quality assurance checklist"]


class TestPreviewTasks:
    """Test the preview variant of the task path."""

    def test_preview(self, context, web_responses):
        preview = SynthesisEngine().preview_tasks("web_design", web_responses, context)
        assert preview.rule_sets == ["web_design", GENERIC_RULE_SET]
        assert preview.stats.total == len(preview.items)
        assert preview.rules_fired <= preview.rules_available
        assert preview.validation.valid is True
        assert preview.rejected is False
        assert sum(len(v) for v in preview.grouped_by_priority.values()) == len(preview.items)

    def test_reject_invalid(self, context):
        registry = RuleRegistry(
            {
                GENERIC_RULE_SET: [
                    Rule(
                        "bad", "Bad", "", "k", lambda r: True,
                        lambda r, c: [make_item("x" * 250, "", priority="urgent")],
                    )
                ]
            },
            {},
        )
        config = SynthConfig(pipeline=PipelineConfig(reject_invalid=True))
        preview = SynthesisEngine(config=config, registry=registry).preview_tasks(
            "any", {}, context
        )
        assert preview.validation.valid is False
        assert preview.rejected is True
        assert len(preview.items) == 1


class TestSynthesizeTodos:
    """Test the AI-with-fallback todo path."""

    @pytest.mark.asyncio
    async def test_ai_result_post_processed(self, context):
        adapter = AsyncMock()
        adapter.generate.return_value = _ai_result(context)
        engine = SynthesisEngine(adapter=adapter)

        result = await engine.synthesize_todos("outbound_calling", {"step1": {"a": 1}}, context)

        adapter.generate.assert_awaited_once()
        args = adapter.generate.await_args.args
        assert args[1] == {"step1": {"a": 1}}
        assert result.source_type == SourceType.AI
        titles = [t.title for t in result.admin_todos]
        assert titles == ["Connect CRM", "Install dialer", "Connect calendar"]
        assert result.admin_todos[0].dependencies is None
        assert result.admin_todos[2].dependencies == [1]
        assert validate_items(result.admin_todos).valid
        assert result.client_todos[0].dependencies is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            GenerationFailure("bad json"),
            ConfigurationAbsent("OPENAI_API_KEY is not set"),
        ],
    )
    async def test_falls_back_on_failure(self, context, exc, caplog):
        engine = SynthesisEngine(adapter=_failing_adapter(exc))
        with caplog.at_level(logging.INFO, logger="tasksynth.core.synthesis.engine"):
            result = await engine.synthesize_todos("outbound_calling", {}, context)
        assert result.source_type == SourceType.FALLBACK
        assert str(exc) in caplog.text
        assert result.admin_todos
        assert all(t.source_type == SourceType.FALLBACK for t in result.all_items)
        assert result.analysis.estimated_setup_time

    @pytest.mark.asyncio
    async def test_always_failing_adapter(self, context, voice_responses):
        """A permanently failing adapter still yields non-empty admin todos."""
        engine = SynthesisEngine(adapter=_failing_adapter(GenerationFailure("down")))
        for label in ("outbound_calling", "inbound_calling", "web_design", ""):
            result = await engine.synthesize_todos(label, voice_responses, context)
            assert result.admin_todos
            assert result.analysis.complexity is not None
            assert validate_items(result.admin_todos, context.completion_timestamp).valid

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, context, caplog):
        async def slow(*args, **kwargs):
            await asyncio.sleep(5)

        adapter = AsyncMock()
        adapter.generate.side_effect = slow
        config = SynthConfig(ai=AIConfig(timeout_seconds=0.01))
        engine = SynthesisEngine(config=config, adapter=adapter)

        with caplog.at_level(logging.WARNING, logger="tasksynth.core.synthesis.engine"):
            result = await engine.synthesize_todos("voice_ai", {}, context)
        assert result.source_type == SourceType.FALLBACK
        assert "timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_no_key_uses_fallback_with_default_adapter(self, context, caplog):
        """Without OPENAI_API_KEY the real adapter defers to the fallback."""
        with caplog.at_level(logging.INFO, logger="tasksynth.core.synthesis.engine"):
            result = await SynthesisEngine().synthesize_todos("web_design", {}, context)
        assert result.source_type == SourceType.FALLBACK
        assert "OPENAI_API_KEY" in caplog.text

    @pytest.mark.asyncio
    async def test_failure_details_not_returned(self, context):
        """The failure text is logged, never part of the returned result."""
        failure = GenerationFailure("HTTP 401 from model API: secret-detail")
        engine = SynthesisEngine(adapter=_failing_adapter(failure))

        result = await engine.synthesize_todos("outbound_calling", {}, context)

        data = result.model_dump(by_alias=True, mode="json")
        assert set(data) == {"adminTodos", "clientTodos", "analysis"}
        assert "secret-detail" not in json.dumps(data)
        assert {t["sourceType"] for t in data["adminTodos"]} == {"fallback"}

    @pytest.mark.asyncio
    async def test_failures_logged(self, context, caplog):
        engine = SynthesisEngine(adapter=_failing_adapter(GenerationFailure("bad shape")))
        with caplog.at_level(logging.WARNING, logger="tasksynth.core.synthesis.engine"):
            await engine.synthesize_todos("web_design", {}, context)
        assert "bad shape" in caplog.text

    @pytest.mark.asyncio
    async def test_fallback_reads_nested_responses(self, context):
        engine = SynthesisEngine(adapter=_failing_adapter(GenerationFailure("x")))
        responses = {"step4": {"go_live_date": "2024-05-01"}}
        result = await engine.synthesize_todos("web_design", responses, context)
        assert "Confirm project timeline and milestones" in [t.title for t in result.admin_todos]
