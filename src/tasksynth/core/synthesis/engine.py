"""
Synthesis engine for tasksynth.

Composes the rule registry, the AI adapter, the fallback and the
post-processing pipeline behind two entry points:

- the task path (rules only, deterministic) for project task boards
- the todo path (AI first, fallback on any failure) for admin and client
  todo lists

Both entry points are total for a well-formed context. The only error
callers see is InvalidContextError.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from tasksynth.core.ai.adapter import AIGenerationAdapter
from tasksynth.core.ai.fallback import FallbackSynthesizer
from tasksynth.core.config.models import SynthConfig
from tasksynth.core.errors import ConfigurationAbsent, GenerationFailure, InvalidContextError
from tasksynth.core.items.models import (
    GeneratedItem,
    GenerationContext,
    TaskPreview,
    TodoSynthesis,
)
from tasksynth.core.pipeline.pipeline import PipelineResult, run_pipeline
from tasksynth.core.pipeline.stats import compute_stats, group_by_priority
from tasksynth.core.responses.accessor import flatten_responses
from tasksynth.core.rules.evaluator import RuleRun, run_rules
from tasksynth.core.rules.registry import RuleRegistry, get_default_registry

logger = logging.getLogger(__name__)


class TodoGenerator(Protocol):
    """Anything that can produce todos asynchronously (normally the AI adapter)."""

    async def generate(
        self,
        project_type_label: str,
        responses: Mapping[str, Any],
        context: GenerationContext,
    ) -> TodoSynthesis: ...


def ensure_context(context: GenerationContext | Mapping[str, Any]) -> GenerationContext:
    """
    Validate a generation context.

    Accepts a GenerationContext or its camelCase/snake_case mapping form.

    Raises:
        InvalidContextError: If the context is malformed or has a blank session id
    """
    if not isinstance(context, GenerationContext):
        try:
            context = GenerationContext.model_validate(context)
        except ValidationError as e:
            raise InvalidContextError(f"Invalid generation context: {e}") from e
    if not context.session_id.strip():
        raise InvalidContextError("Generation context has no session id")
    return context


class SynthesisEngine:
    """Engine that turns onboarding responses into tasks and todos.

    The registry, fallback and configuration are read-only after
    construction, so one engine may serve concurrent invocations.
    """

    def __init__(
        self,
        config: SynthConfig | None = None,
        registry: RuleRegistry | None = None,
        adapter: TodoGenerator | None = None,
        fallback: FallbackSynthesizer | None = None,
    ):
        """Initialize the engine.

        Args:
            config: Settings (defaults to SynthConfig())
            registry: Rule registry (defaults to the built-in rule sets)
            adapter: AI generator (defaults to AIGenerationAdapter over config.ai)
            fallback: Fallback generator
        """
        self.config = config or SynthConfig()
        self.registry = registry if registry is not None else get_default_registry()
        self.adapter: TodoGenerator = adapter or AIGenerationAdapter(self.config.ai)
        self.fallback = fallback or FallbackSynthesizer()

    # ------------------------------------------------------------------
    # Task path
    # ------------------------------------------------------------------

    def _run_rule_path(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext,
    ) -> tuple[RuleRun, PipelineResult, int]:
        flat = flatten_responses(responses)
        rules = self.registry.for_project_type(project_type_label)
        run = run_rules(rules, flat, context)
        result = run_pipeline(run.items, context.completion_timestamp)
        return run, result, len(rules)

    def synthesize_tasks(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> list[GeneratedItem]:
        """Generate project tasks from the rule registry.

        Deterministic: the same inputs always give the same output.

        Args:
            project_type_label: Free-text project type
            responses: Raw onboarding responses (nested by step or flat)
            context: Invocation context

        Returns:
            Post-processed items

        Raises:
            InvalidContextError: If the context is malformed
        """
        ctx = ensure_context(context)
        _, result, _ = self._run_rule_path(project_type_label, responses, ctx)
        return result.items

    def preview_tasks(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> TaskPreview:
        """Generate project tasks along with validation, stats and grouping."""
        ctx = ensure_context(context)
        run, result, available = self._run_rule_path(project_type_label, responses, ctx)
        rejected = self.config.pipeline.reject_invalid and not result.validation.valid
        return TaskPreview(
            items=result.items,
            validation=result.validation,
            stats=compute_stats(result.items),
            grouped_by_priority=group_by_priority(result.items),
            rule_sets=self.registry.rule_set_names(project_type_label),
            rules_available=available,
            rules_fired=len(run.fired_rule_ids),
            rejected=rejected,
        )

    # ------------------------------------------------------------------
    # Todo path
    # ------------------------------------------------------------------

    async def synthesize_todos(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> TodoSynthesis:
        """Generate admin and client todos.

        Tries the AI adapter once, bounded by ``config.ai.timeout_seconds``.
        Any GenerationFailure (including a timeout or missing credentials)
        is logged and replaced by the fallback result. Both lists then pass
        through the post-processing pipeline independently.

        Args:
            project_type_label: Free-text project type
            responses: Raw onboarding responses (nested by step or flat)
            context: Invocation context

        Returns:
            TodoSynthesis; each item's ``source_type`` tells which path produced it

        Raises:
            InvalidContextError: If the context is malformed
        """
        ctx = ensure_context(context)
        raw_responses: Mapping[str, Any] = responses if isinstance(responses, Mapping) else {}

        try:
            synthesis = await asyncio.wait_for(
                self.adapter.generate(project_type_label, raw_responses, ctx),
                timeout=self.config.ai.timeout_seconds,
            )
        except ConfigurationAbsent as e:
            logger.info("AI generation unavailable, using fallback: %s", e)
            synthesis = self._fallback(project_type_label, raw_responses, ctx)
        except asyncio.TimeoutError:
            logger.warning(
                "AI generation timed out after %ss, using fallback",
                self.config.ai.timeout_seconds,
            )
            synthesis = self._fallback(project_type_label, raw_responses, ctx)
        except GenerationFailure as e:
            logger.warning("AI generation failed, using fallback: %s", e)
            synthesis = self._fallback(project_type_label, raw_responses, ctx)

        admin = run_pipeline(synthesis.admin_todos, ctx.completion_timestamp)
        client = run_pipeline(synthesis.client_todos, ctx.completion_timestamp)
        return synthesis.model_copy(
            update={"admin_todos": admin.items, "client_todos": client.items}
        )

    def _fallback(
        self,
        project_type_label: str,
        responses: Mapping[str, Any],
        context: GenerationContext,
    ) -> TodoSynthesis:
        return self.fallback.generate(project_type_label, flatten_responses(responses), context)
