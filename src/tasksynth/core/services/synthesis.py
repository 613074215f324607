"""
Synthesis service: clean API for task and todo generation.

Wraps core/synthesis/ into a service that any interface (CLI, HTTP layer,
background jobs) can call. The service holds no per-invocation state.

Usage:
    >>> from tasksynth.core.services.synthesis import SynthesisService
    >>> service = SynthesisService.from_config()
    >>> tasks = service.synthesize_tasks("Web Design", responses, context)
    >>> todos = service.synthesize_todos_sync("outbound_calling", responses, context)
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from tasksynth.core.config.env import load_layered_env
from tasksynth.core.config.loader import load_config
from tasksynth.core.config.models import SynthConfig
from tasksynth.core.items.models import (
    GeneratedItem,
    GenerationContext,
    TaskPreview,
    TodoSynthesis,
)
from tasksynth.core.rules.evaluator import sort_rules
from tasksynth.core.rules.models import Rule
from tasksynth.core.synthesis.engine import SynthesisEngine

# ============================================================================
# SynthesisService
# ============================================================================


class SynthesisService:
    """
    Service for turning onboarding responses into work items.

    Example:
        >>> service = SynthesisService.from_config(Path.cwd())
        >>> preview = service.preview_tasks("SaaS App", responses, context)
        >>> preview.stats.total
        9
    """

    def __init__(self, engine: SynthesisEngine) -> None:
        """
        Initialize service with an engine.

        Args:
            engine: Configured synthesis engine
        """
        self._engine = engine

    @classmethod
    def from_config(
        cls,
        project_dir: Path | None = None,
        config: SynthConfig | None = None,
    ) -> SynthesisService:
        """
        Create service from layered configuration.

        Loads .env files first so the AI key can come from them, then the
        JSON config layers.

        Args:
            project_dir: Directory holding .env and .tasksynth.json (defaults to cwd)
            config: Explicit configuration; skips config file loading when given

        Returns:
            Configured SynthesisService instance
        """
        load_layered_env(project_dir=project_dir)
        if config is None:
            config = load_config(project_dir)
        return cls(SynthesisEngine(config=config))

    @property
    def config(self) -> SynthConfig:
        """Configuration in effect."""
        return self._engine.config

    # ============================================================================
    # Task methods
    # ============================================================================

    def synthesize_tasks(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> list[GeneratedItem]:
        """
        Generate project tasks from rules.

        Raises:
            InvalidContextError: If the context is malformed
        """
        return self._engine.synthesize_tasks(project_type_label, responses, context)

    def preview_tasks(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> TaskPreview:
        """
        Generate project tasks with validation report and statistics.

        Raises:
            InvalidContextError: If the context is malformed
        """
        return self._engine.preview_tasks(project_type_label, responses, context)

    def list_rules(self, project_type_label: str) -> list[Rule]:
        """Rules selected for a project type, in evaluation order."""
        return sort_rules(self._engine.registry.for_project_type(project_type_label))

    def rule_set_names(self, project_type_label: str) -> list[str]:
        """Rule set names selected for a project type."""
        return self._engine.registry.rule_set_names(project_type_label)

    # ============================================================================
    # Todo methods
    # ============================================================================

    async def synthesize_todos(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> TodoSynthesis:
        """
        Generate admin and client todos (AI first, fallback on failure).

        Raises:
            InvalidContextError: If the context is malformed
        """
        return await self._engine.synthesize_todos(project_type_label, responses, context)

    def synthesize_todos_sync(
        self,
        project_type_label: str,
        responses: Mapping[str, Any] | None,
        context: GenerationContext | Mapping[str, Any],
    ) -> TodoSynthesis:
        """
        Blocking variant of synthesize_todos for synchronous callers.

        Must not be called from inside a running event loop.
        """
        return asyncio.run(self.synthesize_todos(project_type_label, responses, context))
