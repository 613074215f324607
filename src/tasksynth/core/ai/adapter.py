"""
AI generation adapter for admin and client todo lists.

Talks to an OpenAI-compatible chat completions endpoint over httpx. The
adapter makes exactly one request per call and never retries: any transport
error, non-2xx status, unparsable body or payload of the wrong shape is
raised as GenerationFailure so the caller can decide what to do next.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tasksynth.core.ai.prompts import SYSTEM_MESSAGE, build_todo_prompt
from tasksynth.core.config.models import AIConfig
from tasksynth.core.errors import ConfigurationAbsent, GenerationFailure
from tasksynth.core.items.models import (
    Complexity,
    GeneratedItem,
    GenerationContext,
    ItemStatus,
    SourceType,
    SynthesisAnalysis,
    TodoAudience,
    TodoSynthesis,
)
from tasksynth.core.pipeline.categorize import categorize_todo, estimate_duration

logger = logging.getLogger(__name__)


# ==============================================================================
# Raw response shape
# ==============================================================================


class RawTodo(BaseModel):
    """A todo exactly as the model returned it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    description: str = ""
    category: str | None = None
    priority: str | None = None
    estimated_minutes: int | None = Field(default=None, alias="estimatedMinutes")


class RawAnalysis(BaseModel):
    """The analysis block exactly as the model returned it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    complexity: Complexity
    estimated_setup_time: str = Field(default="", alias="estimatedSetupTime")
    critical_issues: list[str] = Field(default_factory=list, alias="criticalIssues")
    recommendations: list[str] = Field(default_factory=list)


class RawTodoResponse(BaseModel):
    """Top-level JSON object the model must return. All keys are required."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    admin_todos: list[RawTodo] = Field(..., alias="adminTodos")
    client_todos: list[RawTodo] = Field(..., alias="clientTodos")
    analysis: RawAnalysis


# ==============================================================================
# Adapter
# ==============================================================================


class AIGenerationAdapter:
    """
    Generates todo lists with a language model.

    Example:
        >>> adapter = AIGenerationAdapter(AIConfig(model="gpt-4o-mini"))
        >>> result = await adapter.generate("outbound_calling", responses, context)
        >>> result.admin_todos[0].source_type
        <SourceType.AI: 'ai'>
    """

    def __init__(
        self,
        config: AIConfig | None = None,
        client: httpx.AsyncClient | None = None,
        api_key: str | None = None,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            config: AI settings (defaults to AIConfig())
            client: Shared HTTP client; a short-lived one is created per call if omitted
            api_key: Explicit key; otherwise read from ``config.api_key_env``
        """
        self.config = config or AIConfig()
        self._client = client
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        """The API key in use, or None when not configured."""
        if self._api_key:
            return self._api_key
        return os.environ.get(self.config.api_key_env) or None

    @property
    def is_configured(self) -> bool:
        """Whether a call would be attempted at all."""
        return self.config.enabled and self.api_key is not None

    async def generate(
        self,
        project_type_label: str,
        responses: Mapping[str, Any],
        context: GenerationContext,
    ) -> TodoSynthesis:
        """
        Generate admin and client todos plus analysis.

        Args:
            project_type_label: Free-text project type
            responses: Onboarding responses as submitted
            context: Invocation context

        Returns:
            TodoSynthesis with every item stamped ``source_type="ai"``

        Raises:
            ConfigurationAbsent: If AI generation is disabled or no key is set
            GenerationFailure: If the call fails or the reply is unusable
        """
        if not self.config.enabled:
            raise ConfigurationAbsent("AI generation is disabled in configuration")
        api_key = self.api_key
        if api_key is None:
            raise ConfigurationAbsent(f"{self.config.api_key_env} is not set")

        content = await self._complete(api_key, build_todo_prompt(project_type_label, responses))
        raw = parse_todo_response(content)

        logger.debug(
            "Model returned %d admin and %d client todos",
            len(raw.admin_todos),
            len(raw.client_todos),
        )
        return TodoSynthesis(
            admin_todos=_map_todos(raw.admin_todos, TodoAudience.ADMIN, context),
            client_todos=_map_todos(raw.client_todos, TodoAudience.CLIENT, context),
            analysis=SynthesisAnalysis(
                complexity=raw.analysis.complexity,
                estimated_setup_time=raw.analysis.estimated_setup_time.strip() or "2-3 weeks",
                critical_issues=raw.analysis.critical_issues,
                recommendations=raw.analysis.recommendations,
            ),
        )

    async def _complete(self, api_key: str, prompt: str) -> str:
        url = f"{self.config.base_url}/chat/completions"
        body = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        headers = {"Authorization": f"Bearer {api_key}"}

        try:
            if self._client is not None:
                response = await self._client.post(url, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.post(url, json=body, headers=headers)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise GenerationFailure(f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise GenerationFailure(f"HTTP {e.response.status_code} from model API") from e
        except httpx.RequestError as e:
            raise GenerationFailure(f"Network error: {e}") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationFailure(f"Unexpected completion envelope: {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise GenerationFailure("No response content from model")
        return content


def parse_todo_response(content: str) -> RawTodoResponse:
    """
    Strictly parse the model's reply.

    The reply must be a bare JSON object; fenced or prefixed output is
    rejected rather than repaired.

    Raises:
        GenerationFailure: On invalid JSON or a missing or malformed key
    """
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise GenerationFailure(f"Model reply is not valid JSON: {e}") from e

    try:
        return RawTodoResponse.model_validate(payload)
    except ValidationError as e:
        raise GenerationFailure(f"Model reply has the wrong shape: {e}") from e


def _map_todos(
    raw_todos: list[RawTodo],
    audience: TodoAudience,
    context: GenerationContext,
) -> list[GeneratedItem]:
    items: list[GeneratedItem] = []
    for index, raw in enumerate(raw_todos):
        title = raw.title.strip()
        category = (raw.category or "").strip().lower() or categorize_todo(title, raw.description)
        estimate = raw.estimated_minutes
        if estimate is None:
            estimate = estimate_duration(title, raw.description, category)
        items.append(
            GeneratedItem(
                title=title,
                description=raw.description,
                status=ItemStatus.TODO.value,
                priority=raw.priority.strip().lower() if raw.priority else None,
                category=category,
                estimated_minutes=estimate,
                source_type=SourceType.AI,
                source_id=context.session_id,
                source_metadata={
                    "orderIndex": index,
                    "audience": audience.value,
                    "aiGenerated": True,
                },
            )
        )
    return items
