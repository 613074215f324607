"""
Tests for SynthesisService.
"""

import json
import logging
import os

import pytest

from tasksynth.core.config.models import AIConfig, SynthConfig
from tasksynth.core.items.models import SourceType
from tasksynth.core.services import SynthesisService


@pytest.fixture
def service(tmp_path):
    """Service with AI disabled so the todo path is deterministic."""
    return SynthesisService.from_config(
        tmp_path, config=SynthConfig(ai=AIConfig(enabled=False))
    )


class TestFromConfig:
    """Test service construction."""

    def test_reads_project_config(self, tmp_path):
        (tmp_path / ".tasksynth.json").write_text(json.dumps({"ai": {"model": "local"}}))
        service = SynthesisService.from_config(tmp_path)
        assert service.config.ai.model == "local"

    def test_explicit_config_wins(self, tmp_path):
        (tmp_path / ".tasksynth.json").write_text(json.dumps({"ai": {"model": "local"}}))
        service = SynthesisService.from_config(tmp_path, config=SynthConfig())
        assert service.config.ai.model == "gpt-4-turbo-preview"

    def test_loads_project_env(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("OPENAI_API_KEY=sk-from-dotenv\n")
        SynthesisService.from_config(tmp_path, config=SynthConfig())
        assert os.environ["OPENAI_API_KEY"] == "sk-from-dotenv"
        monkeypatch.delenv("OPENAI_API_KEY")


class TestTasks:
    """Test task methods."""

    def test_synthesize_tasks(self, service, context, web_responses):
        items = service.synthesize_tasks("web_design", web_responses, context)
        assert "Review and optimize logo files" in [i.title for i in items]

    def test_preview_tasks(self, service, context, web_responses):
        preview = service.preview_tasks("web_design", web_responses, context)
        assert preview.stats.total == len(preview.items) > 0

    def test_list_rules_in_evaluation_order(self, service):
        rules = service.list_rules("web_design")
        priorities = [r.priority for r in rules]
        assert priorities == sorted(priorities, reverse=True)
        assert rules[0].id == "web-design-logo-upload"

    def test_rule_set_names(self, service):
        assert service.rule_set_names("Voice AI") == ["voice_ai", "generic"]


class TestTodos:
    """Test todo methods."""

    @pytest.mark.asyncio
    async def test_synthesize_todos(self, service, context, caplog):
        with caplog.at_level(logging.INFO, logger="tasksynth.core.synthesis.engine"):
            result = await service.synthesize_todos("inbound_calling", {}, context)
        assert result.source_type == SourceType.FALLBACK
        assert "disabled" in caplog.text

    def test_synthesize_todos_sync(self, service, context, voice_responses):
        result = service.synthesize_todos_sync("outbound_calling", voice_responses, context)
        assert result.admin_todos
        assert result.client_todos[-1].title == "Clarify notes and special requests"
