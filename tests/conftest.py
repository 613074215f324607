"""
Pytest configuration and shared fixtures.

Provides generation contexts, sample onboarding responses, item factories
and an isolated configuration environment for the test suite.
"""

from datetime import datetime, timezone
from typing import Any

import pytest

from tasksynth.core.config import clear_cache
from tasksynth.core.items.models import GeneratedItem, GenerationContext

COMPLETED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """
    Keep tests away from real credentials and user configuration.

    Removes AI keys and TASKSYNTH_* overrides, points XDG_CONFIG_HOME at a
    temporary directory and clears the config cache before and after.
    """
    for var in (
        "OPENAI_API_KEY",
        "TASKSYNTH_AI_ENABLED",
        "TASKSYNTH_AI_MODEL",
        "TASKSYNTH_AI_BASE_URL",
        "TASKSYNTH_AI_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Context Fixtures
# ==============================================================================


@pytest.fixture
def completed_at():
    """Fixed questionnaire completion timestamp."""
    return COMPLETED_AT


@pytest.fixture
def context():
    """Provide a well-formed generation context."""
    return GenerationContext(
        project_id="proj-1",
        project_name="Acme Relaunch",
        project_type_label="web_design",
        organization_id="org-1",
        session_id="session-123",
        completion_timestamp=COMPLETED_AT,
    )


# ==============================================================================
# Response Fixtures
# ==============================================================================


@pytest.fixture
def web_responses() -> dict[str, Any]:
    """Nested responses for a website project."""
    return {
        "step1": {
            "logo_upload": [{"url": "logo.png", "name": "logo.png"}],
            "design_style": "minimalist",
        },
        "step2": {
            "website_goal": "Generate leads",
            "target_audience": "Small business owners",
            "required_pages": ["Home", "About", "Contact"],
        },
        "step3": {
            "hosting": "Vercel",
            "domain_name": "acme.com",
            "budget": "$10k",
        },
    }


@pytest.fixture
def voice_responses() -> dict[str, Any]:
    """Nested responses for an outbound calling campaign."""
    return {
        "step1": {
            "campaign_goal": "Book demos",
            "target_audience": "Dental clinics",
        },
        "step2": {
            "primary_goal": "appointment_setting",
            "calendar_system": "Calendly",
            "crm_system": "HubSpot",
        },
        "step3": {"additional_notes": "Avoid calling before 9am"},
    }


# ==============================================================================
# Item Fixtures
# ==============================================================================


@pytest.fixture
def make_item():
    """Factory for GeneratedItem instances with sensible defaults."""

    def _make(title: str = "Item", **overrides: Any) -> GeneratedItem:
        data: dict[str, Any] = {
            "title": title,
            "description": "",
            "status": "todo",
            "priority": "medium",
        }
        data.update(overrides)
        return GeneratedItem(**data)

    return _make
