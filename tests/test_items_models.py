"""
Tests for generated item models.
"""

import pytest
from pydantic import ValidationError

from tasksynth.core.items.models import (
    GeneratedItem,
    GenerationContext,
    ItemPriority,
    SourceType,
    TodoSynthesis,
)


class TestGeneratedItem:
    """Test GeneratedItem behavior."""

    @pytest.mark.parametrize(
        "priority,rank",
        [("high", 1), ("medium", 2), ("low", 3), (None, 2), ("urgent", 2)],
    )
    def test_priority_rank(self, priority, rank):
        assert GeneratedItem(title="x", priority=priority).priority_rank == rank

    def test_enum_rank(self):
        assert ItemPriority.HIGH.rank < ItemPriority.MEDIUM.rank < ItemPriority.LOW.rank

    def test_normalized_title(self):
        assert GeneratedItem(title="  Launch Site ").normalized_title == "launch site"

    def test_camel_case_round_trip(self):
        item = GeneratedItem.model_validate(
            {
                "title": "Approve script",
                "estimatedMinutes": 30,
                "assignedTo": "client",
                "sourceType": "ai",
                "sourceMetadata": {"orderIndex": 0},
            }
        )
        assert item.estimated_minutes == 30
        assert item.source_type == SourceType.AI

        data = item.model_dump(by_alias=True, mode="json")
        assert data["estimatedMinutes"] == 30
        assert data["sourceType"] == "ai"
        assert data["dueDate"] is None

    def test_unknown_status_kept(self):
        """Out-of-range values survive so validation can report them."""
        assert GeneratedItem(title="x", status="blocked").status == "blocked"


class TestGenerationContext:
    """Test GenerationContext."""

    def test_frozen(self, context):
        with pytest.raises(ValidationError):
            context.session_id = "other"

    def test_requires_session_id(self, completed_at):
        with pytest.raises(ValidationError):
            GenerationContext(session_id="", completion_timestamp=completed_at)


class TestTodoSynthesis:
    """Test TodoSynthesis."""

    def test_all_items_order(self):
        result = TodoSynthesis(
            admin_todos=[GeneratedItem(title="a")],
            client_todos=[GeneratedItem(title="b")],
        )
        assert [t.title for t in result.all_items] == ["a", "b"]

    def test_defaults(self):
        result = TodoSynthesis()
        assert result.source_type is None
        assert result.analysis.estimated_setup_time == "2-3 weeks"

    def test_source_type_from_items(self):
        result = TodoSynthesis(
            client_todos=[GeneratedItem(title="b", source_type=SourceType.FALLBACK)]
        )
        assert result.source_type == SourceType.FALLBACK

    def test_path_only_visible_on_items(self):
        result = TodoSynthesis(admin_todos=[GeneratedItem(title="a", source_type="fallback")])
        data = result.model_dump(by_alias=True, mode="json")
        assert set(data) == {"adminTodos", "clientTodos", "analysis"}
        assert data["adminTodos"][0]["sourceType"] == "fallback"
