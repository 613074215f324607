"""
Data models for generated work items.

Defines the GeneratedItem contract shared by the rule path, the AI path and
the fallback path, together with the per-invocation GenerationContext and the
result types returned to callers.

External callers exchange these models as camelCase JSON; dump them with
``model_dump(by_alias=True, mode="json")``.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TITLE_MAX_LENGTH = 200


class ItemStatus(str, Enum):
    """Allowed workflow states for a generated item."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ItemPriority(str, Enum):
    """Allowed priority levels for a generated item."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort rank (lower sorts first)."""
        return {
            ItemPriority.HIGH: 1,
            ItemPriority.MEDIUM: 2,
            ItemPriority.LOW: 3,
        }[self]


class SourceType(str, Enum):
    """Which generator produced an item."""

    RULE = "rule"
    AI = "ai"
    FALLBACK = "fallback"


class Complexity(str, Enum):
    """Overall project complexity reported in an analysis block."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TodoAudience(str, Enum):
    """Who is expected to complete a todo."""

    ADMIN = "admin"
    CLIENT = "client"


class GeneratedItem(BaseModel):
    """A single actionable work item.

    Items are transient values owned by the caller. Durable identity and
    storage timestamps are assigned by the persistence layer, never here.

    ``status`` and ``priority`` are kept as plain strings so that values
    outside their enums survive until the pipeline's validate step reports
    them.

    Example:
        >>> item = GeneratedItem(
        ...     title="Review and optimize logo files",
        ...     description="Check resolution and formats",
        ...     status="todo",
        ...     priority="high",
        ... )
        >>> item.priority_rank
        1
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
    )

    title: str = Field(..., description="Short actionable title (1-200 chars)")
    description: str = Field(default="", description="Detailed explanation")
    status: str | None = Field(default=None, description="todo, in_progress or done")
    priority: str | None = Field(default=None, description="low, medium or high")
    category: str | None = Field(default=None, description="Work category")
    estimated_minutes: int | None = Field(
        default=None,
        alias="estimatedMinutes",
        description="Effort estimate in minutes",
    )
    due_date: datetime | None = Field(default=None, alias="dueDate")
    assigned_to: str | None = Field(default=None, alias="assignedTo")
    dependencies: list[int] | None = Field(
        default=None,
        description="Indices of earlier items in the same batch",
    )
    source_type: SourceType = Field(default=SourceType.RULE, alias="sourceType")
    source_id: str = Field(default="", alias="sourceId")
    source_metadata: dict[str, Any] = Field(default_factory=dict, alias="sourceMetadata")

    @property
    def priority_rank(self) -> int:
        """Sort rank of the priority; missing or unknown values rank as medium."""
        try:
            return ItemPriority(self.priority).rank if self.priority else 2
        except ValueError:
            return 2

    @property
    def normalized_title(self) -> str:
        """Title key used for deduplication."""
        return self.title.strip().lower()


class GenerationContext(BaseModel):
    """Per-invocation context supplied by the caller. Never mutated."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    project_id: str = Field(default="", alias="projectId")
    project_name: str = Field(default="", alias="projectName")
    project_type_label: str = Field(default="", alias="projectTypeLabel")
    organization_id: str = Field(default="", alias="organizationId")
    session_id: str = Field(..., min_length=1, alias="sessionId")
    completion_timestamp: datetime = Field(..., alias="completionTimestamp")


class SynthesisAnalysis(BaseModel):
    """Project-level analysis attached to todo results."""

    model_config = ConfigDict(populate_by_name=True)

    complexity: Complexity = Complexity.MEDIUM
    estimated_setup_time: str = Field(default="2-3 weeks", alias="estimatedSetupTime")
    critical_issues: list[str] = Field(default_factory=list, alias="criticalIssues")
    recommendations: list[str] = Field(default_factory=list)


class TodoSynthesis(BaseModel):
    """Admin and client todo lists plus analysis.

    The shape is identical whichever path produced it. The per-item
    ``source_type`` is the only indication of the path; failure details stay
    in the logs.
    """

    model_config = ConfigDict(populate_by_name=True)

    admin_todos: list[GeneratedItem] = Field(default_factory=list, alias="adminTodos")
    client_todos: list[GeneratedItem] = Field(default_factory=list, alias="clientTodos")
    analysis: SynthesisAnalysis = Field(default_factory=SynthesisAnalysis)

    @property
    def all_items(self) -> list[GeneratedItem]:
        """Admin todos followed by client todos."""
        return [*self.admin_todos, *self.client_todos]

    @property
    def source_type(self) -> SourceType | None:
        """Source of the first item, or None when there are no items."""
        items = self.all_items
        return items[0].source_type if items else None


class ValidationReport(BaseModel):
    """Outcome of the validate step. Findings never remove items."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)


class ItemStats(BaseModel):
    """Summary statistics for a batch of items."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict, alias="byStatus")
    by_priority: dict[str, int] = Field(default_factory=dict, alias="byPriority")
    by_category: dict[str, int] = Field(default_factory=dict, alias="byCategory")
    with_due_date: int = Field(default=0, alias="withDueDate")
    with_assignee: int = Field(default=0, alias="withAssignee")
    estimated_minutes_total: int = Field(default=0, alias="estimatedMinutesTotal")


class TaskPreview(BaseModel):
    """Rule-path output with the details a reviewer wants before persisting."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[GeneratedItem] = Field(default_factory=list)
    validation: ValidationReport = Field(default_factory=ValidationReport)
    stats: ItemStats = Field(default_factory=ItemStats)
    grouped_by_priority: dict[str, list[GeneratedItem]] = Field(
        default_factory=dict, alias="groupedByPriority"
    )
    rule_sets: list[str] = Field(default_factory=list, alias="ruleSets")
    rules_available: int = Field(default=0, alias="rulesAvailable")
    rules_fired: int = Field(default=0, alias="rulesFired")
    rejected: bool = False
