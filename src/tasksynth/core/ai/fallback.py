"""
Deterministic fallback for todo generation.

Used whenever the AI path is unavailable or fails. The fallback reads the
responses through the same accessor the rules use, never performs I/O and
never raises for a well-formed context, so the todo consumer always gets a
non-empty admin list and a complete analysis block.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tasksynth.core.items.models import (
    Complexity,
    GeneratedItem,
    GenerationContext,
    ItemPriority,
    ItemStatus,
    SourceType,
    SynthesisAnalysis,
    TodoAudience,
    TodoSynthesis,
)
from tasksynth.core.responses.accessor import count_answered, get_text, get_value, has_value
from tasksynth.core.rules.registry import normalize_project_type

logger = logging.getLogger(__name__)

DEADLINE_KEYS = ("deadline", "launch_date", "go_live_date", "timeline", "expected_duration")
NOTE_KEYS = ("additional_notes", "special_requests")
HIGH_COMPLEXITY_ANSWERS = 30
DEFAULT_SETUP_TIME = "2-3 weeks"


@dataclass(frozen=True)
class TodoTemplate:
    """A fixed todo in a fallback set."""

    title: str
    description: str
    category: str
    priority: ItemPriority
    estimated_minutes: int


OUTBOUND_ADMIN = (
    TodoTemplate(
        "Review campaign requirements",
        "Review all onboarding responses and validate campaign requirements",
        "review", ItemPriority.HIGH, 30,
    ),
    TodoTemplate(
        "Scrub call list against DNC",
        "Ensure call list complies with Do Not Call regulations",
        "compliance", ItemPriority.HIGH, 45,
    ),
    TodoTemplate(
        "Setup calling system",
        "Configure AI voice agent or calling platform",
        "setup", ItemPriority.HIGH, 90,
    ),
)
OUTBOUND_CLIENT = (
    TodoTemplate(
        "Upload final call list",
        "Provide call list in CSV format with all required fields",
        "content", ItemPriority.HIGH, 20,
    ),
    TodoTemplate(
        "Approve call script",
        "Review and approve the final call script",
        "review", ItemPriority.HIGH, 15,
    ),
)

INBOUND_ADMIN = (
    TodoTemplate(
        "Configure call routing",
        "Setup IVR menu and call routing rules",
        "setup", ItemPriority.HIGH, 60,
    ),
    TodoTemplate(
        "Setup phone number",
        "Configure or port phone number for inbound calls",
        "setup", ItemPriority.HIGH, 30,
    ),
)
INBOUND_CLIENT = (
    TodoTemplate(
        "Provide greeting script",
        "Approve or provide the greeting message for callers",
        "content", ItemPriority.HIGH, 15,
    ),
)

GENERIC_ADMIN = (
    TodoTemplate(
        "Review project requirements",
        "Review all onboarding responses and validate project scope",
        "review", ItemPriority.HIGH, 30,
    ),
    TodoTemplate(
        "Create project plan",
        "Develop detailed project timeline and milestones",
        "planning", ItemPriority.HIGH, 60,
    ),
)
GENERIC_CLIENT = (
    TodoTemplate(
        "Provide additional materials",
        "Upload any remaining documents or assets needed for the project",
        "content", ItemPriority.MEDIUM, 30,
    ),
)

KICKOFF = TodoTemplate(
    "Schedule onboarding kickoff call",
    "Walk the client through the plan and confirm owners for each open item",
    "planning", ItemPriority.HIGH, 30,
)


def fallback_family(project_type_label: str | None) -> str:
    """
    Pick the fallback item set for a project type.

    Returns:
        "outbound" for outbound calling and voice AI projects, "inbound" for
        inbound calling, otherwise "generic"
    """
    normalized = normalize_project_type(project_type_label)
    if "inbound" in normalized:
        return "inbound"
    if "outbound" in normalized or "voice" in normalized:
        return "outbound"
    return "generic"


_FAMILIES: dict[str, tuple[Sequence[TodoTemplate], Sequence[TodoTemplate]]] = {
    "outbound": (OUTBOUND_ADMIN, OUTBOUND_CLIENT),
    "inbound": (INBOUND_ADMIN, INBOUND_CLIENT),
    "generic": (GENERIC_ADMIN, GENERIC_CLIENT),
}


class FallbackSynthesizer:
    """
    Always-succeeding todo generator.

    Example:
        >>> result = FallbackSynthesizer().generate("inbound_calling", {}, context)
        >>> [t.title for t in result.admin_todos][:2]
        ['Configure call routing', 'Setup phone number']
    """

    def generate(
        self,
        project_type_label: str,
        responses: Mapping[str, Any],
        context: GenerationContext,
    ) -> TodoSynthesis:
        """
        Build todos from fixed per-family sets plus response-derived items.

        Args:
            project_type_label: Free-text project type
            responses: Flattened responses
            context: Invocation context

        Returns:
            TodoSynthesis with every item stamped ``source_type="fallback"``
        """
        family = fallback_family(project_type_label)
        admin_templates, client_templates = _FAMILIES[family]

        admin = [KICKOFF, *admin_templates]
        timeline = _timeline_template(responses)
        if timeline is not None:
            admin.append(timeline)

        client = list(client_templates)
        clarification = _clarification_template(responses)
        if clarification is not None:
            client.append(clarification)

        logger.debug("Fallback family %s for project type %r", family, project_type_label)

        return TodoSynthesis(
            admin_todos=_build(admin, TodoAudience.ADMIN, context),
            client_todos=_build(client, TodoAudience.CLIENT, context),
            analysis=_analysis(responses),
        )


def _timeline_template(responses: Mapping[str, Any]) -> TodoTemplate | None:
    present = [key for key in DEADLINE_KEYS if has_value(responses, key)]
    if not present:
        return None
    details = ", ".join(
        f"{key.replace('_', ' ')}: {get_value(responses, key)}" for key in present
    )
    return TodoTemplate(
        "Confirm project timeline and milestones",
        f"Agree the delivery schedule with the client ({details})",
        "planning", ItemPriority.HIGH, 30,
    )


def _clarification_template(responses: Mapping[str, Any]) -> TodoTemplate | None:
    notes = [get_text(responses, key) for key in NOTE_KEYS]
    notes = [note for note in notes if note]
    if not notes:
        return None
    return TodoTemplate(
        "Clarify notes and special requests",
        "Confirm how these requests should be handled:\n" + "\n".join(f"- {n}" for n in notes),
        "review", ItemPriority.MEDIUM, 20,
    )


def _analysis(responses: Mapping[str, Any]) -> SynthesisAnalysis:
    answered = count_answered(responses)
    complexity = Complexity.HIGH if answered >= HIGH_COMPLEXITY_ANSWERS else Complexity.MEDIUM
    critical_issues = [] if responses else ["No onboarding responses were provided"]
    return SynthesisAnalysis(
        complexity=complexity,
        estimated_setup_time=DEFAULT_SETUP_TIME,
        critical_issues=critical_issues,
        recommendations=["Review onboarding responses for completeness"],
    )


def _build(
    templates: Sequence[TodoTemplate],
    audience: TodoAudience,
    context: GenerationContext,
) -> list[GeneratedItem]:
    return [
        GeneratedItem(
            title=template.title,
            description=template.description,
            status=ItemStatus.TODO.value,
            priority=template.priority.value,
            category=template.category,
            estimated_minutes=template.estimated_minutes,
            source_type=SourceType.FALLBACK,
            source_id=context.session_id,
            source_metadata={"orderIndex": index, "audience": audience.value},
        )
        for index, template in enumerate(templates)
    ]
