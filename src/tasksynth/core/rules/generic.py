"""
Generic rules, appended to every project type.

Note that the kickoff and communication rules fire on any non-empty response
map, and the QA rule fires unconditionally; an empty questionnaire therefore
yields only the QA checklist.
"""

from tasksynth.core.items.models import GeneratedItem, GenerationContext
from tasksynth.core.responses import (
    calculate_due_date,
    get_text,
    get_value,
    has_text,
    parse_date,
)
from tasksynth.core.rules.models import Responses, Rule, bullets, make_item


def _any_text(responses: Responses, *keys: str) -> bool:
    return any(has_text(responses, key) for key in keys)


def _first_text(responses: Responses, *keys: str) -> str:
    for key in keys:
        if text := get_text(responses, key):
            return text
    return ""


def _kickoff(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    completed = context.completion_timestamp
    return [
        make_item(
            "Schedule project kickoff meeting",
            "Run a kickoff meeting with the client's stakeholders.\n\nAgenda:\n"
            + bullets(
                [
                    "Walk through the onboarding responses",
                    "Resolve unclear requirements",
                    "Introduce the team and communication channels",
                    "Confirm timeline and milestones",
                ]
            )
            + "\n\nSend the invite with the agenda 48 hours ahead.",
            priority="high",
            due_date=calculate_due_date(completed, 2),
        ),
        make_item(
            "Set up project management workspace",
            "Prepare the shared workspace:\n"
            + bullets(
                [
                    "Create the project board and channels",
                    "Create the shared file repository",
                    "Invite team members and set notifications",
                    "Document communication protocols",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 1),
        ),
    ]


def _timeline(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    target = parse_date(
        get_value(responses, "deadline") or get_value(responses, "launch_date"),
        context.completion_timestamp,
    )
    header = f"Target date: {target.date().isoformat()}\n\n" if target else ""
    return [
        make_item(
            "Create detailed project timeline",
            header
            + "Lay out the delivery plan:\n"
            + bullets(
                [
                    "Phases and milestones with dates",
                    "Task dependencies and resourcing",
                    "Client review periods and revision buffers",
                    "Testing and launch preparation",
                ]
            )
            + "\n\nShare the timeline with the client for approval.",
            priority="high",
            due_date=calculate_due_date(context.completion_timestamp, 3),
        )
    ]


def _budget(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    budget = _first_text(responses, "budget", "budget_range", "investment")
    return [
        make_item(
            "Create project budget breakdown",
            f"Total budget: {budget}\n\nBreak it down by:\n"
            + bullets(
                [
                    "Design and development effort",
                    "Third-party services and tooling",
                    "Hosting and infrastructure",
                    "Contingency (10-15%)",
                ]
            ),
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 4),
        )
    ]


def _stakeholders(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    return [
        make_item(
            "Create stakeholder map and communication plan",
            "For each stakeholder record role, decision authority, "
            "communication preference and availability. Set up a regular "
            "check-in schedule.",
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 3),
        )
    ]


def _risks(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    concerns = get_text(responses, "concerns")
    challenges = get_text(responses, "challenges")
    constraints = get_text(responses, "constraints")
    return [
        make_item(
            "Conduct risk assessment",
            f"Client concerns: {concerns}\nChallenges: {challenges}\n"
            f"Constraints: {constraints}\n\nBuild a risk register with:\n"
            + bullets(
                [
                    "Probability and impact ratings",
                    "Mitigation and contingency plans",
                    "Risk owners and review cadence",
                ]
            ),
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 5),
        )
    ]


def _qa_plan(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    return [
        make_item(
            "Create quality assurance checklist",
            "Define acceptance criteria per deliverable, the review and "
            "approval process, revision policy and the final delivery "
            "checklist. Schedule a QA review at each milestone.",
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 7),
        )
    ]


def _communication(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    preference = get_text(responses, "preferred_communication", "not specified")
    frequency = get_text(responses, "meeting_frequency", "not specified")
    return [
        make_item(
            "Establish communication protocols",
            f"Preferred channel: {preference}\nMeeting frequency: {frequency}\n\n"
            "Agree on:\n"
            + bullets(
                [
                    "Status update format and schedule",
                    "Escalation path and response times",
                    "Feedback collection",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(context.completion_timestamp, 2),
        )
    ]


def _additional_notes(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    notes = _first_text(responses, "additional_notes", "special_requests", "other_requirements")
    return [
        make_item(
            "Address special requirements and notes",
            f"Client notes:\n{notes}\n\n"
            + bullets(
                [
                    "Clarify ambiguous requests",
                    "Check feasibility and estimate extra effort",
                    "Get approval for scope changes",
                ]
            ),
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 4),
        )
    ]


GENERIC_RULES: tuple[Rule, ...] = (
    Rule(
        id="generic-kickoff",
        name="Project Kickoff",
        description="Kickoff meeting and workspace setup",
        response_keys="project_name",
        priority=10,
        condition=lambda r: has_text(r, "project_name") or len(r) > 0,
        generate=_kickoff,
    ),
    Rule(
        id="generic-timeline",
        name="Project Timeline",
        description="Detailed project timeline",
        response_keys=("deadline", "launch_date", "timeline", "expected_duration"),
        priority=9,
        condition=lambda r: bool(
            get_value(r, "deadline")
            or get_value(r, "launch_date")
            or _any_text(r, "timeline", "expected_duration")
        ),
        generate=_timeline,
    ),
    Rule(
        id="generic-budget",
        name="Budget Planning",
        description="Budget and resource allocation",
        response_keys=("budget", "budget_range", "investment"),
        priority=7,
        condition=lambda r: _any_text(r, "budget", "budget_range", "investment"),
        generate=_budget,
    ),
    Rule(
        id="generic-stakeholders",
        name="Stakeholder Management",
        description="Stakeholder map and check-ins",
        response_keys=("decision_makers", "team_members", "key_contacts"),
        priority=6,
        condition=lambda r: _any_text(r, "decision_makers", "team_members", "key_contacts"),
        generate=_stakeholders,
    ),
    Rule(
        id="generic-risk-management",
        name="Risk Assessment",
        description="Risk register from stated concerns",
        response_keys=("concerns", "challenges", "constraints"),
        priority=7,
        condition=lambda r: _any_text(r, "concerns", "challenges", "constraints"),
        generate=_risks,
    ),
    Rule(
        id="generic-qa-plan",
        name="Quality Assurance Plan",
        description="QA strategy and checklist",
        response_keys="project_name",
        priority=6,
        condition=lambda r: True,
        generate=_qa_plan,
    ),
    Rule(
        id="generic-communication-plan",
        name="Communication Plan",
        description="Regular communication rhythm",
        response_keys=("preferred_communication", "meeting_frequency"),
        priority=8,
        condition=lambda r: (
            _any_text(r, "preferred_communication", "meeting_frequency") or len(r) > 0
        ),
        generate=_communication,
    ),
    Rule(
        id="generic-additional-notes",
        name="Review Additional Requirements",
        description="Follow up on notes and special requests",
        response_keys=("additional_notes", "special_requests", "other_requirements"),
        priority=5,
        condition=lambda r: _any_text(
            r, "additional_notes", "special_requests", "other_requirements"
        ),
        generate=_additional_notes,
    ),
)
