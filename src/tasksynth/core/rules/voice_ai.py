"""
Voice AI campaign rules (outbound and inbound calling).

Calendar details arrive either as ``calendar_integration`` or, on the newer
questionnaires, as ``calendar_system``; both feed the same integration item.
"""

from tasksynth.core.items.models import GeneratedItem, GenerationContext
from tasksynth.core.responses import (
    calculate_due_date,
    get_text,
    get_value,
    has_files,
    has_text,
    has_value,
    parse_date,
)
from tasksynth.core.rules.models import Responses, Rule, bullets, make_item

APPOINTMENT_GOALS = ("appointment_setting", "appointment setting", "book appointments")


def _calendar(responses: Responses) -> str:
    return get_text(responses, "calendar_integration") or get_text(responses, "calendar_system")


def _script(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    goal = get_text(responses, "campaign_goal")
    audience = get_text(responses, "target_audience")
    message = get_text(responses, "key_message")
    completed = context.completion_timestamp
    return [
        make_item(
            "Draft initial voice AI script",
            f"Campaign goal: {goal}\nTarget audience: {audience}\nKey message: {message}\n\n"
            "Cover:\n"
            + bullets(
                [
                    "Opening hook",
                    "Value proposition",
                    "Objection handling paths",
                    "Call-to-action",
                    "Transfer-to-human triggers",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 3),
            category="content",
        ),
        make_item(
            "Test and refine script with AI voice",
            "Run test calls to tune pronunciation, pacing, response accuracy "
            "and edge cases. Keep recordings and refinement notes.",
            priority="high",
            due_date=calculate_due_date(completed, 7),
            category="review",
        ),
    ]


def _voice_setup(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    voice = get_text(responses, "voice_preference", "Professional")
    tone = get_text(responses, "tone_of_voice", "Friendly")
    return [
        make_item(
            f"Configure {voice} voice with {tone} tone",
            f"Voice type: {voice}\nTone: {tone}\n\n"
            + bullets(
                [
                    "Select the voice",
                    "Tune speed, pitch and emphasis",
                    "Build the pronunciation dictionary",
                    "Get client approval on the voice",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(context.completion_timestamp, 5),
            category="setup",
        )
    ]


def _contact_list(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    size = get_text(responses, "list_size", "Not specified")
    completed = context.completion_timestamp
    return [
        make_item(
            "Process and validate contact list",
            f"List size: {size}\n\n"
            + bullets(
                [
                    "Import and validate contact data",
                    "Remove duplicates and invalid numbers",
                    "Apply DNC filtering",
                    "Keep a backup of the original list",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 4),
        ),
        make_item(
            "Create contact segmentation strategy",
            "Define segments, per-segment messaging, A/B groups and call timing.",
            priority="medium",
            due_date=calculate_due_date(completed, 6),
        ),
    ]


def _integrations(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    crm = get_text(responses, "crm_system")
    calendar = _calendar(responses)
    webhook = get_text(responses, "webhook_url")
    completed = context.completion_timestamp
    items = []
    if crm:
        items.append(
            make_item(
                f"Integrate with {crm} CRM",
                f"CRM: {crm}\n\n"
                + bullets(
                    [
                        "Configure API credentials",
                        "Map contact fields and lead statuses",
                        "Test the data sync and error handling",
                    ]
                ),
                priority="high",
                due_date=calculate_due_date(completed, 5),
                category="integration",
            )
        )
    if calendar:
        items.append(
            make_item(
                f"Set up {calendar} calendar integration",
                f"Calendar: {calendar}\n\n"
                + bullets(
                    [
                        "Connect the calendar API",
                        "Set booking rules and availability",
                        "Configure confirmations and reminders",
                        "Test the booking flow end to end",
                    ]
                ),
                priority="medium",
                due_date=calculate_due_date(completed, 6),
                category="integration",
            )
        )
    if webhook:
        items.append(
            make_item(
                "Configure call outcome webhook",
                f"Endpoint: {webhook}\n\nSend call outcomes and verify retries "
                "and payload format with the client.",
                priority="medium",
                due_date=calculate_due_date(completed, 6),
                category="integration",
            )
        )
    return items


def _appointments(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    return [
        make_item(
            "Define appointment qualification criteria",
            "Agree with the client which leads qualify for a booked "
            "appointment, the questions the agent asks, and how no-shows "
            "are followed up.",
            priority="high",
            due_date=calculate_due_date(context.completion_timestamp, 4),
        )
    ]


def _compliance(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    region = get_text(responses, "target_region")
    industry = get_text(responses, "industry")
    return [
        make_item(
            "Complete compliance audit",
            f"Region: {region}\nIndustry: {industry}\n\nReview:\n"
            + bullets(
                [
                    "TCPA (US) and GDPR (EU)",
                    "DNC list integration",
                    "Consent and recording disclosures",
                    "Industry-specific regulations",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(context.completion_timestamp, 3),
        )
    ]


def _analytics(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    completed = context.completion_timestamp
    return [
        make_item(
            "Configure campaign analytics dashboard",
            "Track completion rate, call duration, positive response rate, "
            "booking rate, transfers and best call times.",
            priority="medium",
            due_date=calculate_due_date(completed, 7),
        ),
        make_item(
            "Set up A/B testing framework",
            "Define test variables, control groups, success metrics and test duration.",
            priority="low",
            due_date=calculate_due_date(completed, 10),
        ),
    ]


def _launch(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    completed = context.completion_timestamp
    launch = parse_date(get_value(responses, "launch_date"), completed)
    volume = get_text(responses, "daily_call_volume")
    header = f"Target volume: {volume}\n\n" if volume else ""
    return [
        make_item(
            "Run pilot campaign test",
            header
            + "Place 50-100 test calls across every script path and verify "
            "integrations, recordings and analytics.",
            priority="high",
            due_date=(
                calculate_due_date(launch, -3) if launch else calculate_due_date(completed, 10)
            ),
        ),
        make_item(
            "Create campaign monitoring protocol",
            "Define alert thresholds, escalation, the emergency pause procedure "
            "and daily check-ins for the first week.",
            priority="high",
            due_date=(
                calculate_due_date(launch, -2) if launch else calculate_due_date(completed, 12)
            ),
        ),
    ]


VOICE_AI_RULES: tuple[Rule, ...] = (
    Rule(
        id="voice-ai-script-development",
        name="Campaign Script Development",
        description="Draft and refine the campaign script",
        response_keys=("campaign_goal", "target_audience", "key_message"),
        priority=10,
        condition=lambda r: has_text(r, "campaign_goal")
        or has_text(r, "target_audience")
        or has_text(r, "key_message"),
        generate=_script,
    ),
    Rule(
        id="voice-ai-voice-setup",
        name="Voice Selection and Configuration",
        description="Choose and configure the AI voice",
        response_keys=("voice_preference", "tone_of_voice"),
        priority=9,
        condition=lambda r: has_text(r, "voice_preference") or has_text(r, "tone_of_voice"),
        generate=_voice_setup,
    ),
    Rule(
        id="voice-ai-contact-list",
        name="Contact List Setup",
        description="Prepare and segment the contact list",
        response_keys=("contact_list", "list_size", "list_upload"),
        priority=8,
        condition=lambda r: has_files(r, "contact_list")
        or has_files(r, "list_upload")
        or has_text(r, "list_size"),
        generate=_contact_list,
    ),
    Rule(
        id="voice-ai-integrations",
        name="System Integrations",
        description="CRM, calendar and webhook integrations",
        response_keys=("crm_system", "calendar_integration", "calendar_system", "webhook_url"),
        priority=7,
        condition=lambda r: has_text(r, "crm_system")
        or bool(_calendar(r))
        or has_text(r, "webhook_url"),
        generate=_integrations,
    ),
    Rule(
        id="voice-ai-appointment-setting",
        name="Appointment Setting",
        description="Qualification rules for appointment-setting campaigns",
        response_keys="primary_goal",
        priority=8,
        condition=lambda r: get_text(r, "primary_goal").lower() in APPOINTMENT_GOALS,
        generate=_appointments,
    ),
    Rule(
        id="voice-ai-compliance",
        name="Compliance Setup",
        description="Legal requirements for the campaign",
        response_keys=("target_region", "industry"),
        priority=9,
        condition=lambda r: has_text(r, "target_region") or has_text(r, "industry"),
        generate=_compliance,
    ),
    Rule(
        id="voice-ai-analytics",
        name="Analytics and Tracking",
        description="Campaign tracking and reporting",
        response_keys="campaign_goal",
        priority=6,
        condition=lambda r: has_text(r, "campaign_goal"),
        generate=_analytics,
    ),
    Rule(
        id="voice-ai-launch",
        name="Campaign Launch Preparation",
        description="Pilot test and monitoring protocol",
        response_keys=("launch_date", "daily_call_volume"),
        priority=8,
        condition=lambda r: has_value(r, "launch_date") or has_text(r, "daily_call_volume"),
        generate=_launch,
    ),
)
