"""
Prompt text for AI todo generation.
"""

import json
from collections.abc import Mapping
from typing import Any

SYSTEM_MESSAGE = (
    "You are an expert project manager who creates detailed, actionable to-do lists. "
    "Return only valid JSON, no markdown."
)

_RESPONSE_FORMAT = """{
  "adminTodos": [
    {
      "title": "string",
      "description": "string",
      "category": "string",
      "priority": "string",
      "estimatedMinutes": number
    }
  ],
  "clientTodos": [...],
  "analysis": {
    "complexity": "string",
    "estimatedSetupTime": "string",
    "criticalIssues": ["string"],
    "recommendations": ["string"]
  }
}"""


def build_todo_prompt(project_type_label: str, responses: Mapping[str, Any]) -> str:
    """
    Build the user message asking for admin and client todo lists.

    Args:
        project_type_label: Free-text project type
        responses: Onboarding responses as submitted (nested by step)

    Returns:
        Prompt text
    """
    payload = json.dumps(responses, indent=2, default=str, sort_keys=True)
    return f"""You are an expert project manager analyzing client onboarding responses. \
Generate comprehensive, actionable to-do lists for both the admin team and the client.

Project Type: {project_type_label}
Onboarding Responses:
{payload}

Generate two separate to-do lists:

1. ADMIN TO-DOS: Tasks the agency/admin must complete
2. CLIENT TO-DOS: Tasks the client must complete

For each to-do, provide:
- title: Clear, actionable title (max 60 chars)
- description: Detailed explanation
- category: One of: setup, compliance, content, integration, review, technical, planning
- priority: high, medium, or low
- estimatedMinutes: Realistic time estimate

Also analyze:
- Project complexity (low/medium/high)
- Estimated total setup time
- Critical issues or red flags
- Recommendations

Return ONLY valid JSON in this exact format:
{_RESPONSE_FORMAT}"""
