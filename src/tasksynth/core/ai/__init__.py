"""
AI todo generation and its deterministic fallback.
"""

from tasksynth.core.ai.adapter import AIGenerationAdapter, parse_todo_response
from tasksynth.core.ai.fallback import FallbackSynthesizer, fallback_family
from tasksynth.core.ai.prompts import SYSTEM_MESSAGE, build_todo_prompt

__all__ = [
    "AIGenerationAdapter",
    "FallbackSynthesizer",
    "SYSTEM_MESSAGE",
    "build_todo_prompt",
    "fallback_family",
    "parse_todo_response",
]
