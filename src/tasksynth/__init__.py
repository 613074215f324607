"""
tasksynth - Response-Driven Task/Todo Synthesis

Turns a completed client onboarding questionnaire into ordered,
deduplicated, dependency-aware work items for the servicing team and the
client.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from tasksynth.core.config.models import SynthConfig
from tasksynth.core.items.models import GeneratedItem, GenerationContext, TodoSynthesis

__all__ = ["GeneratedItem", "GenerationContext", "SynthConfig", "TodoSynthesis", "__version__"]
