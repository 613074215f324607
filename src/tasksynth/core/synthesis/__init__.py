"""
Task and todo synthesis orchestration.
"""

from tasksynth.core.synthesis.engine import SynthesisEngine, TodoGenerator, ensure_context

__all__ = [
    "SynthesisEngine",
    "TodoGenerator",
    "ensure_context",
]
