"""
Work item models shared by every generator and the post-processing pipeline.
"""

from tasksynth.core.items.models import (
    TITLE_MAX_LENGTH,
    Complexity,
    GeneratedItem,
    GenerationContext,
    ItemPriority,
    ItemStats,
    ItemStatus,
    SourceType,
    SynthesisAnalysis,
    TaskPreview,
    TodoAudience,
    TodoSynthesis,
    ValidationReport,
)

__all__ = [
    "TITLE_MAX_LENGTH",
    "Complexity",
    "GeneratedItem",
    "GenerationContext",
    "ItemPriority",
    "ItemStats",
    "ItemStatus",
    "SourceType",
    "SynthesisAnalysis",
    "TaskPreview",
    "TodoAudience",
    "TodoSynthesis",
    "ValidationReport",
]
