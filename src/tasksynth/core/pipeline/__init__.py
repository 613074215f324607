"""
Post-processing pipeline for generated items.

Validation, deduplication, dependency detection, categorization and
prioritization, plus summary helpers.
"""

from tasksynth.core.pipeline.categorize import (
    TAXONOMY,
    categorize,
    categorize_text,
    categorize_todo,
    estimate_duration,
    group_by_category,
)
from tasksynth.core.pipeline.dedup import deduplicate
from tasksynth.core.pipeline.dependencies import detect_dependencies
from tasksynth.core.pipeline.pipeline import PipelineResult, run_pipeline
from tasksynth.core.pipeline.prioritize import prioritize
from tasksynth.core.pipeline.stats import compute_stats, group_by_priority
from tasksynth.core.pipeline.validate import validate_items

__all__ = [
    # Steps
    "validate_items",
    "deduplicate",
    "detect_dependencies",
    "categorize",
    "prioritize",
    # Pipeline
    "PipelineResult",
    "run_pipeline",
    # Helpers
    "TAXONOMY",
    "categorize_text",
    "categorize_todo",
    "estimate_duration",
    "group_by_category",
    "compute_stats",
    "group_by_priority",
]
