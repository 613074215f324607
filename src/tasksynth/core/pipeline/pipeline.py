"""
Post-processing pipeline applied to every candidate list.

Steps run in a fixed order, whatever produced the candidates:

1. validate (report only)
2. deduplicate
3. detect dependencies
4. categorize
5. prioritize
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from tasksynth.core.items.models import GeneratedItem, ValidationReport
from tasksynth.core.pipeline.categorize import categorize
from tasksynth.core.pipeline.dedup import deduplicate
from tasksynth.core.pipeline.dependencies import detect_dependencies
from tasksynth.core.pipeline.prioritize import prioritize
from tasksynth.core.pipeline.validate import validate_items

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Finished items and the validation report of the candidates."""

    items: list[GeneratedItem] = field(default_factory=list)
    validation: ValidationReport = field(default_factory=ValidationReport)


def run_pipeline(
    candidates: Sequence[GeneratedItem], completion_timestamp: datetime | None = None
) -> PipelineResult:
    """
    Run all post-processing steps.

    Args:
        candidates: Items straight from a generator
        completion_timestamp: Used by the due date check

    Returns:
        PipelineResult; invalid items are reported, not removed
    """
    validation = validate_items(candidates, completion_timestamp)
    if not validation.valid:
        for error in validation.errors:
            logger.warning("Validation finding: %s", error)

    items = deduplicate(candidates)
    dropped = len(candidates) - len(items)
    if dropped:
        logger.debug("Dropped %d duplicate item(s)", dropped)

    items = detect_dependencies(items)
    items = categorize(items)
    items = prioritize(items)

    return PipelineResult(items=items, validation=validation)
