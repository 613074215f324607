"""
Safe, total access to untyped onboarding responses.
"""

from tasksynth.core.responses.accessor import (
    array_includes,
    calculate_due_date,
    count_answered,
    flatten_responses,
    get_file_count,
    get_list,
    get_text,
    get_value,
    has_files,
    has_text,
    has_value,
    parse_date,
)

__all__ = [
    "array_includes",
    "calculate_due_date",
    "count_answered",
    "flatten_responses",
    "get_file_count",
    "get_list",
    "get_text",
    "get_value",
    "has_files",
    "has_text",
    "has_value",
    "parse_date",
]
