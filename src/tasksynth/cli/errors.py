"""
Standardized error handling and exit codes for the tasksynth CLI.
"""

from enum import IntEnum

from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for tasksynth CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Unexpected failure."""

    USER_ERROR = 2
    """Bad input or configuration (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Cannot read responses file",
        ...     reason="Expecting value: line 1 column 1 (char 0)",
        ...     solution="tasksynth tasks responses.json --project-type web_design",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_invalid_responses_error(path: str, reason: str) -> None:
    """Print error when the responses file cannot be used."""
    print_error(
        f"Cannot read responses from {path}",
        reason=reason,
        solution="Pass a JSON object keyed by questionnaire step, e.g. {\"step1\": {...}}",
    )


def print_invalid_timestamp_error(value: str) -> None:
    """Print error when --completed-at is not an ISO timestamp."""
    print_error(
        f"Invalid completion timestamp '{value}'",
        solution="--completed-at 2024-03-01T12:00:00+00:00",
    )
