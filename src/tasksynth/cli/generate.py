"""
tasksynth CLI - tasks and todos commands.

Generate project tasks (rules only) or admin/client todos (AI with
fallback) from a JSON file of onboarding responses.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tasksynth.cli.errors import (
    ExitCode,
    print_error,
    print_invalid_responses_error,
    print_invalid_timestamp_error,
)
from tasksynth.core.errors import InvalidContextError
from tasksynth.core.items.models import GeneratedItem, GenerationContext
from tasksynth.core.responses.accessor import parse_date
from tasksynth.core.services.synthesis import SynthesisService

console = Console()

PRIORITY_STYLES = {
    "high": "[red bold]high[/red bold]",
    "medium": "[yellow]medium[/yellow]",
    "low": "[dim]low[/dim]",
}


def load_responses(path: Path) -> dict[str, Any]:
    """Read a responses file, exiting with USER_ERROR if it is unusable."""
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        print_invalid_responses_error(str(path), str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    if not isinstance(data, dict):
        print_invalid_responses_error(str(path), "Top-level JSON value must be an object")
        raise typer.Exit(ExitCode.USER_ERROR)
    return data


def build_context(
    project_type: str,
    session_id: str,
    completed_at: str | None,
    project_name: str,
) -> GenerationContext:
    """Build a generation context from command-line options."""
    now = datetime.now(timezone.utc)
    timestamp = now
    if completed_at is not None:
        parsed = parse_date(completed_at, reference=now)
        if parsed is None:
            print_invalid_timestamp_error(completed_at)
            raise typer.Exit(ExitCode.USER_ERROR)
        timestamp = parsed

    try:
        return GenerationContext(
            project_name=project_name,
            project_type_label=project_type,
            session_id=session_id,
            completion_timestamp=timestamp,
        )
    except ValueError as e:
        print_error("Invalid generation context", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)


def _dump(model: Any) -> str:
    return json.dumps(model.model_dump(by_alias=True, mode="json"), indent=2)


def _items_table(title: str, items: list[GeneratedItem]) -> Table:
    table = Table(title=title, show_header=True, expand=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Priority", justify="center", width=8)
    table.add_column("Category", width=12)
    table.add_column("Due", width=10)
    table.add_column("After", width=6)

    for idx, item in enumerate(items):
        priority = item.priority or "medium"
        table.add_row(
            str(idx),
            item.title,
            PRIORITY_STYLES.get(priority, priority),
            item.category or "",
            item.due_date.date().isoformat() if item.due_date else "",
            ",".join(str(d) for d in item.dependencies or []),
        )
    return table


# Shared option declarations
_RESPONSES_ARG = typer.Argument(..., help="JSON file with onboarding responses")
_PROJECT_TYPE_OPT = typer.Option(..., "--project-type", "-t", help="Project type label")
_SESSION_OPT = typer.Option("cli", "--session-id", help="Onboarding session id")
_COMPLETED_OPT = typer.Option(
    None,
    "--completed-at",
    help="Questionnaire completion time (ISO 8601, defaults to now)",
)
_NAME_OPT = typer.Option("", "--project-name", help="Project name")
_JSON_OPT = typer.Option(False, "--json", help="Output as JSON")


def tasks(
    ctx: typer.Context,
    responses_file: Path = _RESPONSES_ARG,
    project_type: str = _PROJECT_TYPE_OPT,
    session_id: str = _SESSION_OPT,
    completed_at: str | None = _COMPLETED_OPT,
    project_name: str = _NAME_OPT,
    json_output: bool = _JSON_OPT,
) -> None:
    """
    Generate project tasks from the rule registry.

    Examples:
        tasksynth tasks responses.json -t web_design
        tasksynth tasks responses.json -t "SaaS App" --json
    """
    debug = (ctx.obj or {}).get("debug", False)
    responses = load_responses(responses_file)
    context = build_context(project_type, session_id, completed_at, project_name)

    try:
        service = SynthesisService.from_config()
        preview = service.preview_tasks(project_type, responses, context)
    except InvalidContextError as e:
        print_error("Invalid generation context", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except Exception as e:
        print_error(f"Task generation failed: {e}")
        if debug:
            import traceback

            console.print(traceback.format_exc())
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if json_output:
        typer.echo(_dump(preview))
        raise typer.Exit(ExitCode.SUCCESS)

    console.print(
        Panel(
            f"[bold cyan]{len(preview.items)} task(s)[/bold cyan] from "
            f"{preview.rules_fired}/{preview.rules_available} rules "
            f"[dim]({', '.join(preview.rule_sets)})[/dim]",
            border_style="cyan",
        )
    )
    if preview.items:
        console.print(_items_table("Tasks", preview.items))

    if not preview.validation.valid:
        console.print()
        for error in preview.validation.errors:
            console.print(f"[yellow]⚠ {error}[/yellow]")
        if preview.rejected:
            console.print("[red]Batch rejected by configuration (pipeline.reject_invalid)[/red]")
            raise typer.Exit(ExitCode.GENERAL_ERROR)


def todos(
    ctx: typer.Context,
    responses_file: Path = _RESPONSES_ARG,
    project_type: str = _PROJECT_TYPE_OPT,
    session_id: str = _SESSION_OPT,
    completed_at: str | None = _COMPLETED_OPT,
    project_name: str = _NAME_OPT,
    json_output: bool = _JSON_OPT,
) -> None:
    """
    Generate admin and client todos (AI with deterministic fallback).

    Examples:
        tasksynth todos responses.json -t outbound_calling
        TASKSYNTH_AI_ENABLED=false tasksynth todos responses.json -t inbound --json
    """
    debug = (ctx.obj or {}).get("debug", False)
    responses = load_responses(responses_file)
    context = build_context(project_type, session_id, completed_at, project_name)

    try:
        service = SynthesisService.from_config()
        result = service.synthesize_todos_sync(project_type, responses, context)
    except InvalidContextError as e:
        print_error("Invalid generation context", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except Exception as e:
        print_error(f"Todo generation failed: {e}")
        if debug:
            import traceback

            console.print(traceback.format_exc())
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if json_output:
        typer.echo(_dump(result))
        raise typer.Exit(ExitCode.SUCCESS)

    source = result.source_type.value if result.source_type else "none"
    console.print(Panel(f"[bold cyan]Todos[/bold cyan] via {source}", border_style="cyan"))
    console.print(_items_table("Admin", result.admin_todos))
    console.print(_items_table("Client", result.client_todos))

    analysis = result.analysis
    lines = [
        f"Complexity: [bold]{analysis.complexity.value}[/bold]",
        f"Estimated setup: {analysis.estimated_setup_time}",
    ]
    lines.extend(f"[red]• {issue}[/red]" for issue in analysis.critical_issues)
    lines.extend(f"[green]• {rec}[/green]" for rec in analysis.recommendations)
    console.print(Panel("\n".join(lines), title="Analysis", border_style="green"))
