"""
tasksynth CLI - rules command.
"""

import typer
from rich.console import Console
from rich.table import Table

from tasksynth.core.rules.evaluator import sort_rules
from tasksynth.core.rules.registry import get_default_registry

console = Console()


def rules(
    project_type: str = typer.Option(..., "--project-type", "-t", help="Project type label"),
) -> None:
    """
    List the rules selected for a project type, in evaluation order.

    Examples:
        tasksynth rules -t web_design
        tasksynth rules -t "unknown label"     # generic rules only
    """
    registry = get_default_registry()
    selected = sort_rules(registry.for_project_type(project_type))

    table = Table(
        title=f"Rule sets: {', '.join(registry.rule_set_names(project_type))}",
        show_header=True,
    )
    table.add_column("Priority", justify="right", width=8)
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Reads", style="dim")

    for rule in selected:
        table.add_row(str(rule.priority), rule.id, rule.name, ", ".join(rule.response_keys))

    console.print(table)
