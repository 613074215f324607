"""
tasksynth CLI.

Developer tool for trying the synthesis engine against a responses file.
"""

import logging

import typer
from rich.console import Console

from tasksynth import __version__
from tasksynth.cli import generate, rules
from tasksynth.cli.errors import ExitCode

app = typer.Typer(
    name="tasksynth",
    help="Turn onboarding questionnaire responses into tasks and todos",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def callback(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    tasksynth - response-driven task and todo synthesis.

    Examples:
        tasksynth tasks responses.json -t web_design
        tasksynth todos responses.json -t outbound_calling --json
        tasksynth rules -t "SaaS App"
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Store debug flag in context for subcommands
    ctx.obj = {"debug": debug}


app.command(name="tasks")(generate.tasks)
app.command(name="todos")(generate.todos)
app.command(name="rules")(rules.rules)


@app.command(name="version")
def version() -> None:
    """Show tasksynth version."""
    console.print(f"tasksynth version {__version__}")
    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "main"]
