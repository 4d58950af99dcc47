"""
mdexercises CLI.

Commands:
    mdexercises parse FILE [--json]   Parse one exercise and show it
    mdexercises check PATH...         Parse every exercise file, report errors
    mdexercises lint PATH...          Find tests blocks with no test code
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mdexercises.config import get_settings
from mdexercises.core.errors import ExerciseParseError
from mdexercises.core.models import CodeExercise, UseCaseExercise
from mdexercises.lint import iter_markdown_files, lint_paths
from mdexercises.parser import has_exercise_directive, parse_file

app = typer.Typer(
    name="mdexercises",
    help="Parse and check interactive exercise markdown",
    no_args_is_help=True,
)

console = Console()


def configure_logging(level: str) -> None:
    """Send loguru output to stderr at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{message}</level>",
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    Interactive exercise parser.

    Exercises are markdown files with ::: exercise or ::: usecase blocks.
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)


# ========================================
# parse
# ========================================


def _summary_table(exercise: CodeExercise | UseCaseExercise) -> Table:
    meta = exercise.metadata
    table = Table(title=exercise.title or meta.id, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Kind", exercise.kind)
    table.add_row("ID", meta.id)
    table.add_row("Difficulty", meta.difficulty.value)
    table.add_row("Time", f"{meta.time_minutes} min" if meta.time_minutes else "-")
    if meta.prerequisites:
        table.add_row("Prerequisites", ", ".join(meta.prerequisites))
    table.add_row("Hints", str(len(exercise.hints)))

    if isinstance(exercise, CodeExercise):
        if exercise.starter:
            starter = exercise.starter
            table.add_row("Starter", f"{starter.language} ({starter.filename or 'no file'})")
        table.add_row("Solution", exercise.solution.reveal.value if exercise.solution else "-")
        table.add_row("Tests", exercise.tests.mode.value if exercise.tests else "-")
    else:
        table.add_row("Domain", meta.domain.value)
        if exercise.scenario.organization:
            table.add_row("Organization", exercise.scenario.organization)
        evaluation = exercise.evaluation
        table.add_row(
            "Criteria",
            f"{len(evaluation.criteria)} (total weight {evaluation.total_weight})",
        )
        table.add_row("Sample answer", "yes" if exercise.sample_answer else "-")

    return table


@app.command("parse")
def parse_command(
    file: Path = typer.Argument(..., help="Exercise markdown file"),
    output_json: bool = typer.Option(False, "--json", help="Print the parsed document as JSON"),
):
    """
    Parse one exercise file.

    Examples:
        mdexercises parse exercises/hello.md
        mdexercises parse exercises/hello.md --json > hello.json
    """
    try:
        exercise = parse_file(file)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except ExerciseParseError as e:
        console.print(f"[red]Parse error in {file}:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if output_json:
        typer.echo(exercise.model_dump_json(indent=2))
        return

    console.print(_summary_table(exercise))
    if exercise.description:
        console.print(f"\n{exercise.description}")


# ========================================
# check
# ========================================


@app.command("check")
def check_command(
    paths: list[Path] = typer.Argument(..., help="Files or directories to check"),
):
    """
    Parse every exercise file under PATHS and report failures.

    Markdown files without an exercise or usecase block are skipped.
    """
    checked = 0
    failures: list[tuple[Path, str]] = []

    for file in iter_markdown_files(paths):
        text = file.read_text(encoding="utf-8")
        if not has_exercise_directive(text):
            logger.debug(f"Skipping {file}: no exercise block")
            continue

        checked += 1
        try:
            parse_file(file)
        except ExerciseParseError as e:
            failures.append((file, str(e)))

    if failures:
        table = Table(title="Exercise errors")
        table.add_column("File", style="cyan")
        table.add_column("Error", style="red")
        for file, message in failures:
            table.add_row(escape(str(file)), escape(message))
        console.print(table)
        console.print(f"[red]{len(failures)} of {checked} exercises failed[/red]")
        raise typer.Exit(1)

    console.print(f"[green]{checked} exercises OK[/green]")


# ========================================
# lint
# ========================================


@app.command("lint")
def lint_command(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint"),
):
    """Report tests blocks that contain no test code."""
    violations = lint_paths(paths)

    if not violations:
        console.print("[green]No empty tests blocks found.[/green]")
        return

    console.print("[red]Found empty tests blocks in:[/red]")
    for violation in violations:
        console.print(f"  - {violation}", markup=False)
    raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings().log_level)
    app()


if __name__ == "__main__":
    main()
