"""Command-line interface for cardsort."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cardsort import __version__
from cardsort.analysis.clustering import dendrogram_leaves
from cardsort.analysis.models import AnalysisResults
from cardsort.config import load_settings

app = typer.Typer(
    name="cardsort",
    help="Card-sorting study analysis: similarity, clusters and insights.",
    no_args_is_help=True,
)
console = Console(width=min(80, Console().width))


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"cardsort {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Card-sorting study analysis: similarity, clusters and insights."""


def _format_duration(ms: float) -> str:
    """Format a millisecond duration as ``Xm YYs`` (or ``Ys`` under a minute)."""
    seconds = int(round(ms / 1000))
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def _print_summary(results: AnalysisResults) -> None:
    console.print()
    console.print(f"[bold]{results.study_name}[/bold]  [dim]{results.study_id}[/dim]")
    console.print(
        f"  {results.participant_count} participants"
        f" [dim]·[/dim] {results.completion_rate:.0%} completion"
        f" [dim]·[/dim] avg {_format_duration(results.average_duration)}"
    )

    cuts = results.cluster_analysis.suggested_clusters
    if cuts:
        table = Table(title="Suggested clusters", show_edge=False)
        table.add_column("Threshold", justify="right")
        table.add_column("Clusters", justify="right")
        for cut in cuts:
            table.add_row(f"{cut.threshold:.2f}", str(len(cut.clusters)))
        console.print()
        console.print(table)

    leaves = dendrogram_leaves(results.cluster_analysis.root)
    if len(leaves) > 1:
        console.print()
        order = " [dim]·[/dim] ".join(escape(leaf.name) for leaf in leaves)
        console.print(f"  Card order: {order}")

    console.print()
    if not results.insights:
        console.print("[dim]No insights yet. Collect more sorts to see patterns.[/dim]")
    for insight in results.insights:
        console.print(
            f"  [bold]{insight.type.value}[/bold] [dim]({insight.confidence:.2f})[/dim]"
            f"  {insight.message}"
        )


@app.command()
def analyze(
    export_file: Annotated[
        Path,
        typer.Argument(
            help="Study export JSON (study definition plus sessions).",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the analysis results as JSON to this file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Analyse a card-sorting study export."""
    from cardsort.export import load_export, write_results
    from cardsort.logging import run_log_path, setup_logging
    from cardsort.pipeline import run_full_analysis

    setup_logging(log_file=run_log_path(output) if output else None, verbose=verbose)
    settings = load_settings()

    try:
        export = load_export(export_file)
    except (ValidationError, UnicodeDecodeError) as exc:
        console.print(f"[red]Invalid export file[/red] {export_file}:\n{escape(str(exc))}")
        raise typer.Exit(1) from exc

    results = run_full_analysis(
        export.study.id,
        export.study.name,
        export.sessions,
        export.study.cards,
        settings=settings,
        analyzed_at=int(time.time() * 1000),
    )
    _print_summary(results)

    if output is not None:
        write_results(results, output)
        console.print(f"\nResults written to [bold]{output}[/bold]")


# British English alias for analyze
analyse = app.command(name="analyse", hidden=True)(analyze)
