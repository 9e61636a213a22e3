"""Command-line interface."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from convergraph.config import GraphConfig
from convergraph.exceptions import ConvergraphError
from convergraph.io.serializers import OutputFormat, write_graph, write_graphml
from convergraph.pipeline import PipelineResult, run

app = typer.Typer(
    help=(
        "CONVERGRAPH: mutation co-occurrence graphs for tools like Gephi, "
        "aimed at finding convergently evolved shared mutations."
    )
)
err_console = Console(stderr=True, soft_wrap=True)


def _report_diagnostics(result: PipelineResult) -> None:
    err_console.print(f"Data are {result.n_sequences} x {result.seq_len}", markup=False, highlight=False)
    for stats in result.profile.iter_variable():
        err_console.print(stats.format_diagnostic(), markup=False, highlight=False)


def _report_summary(result: PipelineResult) -> None:
    table = Table(title="Co-occurrence graph")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", style="green")
    for name, value in result.summary_rows():
        table.add_row(name, value)
    err_console.print(table)


@app.command()
def version():
    """Show CONVERGRAPH version."""
    from convergraph import __version__
    typer.echo(f"CONVERGRAPH version {__version__}")


@app.command()
def build(
    reference_file: Path = typer.Option(
        ..., "--reference-file", "-r", help="Reference sequence file (alignment coordinates)."
    ),
    minimum_coocurrence_support: int = typer.Option(
        4, "--minimum-coocurrence-support", "-s", help="Minimum co-occurrence support."
    ),
    minimum_cooccurrence_frequency: float = typer.Option(
        0.10, "--minimum-cooccurrence-frequency", "-f", help="Minimum co-occurrence frequency."
    ),
    conservation_threshold: float = typer.Option(
        0.97, "--conservation-threshold", "-c", help="Conservation threshold."
    ),
    query_has_header: bool = typer.Option(
        False, "--query-has-header", "-q", help="Input records start with a header row."
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Tab-delimited records (default: standard input)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the graph here (default: standard output)."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.DOT, "--format", help="Graph description format."
    ),
    jobs: int = typer.Option(
        1,
        "--jobs",
        "-j",
        min=1,
        help=(
            "Worker processes for graph building. Inputs of 1000 sequences "
            "or fewer are built in a single process."
        ),
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress and print a summary."),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress per-position diagnostics."),
):
    """Build a pruned substitution co-occurrence graph from aligned records."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = GraphConfig(
            reference_file=reference_file,
            minimum_coocurrence_support=minimum_coocurrence_support,
            minimum_cooccurrence_frequency=minimum_cooccurrence_frequency,
            conservation_threshold=conservation_threshold,
            has_header=query_has_header,
        )
        result = run(config, input_file if input_file is not None else sys.stdin, jobs=jobs)
    except ConvergraphError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if not quiet:
        _report_diagnostics(result)
    if verbose:
        _report_summary(result)

    if output is None:
        write_graph(result.graph, sys.stdout, output_format)
    elif output_format is OutputFormat.GRAPHML:
        write_graphml(result.graph, output)
    else:
        with open(output, "w") as f:
            write_graph(result.graph, f, output_format)


if __name__ == "__main__":
    app()
