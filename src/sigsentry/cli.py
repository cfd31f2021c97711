"""Command-line interface for sigsentry."""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from sigsentry import __version__
from sigsentry.errors import LibraryError
from sigsentry.output.console import print_library, print_results
from sigsentry.output.json_output import output_json
from sigsentry.scanner.engine import analyze_path, collect_files
from sigsentry.signatures.library import DEFAULT_LIBRARY, SignatureLibrary, load_library
from sigsentry.summary.summarizers import CommandSummarizer, Summarizer, TemplateSummarizer

app = typer.Typer(
    name="sigsentry",
    help="Signature scanner for uploaded file content",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_signatures(signatures: Path | None) -> SignatureLibrary:
    if signatures is None:
        return DEFAULT_LIBRARY
    try:
        return load_library(signatures)
    except LibraryError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e


@app.command()
def scan(
    paths: list[Path] = typer.Argument(
        ...,
        help="Files or directories to analyze",
        exists=True,
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        "-r/-R",
        help="Descend into subdirectories",
    ),
    encoded: bool = typer.Option(
        False,
        "--encoded",
        "-e",
        help="Files already hold a data URI or base64 text instead of raw bytes",
    ),
    signatures: Path | None = typer.Option(
        None,
        "--signatures",
        "-s",
        help="JSON signature library (default: built-in library)",
        exists=True,
        dir_okay=False,
    ),
    summarizer_cmd: str | None = typer.Option(
        None,
        "--summarizer-cmd",
        help="External command that reads a prompt on stdin and prints a summary",
    ),
    summarizer_timeout: float | None = typer.Option(
        None,
        "--summarizer-timeout",
        help="Seconds to wait for the summarizer command",
        min=0.1,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output results as JSON to console",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show decode details and debug logging",
    ),
) -> None:
    """Analyze files for known malicious patterns.

    Each file is decoded, matched against the signature library and
    summarized. Files are processed one at a time in the given order.

    Examples:
        sigsentry scan upload.bin
        sigsentry scan ./uploads/ --json
        sigsentry scan payload.b64 --encoded
        sigsentry scan ./uploads/ --signatures rules.json
        sigsentry scan sample.js --summarizer-cmd "ollama run llama3"
    """
    _configure_logging(verbose)
    library = _load_signatures(signatures)

    summarizer: Summarizer
    if summarizer_cmd:
        summarizer = CommandSummarizer(summarizer_cmd, timeout=summarizer_timeout)
    else:
        summarizer = TemplateSummarizer()

    files = collect_files(paths, recursive=recursive)
    if not files:
        console.print("[yellow]No files found to analyze[/yellow]")
        raise typer.Exit(0)

    results = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("Analyzing files...", total=len(files))
        for filepath in files:
            filename = filepath.name
            if len(filename) > 40:
                filename = filename[:37] + "..."
            progress.update(task, description=f"Analyzing: {filename}")
            results.append(
                analyze_path(filepath, encoded=encoded, library=library, summarizer=summarizer)
            )
            progress.advance(task)

    if json_output:
        output_json(results, file=sys.stdout)
    else:
        print_results(results, verbose=verbose)

    # Flagged and failed files are both unsafe
    if any(not r.is_safe for r in results):
        raise typer.Exit(1)


@app.command()
def patterns(
    signatures: Path | None = typer.Option(
        None,
        "--signatures",
        "-s",
        help="JSON signature library (default: built-in library)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """List the categories and patterns of the signature library."""
    print_library(_load_signatures(signatures))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"sigsentry v{__version__}")


@app.callback()
def main() -> None:
    """sigsentry - Signature scanner for uploaded file content.

    Detect known malicious patterns in uploaded files and explain the
    verdict in plain language.
    """
    pass


if __name__ == "__main__":
    app()
