"""Rich console output for analysis results."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sigsentry.scanner.results import AnalysisResult
from sigsentry.signatures.library import SignatureLibrary

console = Console()


def print_results(results: list[AnalysisResult], verbose: bool = False) -> None:
    """Print analysis results to console.

    Args:
        results: List of analysis results
        verbose: Show decode status and timing for every file
    """
    if not results:
        console.print("[dim]No files analyzed[/dim]")
        return

    for result in results:
        _print_single_result(result, verbose)

    console.print()
    _print_summary(results)


def _print_single_result(result: AnalysisResult, verbose: bool) -> None:
    """Print a single analysis result."""
    if result.error:
        status = "[red]ERROR[/red]"
        border = "red"
    elif result.is_malicious:
        status = "[red]POTENTIAL THREATS[/red]"
        border = "red"
    else:
        status = "[green]NO KNOWN PATTERNS[/green]"
        border = "green"

    console.print()
    console.print(f"[bold]{escape(result.file_name)}[/bold] - {status}")

    if verbose:
        if result.decoded_successfully:
            console.print("  [dim]Decoded: yes[/dim]")
        elif not result.error:
            reason = escape(result.decode_error or "")
            console.print(f"  [dim]Decoded: no ({reason}) - raw scan[/dim]")
        console.print(f"  [dim]Scan time: {result.scan_time_ms:.1f}ms[/dim]")

    text = result.summary or result.error or ""
    if result.error and result.summary and result.error not in result.summary:
        text = f"{result.error}\n{result.summary}"
    if text:
        console.print(Panel(escape(text), border_style=border, expand=False))

    if not result.findings:
        return

    table = Table(
        box=box.SIMPLE,
        show_header=True,
        header_style="bold",
        padding=(0, 1),
    )
    table.add_column("Category", style="yellow")
    table.add_column("Pattern", no_wrap=False)

    for finding in result.findings:
        table.add_row(escape(finding.category), escape(finding.pattern))

    console.print(table)


def _print_summary(results: list[AnalysisResult]) -> None:
    """Print summary of all analysis results."""
    total = len(results)
    errors = sum(1 for r in results if r.error)
    flagged = sum(1 for r in results if r.is_malicious)
    clean = total - errors - flagged

    if clean == total:
        console.print(f"[green]Analyzed {total} file(s): no known malicious patterns[/green]")
        return

    parts = [f"[green]{clean} clean[/green]"]
    if flagged:
        parts.append(f"[red]{flagged} with potential threats[/red]")
    if errors:
        parts.append(f"[red]{errors} failed[/red]")
    console.print(f"[bold]Analyzed {total} file(s):[/bold] " + ", ".join(parts))


def print_library(library: SignatureLibrary) -> None:
    """Print the signature library, one row per category."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Category", style="bold")
    table.add_column("Patterns", justify="right")
    table.add_column("Examples", style="dim", no_wrap=False)

    for category, patterns in library.items():
        examples = escape(", ".join(patterns[:3]))
        if len(patterns) > 3:
            examples += ", ..."
        table.add_row(escape(category), str(len(patterns)), examples)

    console.print(table)
