"""Console output for the context monitor and consolidation runs."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .consolidation import ConsolidationResult
from .monitor import CheckResult

console = Console()


def print_check_header(tokens: int):
    console.print(f"Current context: {tokens} tokens")


def print_trigger_notice(tokens: int, threshold: int):
    console.print(f"[yellow]⚠️ Context at {tokens} tokens (threshold: {threshold})[/yellow]")
    console.print("[cyan]Triggering memory consolidation...[/cyan]")


def print_check_result(result: CheckResult):
    """Print the outcome of a context check."""
    if not result.triggered:
        console.print(
            f"[green]✅ Context healthy:[/green] {result.remaining} tokens until consolidation "
            f"({result.percent_used:.1f}% of max)"
        )
        return

    if result.succeeded:
        console.print("[green]✅ Memory consolidation complete[/green]")
        console.print("💡 Consider running /new to start fresh session")
    else:
        console.print(f"[red]❌ Consolidation failed:[/red] {escape(result.error or '')}")


def print_consolidation_summary(result: ConsolidationResult):
    """Print counts, handoff id and mode after a consolidation run."""
    summary = result.summary

    table = Table(title="Consolidation Complete")
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Decisions", str(len(summary.decisions)))
    table.add_row("Lessons", str(len(summary.lessons)))
    table.add_row("Insights", str(len(summary.insights)))
    table.add_row("Handoff", escape(str(result.handoff_id)))
    table.add_row("Mode", summary.mode)

    console.print()
    console.print(table)
