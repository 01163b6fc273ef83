"""CLI entry points for memory consolidation."""

import click
from rich.console import Console
from rich.markup import escape

from .config import CONTEXT_THRESHOLD, Settings
from .consolidation import run_consolidation
from .logging_config import setup_logging
from .models import CONTEXT_TRIGGER, NIGHTLY
from .monitor import check_context, parse_token_count
from .reports import (
    print_check_header,
    print_check_result,
    print_consolidation_summary,
    print_trigger_notice,
)

console = Console()


@click.group()
def cli():
    """Consolidate daily agent memory logs."""


@cli.command()
@click.option("--context-trigger", is_flag=True, help="Record the run as triggered by context usage")
@click.option(
    "--workspace",
    type=click.Path(file_okay=False),
    default=None,
    help="Workspace holding memory/ and secrets/ (default: current directory)",
)
def consolidate(context_trigger, workspace):
    """Extract decisions, lessons and insights from today's daily log."""
    setup_logging()
    mode = CONTEXT_TRIGGER if context_trigger else NIGHTLY
    settings = Settings.from_workspace(workspace)

    console.print(f"{escape(f'[{mode}]')} Starting memory consolidation...")

    result = run_consolidation(settings, mode)
    if result is None:
        return

    print_consolidation_summary(result)


@cli.command(context_settings={"ignore_unknown_options": True, "allow_extra_args": True})
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def monitor(tokens):
    """Check context usage and consolidate once TOKENS reaches the threshold.

    Only the first argument is read; anything that isn't a number counts as 0.
    """
    setup_logging()
    count = parse_token_count(tokens[0] if tokens else None)
    print_check_header(count)

    if count >= CONTEXT_THRESHOLD:
        print_trigger_notice(count, CONTEXT_THRESHOLD)

    result = check_context(count, cwd=Settings.from_workspace().workspace)
    print_check_result(result)


if __name__ == "__main__":
    cli()
