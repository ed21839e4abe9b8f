"""
Common utilities for CLI commands.

Shared helper functions used across command modules.
"""

import click

from ..extraction.constants import (
    CONDITION_DONE, CONDITION_DISABLED, CONDITION_ERRORED
)
from ..extraction.types import ClassifiedLink, ExtractionResult

CONDITION_COLORS = {
    CONDITION_DONE: 'green',
    CONDITION_DISABLED: 'yellow',
    CONDITION_ERRORED: 'red',
}


def describe_link(link: ClassifiedLink) -> str:
    """
    One-line description of a classified link.

    Examples:
        "email    unsubscribe@example.com"
        "browser  https://example.com/unsub (default browser)"
    """
    line = f"{link.action_type:<8} {link.target}"
    if link.is_browser and link.open_externally:
        line += " (default browser)"
    return line


def print_result(source: str, result: ExtractionResult) -> None:
    """Print one extraction result in human-readable form."""
    click.echo(f"\n{source}")
    color = CONDITION_COLORS.get(result.condition, 'white')
    symbol = '✓' if result.condition == CONDITION_DONE else '✗'
    click.secho(f"  {symbol} Condition: {result.condition}", fg=color)

    if not result.has_links:
        click.echo("  No unsubscribe actions found")
        return

    if result.is_forwarded:
        click.secho("  ! Message appears to be forwarded", fg='yellow')
    click.echo(f"  Confirm: {result.confirm_text}")

    for index, link in enumerate(result.links, start=1):
        marker = '*' if index == 1 else ' '
        click.echo(f"  {marker}{index}. {describe_link(link)}")
