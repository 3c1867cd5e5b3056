"""
Token Listing Command

Lists the tokens contributed by extension modules together with their
validity, without invoking any callback.

Command:
- cachetokens tokens -e <module>: Show the tokens registered by <module>.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from cachetokens.commands.base import RichCommand, rich_help
from cachetokens.commands.replace import registry_build
from cachetokens.lib.registry import TokenRegistry
from cachetokens.models.dataModel import TokenDiagnostic

console: Console = Console()


def _mark(valid: bool) -> str:
    return "[green]yes[/green]" if valid else "[bold red]no[/bold red]"


@click.command(
    cls=RichCommand,
    short_help="List registered tokens",
    help=rich_help(
        command="tokens",
        description="List registered tokens and check their names and callbacks.",
        usage="cachetokens tokens -e <module>",
        args={"-e <module>": "Extension module defining tokens_register(registry)."},
    ),
)
@click.option(
    "-e",
    "--extension",
    "extensions",
    multiple=True,
    help="Extension module registering tokens (repeatable)",
)
def tokens(extensions: tuple[str, ...]) -> None:
    """
    Show every registered token with its diagnostics.
    """
    registry: TokenRegistry = registry_build(extensions)
    diagnostics: list[TokenDiagnostic] = registry.diagnose()
    if not diagnostics:
        console.print("[yellow]No tokens registered.[/yellow]")
        return

    table: Table = Table(title=f"{len(diagnostics)} registered tokens")
    table.add_column("Token", style="cyan")
    table.add_column("Valid name")
    table.add_column("Valid callback")
    table.add_column("Description")
    for d in diagnostics:
        table.add_row(
            d.name,
            _mark(d.nameValid),
            _mark(d.callbackValid) if d.callbackValid else f"{_mark(False)} ({escape(d.reason or '')})",
            escape(d.description),
        )
    console.print(table)
