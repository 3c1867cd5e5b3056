"""
Configuration Command

Shows the effective settings, whether the delimiters form a usable
grammar, and an example token written with the current delimiters.

Command:
- cachetokens config: Display the configuration.
"""

import sys
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from cachetokens.commands.base import RichCommand, rich_help
from cachetokens.config.settings import CONFIG_FILE, App, appsettings, delimiterConfig_build
from cachetokens.lib.errors import InvalidConfiguration
from cachetokens.lib.parser import occurrence_serialize
from cachetokens.models.dataModel import DelimiterConfig

console: Console = Console()


def example_token(config: DelimiterConfig) -> str:
    """Example token exercising every delimiter of the configuration."""
    return occurrence_serialize(
        "token_name",
        config,
        positional=["positional"],
        named={"key": "value", "list": ["one", "two"]},
    )


def settings_table(settings: App) -> Table:
    table: Table = Table(title=f"Settings ({CONFIG_FILE})")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        table.add_row(name, escape(repr(value)))
    return table


@click.command(
    "config",
    cls=RichCommand,
    short_help="Show configuration",
    help=rich_help(
        command="config",
        description="Show the effective configuration and an example token.",
        usage="cachetokens config",
        args={"<None>": "no arguments"},
    ),
)
def configuration() -> None:
    """
    Display settings, delimiter validity and an example token.
    """
    console.print(settings_table(appsettings))
    try:
        config: DelimiterConfig = delimiterConfig_build(appsettings)
    except InvalidConfiguration as e:
        console.print(f"[bold red]Invalid delimiters:[/bold red] {escape(str(e))}")
        console.print("[bold red]Automatic replacements are disabled.[/bold red]")
        sys.exit(1)

    mode: str = "enabled" if appsettings.automaticModeEnabled else "disabled"
    console.print(f"[bold green]Delimiters valid.[/bold green] Automatic replacements {mode}.")
    console.print(f"Example token: [yellow]{escape(example_token(config))}[/yellow]")
