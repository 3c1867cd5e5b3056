"""
Token Replacement Command

Runs the replacement engine over a file or stdin, the way the render hook
would run it over a page, and writes the result to stdout.

Command:
- cachetokens replace [FILE] -e <module>: Replace tokens registered by <module>.
"""

import os
import sys
from typing import Optional, TextIO
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from cachetokens.commands.base import RichCommand, rich_help
from cachetokens.config.settings import appsettings
from cachetokens.lib.errors import TokenError
from cachetokens.lib.extensions import extensions_load
from cachetokens.lib.log import LOG
from cachetokens.lib.registry import TokenRegistry
from cachetokens.lib.replacements import TokenReplacements
from cachetokens.models.dataModel import (
    OccurrenceStatus,
    RequestContext,
    SubstitutionResult,
)

console: Console = Console(stderr=True)

STATUS_STYLE: dict[OccurrenceStatus, str] = {
    OccurrenceStatus.SUCCEEDED: "green",
    OccurrenceStatus.CALLBACK_FAILED: "bold red",
}


def registry_build(extensions: tuple[str, ...]) -> TokenRegistry:
    """
    Build a registry from extension modules, exiting on failure.

    The current directory is importable, as with `python -m`, so that
    `-e mysite.tokens` finds a local package without PYTHONPATH.

    :param extensions: Dotted module paths of the extensions.
    :return: The populated registry.
    """
    cwd: str = os.getcwd()
    if extensions and cwd not in sys.path:
        sys.path.insert(0, cwd)

    registry: TokenRegistry = TokenRegistry()
    try:
        extensions_load(extensions, registry)
    except TokenError as e:
        LOG(f"Extension loading failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except Exception as e:
        LOG(f"Extension raised while registering: {type(e).__name__}: {e}")
        console.print(
            f"[bold red]Extension error:[/bold red] {escape(f'{type(e).__name__}: {e}')}"
        )
        sys.exit(1)
    return registry


def diagnostics_print(result: SubstitutionResult) -> None:
    """
    Print a table of per-occurrence diagnostics.

    :param result: Result of a substitution pass.
    """
    if not result.diagnostics:
        console.print("[yellow]No tokens found.[/yellow]")
        return
    table: Table = Table(title=f"{result.replaced}/{len(result.diagnostics)} tokens replaced")
    table.add_column("Token", style="cyan")
    table.add_column("Span")
    table.add_column("Status")
    table.add_column("Detail")
    for d in result.diagnostics:
        style: str = STATUS_STYLE.get(d.status, "yellow")
        table.add_row(
            escape(d.name) or "<empty>",
            f"{d.start}-{d.end}",
            f"[{style}]{d.status.value}[/{style}]",
            escape(d.detail or ""),
        )
    console.print(table)


@click.command(
    cls=RichCommand,
    short_help="Replace tokens in a file or stdin",
    help=rich_help(
        command="replace",
        description="Replace tokens in a file or stdin and write the result to stdout.",
        usage="cachetokens replace [FILE] -e <module> [--manual] [--diagnostics]",
        args={
            "[FILE]": "Text to process; stdin if omitted.",
            "-e <module>": "Extension module defining tokens_register(registry).",
        },
    ),
)
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "-e",
    "--extension",
    "extensions",
    multiple=True,
    help="Extension module registering tokens (repeatable)",
)
@click.option("--admin", is_flag=True, help="Treat the request as administrative")
@click.option("--path", type=str, default=None, help="Path of the simulated request")
@click.option(
    "--manual", is_flag=True, help="Call replaceTokens directly, ignoring automatic mode"
)
@click.option(
    "--diagnostics", is_flag=True, help="Print per-token diagnostics to stderr"
)
def replace(
    source: TextIO,
    extensions: tuple[str, ...],
    admin: bool,
    path: Optional[str],
    manual: bool,
    diagnostics: bool,
) -> None:
    """
    Replace tokens in SOURCE through the render hook or the manual API.
    """
    registry: TokenRegistry = registry_build(extensions)
    replacements: TokenReplacements = TokenReplacements(appsettings, registry)
    if replacements.configError:
        console.print(
            f"[bold red]Invalid configuration:[/bold red] {escape(str(replacements.configError))}"
        )

    context: RequestContext = RequestContext(path=path, admin=admin)
    text: str = source.read()
    result: SubstitutionResult = (
        replacements.substitute(text, context)
        if manual
        else replacements.hook.run(text, context)
    )

    click.echo(result.text, nl=False)
    if diagnostics:
        diagnostics_print(result)
