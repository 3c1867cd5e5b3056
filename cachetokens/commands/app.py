"""
Defines the main Click command group for the cachetokens application.

This module provides:
- The root `cli` command group for the application.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of subcommands from other modules.
"""

import click
from cachetokens.commands.base import RichGroup
from cachetokens.commands.configuration import configuration
from cachetokens.commands.replace import replace
from cachetokens.commands.tokens import tokens


@click.group(
    cls=RichGroup,
    help="""
    Cacheable Token Replacements

    Replace delimited tokens in rendered output through registered callbacks.
    """,
)
@click.version_option(package_name="cachetokens", message="%(prog)s %(version)s")
def cli() -> None:
    """
    The root Click command group for cachetokens.
    """
    pass


# Explicitly annotate `cli` as `click.Group` for static type checking
cli: click.Group = cli

cli.add_command(replace)
cli.add_command(tokens)
cli.add_command(configuration)
