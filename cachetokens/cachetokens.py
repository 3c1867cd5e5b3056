"""
cachetokens main module.

Command line entry point for the cacheable token replacement engine: a
post-render, post-cache substitution pass that resolves delimited tokens
such as `{{user|format:short}}` through registered callbacks.

Usage:
    Show configuration and an example token:
        $ cachetokens config

    List tokens contributed by an extension module:
        $ cachetokens tokens -e mysite.tokens

    Replace tokens in a rendered page:
        $ cachetokens replace page.html -e mysite.tokens --diagnostics
        $ cat page.html | cachetokens replace -e mysite.tokens --path /blog/
"""

from typing import Final
from cachetokens.commands.app import cli
from cachetokens.lib.log import logging_configure

__version__: Final[str] = "0.1.0"


def main() -> None:
    """Run the cachetokens command line."""
    logging_configure()
    cli(prog_name="cachetokens")


if __name__ == "__main__":
    main()
