"""
Centralized application-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

cachetokens runs inside a host's render pipeline, so importing it leaves the
host's loguru sinks alone. Its records are disabled until either the host
calls `logger.enable("cachetokens")`, or a standalone process (the command
line) calls `logging_configure()`.

Features:
- A custom `LOG` function for token substitution diagnostics.
- Dynamic checking of the `beQuiet` flag to suppress logs when necessary.
- Records carry `extra["app"] == "cachetokens"` for host-side filtering.

Example:
    from cachetokens.lib.log import LOG
    LOG("Token 'user' skipped at offset 12")

Environment:
- Set `CTR_BEQUIET=True` to suppress detailed logging output.
"""

from loguru import logger
from typing import Any, TextIO
import sys

# Create a distinct logger instance for the package
app_logger = logger.bind(app="cachetokens")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >32}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.disable("cachetokens")


def logging_configure(sink: TextIO = sys.stderr) -> int:
    """
    Route cachetokens logging to a single sink for a standalone process.

    Replaces every existing sink, so only the command line, which owns its
    process, should call this.

    :param sink: Destination of the formatted records.
    :return: The loguru handler id of the new sink.
    """
    logger.remove()
    logger.enable("cachetokens")
    return logger.add(sink, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Checks the `beQuiet` flag in `appsettings` and logs the message
    only if logging is enabled. The record is attributed to the caller.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from cachetokens.config.settings import appsettings

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}", file=sys.stderr)
