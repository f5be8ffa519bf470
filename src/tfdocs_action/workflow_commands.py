"""GitHub Actions workflow command output.

The Actions runner parses specially prefixed lines on stdout/stderr
(``::debug::``, ``::warning::``, ``::error::``) and step outputs appended to
the file named by ``$GITHUB_OUTPUT``. This module renders standard logging
records in that format so every other module can keep using
``logging.getLogger(__name__)``.

Public API:
    WorkflowCommandFormatter: logging.Formatter for workflow commands
    configure_logging: Install the formatter on the root logger
    set_output: Append a step output value
"""

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    """Escape a message for a workflow command (runner unescapes these)."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Format log records as GitHub workflow commands.

    DEBUG records become ``::debug::``, WARNING becomes ``::warning::``,
    ERROR and above become ``::error::``. INFO records are written as plain
    lines so they show up in the job log without annotation.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{_escape_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{_escape_data(message)}"
        if record.levelno >= logging.INFO:
            return message
        return f"::debug::{_escape_data(message)}"


def configure_logging(level: int | str = logging.DEBUG, stream: TextIO | None = None) -> None:
    """Route all logging through a single workflow-command handler.

    Args:
        level: Root log level (name or number)
        stream: Output stream (default: stderr)
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def set_output(name: str, value: object, output_path: str | None = None) -> bool:
    """Append ``name=value`` to the GitHub step output file.

    Args:
        name: Output name
        value: Output value (converted with str())
        output_path: Output file (default: $GITHUB_OUTPUT)

    Returns:
        True if the value was written, False when no output file is available
    """
    path = output_path or os.environ.get("GITHUB_OUTPUT")
    if not path:
        logger.debug(f"GITHUB_OUTPUT not set, skipping output {name}={value}")
        return False

    with Path(path).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}={value}\n")
    logger.debug(f"Set output {name}={value}")
    return True


__all__ = ["WorkflowCommandFormatter", "configure_logging", "set_output"]
