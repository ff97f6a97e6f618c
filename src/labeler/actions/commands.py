"""GitHub Actions workflow commands and step outputs.

The runner recognises specially formatted lines on stdout
(`::warning::message`) and turns them into run annotations, and reads
step outputs from the file named by GITHUB_OUTPUT. This module provides:
- WorkflowCommandHandler: a logging handler that renders records as
  workflow commands, so `logger.warning(...)` becomes a run annotation
- set_output: append a step output to the GITHUB_OUTPUT file
- set_failed: report the terminal failure of the run
"""

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Optional, TextIO


logger = logging.getLogger(__name__)


_LEVEL_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def escape_data(value: str) -> str:
    """Escape a workflow command message.

    The runner treats `%`, CR and LF specially in command data.
    """
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_command(command: str, message: str) -> str:
    """Render a workflow command line such as `::warning::message`."""
    return f"::{command}::{escape_data(message)}"


class ActionLogFormatter(logging.Formatter):
    """Formatter that appends `extra=` fields to the message.

    Example:
        >>> logger.error("GitHub API error", extra={"status_code": 404})
        ::error::GitHub API error (status_code=404)
    """

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = super().formatMessage(record)
        fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        ]
        if not fields:
            return message
        return f"{message} ({', '.join(fields)})"


class WorkflowCommandHandler(logging.StreamHandler):
    """Logging handler that writes records as GitHub workflow commands.

    DEBUG records become `::debug::` lines (only shown when step debug
    logging is enabled), WARNING becomes `::warning::`, ERROR and CRITICAL
    become `::error::`. INFO records are printed as plain log lines.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream if stream is not None else sys.stdout)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _LEVEL_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return format_command(command, message)


def configure_logging(level: int = logging.DEBUG) -> None:
    """Route all log records through the workflow command handler."""
    handler = WorkflowCommandHandler()
    handler.setFormatter(ActionLogFormatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Third-party HTTP clients are noisy at DEBUG.
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def set_output(name: str, value: str, output_path: Optional[str] = None) -> None:
    """Publish a step output.

    Outputs are appended to the GITHUB_OUTPUT file using the multi-line
    delimiter syntax, which is safe for any value. When no output file is
    available (running outside Actions), the output is logged instead.

    Args:
        name: Output name as declared in action.yml.
        value: Output value.
        output_path: Path to the output file. Defaults to GITHUB_OUTPUT.
    """
    path = output_path or os.environ.get("GITHUB_OUTPUT")
    if not path:
        logger.info("Output %s=%s", name, value)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError("Output contains the generated delimiter")

    with Path(path).open("a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def set_failed(message: str) -> int:
    """Report the run as failed.

    Logs the message at ERROR (rendered as an `::error::` annotation) and
    returns the process exit code to use.
    """
    logger.error(message)
    return 1
