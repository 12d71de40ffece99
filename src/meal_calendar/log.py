"""Logging setup, API key redaction and the stderr error banner."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from meal_calendar.errors import ClassifiedError

stderr_console = Console(stderr=True)

LOGGER_NAME = "meal_calendar"


class RedactSecrets(logging.Filter):
    """Replace known secrets in formatted log messages with asterisks."""

    def __init__(self, secrets: list[str]) -> None:
        super().__init__()
        self._secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        redacted = message
        for secret in self._secrets:
            redacted = redacted.replace(secret, "***")
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    level: str = "info",
    log_file: Path | None = None,
    secrets: list[str] | None = None,
) -> logging.Logger:
    """Configure the meal_calendar logger with RichHandler and optional file output."""
    from rich.logging import RichHandler

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.filters.clear()

    redactor = RedactSecrets(secrets or [])

    rich_handler = RichHandler(
        console=stderr_console,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    rich_handler.addFilter(redactor)
    logger.addHandler(rich_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        file_handler.addFilter(redactor)
        logger.addHandler(file_handler)

    return logger


def print_error_banner(error: ClassifiedError, console: Console | None = None) -> None:
    """Show the category message, with the technical detail underneath."""
    console = console or stderr_console
    console.print(f"[bold red]{error.user_message}[/bold red]")
    console.print(error.message, markup=False, style="dim")
