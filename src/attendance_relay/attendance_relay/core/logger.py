from __future__ import annotations

import logging
import re

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from .constants import TOKEN_PREVIEW_LENGTH

# Package logger, whichever import path the package was loaded through.
ROOT_LOGGER_NAME = __name__.rsplit(".core.", 1)[0]

custom_theme = Theme(
    {
        "info": "dim cyan",
        "warning": "magenta",
        "error": "bold red",
        "batch": "bold green",
    }
)

console = Console(theme=custom_theme)


class TokenRedactionFilter(logging.Filter):
    """Masks session cookie values that slip into log messages.

    Only the first few characters of a ``connect.sid`` value survive.
    """

    COOKIE_PATTERN = re.compile(r"(connect\.sid=)([^;\s]+)", re.I)
    SIGNED_SID_PATTERN = re.compile(r"\bs%3A[A-Za-z0-9_\-.%]+", re.I)

    @staticmethod
    def mask(value: str) -> str:
        return f"{value[:TOKEN_PREVIEW_LENGTH]}..."

    def filter(self, record: logging.LogRecord) -> bool:
        if not isinstance(record.msg, str):
            return True

        if record.args:
            record.msg = record.getMessage()
            record.args = None

        msg = self.COOKIE_PATTERN.sub(lambda m: m.group(1) + self.mask(m.group(2)), record.msg)
        msg = self.SIGNED_SID_PATTERN.sub(lambda m: self.mask(m.group(0)), msg)
        record.msg = msg
        return True


def setup_logger(log_level: str = "INFO") -> logging.Logger:
    """Configure the package logger with Rich output.

    Safe to call more than once; handlers are only attached the first time.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logger.setLevel(level)

    if not logger.handlers:
        rich_handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=False,
            show_path=False,
            show_time=True,
            omit_repeated_times=True,
            keywords=["batch", "pending", "success", "failed"],
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        rich_handler.addFilter(TokenRedactionFilter())
        logger.addHandler(rich_handler)

    return logger
