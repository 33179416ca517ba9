from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

from typing_extensions import override

if TYPE_CHECKING:
    from rich.console import Console


class RichLogHandler(logging.Handler):
    """Custom logging handler to use Rich Console."""

    def __init__(self, console: Console, *args: Any, **kwargs: Any) -> None:
        """Initialize the log handler.

        Args:
            console: Rich console instance.
            *args: Additional arguments for the logging handler.
            **kwargs: Additional keyword arguments for the logging handler.
        """
        super().__init__(*args, **kwargs)
        self.console = console

    @override
    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self.console.print(msg, soft_wrap=True)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def configure_logging(console: Console, *, verbose: bool = False) -> None:
    """Route the package logs to the console."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "rich": {"format": "%(message)s"},
            },
            "handlers": {
                "console": {
                    "()": RichLogHandler,
                    "console": console,
                    "formatter": "rich",
                },
            },
            "loggers": {
                "ecs_scheduled_deploy": {
                    "level": "DEBUG" if verbose else "INFO",
                    "handlers": ["console"],
                },
            },
        },
    )
