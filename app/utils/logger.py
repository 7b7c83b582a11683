# This file is part of the Chat-Relay project for logging and console management.
# Author: shiboli
# date: 2025-06-11
# Version: 0.2.0

import logging
from typing import Any, Dict, Iterable
from rich.logging import RichHandler
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

# Define a custom logging level for success messages
SUCCESS_LEVEL_NUM = 25

try:
    logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")
except AttributeError:
    pass  # Level already exists

def success_log(self, message, *args, **kwargs):
    if self.isEnabledFor(SUCCESS_LEVEL_NUM):
        self._log(SUCCESS_LEVEL_NUM, message, args, **kwargs)

# Register the custom success method to the logging.Logger class
if not hasattr(logging.Logger, 'success'):
    setattr(logging.Logger, 'success', success_log)

SECRET_MARKERS = ("KEY", "SECRET", "TOKEN", "PASSWORD")


def redact(data: Dict[str, Any], markers: Iterable[str] = SECRET_MARKERS) -> Dict[str, Any]:
    """Returns a copy of `data` with secret-looking values replaced by a set/unset marker."""
    redacted = {}
    for key, value in data.items():
        if any(marker in key.upper() for marker in markers):
            redacted[key] = "<set>" if value else "<unset>"
        else:
            redacted[key] = value
    return redacted


class ConsoleManager:
    """
    A singleton class that manages the console output for the Chat-Relay.
    It uses Rich for readable logging and console output.
    """
    def __init__(self):
        custom_theme = Theme({
            "logging.level.success": "bold green"
        })
        self._console = Console(theme=custom_theme)
        self._logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger("Chat-Relay")
        if logger.hasHandlers():
            # If logger is already configured, don't add handlers again
            return logger

        logger.setLevel(logging.INFO)
        handler = RichHandler(
            console=self._console,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            keywords=["INFO", "SUCCESS", "WARNING", "ERROR", "DEBUG", "CRITICAL"],
            show_path=False
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        return logger

    def info(self, message: str):
        self._logger.info(message)

    def success(self, message: str):
        self._logger.success(message)

    def warning(self, message: str):
        self._logger.warning(message)

    def error(self, message: str):
        self._logger.error(message)

    def exception(self, message: str):
        # Only meaningful inside an `except` block.
        self._logger.exception(message)

    def rule(self, title: str, style: str = "cyan"):
        self._console.rule(f"[bold {style}]{title}[/bold {style}]", style=style)

    def display_data_as_table(self, data: dict, title: str):
        table = Table(show_header=True, header_style="bold magenta", box=None, show_edge=False)
        table.add_column("Setting", style="cyan", no_wrap=True, width=28)
        table.add_column("Value", style="white")

        for key, value in data.items():
            if isinstance(value, list):
                table.add_row(key, ", ".join(map(str, value or [])))
            else:
                table.add_row(key, str(value))

        panel = Panel(table, title=f"[bold green]✓ {title}[/bold green]", border_style="green")
        self._console.print(panel)

# Create a singleton instance for global use
console = ConsoleManager()
