"""Shared Rich console and logging setup for consistent output."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)

# Set by the --verbose flag on the root command.
verbose = False


def setup_logging(level: str = "info", logs_dir: Path | None = None) -> None:
    """Configure the root logger for one CLI invocation.

    Warnings and errors go to stderr through Rich (everything with
    ``--verbose``). When ``logs_dir`` exists, records at ``level`` and
    above are also appended to ``sharectl.log`` there.
    """
    stderr_handler = RichHandler(console=err_console, show_path=False, show_time=False)
    stderr_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handlers: list[logging.Handler] = [stderr_handler]

    if logs_dir is not None and logs_dir.is_dir():
        file_handler = logging.FileHandler(logs_dir / "sharectl.log")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        handlers=handlers,
        force=True,
    )
