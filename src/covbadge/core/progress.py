"""Human-readable command output.

Everything here writes to stderr through one rich console, so the badge and
report commands stay pipe-friendly. Structured logs are a separate channel
(see ``covbadge.core.logging``); while a spinner is live, console log
handlers are muted so the two never share a line.

Usage::

    status("Coverage report written", style="success")
    with spinner("Discovering coverage"):
        coverage = discover_coverage(config.coverage, root)
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

_console = Console(stderr=True)

# style name -> rich markup prefix
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "dry": "[cyan]~[/cyan] ",
    "info": "  ",
    "none": "",
}

_spinner_state = threading.local()


def is_console_suppressed() -> bool:
    return bool(getattr(_spinner_state, "active", False))


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Mute stderr/stdout log handlers for the duration of the block."""
    previous = is_console_suppressed()
    _spinner_state.active = True
    try:
        yield
    finally:
        _spinner_state.active = previous


def _is_tty() -> bool:
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def get_console() -> Console:
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one status line to stderr and mirror it to the debug log."""
    from covbadge.core.logging import get_logger

    _console.print(" " * indent + _STYLES.get(style, "") + message, highlight=False)
    get_logger("progress").debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


@contextmanager
def spinner(message: str, *, indent: int = 0) -> Iterator[None]:
    """Show a spinner on a terminal, or a single ``message...`` line otherwise."""
    label = " " * indent + message
    if not _is_tty():
        _console.print(f"{label}...", highlight=False)
        yield
        return

    with suppress_console_logs(), _console.status(f"[cyan]{label}[/cyan]", spinner="dots"):
        yield
