"""Logging setup for covbadge commands.

Events go through structlog and are rendered by stdlib handlers, one per
configured output. Every event of one CLI invocation carries the same
``run_id``. Console handlers go quiet while a spinner owns the terminal.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from covbadge.config.models import LoggingConfig, LogOutputConfig

_current_run: ContextVar[str | None] = ContextVar("covbadge_run_id", default=None)


def get_run_id() -> str | None:
    return _current_run.get()


def set_run_id(run_id: str | None = None) -> str:
    """Bind the id shared by every event of this invocation."""
    value = run_id or uuid4().hex[:12]
    _current_run.set(value)
    return value


def clear_run_id() -> None:
    _current_run.set(None)


def _inject_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    run_id = _current_run.get()
    if run_id is not None:
        event_dict.setdefault("run_id", run_id)
    return event_dict


def _level_number(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


class ConsoleSuppressingFilter(logging.Filter):
    """Drop records while a spinner is running.

    Only attached to stderr/stdout handlers.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from covbadge.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _stream_for(destination: str) -> TextIO | None:
    if destination == "stderr":
        return sys.stderr
    if destination == "stdout":
        return sys.stdout
    return None


def _build_handler(output: LogOutputConfig) -> logging.Handler:
    stream = _stream_for(output.destination)
    if stream is None:
        log_path = Path(output.destination)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, mode="a", encoding="utf-8")

    handler = logging.StreamHandler(stream)
    handler.addFilter(ConsoleSuppressingFilter())
    return handler


def _build_formatter(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        stream = _stream_for(output.destination)
        renderer = structlog.dev.ConsoleRenderer(
            colors=stream is not None and stream.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install structlog and one stdlib handler per output.

    A ``config`` wins over ``json_format``/``level``, which only describe a
    single stderr output. May be called again; earlier handlers are replaced.
    """
    from covbadge.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level, logging.WARNING)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _inject_run_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(root_level)

    # cancelled discovery reads are reported by asyncio at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    for output in config.outputs:
        handler = _build_handler(output)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(_build_formatter(output, pre_chain))
        root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name else logger  # type: ignore[no-any-return]
