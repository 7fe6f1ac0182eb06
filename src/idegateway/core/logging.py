"""structlog setup for ide-gateway.

All output goes through stdlib ``logging`` handlers, each rendering
structlog events with its own formatter. Server events are additionally
copied into the in-memory log buffer (see ``core.log_buffer``), and every
event raised while serving an HTTP request carries that request's id.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

from idegateway.core.log_buffer import capture_to_buffer

if TYPE_CHECKING:
    from idegateway.config.models import LoggingConfig, LogOutputConfig

# Third-party loggers kept at WARNING regardless of the configured level
_QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error")

_STREAMS = ("stderr", "stdout")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> str:
    """Use ``request_id`` for the current context, generating one if empty."""
    rid = request_id or uuid4().hex[:12]
    _request_id.set(rid)
    return rid


def clear_request_id() -> None:
    _request_id.set(None)


def _add_request_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    rid = get_request_id()
    if rid:
        event_dict["request_id"] = rid
    return event_dict


def _level_number(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    name = name.upper()
    if name == "WARN":
        name = "WARNING"
    return logging.getLevelNamesMapping().get(name, fallback)


def _output_handler(output: LogOutputConfig) -> logging.Handler:
    if output.destination in _STREAMS:
        return logging.StreamHandler(getattr(sys, output.destination))
    path = Path(output.destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _output_formatter(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        on_terminal = output.destination in _STREAMS and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(
            colors=on_terminal, pad_event_to=0, pad_level=False
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog through stdlib logging.

    Either pass a full ``LoggingConfig`` (one handler per output, each with an
    optional level of its own) or use ``json_format``/``level`` for a single
    stderr output. Safe to call again; previous handlers are replaced.
    """
    from idegateway.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level, logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_request_id,  # type: ignore[list-item]
    ]
    structlog.configure(
        processors=[
            *pre_chain,
            capture_to_buffer,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created before this call
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for output in config.outputs:
        handler = _output_handler(output)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(_output_formatter(output, pre_chain))
        root.addHandler(handler)
