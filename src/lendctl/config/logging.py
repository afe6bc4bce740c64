"""structlog setup for lendctl.

Log lines go to stderr so they never mix with command output on stdout:
console rendering by default, JSON lines with ``--log-json``. Stdlib
loggers share the same processor chain through ``ProcessorFormatter``.

Access keys are handed to borrowers and must not leak into logs, so any
``access_key`` field is masked before rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from structlog.types import EventDict, Processor

REDACTED = "<redacted>"

# Libraries that stay at WARNING even with --verbose.
_QUIET_LIBRARIES = ("sqlalchemy",)


def redact_access_keys(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
    """Mask ``access_key`` values in an event."""
    if "access_key" in event_dict:
        event_dict["access_key"] = REDACTED
    return event_dict


def bind_caller(caller: str | None) -> None:
    """Attach *caller* to every log line of the current invocation."""
    structlog.contextvars.clear_contextvars()
    if caller:
        structlog.contextvars.bind_contextvars(caller=caller)


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_access_keys,
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to *stream* (default: stderr).

    Args:
        verbose: Lower the ``lendctl`` loggers to DEBUG. Otherwise WARNING.
        log_json: Render JSON lines instead of the console format.
        stream: Destination for log lines.
    """
    out = stream or sys.stderr
    shared = _shared_processors()

    renderer: Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("lendctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
