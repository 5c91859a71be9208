"""structlog configuration for variantctl.

Stdlib records (the domain and infrastructure layers log through
``logging.getLogger(__name__)``) and structlog records share one
processor chain and one stderr handler:

- Human (default): console rendering, colored on a terminal
- JSON (--log-json): one JSON object per line

Once a command opens its catalog, the catalog path and item handle are
bound as context and appear on every record that follows.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

# Chatty third-party loggers held at WARNING even under --verbose.
QUIET_LOGGERS: tuple[str, ...] = ("ruamel",)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging to stderr through structlog.

    Safe to call repeatedly: the root handler is replaced, not stacked,
    and context bound by an earlier run is dropped.

    Args:
        verbose: DEBUG for ``variantctl.*`` loggers; WARNING otherwise.
        log_json: Render JSON lines instead of console output.
    """
    structlog.contextvars.clear_contextvars()
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("variantctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_catalog(path: Path | None, handle: str | None = None) -> None:
    """Tag subsequent log records with the catalog in use.

    Unset values are not bound, so records never carry ``catalog=None``.
    """
    context = {"catalog": str(path) if path is not None else None, "handle": handle}
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in context.items() if value is not None}
    )
