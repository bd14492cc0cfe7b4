"""Logging setup: structlog events routed through the stdlib root handler.

Everything goes to stderr so stdout stays reserved for command output.
``--log-json`` switches the renderer to one JSON object per line; the
default is structlog's console renderer, colored only on a TTY.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Libraries whose DEBUG/INFO chatter is never useful to a followctl user.
_QUIET_LIBRARIES = ("sqlalchemy", "alembic")


def _pre_chain(*, log_json: bool) -> list[structlog.types.Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_json:
        chain.append(structlog.processors.format_exc_info)
    return chain


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and configure structlog.

    Safe to call repeatedly; each call replaces the previous root handler.

    Args:
        verbose: ``followctl.*`` loggers emit DEBUG and up instead of WARNING.
        log_json: Render JSON lines instead of human console output.
    """
    pre_chain = _pre_chain(log_json=log_json)
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("followctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
