"""structlog configuration for gemctl.

Diagnostics only; user-facing messages go through
:class:`gemctl.output.console.Shell`.  Every record (structlog or stdlib)
ends up on stderr, rendered either for a console or as JSON lines
(``--log-json``).
"""

from __future__ import annotations

import logging
import sys

import structlog

# Libraries that would otherwise inherit gemctl's DEBUG level.
QUIET_LOGGERS = ("pluggy", "urllib3")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(*, log_json: bool, no_color: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty() and not no_color)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    no_color: bool = False,
) -> None:
    """Route gemctl and stdlib logging through structlog to stderr.

    Safe to call more than once per process: the root handler is replaced,
    not added to.

    Args:
        verbose: Let ``gemctl.*`` loggers emit DEBUG records.
        log_json: One JSON object per line instead of console rendering.
        no_color: Never colorize console rendering.
    """
    pre_chain = _pre_chain()
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
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json=log_json, no_color=no_color),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("gemctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
