"""structlog configuration for monoctl.

Everything diagnostic goes to one stderr stream, shared with the ``each``
progress lines, so stdout carries only the rendered result and whatever the
tasks themselves print. Two renderers:
- Human (default): console output, colored only when the stream is a TTY
- JSON (--log-json): one JSON object per line

Level policy for the ``monoctl`` logger tree:

=========  =======  ============================================
flags      level    shows
=========  =======  ============================================
(none)     WARNING  skipped descriptors, unknown --skip names
-v         DEBUG    plus plan details and every task command line
-q         ERROR    nothing but failures
=========  =======  ============================================
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def _package_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to *stream* (default: stderr).

    Safe to call more than once; each call replaces the root handler.
    ``verbose`` wins over ``quiet``.
    """
    out = stream if stream is not None else sys.stderr
    level = _package_level(verbose=verbose, quiet=quiet)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("monoctl").setLevel(level)
