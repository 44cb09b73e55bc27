"""structlog setup for folio processes.

All records, structlog or stdlib, go to stderr through one
``ProcessorFormatter``: colored console lines by default, JSON lines
with ``--log-json``. Service calls run inside :func:`operation`, which
binds ``op`` (plus ids such as ``post_id``) to every record emitted
during the call. Guest e-mail addresses and database passwords never
reach the log output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import Any, TextIO

import structlog

MASK = "***"
PRIVATE_FIELDS = frozenset({"email", "password"})

# Third-party loggers pinned regardless of --verbose.
_PINNED_LEVELS = {"sqlalchemy": logging.WARNING}


def mask_private_fields(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace values of :data:`PRIVATE_FIELDS` keys with :data:`MASK`."""
    for key in PRIVATE_FIELDS.intersection(event_dict):
        event_dict[key] = MASK
    return event_dict


@contextmanager
def operation(op: str, **context: Any) -> Iterator[None]:
    """Tag every record logged inside the block with *op* and *context*."""
    with structlog.contextvars.bound_contextvars(op=op, **context):
        yield


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        mask_private_fields,
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route folio and library logs to *stream* (stderr by default).

    Args:
        verbose: Let ``folio.*`` loggers emit DEBUG. Otherwise WARNING+.
        log_json: One JSON object per line instead of console text.
        stream: Destination, for embedding processes that capture logs.
    """
    out = stream if stream is not None else sys.stderr
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    final: structlog.types.Processor
    if log_json:
        final = structlog.processors.JSONRenderer()
    else:
        final = structlog.dev.ConsoleRenderer(colors=out.isatty())

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, final],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("folio").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in _PINNED_LEVELS.items():
        logging.getLogger(name).setLevel(level)
