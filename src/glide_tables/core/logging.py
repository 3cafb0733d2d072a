# src/glide_tables/core/logging.py
"""Log output for applications using glide_tables.

Library modules log through structlog.get_logger(__name__) and never
configure anything on import. Table and stash operations bind ``table_id``
and ``stash_id`` with structlog.contextvars, so events emitted deep in chunk
dispatch or the transport still say which table they belong to.

configure_logging() is called once by an application (the glide-tables CLI
does it in its callback). It renders structlog events and stdlib records
(httpx, dynaconf) through the same formatter, and masks credentials.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# httpx/httpcore log every connection and header exchange at DEBUG.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")

_CREDENTIAL_KEYS = frozenset({"token", "authorization", "api_key"})

REDACTED = "***"


def redact_credentials(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Mask credential-bearing keys wherever an event carries them."""
    for key in event_dict.keys() & _CREDENTIAL_KEYS:
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def _drop_formatter_keys(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str | int = "WARNING",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to one stream.

    Args:
        json_output: One JSON object per line instead of console rendering
        level: Root level name or number; the transport loggers never go
            below WARNING
        stream: Output stream (defaults to sys.stdout at call time)
    """
    log_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")
    out = stream if stream is not None else sys.stdout

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_credentials,
    ]
    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=out.isatty())
    )
    # ConsoleRenderer formats exceptions itself
    exc_processors: list[Any] = [structlog.processors.format_exc_info] if json_output else []

    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure repeatedly
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[_drop_formatter_keys, *exc_processors, renderer],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
