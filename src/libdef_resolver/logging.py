from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV_VAR = "LIBDEF_RESOLVER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_CONFIGURED = False


def _level_number(name: str) -> int | None:
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else None


def _resolve_level(level: str | None) -> int:
    """Map ``level`` (or the environment override) to a ``logging`` level.

    An explicit unknown level is an error. An unknown environment value falls
    back to the default so importing the package never fails on it.
    """
    if level is not None:
        resolved = _level_number(level)
        if resolved is None:
            raise ValueError(f"Unknown log level: {level.strip().upper()}")
        return resolved
    resolved = _level_number(os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL)
    if resolved is None:
        return _level_number(DEFAULT_LOG_LEVEL)
    return resolved


def configure_logging(level: str | None = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        if level is not None:
            logging.getLogger().setLevel(_resolve_level(level))
        return

    logging.basicConfig(
        level=_resolve_level(level),
        format="%(message)s",
        stream=sys.stderr,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: str = "libdef_resolver"):
    configure_logging()
    return structlog.get_logger(name)
