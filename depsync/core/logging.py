"""structlog on top of stdlib logging, rendered to stderr."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog
from structlog.types import Processor

LEVEL_ENV = "DEPSYNC_LOG_LEVEL"
FORMAT_ENV = "DEPSYNC_LOG_FORMAT"

# Third-party loggers that are noisy at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(fmt: str) -> Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Route structlog and stdlib records through one stderr handler.

    *level* and *fmt* fall back to ``DEPSYNC_LOG_LEVEL`` (default ``INFO``)
    and ``DEPSYNC_LOG_FORMAT`` (``console`` or ``json``). stdout is left
    to command output.
    """
    log_level = (level or os.environ.get(LEVEL_ENV) or "INFO").upper()
    log_format = (fmt or os.environ.get(FORMAT_ENV) or "console").lower()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers = {"depsync": {"level": log_level}}
    loggers.update({name: {"level": "WARNING"} for name in _QUIET_LOGGERS})

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "depsync": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "depsync",
                },
            },
            "root": {"handlers": ["stderr"], "level": log_level},
            "loggers": loggers,
        }
    )
