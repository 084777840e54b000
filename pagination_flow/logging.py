from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    level: str = "INFO",
    *,
    app_name: str | None = None,
    app_env: str | None = None,
    sql_echo: bool = False,
) -> None:
    """Route structlog and stdlib records through one JSON stream on stdout.

    ``app_name``/``app_env`` are bound as context so every event carries
    them. SQLAlchemy's engine logger stays at WARNING unless ``sql_echo``.
    """
    logging_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=logging_level, format="%(message)s", stream=sys.stdout)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(logging_level),
        cache_logger_on_first_use=True,
    )

    app_context = {"app": app_name, "env": app_env}
    structlog.contextvars.bind_contextvars(**{k: v for k, v in app_context.items() if v})


def get_logger(name: str):
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
