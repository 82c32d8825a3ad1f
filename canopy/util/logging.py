"""Stdlib logging setup.

Application code logs through logfire. Third-party libraries (uvicorn, httpx,
SQLAlchemy, alembic) write to stdlib loggers; their records are forwarded to
logfire so both end up in the same console and trace stream.
"""

import logging

import logfire

from canopy.config import Settings

# Libraries that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def setup_logging(settings: Settings) -> None:
    """Route stdlib log records into logfire.

    Call after ``configure_logfire`` so the handler emits with the service's
    configuration.
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL statements only in debug; spans from instrument_sqlalchemy cover the rest
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
