"""Standard library logging setup.

Application code logs through ``logfire``; this only tames the stdlib
loggers of the libraries underneath (uvicorn, SQLAlchemy, asyncpg, alembic).
"""

import logging
import sys

from forum.config import Settings

# Library loggers that are too chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "asyncpg")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Migration progress is worth seeing even outside debug
    logging.getLogger("alembic").setLevel(logging.INFO)
    logging.getLogger("forum").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
