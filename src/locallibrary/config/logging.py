"""Logging setup for the catalog CLI."""

from __future__ import annotations

import logging
from typing import Final

from .env import optional_env_var
from .errors import InvalidConfigurationError

LOG_LEVEL_ENV: Final[str] = "LOCALLIBRARY_LOG_LEVEL"

# driver loggers that repeat every statement at INFO
_QUIET_LOGGERS: Final[tuple[str, ...]] = ("aiosqlite", "alembic.runtime.migration")


def log_level_from_env(default: int = logging.INFO) -> int:
    """Read ``LOCALLIBRARY_LOG_LEVEL`` as a level name such as ``DEBUG``."""

    raw = optional_env_var(LOG_LEVEL_ENV)
    if raw is None:
        return default
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise InvalidConfigurationError(f"{LOG_LEVEL_ENV} is not a log level: {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    ``level`` defaults to ``LOCALLIBRARY_LOG_LEVEL``, else INFO. Pass ``force=True``
    to reconfigure during tests.
    """

    resolved = log_level_from_env() if level is None else level
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
