"""
Logger implementation for helmrun diagnostics.

helm's own output is inherited by the child processes; this logger only
carries helmrun's account of the run. Console records go to stderr so they
never interleave with a plan printed on stdout.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig

DEFAULT_LOG_FILE = Path.home() / ".helmrun" / "helmrun.log"

_CONSOLE_FORMAT = "helmrun: %(levelname)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"


class HelmRunLogger(ILogger):
    """
    ILogger backed by a stdlib logger that does not propagate to root.

    The file handler, when enabled, rotates at 10MB and keeps three backups.
    """

    def __init__(
        self,
        name: str = "helmrun",
        level: str = "info",
        console: bool = True,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Threshold for every handler (debug, info, warning, error)
            console: Write records to stderr
            log_file: Also write records to this rotating file

        Raises:
            ValueError: If level is not a known level name
        """
        threshold = logging.getLevelName(level.upper())
        if not isinstance(threshold, int):
            raise ValueError(f"unknown log level: {level!r}")

        self._logger = logging.getLogger(name)
        self._logger.handlers.clear()
        self._logger.propagate = False
        self._logger.setLevel(threshold)
        self.log_file = log_file

        if console:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
            self._logger.addHandler(handler)

        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=3)
            handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            self._logger.addHandler(handler)

    @classmethod
    def from_config(cls, config: LoggingConfig) -> HelmRunLogger:
        """Build the logger described by the [logging] settings section."""
        log_file = (config.file_path or DEFAULT_LOG_FILE) if config.file else None
        return cls(level=config.level, console=config.console, log_file=log_file)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)


class NullLogger(ILogger):
    """Discards everything; used when no logger is registered."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass
