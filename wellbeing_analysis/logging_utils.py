# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from . import config

PACKAGE_LOGGER = "wellbeing_analysis"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class _SessionFilter(logging.Filter):
    def __init__(self, session: str):
        super().__init__()
        self._session = session

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session"):
            record.session = self._session
        return True


# =============================================================================
# PermaLogger
# =============================================================================
class PermaLogger:
    """
    - text log: rotating file + console, both opt-in
    - log dir priority: argument > PERMA_LOG_DIR > <project>/logs
    - duplicate handlers are never attached twice, propagate=False
    """

    def __init__(
        self,
        log_file_name: str = "wellbeing_analysis.log",
        log_dir: Optional[Union[str, Path]] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        console: Optional[bool] = None,
        file: Optional[bool] = None,
        level: Optional[str] = None,
        logger_name: str = PACKAGE_LOGGER,
    ):
        self.session_id = time.strftime("%Y%m%d_%H%M%S")
        self.base_dir = Path(log_dir or config.LOG_DIR).resolve()

        self.logger = logging.getLogger(logger_name)
        self.logger.propagate = False

        if not getattr(self.logger, "_perma_initialized", False):
            fmt = logging.Formatter(
                fmt="[%(asctime)s] %(levelname)s %(name)s [%(filename)s:%(lineno)d] "
                    "(session=%(session)s) - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            if not self.logger.handlers:
                self.logger.addHandler(logging.NullHandler())

            if config.FILE_LOG if file is None else file:
                self.base_dir.mkdir(parents=True, exist_ok=True)
                fh = RotatingFileHandler(
                    filename=str(self.base_dir / log_file_name),
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
                fh.setFormatter(fmt)
                fh.addFilter(_SessionFilter(self.session_id))
                self.logger.addHandler(fh)

            if config.CONSOLE_LOG if console is None else console:
                ch = logging.StreamHandler()
                ch.setFormatter(fmt)
                ch.addFilter(_SessionFilter(self.session_id))
                self.logger.addHandler(ch)

            self.logger._perma_initialized = True

        self.set_log_level(level or config.LOG_LEVEL)
        self.logger.debug(f"PermaLogger initialized. log_dir={self.base_dir}")

    # ----------------------------- public API -----------------------------

    def get_logger(self) -> logging.Logger:
        return self.logger

    def set_log_level(self, level: str) -> None:
        """Same level for the logger and every attached handler."""
        chosen = _LEVELS.get(str(level).upper(), logging.INFO)
        self.logger.setLevel(chosen)
        for h in self.logger.handlers:
            h.setLevel(chosen)

    def reset(self) -> None:
        """Detach every handler (used by tests and on reconfiguration)."""
        for h in list(self.logger.handlers):
            self.logger.removeHandler(h)
            h.close()
        self.logger._perma_initialized = False


def setup_logging(verbose: int = 0, **kwargs) -> logging.Logger:
    """
    CLI/server helper: console output on, WARNING by default,
    ``verbose`` 1 -> INFO, 2+ -> DEBUG. PERMA_LOG_LEVEL overrides the default.
    """
    kwargs.setdefault("console", True)
    if verbose:
        kwargs.setdefault("level", "DEBUG" if verbose > 1 else "INFO")
    elif os.environ.get("PERMA_LOG_LEVEL") is None:
        kwargs.setdefault("level", "WARNING")
    return PermaLogger(**kwargs).get_logger()
