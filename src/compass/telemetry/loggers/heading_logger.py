"""
Session log files for heading fusion and deviation alerts.

One HeadingLogger exists per run. It owns a session directory and two
loggers that never propagate to the root logger:

- heading.fusion -> fusion.log: raw vs. display-compensated azimuths and
  samples that produced no heading
- heading.alerts -> alerts.log: calibrations and every alert handed to the
  haptic driver

Both files receive everything from DEBUG up; only WARNING and above is echoed
to the console so a demo run stays readable.

Usage:
    from compass.telemetry.loggers.heading_logger import get_heading_logger

    heading_logger = get_heading_logger(session_dir=Path("logs/session_2024-01-15_10-30-00"))
    heading_logger.alerts.info("Deviation 41.0° -> ALERT")
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_FILES = {
    "fusion": "fusion.log",
    "alerts": "alerts.log",
}

LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


class HeadingLogger:
    """Per-run owner of the heading.fusion and heading.alerts log files."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Optional[Path] = None):
        # Later constructions hand back the live session unchanged
        if self._initialized:
            return

        self.log_dir = Path(session_dir) if session_dir is not None else self._default_session_dir()
        self.log_dir.mkdir(parents=True, exist_ok=True)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        for name, filename in LOGGER_FILES.items():
            setattr(self, name, self._build_logger(name, self.log_dir / filename, formatter))

        self._initialized = True

    @staticmethod
    def _default_session_dir() -> Path:
        from compass.utils.config import Config

        stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        return Path(Config.HEADING_LOG_DIR) / f"session_{stamp}"

    @staticmethod
    def _build_logger(name: str, path: Path, formatter: logging.Formatter) -> logging.Logger:
        logger = logging.getLogger(f"heading.{name}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        # A previous session may have left handlers on the same named logger
        logger.handlers.clear()

        file_handler = logging.FileHandler(path, mode='w')
        file_handler.setLevel(logging.DEBUG)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        for handler in (file_handler, console_handler):
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        return logger

    def close(self):
        """Flush and detach every handler this session attached."""
        for name in LOGGER_FILES:
            logger = getattr(self, name, None)
            if logger is None:
                continue
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    @classmethod
    def reset_instance(cls):
        """Close the live session, if any, so the next construction starts fresh."""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None
        cls._initialized = False


_heading_logger = None


def get_heading_logger(session_dir: Optional[Path] = None) -> HeadingLogger:
    """Return the session logger, creating it on first use."""
    global _heading_logger
    if _heading_logger is None:
        _heading_logger = HeadingLogger(session_dir)
    return _heading_logger


def close_heading_logger() -> None:
    """End the current session; the next get_heading_logger call opens a new one."""
    global _heading_logger
    HeadingLogger.reset_instance()
    _heading_logger = None
