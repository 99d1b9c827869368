"""
logging_utils.py
----------------

Console and file logging setup for the demo entry point.

The library modules only create loggers (``logging.getLogger(__name__)``);
handlers are installed here, once, by whoever runs the program.
"""

__all__ = ["configure_logging", "ColorFormatter"]

import os
import time
import logging
from typing import Optional, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, init as colorama_init

PathLike = Union[str, os.PathLike]


class ColorFormatter(logging.Formatter):
    """Colorized console formatter."""
    COLORS = {
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = Style.RESET_ALL
        return (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{color}{record.levelname:<5s}{reset}] "
            f"{record.name}: {record.getMessage()}"
        )


def configure_logging(level: int = logging.INFO,
                      log_dir: Optional[PathLike] = None,
                      name: str = "sketchpath",
                      run_prefix: str = "sketch") -> Optional[Path]:
    """Configure colorized console logging and, optionally, a rotating log file.

    Args:
        level: Logger level.
        log_dir: Directory for the log file. No file handler when None.
        name: Logger to configure; existing handlers on it are replaced.
        run_prefix: Log file name prefix.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    colorama_init(strip=False)
    datefmt = "%H:%M:%S"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)

    ch = logging.StreamHandler()
    ch.setFormatter(ColorFormatter(datefmt=datefmt))
    logger.addHandler(ch)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y-%m-%d_%H%M%S")
        log_path = log_dir / f"{run_prefix}_PID{os.getpid()}_{ts}.log"

        mono_fmt = "[%(asctime)s] [%(levelname)-5s] %(name)s: %(message)s"
        fh = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5)
        fh.setFormatter(logging.Formatter(mono_fmt, datefmt))
        logger.addHandler(fh)

    logger.debug(f"Logging initialized - PID {os.getpid()}; file {log_path}")
    return log_path
