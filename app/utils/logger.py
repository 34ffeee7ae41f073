"""Logging setup shared by the application and scripts.

All output goes to one daily-rotating log file plus the console, with
timestamps in US Eastern time.
"""
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pytz

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILENAME = "vms.log"

class ESTFormatter(logging.Formatter):
    """Formatter that converts time to Eastern Time."""
    def __init__(self, fmt=None, datefmt=None):
        super().__init__(fmt, datefmt)
        self.eastern = pytz.timezone('America/New_York')

    def formatTime(self, record, datefmt=None):
        """Format time in EST timezone."""
        ct = datetime.fromtimestamp(record.created, tz=self.eastern)
        if datefmt:
            s = ct.strftime(datefmt)
        else:
            t = ct.strftime("%Y-%m-%d %H:%M:%S")
            s = f"{t} EST"
        return s

class FlushingTimedRotatingFileHandler(logging.handlers.TimedRotatingFileHandler):
    """Rotating file handler that flushes after every record."""
    def emit(self, record):
        super().emit(record)
        if self.stream and hasattr(self.stream, 'flush'):
            self.stream.flush()

def configure_logging(log_dir: Optional[Path], level: int = logging.INFO) -> logging.Logger:
    """Attach file and console handlers to the root logger once.

    Args:
        log_dir: Directory for the rotating log file; None logs to console only
        level: Root log level

    Returns:
        The root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Don't add handlers twice (reloads, multiple apps in one process)
    if any(getattr(h, "_vms_handler", False) for h in root_logger.handlers):
        return root_logger

    formatter = ESTFormatter(LOG_FORMAT)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = FlushingTimedRotatingFileHandler(
            log_dir / LOG_FILENAME,
            when='midnight',
            interval=1,
            backupCount=30,  # Keep 30 days of logs
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler._vms_handler = True
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler._vms_handler = True
    root_logger.addHandler(console_handler)

    return root_logger

def setup_script_logger(name: str = "script", log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure logging for a standalone script and return its named logger."""
    if log_dir is None:
        from app.config import LOG_DIR
        log_dir = LOG_DIR
    configure_logging(log_dir)
    return logging.getLogger(name)
