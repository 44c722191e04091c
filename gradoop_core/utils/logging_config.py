# gradoop_core/utils/logging_config.py
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from gradoop_core.utils.config import SETTINGS


def setup_logging(log_file: Optional[str] = None, level: Optional[Union[int, str]] = None):
    """
    Configure logging for applications embedding gradoop_core.
    The library itself only creates module loggers; call this once at startup.

    Falls back to GRADOOP_LOG_FILE / GRADOOP_LOG_LEVEL when arguments are omitted.
    """
    if log_file is None:
        log_file = SETTINGS.log_file or None
    if level is None:
        level = SETTINGS.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Create formatter
    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers (if any)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging configured (level=%s, file=%s)",
                      logging.getLevelName(level), log_file)

    return root_logger
