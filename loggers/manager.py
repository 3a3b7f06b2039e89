"""
Central logging management.
Each companion subsystem writes to its own timestamped file.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime
from typing import Union
from dotenv import load_dotenv
from .formatters import InternalFormatter, EventFormatter, ConsoleFormatter
from .loggers import SafeStreamHandler

def _level_from_env(logger_name: str) -> int:
    # 'companion.system' -> LOG_LEVEL_COMPANION_SYSTEM
    key = "LOG_LEVEL_" + logger_name.upper().replace('.', '_')
    level = logging.getLevelName(os.getenv(key, 'INFO').upper())
    return level if isinstance(level, int) else logging.INFO

class LogManager:
    """Log management with one output stream per subsystem."""

    LOGGER_NAMES = ('companion.internal', 'companion.system', 'companion.events')

    _FORMATTERS = {
        'companion.internal': InternalFormatter,
        'companion.system': InternalFormatter,
        'companion.events': EventFormatter,
    }

    @staticmethod
    def setup_logging(log_dir: Union[str, Path] = 'data/logs', console: bool = False):
        """
        Attach file (and optionally console) handlers to each subsystem logger.

        Levels come from LOG_LEVEL_COMPANION_<SUBSYSTEM>, defaulting to INFO.
        Loggers that already have handlers keep them, so calling this twice is safe.
        """
        load_dotenv()

        started = datetime.now().strftime('%Y%m%d_%H%M%S')
        for logger_name in LogManager.LOGGER_NAMES:
            logger = logging.getLogger(logger_name)
            logger.setLevel(_level_from_env(logger_name))
            if logger.handlers:
                continue

            subsystem = logger_name.rsplit('.', 1)[-1]
            directory = Path(log_dir) / subsystem
            directory.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(directory / f"{subsystem}_{started}.log", encoding='utf-8')
            file_handler.setFormatter(LogManager._FORMATTERS[logger_name]())
            logger.addHandler(file_handler)

            if console:
                console_handler = SafeStreamHandler(sys.stdout)
                console_handler.setFormatter(ConsoleFormatter())
                logger.addHandler(console_handler)
