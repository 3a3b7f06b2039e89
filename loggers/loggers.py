"""
Specialized loggers for the companion subsystems.
Each facade writes to one named stdlib logger and adds the few structured
messages its subsystem needs.
"""

import logging
import json
import re
from typing import Dict, Any, Optional

_EMOJI_PATTERN = re.compile("["
    u"\U0001F600-\U0001F64F"  # emoticons
    u"\U0001F300-\U0001F5FF"  # symbols & pictographs
    u"\U0001F680-\U0001F6FF"  # transport & map symbols
    u"\U0001F1E0-\U0001F1FF"  # flags
    u"\U00002702-\U000027B0"  # dingbats
    u"\U0001F900-\U0001F9FF"  # supplemental symbols and pictographs
    u"\U0001FA70-\U0001FAFF"  # extended pictographs
    u"️"                 # variation selector
"]+", flags=re.UNICODE)

def strip_emojis(text: str) -> str:
    """Removes pictographs; CJK text is left alone."""
    return _EMOJI_PATTERN.sub('', text)

class SafeStreamHandler(logging.StreamHandler):
    """
    A stream handler that replaces characters the console cannot encode
    instead of raising UnicodeEncodeError.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream
            encoding = getattr(stream, 'encoding', None) or 'utf-8'
            stream.write(msg.encode(encoding, errors='replace').decode(encoding) + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)

class _ComponentLogger:
    """Shared level helpers; subclasses set the logger name and message prefix."""

    logger_name = 'companion'
    prefix = 'Companion'

    @classmethod
    def _logger(cls) -> logging.Logger:
        return logging.getLogger(cls.logger_name)

    @classmethod
    def error(cls, message: str, exc_info: bool = False):
        cls._logger().error(f"{cls.prefix} Error: {strip_emojis(message)}", exc_info=exc_info)

    @classmethod
    def warning(cls, message: str):
        cls._logger().warning(f"{cls.prefix} Warning: {strip_emojis(message)}")

    @classmethod
    def info(cls, message: str):
        cls._logger().info(f"{cls.prefix}: {strip_emojis(message)}")

    @classmethod
    def debug(cls, message: str):
        cls._logger().debug(f"{cls.prefix} Debug: {strip_emojis(message)}")

class SystemLogger(_ComponentLogger):
    """Logger for infrastructure: persistence, timers."""

    logger_name = 'companion.system'
    prefix = 'System'

    @classmethod
    def log_persistence_error(cls, operation: str, key: str, error: str):
        """Log a failed load or save of persisted state."""
        cls._logger().error(
            f"Persistence Error ({operation}):\n"
            f"  Key: {key}\n"
            f"  Error: {strip_emojis(error)}"
        )

    @classmethod
    def log_task_error(cls, task_name: str, error: str):
        """Log a scheduled task that raised."""
        cls._logger().error(
            f"Timer Task Error:\n"
            f"  Task: {task_name}\n"
            f"  Error: {strip_emojis(error)}"
        )

class InternalLogger(_ComponentLogger):
    """Logger for pet state changes, behaviors and item use."""

    logger_name = 'companion.internal'
    prefix = 'Internal'

    @classmethod
    def log_state_change(cls, component: str, old_value: Any, new_value: Any):
        logger = cls._logger()
        logger.debug(
            f"State Change: {component}\n"
            f"  From: {old_value}\n"
            f"  To:   {new_value}"
        )
        logger.info(f"Internal: {component} changed to {strip_emojis(str(new_value))}")

    @classmethod
    def log_behavior(cls, behavior: str, context: Optional[Dict] = None):
        logger = cls._logger()
        if context:
            logger.debug(
                f"Behavior: {behavior}\n"
                f"Context: {json.dumps(context, indent=2, default=str, ensure_ascii=False)}"
            )
        logger.info(f"Internal: {behavior}")

    @classmethod
    def log_item_use(cls, item_id: str, success: bool, reason: Optional[str] = None):
        if success:
            cls._logger().info(f"Internal: Used item '{item_id}'")
        else:
            cls._logger().warning(f"Cannot use item '{item_id}': {reason}")

class EventLogger(_ComponentLogger):
    """Logger for event system operations."""

    logger_name = 'companion.events'
    prefix = 'Event'

    @classmethod
    def log_event_dispatch(cls, event_type: str, data: Any = None, metadata: Optional[Dict] = None):
        logger = cls._logger()
        if not logger.isEnabledFor(logging.DEBUG):
            return
        components = [f"Event Dispatched: {event_type}"]
        if isinstance(data, dict):
            processed = {k: strip_emojis(str(v)) for k, v in data.items()}
            components.append(f"Data:\n{json.dumps(processed, indent=2, ensure_ascii=False)}")
        elif data is not None:
            components.append(f"Data: {strip_emojis(repr(data))}")
        if metadata:
            meta = {k: strip_emojis(str(v)) for k, v in metadata.items()}
            components.append(f"Metadata:\n{json.dumps(meta, indent=2, ensure_ascii=False)}")
        logger.debug('\n'.join(components))
