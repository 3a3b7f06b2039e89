"""
Formatters for the companion log streams.
"""

import logging

def _component(record) -> str:
    # 'companion.internal' -> 'internal'
    return record.name.rsplit('.', 1)[-1]

def _indent_continuations(message: str, width: int) -> str:
    lines = message.splitlines() or ['']
    pad = ' ' * width
    return '\n'.join([lines[0]] + [pad + line for line in lines[1:]])

class InternalFormatter(logging.Formatter):
    """Formatter for internal and system events. Multi-line records stay aligned."""

    def format(self, record):
        prefix = f"[{self.formatTime(record)}] {record.levelname:8} {_component(record):8} | "
        text = prefix + _indent_continuations(record.getMessage(), len(prefix))
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text

class EventFormatter(logging.Formatter):
    """Formatter for the event dispatcher trace."""

    def format(self, record):
        text = f"[{self.formatTime(record)}] {record.levelname:8} EVENT | {record.getMessage()}"
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text

class ConsoleFormatter(logging.Formatter):
    """One short line per record for the terminal."""

    def format(self, record):
        marker = '!' if record.levelno >= logging.WARNING else '-'
        first_line = record.getMessage().splitlines()[0] if record.getMessage() else ''
        return f"{self.formatTime(record, '%H:%M:%S')} {marker} {_component(record)}: {first_line}"
