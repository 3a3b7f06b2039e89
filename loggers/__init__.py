"""
Companion logging system.
Provides structured logging for the pet simulation subsystems.
"""

from .manager import LogManager
from .loggers import InternalLogger, SystemLogger, EventLogger

__all__ = ['LogManager', 'InternalLogger', 'SystemLogger', 'EventLogger']
