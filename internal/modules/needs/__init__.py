# modules/needs/__init__.py

from .need import Need
from .needs_manager import NeedsModel, NeedsSnapshot, StatDelta, STAT_NAMES
