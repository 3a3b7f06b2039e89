# modules/needs/need.py

from config import Config
from utils.helpers import clamp

class Need:
    """
    One bounded pet stat (happiness, hunger, ...) with its per-minute drift.

    Every mutation is clamped to [min_value, max_value] and reports the
    change that actually landed, so callers can emit exact deltas.
    """

    def __init__(self, name, value=50.0, rate_per_minute=0.0, min_value=Config.NEED_MIN, max_value=Config.NEED_MAX):
        self.name = name
        self.min_value = min_value
        self.max_value = max_value
        self.rate_per_minute = rate_per_minute
        self.value = clamp(float(value), min_value, max_value)

    def alter(self, amount):
        """Shift the value by amount; returns the applied delta."""
        before = self.value
        self.value = clamp(before + amount, self.min_value, self.max_value)
        return self.value - before

    def set(self, value):
        """Replace the value outright; returns the applied delta."""
        return self.alter(float(value) - self.value)

    def decay(self, minutes):
        return self.alter(self.rate_per_minute * minutes)

    def __repr__(self):
        return f"Need({self.name}={self.value:.2f})"
