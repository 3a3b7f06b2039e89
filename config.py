# config.py

"""
Configuration settings for the companion pet simulation.
"""

from typing import Dict, Tuple
from dataclasses import dataclass, field
import os

def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default

@dataclass
class WalkingConfig:
    """Movement settings used while the pet is walking."""
    speed: float = 30.0          # pixels per second
    step_variation: float = 5.0  # max jitter per step (pixels, full width)
    boundary_margin: float = 20.0

@dataclass
class BehaviorConfig:
    """
    Settings for the autonomous behavior state machine.
    All durations are in seconds.
    """
    idle_state_change_interval: float = 30.0
    walking_duration: float = 10.0
    sleeping_duration: float = 30.0
    observing_duration: float = 8.0
    yawning_duration: float = 3.0
    stretching_duration: float = 4.0
    long_idle_threshold: float = 300.0
    behavior_probabilities: Dict[str, float] = field(default_factory=lambda: {
        'walking': 0.3,
        'sleeping': 0.1,
        'observing': 0.25,
        'yawning': 0.2,
        'stretching': 0.15
    })
    walking: WalkingConfig = field(default_factory=WalkingConfig)

@dataclass
class TrackingConfig:
    """Pointer tracking settings."""
    enabled: bool = True
    tracking_radius: float = 200.0

class Config:
    """
    Centralized configuration management.
    """

    @classmethod
    def get_behavior_config(cls) -> BehaviorConfig:
        """Build the behavior config, applying env overrides."""
        return BehaviorConfig(
            idle_state_change_interval=_env_float("BEHAVIOR_TICK_INTERVAL", cls.BEHAVIOR_TICK_INTERVAL),
            long_idle_threshold=_env_float("LONG_IDLE_THRESHOLD", cls.LONG_IDLE_THRESHOLD)
        )

    @classmethod
    def get_tracking_config(cls) -> TrackingConfig:
        """Build the pointer tracking config, applying env overrides."""
        return TrackingConfig(
            enabled=os.getenv("MOUSE_TRACKING_ENABLED", "True").lower() in ("true", "1", "yes"),
            tracking_radius=_env_float("MOUSE_TRACKING_RADIUS", cls.TRACKING_RADIUS)
        )

    @classmethod
    def get_state_dir(cls) -> str:
        """Directory for persisted pet state."""
        return os.getenv("COMPANION_STATE_DIR", cls.STATE_DIR)

    @classmethod
    def get_log_dir(cls) -> str:
        return os.getenv("COMPANION_LOG_DIR", cls.LOG_DIR)

    STATE_DIR = "data/state"
    LOG_DIR = "data/logs"

    # timers (in seconds)
    TIMER_POLL_INTERVAL = 0.1
    FRAME_RATE = 60
    BEHAVIOR_TICK_INTERVAL = 30.0
    LONG_IDLE_THRESHOLD = 300.0
    TRACKING_RADIUS = 200.0

    # user interaction pauses autonomous behavior for this long
    INTERACTION_COOLDOWN = 5.0
    # walking target counts as reached inside this distance (pixels)
    WALK_ARRIVAL_DISTANCE = 10.0

    # click pattern windows (seconds)
    CLICK_HISTORY_WINDOW = 5.0
    DOUBLE_CLICK_WINDOW = 0.4
    TRIPLE_CLICK_WINDOW = 0.8
    RAPID_CLICK_GAP = 0.5
    RAPID_CLICK_COUNT = 10
    RAPID_CLICK_RESET = 2.0
    LONG_PRESS_DELAY = 1.0

    # time based emotions
    EMOTION_UPDATE_INTERVAL = 30 * 60.0
    EMOTION_DISPLAY_DURATION = 10.0
    SPECIAL_EMOTION_DURATION = 5.0

    # needs
    NEEDS_STORAGE_KEY = "pet_stats"
    NEEDS_DECAY_INTERVAL = 30.0
    NEEDS_OFFLINE_THRESHOLD_MINUTES = 1.0
    NEED_MIN = 0.0
    NEED_MAX = 100.0

    INITIAL_NEEDS = {
        'happiness': 75.0,
        'hunger': 80.0,
        'energy': 85.0,
        'health': 90.0,
        'cleanliness': 70.0
    }

    # decay per minute (hunger is fullness, so it drops too)
    NEED_DECAY_RATES = {
        'happiness': -0.5,
        'hunger': -1.2,
        'energy': -0.8,
        'health': -0.1,
        'cleanliness': -0.3
    }

    # (source, target, threshold, effect): while source < threshold,
    # target changes by effect on every decay tick
    NEED_CROSS_EFFECTS: Tuple[Tuple[str, str, float, float], ...] = (
        ('hunger', 'health', 20.0, -0.2),
        ('hunger', 'happiness', 30.0, -0.3),
        ('energy', 'happiness', 25.0, -0.2),
        ('health', 'happiness', 30.0, -0.4),
        ('health', 'energy', 40.0, -0.2),
        ('cleanliness', 'health', 25.0, -0.1),
        ('cleanliness', 'happiness', 35.0, -0.2),
    )

    # overall condition buckets, checked top-down
    CONDITION_THRESHOLDS = (
        ('excellent', 90.0),
        ('good', 75.0),
        ('normal', 50.0),
        ('poor', 25.0),
    )

    # item effect types that map onto a need when an item is used
    ITEM_STAT_EFFECTS = {
        'happiness_increase': 'happiness',
        'mood_boost': 'happiness',
        'energy_restore': 'energy',
        'hunger_restore': 'hunger',
        'health_restore': 'health',
        'cleanliness_boost': 'cleanliness'
    }

    VERSION = "0.1"
