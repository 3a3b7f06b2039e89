# modules/behaviors/behavior.py

from dataclasses import dataclass
from enum import Enum
from utils.vector import Vector2D, Size

class LifeState(str, Enum):
    """
    The pet's behavior phases.

    idle and the five autonomous phases are owned by the behavior state
    machine. hover, active and loading are driven by the presentation layer;
    the state machine accepts them through set_state but never picks them
    itself, and user interaction does not interrupt them.
    """
    IDLE = 'idle'
    WALKING = 'walking'
    SLEEPING = 'sleeping'
    OBSERVING = 'observing'
    YAWNING = 'yawning'
    STRETCHING = 'stretching'
    HOVER = 'hover'
    ACTIVE = 'active'
    LOADING = 'loading'

AUTONOMOUS_STATES = frozenset({
    LifeState.WALKING,
    LifeState.SLEEPING,
    LifeState.OBSERVING,
    LifeState.YAWNING,
    LifeState.STRETCHING,
})

@dataclass
class BehaviorContext:
    """
    Where the pet is and how much room it has, supplied by the host on every frame.

    Attributes:
        position: top-left corner of the pet sprite
        window_size: size of the movable area
        pet_size: size of the pet sprite
    """
    position: Vector2D
    window_size: Size
    pet_size: Size
