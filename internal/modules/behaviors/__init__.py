# modules/behaviors/__init__.py

from .behavior import LifeState, AUTONOMOUS_STATES, BehaviorContext
from .behavior_manager import BehaviorStateMachine
