# modules/behaviors/behavior_manager.py

import random
import time
from typing import Callable, List, Optional, Union

from config import Config, BehaviorConfig
from core.timer import TimerCoordinator, TimedTask
from event_dispatcher import EventDispatcher, Event
from loggers import InternalLogger
from utils.helpers import clamp, weighted_random_choice
from utils.vector import Vector2D, Size
from .behavior import LifeState, AUTONOMOUS_STATES, BehaviorContext

class BehaviorStateMachine:
    """
    Owns the pet's autonomous life state.

    The pet rests in idle until a background ticker picks an autonomous
    behavior by weighted random choice. Each autonomous behavior runs for its
    configured duration and then returns to idle on its own:
    {idle} -> {ticker picks walking/sleeping/observing/yawning/stretching}
    {behavior timer expires} -> {completed, back to idle}
    {user interaction} -> {forced idle, ticker paused for a few seconds}

    Events dispatched (all synchronous):
        behavior:state_change    {"state", "old_state"}
        behavior:position_update {"position"}
        behavior:completed       {"state"}
    """

    def __init__(self,
                 config: Optional[BehaviorConfig] = None,
                 timer: Optional[TimerCoordinator] = None,
                 dispatcher: Optional[EventDispatcher] = None,
                 clock: Callable[[], float] = time.time,
                 rng=random):
        """
        Initializes the state machine in idle and starts the background ticker.

        Args:
            config (BehaviorConfig, optional): durations, weights and walking settings
            timer (TimerCoordinator, optional): scheduler for the ticker and behavior timers
            dispatcher (EventDispatcher, optional): where behavior events are published
            clock (Callable): returns the current time in seconds
            rng: source of randomness with random()
        """
        self.config = config or Config.get_behavior_config()
        self.clock = clock
        self.timer = timer or TimerCoordinator(clock)
        self.dispatcher = dispatcher or EventDispatcher()
        self.rng = rng

        self.current_state: LifeState = LifeState.IDLE
        self.state_start_time: float = self.clock()
        self.last_interaction_time: Optional[float] = None
        self.walking_target: Optional[Vector2D] = None

        self._idle_task: Optional[TimedTask] = None
        self._behavior_task: Optional[TimedTask] = None
        self._listeners: List[Callable] = []
        self._destroyed = False

        self._start_idle_ticker()

    # ------------------------------------------------------------------
    # listeners

    def add_listener(self, callback: Callable[[Event], None]) -> None:
        """Subscribe to every behavior:* event."""
        self.dispatcher.add_listener("behavior:*", callback)
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[Event], None]) -> None:
        self.dispatcher.remove_listener("behavior:*", callback)
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit(self, event_type: str, data: dict) -> None:
        if self._destroyed:
            return
        self.dispatcher.dispatch_event(Event(f"behavior:{event_type}", data))

    # ------------------------------------------------------------------
    # state transitions

    def set_state(self, new_state: Union[LifeState, str]) -> None:
        """
        Changes the current state.

        Leaving a state drops any walking target and pending completion
        timer. If the new state has a configured duration, a completion timer
        returns the pet to idle when it expires.

        Args:
            new_state (LifeState | str): state to enter
        """
        new_state = LifeState(new_state)
        if new_state == self.current_state:
            return

        old_state = self.current_state
        self.current_state = new_state
        self.state_start_time = self.clock()
        self.walking_target = None
        self._cancel_behavior_timer()

        duration = self.get_state_duration(new_state)
        if duration > 0:
            self._behavior_task = self.timer.call_later(
                f"behavior:{new_state.value}:complete", duration, self._complete_behavior
            )

        InternalLogger.log_state_change('behavior', old_state.value, new_state.value)
        self._emit("state_change", {"state": new_state, "old_state": old_state})

    def get_state_duration(self, state: Union[LifeState, str]) -> float:
        """
        Returns how long an autonomous state lasts, 0 for states without a timer.
        """
        state = LifeState(state)
        if state not in AUTONOMOUS_STATES:
            return 0.0
        return float(getattr(self.config, f"{state.value}_duration", 0.0))

    def _complete_behavior(self) -> None:
        self._behavior_task = None
        InternalLogger.log_behavior(f"{self.current_state.value} completed")
        self._emit("completed", {"state": self.current_state})
        self.set_state(LifeState.IDLE)

    def on_user_interaction(self) -> None:
        """
        Records a user interaction. Autonomous behaviors are interrupted and
        the ticker stays quiet until the interaction cooldown has passed.
        """
        self.last_interaction_time = self.clock()
        if self.current_state in AUTONOMOUS_STATES:
            self.set_state(LifeState.IDLE)

    def is_user_interacting(self) -> bool:
        """True while the last interaction is more recent than the cooldown."""
        if self.last_interaction_time is None:
            return False
        return self.clock() - self.last_interaction_time < Config.INTERACTION_COOLDOWN

    # ------------------------------------------------------------------
    # ticker

    def _start_idle_ticker(self) -> None:
        self.timer.cancel(self._idle_task)
        self._idle_task = self.timer.call_every(
            "behavior:idle_ticker",
            self.config.idle_state_change_interval,
            self._on_idle_tick
        )

    def _on_idle_tick(self) -> None:
        if not self.is_user_interacting():
            self.trigger_random_behavior()

    def trigger_random_behavior(self) -> None:
        """
        Picks an autonomous behavior by weight and switches to it if it differs
        from the current state. Long stretches in one state make sleeping and
        yawning more likely.
        """
        weights = dict(self.config.behavior_probabilities)
        time_in_state = self.clock() - self.state_start_time
        if time_in_state > self.config.long_idle_threshold:
            if 'sleeping' in weights:
                weights['sleeping'] *= 2
            if 'yawning' in weights:
                weights['yawning'] *= 1.5

        choices = list(weights.keys())
        selected = weighted_random_choice(choices, [weights[c] for c in choices], self.rng)
        if selected is None:
            return

        selected_state = LifeState(selected)
        if selected_state != self.current_state:
            self.set_state(selected_state)

    # ------------------------------------------------------------------
    # walking

    def update_walking_position(self, context: BehaviorContext) -> Optional[Vector2D]:
        """
        Advances the pet one frame toward its walking target.

        Args:
            context (BehaviorContext): current position and available area

        Returns:
            Vector2D | None: the new position, the unchanged position when a new
            target was just picked, or None when not walking.
        """
        if self.current_state != LifeState.WALKING:
            return None

        position = context.position
        if self.walking_target is None:
            self.walking_target = self._generate_walking_target(context.window_size, context.pet_size)

        delta = self.walking_target - position
        distance = delta.length()

        if distance < Config.WALK_ARRIVAL_DISTANCE:
            self.walking_target = self._generate_walking_target(context.window_size, context.pet_size)
            return position.copy()

        walking = self.config.walking
        step = delta.normalized() * (walking.speed / Config.FRAME_RATE)
        jitter = Vector2D(
            (self.rng.random() - 0.5) * walking.step_variation,
            (self.rng.random() - 0.5) * walking.step_variation
        )
        new_position = position + step + jitter

        min_x, max_x, min_y, max_y = self._movable_bounds(context.window_size, context.pet_size)
        new_position = Vector2D(
            clamp(new_position.x, min_x, max_x),
            clamp(new_position.y, min_y, max_y)
        )

        self._emit("position_update", {"position": new_position})
        return new_position

    def _movable_bounds(self, window_size: Size, pet_size: Size):
        margin = self.config.walking.boundary_margin
        max_x = window_size.width - pet_size.width - margin
        max_y = window_size.height - pet_size.height - margin
        return margin, max(margin, max_x), margin, max(margin, max_y)

    def _generate_walking_target(self, window_size: Size, pet_size: Size) -> Vector2D:
        min_x, max_x, min_y, max_y = self._movable_bounds(window_size, pet_size)
        return Vector2D(
            min_x + self.rng.random() * (max_x - min_x),
            min_y + self.rng.random() * (max_y - min_y)
        )

    # ------------------------------------------------------------------
    # accessors

    def get_current_state(self) -> LifeState:
        return self.current_state

    def is_walking(self) -> bool:
        return self.current_state == LifeState.WALKING

    def get_behavior_state(self) -> dict:
        """
        Gets a serializable summary of the state machine.
        """
        return {
            "current_state": self.current_state.value,
            "state_started_at": self.state_start_time,
            "last_interaction_time": self.last_interaction_time,
            "walking_target": (self.walking_target.x, self.walking_target.y) if self.walking_target else None
        }

    # ------------------------------------------------------------------
    # teardown

    def _cancel_behavior_timer(self) -> None:
        self.timer.cancel(self._behavior_task)
        self._behavior_task = None

    def destroy(self) -> None:
        """Cancels every scheduled task and drops registered listeners."""
        self.timer.cancel(self._idle_task)
        self._idle_task = None
        self._cancel_behavior_timer()
        self.walking_target = None
        for callback in list(self._listeners):
            self.remove_listener(callback)
        self._destroyed = True
