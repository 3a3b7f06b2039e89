# modules/interaction/interaction_manager.py

import random
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from config import Config
from core.timer import TimerCoordinator, TimedTask
from event_dispatcher import EventDispatcher, Event
from loggers import InternalLogger
from . import emotion_texts

class ClickPattern(str, Enum):
    CLICK = 'click'
    DOUBLE_CLICK = 'double_click'
    TRIPLE_CLICK = 'triple_click'
    RAPID_CLICK = 'rapid_click'
    LONG_PRESS = 'long_press'

@dataclass
class InteractionEvent:
    type: ClickPattern
    timestamp: float
    message: str
    easter_egg: bool = False
    data: Dict[str, Any] = field(default_factory=dict)

@dataclass
class TimeBasedEmotion:
    emotion: str
    text: str
    duration: float

class InteractionDetector:
    """
    Classifies click sequences and keeps a time-of-day mood going.

    Clicks are checked in priority order: rapid clicking, triple click,
    double click, plain click. A plain click arms a long-press timer that
    fires unless another click arrives first. Independently, an emotion
    matching the hour (or a holiday) is announced on start and every
    30 minutes.

    Events dispatched:
        interaction:pattern  InteractionEvent
        interaction:emotion  TimeBasedEmotion
    """

    def __init__(self,
                 timer: Optional[TimerCoordinator] = None,
                 dispatcher: Optional[EventDispatcher] = None,
                 clock: Callable[[], float] = time.time,
                 rng=random):
        self.clock = clock
        self.timer = timer or TimerCoordinator(clock)
        self.dispatcher = dispatcher or EventDispatcher()
        self.rng = rng

        self.click_history: List[float] = []
        self.rapid_click_count = 0
        self.last_click_time: Optional[float] = None

        self._long_press_task: Optional[TimedTask] = None
        self._rapid_reset_task: Optional[TimedTask] = None
        self._emotion_task: Optional[TimedTask] = None
        self._listeners: List[tuple] = []
        self._destroyed = False

        self._start_emotion_loop()

    # ------------------------------------------------------------------
    # clicks

    def handle_click(self) -> InteractionEvent:
        """
        Registers a click and classifies the recent click sequence.

        Returns:
            InteractionEvent: the detected pattern, also dispatched as interaction:pattern
        """
        now = self.clock()
        self._cancel_long_press()

        self.click_history.append(now)
        self.click_history = [t for t in self.click_history if now - t <= Config.CLICK_HISTORY_WINDOW]

        if self.last_click_time is not None and now - self.last_click_time < Config.RAPID_CLICK_GAP:
            self.rapid_click_count += 1
            self._restart_rapid_reset()
        else:
            self.rapid_click_count = 1
        self.last_click_time = now

        if self.rapid_click_count >= Config.RAPID_CLICK_COUNT:
            count = self.rapid_click_count
            self.rapid_click_count = 0
            event = self._create_easter_egg(ClickPattern.RAPID_CLICK, now, {"count": count})
        elif self._is_triple_click():
            event = self._create_easter_egg(ClickPattern.TRIPLE_CLICK, now)
        elif self._is_double_click():
            event = self._create_easter_egg(ClickPattern.DOUBLE_CLICK, now)
        else:
            event = InteractionEvent(
                type=ClickPattern.CLICK,
                timestamp=now,
                message=self.rng.choice(emotion_texts.CLICK_MESSAGES)
            )
            self._start_long_press()

        self._emit("interaction:pattern", event)
        return event

    def _is_double_click(self) -> bool:
        if len(self.click_history) < 2:
            return False
        second_last, last = self.click_history[-2:]
        return last - second_last < Config.DOUBLE_CLICK_WINDOW

    def _is_triple_click(self) -> bool:
        if len(self.click_history) < 3:
            return False
        third_last, second_last, last = self.click_history[-3:]
        return (last - third_last < Config.TRIPLE_CLICK_WINDOW
                and second_last - third_last < Config.DOUBLE_CLICK_WINDOW)

    def _create_easter_egg(self, pattern: ClickPattern, timestamp: float,
                           data: Optional[Dict[str, Any]] = None) -> InteractionEvent:
        InternalLogger.log_behavior(f"easter egg {pattern.value}", data)
        return InteractionEvent(
            type=pattern,
            timestamp=timestamp,
            message=emotion_texts.EASTER_EGG_MESSAGES.get(
                pattern.value, emotion_texts.DEFAULT_EASTER_EGG_MESSAGE
            ),
            easter_egg=True,
            data=data or {}
        )

    def _start_long_press(self) -> None:
        self._long_press_task = self.timer.call_later(
            "interaction:long_press", Config.LONG_PRESS_DELAY, self._trigger_long_press
        )

    def _cancel_long_press(self) -> None:
        self.timer.cancel(self._long_press_task)
        self._long_press_task = None

    def _trigger_long_press(self) -> None:
        self._long_press_task = None
        event = self._create_easter_egg(ClickPattern.LONG_PRESS, self.clock())
        self._emit("interaction:pattern", event)

    def _restart_rapid_reset(self) -> None:
        self.timer.cancel(self._rapid_reset_task)
        self._rapid_reset_task = self.timer.call_later(
            "interaction:rapid_reset", Config.RAPID_CLICK_RESET, self._reset_rapid_clicks
        )

    def _reset_rapid_clicks(self) -> None:
        self._rapid_reset_task = None
        self.rapid_click_count = 0

    # ------------------------------------------------------------------
    # time based emotions

    def _start_emotion_loop(self) -> None:
        self.update_time_based_emotion()
        self._emotion_task = self.timer.call_every(
            "interaction:emotion", Config.EMOTION_UPDATE_INTERVAL, self.update_time_based_emotion
        )

    @staticmethod
    def get_time_period(hour: int) -> str:
        for period, info in emotion_texts.TIME_PERIODS.items():
            if info['start'] <= info['end'] and info['start'] <= hour <= info['end']:
                return period
        return 'night'

    def update_time_based_emotion(self) -> TimeBasedEmotion:
        """
        Picks an emotion for the current day and hour and announces it.
        Holidays take precedence over the time of day.
        """
        now = datetime.fromtimestamp(self.clock())
        special = emotion_texts.SPECIAL_DATES.get(now.strftime('%m%d'))
        if special:
            emotions = special['emotions']
            context = special['name']
        else:
            period = emotion_texts.TIME_PERIODS[self.get_time_period(now.hour)]
            emotions = period['emotions']
            context = period['name']

        selected = self.rng.choice(emotions)
        emotion = TimeBasedEmotion(
            emotion=selected,
            text=self.get_emotion_text(selected, context),
            duration=Config.EMOTION_DISPLAY_DURATION
        )
        InternalLogger.debug(f"Time based emotion: {selected} ({context})")
        self._emit("interaction:emotion", emotion)
        return emotion

    def get_emotion_text(self, emotion: str, context: str) -> str:
        texts = emotion_texts.EMOTION_TEXTS.get(emotion) or emotion_texts.DEFAULT_EMOTION_TEXTS
        return self.rng.choice(texts).format(context=context)

    def get_current_emotion_state(self) -> Dict[str, Any]:
        period = emotion_texts.TIME_PERIODS[self.get_time_period(datetime.fromtimestamp(self.clock()).hour)]
        return {"period": period['name'], "emotions": list(period['emotions'])}

    def trigger_special_emotion(self, emotion: str, text: str,
                                duration: float = Config.SPECIAL_EMOTION_DURATION) -> TimeBasedEmotion:
        """Announces an emotion right away, outside the regular schedule."""
        special = TimeBasedEmotion(emotion=emotion, text=text, duration=duration)
        self._emit("interaction:emotion", special)
        return special

    # ------------------------------------------------------------------
    # listeners

    def _add(self, event_type: str, callback: Callable) -> None:
        self.dispatcher.add_listener(event_type, callback)
        self._listeners.append((event_type, callback))

    def _remove(self, event_type: str, callback: Callable) -> None:
        self.dispatcher.remove_listener(event_type, callback)
        if (event_type, callback) in self._listeners:
            self._listeners.remove((event_type, callback))

    def add_interaction_listener(self, callback: Callable[[Event], None]) -> None:
        self._add("interaction:pattern", callback)

    def remove_interaction_listener(self, callback: Callable[[Event], None]) -> None:
        self._remove("interaction:pattern", callback)

    def add_emotion_listener(self, callback: Callable[[Event], None]) -> None:
        self._add("interaction:emotion", callback)

    def remove_emotion_listener(self, callback: Callable[[Event], None]) -> None:
        self._remove("interaction:emotion", callback)

    def _emit(self, event_type: str, data: Any) -> None:
        if self._destroyed:
            return
        self.dispatcher.dispatch_event(Event(event_type, data))

    def destroy(self) -> None:
        """Cancels every timer, clears click history and drops listeners."""
        self._cancel_long_press()
        self.timer.cancel(self._rapid_reset_task)
        self._rapid_reset_task = None
        self.timer.cancel(self._emotion_task)
        self._emotion_task = None
        for event_type, callback in list(self._listeners):
            self._remove(event_type, callback)
        self.click_history = []
        self._destroyed = True
