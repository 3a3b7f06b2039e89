# event_dispatcher.py

import itertools
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern
from loggers import EventLogger

class Event:
    """
    A typed notification passed to listeners.

    Types use colon-separated namespacing, e.g. 'behavior:state_change'.
    """

    def __init__(self, event_type: str, data: Any = None, metadata: Optional[Dict[str, Any]] = None):
        self.event_type = event_type
        self.data = data
        self.metadata = metadata or {}

    def __repr__(self) -> str:
        return f"Event({self.event_type!r}, {self.data!r})"

@dataclass
class _Listener:
    event_type: str
    callback: Callable[[Event], Any]
    priority: int
    order: int
    pattern: Optional[Pattern] = field(default=None, compare=False)

    def matches(self, event_type: str) -> bool:
        if self.pattern is not None:
            return self.pattern.match(event_type) is not None
        return self.event_type == event_type

class EventDispatcher:
    """
    Routes events from the pet subsystems to their listeners.

    Dispatch is synchronous: every matching listener runs inside
    dispatch_event, highest priority first and in registration order among
    equals. A listener that raises is logged and skipped; the remaining
    listeners still run.
    """

    # High-rate event prefixes that are never traced
    QUIET_PREFIXES = ('tracking', 'behavior:position_update', 'need')

    def __init__(self):
        self._registry: List[_Listener] = []
        self._sequence = itertools.count()

    def add_listener(self, event_type: str, callback: Callable[[Event], Any], priority: int = 0) -> None:
        """
        Registers a callback for an event type. A '*' in the type matches any
        run of characters, so 'item:*' receives every item event.
        """
        pattern = None
        if '*' in event_type:
            pattern = re.compile(re.escape(event_type).replace(r'\*', '.*') + '$')
        self._registry.append(_Listener(event_type, callback, priority, next(self._sequence), pattern))

    def remove_listener(self, event_type: str, callback: Callable[[Event], Any]) -> None:
        """Unregisters every registration of callback under exactly this type string."""
        self._registry = [
            listener for listener in self._registry
            if not (listener.event_type == event_type and listener.callback == callback)
        ]

    def has_listeners(self, event_type: str) -> bool:
        """Returns True if at least one listener would receive this event type."""
        return any(listener.matches(event_type) for listener in self._registry)

    def _get_listeners(self, event_type: str) -> List[_Listener]:
        matching = [listener for listener in self._registry if listener.matches(event_type)]
        matching.sort(key=lambda listener: (-listener.priority, listener.order))
        return matching

    def dispatch_event(self, event: Event) -> None:
        """Delivers an event to all matching listeners before returning."""
        if not event.event_type.startswith(self.QUIET_PREFIXES):
            EventLogger.log_event_dispatch(event.event_type, event.data, event.metadata)

        for listener in self._get_listeners(event.event_type):
            try:
                listener.callback(event)
            except Exception as e:
                name = getattr(listener.callback, '__qualname__', repr(listener.callback))
                EventLogger.error(
                    f"Listener {name} for '{event.event_type}' raised {type(e).__name__}: {e}",
                    exc_info=True
                )
