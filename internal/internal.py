"""
Internal core implementation.
Owns one instance of every pet subsystem and wires them together.
"""

import random
import time
from typing import Callable, Dict, Iterable, Optional

from config import Config, BehaviorConfig, TrackingConfig
from core.timer import TimerCoordinator
from event_dispatcher import EventDispatcher, Event
from internal.state_persistence import KeyValueStore
from internal.modules.behaviors.behavior_manager import BehaviorStateMachine
from internal.modules.interaction.interaction_manager import InteractionDetector, InteractionEvent
from internal.modules.items.item import ItemDefinition, Reaction
from internal.modules.items.item_manager import ItemEffectEngine
from internal.modules.items.catalog import DEFAULT_ITEMS
from internal.modules.needs.needs_manager import NeedsModel, StatDelta
from internal.modules.tracking.pointer_tracker import PointerTracker
from loggers import InternalLogger

class Internal:
    """
    Application context for the pet simulation.

    The five subsystems share one dispatcher and one timer but never call
    each other; the cross-wiring lives here.
    """

    def __init__(self,
                 store: Optional[KeyValueStore] = None,
                 timer: Optional[TimerCoordinator] = None,
                 dispatcher: Optional[EventDispatcher] = None,
                 clock: Callable[[], float] = time.time,
                 rng=random,
                 behavior_config: Optional[BehaviorConfig] = None,
                 tracking_config: Optional[TrackingConfig] = None,
                 items: Optional[Iterable[ItemDefinition]] = None):
        """Initialize internal systems."""
        self.clock = clock
        self.timer = timer or TimerCoordinator(clock)
        self.dispatcher = dispatcher or EventDispatcher()
        self.is_active = False

        # listeners first, so the startup emotion and offline catch-up are logged
        self.setup_event_listeners()

        self.needs_manager = NeedsModel(store, self.timer, self.dispatcher, clock)
        self.behavior_manager = BehaviorStateMachine(behavior_config, self.timer, self.dispatcher, clock, rng)
        self.interaction_manager = InteractionDetector(self.timer, self.dispatcher, clock, rng)
        self.pointer_tracker = PointerTracker(tracking_config, self.timer, self.dispatcher)
        self.item_manager = ItemEffectEngine(
            DEFAULT_ITEMS if items is None else items, self.dispatcher, clock
        )

    def setup_event_listeners(self):
        """Set up logging listeners for subsystem notifications."""
        self.dispatcher.add_listener("need:changed", self.on_need_change)
        self.dispatcher.add_listener("behavior:completed", self.on_behavior_completed)
        self.dispatcher.add_listener("interaction:emotion", self.on_emotion)

    def remove_event_listeners(self):
        self.dispatcher.remove_listener("need:changed", self.on_need_change)
        self.dispatcher.remove_listener("behavior:completed", self.on_behavior_completed)
        self.dispatcher.remove_listener("interaction:emotion", self.on_emotion)

    # ------------------------------------------------------------------
    # host signals

    def handle_click(self) -> InteractionEvent:
        """Classifies a click and tells the behavior machine the user is around."""
        interaction = self.interaction_manager.handle_click()
        self.behavior_manager.on_user_interaction()
        return interaction

    def use_item(self, item_id: str, position=None) -> Optional[Reaction]:
        """
        Uses an item and applies its stat effects to the needs in one batch.

        Returns:
            Reaction | None: None if the item could not be used
        """
        reaction = self.item_manager.use_item(item_id, position)
        if reaction is None:
            return None

        deltas = []
        for effect in reaction.effects:
            stat = Config.ITEM_STAT_EFFECTS.get(effect.type.value)
            if stat and isinstance(effect.value, (int, float)):
                deltas.append(StatDelta(stat, float(effect.value), f"item:{item_id}"))
        if deltas:
            self.needs_manager.change_stats(deltas)
        return reaction

    # ------------------------------------------------------------------
    # logging listeners

    def on_need_change(self, event: Event):
        for change in event.data['changes']:
            InternalLogger.debug(f"{change.stat} {change.amount:+.2f} ({change.reason})")

    def on_behavior_completed(self, event: Event):
        InternalLogger.log_behavior(f"{event.data['state'].value} finished")

    def on_emotion(self, event: Event):
        emotion = event.data
        InternalLogger.log_behavior(f"Feeling {emotion.emotion}: {emotion.text}", {'duration': emotion.duration})

    # ------------------------------------------------------------------
    # lifecycle

    def get_status(self) -> Dict:
        """Snapshot of the pet for the presentation layer."""
        return {
            "state": self.behavior_manager.get_current_state().value,
            "stats": self.needs_manager.get_stats().to_dict(),
            "condition": self.needs_manager.get_overall_condition(),
            "active_effects": sorted(self.item_manager.get_active_effects().keys()),
            "is_active": self.is_active
        }

    async def start(self):
        """Start internal systems and run the timer loop until stop() is called."""
        self.is_active = True
        InternalLogger.info("Internal systems started")
        await self.timer.run()

    def stop(self):
        """Stop internal systems."""
        self.is_active = False
        self.timer.stop()
        self.pointer_tracker.destroy()
        self.interaction_manager.destroy()
        self.behavior_manager.destroy()
        self.item_manager.destroy()
        self.needs_manager.destroy()
        self.remove_event_listeners()
        InternalLogger.info("Internal systems stopped")
