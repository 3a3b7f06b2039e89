# modules/needs/needs_manager.py

import math
import time
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Iterable, List, Optional

from .need import Need
from config import Config
from core.timer import TimerCoordinator, TimedTask
from event_dispatcher import EventDispatcher, Event
from internal.state_persistence import KeyValueStore, MemoryStore, PersistenceError
from loggers import InternalLogger, SystemLogger
from utils.helpers import clamp

STAT_NAMES = ('happiness', 'hunger', 'energy', 'health', 'cleanliness')

@dataclass
class NeedsSnapshot:
    """Point-in-time copy of all five resources."""
    happiness: float
    hunger: float
    energy: float
    health: float
    cleanliness: float
    last_updated: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]], now: float) -> "NeedsSnapshot":
        """
        Builds a snapshot from a persisted record. Missing or non-numeric fields
        fall back to the defaults one by one; values are clamped into range.
        A last_updated that is not finite or lies in the future becomes now.
        """
        record = record or {}
        values = {}
        for name in STAT_NAMES:
            try:
                value = float(record.get(name, Config.INITIAL_NEEDS[name]))
            except (TypeError, ValueError):
                value = Config.INITIAL_NEEDS[name]
            if math.isnan(value):
                value = Config.INITIAL_NEEDS[name]
            values[name] = clamp(value, Config.NEED_MIN, Config.NEED_MAX)

        try:
            last_updated = float(record.get('last_updated') or now)
        except (TypeError, ValueError):
            last_updated = now
        # non-finite or future stamps count as no offline time
        if not math.isfinite(last_updated) or last_updated > now:
            last_updated = now
        return cls(last_updated=last_updated, **values)

@dataclass
class StatDelta:
    """One applied change to a resource."""
    stat: str
    amount: float
    reason: Optional[str] = None

class NeedsModel:
    """
    Manages the pet's five resources.

    Values decay in the background and low values drag others down
    (an empty stomach hurts health and mood). Every change is persisted
    immediately and announced as a single need:changed event carrying the
    full snapshot and the list of applied StatDeltas.
    """

    def __init__(self,
                 store: Optional[KeyValueStore] = None,
                 timer: Optional[TimerCoordinator] = None,
                 dispatcher: Optional[EventDispatcher] = None,
                 clock: Callable[[], float] = time.time):
        """
        Loads the persisted snapshot (or defaults), starts the decay ticker and
        catches up on time spent offline.

        Args:
            store (KeyValueStore, optional): persistence backend, in-memory if omitted
            timer (TimerCoordinator, optional): scheduler for the decay ticker
            dispatcher (EventDispatcher, optional): where need:changed is published
            clock (Callable): returns the current time in seconds
        """
        self.store = store if store is not None else MemoryStore()
        self.clock = clock
        self.timer = timer or TimerCoordinator(clock)
        self.dispatcher = dispatcher or EventDispatcher()

        self.needs: Dict[str, Need] = {}
        self.last_updated: float = self.clock()
        self._listeners: List[Callable] = []
        self._decay_task: Optional[TimedTask] = None
        self._destroyed = False

        self.initialize_needs(self.load_snapshot())
        self._start_decay_timer()
        self.handle_offline_time()

    def initialize_needs(self, snapshot: NeedsSnapshot) -> None:
        """
        Creates the Need objects from a snapshot.
        """
        self.needs = {
            name: Need(
                name=name,
                value=getattr(snapshot, name),
                rate_per_minute=Config.NEED_DECAY_RATES[name]
            )
            for name in STAT_NAMES
        }
        self.last_updated = snapshot.last_updated

    # ------------------------------------------------------------------
    # persistence

    def load_snapshot(self) -> NeedsSnapshot:
        """Reads the persisted record; any failure falls back to defaults."""
        now = self.clock()
        try:
            record = self.store.load(Config.NEEDS_STORAGE_KEY)
        except PersistenceError as e:
            SystemLogger.log_persistence_error('load', Config.NEEDS_STORAGE_KEY, str(e))
            record = None
        return NeedsSnapshot.from_record(record, now)

    def save_snapshot(self) -> None:
        """Stamps last_updated and writes the current values; failures are logged only."""
        self.last_updated = self.clock()
        try:
            self.store.save(Config.NEEDS_STORAGE_KEY, self.get_stats().to_dict())
        except PersistenceError as e:
            SystemLogger.log_persistence_error('save', Config.NEEDS_STORAGE_KEY, str(e))

    def handle_offline_time(self) -> None:
        """
        Applies one batched decay for the time elapsed since the snapshot was saved.
        Short gaps are ignored; the live ticker covers them.
        """
        offline_minutes = (self.clock() - self.last_updated) / 60.0
        if offline_minutes <= Config.NEEDS_OFFLINE_THRESHOLD_MINUTES:
            return

        InternalLogger.info(f"Catching up {offline_minutes:.1f} offline minutes")
        changes = []
        for name, need in self.needs.items():
            applied = need.decay(offline_minutes)
            if applied != 0:
                changes.append(StatDelta(name, applied, "offline time"))
        self._commit(changes)

    # ------------------------------------------------------------------
    # decay

    def _start_decay_timer(self) -> None:
        self._decay_task = self.timer.call_every(
            "needs:decay", Config.NEEDS_DECAY_INTERVAL, self.apply_decay
        )

    def apply_decay(self, elapsed_minutes: Optional[float] = None) -> List[StatDelta]:
        """
        One decay tick: base decay for every resource, then cross-resource effects.

        Args:
            elapsed_minutes (float, optional): defaults to one decay interval

        Returns:
            list: the StatDeltas that were applied
        """
        if elapsed_minutes is None:
            elapsed_minutes = Config.NEEDS_DECAY_INTERVAL / 60.0

        changes = []
        for name, need in self.needs.items():
            applied = need.decay(elapsed_minutes)
            if applied != 0:
                changes.append(StatDelta(name, applied, "time passing"))

        changes.extend(self._apply_cross_effects())
        self._commit(changes)
        return changes

    def _apply_cross_effects(self) -> List[StatDelta]:
        """
        Low resources drag others down. Each rule reads the running values, so
        an earlier rule can push a later rule's source under its threshold.
        """
        changes = []
        for source, target, threshold, effect in Config.NEED_CROSS_EFFECTS:
            if self.needs[source].value < threshold:
                applied = self.needs[target].alter(effect)
                if applied != 0:
                    changes.append(StatDelta(target, applied, f"{source} too low"))
        return changes

    # ------------------------------------------------------------------
    # mutation

    def _get_need(self, stat: str) -> Need:
        need = self.needs.get(stat)
        if need is None:
            raise ValueError(f"Need '{stat}' does not exist.")
        return need

    def change_stat(self, stat: str, amount: float, reason: Optional[str] = None) -> Optional[StatDelta]:
        """
        Alters a single resource.

        Args:
            stat (str): resource name
            amount (float): requested change
            reason (str, optional): free-form label carried in the delta

        Returns:
            StatDelta | None: the applied change, None if clamping made it a no-op

        Raises:
            ValueError: if stat is not one of the five resources
        """
        need = self._get_need(stat)
        old_value = need.value
        applied = need.alter(amount)
        if applied == 0:
            return None

        delta = StatDelta(stat, applied, reason)
        InternalLogger.log_state_change(
            f"need '{stat}'", f"{old_value:.1f}", f"{need.value:.1f} ({reason or 'unknown reason'})"
        )
        self._commit([delta])
        return delta

    def change_stats(self, deltas: Iterable[StatDelta]) -> List[StatDelta]:
        """
        Applies several changes against the running values with a single save
        and a single notification. No-op changes are dropped.

        Raises:
            ValueError: if any delta names an unknown resource (nothing is applied)
        """
        deltas = list(deltas)
        for delta in deltas:
            self._get_need(delta.stat)

        applied_changes = []
        for delta in deltas:
            applied = self.needs[delta.stat].alter(delta.amount)
            if applied != 0:
                applied_changes.append(StatDelta(delta.stat, applied, delta.reason))

        self._commit(applied_changes)
        return applied_changes

    def reset_stats(self) -> None:
        """Restores every resource to its default value."""
        for name, need in self.needs.items():
            need.set(Config.INITIAL_NEEDS[name])
        InternalLogger.info("Needs reset to defaults")
        self.save_snapshot()
        self._notify([])

    def _commit(self, changes: List[StatDelta]) -> None:
        if not changes:
            return
        self.save_snapshot()
        self._notify(changes)

    # ------------------------------------------------------------------
    # queries

    def get_stats(self) -> NeedsSnapshot:
        return NeedsSnapshot(
            last_updated=self.last_updated,
            **{name: need.value for name, need in self.needs.items()}
        )

    def get_need_value(self, stat: str) -> float:
        return self._get_need(stat).value

    @staticmethod
    def get_stat_level(value: float) -> str:
        """
        Buckets a 0-100 value into excellent/good/normal/poor/critical.
        """
        for level, threshold in Config.CONDITION_THRESHOLDS:
            if value >= threshold:
                return level
        return 'critical'

    def get_overall_condition(self) -> str:
        average = sum(need.value for need in self.needs.values()) / len(self.needs)
        return self.get_stat_level(average)

    # ------------------------------------------------------------------
    # listeners

    def add_listener(self, callback: Callable[[Event], None]) -> None:
        """Subscribe to need:changed events."""
        self.dispatcher.add_listener("need:changed", callback)
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[Event], None]) -> None:
        self.dispatcher.remove_listener("need:changed", callback)
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, changes: List[StatDelta]) -> None:
        if self._destroyed:
            return
        self.dispatcher.dispatch_event(Event("need:changed", {
            "stats": self.get_stats(),
            "changes": list(changes)
        }))

    def destroy(self) -> None:
        """Stops the decay ticker and drops registered listeners."""
        self.timer.cancel(self._decay_task)
        self._decay_task = None
        for callback in list(self._listeners):
            self.remove_listener(callback)
        self._destroyed = True
