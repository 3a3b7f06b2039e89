# modules/items/item_manager.py

import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from event_dispatcher import EventDispatcher, Event
from loggers import InternalLogger
from utils.vector import Vector2D
from .catalog import DEFAULT_ITEMS
from .item import (
    ItemDefinition, ItemType, ItemRarity, EffectType, RARITY_ORDER, TIMED_EFFECTS,
    UsageRecord, ActiveEffect, ItemAvailability, Reaction
)

DEFAULT_TEXT_DURATION = 3.0
DEFAULT_STATE_CHANGE_DURATION = 5.0
DEFAULT_ANIMATION_DURATION = 3.0

class ItemEffectEngine:
    """
    Applies catalog items to the pet.

    Each use is gated by the item's cooldown and usage limit. A successful use
    is folded into a single Reaction for the presentation layer and timed
    effects are remembered until they expire.
    """

    def __init__(self,
                 items: Iterable[ItemDefinition] = DEFAULT_ITEMS,
                 dispatcher: Optional[EventDispatcher] = None,
                 clock: Callable[[], float] = time.time):
        """
        Args:
            items (Iterable[ItemDefinition]): the catalog, read-only
            dispatcher (EventDispatcher, optional): where item:reaction is published
            clock (Callable): returns the current time in seconds

        Raises:
            ValueError: if two items share an id
        """
        self.dispatcher = dispatcher or EventDispatcher()
        self.clock = clock

        self.items: Dict[str, ItemDefinition] = {}
        for item in items:
            if item.id in self.items:
                raise ValueError(f"Duplicate item id '{item.id}'")
            self.items[item.id] = item

        self.usage: Dict[str, UsageRecord] = {}
        self.active_effects: Dict[str, ActiveEffect] = {}
        self._listeners: List[Callable] = []

    # ------------------------------------------------------------------
    # catalog

    def get_all_items(self) -> List[ItemDefinition]:
        return list(self.items.values())

    def get_item_by_id(self, item_id: str) -> Optional[ItemDefinition]:
        return self.items.get(item_id)

    def get_items_by_type(self, item_type: Union[ItemType, str]) -> List[ItemDefinition]:
        item_type = ItemType(item_type)
        return [item for item in self.items.values() if item.type == item_type]

    def get_items_by_rarity(self, rarity: Union[ItemRarity, str]) -> List[ItemDefinition]:
        rarity = ItemRarity(rarity)
        return [item for item in self.items.values() if item.rarity == rarity]

    def get_recommended_items(self, max_items: int = 5) -> List[ItemDefinition]:
        """Usable items, most common rarity first, catalog order among equals."""
        available = [item for item in self.items.values() if self.can_use_item(item.id).can_use]
        available.sort(key=lambda item: RARITY_ORDER[item.rarity])
        return available[:max_items]

    # ------------------------------------------------------------------
    # availability

    def can_use_item(self, item_id: str) -> ItemAvailability:
        """
        Checks whether an item may be used right now.

        Returns:
            ItemAvailability: can_use False with reason "not found",
            "usage limit exceeded" or "on cooldown" (plus the remaining
            seconds) when refused.
        """
        item = self.items.get(item_id)
        if item is None:
            return ItemAvailability(False, "not found")

        usage = self.usage.get(item_id)
        usage_count = usage.usage_count if usage else 0
        if item.usage_limit is not None and usage_count >= item.usage_limit:
            return ItemAvailability(False, "usage limit exceeded")

        remaining = self.get_cooldown_remaining(item_id)
        if remaining > 0:
            return ItemAvailability(False, "on cooldown", remaining)

        return ItemAvailability(True)

    def get_cooldown_remaining(self, item_id: str) -> float:
        """Seconds until the item is off cooldown, 0 when it is not cooling down."""
        item = self.items.get(item_id)
        if item is None or not item.cooldown:
            return 0.0
        usage = self.usage.get(item_id)
        if usage is None or usage.last_used_at is None:
            return 0.0
        return max(0.0, usage.last_used_at + item.cooldown - self.clock())

    # ------------------------------------------------------------------
    # use

    def use_item(self, item_id: str,
                 position: Optional[Union[Vector2D, Tuple[float, float]]] = None) -> Optional[Reaction]:
        """
        Uses an item.

        Args:
            item_id (str): catalog id
            position (Vector2D | tuple, optional): where the item was dropped

        Returns:
            Reaction | None: None if the item cannot be used right now; nothing
            is recorded or published in that case.
        """
        availability = self.can_use_item(item_id)
        if not availability.can_use:
            InternalLogger.log_item_use(item_id, False, availability.reason)
            return None

        item = self.items[item_id]
        now = self.clock()

        usage = self.usage.setdefault(item_id, UsageRecord(item_id))
        usage.usage_count += 1
        usage.last_used_at = now

        if position is not None and not isinstance(position, Vector2D):
            position = Vector2D(*position)
        reaction = self._process_effects(item, now, position)

        InternalLogger.log_item_use(item_id, True)
        self.dispatcher.dispatch_event(Event("item:reaction", reaction))
        return reaction

    def _process_effects(self, item: ItemDefinition, now: float,
                         position: Optional[Vector2D]) -> Reaction:
        """
        Folds the effect list into one Reaction. Later effects overwrite earlier
        ones for the same reaction field.
        """
        reaction = Reaction(item_id=item.id, position=position, effects=item.effects)

        for effect in item.effects:
            if effect.type == EffectType.TEXT_DISPLAY:
                reaction.message = str(effect.value)
                reaction.duration = effect.duration or DEFAULT_TEXT_DURATION
            elif effect.type == EffectType.STATE_CHANGE:
                reaction.animation = str(effect.value)
                reaction.duration = effect.duration or DEFAULT_STATE_CHANGE_DURATION
            elif effect.type == EffectType.ANIMATION_TRIGGER:
                reaction.animation = str(effect.value)
                reaction.duration = effect.duration or DEFAULT_ANIMATION_DURATION
            elif effect.type == EffectType.SOUND_PLAY:
                reaction.sound = str(effect.value)
            elif effect.type in TIMED_EFFECTS and effect.duration:
                key = f"{item.id}_{effect.type.value}"
                self.active_effects[key] = ActiveEffect(
                    item_id=item.id,
                    effect=effect,
                    expires_at=now + effect.duration
                )

        return reaction

    # ------------------------------------------------------------------
    # active effects

    def get_active_effects(self) -> Dict[str, ActiveEffect]:
        """Evicts expired effects and returns a copy of the rest."""
        now = self.clock()
        for key in [k for k, active in self.active_effects.items() if now >= active.expires_at]:
            del self.active_effects[key]
        return dict(self.active_effects)

    def has_active_effect(self, effect_type: Union[EffectType, str]) -> bool:
        effect_type = EffectType(effect_type)
        return any(active.effect.type == effect_type for active in self.get_active_effects().values())

    def cleanup_expired_effects(self) -> None:
        self.get_active_effects()

    # ------------------------------------------------------------------
    # usage records

    def get_usage_count(self, item_id: str) -> int:
        usage = self.usage.get(item_id)
        return usage.usage_count if usage else 0

    def reset_item_usage(self, item_id: str) -> None:
        """Forgets usage count and cooldown for an item."""
        self.usage.pop(item_id, None)

    # ------------------------------------------------------------------
    # listeners

    def add_reaction_listener(self, callback: Callable[[Event], None]) -> None:
        self.dispatcher.add_listener("item:reaction", callback)
        self._listeners.append(callback)

    def remove_reaction_listener(self, callback: Callable[[Event], None]) -> None:
        self.dispatcher.remove_listener("item:reaction", callback)
        if callback in self._listeners:
            self._listeners.remove(callback)

    def destroy(self) -> None:
        for callback in list(self._listeners):
            self.remove_reaction_listener(callback)
        self.active_effects.clear()
