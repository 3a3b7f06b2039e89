# modules/items/item.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from utils.vector import Vector2D

class ItemType(str, Enum):
    FOOD = 'food'
    TOY = 'toy'
    TOOL = 'tool'
    MEDICINE = 'medicine'
    DECORATION = 'decoration'
    SPECIAL = 'special'

class ItemRarity(str, Enum):
    COMMON = 'common'
    UNCOMMON = 'uncommon'
    RARE = 'rare'
    EPIC = 'epic'
    LEGENDARY = 'legendary'

RARITY_ORDER = {rarity: index for index, rarity in enumerate(ItemRarity)}

class EffectType(str, Enum):
    MOOD_BOOST = 'mood_boost'
    ENERGY_RESTORE = 'energy_restore'
    HAPPINESS_INCREASE = 'happiness_increase'
    HUNGER_RESTORE = 'hunger_restore'
    HEALTH_RESTORE = 'health_restore'
    CLEANLINESS_BOOST = 'cleanliness_boost'
    STATE_CHANGE = 'state_change'
    ANIMATION_TRIGGER = 'animation_trigger'
    SOUND_PLAY = 'sound_play'
    TEXT_DISPLAY = 'text_display'
    BEHAVIOR_MODIFY = 'behavior_modify'
    TEMPORARY_ABILITY = 'temporary_ability'

# effect types that leave a timed ActiveEffect behind when they carry a duration
TIMED_EFFECTS = frozenset({
    EffectType.MOOD_BOOST,
    EffectType.HAPPINESS_INCREASE,
    EffectType.ENERGY_RESTORE,
    EffectType.TEMPORARY_ABILITY,
    EffectType.BEHAVIOR_MODIFY,
})

class ItemEffect(BaseModel):
    """One effect of an item. Durations are in seconds."""
    model_config = ConfigDict(frozen=True)

    type: EffectType
    value: Optional[Union[float, str]] = None
    duration: Optional[float] = None
    target: Optional[str] = None

class ItemDefinition(BaseModel):
    """
    Immutable catalog entry.

    cooldown is in seconds; usage_limit of None means unlimited uses.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_ja: Optional[str] = None
    description: str = ""
    emoji: str = ""
    type: ItemType
    rarity: ItemRarity = ItemRarity.COMMON
    effects: Tuple[ItemEffect, ...] = ()
    cooldown: Optional[float] = None
    usage_limit: Optional[int] = None

    @field_validator('cooldown', 'usage_limit')
    @classmethod
    def ensure_not_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("must not be negative")
        return v

@dataclass
class UsageRecord:
    item_id: str
    usage_count: int = 0
    last_used_at: Optional[float] = None

@dataclass
class ActiveEffect:
    item_id: str
    effect: ItemEffect
    expires_at: float

@dataclass
class ItemAvailability:
    """Result of an availability check; reason is set whenever can_use is False."""
    can_use: bool
    reason: Optional[str] = None
    cooldown_remaining: Optional[float] = None

    def __bool__(self) -> bool:
        return self.can_use

@dataclass
class Reaction:
    """What the presentation layer should show after an item is used."""
    item_id: str
    message: Optional[str] = None
    animation: Optional[str] = None
    sound: Optional[str] = None
    duration: Optional[float] = None
    position: Optional[Vector2D] = None
    effects: Tuple[ItemEffect, ...] = field(default_factory=tuple)
