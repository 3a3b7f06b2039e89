from .item import (
    ItemType, ItemRarity, EffectType, ItemEffect, ItemDefinition,
    UsageRecord, ActiveEffect, ItemAvailability, Reaction
)
from .catalog import DEFAULT_ITEMS, load_catalog
from .item_manager import ItemEffectEngine

__all__ = [
    'ItemType', 'ItemRarity', 'EffectType', 'ItemEffect', 'ItemDefinition',
    'UsageRecord', 'ActiveEffect', 'ItemAvailability', 'Reaction',
    'DEFAULT_ITEMS', 'load_catalog', 'ItemEffectEngine'
]
