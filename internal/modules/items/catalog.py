# modules/items/catalog.py

"""
Built-in item catalog and loading of custom catalogs from JSON.
"""

import json
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter

from .item import ItemDefinition, ItemEffect, EffectType, ItemType, ItemRarity

def _effect(effect_type: EffectType, value=None, duration=None) -> ItemEffect:
    return ItemEffect(type=effect_type, value=value, duration=duration)

DEFAULT_ITEMS: List[ItemDefinition] = [
    # food
    ItemDefinition(
        id='fish', name='Fish', name_ja='魚',
        description='A delicious fish that makes your pet happy',
        emoji='🐟', type=ItemType.FOOD, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.HAPPINESS_INCREASE, 20, 5.0),
            _effect(EffectType.TEXT_DISPLAY, 'おいしい！', 3.0),
            _effect(EffectType.ANIMATION_TRIGGER, 'eating'),
        )
    ),
    ItemDefinition(
        id='milk', name='Milk', name_ja='ミルク',
        description='Fresh milk that restores energy',
        emoji='🥛', type=ItemType.FOOD, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.ENERGY_RESTORE, 30, 3.0),
            _effect(EffectType.TEXT_DISPLAY, 'ごくごく...', 2.0),
            _effect(EffectType.STATE_CHANGE, 'drinking', 2.0),
        )
    ),
    ItemDefinition(
        id='cake', name='Cake', name_ja='ケーキ',
        description='A special cake for celebrations',
        emoji='🍰', type=ItemType.FOOD, rarity=ItemRarity.UNCOMMON,
        effects=(
            _effect(EffectType.HAPPINESS_INCREASE, 50, 10.0),
            _effect(EffectType.MOOD_BOOST, 40, 15.0),
            _effect(EffectType.TEXT_DISPLAY, 'やったー！', 3.0),
            _effect(EffectType.ANIMATION_TRIGGER, 'party'),
        )
    ),

    # toys
    ItemDefinition(
        id='ball', name='Ball', name_ja='ボール',
        description='A fun ball to play with',
        emoji='⚽', type=ItemType.TOY, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.MOOD_BOOST, 25, 8.0),
            _effect(EffectType.TEXT_DISPLAY, '遊ぼう！', 2.0),
            _effect(EffectType.STATE_CHANGE, 'playing', 5.0),
        )
    ),
    ItemDefinition(
        id='yarn', name='Yarn', name_ja='毛糸',
        description='Soft yarn that pets love to play with',
        emoji='🧶', type=ItemType.TOY, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.HAPPINESS_INCREASE, 15, 12.0),
            _effect(EffectType.TEXT_DISPLAY, 'ふわふわ〜', 2.0),
            _effect(EffectType.STATE_CHANGE, 'playful', 8.0),
        )
    ),
    ItemDefinition(
        id='toy_mouse', name='Toy Mouse', name_ja='おもちゃのネズミ',
        description='A cute toy mouse that triggers hunting instincts',
        emoji='🐭', type=ItemType.TOY, rarity=ItemRarity.UNCOMMON,
        effects=(
            _effect(EffectType.STATE_CHANGE, 'hunting', 6.0),
            _effect(EffectType.TEXT_DISPLAY, 'にゃー！', 2.0),
            _effect(EffectType.BEHAVIOR_MODIFY, 'increased_activity', 30.0),
        )
    ),

    # tools
    ItemDefinition(
        id='brush', name='Brush', name_ja='ブラシ',
        description='A soft brush for grooming',
        emoji='🪥', type=ItemType.TOOL, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.MOOD_BOOST, 30, 5.0),
            _effect(EffectType.TEXT_DISPLAY, '気持ちいい〜', 3.0),
            _effect(EffectType.STATE_CHANGE, 'relaxed', 8.0),
        )
    ),
    ItemDefinition(
        id='thermometer', name='Thermometer', name_ja='体温計',
        description="Check your pet's health status",
        emoji='🌡️', type=ItemType.TOOL, rarity=ItemRarity.UNCOMMON,
        effects=(
            _effect(EffectType.TEXT_DISPLAY, '健康チェック中...', 3.0),
            _effect(EffectType.STATE_CHANGE, 'examining', 4.0),
        )
    ),

    # medicine
    ItemDefinition(
        id='vitamin', name='Vitamin', name_ja='ビタミン',
        description='Healthy vitamins to boost immunity',
        emoji='💊', type=ItemType.MEDICINE, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.ENERGY_RESTORE, 40, 2.0),
            _effect(EffectType.TEXT_DISPLAY, '元気になった！', 3.0),
            _effect(EffectType.TEMPORARY_ABILITY, 'energy_boost', 60.0),
        ),
        cooldown=30.0
    ),

    # decoration
    ItemDefinition(
        id='flower', name='Flower', name_ja='花',
        description='A beautiful flower that brings joy',
        emoji='🌸', type=ItemType.DECORATION, rarity=ItemRarity.COMMON,
        effects=(
            _effect(EffectType.MOOD_BOOST, 20, 15.0),
            _effect(EffectType.TEXT_DISPLAY, 'きれい〜', 2.0),
            _effect(EffectType.STATE_CHANGE, 'admiring', 6.0),
        )
    ),
    ItemDefinition(
        id='crown', name='Crown', name_ja='王冠',
        description='A majestic crown that makes your pet feel royal',
        emoji='👑', type=ItemType.DECORATION, rarity=ItemRarity.RARE,
        effects=(
            _effect(EffectType.HAPPINESS_INCREASE, 60, 20.0),
            _effect(EffectType.MOOD_BOOST, 50, 25.0),
            _effect(EffectType.TEXT_DISPLAY, '私は王様だ！', 4.0),
            _effect(EffectType.STATE_CHANGE, 'royal', 15.0),
            _effect(EffectType.TEMPORARY_ABILITY, 'royal_aura', 120.0),
        ),
        cooldown=60.0
    ),

    # special
    ItemDefinition(
        id='magic_wand', name='Magic Wand', name_ja='魔法の杖',
        description='A mysterious wand with magical powers',
        emoji='🪄', type=ItemType.SPECIAL, rarity=ItemRarity.EPIC,
        effects=(
            _effect(EffectType.STATE_CHANGE, 'magical', 10.0),
            _effect(EffectType.TEXT_DISPLAY, 'アブラカダブラ！', 3.0),
            _effect(EffectType.ANIMATION_TRIGGER, 'sparkle'),
            _effect(EffectType.TEMPORARY_ABILITY, 'magic_powers', 180.0),
        ),
        cooldown=120.0,
        usage_limit=3
    ),
    ItemDefinition(
        id='rainbow', name='Rainbow', name_ja='虹',
        description='A beautiful rainbow that brings ultimate happiness',
        emoji='🌈', type=ItemType.SPECIAL, rarity=ItemRarity.LEGENDARY,
        effects=(
            _effect(EffectType.HAPPINESS_INCREASE, 100, 30.0),
            _effect(EffectType.MOOD_BOOST, 80, 45.0),
            _effect(EffectType.ENERGY_RESTORE, 100, 5.0),
            _effect(EffectType.TEXT_DISPLAY, '最高の気分！', 5.0),
            _effect(EffectType.STATE_CHANGE, 'euphoric', 20.0),
            _effect(EffectType.ANIMATION_TRIGGER, 'rainbow_dance'),
            _effect(EffectType.TEMPORARY_ABILITY, 'rainbow_aura', 300.0),
        ),
        cooldown=300.0,
        usage_limit=1
    ),
]

_catalog_adapter = TypeAdapter(List[ItemDefinition])

def load_catalog(path: Union[str, Path]) -> List[ItemDefinition]:
    """
    Reads a JSON list of item definitions.

    Raises:
        OSError: if the file cannot be read
        pydantic.ValidationError: if an entry does not describe a valid item
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return _catalog_adapter.validate_python(data)
