"""
Tests for the item effect engine and the item catalog.
"""

import json

import pytest
from pydantic import ValidationError

from internal.modules.items import (
    ItemEffectEngine, ItemDefinition, ItemEffect, EffectType, ItemType, ItemRarity,
    DEFAULT_ITEMS, load_catalog
)
from utils.vector import Vector2D

@pytest.fixture
def engine(sim):
    engine = ItemEffectEngine(dispatcher=sim.dispatcher, clock=sim.clock)
    yield engine
    engine.destroy()

def test_default_catalog(engine):
    assert len(engine.get_all_items()) == 13
    fish = engine.get_item_by_id('fish')
    assert fish.cooldown is None
    assert fish.usage_limit is None
    assert engine.get_item_by_id('unicorn') is None

def test_fish_twice_in_a_row(engine):
    first = engine.use_item('fish')
    second = engine.use_item('fish')

    assert first is not None and second is not None
    assert first.message == 'おいしい！'
    assert second.message == 'おいしい！'
    assert engine.get_usage_count('fish') == 2

def test_reaction_folds_effects(engine):
    fish = engine.use_item('fish')
    # animation_trigger without a duration falls back to 3 seconds
    assert fish.animation == 'eating'
    assert fish.duration == 3.0

    milk = engine.use_item('milk')
    assert milk.message == 'ごくごく...'
    assert milk.animation == 'drinking'
    assert milk.duration == 2.0

def test_sound_effect(sim):
    bell = ItemDefinition(
        id='bell', name='Bell', type=ItemType.TOY,
        effects=(ItemEffect(type=EffectType.SOUND_PLAY, value='ding'),)
    )
    engine = ItemEffectEngine([bell], clock=sim.clock)
    assert engine.use_item('bell').sound == 'ding'

def test_unknown_item(engine, recorder):
    availability = engine.can_use_item('unicorn')
    assert not availability.can_use
    assert availability.reason == "not found"
    assert engine.use_item('unicorn') is None
    assert recorder.of("item:reaction") == []

def test_cooldown_counts_down_to_zero(engine, sim):
    assert engine.get_cooldown_remaining('vitamin') == 0

    assert engine.use_item('vitamin') is not None
    remaining = [engine.get_cooldown_remaining('vitamin')]
    for _ in range(3):
        sim.advance(10)
        remaining.append(engine.get_cooldown_remaining('vitamin'))

    assert remaining == [30.0, 20.0, 10.0, 0.0]
    assert engine.can_use_item('vitamin').can_use

def test_refusal_is_idempotent(engine, sim, recorder):
    engine.use_item('vitamin')
    recorder.clear()

    for _ in range(5):
        sim.advance(1)
        availability = engine.can_use_item('vitamin')
        assert availability.reason == "on cooldown"
        assert availability.cooldown_remaining > 0
        assert engine.use_item('vitamin') is None

    assert engine.get_usage_count('vitamin') == 1
    assert recorder.of("item:reaction") == []

def test_usage_limit(engine, sim):
    assert engine.use_item('rainbow') is not None
    sim.advance(1000)

    availability = engine.can_use_item('rainbow')
    assert not availability.can_use
    assert availability.reason == "usage limit exceeded"

def test_magic_wand_three_times(engine, sim):
    for _ in range(3):
        assert engine.use_item('magic_wand') is not None
        sim.advance(120)
    assert engine.can_use_item('magic_wand').reason == "usage limit exceeded"

def test_reset_item_usage(engine):
    engine.use_item('rainbow')
    engine.reset_item_usage('rainbow')
    assert engine.get_usage_count('rainbow') == 0
    assert engine.get_cooldown_remaining('rainbow') == 0
    assert engine.can_use_item('rainbow').can_use

def test_active_effects_expire(engine, sim):
    engine.use_item('fish')
    active = engine.get_active_effects()
    assert list(active) == ['fish_happiness_increase']
    assert active['fish_happiness_increase'].expires_at == sim.now + 5.0
    assert engine.has_active_effect('happiness_increase')

    sim.advance(5.0)
    assert engine.get_active_effects() == {}
    assert not engine.has_active_effect(EffectType.HAPPINESS_INCREASE)

def test_timed_abilities_are_tracked(engine):
    engine.use_item('toy_mouse')
    engine.use_item('vitamin')
    assert set(engine.get_active_effects()) == {
        'toy_mouse_behavior_modify', 'vitamin_energy_restore', 'vitamin_temporary_ability'
    }

def test_get_active_effects_returns_copy(engine):
    engine.use_item('ball')
    engine.get_active_effects().clear()
    assert engine.has_active_effect('mood_boost')

def test_cleanup_expired_effects(engine, sim):
    engine.use_item('ball')
    sim.clock.now += 8.0
    engine.cleanup_expired_effects()
    assert engine.active_effects == {}

def test_faulty_listener_is_isolated(engine):
    seen = []

    def broken(event):
        raise RuntimeError("listener bug")

    engine.add_reaction_listener(broken)
    engine.add_reaction_listener(seen.append)

    reaction = engine.use_item('flower')

    assert reaction is not None
    assert [event.data for event in seen] == [reaction]
    assert engine.get_usage_count('flower') == 1

def test_remove_reaction_listener(engine):
    seen = []
    engine.add_reaction_listener(seen.append)
    engine.remove_reaction_listener(seen.append)
    engine.use_item('yarn')
    assert seen == []

def test_position_is_carried(engine):
    reaction = engine.use_item('cake', (12, 34))
    assert reaction.position == Vector2D(12, 34)

def test_catalog_queries(engine):
    assert {item.id for item in engine.get_items_by_type('food')} == {'fish', 'milk', 'cake'}
    assert [item.id for item in engine.get_items_by_rarity(ItemRarity.LEGENDARY)] == ['rainbow']

def test_recommended_items(engine):
    recommended = engine.get_recommended_items(max_items=20)
    rarities = [item.rarity for item in recommended]
    assert rarities[0] == ItemRarity.COMMON
    assert rarities[-1] == ItemRarity.LEGENDARY
    assert len(engine.get_recommended_items()) == 5

    engine.use_item('rainbow')
    assert 'rainbow' not in {item.id for item in engine.get_recommended_items(max_items=20)}

def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        ItemEffectEngine([DEFAULT_ITEMS[0], DEFAULT_ITEMS[0]])

def test_definitions_are_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_ITEMS[0].cooldown = 10

def test_load_catalog(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{
        "id": "carrot",
        "name": "Carrot",
        "type": "food",
        "rarity": "common",
        "effects": [
            {"type": "hunger_restore", "value": 15},
            {"type": "text_display", "value": "crunch", "duration": 1.5}
        ],
        "cooldown": 10
    }]), encoding='utf-8')

    items = load_catalog(path)

    assert len(items) == 1
    carrot = items[0]
    assert carrot.type == ItemType.FOOD
    assert carrot.effects[0].type == EffectType.HUNGER_RESTORE
    assert carrot.effects[1].value == "crunch"
    assert carrot.cooldown == 10

def test_load_catalog_rejects_bad_entries(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{"id": "rock", "name": "Rock", "type": "mineral"}]), encoding='utf-8')
    with pytest.raises(ValidationError):
        load_catalog(path)
