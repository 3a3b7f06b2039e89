"""
Tests for the autonomous behavior state machine.
"""

import pytest

from config import BehaviorConfig, Config
from internal.modules.behaviors import BehaviorStateMachine, BehaviorContext, LifeState
from utils.vector import Vector2D, Size

ONLY_WALKING = {'walking': 1.0, 'sleeping': 0.0, 'observing': 0.0, 'yawning': 0.0, 'stretching': 0.0}

@pytest.fixture
def make_machine(sim, fixed_rng):
    machines = []

    def _make(rng_value=0.0, **config_overrides):
        config = BehaviorConfig(**config_overrides)
        machine = BehaviorStateMachine(
            config=config,
            timer=sim.timer,
            dispatcher=sim.dispatcher,
            clock=sim.clock,
            rng=fixed_rng(rng_value)
        )
        machines.append(machine)
        return machine

    yield _make
    for machine in machines:
        machine.destroy()

@pytest.fixture
def context():
    return BehaviorContext(
        position=Vector2D(100.0, 100.0),
        window_size=Size(800, 600),
        pet_size=Size(100, 100)
    )

def test_starts_idle(make_machine):
    machine = make_machine()
    assert machine.get_current_state() == LifeState.IDLE
    assert machine.last_interaction_time is None
    assert not machine.is_user_interacting()

def test_ticker_after_interaction_cooldown_transitions_to_walking(make_machine, sim, recorder):
    machine = make_machine(behavior_probabilities=dict(ONLY_WALKING))
    machine.on_user_interaction()

    sim.advance(machine.config.idle_state_change_interval)

    assert machine.get_current_state() == LifeState.WALKING
    change = recorder.of("behavior:state_change")[-1]
    assert change.data == {"state": LifeState.WALKING, "old_state": LifeState.IDLE}

def test_ticker_is_quiet_while_user_is_interacting(make_machine, sim):
    machine = make_machine(idle_state_change_interval=2.0, behavior_probabilities=dict(ONLY_WALKING))
    machine.on_user_interaction()

    sim.advance(2.0)
    assert machine.get_current_state() == LifeState.IDLE
    sim.advance(2.0)
    assert machine.get_current_state() == LifeState.IDLE

    # third tick lands 6s after the interaction, past the cooldown
    sim.advance(2.0)
    assert machine.get_current_state() == LifeState.WALKING

def test_zero_weights_never_chosen(make_machine):
    machine = make_machine(rng_value=0.999, behavior_probabilities={
        'walking': 0.0, 'sleeping': 1.0, 'observing': 0.0, 'yawning': 0.0, 'stretching': 0.0
    })
    machine.trigger_random_behavior()
    assert machine.get_current_state() == LifeState.SLEEPING

def test_all_zero_weights_do_nothing(make_machine):
    machine = make_machine(behavior_probabilities={'walking': 0.0, 'sleeping': 0.0})
    machine.trigger_random_behavior()
    assert machine.get_current_state() == LifeState.IDLE

def test_long_idle_boosts_sleeping(make_machine, sim):
    probabilities = {'walking': 0.5, 'sleeping': 0.5}

    fresh = make_machine(rng_value=0.4, idle_state_change_interval=10_000, behavior_probabilities=dict(probabilities))
    fresh.trigger_random_behavior()
    assert fresh.get_current_state() == LifeState.WALKING

    # after the long idle threshold sleeping weighs 1.0 against walking 0.5
    bored = make_machine(rng_value=0.4, idle_state_change_interval=10_000, behavior_probabilities=dict(probabilities))
    sim.clock.now += bored.config.long_idle_threshold + 1
    bored.trigger_random_behavior()
    assert bored.get_current_state() == LifeState.SLEEPING

def test_behavior_completes_back_to_idle(make_machine, sim, recorder):
    machine = make_machine(idle_state_change_interval=10_000)
    machine.set_state('walking')
    recorder.clear()

    sim.advance(machine.config.walking_duration - 0.5)
    assert machine.get_current_state() == LifeState.WALKING

    sim.advance(0.5)
    assert machine.get_current_state() == LifeState.IDLE
    assert recorder.types == ["behavior:completed", "behavior:state_change"]
    assert recorder.events[0].data == {"state": LifeState.WALKING}
    assert recorder.events[1].data["old_state"] == LifeState.WALKING

def test_set_same_state_is_noop(make_machine, recorder):
    machine = make_machine()
    machine.set_state(LifeState.IDLE)
    assert recorder.of("behavior:state_change") == []

def test_leaving_state_cancels_completion_timer(make_machine, sim, recorder):
    machine = make_machine(idle_state_change_interval=10_000)
    machine.set_state(LifeState.SLEEPING)
    machine.set_state(LifeState.HOVER)
    recorder.clear()

    sim.advance(machine.config.sleeping_duration + 1)
    assert machine.get_current_state() == LifeState.HOVER
    assert recorder.of("behavior:completed") == []

def test_presentation_states_have_no_duration(make_machine):
    machine = make_machine()
    for state in (LifeState.IDLE, LifeState.HOVER, LifeState.ACTIVE, LifeState.LOADING):
        assert machine.get_state_duration(state) == 0
    assert machine.get_state_duration('yawning') == machine.config.yawning_duration

def test_interaction_interrupts_autonomous_state(make_machine):
    machine = make_machine()
    machine.set_state(LifeState.SLEEPING)
    machine.on_user_interaction()
    assert machine.get_current_state() == LifeState.IDLE
    assert machine.is_user_interacting()

def test_interaction_leaves_presentation_state_alone(make_machine):
    machine = make_machine()
    machine.set_state(LifeState.HOVER)
    machine.on_user_interaction()
    assert machine.get_current_state() == LifeState.HOVER

def test_walking_step_moves_toward_target(make_machine, context, recorder):
    machine = make_machine(rng_value=0.5)
    machine.set_state(LifeState.WALKING)

    new_position = machine.update_walking_position(context)

    # rng 0.5 puts the target in the middle of the movable area and cancels jitter
    target = machine.walking_target
    assert (target.x, target.y) == (350.0, 250.0)
    step = machine.config.walking.speed / Config.FRAME_RATE
    assert context.position.distance_to(target) - new_position.distance_to(target) == pytest.approx(step)
    assert recorder.of("behavior:position_update")[-1].data == {"position": new_position}

def test_walking_arrival_picks_new_target(make_machine, context, recorder):
    machine = make_machine(rng_value=0.5)
    machine.set_state(LifeState.WALKING)
    machine.walking_target = Vector2D(105.0, 105.0)

    result = machine.update_walking_position(context)

    assert result == context.position
    assert result is not context.position
    assert machine.walking_target == Vector2D(350.0, 250.0)
    assert recorder.of("behavior:position_update") == []

def test_walking_position_is_clamped(make_machine):
    machine = make_machine(rng_value=0.0)
    machine.set_state(LifeState.WALKING)
    context = BehaviorContext(Vector2D(0.0, 0.0), Size(800, 600), Size(100, 100))

    new_position = machine.update_walking_position(context)

    margin = machine.config.walking.boundary_margin
    assert new_position.x >= margin
    assert new_position.y >= margin

def test_no_walking_update_outside_walking(make_machine, context):
    machine = make_machine()
    assert machine.update_walking_position(context) is None
    assert machine.walking_target is None

def test_state_exit_drops_walking_target(make_machine, context):
    machine = make_machine(rng_value=0.5)
    machine.set_state(LifeState.WALKING)
    machine.update_walking_position(context)
    assert machine.walking_target is not None

    machine.set_state(LifeState.IDLE)
    assert machine.walking_target is None

def test_listener_registry(make_machine):
    machine = make_machine()
    seen = []
    listener = seen.append
    machine.add_listener(listener)
    machine.set_state(LifeState.OBSERVING)
    machine.remove_listener(listener)
    machine.set_state(LifeState.IDLE)

    assert [event.data["state"] for event in seen] == [LifeState.OBSERVING]

def test_get_behavior_state(make_machine, sim):
    machine = make_machine()
    machine.on_user_interaction()
    summary = machine.get_behavior_state()
    assert summary["current_state"] == "idle"
    assert summary["last_interaction_time"] == sim.now
    assert summary["walking_target"] is None

def test_destroy_cancels_everything(make_machine, sim, recorder):
    machine = make_machine(behavior_probabilities=dict(ONLY_WALKING))
    machine.set_state(LifeState.STRETCHING)
    machine.destroy()
    recorder.clear()

    assert sim.timer.get_task_status() == {}
    sim.advance(1000)
    assert machine.get_current_state() == LifeState.STRETCHING
    assert recorder.events == []
