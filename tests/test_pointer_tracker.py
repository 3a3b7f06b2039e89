"""
Tests for pointer tracking and gaze calculation.
"""

import math

import pytest

from config import Config, TrackingConfig
from internal.modules.tracking import PointerTracker, TrackingData
from utils.vector import Vector2D, Size

PET_POSITION = Vector2D(0.0, 0.0)
PET_SIZE = Size(100, 100)

@pytest.fixture
def tracker(sim):
    tracker = PointerTracker(TrackingConfig(enabled=True, tracking_radius=200), sim.timer, sim.dispatcher)
    yield tracker
    tracker.destroy()

def test_gaze_toward_pointer(tracker):
    tracker.on_pointer_move(200, 100)

    data = tracker.calculate_tracking_data(PET_POSITION, PET_SIZE)

    # pet center is (50, 50)
    assert isinstance(data, TrackingData)
    assert data.look_angle == pytest.approx(math.atan2(50, 150))
    assert data.look_direction.length() == pytest.approx(1.0)
    assert data.look_direction.x == pytest.approx(150 / math.hypot(150, 50))
    assert data.is_in_tracking_range
    assert data.mouse_position == Vector2D(200, 100)

def test_pointer_on_center(tracker):
    tracker.on_pointer_move(50, 50)
    data = tracker.calculate_tracking_data(PET_POSITION, PET_SIZE)
    assert data.look_direction == Vector2D(0.0, 0.0)
    assert data.look_angle == 0.0

def test_tracking_radius_is_inclusive(tracker):
    tracker.on_pointer_move(250, 50)
    assert tracker.calculate_tracking_data(PET_POSITION, PET_SIZE).is_in_tracking_range
    tracker.on_pointer_move(251, 50)
    assert not tracker.calculate_tracking_data(PET_POSITION, PET_SIZE).is_in_tracking_range

def test_start_tracking_emits_immediately(tracker, recorder):
    data = tracker.start_tracking(PET_POSITION, PET_SIZE)
    updates = recorder.of("tracking:update")
    assert len(updates) == 1
    assert updates[0].data is data

def test_moves_are_coalesced_per_frame(tracker, sim, recorder):
    tracker.start_tracking(PET_POSITION, PET_SIZE)
    recorder.clear()

    for x in range(10):
        tracker.on_pointer_move(x, 0)
    assert recorder.events == []

    sim.advance(1.0 / Config.FRAME_RATE)

    updates = recorder.of("tracking:update")
    assert len(updates) == 1
    assert updates[0].data.mouse_position == Vector2D(9, 0)

def test_no_samples_while_not_tracking(tracker, sim, recorder):
    tracker.on_pointer_move(10, 10)
    sim.advance(1.0)
    assert recorder.events == []
    assert tracker.update_pet_data(PET_POSITION, PET_SIZE) is None
    assert tracker.get_current_pointer_position() == Vector2D(10, 10)

def test_stop_tracking_cancels_pending_frame(tracker, sim, recorder):
    tracker.start_tracking(PET_POSITION, PET_SIZE)
    tracker.on_pointer_move(5, 5)
    tracker.stop_tracking()
    recorder.clear()

    sim.advance(1.0)
    assert recorder.events == []
    assert sim.timer.get_task_status() == {}

def test_frame_uses_latest_pet_data(tracker, sim, recorder):
    tracker.start_tracking(PET_POSITION, PET_SIZE)
    tracker.update_pet_data(Vector2D(300, 300), PET_SIZE)
    tracker.on_pointer_move(0, 0)
    recorder.clear()

    sim.advance(1.0 / Config.FRAME_RATE)

    assert recorder.of("tracking:update")[0].data.pet_position == Vector2D(300, 300)

def test_disabled_tracking_ignores_pointer(sim):
    tracker = PointerTracker(TrackingConfig(enabled=False), sim.timer, sim.dispatcher)
    tracker.on_pointer_move(10, 10)
    assert tracker.get_current_pointer_position() == Vector2D(0, 0)

def test_area_and_distance_helpers(tracker):
    tracker.on_pointer_move(30, 40)
    assert tracker.is_pointer_in_area(0, 0, 30, 40)
    assert not tracker.is_pointer_in_area(31, 0, 10, 100)
    assert tracker.get_distance_to_point((0, 0)) == 50.0
    assert tracker.get_distance_to_point(Vector2D(30, 40)) == 0.0

def test_listener_registry(tracker):
    seen = []
    tracker.add_listener(seen.append)
    tracker.start_tracking(PET_POSITION, PET_SIZE)
    tracker.remove_listener(seen.append)
    tracker.update_pet_data(PET_POSITION, PET_SIZE)
    assert len(seen) == 1
