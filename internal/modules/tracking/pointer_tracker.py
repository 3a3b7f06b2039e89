# modules/tracking/pointer_tracker.py

from dataclasses import dataclass
from typing import Callable, List, Optional, Union, Tuple

from config import Config, TrackingConfig
from core.timer import TimerCoordinator, TimedTask
from event_dispatcher import EventDispatcher, Event
from loggers import InternalLogger
from utils.vector import Vector2D, Size

@dataclass
class TrackingData:
    """
    Where the pet should look.

    Attributes:
        mouse_position: last known pointer position
        pet_position: top-left corner of the pet sprite
        pet_size: size of the pet sprite
        is_in_tracking_range: pointer is within the tracking radius of the pet center
        look_angle: atan2 of the pet-center-to-pointer delta, in radians
        look_direction: unit vector toward the pointer, zero when on the center
    """
    mouse_position: Vector2D
    pet_position: Vector2D
    pet_size: Size
    is_in_tracking_range: bool
    look_angle: float
    look_direction: Vector2D

class PointerTracker:
    """
    Follows the pointer and turns its position into gaze data for the pet.

    Pointer samples arrive from the host through on_pointer_move. While
    tracking, updates are coalesced to at most one tracking:update per frame.
    """

    def __init__(self,
                 config: Optional[TrackingConfig] = None,
                 timer: Optional[TimerCoordinator] = None,
                 dispatcher: Optional[EventDispatcher] = None):
        self.config = config or Config.get_tracking_config()
        self.timer = timer or TimerCoordinator()
        self.dispatcher = dispatcher or EventDispatcher()

        self.pointer_position = Vector2D(0.0, 0.0)
        self.pet_position = Vector2D(0.0, 0.0)
        self.pet_size = Size(0, 0)
        self.is_tracking = False

        self._frame_task: Optional[TimedTask] = None
        self._listeners: List[Callable] = []

    def on_pointer_move(self, x: float, y: float) -> None:
        """Host pointer-move signal."""
        if not self.config.enabled:
            return
        self.pointer_position = Vector2D(x, y)
        if self.is_tracking:
            self._request_update()

    def _request_update(self) -> None:
        if self._frame_task is not None:
            return
        self._frame_task = self.timer.call_later(
            "tracking:frame", 1.0 / Config.FRAME_RATE, self._on_frame
        )

    def _on_frame(self) -> None:
        self._frame_task = None
        if self.is_tracking:
            self._emit(self.calculate_tracking_data(self.pet_position, self.pet_size))

    def calculate_tracking_data(self, pet_position: Vector2D, pet_size: Size) -> TrackingData:
        """
        Computes gaze data from the pet center toward the pointer.
        """
        center = Vector2D(pet_position.x + pet_size.width / 2, pet_position.y + pet_size.height / 2)
        delta = self.pointer_position - center
        distance = delta.length()

        return TrackingData(
            mouse_position=self.pointer_position.copy(),
            pet_position=pet_position.copy(),
            pet_size=pet_size,
            is_in_tracking_range=distance <= self.config.tracking_radius,
            look_angle=delta.angle(),
            look_direction=delta.normalized()
        )

    def start_tracking(self, pet_position: Vector2D, pet_size: Size) -> TrackingData:
        """Starts tracking and emits one sample right away."""
        self.is_tracking = True
        self.pet_position = pet_position.copy()
        self.pet_size = pet_size
        InternalLogger.debug("Pointer tracking started")
        data = self.calculate_tracking_data(self.pet_position, self.pet_size)
        self._emit(data)
        return data

    def stop_tracking(self) -> None:
        self.is_tracking = False
        self.timer.cancel(self._frame_task)
        self._frame_task = None

    def update_pet_data(self, pet_position: Vector2D, pet_size: Size) -> Optional[TrackingData]:
        """Re-emits with new pet geometry; ignored while not tracking."""
        if not self.is_tracking:
            return None
        self.pet_position = pet_position.copy()
        self.pet_size = pet_size
        data = self.calculate_tracking_data(self.pet_position, self.pet_size)
        self._emit(data)
        return data

    # ------------------------------------------------------------------
    # helpers

    def get_current_pointer_position(self) -> Vector2D:
        return self.pointer_position.copy()

    def is_pointer_in_area(self, x: float, y: float, width: float, height: float) -> bool:
        return (x <= self.pointer_position.x <= x + width
                and y <= self.pointer_position.y <= y + height)

    def get_distance_to_point(self, point: Union[Vector2D, Tuple[float, float]]) -> float:
        if not isinstance(point, Vector2D):
            point = Vector2D(*point)
        return self.pointer_position.distance_to(point)

    # ------------------------------------------------------------------
    # listeners

    def add_listener(self, callback: Callable[[Event], None]) -> None:
        self.dispatcher.add_listener("tracking:update", callback)
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[Event], None]) -> None:
        self.dispatcher.remove_listener("tracking:update", callback)
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit(self, data: TrackingData) -> None:
        self.dispatcher.dispatch_event(Event("tracking:update", data))

    def destroy(self) -> None:
        self.stop_tracking()
        for callback in list(self._listeners):
            self.remove_listener(callback)
