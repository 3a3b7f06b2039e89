from .pointer_tracker import PointerTracker, TrackingData

__all__ = ['PointerTracker', 'TrackingData']
