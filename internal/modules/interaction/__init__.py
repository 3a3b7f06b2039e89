from .interaction_manager import InteractionDetector, InteractionEvent, TimeBasedEmotion, ClickPattern

__all__ = ['InteractionDetector', 'InteractionEvent', 'TimeBasedEmotion', 'ClickPattern']
