# utils/helpers.py

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')

def clamp(value, min_value, max_value):
    """
    Clamps the value between min_value and max_value.

    Args:
        value (float): The value to clamp.
        min_value (float): The minimum allowed value.
        max_value (float): The maximum allowed value.

    Returns:
        float: The clamped value.
    """
    return max(min_value, min(value, max_value))

def weighted_random_choice(choices: Sequence[T], weights: Sequence[float], rng=random) -> Optional[T]:
    """
    Picks one choice with probability proportional to its weight.

    Walks the cumulative weights against a uniform draw scaled by the total
    weight and returns the first choice whose cumulative weight exceeds the
    draw. Zero-weight choices are never picked unless rounding leaves the
    draw unmatched, in which case the last choice is returned.

    Args:
        choices: Candidates, in priority order.
        weights: One non-negative weight per candidate.
        rng: Anything with a random() method returning [0, 1).

    Returns:
        The selected choice, or None if there are no choices or no positive weight.
    """
    if not choices or len(choices) != len(weights):
        return None
    total_weight = sum(weights)
    if total_weight <= 0:
        return None

    draw = rng.random() * total_weight
    cumulative = 0.0
    for choice, weight in zip(choices, weights):
        cumulative += weight
        if cumulative > draw:
            return choice
    return choices[-1]
