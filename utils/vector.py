# utils/vector.py

import math
from dataclasses import dataclass

class Vector2D:
    """
    Simple 2D vector class for position and movement calculations.
    """

    def __init__(self, x=0.0, y=0.0):
        """
        Initializes a Vector2D instance.

        Args:
            x (float): X-coordinate.
            y (float): Y-coordinate.
        """
        self.x = x
        self.y = y

    # Arithmetic operations
    def __add__(self, other):
        """Adds two vectors."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        """Subtracts two vectors."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar):
        """Multiplies vector by a scalar."""
        return Vector2D(self.x * scalar, self.y * scalar)

    def __eq__(self, other):
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self):
        return f"Vector2D({self.x:.2f}, {self.y:.2f})"

    def length(self):
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def normalized(self):
        """Unit vector in the same direction, or the zero vector."""
        length = self.length()
        if length == 0:
            return Vector2D(0.0, 0.0)
        return Vector2D(self.x / length, self.y / length)

    def distance_to(self, other):
        """Distance between two points."""
        return (other - self).length()

    def angle(self):
        """Angle in radians, measured like atan2(y, x)."""
        return math.atan2(self.y, self.x)

    def copy(self):
        return Vector2D(self.x, self.y)

@dataclass(frozen=True)
class Size:
    """Width and height of a window or sprite, in pixels."""
    width: float
    height: float
