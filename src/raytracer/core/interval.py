# core/interval.py
import math


class Interval:
    """
    A closed range [min, max] of real numbers. Used for valid ray-parameter
    windows during intersection and for clamping texture coordinates.
    """
    __slots__ = ['min', 'max']

    def __init__(self, minimum: float = math.inf, maximum: float = -math.inf):
        self.min = minimum
        self.max = maximum

    def surrounds(self, x: float) -> bool:
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def with_max(self, maximum: float) -> "Interval":
        return Interval(self.min, maximum)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"


# Lower bound used by every ray cast from a surface, to avoid self-intersection.
SHADOW_EPSILON = 0.001


def ray_interval() -> Interval:
    """Default parameter window for rays leaving a surface or the camera."""
    return Interval(SHADOW_EPSILON, math.inf)
