"""
Stroke capture while the pinch is held.
"""
import math
from typing import List, Tuple

from .landmarks import Point


class PathCapture:
    """
    Accumulates cursor points for the current stroke.

    A point is stored only if it lies more than ``min_distance`` pixels from
    the last stored point. Slow fingers would otherwise pile up near-duplicate
    points that skew arc-length resampling.
    """

    def __init__(self, min_distance: float = 4.0):
        self._min_distance = min_distance
        self._points: List[Point] = []

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> Tuple[Point, ...]:
        """Read-only snapshot of the live stroke."""
        return tuple(self._points)

    def begin(self) -> None:
        self._points = []

    def add(self, point: Point) -> bool:
        if self._points:
            last = self._points[-1]
            if math.hypot(point[0] - last[0], point[1] - last[1]) <= self._min_distance:
                return False
        self._points.append((float(point[0]), float(point[1])))
        return True

    def consume(self) -> Tuple[Point, ...]:
        """Hand over the stroke and clear the buffer."""
        path = tuple(self._points)
        self._points = []
        return path

    def discard(self) -> None:
        self._points = []
