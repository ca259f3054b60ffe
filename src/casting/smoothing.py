from typing import Optional

from .landmarks import Point


class CursorSmoother:
    """
    Exponential moving average over the index fingertip.

    smoothed = smoothed * (1 - alpha) + raw * alpha

    The factor is fixed; the first sample after a detection gap reseeds the
    cursor instead of blending from a stale position.
    """

    def __init__(self, alpha: float = 0.35):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self._alpha = alpha
        self._cursor: Optional[Point] = None

    @property
    def cursor(self) -> Optional[Point]:
        return self._cursor

    def update(self, raw: Point) -> Point:
        if self._cursor is None:
            self._cursor = (float(raw[0]), float(raw[1]))
        else:
            a = self._alpha
            cx, cy = self._cursor
            self._cursor = (cx * (1.0 - a) + raw[0] * a, cy * (1.0 - a) + raw[1] * a)
        return self._cursor

    def clear(self) -> None:
        self._cursor = None
