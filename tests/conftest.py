import math

import pytest

from casting.config import GestureConfig
from casting.landmarks import HandLandmarks, ScreenMapper


def circle_path(cx=0.5, cy=0.5, r=0.4, count=32, clockwise=True):
    """Closed circle starting and ending at the top (y grows downwards)."""
    sign = 1 if clockwise else -1
    return [
        (cx + r * math.cos(-math.pi / 2 + sign * 2 * math.pi * i / (count - 1)),
         cy + r * math.sin(-math.pi / 2 + sign * 2 * math.pi * i / (count - 1)))
        for i in range(count)
    ]


def line_path(start, end, count=20):
    return [
        (start[0] + (end[0] - start[0]) * i / (count - 1),
         start[1] + (end[1] - start[1]) * i / (count - 1))
        for i in range(count)
    ]


def make_hand(index, pinch=0.02):
    """21 landmarks with the index tip at ``index`` and the thumb tip ``pinch`` to its left."""
    x, y = index
    points = [(0.5, 0.7)] * 21
    points[HandLandmarks.INDEX_TIP] = (x, y)
    points[HandLandmarks.THUMB_TIP] = (x - pinch, y)
    return HandLandmarks.from_points(points, handedness="Right")


@pytest.fixture
def config():
    return GestureConfig()


@pytest.fixture
def mapper():
    # Canvas and video the same size: normalized * 1000 = pixels
    return ScreenMapper.identity(1000, 1000, mirrored=False)
