"""
Path geometry: arc length, resampling and canonical normalization.

A captured stroke becomes a fixed-size shape that no longer depends on
drawing speed, position or size:

1. resample to N points evenly spaced by arc length
2. subtract the centroid
3. divide x and y by the bounding-box width and height (anisotropic)
"""
import math
from typing import Sequence, Tuple

import numpy as np

DEFAULT_POINTS = 32
DEFAULT_EPSILON = 0.01


def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def path_length(points: Sequence[Sequence[float]]) -> float:
    return sum(distance(points[i - 1], points[i]) for i in range(1, len(points)))


def bounding_box(points) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y)"""
    arr = np.asarray(points, dtype=float)
    mins = arr.min(axis=0)
    maxs = arr.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])


def straightness(points: Sequence[Sequence[float]]) -> float:
    """Chord over arc length: 1.0 for a straight stroke, near 0 for a closed one."""
    length = path_length(points)
    if length <= 0:
        return 0.0
    return distance(points[0], points[-1]) / length


def resample(points: Sequence[Sequence[float]], n: int = DEFAULT_POINTS) -> np.ndarray:
    """
    Resample to exactly ``n`` points spaced ``length / (n - 1)`` apart.

    Walks the polyline accumulating length; every time the interval is
    reached an interpolated point is emitted and the walk continues from it.
    """
    pts = [(float(p[0]), float(p[1])) for p in points]
    if not pts:
        return np.empty((0, 2))

    interval = path_length(pts) / (n - 1)
    if interval == 0:
        return np.tile(np.asarray(pts[0]), (n, 1))

    out = [pts[0]]
    prev = pts[0]
    accumulated = 0.0
    i = 1
    while i < len(pts) and len(out) < n:
        cur = pts[i]
        d = distance(prev, cur)
        if accumulated + d >= interval:
            t = (interval - accumulated) / d
            q = (prev[0] + t * (cur[0] - prev[0]), prev[1] + t * (cur[1] - prev[1]))
            out.append(q)
            prev = q
            accumulated = 0.0
        else:
            accumulated += d
            prev = cur
            i += 1

    # Float rounding can leave the walk one short of the end point
    while len(out) < n:
        out.append(pts[-1])

    return np.asarray(out, dtype=float)


def translate_to_origin(points) -> np.ndarray:
    arr = np.asarray(points, dtype=float)
    return arr - arr.mean(axis=0)


def scale_to_unit_box(points, epsilon: float = DEFAULT_EPSILON) -> np.ndarray:
    """Divide x by the box width and y by the box height, each floored at ``epsilon``."""
    arr = np.asarray(points, dtype=float)
    extent = arr.max(axis=0) - arr.min(axis=0)
    return arr / np.maximum(extent, epsilon)


def normalize(points, n: int = DEFAULT_POINTS, epsilon: float = DEFAULT_EPSILON) -> np.ndarray:
    return scale_to_unit_box(translate_to_origin(resample(points, n)), epsilon)


def mean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Mean Euclidean distance between corresponding points."""
    k = min(len(a), len(b))
    if k == 0:
        return math.inf
    return float(np.linalg.norm(a[:k] - b[:k], axis=1).mean())
