"""
Reference shapes for gesture matching.

Every template is authored as a polyline in a unit square (y grows
downwards, like screen coordinates) and normalized exactly like a captured
stroke. A label may own several templates, e.g. a shape started from a
different corner.
"""
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple
import math

import numpy as np

from .geometry import DEFAULT_EPSILON, DEFAULT_POINTS, normalize
from .landmarks import Point


class GestureLabel(Enum):
    NONE = "none"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    SQUARE = "square"
    ZIGZAG = "zigzag"
    CHECKMARK = "checkmark"
    S_CURVE = "s_curve"
    LINE_V = "line_v"
    LINE_H = "line_h"


@dataclass(frozen=True)
class GestureTemplate:
    label: GestureLabel
    name: str
    points: np.ndarray  # (N, 2), read-only


TemplateLibrary = Mapping[GestureLabel, Tuple[GestureTemplate, ...]]


def _polyline(vertices: Sequence[Point], steps: int = 10) -> List[Point]:
    """Densify straight segments between vertices; the last vertex is included."""
    out: List[Point] = []
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:]):
        for i in range(steps):
            t = i / steps
            out.append((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))
    out.append(tuple(vertices[-1]))
    return out


def _circle(count: int = 32) -> List[Point]:
    # Clockwise on screen, starting and ending at the top
    return [
        (0.5 + 0.5 * math.cos(-math.pi / 2 + (i / (count - 1)) * 2 * math.pi),
         0.5 + 0.5 * math.sin(-math.pi / 2 + (i / (count - 1)) * 2 * math.pi))
        for i in range(count)
    ]


TL, TR, BR, BL = (0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)
APEX = (0.5, 0.0)

SHAPES: Dict[GestureLabel, Dict[str, List[Point]]] = {
    GestureLabel.CIRCLE: {
        "circle": _circle(),
    },
    GestureLabel.SQUARE: {
        "square-top-left": _polyline([TL, TR, BR, BL, TL], 8),
        "square-top-right": _polyline([TR, BR, BL, TL, TR], 8),
        "square-bottom-right": _polyline([BR, BL, TL, TR, BR], 8),
        "square-bottom-left": _polyline([BL, TL, TR, BR, BL], 8),
    },
    GestureLabel.TRIANGLE: {
        "triangle-apex": _polyline([APEX, BR, BL, APEX]),
        "triangle-base": _polyline([BL, APEX, BR, BL]),
        "v": _polyline([TL, (0.5, 1.0), TR], 16),
    },
    GestureLabel.ZIGZAG: {
        "lightning": _polyline([(0.3, 0.0), (0.9, 0.35), (0.1, 0.65), (0.7, 1.0)]),
        "lightning-mirrored": _polyline([(0.7, 0.0), (0.1, 0.35), (0.9, 0.65), (0.3, 1.0)]),
        "sideways": _polyline([(0.0, 0.0), (0.33, 1.0), (0.66, 0.0), (1.0, 1.0)]),
    },
    GestureLabel.CHECKMARK: {
        "checkmark": _polyline([(0.0, 0.5), (0.4, 1.0), (1.0, 0.0)]),
    },
    GestureLabel.S_CURVE: {
        "s": _polyline([(1.0, 0.0), (0.0, 0.2), (1.0, 0.8), (0.0, 1.0)]),
    },
}


def make_template(label: GestureLabel, name: str, raw: Sequence[Point],
                  n: int = DEFAULT_POINTS, epsilon: float = DEFAULT_EPSILON) -> GestureTemplate:
    points = normalize(raw, n, epsilon)
    points.setflags(write=False)
    return GestureTemplate(label=label, name=name, points=points)


@lru_cache(maxsize=None)
def build_library(n: int = DEFAULT_POINTS, epsilon: float = DEFAULT_EPSILON) -> TemplateLibrary:
    """Normalize every reference shape once; repeated calls share the result."""
    library = {
        label: tuple(make_template(label, name, raw, n, epsilon) for name, raw in shapes.items())
        for label, shapes in SHAPES.items()
    }
    return MappingProxyType(library)
