"""
Stroke classification.

Two stages:
- Line fast path on the raw stroke. Anisotropic scaling would blow a thin
  line up into a unit square, so straight strokes never reach templates.
- Template matching: mean pointwise distance between the normalized stroke
  (forward and reversed) and every template; the best score wins if it is
  within that gesture's threshold.
"""
from dataclasses import dataclass
from typing import Optional, Sequence
import logging
import math

from .config import GestureConfig
from .geometry import bounding_box, mean_distance, normalize, path_length, straightness
from .landmarks import Point
from .templates import GestureLabel, GestureTemplate, TemplateLibrary, build_library

logger = logging.getLogger(__name__)

METHOD_REJECTED = "rejected"
METHOD_LINE = "line"
METHOD_TEMPLATE = "template"


@dataclass(frozen=True)
class Classification:
    label: GestureLabel
    score: float = math.inf          # Best mean distance (0 for lines)
    method: str = METHOD_REJECTED
    template: Optional[str] = None   # Name of the winning template
    is_reversed: bool = False

    @property
    def is_gesture(self) -> bool:
        return self.label is not GestureLabel.NONE


class GestureClassifier:
    """
    Classifies a raw stroke (canvas-normalized points) into a GestureLabel.

    Total over its input: anything too short, too small or too far from every
    template comes back as GestureLabel.NONE.
    """

    def __init__(self, config: Optional[GestureConfig] = None,
                 library: Optional[TemplateLibrary] = None):
        self._config = config or GestureConfig()
        self._library = library if library is not None else build_library(
            self._config.resample_points, self._config.scale_epsilon
        )

    @property
    def library(self) -> TemplateLibrary:
        return self._library

    def threshold_for(self, label: GestureLabel) -> float:
        return self._config.match_thresholds.get(label.value, 0.0)

    def classify(self, raw_path: Sequence[Point]) -> Classification:
        cfg = self._config
        if len(raw_path) < cfg.min_points:
            return Classification(GestureLabel.NONE)
        if path_length(raw_path) < cfg.min_path_length:
            return Classification(GestureLabel.NONE)

        line = self._classify_line(raw_path)
        if line is not None:
            return line

        return self._match_templates(raw_path)

    def _classify_line(self, raw_path: Sequence[Point]) -> Optional[Classification]:
        s = straightness(raw_path)
        if s <= self._config.line_straightness:
            return None

        min_x, min_y, max_x, max_y = bounding_box(raw_path)
        width = max(0.001, max_x - min_x)
        height = max(0.001, max_y - min_y)
        ratio = self._config.line_aspect_ratio

        if height > width * ratio:
            label = GestureLabel.LINE_V
        elif width > height * ratio:
            label = GestureLabel.LINE_H
        else:
            # Diagonal: leave it to the templates
            return None

        logger.debug("line fast path: %s (straightness %.2f)", label.name, s)
        return Classification(label, score=0.0, method=METHOD_LINE)

    def _match_templates(self, raw_path: Sequence[Point]) -> Classification:
        cfg = self._config
        forward = normalize(raw_path, cfg.resample_points, cfg.scale_epsilon)
        backward = forward[::-1]

        best_score = math.inf
        best: Optional[GestureTemplate] = None
        best_reversed = False

        for candidate, is_reversed in ((forward, False), (backward, True)):
            for templates in self._library.values():
                for template in templates:
                    d = mean_distance(candidate, template.points)
                    if d < best_score:
                        best_score = d
                        best = template
                        best_reversed = is_reversed

        if best is None:
            return Classification(GestureLabel.NONE)

        threshold = self.threshold_for(best.label)
        logger.debug(
            "best template %s (%s) score %.3f, threshold %.2f",
            best.name, best.label.name, best_score, threshold,
        )
        if best_score > threshold:
            return Classification(GestureLabel.NONE, score=best_score, method=METHOD_TEMPLATE,
                                  template=best.name, is_reversed=best_reversed)

        return Classification(best.label, score=best_score, method=METHOD_TEMPLATE,
                              template=best.name, is_reversed=best_reversed)

    def score(self, raw_path: Sequence[Point], label: GestureLabel) -> float:
        """Best score of the stroke against one label's templates (either direction)."""
        cfg = self._config
        forward = normalize(raw_path, cfg.resample_points, cfg.scale_epsilon)
        candidates = (forward, forward[::-1])
        return min(
            (mean_distance(c, t.points) for c in candidates for t in self._library.get(label, ())),
            default=math.inf,
        )
