"""
Pinch detection with hysteresis.

The pinch starts when the thumb and index tips come closer than
``start_threshold`` and only ends once they separate past the wider
``release_threshold``. Distances between the two thresholds keep the
current state, so fingers hovering near one boundary cannot chatter.
"""
from enum import Enum, auto
import logging
import math

from .landmarks import HandLandmarks

logger = logging.getLogger(__name__)


class PinchState(Enum):
    RELEASED = auto()
    PINCHED = auto()


class PinchTransition(Enum):
    NONE = auto()
    PRESSED = auto()
    RELEASED = auto()


def pinch_distance(landmarks: HandLandmarks) -> float:
    """2D thumb-tip to index-tip distance in normalized camera space."""
    thumb = landmarks.thumb_tip
    index = landmarks.index_tip
    return math.hypot(thumb[0] - index[0], thumb[1] - index[1])


class PinchStateMachine:
    """Binary pinch signal with asymmetric start/release thresholds."""

    def __init__(self, start_threshold: float = 0.06, release_threshold: float = 0.12):
        if release_threshold <= start_threshold:
            raise ValueError(
                f"release_threshold ({release_threshold}) must exceed "
                f"start_threshold ({start_threshold})"
            )
        self._start = start_threshold
        self._release = release_threshold
        self._state = PinchState.RELEASED

    @property
    def state(self) -> PinchState:
        return self._state

    @property
    def is_pinched(self) -> bool:
        return self._state is PinchState.PINCHED

    def update(self, distance: float) -> PinchTransition:
        if self._state is PinchState.RELEASED:
            if distance < self._start:
                self._state = PinchState.PINCHED
                logger.debug("pinch down at d=%.3f", distance)
                return PinchTransition.PRESSED
        elif distance > self._release:
            self._state = PinchState.RELEASED
            logger.debug("pinch up at d=%.3f", distance)
            return PinchTransition.RELEASED
        return PinchTransition.NONE

    def cancel(self) -> bool:
        """Force RELEASED without a release transition. Returns True if a pinch was cut off."""
        was_pinched = self.is_pinched
        self._state = PinchState.RELEASED
        return was_pinched
