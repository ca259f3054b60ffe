"""
Per-frame casting pipeline.

One call per detector frame: pinch -> cursor -> stroke capture, and on
pinch release normalize -> classify -> cooldown gate. All mutable state
(pinch flag, cursor, stroke buffer) lives on the pipeline object; the
cooldown gate is injected so it can be shared or driven by a test clock.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Tuple
import logging

from .capture import PathCapture
from .classifier import Classification, GestureClassifier
from .config import GestureConfig
from .cooldown import CooldownGate, DispatchOutcome, DispatchResult
from .landmarks import HandLandmarks, Point, ScreenMapper
from .loadout import Loadout, Spell
from .pinch import PinchStateMachine, PinchTransition, pinch_distance
from .smoothing import CursorSmoother
from .templates import GestureLabel

logger = logging.getLogger(__name__)


class DrawState(Enum):
    IDLE = auto()
    DRAWING = auto()
    CASTING = auto()


@dataclass(frozen=True)
class FrameOutcome:
    """What one frame produced, for the game and rendering layers."""
    draw_state: DrawState
    cursor: Optional[Point] = None
    pinching: bool = False
    path: Tuple[Point, ...] = ()        # Live stroke, empty when not drawing
    stroke: Tuple[Point, ...] = ()      # Stroke consumed on this frame's release
    classification: Optional[Classification] = None
    dispatch: Optional[DispatchResult] = None
    stroke_discarded: bool = False      # Hand lost mid-stroke

    @property
    def gesture(self) -> GestureLabel:
        if self.classification is None:
            return GestureLabel.NONE
        return self.classification.label


class CastingPipeline:
    """
    Turns hand landmark frames into spell casts.

    Callbacks (all optional) mirror the outcome fields:
    - on_cast(spell)
    - on_cooldown_rejected(spell, remaining)
    - on_draw_state_changed(state)
    """

    def __init__(
        self,
        config: GestureConfig,
        loadout: Loadout,
        gate: Optional[CooldownGate] = None,
        classifier: Optional[GestureClassifier] = None,
        on_cast: Optional[Callable[[Spell], None]] = None,
        on_cooldown_rejected: Optional[Callable[[Spell, float], None]] = None,
        on_draw_state_changed: Optional[Callable[[DrawState], None]] = None,
    ):
        self._config = config
        self._loadout = loadout
        self._gate = gate if gate is not None else CooldownGate()
        self._classifier = classifier or GestureClassifier(config)

        self._pinch = PinchStateMachine(config.pinch_start, config.pinch_release)
        self._smoother = CursorSmoother(config.smoothing_factor)
        self._capture = PathCapture(config.min_point_distance)

        self._draw_state = DrawState.IDLE
        self._casting_until = 0.0

        self._on_cast = on_cast
        self._on_cooldown_rejected = on_cooldown_rejected
        self._on_draw_state_changed = on_draw_state_changed

    @property
    def draw_state(self) -> DrawState:
        return self._draw_state

    @property
    def cursor(self) -> Optional[Point]:
        return self._smoother.cursor

    @property
    def is_pinching(self) -> bool:
        return self._pinch.is_pinched

    @property
    def path(self) -> Tuple[Point, ...]:
        return self._capture.points

    @property
    def gate(self) -> CooldownGate:
        return self._gate

    @property
    def loadout(self) -> Loadout:
        return self._loadout

    def set_loadout(self, loadout: Loadout) -> None:
        self._loadout = loadout

    def process_frame(
        self,
        landmarks: Optional[HandLandmarks],
        mapper: ScreenMapper,
        now: float,
    ) -> FrameOutcome:
        """
        Process one detector frame.

        Args:
            landmarks: Hand landmarks, or None when no hand was detected
            mapper: Camera -> screen mapping for this frame
            now: Timestamp in seconds

        Returns:
            FrameOutcome for this frame. Never raises for odd input; strokes
            that cannot be classified simply produce no cast.
        """
        if self._draw_state is DrawState.CASTING and now >= self._casting_until:
            self._set_draw_state(DrawState.IDLE)

        if landmarks is None:
            return self._hand_lost()

        cursor = self._smoother.update(mapper.to_screen(landmarks.index_tip))
        transition = self._pinch.update(pinch_distance(landmarks))

        if transition is PinchTransition.PRESSED:
            self._capture.begin()
            self._set_draw_state(DrawState.DRAWING)

        if self._pinch.is_pinched:
            self._capture.add(cursor)
            return self._outcome()

        if transition is PinchTransition.RELEASED:
            return self._release(mapper, now)

        return self._outcome()

    def _hand_lost(self) -> FrameOutcome:
        self._smoother.clear()
        interrupted = self._pinch.cancel()
        if interrupted:
            logger.debug("hand lost mid-stroke, discarding %d points", len(self._capture))
            self._capture.discard()
            self._set_draw_state(DrawState.IDLE)
        return self._outcome(stroke_discarded=interrupted)

    def _release(self, mapper: ScreenMapper, now: float) -> FrameOutcome:
        stroke = self._capture.consume()
        unit_path = [mapper.to_canvas_unit(p) for p in stroke]
        classification = self._classifier.classify(unit_path)

        dispatch = None
        if classification.is_gesture:
            dispatch = self._gate.dispatch(classification.label, self._loadout, now)
            if dispatch.outcome is DispatchOutcome.CAST:
                self._casting_until = now + self._config.cast_display_time
                self._set_draw_state(DrawState.CASTING)
                if self._on_cast is not None:
                    self._on_cast(dispatch.spell)
            elif dispatch.outcome is DispatchOutcome.REJECTED_COOLDOWN:
                if self._on_cooldown_rejected is not None:
                    self._on_cooldown_rejected(dispatch.spell, dispatch.remaining)

        if self._draw_state is DrawState.DRAWING:
            self._set_draw_state(DrawState.IDLE)

        return self._outcome(stroke=stroke, classification=classification, dispatch=dispatch)

    def _outcome(self, **extra) -> FrameOutcome:
        return FrameOutcome(
            draw_state=self._draw_state,
            cursor=self._smoother.cursor,
            pinching=self._pinch.is_pinched,
            path=self._capture.points,
            **extra,
        )

    def _set_draw_state(self, state: DrawState) -> None:
        if state is self._draw_state:
            return
        self._draw_state = state
        if self._on_draw_state_changed is not None:
            self._on_draw_state_changed(state)

    def reset(self) -> None:
        """Clear stroke, cursor, pinch and every cooldown (new game)."""
        self._pinch.cancel()
        self._smoother.clear()
        self._capture.discard()
        self._gate.reset()
        self._casting_until = 0.0
        self._set_draw_state(DrawState.IDLE)
