import pytest

from casting.cooldown import CooldownGate, DispatchOutcome
from casting.loadout import Element, Loadout
from casting.pipeline import CastingPipeline, DrawState
from casting.templates import GestureLabel
from conftest import circle_path, line_path, make_hand

OPEN = 0.2   # thumb-index distance clearly above the release threshold
DT = 0.005
APPROACH = 15  # open-hand frames that let the cursor settle on the start point


class Recorder:
    def __init__(self):
        self.casts = []
        self.rejected = []
        self.states = []

    def attach(self, config, loadout, gate=None):
        return CastingPipeline(
            config,
            loadout,
            gate=gate,
            on_cast=self.casts.append,
            on_cooldown_rejected=lambda spell, left: self.rejected.append((spell, left)),
            on_draw_state_changed=self.states.append,
        )


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def pipeline(config, recorder):
    return recorder.attach(config, Loadout.for_element(Element.FIRE))


def draw(pipeline, mapper, points, t0=0.0, hold=0):
    """Hover at the start, pinch, trace ``points``, hold the end ``hold`` frames, release."""
    t = t0
    for _ in range(APPROACH):
        pipeline.process_frame(make_hand(points[0], pinch=OPEN), mapper, t)
        t += DT
    for p in points + [points[-1]] * hold:
        pipeline.process_frame(make_hand(p), mapper, t)
        t += DT
    outcome = pipeline.process_frame(make_hand(points[-1], pinch=OPEN), mapper, t)
    return outcome, t + DT


def test_vertical_line_casts(pipeline, mapper, recorder):
    outcome, _ = draw(pipeline, mapper, line_path((0.5, 0.1), (0.5, 0.9), count=30))

    assert outcome.gesture is GestureLabel.LINE_V
    assert outcome.dispatch.outcome is DispatchOutcome.CAST
    assert [s.name for s in recorder.casts] == ["Incinerate"]
    assert outcome.draw_state is DrawState.CASTING
    assert recorder.states == [DrawState.DRAWING, DrawState.CASTING]
    # Stroke is consumed on release
    assert outcome.path == ()
    assert len(outcome.stroke) > 5
    assert pipeline.path == ()


def test_casting_state_times_out(pipeline, mapper, recorder):
    _, t = draw(pipeline, mapper, line_path((0.5, 0.1), (0.5, 0.9), count=30))

    still = pipeline.process_frame(make_hand((0.5, 0.9), pinch=OPEN), mapper, t + 0.1)
    later = pipeline.process_frame(make_hand((0.5, 0.9), pinch=OPEN), mapper, t + 1.0)

    assert still.draw_state is DrawState.CASTING
    assert later.draw_state is DrawState.IDLE
    assert recorder.states[-1] is DrawState.IDLE


def test_smoothed_circle_end_to_end(pipeline, mapper, recorder):
    points = circle_path(0.5, 0.5, 0.3, count=64)

    outcome, _ = draw(pipeline, mapper, points, hold=15)

    assert outcome.gesture is GestureLabel.CIRCLE
    assert recorder.casts[0].name == "Flame Shield"


def test_path_grows_only_while_pinched(pipeline, mapper):
    pipeline.process_frame(make_hand((0.2, 0.2), pinch=OPEN), mapper, 0.0)
    assert pipeline.path == ()
    assert pipeline.draw_state is DrawState.IDLE

    out = pipeline.process_frame(make_hand((0.2, 0.2)), mapper, 0.01)
    assert out.pinching
    assert out.draw_state is DrawState.DRAWING
    assert len(out.path) == 1

    out = pipeline.process_frame(make_hand((0.3, 0.2)), mapper, 0.02)
    assert len(out.path) == 2
    assert out.cursor == out.path[-1]


def test_hand_lost_discards_stroke(pipeline, mapper, recorder):
    for i, p in enumerate(line_path((0.5, 0.1), (0.5, 0.9), count=30)):
        pipeline.process_frame(make_hand(p), mapper, i * DT)

    lost = pipeline.process_frame(None, mapper, 0.5)

    assert lost.stroke_discarded
    assert lost.classification is None
    assert lost.cursor is None
    assert not lost.pinching
    assert lost.path == ()
    assert lost.draw_state is DrawState.IDLE

    # Hand comes back open: no release transition, nothing classified
    back = pipeline.process_frame(make_hand((0.5, 0.9), pinch=OPEN), mapper, 0.51)
    assert back.classification is None
    assert recorder.casts == []


def test_cursor_reseeds_after_hand_lost(pipeline, mapper):
    pipeline.process_frame(make_hand((0.1, 0.1), pinch=OPEN), mapper, 0.0)
    pipeline.process_frame(None, mapper, 0.01)
    out = pipeline.process_frame(make_hand((0.9, 0.9), pinch=OPEN), mapper, 0.02)
    assert out.cursor == pytest.approx((900.0, 900.0))


def test_recast_during_cooldown_is_rejected(pipeline, mapper, recorder):
    stroke = line_path((0.5, 0.1), (0.5, 0.9), count=30)
    first, t = draw(pipeline, mapper, stroke)
    second, _ = draw(pipeline, mapper, stroke, t0=t)

    assert first.dispatch.cast
    assert second.dispatch.outcome is DispatchOutcome.REJECTED_COOLDOWN
    assert len(recorder.casts) == 1
    assert [spell.name for spell, _ in recorder.rejected] == ["Incinerate"]


def test_unmapped_gesture_casts_nothing(pipeline, mapper, recorder):
    outcome, _ = draw(pipeline, mapper, line_path((0.1, 0.5), (0.9, 0.5), count=30))

    assert outcome.gesture is GestureLabel.LINE_H
    assert outcome.dispatch.outcome is DispatchOutcome.REJECTED_UNMAPPED
    assert recorder.casts == []
    assert recorder.rejected == []
    assert outcome.draw_state is DrawState.IDLE


def test_tap_without_movement_is_none(pipeline, mapper, recorder):
    outcome, _ = draw(pipeline, mapper, [(0.5, 0.5)] * 5)

    assert outcome.gesture is GestureLabel.NONE
    assert outcome.dispatch is None
    assert recorder.states == [DrawState.DRAWING, DrawState.IDLE]


def test_set_loadout_changes_spell(pipeline, mapper, recorder):
    pipeline.set_loadout(Loadout.for_element(Element.LIGHTNING))
    draw(pipeline, mapper, line_path((0.5, 0.1), (0.5, 0.9), count=30))
    assert recorder.casts[0].name == "Zap"


def test_shared_gate_and_reset(config, mapper, recorder):
    gate = CooldownGate()
    pipeline = recorder.attach(config, Loadout.for_element(Element.FIRE), gate=gate)
    stroke = line_path((0.5, 0.1), (0.5, 0.9), count=30)
    _, t = draw(pipeline, mapper, stroke)
    assert gate.last_cast(recorder.casts[0]) is not None

    pipeline.reset()

    assert gate.last_cast(recorder.casts[0]) is None
    assert pipeline.cursor is None
    assert pipeline.draw_state is DrawState.IDLE
    outcome, _ = draw(pipeline, mapper, stroke, t0=t)
    assert outcome.dispatch.cast
