import pytest

worker_module = pytest.importorskip("webcam.worker")

from casting.config import Config
from conftest import make_hand


class FakeTracker:
    """Replays (ok, landmarks) pairs the way HandTracker.capture reports them."""

    def __init__(self, reads):
        self._reads = list(reads)

    def capture(self):
        return self._reads.pop(0)

    @property
    def frame_size(self):
        return 640, 480


def test_failed_read_posts_nothing():
    worker = worker_module.CastingWorker(Config(), tracker=FakeTracker([(False, None)]))

    assert worker._poll_tracker() is False
    assert worker.mailbox.take() is None


def test_no_hand_is_still_posted():
    worker = worker_module.CastingWorker(Config(), tracker=FakeTracker([(True, None)]))

    assert worker._poll_tracker() is True
    frame = worker.mailbox.take()
    assert frame is not None
    assert frame.landmarks is None
    assert (frame.video_width, frame.video_height) == (640, 480)


def test_dropped_read_keeps_the_stroke_alive():
    hand = make_hand((0.5, 0.5))
    worker = worker_module.CastingWorker(
        Config(), tracker=FakeTracker([(True, hand), (False, None), (True, hand)])
    )

    posted = [worker._poll_tracker() for _ in range(3)]

    assert posted == [True, False, True]
    frame = worker.mailbox.take()
    assert frame.landmarks is hand
    assert worker.mailbox.dropped == 1
