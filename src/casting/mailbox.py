"""
One-slot frame handoff between the capture thread and the processing loop.
"""
from dataclasses import dataclass
from typing import Optional
import threading

from .landmarks import HandLandmarks


@dataclass(frozen=True)
class TrackedFrame:
    """Detector output for one video frame; landmarks is None when no hand was seen."""
    landmarks: Optional[HandLandmarks]
    timestamp: float
    video_width: int = 0
    video_height: int = 0


class FrameMailbox:
    """
    Single-writer / single-reader mailbox holding only the newest frame.

    Posting over an unread frame replaces it (the stale frame is dropped), so
    the reader processes at most one frame per tick and always the latest.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._frame: Optional[TrackedFrame] = None
        self._dropped = 0

    @property
    def dropped(self) -> int:
        return self._dropped

    def post(self, frame: TrackedFrame) -> None:
        with self._lock:
            if self._frame is not None:
                self._dropped += 1
            self._frame = frame

    def take(self) -> Optional[TrackedFrame]:
        with self._lock:
            frame = self._frame
            self._frame = None
            return frame
