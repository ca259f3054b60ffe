"""
Background worker for MediaPipe hand tracking and spell casting.
Runs in a separate QThread to avoid blocking the UI.
"""
from typing import Optional
import logging
import threading
import time

from PyQt5.QtCore import QObject, pyqtSignal

from casting.config import Config
from casting.landmarks import ScreenMapper
from casting.loadout import Element, Loadout
from casting.mailbox import FrameMailbox, TrackedFrame
from casting.pipeline import CastingPipeline

from .hand_tracker import HandTracker

logger = logging.getLogger(__name__)


class CastingWorker(QObject):
    """
    Worker class that runs the casting pipeline on tracked frames.

    A capture thread pulls camera frames as fast as the detector allows and
    posts them to a one-slot mailbox; the processing loop takes the newest
    frame each tick, so stale frames are dropped rather than queued.
    """
    # Signals
    spell_cast = pyqtSignal(object)             # Spell
    cooldown_rejected = pyqtSignal(object, float)  # Spell, seconds remaining
    draw_state_changed = pyqtSignal(object)     # DrawState
    frame_processed = pyqtSignal(object)        # FrameOutcome
    error = pyqtSignal(str)

    POLL_INTERVAL = 1.0 / 120

    def __init__(self, config: Config, tracker: Optional[HandTracker] = None, parent=None):
        super().__init__(parent)
        self._config = config
        self._tracker = tracker
        self._mailbox = FrameMailbox()
        self._is_running = False
        self._capture_thread: Optional[threading.Thread] = None

        self._pipeline = CastingPipeline(
            config.gestures,
            Loadout.for_element(Element.parse(config.casting.element)),
            on_cast=self.spell_cast.emit,
            on_cooldown_rejected=self.cooldown_rejected.emit,
            on_draw_state_changed=self.draw_state_changed.emit,
        )

    @property
    def pipeline(self) -> CastingPipeline:
        return self._pipeline

    @property
    def mailbox(self) -> FrameMailbox:
        return self._mailbox

    def _poll_tracker(self) -> bool:
        """Read one frame and post it. A failed camera read posts nothing."""
        ok, landmarks = self._tracker.capture()
        if not ok:
            return False
        width, height = self._tracker.frame_size
        self._mailbox.post(TrackedFrame(landmarks, time.perf_counter(), width, height))
        return True

    def _capture_loop(self):
        """Background thread: detect hands and post the newest frame."""
        while self._is_running:
            try:
                if not self._poll_tracker():
                    time.sleep(self.POLL_INTERVAL)
            except Exception as e:
                logger.exception("Capture thread error")
                self.error.emit(f"Capture error: {e}")
                time.sleep(0.1)

    def _mapper_for(self, frame: TrackedFrame) -> ScreenMapper:
        display = self._config.display
        return ScreenMapper(
            canvas_width=display.canvas_width,
            canvas_height=display.canvas_height,
            video_width=frame.video_width or self._config.camera.width,
            video_height=frame.video_height or self._config.camera.height,
            mirrored=display.mirrored,
            fit_mode=display.fit_mode,
        )

    def start_process(self):
        """Main processing loop. Runs in the worker thread."""
        if self._tracker is None:
            self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not start hand tracking (camera or model missing)")
            return

        self._is_running = True
        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()

        try:
            while self._is_running:
                frame = self._mailbox.take()
                if frame is None:
                    time.sleep(self.POLL_INTERVAL)
                    continue
                outcome = self._pipeline.process_frame(frame.landmarks, self._mapper_for(frame), frame.timestamp)
                self.frame_processed.emit(outcome)
        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {e}")
        finally:
            self._is_running = False
            if self._capture_thread:
                self._capture_thread.join(timeout=1.0)
            if self._tracker:
                self._tracker.stop()
            if self._mailbox.dropped:
                logger.debug("Dropped %d stale frames", self._mailbox.dropped)

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False
