"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and hand landmark detection.
"""
from pathlib import Path
from typing import Optional, Sequence, Tuple
import logging
import time

import cv2
import numpy as np
import mediapipe as mp

from casting.config import CameraConfig, Config, MediaPipeConfig
from casting.landmarks import HandLandmarks

logger = logging.getLogger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)

HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),        # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),        # Index
    (5, 9), (9, 10), (10, 11), (11, 12),   # Middle
    (9, 13), (13, 14), (14, 15), (15, 16), # Ring
    (13, 17), (17, 18), (18, 19), (19, 20),  # Pinky
    (0, 17),
]


class HandTracker:
    """
    MediaPipe hand tracking with camera management.

    Runs the HandLandmarker in VIDEO mode (frame-by-frame with tracking) and
    mirrors nothing itself: mirroring is the ScreenMapper's job, so landmarks
    stay in true camera space.
    """

    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        self._model_path = Path(model_path or self.DEFAULT_MODEL_PATH)

        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error("Model file not found: %s (download from %s)", self._model_path, MODEL_URL)
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error("Could not open camera %d", self._camera_config.device_id)
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info("Hand tracker started (camera %d)", self._camera_config.device_id)
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None

    def capture(self) -> Tuple[bool, Optional[HandLandmarks]]:
        """
        Capture a frame and detect the first hand.

        Returns:
            (ok, landmarks). ok is False when no frame could be read; landmarks
            is None when the frame holds no hand.
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return False, None

        ret, frame = self._cap.read()
        if not ret:
            return False, None

        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode needs strictly increasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return True, None

        hand_landmarks = result.hand_landmarks[0]
        handedness = result.handedness[0][0]

        return True, HandLandmarks(
            landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
            handedness=handedness.category_name,
            confidence=handedness.score,
        )

    @property
    def frame_size(self) -> Tuple[int, int]:
        """(width, height) of the last captured frame, or the configured size."""
        if self._last_frame is not None:
            h, w = self._last_frame.shape[:2]
            return w, h
        return self._camera_config.width, self._camera_config.height

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        return self._last_frame


def draw_overlay(
    frame: np.ndarray,
    landmarks: Optional[HandLandmarks],
    cursor: Optional[Tuple[float, float]],
    path: Sequence[Tuple[float, float]],
    pinching: bool,
    mirrored: bool = True,
) -> np.ndarray:
    """
    Debug rendering: hand skeleton, stroke trail and cursor reticle.

    ``frame`` is drawn in place (mirrored first when requested) and returned;
    cursor and path are expected in the same pixel space as the frame.
    """
    if mirrored:
        frame = cv2.flip(frame, 1)
    h, w = frame.shape[:2]

    if landmarks is not None:
        def px(p):
            x = 1.0 - p[0] if mirrored else p[0]
            return int(x * w), int(p[1] * h)

        for start_idx, end_idx in HAND_CONNECTIONS:
            cv2.line(frame, px(landmarks.get(start_idx)), px(landmarks.get(end_idx)), (0, 255, 0), 2)
        for lm in landmarks.landmarks:
            cv2.circle(frame, px(lm), 3, (255, 255, 255), -1)

    if len(path) > 1:
        pts = np.array([(int(x), int(y)) for x, y in path], dtype=np.int32)
        cv2.polylines(frame, [pts], False, (0, 200, 255), 3)

    if cursor is not None:
        c = (int(cursor[0]), int(cursor[1]))
        cv2.circle(frame, c, 5, (255, 255, 255) if pinching else (0, 200, 255), -1)
        cv2.circle(frame, c, 14, (0, 200, 255), 2)

    return frame
