"""
Hand landmark types and the camera-to-screen mapping.
"""
from dataclasses import dataclass
from typing import List, Tuple

Point = Tuple[float, float]


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from the detector.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Tuple[float, float, float]]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices for convenience
    THUMB_TIP = 4
    INDEX_TIP = 8

    def get(self, index: int) -> Tuple[float, float, float]:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def thumb_tip(self) -> Tuple[float, float, float]:
        return self.landmarks[self.THUMB_TIP]

    @property
    def index_tip(self) -> Tuple[float, float, float]:
        return self.landmarks[self.INDEX_TIP]

    @classmethod
    def from_points(cls, points, handedness: str = "Unknown", confidence: float = 1.0) -> "HandLandmarks":
        """Build from (x, y) or (x, y, z) sequences; z defaults to 0."""
        landmarks = []
        for p in points:
            z = p[2] if len(p) > 2 else 0.0
            landmarks.append((float(p[0]), float(p[1]), float(z)))
        if len(landmarks) != 21:
            raise ValueError(f"expected 21 landmarks, got {len(landmarks)}")
        return cls(landmarks=landmarks, handedness=handedness, confidence=confidence)


@dataclass(frozen=True)
class ScreenMapper:
    """
    Maps normalized camera coordinates onto the canvas.

    The video frame is scaled to fit the canvas ("contain", letterboxed) or to
    fill it ("cover", cropped), centred, and optionally mirrored horizontally.
    """
    canvas_width: float
    canvas_height: float
    video_width: float
    video_height: float
    mirrored: bool = True
    fit_mode: str = "contain"

    def __post_init__(self):
        if self.fit_mode not in ("contain", "cover"):
            raise ValueError(f"fit_mode must be 'contain' or 'cover', got {self.fit_mode!r}")

    @property
    def scale(self) -> float:
        if self.video_width <= 0 or self.video_height <= 0:
            return 1.0
        sx = self.canvas_width / self.video_width
        sy = self.canvas_height / self.video_height
        return max(sx, sy) if self.fit_mode == "cover" else min(sx, sy)

    @property
    def offset(self) -> Point:
        s = self.scale
        return (
            (self.canvas_width - self.video_width * s) / 2,
            (self.canvas_height - self.video_height * s) / 2,
        )

    def to_screen(self, point) -> Point:
        x, y = point[0], point[1]
        if self.mirrored:
            x = 1.0 - x
        s = self.scale
        ox, oy = self.offset
        return (ox + x * self.video_width * s, oy + y * self.video_height * s)

    def to_canvas_unit(self, point: Point) -> Point:
        """Screen pixels -> canvas-normalized [0, 1] coordinates."""
        return (point[0] / self.canvas_width, point[1] / self.canvas_height)

    @classmethod
    def identity(cls, width: float, height: float, mirrored: bool = False) -> "ScreenMapper":
        """Mapper for a canvas the same size as the video frame."""
        return cls(width, height, width, height, mirrored=mirrored)
