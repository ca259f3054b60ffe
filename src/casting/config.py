"""
Config loader for AirCast.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import yaml


def _default_match_thresholds() -> Dict[str, float]:
    # Looser for shapes people draw sloppily (zigzags, S-curves, rounded triangles)
    return {
        "circle": 0.35,
        "square": 0.40,
        "triangle": 0.45,
        "zigzag": 0.50,
        "checkmark": 0.45,
        "s_curve": 0.50,
    }


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class GestureConfig:
    # Pinch hysteresis, in normalized camera units (thumb tip to index tip)
    pinch_start: float = 0.06
    pinch_release: float = 0.12

    # Cursor EMA: s = s*(1-a) + raw*a. Higher = snappier, lower = smoother
    smoothing_factor: float = 0.35
    min_point_distance: float = 4.0  # Pixels between stored path points

    # Normalization
    resample_points: int = 32
    min_points: int = 5
    min_path_length: float = 0.05    # Canvas-normalized arc length
    scale_epsilon: float = 0.01

    # Straight-line fast path
    line_straightness: float = 0.8
    line_aspect_ratio: float = 1.5

    match_thresholds: Dict[str, float] = field(default_factory=_default_match_thresholds)

    cast_display_time: float = 0.5   # Seconds the CASTING state is held

    def __post_init__(self):
        if self.pinch_release <= self.pinch_start:
            raise ValueError(
                f"pinch_release ({self.pinch_release}) must be greater than "
                f"pinch_start ({self.pinch_start})"
            )
        if not 0.0 < self.smoothing_factor <= 1.0:
            raise ValueError(f"smoothing_factor must be in (0, 1], got {self.smoothing_factor}")
        if self.resample_points < 2:
            raise ValueError(f"resample_points must be at least 2, got {self.resample_points}")
        # Partial overrides from YAML keep the defaults for unlisted shapes
        merged = _default_match_thresholds()
        merged.update({k.lower(): float(v) for k, v in (self.match_thresholds or {}).items()})
        self.match_thresholds = merged


@dataclass
class CastingConfig:
    element: str = "fire"

    def __post_init__(self):
        self.element = str(self.element).lower()
        if self.element not in ("fire", "water", "lightning", "air"):
            raise ValueError(f"unknown element {self.element!r}")


@dataclass
class DisplayConfig:
    canvas_width: int = 1280
    canvas_height: int = 720
    mirrored: bool = True
    fit_mode: str = "contain"  # "contain" (letterbox) or "cover" (crop)

    def __post_init__(self):
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(
                f"canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        if self.fit_mode not in ("contain", "cover"):
            raise ValueError(f"fit_mode must be 'contain' or 'cover', got {self.fit_mode!r}")


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    casting: CastingConfig = field(default_factory=CastingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ValueError: If a section holds inconsistent values.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        casting=_dict_to_dataclass(CastingConfig, data.get('casting')),
        display=_dict_to_dataclass(DisplayConfig, data.get('display')),
    )
