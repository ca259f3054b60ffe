"""
AirCast Casting Module

Pinch-drawn gesture capture, classification and spell dispatch.
"""
from .config import Config, GestureConfig, load_config
from .landmarks import HandLandmarks, ScreenMapper
from .pinch import PinchState, PinchStateMachine
from .smoothing import CursorSmoother
from .capture import PathCapture
from .templates import GestureLabel, build_library
from .classifier import Classification, GestureClassifier
from .loadout import Element, Loadout, Spell
from .cooldown import CooldownGate, DispatchOutcome, DispatchResult
from .mailbox import FrameMailbox, TrackedFrame
from .pipeline import CastingPipeline, DrawState, FrameOutcome

__all__ = [
    'Config',
    'GestureConfig',
    'load_config',
    'HandLandmarks',
    'ScreenMapper',
    'PinchState',
    'PinchStateMachine',
    'CursorSmoother',
    'PathCapture',
    'GestureLabel',
    'build_library',
    'Classification',
    'GestureClassifier',
    'Element',
    'Loadout',
    'Spell',
    'CooldownGate',
    'DispatchOutcome',
    'DispatchResult',
    'FrameMailbox',
    'TrackedFrame',
    'CastingPipeline',
    'DrawState',
    'FrameOutcome',
]
