"""
AirCast Webcam Module

Hand tracking with MediaPipe and the background casting worker.
"""
from .hand_tracker import HandTracker, draw_overlay
from .worker import CastingWorker

__all__ = [
    'HandTracker',
    'draw_overlay',
    'CastingWorker',
]
