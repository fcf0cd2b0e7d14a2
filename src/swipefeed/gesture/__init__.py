"""
SwipeFeed Gesture Module

Drag tracking, velocity smoothing and decision classification.
"""
from .classifier import classify
from .tracker import GestureTracker, GestureRelease
from .velocity import OneEuroFilter, VelocityEstimator

__all__ = [
    'classify',
    'GestureTracker',
    'GestureRelease',
    'OneEuroFilter',
    'VelocityEstimator',
]
