"""
Schmitt-trigger style open/closed decision on top of calibrated thresholds.
"""
from __future__ import annotations
from typing import Optional, Tuple

from mouthstate.models import Thresholds

DEFAULT_BUFFER_FRACTION = 0.2


def switching_bounds(thresholds: Thresholds,
                     buffer_fraction: float = DEFAULT_BUFFER_FRACTION) -> Tuple[float, float]:
    """Return (threshold_down, threshold_up) around the midpoint of the two class means."""
    midpoint = (thresholds.open_threshold + thresholds.closed_threshold) / 2
    buffer = abs(thresholds.open_threshold - thresholds.closed_threshold) * buffer_fraction
    return midpoint - buffer, midpoint + buffer


def classify(score: float,
             thresholds: Optional[Thresholds],
             previous_state: bool,
             buffer_fraction: float = DEFAULT_BUFFER_FRACTION) -> bool:
    """
    Decide whether the mouth is open.

    Closed -> open needs `score > threshold_up`; staying open only needs
    `score > threshold_down`. Without thresholds (calibration not complete)
    the answer is always closed.
    """
    if thresholds is None:
        return False
    down, up = switching_bounds(thresholds, buffer_fraction)
    if previous_state:
        return score > down
    return score > up
