"""Mouth openness scoring.

- mouth_rect: fixed proportional mouth sub-rectangle of a face box
- crop_mouth: borrow the mouth region of a frame as a numpy view
- score_mouth_region: colour + brightness + texture heuristic, higher = more open

The score is a cheap hand-tuned proxy, not a learned model: an open mouth shows
more red/pink mucosa, a darker cavity and stronger intensity variance than
closed lips.
"""
from __future__ import annotations
import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from mouthstate.models import FaceBox

logger = logging.getLogger(__name__)

# Hue bands on OpenCV's 0..180 hue scale, saturation/value on 0..255
RED_LOW_LOWER = (0, 40, 40)
RED_LOW_UPPER = (15, 255, 255)
RED_HIGH_LOWER = (165, 40, 40)
RED_HIGH_UPPER = (180, 255, 255)

BRIGHTNESS_WEIGHT = 0.1
VARIANCE_WEIGHT = 0.05

# Mouth position inside the face box (fractions of face width/height)
MOUTH_X, MOUTH_Y = 0.25, 0.6
MOUTH_W, MOUTH_H = 0.5, 0.3


def mouth_rect(box: FaceBox) -> Tuple[int, int, int, int]:
    """Return the (x, y, w, h) mouth rectangle in frame coordinates."""
    mx = int(box.w * MOUTH_X)
    my = int(box.h * MOUTH_Y)
    mw = int(box.w * MOUTH_W)
    mh = int(box.h * MOUTH_H)
    return box.x + mx, box.y + my, mw, mh


def crop_mouth(frame: np.ndarray, box: FaceBox) -> np.ndarray:
    """View of the mouth region; only valid while `frame` is alive."""
    x, y, w, h = mouth_rect(box)
    H, W = frame.shape[:2]
    x0, y0 = max(0, min(x, W)), max(0, min(y, H))
    x1, y1 = max(x0, min(x + w, W)), max(y0, min(y + h, H))
    return frame[y0:y1, x0:x1]


def score_mouth_region(region: Optional[np.ndarray]) -> float:
    """
    Compute the openness score of a BGR mouth region.

    score = red_percentage + (255 - avg_brightness) * 0.1 + variance * 0.05

    Args:
        region: HxWx3 uint8 BGR image (may be a view into a larger frame).

    Returns:
        Non-negative float; 0.0 for an empty or degenerate region.
    """
    if region is None or region.ndim != 3 or region.shape[0] <= 0 or region.shape[1] <= 0:
        logger.debug("[scoring] degenerate region, score=0")
        return 0.0

    h, w = region.shape[:2]
    total = h * w

    # Red/pink share
    hsv = cv2.cvtColor(region, cv2.COLOR_BGR2HSV)
    mask_low = cv2.inRange(hsv, RED_LOW_LOWER, RED_LOW_UPPER)
    mask_high = cv2.inRange(hsv, RED_HIGH_LOWER, RED_HIGH_UPPER)
    red_mask = cv2.bitwise_or(mask_low, mask_high)
    red_percentage = cv2.countNonZero(red_mask) * 100.0 / total

    # Darkness and texture variance
    gray = cv2.cvtColor(region, cv2.COLOR_BGR2GRAY)
    mean, stddev = cv2.meanStdDev(gray)
    avg_brightness = float(mean[0][0])
    variance = float(stddev[0][0]) ** 2

    score = red_percentage + (255.0 - avg_brightness) * BRIGHTNESS_WEIGHT + variance * VARIANCE_WEIGHT
    return max(0.0, float(score))
