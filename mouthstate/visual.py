"""Visualization helpers for the live window.

- draw_overlays: face/mouth rectangles, per-face score, and either the
  calibration instructions or the open/closed status with timing
"""
from __future__ import annotations
import cv2
import numpy as np
from typing import Optional, Tuple

from mouthstate.models import FaceBox, MouthSnapshot, SessionPhase
from mouthstate.scoring import mouth_rect

YELLOW = (0, 255, 255)
BLUE = (255, 0, 0)
GREEN = (0, 255, 0)
RED = (0, 0, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
FONT = cv2.FONT_HERSHEY_SIMPLEX


def calibration_text(snap: MouthSnapshot) -> str:
    n = snap.samples_needed
    if snap.phase == SessionPhase.CALIBRATING_CLOSED:
        return f"CALIBRATION: Keep mouth CLOSED and press SPACE ({n} samples needed) - Samples: {snap.closed_samples}/{n}"
    if snap.phase == SessionPhase.CALIBRATING_OPEN:
        return f"CALIBRATION: Keep mouth OPEN and press SPACE ({n} samples needed) - Samples: {snap.open_samples}/{n}"
    return "CALIBRATION COMPLETE! Press 'c' to start detection"


def status_text(snap: MouthSnapshot) -> Tuple[str, str]:
    open_now = snap.is_open and snap.current_open_duration is not None
    status = "MOUTH OPEN" if open_now else "MOUTH CLOSED"
    if open_now:
        timing = f"Current: {snap.current_open_duration:.1f}s"
    else:
        timing = f"Last open: {snap.last_open_duration:.1f}s"
    return status, timing


def _clamp_box(box: FaceBox, w: int, h: int) -> Tuple[int, int, int, int]:
    x = max(0, min(box.x, w - 1)); y = max(0, min(box.y, h - 1))
    bw = max(0, min(box.w, w - x)); bh = max(0, min(box.h, h - y))
    return x, y, bw, bh


def draw_overlays(frame: np.ndarray, snap: Optional[MouthSnapshot]) -> np.ndarray:
    """Draw the session state on a copy of a BGR frame and return it."""
    out = frame.copy()
    if snap is None:
        return out
    h, w = out.shape[:2]
    running = snap.phase == SessionPhase.RUNNING

    for face in snap.faces:
        if face.box is None:
            continue
        x, y, fw, fh = _clamp_box(face.box, w, h)
        if running:
            color = GREEN if face.is_open else RED
            cv2.rectangle(out, (x, y), (x + fw, y + fh), color, 3)
            label = "MOUTH OPEN" if face.is_open else "MOUTH CLOSED"
            cv2.putText(out, label, (x, max(0, y - 10)), FONT, 0.7, color, 2, cv2.LINE_AA)
        else:
            cv2.rectangle(out, (x, y), (x + fw, y + fh), YELLOW, 3)
            mx, my, mw, mh = mouth_rect(face.box)
            cv2.rectangle(out, (mx, my), (mx + mw, my + mh), BLUE, 2)
        cv2.putText(out, f"Score: {face.score:.1f}", (x, y + fh + 20), FONT, 0.6, WHITE, 2, cv2.LINE_AA)

    if not running:
        text = calibration_text(snap)
        (tw, th), baseline = cv2.getTextSize(text, FONT, 0.8, 2)
        cv2.rectangle(out, (5, 5), (tw + 15, th + baseline + 15), BLACK, -1)
        cv2.putText(out, text, (10, 30), FONT, 0.8, YELLOW, 2, cv2.LINE_AA)
        return out

    status, timing = status_text(snap)
    (sw, sh), sb = cv2.getTextSize(status, FONT, 0.8, 2)
    (tw, th), tb = cv2.getTextSize(timing, FONT, 0.6, 2)
    cv2.rectangle(out, (5, 5), (max(sw, tw) + 15, sh + th + sb + tb + 25), BLACK, -1)
    cv2.putText(out, status, (10, 30), FONT, 0.8, GREEN if status == "MOUTH OPEN" else RED, 2, cv2.LINE_AA)
    cv2.putText(out, timing, (10, 60), FONT, 0.6, WHITE, 2, cv2.LINE_AA)
    return out
