# mouthstate/live.py
"""
Live camera loop.

Pulls frames from the webcam, detects faces, feeds the mouth session and
shows the annotated frame. Keys:
- SPACE: take a calibration sample
- c: start detection once calibration is complete
- f: toggle face detection
- ESC / q: quit
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import cv2

from mouthstate.config import Settings
from mouthstate.detector import FaceDetector
from mouthstate.session import MouthSession
from mouthstate.visual import draw_overlays

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Mouth State (ESC to quit)"
KEY_ESC = 27


class LiveControls:
    """UI-side toggles that are not part of the session."""
    def __init__(self):
        self.run = True
        self.detect_faces = True


def dispatch_key(key: int, session: MouthSession, controls: LiveControls,
                 now: Optional[float] = None) -> None:
    """Map a cv2.waitKey code onto session commands and UI toggles."""
    if key < 0:
        return
    key &= 0xFF
    if key == KEY_ESC or key == ord("q"):
        controls.run = False
    elif key == ord("f"):
        controls.detect_faces = not controls.detect_faces
        logger.info(f"Face detection {'enabled' if controls.detect_faces else 'disabled'}")
    elif key == ord(" "):
        session.record_calibration_sample()
    elif key == ord("c"):
        session.start_detection(now)


def run_live_overlay(settings: Settings,
                     camera_index: Optional[int] = None,
                     session: Optional[MouthSession] = None,
                     detector: Optional[FaceDetector] = None) -> MouthSession:
    """
    Open the webcam and run calibration + detection until quit.

    Returns the session so callers can inspect the final state.
    """
    cam_idx = settings.CAMERA_INDEX if camera_index is None else camera_index
    cap = cv2.VideoCapture(cam_idx)
    if not cap.isOpened():
        raise RuntimeError(f"Could not open camera index {cam_idx}")
    cap.set(cv2.CAP_PROP_FPS, settings.CAPTURE_FPS)
    cap.set(cv2.CAP_PROP_BUFFERSIZE, settings.CAPTURE_BUFFER_SIZE)

    detector = detector or FaceDetector(settings)
    session = session or MouthSession(settings, now=time.monotonic())
    controls = LiveControls()
    size = (settings.FRAME_WIDTH, settings.FRAME_HEIGHT)

    try:
        while controls.run:
            ok, image = cap.read()
            if not ok or image is None:
                logger.debug("[live] frame read failed, stopping")
                break

            frame = cv2.resize(image, size)
            now = time.monotonic()
            boxes = detector.detect(frame) if controls.detect_faces else []
            snap = session.process_frame(frame, boxes, now)

            annotated = draw_overlays(frame, snap)
            cv2.imshow(WINDOW_TITLE, annotated)
            dispatch_key(cv2.waitKey(1), session, controls, now)
    finally:
        cap.release()
        cv2.destroyAllWindows()
    return session
