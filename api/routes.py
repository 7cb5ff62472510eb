"""
REST endpoints for scoring and driving an in-memory mouth session.
"""
import time
from fastapi import APIRouter, UploadFile, File, HTTPException
import logging

import cv2
import numpy as np

from mouthstate.config import Settings
from mouthstate.detector import FaceDetector
from mouthstate.scoring import score_mouth_region
from mouthstate.session import MouthSession


router = APIRouter()
settings = Settings()
logger = logging.getLogger(__name__)

# one session per process, state is lost on restart
session = MouthSession(settings, now=time.monotonic())
detector = FaceDetector(settings)


def _status() -> dict:
    last = session.status()
    snap = session.snapshot(time.monotonic(), last.faces if last else None)
    payload = snap.model_dump(mode="json")
    payload["sample_pending"] = session.sample_pending
    return payload


async def _read_image(file: UploadFile) -> np.ndarray:
    data = await file.read()
    image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR) if data else None
    if image is None:
        logger.debug(f"[api] undecodable upload filename={file.filename}")
        raise HTTPException(status_code=400, detail="Upload is not a decodable image")
    return image


@router.post("/score")
async def score(file: UploadFile = File(...)):
    """
    Score a whole uploaded image as a mouth region.

    Returns:
        dict: {"score": float}
    """
    image = await _read_image(file)
    return {"score": score_mouth_region(image)}


@router.post("/session/frame")
async def session_frame(file: UploadFile = File(...)):
    """
    Detect faces in an uploaded frame and run them through the session.

    Returns:
        dict: Per-frame snapshot (phase, scores, open state, durations).
    """
    image = await _read_image(file)
    try:
        boxes = detector.detect(image)
    except FileNotFoundError as e:
        logger.exception("[api] face model missing")
        raise HTTPException(status_code=503, detail=str(e))
    snap = session.process_frame(image, boxes, time.monotonic())
    logger.debug(f"[api] /session/frame faces={len(boxes)} phase={session.phase.value}")
    payload = snap.model_dump(mode="json")
    payload["sample_pending"] = session.sample_pending
    return payload


@router.post("/session/sample")
async def session_sample():
    session.record_calibration_sample()
    return _status()


@router.post("/session/start")
async def session_start():
    session.start_detection(time.monotonic())
    return _status()


@router.get("/session/status")
async def session_status():
    return _status()


@router.post("/session/reset")
async def session_reset():
    global session
    session = MouthSession(settings, now=time.monotonic())
    logger.info("Session reset, calibration restarted")
    return _status()
