"""
Pydantic data models for detector state and API IO.
"""
from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional

class CalibrationPhase(str, Enum):
    COLLECTING_CLOSED = "collecting_closed"
    COLLECTING_OPEN = "collecting_open"
    COMPLETE = "complete"

class SessionPhase(str, Enum):
    CALIBRATING_CLOSED = "calibrating_closed"
    CALIBRATING_OPEN = "calibrating_open"
    CALIBRATED_IDLE = "calibrated_idle"
    RUNNING = "running"

class FaceBox(BaseModel):
    x: int
    y: int
    w: int
    h: int
    confidence: float = 1.0

class Thresholds(BaseModel):
    closed_threshold: float
    open_threshold: float

class FaceReading(BaseModel):
    box: Optional[FaceBox] = None
    score: float
    is_open: Optional[bool] = None

class MouthSnapshot(BaseModel):
    """Per-frame view of the session for rendering and the API."""
    ts: float
    phase: SessionPhase
    calibration_phase: CalibrationPhase
    closed_samples: int
    open_samples: int
    samples_needed: int
    thresholds: Optional[Thresholds] = None
    faces: List[FaceReading] = Field(default_factory=list)
    score: Optional[float] = None
    is_open: bool = False
    current_open_duration: Optional[float] = None
    last_open_duration: float = 0.0

    @property
    def face_detected(self) -> bool:
        return len(self.faces) > 0
