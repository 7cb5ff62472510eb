# mouthstate/session.py
"""
Session state machine: calibration -> idle -> running, with open-duration timing.

All per-frame state lives on a MouthSession instance. Timestamps are plain
floats in seconds (time.monotonic() in the live loop) and are always passed in,
so the machine itself never reads a clock.

Commands from the UI:
- record_calibration_sample(): arm a sample; the next scored face is recorded
- start_detection(): leave CALIBRATED_IDLE and start classifying
Both are silent no-ops outside the phase they belong to.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import numpy as np

from mouthstate.calibration import CalibrationSampler
from mouthstate.config import Settings
from mouthstate.hysteresis import classify
from mouthstate.models import (
    CalibrationPhase,
    FaceBox,
    FaceReading,
    MouthSnapshot,
    SessionPhase,
    Thresholds,
)
from mouthstate.scoring import crop_mouth, score_mouth_region

logger = logging.getLogger(__name__)


class MouthSession:
    """Owns calibration, hysteresis state and dwell timers for one tracked mouth."""

    def __init__(self, settings: Optional[Settings] = None, now: float = 0.0):
        self.s = settings or Settings()
        self.sampler = CalibrationSampler(self.s.CALIBRATION_SAMPLES)
        self.buffer_fraction = float(self.s.HYSTERESIS_BUFFER)
        self.missed_frames_to_close = int(self.s.MISSED_FRAMES_TO_CLOSE)

        self._running = False
        self._sample_pending = False

        self.is_open = False
        self.last_transition_ts = float(now)
        self.last_open_duration = 0.0
        self._missed = 0
        self._last_snapshot: Optional[MouthSnapshot] = None

    # ---- phases ----
    @property
    def calibration_phase(self) -> CalibrationPhase:
        return self.sampler.phase

    @property
    def phase(self) -> SessionPhase:
        if self._running:
            return SessionPhase.RUNNING
        cal = self.sampler.phase
        if cal == CalibrationPhase.COLLECTING_CLOSED:
            return SessionPhase.CALIBRATING_CLOSED
        if cal == CalibrationPhase.COLLECTING_OPEN:
            return SessionPhase.CALIBRATING_OPEN
        return SessionPhase.CALIBRATED_IDLE

    @property
    def thresholds(self) -> Optional[Thresholds]:
        return self.sampler.thresholds

    @property
    def sample_pending(self) -> bool:
        return self._sample_pending

    # ---- commands ----
    def record_calibration_sample(self) -> None:
        if self.phase not in (SessionPhase.CALIBRATING_CLOSED, SessionPhase.CALIBRATING_OPEN):
            logger.debug(f"[session] sample ignored in phase {self.phase.value}")
            return
        self._sample_pending = True

    def start_detection(self, now: Optional[float] = None) -> None:
        if self.phase != SessionPhase.CALIBRATED_IDLE:
            logger.debug(f"[session] start ignored in phase {self.phase.value}")
            return
        self._running = True
        self.is_open = False
        self._missed = 0
        if now is not None:
            self.last_transition_ts = float(now)
        logger.info("Detection mode started!")

    # ---- per-frame ----
    def observe(self, score: float, now: float) -> FaceReading:
        """Feed one face's score; returns the reading with its open/closed decision."""
        reading = FaceReading(score=float(score))

        if self._sample_pending:
            self.sampler.record(score)
            self._sample_pending = False

        if not self._running:
            return reading

        self._missed = 0
        new_state = classify(score, self.thresholds, self.is_open, self.buffer_fraction)
        self._set_state(new_state, now)
        reading.is_open = new_state
        return reading

    def observe_missing(self, now: float) -> None:
        """A frame without faces: no observation unless miss decay is enabled."""
        if not self._running or self.missed_frames_to_close <= 0:
            return
        self._missed += 1
        if self.is_open and self._missed >= self.missed_frames_to_close:
            logger.debug(f"[session] {self._missed} missed frames, forcing closed")
            self._set_state(False, now)

    def _set_state(self, new_state: bool, now: float) -> None:
        if new_state == self.is_open:
            return
        if self.is_open:
            self.last_open_duration = now - self.last_transition_ts
            logger.debug(f"[session] mouth closed after {self.last_open_duration:.2f}s")
        self.is_open = new_state
        self.last_transition_ts = now

    def current_open_duration(self, now: float) -> Optional[float]:
        if not (self._running and self.is_open):
            return None
        return now - self.last_transition_ts

    def process_scores(self, scores: Iterable[float], now: float,
                       boxes: Optional[List[FaceBox]] = None) -> MouthSnapshot:
        """Run a frame's face scores through the machine in detector order."""
        scores = list(scores)
        readings: List[FaceReading] = []
        for i, score in enumerate(scores):
            reading = self.observe(score, now)
            if boxes is not None and i < len(boxes):
                reading.box = boxes[i]
            readings.append(reading)

        if not readings:
            self.observe_missing(now)

        snap = self.snapshot(now, readings)
        self._last_snapshot = snap
        return snap

    def process_frame(self, frame: np.ndarray, boxes: List[FaceBox], now: float) -> MouthSnapshot:
        """Score the mouth region of every detected face and update state."""
        scores = [score_mouth_region(crop_mouth(frame, box)) for box in boxes]
        return self.process_scores(scores, now, boxes=boxes)

    def snapshot(self, now: float, faces: Optional[List[FaceReading]] = None) -> MouthSnapshot:
        faces = faces or []
        # current duration is reported only when a face was seen with the mouth open
        current = self.current_open_duration(now) if faces else None
        return MouthSnapshot(
            ts=now,
            phase=self.phase,
            calibration_phase=self.calibration_phase,
            closed_samples=len(self.sampler.closed_samples),
            open_samples=len(self.sampler.open_samples),
            samples_needed=self.sampler.samples_needed,
            thresholds=self.thresholds,
            faces=faces,
            score=(faces[-1].score if faces else None),
            is_open=self.is_open if self._running else False,
            current_open_duration=current,
            last_open_duration=self.last_open_duration,
        )

    def status(self) -> Optional[MouthSnapshot]:
        return self._last_snapshot
