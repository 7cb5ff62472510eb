"""
Two-phase calibration: collect closed then open mouth scores, average each class.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from mouthstate.models import CalibrationPhase, Thresholds

logger = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    """Mean requested before any sample was recorded."""


def mean_of(samples: Sequence[float]) -> float:
    if len(samples) == 0:
        raise EmptyInputError("cannot average an empty sample list")
    return float(sum(samples)) / len(samples)


class CalibrationSampler:
    """
    Collect labelled scores and turn them into thresholds.

    A phase finishes on the sample recorded while `samples_needed - 1` samples
    are already present, so each class ends up with exactly `samples_needed`.
    All samples are used; there is no outlier rejection.
    """
    def __init__(self, samples_needed: int = 10):
        self.samples_needed = max(1, int(samples_needed))
        self.phase = CalibrationPhase.COLLECTING_CLOSED
        self.closed_samples: List[float] = []
        self.open_samples: List[float] = []
        self.closed_threshold: Optional[float] = None
        self.open_threshold: Optional[float] = None

    @property
    def complete(self) -> bool:
        return self.phase == CalibrationPhase.COMPLETE

    @property
    def thresholds(self) -> Optional[Thresholds]:
        if self.closed_threshold is None or self.open_threshold is None:
            return None
        return Thresholds(closed_threshold=self.closed_threshold, open_threshold=self.open_threshold)

    def samples_for(self, phase: CalibrationPhase) -> List[float]:
        if phase == CalibrationPhase.COLLECTING_CLOSED:
            return self.closed_samples
        if phase == CalibrationPhase.COLLECTING_OPEN:
            return self.open_samples
        raise ValueError(f"no samples are collected in phase {phase.value}")

    def record(self, score: float) -> CalibrationPhase:
        """Append `score` to the current phase and advance when the phase is full."""
        if self.complete:
            logger.debug("[calibration] already complete, sample ignored")
            return self.phase

        samples = self.samples_for(self.phase)
        ready = len(samples) >= self.samples_needed - 1
        samples.append(float(score))
        logger.debug(f"[calibration] {self.phase.value} sample {len(samples)}/{self.samples_needed} score={score:.2f}")

        if ready:
            self._finish_phase()
        return self.phase

    def _finish_phase(self) -> None:
        if self.phase == CalibrationPhase.COLLECTING_CLOSED:
            self.closed_threshold = mean_of(self.closed_samples)
            self.phase = CalibrationPhase.COLLECTING_OPEN
            logger.info(f"Closed mouth samples: Avg = {self.closed_threshold:.2f}")
        elif self.phase == CalibrationPhase.COLLECTING_OPEN:
            self.open_threshold = mean_of(self.open_samples)
            self.phase = CalibrationPhase.COMPLETE
            logger.info(f"Calibration complete! Closed: {self.closed_threshold:.2f}, Open: {self.open_threshold:.2f}")
