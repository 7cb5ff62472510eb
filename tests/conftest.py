import numpy as np
import pytest

from mouthstate.config import Settings

# BGR colours: lips/skin outside the red hue bands, and a dark red open mouth
SKIN_BGR = (120, 200, 230)
MOUTH_BGR = (30, 30, 120)


@pytest.fixture
def settings():
    return Settings(CALIBRATION_SAMPLES=10, HYSTERESIS_BUFFER=0.2, MISSED_FRAMES_TO_CLOSE=0)

@pytest.fixture
def closed_region():
    return np.full((20, 40, 3), SKIN_BGR, dtype=np.uint8)

@pytest.fixture
def open_region():
    region = np.full((20, 40, 3), SKIN_BGR, dtype=np.uint8)
    region[4:16, 8:32] = MOUTH_BGR
    return region


@pytest.fixture
def calibrate():
    """Drive a session through calibration with explicit scores."""
    def _calibrate(session, closed_scores, open_scores, now=0.0):
        for s in list(closed_scores) + list(open_scores):
            session.record_calibration_sample()
            session.process_scores([s], now)
        return session
    return _calibrate
