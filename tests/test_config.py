from mouthstate.config import Settings

def test_Settings():
    s = Settings()
    assert s.CALIBRATION_SAMPLES >= 1
    assert 0.0 <= s.FACE_CONFIDENCE <= 1.0
    # override via env-like behavior (construct new instance)
    s2 = Settings(CALIBRATION_SAMPLES=5, HYSTERESIS_BUFFER=0.3)
    assert s2.CALIBRATION_SAMPLES == 5
    assert s2.HYSTERESIS_BUFFER == 0.3

def test_log_level_normalized():
    assert Settings(LOG_LEVEL="debug  # noisy").LOG_LEVEL == "DEBUG"
    assert Settings(LOG_LEVEL="chatty").LOG_LEVEL == "INFO"
    assert Settings(LOG_LEVEL="").LOG_LEVEL == "INFO"

def test_sample_count_floor():
    assert Settings(CALIBRATION_SAMPLES=0).CALIBRATION_SAMPLES == 1

def test_negative_hysteresis_buffer_clamped():
    assert Settings(HYSTERESIS_BUFFER=-0.2).HYSTERESIS_BUFFER == 0.0
    assert Settings(HYSTERESIS_BUFFER=0.35).HYSTERESIS_BUFFER == 0.35
