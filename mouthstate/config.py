"""
Configuration for the mouth-state detector.
"""
from pydantic import BaseModel
import logging
import os

class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    LOG_LEVEL: str = (os.getenv("LOG_LEVEL", "INFO") or "INFO")

    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    CAPTURE_FPS: int = int(os.getenv("CAPTURE_FPS", "60"))
    CAPTURE_BUFFER_SIZE: int = int(os.getenv("CAPTURE_BUFFER_SIZE", "1"))
    FRAME_WIDTH: int = int(os.getenv("FRAME_WIDTH", "1920"))
    FRAME_HEIGHT: int = int(os.getenv("FRAME_HEIGHT", "1080"))

    FACE_PROTO: str = os.getenv("FACE_PROTO", "models/deploy.prototxt")
    FACE_MODEL: str = os.getenv("FACE_MODEL", "models/res10_300x300_ssd_iter_140000_fp16.caffemodel")
    FACE_CONFIDENCE: float = float(os.getenv("FACE_CONFIDENCE", "0.7"))

    CALIBRATION_SAMPLES: int = int(os.getenv("CALIBRATION_SAMPLES", "10"))
    HYSTERESIS_BUFFER: float = float(os.getenv("HYSTERESIS_BUFFER", "0.2"))
    # 0 keeps the last state through detector misses
    MISSED_FRAMES_TO_CLOSE: int = int(os.getenv("MISSED_FRAMES_TO_CLOSE", "0"))

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize LOG_LEVEL: strip comments/extra words, upper-case, validate
        parts = (self.LOG_LEVEL or "").split()
        level = parts[0].upper() if parts else "INFO"
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
        if self.CALIBRATION_SAMPLES < 1:
            object.__setattr__(self, "CALIBRATION_SAMPLES", 1)
        if self.HYSTERESIS_BUFFER < 0:
            object.__setattr__(self, "HYSTERESIS_BUFFER", 0.0)


def configure_logging(settings: Settings) -> None:
    """Entry-point logging setup; library modules only create loggers."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
