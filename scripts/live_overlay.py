"""Run the live mouth-state window.

Usage:
    uvicorn api.main:app --reload  # (separate, for API)
    python scripts/live_overlay.py  # (to see camera overlay window)

SPACE samples during calibration, 'c' starts detection, ESC quits.
"""
from mouthstate.config import Settings, configure_logging
from mouthstate.live import run_live_overlay

if __name__ == '__main__':
    s = Settings()
    configure_logging(s)
    run_live_overlay(s)
