import numpy as np
import pytest

from mouthstate.config import Settings
from mouthstate.models import CalibrationPhase, FaceBox, SessionPhase
from mouthstate.session import MouthSession


def running_session(calibrate, settings, closed=5.0, open_=100.0, now=0.0):
    s = calibrate(MouthSession(settings), [closed] * 10, [open_] * 10)
    s.start_detection(now)
    assert s.phase == SessionPhase.RUNNING
    return s


def test_initial_state(settings):
    s = MouthSession(settings)
    assert s.phase == SessionPhase.CALIBRATING_CLOSED
    assert s.calibration_phase == CalibrationPhase.COLLECTING_CLOSED
    assert s.thresholds is None

def test_sample_is_armed_and_consumed_by_next_face(settings):
    s = MouthSession(settings)
    s.process_scores([7.0], 0.0)
    assert s.sampler.closed_samples == []

    s.record_calibration_sample()
    assert s.sample_pending
    # no face: nothing recorded, still armed
    s.process_scores([], 0.1)
    assert s.sample_pending and s.sampler.closed_samples == []
    # two faces: only the first is sampled
    s.process_scores([1.0, 2.0], 0.2)
    assert s.sampler.closed_samples == [1.0]
    assert not s.sample_pending

def test_phase_transitions(calibrate, settings):
    s = MouthSession(settings)
    calibrate(s, [10.0] * 9, [])
    assert s.phase == SessionPhase.CALIBRATING_CLOSED
    calibrate(s, [10.0], [])
    assert s.phase == SessionPhase.CALIBRATING_OPEN
    assert s.sampler.closed_threshold == pytest.approx(10.0)

    calibrate(s, [], [50.0] * 10)
    assert s.phase == SessionPhase.CALIBRATED_IDLE
    assert s.thresholds.open_threshold == pytest.approx(50.0)

def test_no_detection_during_calibration(calibrate, settings):
    s = calibrate(MouthSession(settings), [5.0] * 10, [100.0] * 10)
    snap = s.process_scores([1000.0], 1.0)
    assert snap.is_open is False
    assert snap.faces[0].is_open is None
    assert snap.score == pytest.approx(1000.0)

def test_start_ignored_before_calibration_complete(calibrate, settings):
    s = calibrate(MouthSession(settings), [5.0] * 10, [100.0] * 3)
    s.start_detection(0.0)
    assert s.phase == SessionPhase.CALIBRATING_OPEN

def test_commands_are_noops_while_running(calibrate, settings):
    s = running_session(calibrate, settings)
    s.process_scores([100.0], 1.0)
    before = (s.is_open, s.last_transition_ts, s.last_open_duration, len(s.sampler.open_samples))
    s.record_calibration_sample()
    s.start_detection(5.0)
    assert not s.sample_pending
    s.process_scores([100.0], 1.5)
    assert (s.is_open, s.last_transition_ts, s.last_open_duration, len(s.sampler.open_samples)) == before

def test_open_durations(calibrate, settings):
    s = running_session(calibrate, settings)
    snap = s.process_scores([100.0], 0.0)
    assert snap.is_open and snap.current_open_duration == pytest.approx(0.0)

    snap = s.process_scores([100.0], 1.0)
    assert snap.current_open_duration == pytest.approx(1.0)

    # inside the dead band (33.5..71.5): stays open
    snap = s.process_scores([40.0], 2.0)
    assert snap.is_open

    snap = s.process_scores([5.0], 2.3)
    assert snap.is_open is False
    assert snap.current_open_duration is None
    assert snap.last_open_duration == pytest.approx(2.3)

def test_missing_face_changes_nothing(calibrate, settings):
    s = running_session(calibrate, settings)
    s.process_scores([100.0], 0.0)
    before = (s.is_open, s.last_transition_ts, s.last_open_duration)
    for t in (0.5, 1.0, 5.0):
        snap = s.process_scores([], t)
        assert not snap.face_detected
        assert snap.current_open_duration is None
    assert (s.is_open, s.last_transition_ts, s.last_open_duration) == before
    # mouth seen again: duration still counted from the first transition
    snap = s.process_scores([100.0], 6.0)
    assert snap.current_open_duration == pytest.approx(6.0)

def test_missed_frames_decay_when_enabled(calibrate):
    s = running_session(calibrate, Settings(MISSED_FRAMES_TO_CLOSE=2))
    s.process_scores([100.0], 0.0)
    s.process_scores([], 1.0)
    assert s.is_open
    s.process_scores([], 1.5)
    assert not s.is_open
    assert s.last_open_duration == pytest.approx(1.5)

def test_last_face_wins(calibrate, settings):
    s = running_session(calibrate, settings)
    snap = s.process_scores([100.0, 5.0], 0.0)
    assert [f.is_open for f in snap.faces] == [True, False]
    assert snap.is_open is False
    assert snap.last_open_duration == pytest.approx(0.0)

def test_process_frame_scores_mouth_regions(settings, open_region):
    s = MouthSession(settings)
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    frame[60:90, 25:75] = open_region[0:1, 0:1]   # skin over the mouth area
    box = FaceBox(x=0, y=0, w=100, h=100, confidence=0.9)
    snap = s.process_frame(frame, [box], 0.0)
    assert snap.faces[0].box == box
    assert snap.score > 0
    assert s.status() is snap

def test_snapshot_after_missing_face_has_no_current_duration(calibrate, settings):
    s = running_session(calibrate, settings)
    s.process_scores([100.0], 0.0)
    s.process_scores([], 1.0)
    # rebuilding from the last frame must agree with the frame itself
    snap = s.snapshot(1.0, s.status().faces)
    assert snap.is_open is True
    assert snap.current_open_duration is None
    assert s.snapshot(1.0).current_open_duration is None

def test_buffer_setting_reaches_classifier(calibrate):
    # closed 10, open 30: midpoint 20, no dead band with a zero buffer
    s = calibrate(MouthSession(Settings(HYSTERESIS_BUFFER=0.0)), [10.0] * 10, [30.0] * 10)
    s.start_detection(0.0)
    assert s.buffer_fraction == 0.0
    assert s.process_scores([20.5], 0.0).is_open is True
    assert s.process_scores([19.5], 1.0).is_open is False

    # default 0.2 buffer: 20.5 sits inside the 16..24 dead band
    d = calibrate(MouthSession(Settings(HYSTERESIS_BUFFER=0.2)), [10.0] * 10, [30.0] * 10)
    d.start_detection(0.0)
    assert d.process_scores([20.5], 0.0).is_open is False
