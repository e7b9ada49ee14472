import pytest

from conftest import hand
from gesturetree_hand.session import FrameClock, GestureSession
from gesturetree_hand.types import GestureLabel


class _ScriptedDetector:
    """Returns queued landmark frames and records the timestamps it was asked for."""

    def __init__(self, frames):
        self.frames = list(frames)
        self.calls = []

    def detect(self, frame_bgr, timestamp_ms):
        self.calls.append(timestamp_ms)
        return self.frames.pop(0) if self.frames else None


def test_clock_skips_repeated_timestamps():
    clock = FrameClock()
    assert clock.advance(0.0, now=10.0) == 0.0
    assert clock.advance(0.0, now=10.02) is None
    assert clock.advance(0.033, now=10.05) == pytest.approx(0.05)


def test_clock_never_goes_negative():
    clock = FrameClock()
    clock.advance(1.0, now=5.0)
    assert clock.advance(2.0, now=4.0) == 0.0


def test_session_runs_pipeline_on_new_frames_only():
    palm = hand("open_palm")
    detector = _ScriptedDetector([palm, palm, palm])
    session = GestureSession(detector)

    first = session.step(None, 0.000, now=1.0)
    dup = session.step(None, 0.000, now=1.01)
    second = session.step(None, 0.033, now=1.033)

    assert dup is None
    assert detector.calls == [0, 33]
    assert first.raw_gesture is GestureLabel.OPEN_PALM
    assert second.stable_gesture is GestureLabel.OPEN_PALM
    assert session.last_landmarks is palm


def test_session_forwards_controls():
    detector = _ScriptedDetector([hand("open_palm"), hand("open_palm", shift=(0.0, 0.02))])
    session = GestureSession(detector)
    session.step(None, 0.0, now=0.0, pan_speed=2.0)
    out = session.step(None, 0.1, now=0.1, pan_speed=2.0)
    assert out.pan_delta[1] == pytest.approx(0.01 * 2.0)

    locked = session.step(None, 0.2, now=0.2, interaction_locked=True)
    assert locked.raw_gesture is GestureLabel.NONE
    assert locked.pan_delta == (0.0, 0.0)


def test_session_reset():
    detector = _ScriptedDetector([hand("fist")])
    session = GestureSession(detector)
    session.step(None, 0.0, now=0.0)
    session.reset()
    assert session.last_landmarks is None
    assert session.clock.last_video_ts is None
    assert session.pipeline.state.streak.count == 0
