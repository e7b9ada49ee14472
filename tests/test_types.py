import numpy as np
import pytest

from conftest import hand_points
from gesturetree_hand.types import FingerState, LandmarkFrame


def test_from_points_accepts_xyz():
    frame = LandmarkFrame.from_points(hand_points("open_palm"))
    assert frame.points.shape == (21, 3)
    assert frame.xy(0).tolist() == pytest.approx([0.50, 0.75])


def test_from_points_pads_missing_z():
    xy = hand_points("fist")[:, :2]
    frame = LandmarkFrame.from_points(xy)
    assert frame.points.shape == (21, 3)
    assert np.all(frame.points[:, 2] == 0.0)


def test_frame_is_read_only_and_copied():
    src = hand_points("fist")
    frame = LandmarkFrame.from_points(src)
    src[0, 0] = 0.99
    assert frame.points[0, 0] == pytest.approx(0.50)
    with pytest.raises(ValueError):
        frame.points[0, 0] = 0.1


@pytest.mark.parametrize(
    "points",
    [
        [(0.5, 0.5, 0.0)] * 20,
        [(0.5,)] * 21,
        [(0.5, 0.5, 0.0, 0.0)] * 21,
    ],
)
def test_from_points_rejects_bad_shapes(points):
    with pytest.raises(ValueError):
        LandmarkFrame.from_points(points)


def test_from_points_rejects_non_finite():
    pts = hand_points("open_palm")
    pts[8, 1] = np.nan
    with pytest.raises(ValueError):
        LandmarkFrame.from_points(pts)


def test_from_mediapipe_reads_attributes():
    class _Lm:
        def __init__(self, x, y):
            self.x = x
            self.y = y

    frame = LandmarkFrame.from_mediapipe([_Lm(0.1 * (i % 10), 0.5) for i in range(21)])
    assert frame.points[3].tolist() == pytest.approx([0.3, 0.5, 0.0])


def test_finger_state_counts_and_describes():
    fs = FingerState(thumb=True, index=True, middle=False, ring=True, pinky=False)
    assert fs.extended_count == 2
    assert fs.describe() == "T:1 I:1 M:0 R:1 P:0"
