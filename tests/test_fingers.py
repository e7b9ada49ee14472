import numpy as np
import pytest

from conftest import hand, hand_points
from gesturetree_hand.features import extract_features
from gesturetree_hand.fingers import classify_fingers
from gesturetree_hand.types import LandmarkFrame


def test_open_palm_all_extended():
    fs = classify_fingers(hand("open_palm"))
    assert (fs.thumb, fs.index, fs.middle, fs.ring, fs.pinky) == (True, True, True, True, True)


def test_fist_all_curled():
    fs = classify_fingers(hand("fist"))
    assert (fs.thumb, fs.index, fs.middle, fs.ring, fs.pinky) == (False, False, False, False, False)


@pytest.mark.parametrize("scale", [0.5, 1.0, 1.8])
def test_classification_is_scale_invariant(scale):
    fs = classify_fingers(hand("victory", scale=scale))
    assert (fs.index, fs.middle, fs.ring, fs.pinky) == (True, True, False, False)


def test_severe_bend_overrides_reach_test():
    pts = hand_points("open_palm")
    # Long first segment, tip folded sideways: far from the wrist, close to its knuckle.
    pts[6, :2] = (0.44, 0.30)
    pts[7, :2] = (0.36, 0.40)
    pts[8, :2] = (0.30, 0.50)
    fs = classify_fingers(LandmarkFrame.from_points(pts))
    assert fs.index is False
    assert fs.middle is True


def test_thumb_splayed_but_curled_at_ip():
    pts = hand_points("open_palm")
    pts[3, :2] = (0.30, 0.62)
    pts[4, :2] = (0.31, 0.62)
    assert classify_fingers(LandmarkFrame.from_points(pts)).thumb is False


def test_degenerate_hand_counts_as_curled():
    frame = LandmarkFrame.from_points(np.full((21, 3), 0.5))
    fs = classify_fingers(frame)
    assert not any((fs.thumb, fs.index, fs.middle, fs.ring, fs.pinky))


def test_features_of_base_hand():
    feats = extract_features(hand("open_palm"))
    assert feats.palm_centroid == pytest.approx((0.50, 0.65))
    assert feats.hand_scale == pytest.approx(np.hypot(0.02, 0.15))
    assert feats.thumb_offset_y == pytest.approx(-0.04)
    assert feats.is_pinching is False


def test_pinch_point_is_mirrored_midpoint():
    feats = extract_features(hand("pinch", pinch_at=(0.3, 0.4)))
    assert feats.is_pinching is True
    assert feats.pinch_point == pytest.approx((0.3, 0.4))
    assert feats.pinch_distance == pytest.approx(np.hypot(0.02, 0.02))
