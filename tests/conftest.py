from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import pytest

from gesturetree_hand.types import LandmarkFrame


# Upright right hand, palm facing the camera, in normalized image coordinates.
WRIST_XY = (0.50, 0.75)
MCP_X = {"index": 0.44, "middle": 0.48, "ring": 0.52, "pinky": 0.56}
MCP_Y = 0.60
FINGER_BASE = {"index": 5, "middle": 9, "ring": 13, "pinky": 17}
PALM_CENTER = (0.50, 0.65)  # mean of wrist, index MCP, pinky MCP

THUMBS = {
    # cmc, mcp, ip, tip
    "out": [(0.46, 0.70), (0.41, 0.66), (0.36, 0.63), (0.31, 0.62)],
    "up": [(0.46, 0.70), (0.41, 0.64), (0.40, 0.57), (0.39, 0.50)],
    "down": [(0.46, 0.70), (0.41, 0.66), (0.40, 0.73), (0.39, 0.80)],
    "tucked": [(0.46, 0.70), (0.44, 0.66), (0.47, 0.64), (0.50, 0.63)],
}

# thumb, (index, middle, ring, pinky) extended
POSES: Dict[str, Tuple[str, Tuple[int, int, int, int]]] = {
    "open_palm": ("out", (1, 1, 1, 1)),
    "fist": ("tucked", (0, 0, 0, 0)),
    "fist_thumb_side": ("out", (0, 0, 0, 0)),
    "thumb_up": ("up", (0, 0, 0, 0)),
    "thumb_down": ("down", (0, 0, 0, 0)),
    "victory": ("tucked", (1, 1, 0, 0)),
    "pointing_up": ("out", (1, 0, 0, 0)),
    "i_love_you": ("out", (1, 0, 0, 1)),
    "unknown": ("tucked", (1, 1, 1, 0)),
}


def _finger(x: float, extended: bool):
    if extended:
        return [(x, MCP_Y), (x, 0.55), (x, 0.51), (x, 0.47)]
    # folded back toward the palm
    return [(x, MCP_Y), (x, 0.56), (x, 0.60), (x, 0.64)]


def hand_points(
    pose: str,
    *,
    shift: Tuple[float, float] = (0.0, 0.0),
    scale: float = 1.0,
    pinch_at: Optional[Tuple[float, float]] = None,
) -> np.ndarray:
    """
    (21, 3) landmarks for a named pose.

    `scale` grows the hand about its palm center, `shift` moves it. `pose="pinch"`
    closes thumb and index tips around `pinch_at` (screen space, x mirrored).
    """

    pts = np.zeros((21, 3), dtype=np.float64)
    pts[0, :2] = WRIST_XY

    if pose == "pinch":
        thumb = "out"
        flags = (0, 1, 1, 1)
    else:
        thumb, flags = POSES[pose]

    pts[1:5, :2] = THUMBS[thumb]
    for (name, base), ext in zip(FINGER_BASE.items(), flags):
        pts[base : base + 4, :2] = _finger(MCP_X[name], bool(ext))

    center = np.array(PALM_CENTER)
    pts[:, :2] = center + (pts[:, :2] - center) * scale + np.array(shift)

    if pose == "pinch":
        sx, sy = pinch_at if pinch_at is not None else (0.58, 0.52)
        cx = 1.0 - sx
        pts[3, :2] = (cx - 0.05, sy + 0.05)
        pts[4, :2] = (cx - 0.01, sy + 0.01)
        pts[6, :2] = (cx + 0.01, sy + 0.05)
        pts[7, :2] = (cx + 0.02, sy + 0.01)
        pts[8, :2] = (cx + 0.01, sy - 0.01)

    return pts


def hand(pose: str, **kwargs) -> LandmarkFrame:
    return LandmarkFrame.from_points(hand_points(pose, **kwargs))


@pytest.fixture
def make_hand():
    return hand
