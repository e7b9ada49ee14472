from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np


Point2 = Tuple[float, float]

NUM_LANDMARKS = 21

# MediaPipe hand landmark indices
WRIST = 0
THUMB_MCP = 2
THUMB_IP = 3
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_PIP = 6
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_PIP = 10
MIDDLE_TIP = 12
RING_MCP = 13
RING_PIP = 14
RING_TIP = 16
PINKY_MCP = 17
PINKY_PIP = 18
PINKY_TIP = 20


class GestureLabel(str, Enum):
    NONE = "None"
    OPEN_PALM = "Open_Palm"
    CLOSED_FIST = "Closed_Fist"
    POINTING_UP = "Pointing_Up"
    THUMB_UP = "Thumb_Up"
    THUMB_DOWN = "Thumb_Down"
    VICTORY = "Victory"
    I_LOVE_YOU = "ILoveYou"
    PINCH = "Pinch"


@dataclass(frozen=True, eq=False)
class LandmarkFrame:
    """One hand's 21 landmarks in normalized image coordinates (read-only (21, 3) array)."""

    points: np.ndarray

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "LandmarkFrame":
        """
        Build a frame from 21 `(x, y)` or `(x, y, z)` samples.

        Raises ValueError for anything else; malformed detector output must be
        rejected here so the gesture pipeline only ever sees complete hands.
        """

        arr = np.array(list(points), dtype=np.float64)
        if arr.ndim != 2 or arr.shape[0] != NUM_LANDMARKS or arr.shape[1] not in (2, 3):
            raise ValueError(f"Expected {NUM_LANDMARKS} landmarks of 2 or 3 values, got shape {arr.shape}")
        if arr.shape[1] == 2:
            arr = np.hstack([arr, np.zeros((NUM_LANDMARKS, 1))])
        if not np.all(np.isfinite(arr)):
            raise ValueError("Landmark coordinates must be finite")
        arr.setflags(write=False)
        return cls(points=arr)

    @classmethod
    def from_mediapipe(cls, landmarks) -> "LandmarkFrame":
        """Accepts both `mp.solutions` landmark lists and Tasks `NormalizedLandmark` lists."""
        return cls.from_points((float(lm.x), float(lm.y), float(getattr(lm, "z", 0.0))) for lm in landmarks)

    def xy(self, idx: int) -> np.ndarray:
        return self.points[idx, :2]


@dataclass(frozen=True)
class FingerState:
    """Per-finger "extended" flags for a single frame."""

    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def extended_count(self) -> int:
        # thumb is judged separately and never counted here
        return int(self.index) + int(self.middle) + int(self.ring) + int(self.pinky)

    def describe(self) -> str:
        return (
            f"T:{int(self.thumb)} I:{int(self.index)} M:{int(self.middle)} "
            f"R:{int(self.ring)} P:{int(self.pinky)}"
        )


@dataclass(frozen=True)
class HandFeatures:
    """Geometric scalars derived from one frame."""

    pinch_distance: float
    is_pinching: bool
    palm_centroid: Point2
    hand_scale: float
    thumb_offset_y: float
    pinch_point: Point2  # thumb/index midpoint, x mirrored to screen space


@dataclass(frozen=True)
class TickInput:
    landmarks: Optional[LandmarkFrame]  # None when no hand was detected
    elapsed_s: float
    interaction_locked: bool = False
    pan_speed: float = 25.0
    zoom_speed: float = 100.0


@dataclass(frozen=True)
class TickOutput:
    raw_gesture: GestureLabel
    stable_gesture: Optional[GestureLabel]
    pan_delta: Point2
    zoom_delta: float
    rotation_speed: float
    pinch_event: Optional[Point2]
    debug_label: Optional[str]
