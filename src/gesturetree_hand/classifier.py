from __future__ import annotations

from typing import Optional

from .config import DEFAULT_CONFIG, PipelineConfig
from .types import FingerState, GestureLabel, HandFeatures


def decide_gesture(
    fingers: Optional[FingerState],
    features: Optional[HandFeatures],
    cfg: PipelineConfig = DEFAULT_CONFIG,
) -> GestureLabel:
    """
    Map finger flags and geometry to a single label.

    Rules are checked in a fixed priority order and the first match wins, so
    the order below doubles as the tie-break between overlapping poses.
    """

    if fingers is None or features is None:
        return GestureLabel.NONE

    extended = fingers.extended_count

    if features.is_pinching and fingers.middle:
        return GestureLabel.PINCH
    if extended == 4 and fingers.thumb:
        return GestureLabel.OPEN_PALM
    # Tolerates one finger that failed to register as curled.
    if extended <= 1 and not fingers.thumb:
        return GestureLabel.CLOSED_FIST
    if extended == 0 and fingers.thumb:
        if features.thumb_offset_y < -cfg.thumb_tilt:
            return GestureLabel.THUMB_UP
        if features.thumb_offset_y > cfg.thumb_tilt:
            return GestureLabel.THUMB_DOWN
        # sideways thumb
        return GestureLabel.CLOSED_FIST
    if fingers.index and fingers.middle and not fingers.ring and not fingers.pinky:
        return GestureLabel.VICTORY
    if fingers.index and not fingers.middle and not fingers.ring and not fingers.pinky:
        return GestureLabel.POINTING_UP
    if fingers.thumb and fingers.index and not fingers.middle and not fingers.ring and fingers.pinky:
        return GestureLabel.I_LOVE_YOU
    return GestureLabel.NONE
