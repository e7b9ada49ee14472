from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple, Union

from .types import GestureLabel


# Consecutive identical frames before a label counts as stable.
# Quick-response gestures are low, accident-prone ones are high.
DEFAULT_STABLE_FRAMES: Dict[GestureLabel, int] = {
    GestureLabel.PINCH: 2,
    GestureLabel.OPEN_PALM: 2,
    GestureLabel.CLOSED_FIST: 2,
    GestureLabel.VICTORY: 4,
    GestureLabel.THUMB_UP: 5,
    GestureLabel.THUMB_DOWN: 5,
    GestureLabel.I_LOVE_YOU: 5,
}


@dataclass(frozen=True)
class PipelineConfig:
    """Tuning constants for the gesture pipeline. Distances are in normalized image units."""

    # finger state
    reach_ratio: float = 1.4
    severe_bend_ratio: float = 0.8
    thumb_reach_ratio: float = 0.9
    thumb_curl_ratio: float = 0.3
    min_denominator: float = 1e-6

    # features / decision
    pinch_distance: float = 0.08
    thumb_tilt: float = 0.05

    # stabilizer
    # (label, frames) pairs; a mapping is normalized in __post_init__
    stable_frames: Union[Tuple[Tuple[GestureLabel, int], ...], Mapping[GestureLabel, int]] = tuple(
        DEFAULT_STABLE_FRAMES.items()
    )
    default_stable_frames: int = 3

    # continuous controls
    palm_window: int = 4
    palm_move_threshold: float = 0.001
    hand_scale_retain: float = 0.9
    zoom_noise_floor: float = 0.001

    # pinch debounce
    pinch_cooldown_s: float = 0.3
    pinch_min_shift: float = 0.1

    # rotation momentum
    momentum_decay: float = 0.9
    momentum_floor: float = 0.01
    momentum_frame_s: float = 1.0 / 60.0
    rotation_damping: float = 0.08

    debug_labels: bool = True

    def __post_init__(self) -> None:
        pairs = self.stable_frames.items() if isinstance(self.stable_frames, Mapping) else self.stable_frames
        object.__setattr__(self, "stable_frames", tuple(sorted((GestureLabel(k), int(v)) for k, v in pairs)))

    def stable_frames_for(self, label: GestureLabel) -> int:
        for known, frames in self.stable_frames:
            if known is label:
                return frames
        return self.default_stable_frames


DEFAULT_CONFIG = PipelineConfig()
