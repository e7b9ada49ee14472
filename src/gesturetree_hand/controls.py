from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from .types import Point2
from .utils import mean_point


@dataclass
class PalmTracker:
    """
    Moving-average palm position and the pan delta between tracked frames.

    Every hand frame feeds the window; only frames with `tracking=True`
    produce a delta. Leaving tracking drops the anchor so the next tracked
    frame starts from zero instead of jumping.
    """

    window: int = 4
    move_threshold: float = 0.001
    samples: Deque[Point2] = field(default_factory=deque)
    anchor: Optional[Point2] = None

    def __post_init__(self) -> None:
        self.samples = deque(self.samples, maxlen=self.window)

    def smoothed(self) -> Optional[Point2]:
        if not self.samples:
            return None
        return mean_point(self.samples)

    def update(self, centroid: Point2, *, tracking: bool) -> Point2:
        self.samples.append(centroid)
        current = mean_point(self.samples)

        if not tracking:
            self.anchor = None
            return (0.0, 0.0)

        prev = self.anchor
        self.anchor = current
        if prev is None:
            return (0.0, 0.0)

        # x is mirrored: the camera sees the user's right as image left.
        dx = prev[0] - current[0]
        dy = current[1] - prev[1]
        if abs(dx) <= self.move_threshold and abs(dy) <= self.move_threshold:
            return (0.0, 0.0)
        return (dx, dy)

    def reset(self) -> None:
        self.samples.clear()
        self.anchor = None


@dataclass
class HandScaleTracker:
    """Exponentially smoothed hand size; its frame-to-frame change drives zoom."""

    retain: float = 0.9
    noise_floor: float = 0.001
    estimate: Optional[float] = None

    def update(self, scale: float) -> float:
        prev = self.estimate
        if prev is None:
            self.estimate = scale
            return 0.0

        current = prev * self.retain + scale * (1.0 - self.retain)
        self.estimate = current
        delta = current - prev
        if abs(delta) <= self.noise_floor:
            return 0.0
        return delta

    def reset(self) -> None:
        self.estimate = None
