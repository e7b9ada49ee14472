from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import GestureLabel, Point2


@dataclass
class PinchDebouncer:
    """
    Turns a held, stable pinch into single pinch events:
    - fires once per pinch (re-armed when the raw label leaves Pinch)
    - a cooldown blocks any new trigger, wherever it is
    - a new trigger must also move away from the previous trigger point;
      the point is forgotten only when the hand shows no gesture
    """

    cooldown_s: float = 0.3
    min_shift: float = 0.1
    active: bool = False
    cooldown_remaining: float = 0.0
    last_trigger: Optional[Point2] = None

    def tick(self, elapsed_s: float) -> None:
        """Advance the cooldown; called every frame, with or without a hand."""
        if self.cooldown_remaining > 0:
            self.cooldown_remaining = max(0.0, self.cooldown_remaining - elapsed_s)

    def update(self, raw: GestureLabel, stable: bool, point: Optional[Point2]) -> Optional[Point2]:
        if raw is not GestureLabel.PINCH:
            self.active = False
            if raw is GestureLabel.NONE:
                self.last_trigger = None
            return None

        if not stable or point is None:
            return None

        if self.active or self.cooldown_remaining > 0 or not self._moved(point):
            return None

        self.active = True
        self.cooldown_remaining = self.cooldown_s
        self.last_trigger = point
        return point

    def _moved(self, point: Point2) -> bool:
        last = self.last_trigger
        if last is None:
            return True
        return abs(point[0] - last[0]) > self.min_shift or abs(point[1] - last[1]) > self.min_shift

    def reset(self) -> None:
        self.active = False
        self.cooldown_remaining = 0.0
        self.last_trigger = None
