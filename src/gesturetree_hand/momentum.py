from __future__ import annotations

from dataclasses import dataclass

from .types import GestureLabel


_DIRECTED = (GestureLabel.PINCH, GestureLabel.OPEN_PALM)


@dataclass
class RotationMomentum:
    """
    Residual scene rotation that bleeds off when nothing is steering.

    Decay is time based: `decay` is the factor applied per `frame_s` seconds,
    so the curve is the same at 30 or 120 fps.
    """

    decay: float = 0.9
    floor: float = 0.01
    frame_s: float = 1.0 / 60.0
    damping: float = 0.08
    value: float = 0.0

    @property
    def speed(self) -> float:
        return self.value * self.damping

    def impulse(self, amount: float) -> None:
        self.value += amount

    def halt(self) -> None:
        self.value = 0.0

    def update(self, raw: GestureLabel, locked: bool, elapsed_s: float) -> float:
        if locked or raw in _DIRECTED:
            self.halt()
            return self.speed

        if elapsed_s > 0 and self.frame_s > 0:
            self.value *= self.decay ** (elapsed_s / self.frame_s)
        if abs(self.value) < self.floor:
            self.value = 0.0
        return self.speed
