from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_CONFIG, PipelineConfig
from .types import GestureLabel


@dataclass
class GestureStreak:
    """
    Run-length counter over raw labels:
    - the same label again extends the streak
    - a different label restarts it at 1
    - `None` (or no hand) drops back to idle with a count of 0
    """

    label: Optional[GestureLabel] = None
    count: int = 0

    def update(self, label: GestureLabel) -> int:
        if label is GestureLabel.NONE:
            self.reset()
        elif label == self.label:
            self.count += 1
        else:
            self.label = label
            self.count = 1
        return self.count

    def reset(self) -> None:
        self.label = None
        self.count = 0

    def is_stable(self, cfg: PipelineConfig = DEFAULT_CONFIG) -> bool:
        if self.label is None:
            return False
        return self.count >= cfg.stable_frames_for(self.label)
