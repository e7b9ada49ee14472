from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .types import GestureLabel, Point2


class GestureAction(str, Enum):
    NONE = "none"
    FORMED = "formed"  # gather the tree
    CHAOS = "chaos"  # scatter the tree
    HEART = "heart"
    TEXT = "text"
    MUSIC = "music"
    SCREENSHOT = "screenshot"
    RESET = "reset"  # reset view
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"
    THEME_CLASSIC = "themeClassic"
    THEME_ICY = "themeIcy"
    THEME_CANDY = "themeCandy"


DEFAULT_GESTURE_ACTIONS: Dict[GestureLabel, GestureAction] = {
    GestureLabel.CLOSED_FIST: GestureAction.FORMED,
    GestureLabel.OPEN_PALM: GestureAction.CHAOS,
    GestureLabel.POINTING_UP: GestureAction.MUSIC,
    GestureLabel.THUMB_DOWN: GestureAction.ZOOM_OUT,
    GestureLabel.THUMB_UP: GestureAction.ZOOM_IN,
    GestureLabel.VICTORY: GestureAction.TEXT,
    GestureLabel.I_LOVE_YOU: GestureAction.HEART,
    GestureLabel.PINCH: GestureAction.NONE,
}


@dataclass
class GestureActionDispatcher:
    """
    Maps stable gestures to scene actions, once per held gesture.

    The pipeline reports a stable gesture on every frame it stays stable; this
    keeps the effect from re-triggering until a different gesture is shown or
    `release()` is called when the effect finishes. Losing the hand
    (`hand_present=False`) also releases, so the same gesture shown again fires again.
    """

    mapping: Dict[GestureLabel, GestureAction] = field(default_factory=lambda: dict(DEFAULT_GESTURE_ACTIONS))
    last_gesture: Optional[GestureLabel] = None
    active: bool = False

    def dispatch(self, gesture: Optional[GestureLabel], *, hand_present: bool = True) -> Optional[GestureAction]:
        if not hand_present:
            self.release()
            return None
        if gesture is None or gesture is GestureLabel.NONE:
            return None
        if gesture == self.last_gesture and self.active:
            return None
        if gesture != self.last_gesture:
            self.active = False

        action = self.mapping.get(gesture, GestureAction.NONE)
        if action is GestureAction.NONE:
            return None
        self.last_gesture = gesture
        self.active = True
        return action

    def release(self) -> None:
        self.active = False


def pick_nearest(
    point: Point2,
    targets: Iterable[Tuple[int, Point2]],
    max_distance: float = 0.25,
) -> Optional[int]:
    """
    Return the id of the screen-space target closest to `point`.

    `targets` yields `(id, (x, y))`; None when nothing lies within `max_distance`.
    """

    items = list(targets)
    if not items:
        return None
    ids = [i for i, _ in items]
    pts = np.asarray([p for _, p in items], dtype=np.float64)
    d = np.hypot(pts[:, 0] - point[0], pts[:, 1] - point[1])
    best = int(np.argmin(d))
    if d[best] >= max_distance:
        return None
    return ids[best]


@dataclass
class PhotoPicker:
    """
    Pinch-to-select over a fixed set of screen-space targets.

    A pinch with nothing selected picks the nearest target and holds the
    interaction lock for `lock_s`; the next pinch deselects.
    """

    targets: Dict[int, Point2] = field(default_factory=dict)
    max_distance: float = 0.25
    lock_s: float = 0.8
    selected: Optional[int] = None
    lock_until: float = 0.0

    def on_pinch(self, point: Point2, now: float) -> Optional[int]:
        """Returns the newly selected id, or None on a miss or a deselect."""
        if self.selected is not None:
            self.selected = None
            return None
        hit = pick_nearest(point, self.targets.items(), self.max_distance)
        if hit is not None:
            self.selected = hit
            self.lock_until = now + self.lock_s
        return hit

    def locked(self, now: float) -> bool:
        return now < self.lock_until

    def reset(self) -> None:
        self.selected = None
        self.lock_until = 0.0
