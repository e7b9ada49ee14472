from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np

from .types import LandmarkFrame, Point2, TickOutput


HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1), (1, 2), (2, 3), (3, 4),
    # index
    (0, 5), (5, 6), (6, 7), (7, 8),
    # middle
    (5, 9), (9, 10), (10, 11), (11, 12),
    # ring
    (9, 13), (13, 14), (14, 15), (15, 16),
    # pinky
    (13, 17), (17, 18), (18, 19), (19, 20),
    # palm base
    (0, 17),
]


def _to_px(frame_bgr, landmarks: LandmarkFrame, mirrored: bool) -> np.ndarray:
    h, w = frame_bgr.shape[:2]
    xy = landmarks.points[:, :2].copy()
    if mirrored:
        xy[:, 0] = 1.0 - xy[:, 0]
    px = np.round(xy * np.array([w - 1, h - 1])).astype(np.int32)
    return np.clip(px, 0, [w - 1, h - 1])


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_hand(frame_bgr, landmarks: Optional[LandmarkFrame], *, mirrored: bool = True):
    """Skeleton overlay; pass `mirrored=True` when the frame was flipped for display."""
    if landmarks is None:
        return frame_bgr
    px = _to_px(frame_bgr, landmarks, mirrored)
    for a, b in HAND_CONNECTIONS:
        cv2.line(frame_bgr, tuple(map(int, px[a])), tuple(map(int, px[b])), (0, 215, 255), 2, cv2.LINE_AA)
    for x, y in px:
        cv2.circle(frame_bgr, (int(x), int(y)), 3, (0, 0, 255), -1, lineType=cv2.LINE_AA)
    return frame_bgr


def draw_pinch(frame_bgr, point: Point2, color=(255, 0, 255)):
    """Marks a screen-space (already mirrored) pinch point."""
    h, w = frame_bgr.shape[:2]
    center = (int(round(point[0] * (w - 1))), int(round(point[1] * (h - 1))))
    cv2.circle(frame_bgr, center, 14, color, 2, lineType=cv2.LINE_AA)
    return frame_bgr


def draw_status(frame_bgr, out: TickOutput, *, locked: bool = False):
    status = out.debug_label or "no hand"
    draw_text(frame_bgr, status, (12, 28))

    stable = out.stable_gesture.value if out.stable_gesture is not None else "-"
    draw_text(frame_bgr, f"stable: {stable}", (12, 56), color=(40, 255, 120))
    draw_text(
        frame_bgr,
        f"pan {out.pan_delta[0]:+.2f},{out.pan_delta[1]:+.2f}  zoom {out.zoom_delta:+.2f}  rot {out.rotation_speed:.3f}",
        (12, 84),
        scale=0.5,
        thickness=1,
    )
    if locked:
        draw_text(frame_bgr, "LOCKED", (12, 112), color=(0, 0, 255))
    return frame_bgr


def draw_targets(frame_bgr, targets: Dict[int, Point2], selected: Optional[int] = None):
    """Pickable screen-space targets; the selected one is filled."""
    h, w = frame_bgr.shape[:2]
    for tid, (x, y) in targets.items():
        center = (int(round(x * (w - 1))), int(round(y * (h - 1))))
        if tid == selected:
            cv2.circle(frame_bgr, center, 22, (40, 255, 120), -1, lineType=cv2.LINE_AA)
        else:
            cv2.circle(frame_bgr, center, 22, (200, 200, 200), 2, lineType=cv2.LINE_AA)
        draw_text(frame_bgr, str(tid), (center[0] - 6, center[1] + 6), scale=0.5, thickness=1)
    return frame_bgr
