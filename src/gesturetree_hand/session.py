from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional, Protocol

from .pipeline import GesturePipeline
from .types import LandmarkFrame, TickInput, TickOutput


class LandmarkSource(Protocol):
    def detect(self, frame_bgr, timestamp_ms: int) -> Optional[LandmarkFrame]:
        ...


@dataclass
class FrameClock:
    """
    Gates processing on the video timestamp:
    - a frame whose timestamp did not advance is skipped
    - otherwise returns wall-clock seconds since the last processed frame
    """

    last_video_ts: Optional[float] = None
    last_wall_t: Optional[float] = None

    def advance(self, video_ts: float, now: float) -> Optional[float]:
        if self.last_video_ts is not None and video_ts == self.last_video_ts:
            return None
        self.last_video_ts = video_ts
        prev = self.last_wall_t
        self.last_wall_t = now
        if prev is None:
            return 0.0
        return max(0.0, now - prev)

    def reset(self) -> None:
        self.last_video_ts = None
        self.last_wall_t = None


class GestureSession:
    """
    Camera-side driver: detector + frame de-duplication + gesture pipeline.

    Call `step()` once per captured frame; it returns None for repeated frames.
    """

    def __init__(self, detector: LandmarkSource, pipeline: Optional[GesturePipeline] = None) -> None:
        self.detector = detector
        self.pipeline = pipeline or GesturePipeline()
        self.clock = FrameClock()
        self.last_landmarks: Optional[LandmarkFrame] = None

    def step(
        self,
        frame_bgr,
        video_ts: float,
        *,
        interaction_locked: bool = False,
        pan_speed: float = 25.0,
        zoom_speed: float = 100.0,
        now: Optional[float] = None,
    ) -> Optional[TickOutput]:
        wall_t = time.monotonic() if now is None else now
        elapsed = self.clock.advance(video_ts, wall_t)
        if elapsed is None:
            return None

        landmarks = self.detector.detect(frame_bgr, int(round(video_ts * 1000)))
        self.last_landmarks = landmarks
        return self.pipeline.process(
            TickInput(
                landmarks=landmarks,
                elapsed_s=elapsed,
                interaction_locked=interaction_locked,
                pan_speed=pan_speed,
                zoom_speed=zoom_speed,
            )
        )

    def reset(self) -> None:
        self.clock.reset()
        self.pipeline.reset()
        self.last_landmarks = None
