from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import cv2

from .model_assets import ensure_hand_landmarker_task
from .types import LandmarkFrame


@dataclass(frozen=True)
class _SolutionsBackend:
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(
    static_image_mode: bool,
    max_num_hands: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=static_image_mode,
        max_num_hands=max_num_hands,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    max_num_hands: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> _TasksBackend:
    """
    HandLandmarker from MediaPipe Tasks, for builds that ship without `mp.solutions`.

    Needs a `.task` model on disk; it is downloaded on first use.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=ensure_hand_landmarker_task(model_path)),
        running_mode=RunningMode.VIDEO,
        num_hands=max_num_hands,
        min_hand_detection_confidence=min_detection_confidence,
        min_hand_presence_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


class HandLandmarkDetector:
    """
    Single-hand landmark source for the gesture pipeline, backed by MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default), un-mirrored;
    the pipeline mirrors x itself.
    """

    def __init__(
        self,
        static_image_mode: bool = False,
        max_num_hands: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        tasks_model_path: str = "models/hand_landmarker.task",
    ) -> None:
        self._solutions = _try_create_solutions_backend(
            static_image_mode=static_image_mode,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self._tasks: Optional[_TasksBackend] = None
        self._last_ts_ms = -1

        if self._solutions is None:
            try:
                self._tasks = _try_create_tasks_backend(
                    model_path=tasks_model_path,
                    max_num_hands=max_num_hands,
                    min_detection_confidence=min_detection_confidence,
                    min_tracking_confidence=min_tracking_confidence,
                )
            except (ImportError, OSError) as e:
                raise RuntimeError(
                    "Could not initialize MediaPipe hand tracking.\n"
                    "This `mediapipe` build has no `mp.solutions`, and the Tasks HandLandmarker\n"
                    f"could not be created from:\n  {tasks_model_path}\n\n"
                    "Check that the model file exists (or can be downloaded) and that\n"
                    "`mediapipe.tasks` is importable."
                ) from e

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandLandmarkDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr, timestamp_ms: int) -> Optional[LandmarkFrame]:
        """Landmarks of the first detected hand, or None when no hand is visible."""
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return None
            return LandmarkFrame.from_mediapipe(results.multi_hand_landmarks[0].landmark)

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        # VIDEO mode rejects timestamps that do not strictly increase.
        ts = max(int(timestamp_ms), self._last_ts_ms + 1)
        self._last_ts_ms = ts
        result = self._tasks.landmarker.detect_for_video(mp_image, ts)

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        if not hand_landmarks_list:
            return None
        return LandmarkFrame.from_mediapipe(hand_landmarks_list[0])
