from __future__ import annotations

import argparse
import os
import platform
import sys
import time

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from gesturetree_hand.actions import GestureActionDispatcher, PhotoPicker  # noqa: E402
from gesturetree_hand.config import PipelineConfig  # noqa: E402
from gesturetree_hand.detector import HandLandmarkDetector  # noqa: E402
from gesturetree_hand.drawing import draw_hand, draw_pinch, draw_status, draw_targets  # noqa: E402
from gesturetree_hand.pipeline import GesturePipeline  # noqa: E402
from gesturetree_hand.session import GestureSession  # noqa: E402

# Stand-ins for photos on screen, in mirrored normalized coordinates.
PHOTO_TARGETS = {
    1: (0.2, 0.3),
    2: (0.5, 0.3),
    3: (0.8, 0.3),
    4: (0.2, 0.7),
    5: (0.5, 0.7),
    6: (0.8, 0.7),
}


def main() -> int:
    ap = argparse.ArgumentParser(description="Webcam gesture controller demo.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=640, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=480, help="Capture height (best effort)")
    ap.add_argument("--pan-speed", type=float, default=25.0, help="Palm pan sensitivity (default: 25)")
    ap.add_argument("--zoom-speed", type=float, default=100.0, help="Palm zoom sensitivity (default: 100)")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Show the raw camera image instead of the mirrored (selfie) view",
    )
    ap.add_argument("--no-debug", action="store_true", help="Hide the raw-label/finger-state status line")
    ap.add_argument(
        "--tasks-model",
        default="models/hand_landmarker.task",
        help="Path to MediaPipe Tasks model (auto-downloaded if missing)",
    )
    args = ap.parse_args()

    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(args.camera, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise RuntimeError(
            f"Could not open camera index {args.camera}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, args.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, args.height)

    pipeline = GesturePipeline(PipelineConfig(debug_labels=not args.no_debug))
    dispatcher = GestureActionDispatcher()
    picker = PhotoPicker(targets=dict(PHOTO_TARGETS))
    locked = False
    last_out = None

    print("Keys: q/Esc quit | l toggle interaction lock | r spin the scene | pinch a circle to select it")

    with HandLandmarkDetector(tasks_model_path=args.tasks_model) as detector:
        session = GestureSession(detector, pipeline)
        while True:
            ok, frame = cap.read()
            if not ok:
                break

            # Many webcams report no position; fall back to wall time so frames still advance.
            pos_ms = cap.get(cv2.CAP_PROP_POS_MSEC)
            video_ts = pos_ms / 1000.0 if pos_ms > 0 else time.monotonic()

            now = time.monotonic()
            out = session.step(
                frame,
                video_ts,
                interaction_locked=locked or picker.locked(now),
                pan_speed=args.pan_speed,
                zoom_speed=args.zoom_speed,
            )
            if out is not None:
                last_out = out
                action = dispatcher.dispatch(out.stable_gesture, hand_present=session.last_landmarks is not None)
                if action is not None:
                    print(f"gesture {out.stable_gesture.value} -> {action.value}")
                if out.pinch_event is not None:
                    print(f"pinch at ({out.pinch_event[0]:.2f}, {out.pinch_event[1]:.2f})")
                    previous = picker.selected
                    hit = picker.on_pinch(out.pinch_event, now)
                    if hit is not None:
                        print(f"selected photo {hit}")
                    elif previous is not None:
                        print(f"deselected photo {previous}")

            mirrored = not args.no_mirror
            if mirrored:
                frame = cv2.flip(frame, 1)
            draw_targets(frame, picker.targets, picker.selected)
            draw_hand(frame, session.last_landmarks, mirrored=mirrored)
            if last_out is not None:
                if last_out.pinch_event is not None and mirrored:
                    draw_pinch(frame, last_out.pinch_event)
                draw_status(frame, last_out, locked=locked or picker.locked(now))

            cv2.imshow("gesturetree - gesture controller", frame)
            key = cv2.waitKey(1) & 0xFF
            if key in (ord("q"), 27):
                break
            if key == ord("l"):
                locked = not locked
                print(f"interaction lock {'on' if locked else 'off'}")
            if key == ord("r"):
                pipeline.state.momentum.impulse(1.0)

    cap.release()
    cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
