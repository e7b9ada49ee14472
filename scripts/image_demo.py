from __future__ import annotations

import argparse
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from gesturetree_hand.classifier import decide_gesture  # noqa: E402
from gesturetree_hand.detector import HandLandmarkDetector  # noqa: E402
from gesturetree_hand.drawing import draw_hand, draw_text  # noqa: E402
from gesturetree_hand.features import extract_features  # noqa: E402
from gesturetree_hand.fingers import classify_fingers  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Classify the hand pose in a still image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", help="Optional path for an annotated copy")
    args = ap.parse_args()

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    with HandLandmarkDetector(static_image_mode=True) as detector:
        landmarks = detector.detect(frame, 0)

    if landmarks is None:
        print("no hand")
        label = "None"
    else:
        fingers = classify_fingers(landmarks)
        features = extract_features(landmarks)
        label = decide_gesture(fingers, features).value
        print(f"fingers: {fingers.describe()}")
        print(
            f"pinch={features.pinch_distance:.3f} scale={features.hand_scale:.3f} "
            f"thumb_dy={features.thumb_offset_y:+.3f} palm=({features.palm_centroid[0]:.3f}, {features.palm_centroid[1]:.3f})"
        )
        print(f"gesture: {label}")

    if args.out:
        draw_hand(frame, landmarks, mirrored=False)
        draw_text(frame, label, (12, 28))
        if not cv2.imwrite(args.out, frame):
            raise RuntimeError(f"Could not write output image: {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
