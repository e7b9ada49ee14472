from __future__ import annotations

from .config import DEFAULT_CONFIG, PipelineConfig
from .types import (
    INDEX_MCP,
    INDEX_TIP,
    MIDDLE_MCP,
    PINKY_MCP,
    THUMB_MCP,
    THUMB_TIP,
    WRIST,
    HandFeatures,
    LandmarkFrame,
)
from .utils import mean_point, mirror_x, planar_dist


def extract_features(frame: LandmarkFrame, cfg: PipelineConfig = DEFAULT_CONFIG) -> HandFeatures:
    thumb_tip = frame.xy(THUMB_TIP)
    index_tip = frame.xy(INDEX_TIP)

    pinch_distance = planar_dist(thumb_tip, index_tip)
    palm_centroid = mean_point(
        (float(p[0]), float(p[1])) for p in (frame.xy(WRIST), frame.xy(INDEX_MCP), frame.xy(PINKY_MCP))
    )
    # The camera image is mirrored relative to the screen.
    pinch_point = (
        mirror_x(float(thumb_tip[0] + index_tip[0]) / 2.0),
        float(thumb_tip[1] + index_tip[1]) / 2.0,
    )

    return HandFeatures(
        pinch_distance=pinch_distance,
        is_pinching=pinch_distance < cfg.pinch_distance,
        palm_centroid=palm_centroid,
        hand_scale=planar_dist(frame.xy(WRIST), frame.xy(MIDDLE_MCP)),
        thumb_offset_y=float(thumb_tip[1] - frame.xy(THUMB_MCP)[1]),
        pinch_point=pinch_point,
    )
