from __future__ import annotations

from .config import DEFAULT_CONFIG, PipelineConfig
from .types import (
    INDEX_MCP,
    INDEX_PIP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_PIP,
    MIDDLE_TIP,
    PINKY_MCP,
    PINKY_PIP,
    PINKY_TIP,
    RING_MCP,
    RING_PIP,
    RING_TIP,
    THUMB_IP,
    THUMB_TIP,
    WRIST,
    FingerState,
    LandmarkFrame,
)
from .utils import planar_dist


def _is_curled(frame: LandmarkFrame, tip: int, pip: int, mcp: int, cfg: PipelineConfig) -> bool:
    wrist_xy = frame.xy(WRIST)
    tip_xy = frame.xy(tip)
    pip_xy = frame.xy(pip)
    mcp_xy = frame.xy(mcp)

    mcp_to_wrist = planar_dist(mcp_xy, wrist_xy)
    if mcp_to_wrist < cfg.min_denominator:
        return True

    # Primary test: an extended fingertip reaches well past its knuckle.
    if planar_dist(tip_xy, wrist_xy) < mcp_to_wrist * cfg.reach_ratio:
        return True

    # Severe bend: tip folded back onto its own knuckle.
    return planar_dist(tip_xy, mcp_xy) < planar_dist(pip_xy, mcp_xy) * cfg.severe_bend_ratio


def _thumb_extended(frame: LandmarkFrame, cfg: PipelineConfig) -> bool:
    palm_width = planar_dist(frame.xy(INDEX_MCP), frame.xy(PINKY_MCP))
    if palm_width < cfg.min_denominator:
        return False

    tip_xy = frame.xy(THUMB_TIP)
    reach = planar_dist(tip_xy, frame.xy(PINKY_MCP))
    # Catches a thumb that is splayed out but curled at the IP joint.
    curled = planar_dist(tip_xy, frame.xy(THUMB_IP)) < palm_width * cfg.thumb_curl_ratio
    return reach > palm_width * cfg.thumb_reach_ratio and not curled


def classify_fingers(frame: LandmarkFrame, cfg: PipelineConfig = DEFAULT_CONFIG) -> FingerState:
    return FingerState(
        thumb=_thumb_extended(frame, cfg),
        index=not _is_curled(frame, INDEX_TIP, INDEX_PIP, INDEX_MCP, cfg),
        middle=not _is_curled(frame, MIDDLE_TIP, MIDDLE_PIP, MIDDLE_MCP, cfg),
        ring=not _is_curled(frame, RING_TIP, RING_PIP, RING_MCP, cfg),
        pinky=not _is_curled(frame, PINKY_TIP, PINKY_PIP, PINKY_MCP, cfg),
    )
