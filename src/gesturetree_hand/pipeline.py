from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .classifier import decide_gesture
from .config import DEFAULT_CONFIG, PipelineConfig
from .controls import HandScaleTracker, PalmTracker
from .debounce import PinchDebouncer
from .features import extract_features
from .fingers import classify_fingers
from .momentum import RotationMomentum
from .stabilizer import GestureStreak
from .types import GestureLabel, LandmarkFrame, TickInput, TickOutput


@dataclass
class GesturePipelineState:
    """All cross-frame state of one pipeline. Only `process_tick` mutates it."""

    streak: GestureStreak = field(default_factory=GestureStreak)
    palm: PalmTracker = field(default_factory=PalmTracker)
    hand_scale: HandScaleTracker = field(default_factory=HandScaleTracker)
    pinch: PinchDebouncer = field(default_factory=PinchDebouncer)
    momentum: RotationMomentum = field(default_factory=RotationMomentum)

    @classmethod
    def from_config(cls, cfg: PipelineConfig) -> "GesturePipelineState":
        return cls(
            palm=PalmTracker(window=cfg.palm_window, move_threshold=cfg.palm_move_threshold),
            hand_scale=HandScaleTracker(retain=cfg.hand_scale_retain, noise_floor=cfg.zoom_noise_floor),
            pinch=PinchDebouncer(cooldown_s=cfg.pinch_cooldown_s, min_shift=cfg.pinch_min_shift),
            momentum=RotationMomentum(
                decay=cfg.momentum_decay,
                floor=cfg.momentum_floor,
                frame_s=cfg.momentum_frame_s,
                damping=cfg.rotation_damping,
            ),
        )


def _no_hand(state: GesturePipelineState, tick: TickInput) -> TickOutput:
    state.streak.reset()
    state.palm.reset()
    state.hand_scale.reset()
    state.pinch.update(GestureLabel.NONE, False, None)
    rotation = state.momentum.update(GestureLabel.NONE, tick.interaction_locked, tick.elapsed_s)
    return TickOutput(
        raw_gesture=GestureLabel.NONE,
        stable_gesture=None,
        pan_delta=(0.0, 0.0),
        zoom_delta=0.0,
        rotation_speed=rotation,
        pinch_event=None,
        debug_label=None,
    )


def process_tick(
    state: GesturePipelineState,
    tick: TickInput,
    cfg: PipelineConfig = DEFAULT_CONFIG,
) -> TickOutput:
    """
    Advance the pipeline by one detector frame.

    Callers must only pass frames whose video timestamp advanced; the result
    depends on this frame and the state left by the previous call.
    """

    state.pinch.tick(tick.elapsed_s)

    frame: Optional[LandmarkFrame] = tick.landmarks
    if frame is None:
        return _no_hand(state, tick)

    fingers = classify_fingers(frame, cfg)
    features = extract_features(frame, cfg)
    raw = decide_gesture(fingers, features, cfg)

    count = state.streak.update(raw)
    threshold = cfg.stable_frames_for(raw)
    stable = state.streak.is_stable(cfg)

    pan = (0.0, 0.0)
    zoom = 0.0
    if tick.interaction_locked:
        state.palm.reset()
        state.hand_scale.reset()
    else:
        palm_active = raw is GestureLabel.OPEN_PALM
        dx, dy = state.palm.update(features.palm_centroid, tracking=palm_active)
        pan = (dx * tick.pan_speed, dy * tick.pan_speed)
        # zoom waits for a stable palm so a hand passing through doesn't zoom
        if palm_active and stable:
            zoom = state.hand_scale.update(features.hand_scale) * tick.zoom_speed
        else:
            state.hand_scale.reset()

    rotation = state.momentum.update(raw, tick.interaction_locked, tick.elapsed_s)
    pinch_event = state.pinch.update(raw, stable, features.pinch_point)

    debug_label = None
    if cfg.debug_labels:
        debug_label = f"{raw.value} ({count}/{threshold}) {fingers.describe()}"

    return TickOutput(
        raw_gesture=raw,
        stable_gesture=raw if stable else None,
        pan_delta=pan,
        zoom_delta=zoom,
        rotation_speed=rotation,
        pinch_event=pinch_event,
        debug_label=debug_label,
    )


class GesturePipeline:
    """
    Owns one `GesturePipelineState` and its config.

    Not thread safe: share an instance across threads only behind one lock.
    """

    def __init__(self, config: Optional[PipelineConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.state = GesturePipelineState.from_config(self.config)

    def process(self, tick: TickInput) -> TickOutput:
        return process_tick(self.state, tick, self.config)

    def reset(self) -> None:
        self.state = GesturePipelineState.from_config(self.config)
