from .actions import DEFAULT_GESTURE_ACTIONS, GestureAction, GestureActionDispatcher, PhotoPicker, pick_nearest
from .config import DEFAULT_CONFIG, PipelineConfig
from .pipeline import GesturePipeline, GesturePipelineState, process_tick
from .types import FingerState, GestureLabel, HandFeatures, LandmarkFrame, TickInput, TickOutput

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_GESTURE_ACTIONS",
    "FingerState",
    "GestureAction",
    "GestureActionDispatcher",
    "GestureLabel",
    "GesturePipeline",
    "GesturePipelineState",
    "HandFeatures",
    "LandmarkFrame",
    "PhotoPicker",
    "PipelineConfig",
    "TickInput",
    "TickOutput",
    "pick_nearest",
    "process_tick",
]
