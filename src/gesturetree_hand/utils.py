from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


def planar_dist(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance using only x/y; MediaPipe z is too noisy for shape tests."""
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def mean_point(points: Iterable[Tuple[float, float]]) -> Tuple[float, float]:
    arr = np.asarray(list(points), dtype=np.float64)
    if arr.size == 0:
        return (0.0, 0.0)
    m = arr.mean(axis=0)
    return (float(m[0]), float(m[1]))


def mirror_x(x: float) -> float:
    return 1.0 - x
