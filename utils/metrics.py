# utils/metrics.py
import numpy as np


def path_length(trace):
    """Total XY length of a pose trace = sum of Euclidean segment distances."""
    xy = np.asarray(trace, dtype=float)
    if xy.ndim != 2 or len(xy) < 2:
        return 0.0
    steps = np.diff(xy[:, :2], axis=0)
    return float(np.hypot(steps[:, 0], steps[:, 1]).sum())
