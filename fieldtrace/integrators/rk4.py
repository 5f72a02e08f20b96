# fieldtrace/integrators/rk4.py

from __future__ import annotations
from typing import Tuple
import numpy as np

from .base import DirectionFn

Stages = Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]


def rk4_stages(x: np.ndarray, h: float, direction_fn: DirectionFn) -> Stages:
    """
    Classic RK4 stage vectors at step length ``h``.

    Parameters
    ----------
    x : (2,) position
    h : step length
    direction_fn : callable(point) -> direction

    Returns
    -------
    (k1, k2, k3, k4), each (2,)
    """
    k1 = direction_fn(x)
    k2 = direction_fn(x + 0.5 * h * k1)
    k3 = direction_fn(x + 0.5 * h * k2)
    k4 = direction_fn(x + h * k3)
    return k1, k2, k3, k4


def rk4_combine(x: np.ndarray, h: float, stages: Stages) -> np.ndarray:
    k1, k2, k3, k4 = stages
    return x + h / 6.0 * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


def rk4_error(stages: Stages) -> float:
    """
    Local error proxy |k1 - 4 k2 + 2 k3 + k4| / 6.

    Vanishes for directions that are constant or vary linearly along the
    step, so it measures the curvature the step has to follow. NaN stages
    give a NaN error.
    """
    k1, k2, k3, k4 = stages
    e = k1 - 4.0 * k2 + 2.0 * k3 + k4
    return float(np.sqrt(e[0] * e[0] + e[1] * e[1]) / 6.0)


def rk4_step(x: np.ndarray, h: float, direction_fn: DirectionFn) -> np.ndarray:
    """
    Runge-Kutta 4 step.

    Parameters
    ----------
    x : (2,) position
    h : step length
    direction_fn : callable(point) -> direction

    Returns
    -------
    x_next : (2,) next position
    """
    return rk4_combine(x, h, rk4_stages(x, h, direction_fn))
