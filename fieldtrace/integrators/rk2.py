# fieldtrace/integrators/rk2.py
"""
Explicit midpoint (RK2) step along a direction field.

    k1 = f(x)
    k2 = f(x + h/2 * k1)
    x_next = x + h * k2
"""

from __future__ import annotations
import numpy as np

from .base import DirectionFn


def rk2_step(x: np.ndarray, h: float, direction_fn: DirectionFn) -> np.ndarray:
    """
    Midpoint Runge-Kutta step.

    Parameters
    ----------
    x : np.ndarray
        Current position, shape (2,)
    h : float
        Step length
    direction_fn : DirectionFn
        Direction field

    Returns
    -------
    np.ndarray
        New position, shape (2,)
    """
    k1 = direction_fn(x)
    k2 = direction_fn(x + 0.5 * h * k1)
    return x + h * k2
