# fieldtrace/sources/base.py
"""
Base protocol and shared helpers for 2D electrostatic field sources.

Defines the FieldSource protocol that every primitive and the Composite
satisfy, and the semi-implicit kinematic update shared by movable sources.

All formulas use the 2D (line-charge) convention: a charge q produces
E = q r / |r|^2 and V = -q ln|r|.
"""

from __future__ import annotations
from typing import Protocol, Tuple, Union, runtime_checkable
import numpy as np

Array = np.ndarray
Potential = Union[float, Array]


@runtime_checkable
class FieldSource(Protocol):
    """
    Protocol for electrostatic field sources.

    Read operations accept a single point, shape (2,), or stacked points,
    shape (..., 2), and broadcast over the leading axes.
    """

    def position(self) -> Array:
        """
        Reference position of the source.

        Returns
        -------
        np.ndarray
            Position, shape (2,)
        """
        ...

    def field_at(self, point: Array) -> Array:
        """
        Electric field vector at ``point``.

        Parameters
        ----------
        point : np.ndarray
            Sample positions, shape (2,) or (..., 2)

        Returns
        -------
        np.ndarray
            Field vectors, same shape as ``point``
        """
        ...

    def potential_at(self, point: Array) -> Potential:
        """
        Scalar potential at ``point``.

        Parameters
        ----------
        point : np.ndarray
            Sample positions, shape (2,) or (..., 2)

        Returns
        -------
        float or np.ndarray
            Potential, shape ``point.shape[:-1]``
        """
        ...

    def advance(self, ambient_field: Array, dt: float) -> None:
        """
        Advance the source's kinematic state by ``dt`` under a field
        produced by everything else in the scene.

        Parameters
        ----------
        ambient_field : np.ndarray
            External field sampled at ``position()``, shape (2,)
        dt : float
            Time step
        """
        ...


def semi_implicit_step(
    x: Union[float, Array],
    v: Union[float, Array],
    accel: Union[float, Array],
    dt: float,
) -> Tuple[Union[float, Array], Union[float, Array]]:
    """
    One velocity-Verlet-like step with the acceleration held fixed.

    dv = accel * dt; x += (v + dv/2) * dt; v += dv. The acceleration is
    sampled once at the pre-step state, so this is second order only for
    constant acceleration and is not symplectic.

    Works for linear (position/velocity arrays) and angular
    (angle/angular velocity scalars) state alike.
    """
    dv = accel * dt
    x_next = x + (v + 0.5 * dv) * dt
    v_next = v + dv
    return x_next, v_next


def scalar_or_array(value: Array) -> Potential:
    """Return a Python float for 0-d results, the array otherwise."""
    if np.ndim(value) == 0:
        return float(value)
    return value
