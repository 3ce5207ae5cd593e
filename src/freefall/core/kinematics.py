# src/freefall/core/kinematics.py
"""
Free-fall kinematics under constant or mass-driven gravity.

Two gravity models share one API:

- constant acceleration `g`: heights are any coordinate along the field line;
- a point mass M: heights are radial distances from the body's centre and the
  fall follows the radial infall relation

      t(H -> h) = sqrt(H^3 / 2GM) * ( sqrt(x (1 - x)) + asin(sqrt(1 - x)) ),  x = h / H

  which is both the Newtonian fall time and the Schwarzschild proper time of a
  radial geodesic released from rest at H. Heights must stay outside the
  Schwarzschild radius.

Everything is a pure function of its arguments; a GravityModel is immutable.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from freefall.core.constants import CentralBody, G, LIGHT_SPEED
from freefall.core.enums import GravityKind
from freefall.core.exceptions import InvalidDomain
from freefall.core.numerics import bisection_search
from freefall.core.vectors import SpacetimePoint

__all__ = [
    "GravityModel",
    "SpacetimePoint",
    "free_fall_time",
    "free_fall_distance",
    "find_initial_height",
    "free_fall_points",
    "parabolic_trajectory",
]

# Height searches run until the bracket cannot be halved in floating point,
# so the answer is as precise relative to the drop as to the peak. The budget
# covers halving any double-precision bracket down to adjacent floats.
_BISECT_MAX_ITERATIONS = 1100
_MAX_BRACKET_DOUBLINGS = 200


class GravityModel(BaseModel):
    """
    Either a uniform field of strength `acceleration` or the field of a point
    mass `mass`. Build with `GravityModel.constant` or `GravityModel.for_planet`.
    """
    model_config = ConfigDict(frozen=True)

    kind: GravityKind
    acceleration: Optional[float] = Field(None, ge=0.0, description="Uniform g in m/s^2")
    mass: Optional[float] = Field(None, gt=0.0, description="Central mass in kg")

    @classmethod
    def constant(cls, g: float) -> "GravityModel":
        if not math.isfinite(g) or g < 0.0:
            raise InvalidDomain(f"Constant gravity must be finite and non-negative, got {g}")
        return cls(kind=GravityKind.CONSTANT, acceleration=float(g))

    @classmethod
    def for_planet(cls, mass: float) -> "GravityModel":
        if not math.isfinite(mass) or mass <= 0.0:
            raise InvalidDomain(f"Planet mass must be finite and positive, got {mass}")
        return cls(kind=GravityKind.PLANET, mass=float(mass))

    @classmethod
    def for_body(cls, body: CentralBody) -> "GravityModel":
        return cls.for_planet(body.mass)

    @property
    def is_constant(self) -> bool:
        return self.kind is GravityKind.CONSTANT

    @property
    def mu(self) -> float:
        return G * self.mass

    @property
    def schwarzschild_radius(self) -> float:
        """Zero for a uniform field, which has no horizon."""
        if self.is_constant:
            return 0.0
        return 2.0 * G * self.mass / LIGHT_SPEED**2


def _fall_time_from_drop(peak: float, drop: float, mu: float) -> float:
    """Radial fall time from rest at `peak` down through a distance `drop`."""
    one_minus_x = min(max(drop / peak, 0.0), 1.0)
    x = 1.0 - one_minus_x
    return math.sqrt(peak**3 / (2.0 * mu)) * (
        math.sqrt(x * one_minus_x) + math.asin(math.sqrt(one_minus_x))
    )


def _check_outside_horizon(height: float, model: GravityModel, label: str) -> None:
    rs = model.schwarzschild_radius
    if height <= rs:
        raise InvalidDomain(
            f"{label}={height!r} m is not outside the Schwarzschild radius ({rs!r} m)"
        )


def _check_elapsed(elapsed_time: float) -> None:
    if not math.isfinite(elapsed_time) or elapsed_time < 0.0:
        raise InvalidDomain(f"elapsed_time must be finite and non-negative, got {elapsed_time}")


def free_fall_time(peak_height: float, min_height: float, model: GravityModel) -> float:
    """
    Time to fall from rest at `peak_height` down to `min_height`.

    Raises:
        InvalidDomain: `peak_height <= min_height`, a uniform field with g = 0
            (nothing ever falls), or a planet-model height inside the
            Schwarzschild radius.
    """
    if peak_height <= min_height:
        raise InvalidDomain(
            f"peak_height ({peak_height}) must be above min_height ({min_height})"
        )
    if model.is_constant:
        if model.acceleration == 0.0:
            raise InvalidDomain("Nothing falls in a zero-gravity frame")
        return math.sqrt(2.0 * (peak_height - min_height) / model.acceleration)

    _check_outside_horizon(min_height, model, "min_height")
    return _fall_time_from_drop(peak_height, peak_height - min_height, model.mu)


def free_fall_distance(elapsed_time: float, peak_height: float, model: GravityModel) -> float:
    """
    Distance fallen after `elapsed_time` seconds from rest at `peak_height`.

    For the planet model there is no closed form, so the fall-time relation is
    inverted by bisection over the distance fallen.

    Raises:
        InvalidDomain: negative elapsed time, or (planet model) a start height
            inside the Schwarzschild radius, or an elapsed time long enough to
            carry the body past it.
    """
    _check_elapsed(elapsed_time)
    if elapsed_time == 0.0:
        return 0.0
    if model.is_constant:
        return 0.5 * model.acceleration * elapsed_time**2

    _check_outside_horizon(peak_height, model, "peak_height")
    mu = model.mu
    max_drop = peak_height - model.schwarzschild_radius
    if elapsed_time > _fall_time_from_drop(peak_height, max_drop, mu):
        raise InvalidDomain(
            f"After {elapsed_time} s a body released at {peak_height} m has crossed "
            f"the Schwarzschild radius"
        )
    return bisection_search(
        elapsed_time, 0.0, max_drop,
        0.0, _BISECT_MAX_ITERATIONS,
        lambda drop: _fall_time_from_drop(peak_height, drop, mu),
    )


def find_initial_height(elapsed_time: float, final_height: float, model: GravityModel) -> float:
    """
    Height a body must have been released from, at rest, to reach
    `final_height` after falling for `elapsed_time` seconds.

    The planet model brackets the drop (growing the upper end until the fall
    takes long enough) and bisects the fall-time relation.
    """
    _check_elapsed(elapsed_time)
    if elapsed_time == 0.0:
        return final_height
    if model.is_constant:
        return final_height + 0.5 * model.acceleration * elapsed_time**2

    _check_outside_horizon(final_height, model, "final_height")
    mu = model.mu

    def fall_time_for_drop(drop: float) -> float:
        return _fall_time_from_drop(final_height + drop, drop, mu)

    # Surface-gravity guess, then double until the bracket holds the root
    drop_hi = max(mu / final_height**2 * elapsed_time**2, 1.0)
    for _ in range(_MAX_BRACKET_DOUBLINGS):
        if fall_time_for_drop(drop_hi) >= elapsed_time:
            break
        drop_hi *= 2.0
    drop = bisection_search(
        elapsed_time, 0.0, drop_hi,
        0.0, _BISECT_MAX_ITERATIONS,
        fall_time_for_drop,
    )
    return final_height + drop


def free_fall_points(
    peak_time: float,
    peak_height: float,
    min_height: float,
    model: GravityModel,
    n_points: int = 100,
) -> np.ndarray:
    """
    Sample the trajectory that rises from `min_height`, peaks at
    (`peak_time`, `peak_height`) and falls back again.

    Returns:
        np.ndarray: (2 * n_points + 1, 2) array of (time, height) rows ordered
        by time.
    """
    if n_points < 1:
        raise ValueError(f"n_points must be at least 1, got {n_points}")
    fall_time = free_fall_time(peak_height, min_height, model)
    pts = np.empty((2 * n_points + 1, 2))
    # Rising half, then the falling half including the peak
    for i in range(n_points):
        t = peak_time - fall_time + i * fall_time / n_points
        pts[i] = (t, peak_height - free_fall_distance(peak_time - t, peak_height, model))
    for i in range(n_points + 1):
        t = peak_time + i * fall_time / n_points
        pts[n_points + i] = (t, peak_height - free_fall_distance(t - peak_time, peak_height, model))
    return pts


def parabolic_trajectory(
    start: Sequence[float],
    end: Sequence[float],
    frame_acceleration: float,
    n_points: int = 100,
) -> np.ndarray:
    """
    The free-fall path between two (time, height) events as seen from a frame
    accelerating upwards at `frame_acceleration` (m/s^2). With zero
    acceleration the path is a straight line.

    Returns:
        np.ndarray: (n_points + 1, 2) array of (time, height) rows from
        `start` to `end`.
    """
    t1, h1 = float(start[0]), float(start[1])
    t2, h2 = float(end[0]), float(end[1])
    if t1 == t2:
        raise InvalidDomain("A free-fall path cannot join two simultaneous events")
    if n_points < 1:
        raise ValueError(f"n_points must be at least 1, got {n_points}")
    duration = t2 - t1
    v0 = (h2 - h1) / duration + 0.5 * frame_acceleration * duration
    ts = np.linspace(t1, t2, n_points + 1)
    dt = ts - t1
    hs = h1 + v0 * dt - 0.5 * frame_acceleration * dt**2
    return np.column_stack((ts, hs))
