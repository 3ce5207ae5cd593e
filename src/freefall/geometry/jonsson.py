# src/freefall/geometry/jonsson.py
"""
The Jonsson embedding of a (time, radius) slice of the exterior Schwarzschild
spacetime as a funnel-shaped surface of revolution in 3D.

Time wraps around the funnel's symmetry axis (one turn per
`proper_time_per_revolution` seconds) and height above the body climbs the
axis. Distances measured along the surface are the proper distances of a
geodesically equivalent Euclidean metric, so free-fall worldlines become
geodesics of the funnel.

Coordinates used throughout:
    delta_x : radial coordinate in Schwarzschild radii, minus x_0
              (0 at the body's surface).
    delta_z : height of the funnel surface along its axis (0 at delta_x = 0).
"""

import math
from typing import Sequence

import numpy as np

from freefall.core.exceptions import InvalidDomain
from freefall.core.logging import logger
from freefall.core.numerics import bisection_search, integrate
from freefall.core.vectors import as_vector, normalize, rotate_xy
from freefall.geometry.funnel import FunnelShape, ShapeParameters

__all__ = [
    "JonssonEmbedding",
]


class JonssonEmbedding:
    """
    Maps spacetime events onto the embedding funnel described by a FunnelShape.

    The shape can be swapped with `set_slope` / `set_proper_time`; each call
    replaces the whole FunnelShape in a single assignment, so the derived
    constants seen by any later query always belong to one configuration.
    Do not reconfigure an instance while another thread is walking on it.
    """

    def __init__(
        self,
        shape: FunnelShape = None,
        n_steps: int = 1000,
        inverse_tolerance: float = 1e-6,
        inverse_max_iterations: int = 100,
    ):
        """
        Args:
            shape (FunnelShape): Funnel configuration; defaults to Earth with
                sin(theta_0) = 0.8, one second per turn and unit base radius.
            n_steps (int): Simpson subintervals for the height integral (even).
            inverse_tolerance (float): Bracket width at which the height
                inversion stops, in delta_x units.
            inverse_max_iterations (int): Iteration budget for that inversion.
        """
        if n_steps <= 0 or n_steps % 2:
            raise ValueError(f"n_steps must be a positive even integer, got {n_steps}")
        self.shape = shape if shape is not None else FunnelShape()
        self.n_steps = n_steps
        self.inverse_tolerance = inverse_tolerance
        self.inverse_max_iterations = inverse_max_iterations

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape!r}, n_steps={self.n_steps})"

    # --- Configuration -----------------------------------------------------

    @property
    def parameters(self) -> ShapeParameters:
        return self.shape.parameters

    def set_slope(self, slope_sine: float) -> None:
        """Set sin(theta_0), clamped into [0.001, 0.999]."""
        self.shape = self.shape.with_slope(slope_sine)
        logger.debug("Funnel slope set to {}", self.shape.slope_sine)

    def set_proper_time(self, proper_time_per_revolution: float) -> None:
        """Set the proper time per turn, clamped to a small positive floor."""
        self.shape = self.shape.with_proper_time(proper_time_per_revolution)
        logger.debug("Funnel proper time per revolution set to {}", self.shape.proper_time_per_revolution)

    # --- Profile of the surface of revolution --------------------------------

    def angle_from_time(self, time: float) -> float:
        """Convert a time in seconds to an angle around the funnel in radians."""
        return 2.0 * math.pi * time / self.shape.proper_time_per_revolution

    def delta_x_from_radial(self, radial: float) -> float:
        """
        Normalised radial offset of a radial coordinate (metres from the centre).

        Raises:
            InvalidDomain: at or inside the Schwarzschild radius, or so far
                below the surface that the funnel is undefined there.
        """
        shape = self.shape
        if radial <= shape.schwarzschild_radius:
            raise InvalidDomain(
                f"radial={radial!r} m is not outside the Schwarzschild radius "
                f"({shape.schwarzschild_radius!r} m)"
            )
        delta_x = radial / shape.schwarzschild_radius - shape.x_0
        if delta_x <= shape.delta_x_min:
            raise InvalidDomain(
                f"radial={radial!r} m lies below the bottom of the embedding funnel"
            )
        return delta_x

    def radius_at(self, delta_x: float) -> float:
        """Funnel radius at `delta_x` (Eq. 48); strictly decreasing in delta_x."""
        p = self.parameters
        u = delta_x / self.shape.sqr_x_0 + p.delta
        if u <= 0.0:
            raise InvalidDomain(f"The funnel radius is undefined at delta_x={delta_x!r}")
        return p.k * p.sqrt_alpha / math.sqrt(u)

    def delta_z_at(self, delta_x: float) -> float:
        """Funnel height at `delta_x`: Simpson integral of Eq. 49 from 0."""
        p = self.parameters
        sqr_x_0 = self.shape.sqr_x_0
        term1 = p.k**2 / (4.0 * self.shape.x_0**4)

        def integrand(xs: np.ndarray) -> np.ndarray:
            term2 = 1.0 / (xs / sqr_x_0 + p.delta)
            return term2 * np.sqrt(1.0 - term1 * term2)

        return p.sqrt_alpha * integrate(0.0, delta_x, self.n_steps, integrand)

    def delta_x_from_delta_z(self, delta_z: float) -> float:
        """
        Inverse of `delta_z_at` on [0, delta_x_max] by bisection. Heights
        outside the range of the funnel come back as the nearest end point.
        """
        return bisection_search(
            delta_z, 0.0, self.shape.delta_x_max,
            self.inverse_tolerance, self.inverse_max_iterations,
            self.delta_z_at,
        )

    # --- Embedding ---------------------------------------------------------

    def embedding_point(self, spacetime_point: Sequence[float]) -> np.ndarray:
        """
        Map a (time, radial) event to its point on the funnel.

        Returns:
            np.ndarray: (x, y, z) with x = r cos(theta), y = r sin(theta),
            z = delta_z.
        """
        time, radial = spacetime_point
        theta = self.angle_from_time(time)
        delta_x = self.delta_x_from_radial(radial)
        radius = self.radius_at(delta_x)
        delta_z = self.delta_z_at(delta_x)
        return as_vector(radius * math.cos(theta), radius * math.sin(theta), delta_z)

    def surface_normal_at(self, delta_x: float, theta: float) -> np.ndarray:
        """
        Unit normal to the funnel at (delta_x, theta), pointing away from the
        axis and upwards.
        """
        p = self.parameters
        shape = self.shape
        u = delta_x / shape.sqr_x_0 + p.delta
        # derivative of Eq. 48 wrt. delta_x
        dr_dx = -p.k * p.sqrt_alpha / (2.0 * shape.sqr_x_0 * u**1.5)
        # integrand of Eq. 49
        dz_dx = p.sqrt_alpha * math.sqrt(1.0 - p.k**2 / (4.0 * shape.x_0**4 * u)) / u
        dz_dr = dz_dx / dr_dx
        normal = normalize(as_vector(-dz_dr, 0.0, 1.0))  # in the XZ plane
        return normalize(rotate_xy(normal, theta))

    def surface_normal_at_spacetime(self, spacetime_point: Sequence[float]) -> np.ndarray:
        time, radial = spacetime_point
        return self.surface_normal_at(self.delta_x_from_radial(radial), self.angle_from_time(time))

    def surface_normal_at_embedding_point(self, point: np.ndarray) -> np.ndarray:
        """Normal at a point already on the funnel; recovers delta_x from its height."""
        delta_x = self.delta_x_from_delta_z(point[2])
        theta = math.atan2(point[1], point[0])
        return self.surface_normal_at(delta_x, theta)

    # --- Geodesics ---------------------------------------------------------

    def geodesic_walk(self, a: Sequence[float], b: Sequence[float], max_points: int):
        """Trace the funnel geodesic through events `a` and `b`; see GeodesicWalker."""
        from freefall.core.geodesic_walker import GeodesicWalker

        return GeodesicWalker(self).walk(a, b, max_points)
