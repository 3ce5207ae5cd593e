# src/freefall/core/geodesic_walker.py
"""
Discrete geodesic tracing on the Jonsson embedding funnel.

Each new point is found by swinging the previous point about the current one,
around the axis perpendicular to both the incoming segment and the surface
normal. The swing therefore stays in the plane spanned by the incoming
direction and the normal, which is the first-order condition for a curve on a
surface to be a geodesic (no sideways turning relative to the surface). The
swing angle is the one that puts the candidate back on the funnel.

Errors accumulate from step to step; there is no global correction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np

from freefall.core.enums import WalkState
from freefall.core.exceptions import InvalidDomain
from freefall.core.logging import logger
from freefall.core.numerics import bisection_search
from freefall.core.vectors import cross, length, normalize, rotate_around_point_and_vector

if TYPE_CHECKING:
    from freefall.geometry.jonsson import JonssonEmbedding

__all__ = [
    "GeodesicPath",
    "GeodesicWalker",
]


@dataclass(frozen=True)
class GeodesicPath:
    """
    Ordered points of a traced geodesic, embedded coordinates only.

    `points` is a read-only (N, 3) array; `state` tells why the walk stopped.
    """
    points: np.ndarray
    state: WalkState
    requested_points: int = field(default=0)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def hit_boundary(self) -> bool:
        return self.state is WalkState.TERMINATED_BOUNDARY

    @property
    def path_length(self) -> float:
        if len(self.points) < 2:
            return 0.0
        return float(np.sum(np.linalg.norm(np.diff(self.points, axis=0), axis=1)))


class GeodesicWalker:
    """
    Extends a geodesic across a JonssonEmbedding one point at a time.

    State machine: WALKING until either the candidate point falls below the
    funnel's rim (TERMINATED_BOUNDARY, candidate discarded) or the point
    budget is spent (TERMINATED_MAXPOINTS).
    """

    # Swing angles searched: the forward half-turn, never back toward the
    # previous point.
    ANGLE_RANGE = (0.5 * math.pi, 1.5 * math.pi)

    def __init__(self, embedding: JonssonEmbedding, tolerance: float = 1e-6, max_iterations: int = 200):
        """
        Args:
            embedding (JonssonEmbedding): Configured funnel to walk on.
            tolerance (float): Angle bracket width (radians) at which the
                per-step search stops.
            max_iterations (int): Iteration budget for that search.
        """
        self.embedding = embedding
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.state = WalkState.WALKING

    def _radius_mismatch(self, point: np.ndarray) -> float:
        """Funnel radius expected at the point's height minus its actual distance from the axis."""
        actual_radius = math.hypot(point[0], point[1])
        # Below the rim the height is pinned to 0 so the objective stays
        # defined; such a point is never kept (see walk()).
        delta_z = max(0.0, point[2])
        delta_x = self.embedding.delta_x_from_delta_z(delta_z)
        return self.embedding.radius_at(delta_x) - actual_radius

    def next_point(self, ja: np.ndarray, jb: np.ndarray) -> np.ndarray:
        """The point following `jb` on the geodesic arriving from `ja`."""
        n = self.embedding.surface_normal_at_embedding_point(jb)
        incoming = jb - ja
        axis = normalize(cross(incoming, n))
        if length(axis) == 0.0:
            raise InvalidDomain("The incoming segment is degenerate or parallel to the surface normal")
        lo, hi = self.ANGLE_RANGE
        theta = bisection_search(
            0.0, lo, hi, self.tolerance, self.max_iterations,
            lambda angle: self._radius_mismatch(rotate_around_point_and_vector(ja, jb, axis, angle)),
        )
        return rotate_around_point_and_vector(ja, jb, axis, theta)

    def walk(self, a: Sequence[float], b: Sequence[float], max_points: int) -> GeodesicPath:
        """
        Trace the geodesic starting from the spacetime events `a` then `b`.

        Args:
            a, b: Nearby (time, radial) events fixing the start and direction.
            max_points (int): Number of points to add beyond the two anchors.

        Returns:
            GeodesicPath with between 2 and max_points + 2 points.
        """
        if max_points < 0:
            raise ValueError(f"max_points must be non-negative, got {max_points}")
        ja = self.embedding.embedding_point(a)
        jb = self.embedding.embedding_point(b)
        if length(jb - ja) == 0.0:
            raise InvalidDomain(f"Anchor events {tuple(a)} and {tuple(b)} embed to the same point")

        self.state = WalkState.WALKING
        pts = [ja, jb]
        for i_pt in range(max_points):
            jc = self.next_point(ja, jb)
            if jc[2] < 0.0:
                # Left the funnel through its rim at the body's surface
                self.state = WalkState.TERMINATED_BOUNDARY
                logger.debug("Geodesic walk left the embedding after {} new points", i_pt)
                break
            pts.append(jc)
            ja, jb = jb, jc
        else:
            self.state = WalkState.TERMINATED_MAXPOINTS
            logger.debug("Geodesic walk used its full budget of {} points", max_points)

        points = np.array(pts)
        points.flags.writeable = False
        return GeodesicPath(points=points, state=self.state, requested_points=max_points)
