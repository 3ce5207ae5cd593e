# src/freefall/geometry/diagnostics.py
"""
Checks that the embedding really turns free-fall worldlines into geodesics.

Two probes:
- arc length: among trajectories joining the same events under different
  trial masses, the one for the body's true mass should be shortest on the
  funnel;
- turning: a geodesic never turns sideways relative to the surface, so the
  outgoing segment at each point should stay in the plane of the incoming
  segment and the surface normal.
"""

import math
from typing import Dict, Iterable, Sequence

import numpy as np

from freefall.core.constants import CentralBody
from freefall.core.kinematics import GravityModel, find_initial_height, free_fall_points
from freefall.core.logging import logger
from freefall.core.vectors import cross, dot, length, normalize
from freefall.geometry.jonsson import JonssonEmbedding

__all__ = [
    "path_length",
    "turning_angles",
    "path_length_sweep",
]


def path_length(points: np.ndarray) -> float:
    """Sum of Euclidean segment lengths of an (N, D) point sequence."""
    points = np.asarray(points, dtype=np.float64)
    if len(points) < 2:
        return 0.0
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def turning_angles(spacetime_points: Sequence[Sequence[float]], embedding: JonssonEmbedding) -> np.ndarray:
    """
    Signed angle (radians) by which each outgoing segment leaves the plane of
    the incoming segment and the surface normal, for every interior point.
    """
    if len(spacetime_points) < 3:
        return np.zeros(0)
    embedded = [embedding.embedding_point(p) for p in spacetime_points]
    angles = np.empty(len(embedded) - 2)
    for i in range(1, len(embedded) - 1):
        pre, p, post = embedded[i - 1], embedded[i], embedded[i + 1]
        n = embedding.surface_normal_at_spacetime(spacetime_points[i])
        norm_vec = normalize(cross(p - pre, n))
        outgoing = post - p
        sine = dot(outgoing, norm_vec) / length(outgoing)
        angles[i - 1] = math.asin(min(1.0, max(-1.0, sine)))
    return angles


def path_length_sweep(
    embedding: JonssonEmbedding,
    body: CentralBody,
    fall_time: float,
    mass_offsets: Iterable[float],
    n_points: int = 100,
) -> Dict[float, float]:
    """
    Embedded arc length of free-fall arcs that land on the body's surface
    after `fall_time` seconds, for trial masses `body.mass + offset`.

    Returns:
        dict: mass offset -> arc length on the funnel.
    """
    lengths = {}
    for offset in mass_offsets:
        model = GravityModel.for_planet(body.mass + offset)
        peak = find_initial_height(fall_time, body.radius, model)
        pts = free_fall_points(0.0, peak, body.radius, model, n_points)
        lengths[offset] = path_length([embedding.embedding_point(p) for p in pts])
        logger.debug("mass offset {:.4g} kg: peak {:.6f} m, arc length {:.9f}", offset, peak, lengths[offset])
    return lengths
