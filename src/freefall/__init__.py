"""
freefall: geodesics of free fall in curved spacetime.

Free-fall kinematics under constant or mass-driven gravity, the Jonsson
embedding of a (time, radius) slice onto a 3D funnel, and a walker that traces
geodesics across that funnel.
"""

__version__ = "0.3.0"

from freefall.core.constants import BODIES, EARTH, CentralBody, get_body
from freefall.core.exceptions import FreefallError, InvalidDomain, LowConfidenceWarning
from freefall.core.geodesic_walker import GeodesicPath, GeodesicWalker
from freefall.core.kinematics import (
    GravityModel,
    find_initial_height,
    free_fall_distance,
    free_fall_time,
)
from freefall.core.vectors import SpacetimePoint
from freefall.geometry.funnel import FunnelShape
from freefall.geometry.jonsson import JonssonEmbedding

__all__ = [
    "BODIES",
    "EARTH",
    "CentralBody",
    "get_body",
    "FreefallError",
    "InvalidDomain",
    "LowConfidenceWarning",
    "GeodesicPath",
    "GeodesicWalker",
    "GravityModel",
    "SpacetimePoint",
    "find_initial_height",
    "free_fall_distance",
    "free_fall_time",
    "FunnelShape",
    "JonssonEmbedding",
]
