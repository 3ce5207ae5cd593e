# freefall/core/enums.py

from enum import Enum

class GravityKind(str, Enum):
    CONSTANT = "constant"
    PLANET = "planet"

class WalkState(str, Enum):
    WALKING = "walking"
    TERMINATED_BOUNDARY = "terminated_boundary"
    TERMINATED_MAXPOINTS = "terminated_maxpoints"

__all__ = [
    "GravityKind",
    "WalkState",
]
