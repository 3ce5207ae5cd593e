"""
Physical constants and the registry of central bodies.

This file is the single source of truth for the numbers that scale every
free-fall and embedding computation: Newton's constant and the speed of light
(taken from CODATA via `scipy.constants`) and the bodies whose gravity we
visualise.

Exports:
    - G, LIGHT_SPEED: Fundamental constants (SI).
    - CentralBody: Pydantic model for a gravitating body.
    - BODIES: The canonical list of bodies.
    - BODIES_DICT: Dictionary mapping lower-case names to CentralBody objects.
    - EARTH, MOON, SUN: Convenience handles.
    - EARTH_SURFACE_GRAVITY: Rounded surface gravity used by the constant-g diagrams.
    - get_body: Lookup by name.
"""

from functools import cached_property
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field
from scipy import constants as _codata

__all__ = [
    "G",
    "LIGHT_SPEED",
    "EARTH_SURFACE_GRAVITY",
    "CentralBody",
    "BODIES",
    "BODIES_DICT",
    "EARTH",
    "MOON",
    "SUN",
    "get_body",
]

# --- Fundamental constants (SI) ---
G = _codata.G                 # m^3 kg^-1 s^-2
LIGHT_SPEED = _codata.c       # m/s

EARTH_SURFACE_GRAVITY = 9.8   # m/s^2


class CentralBody(BaseModel):
    """A spherically symmetric gravitating body."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical name (used as key)")
    mass: float = Field(..., gt=0.0, description="Mass in kg")
    radius: float = Field(..., gt=0.0, description="Mean physical radius in m")
    surface_gravity: float = Field(..., gt=0.0, description="Nominal surface gravity in m/s^2")
    description: str = Field("", description="Brief description")

    @cached_property
    def mu(self) -> float:
        """Standard gravitational parameter GM."""
        return G * self.mass

    @cached_property
    def schwarzschild_radius(self) -> float:
        return 2.0 * G * self.mass / LIGHT_SPEED**2

    @cached_property
    def x_0(self) -> float:
        """Physical radius in units of the Schwarzschild radius."""
        return self.radius / self.schwarzschild_radius

    def __str__(self) -> str:
        return (
            f"{self.name}: M={self.mass:.6g} kg, R={self.radius:.6g} m, "
            f"g={self.surface_gravity:.4g} m/s^2, R_s={self.schwarzschild_radius:.6g} m"
        )


# === Canonical registry ===
BODIES: List[CentralBody] = [
    CentralBody(
        name="Earth",
        mass=5.972e24,
        radius=6.371e6,
        surface_gravity=EARTH_SURFACE_GRAVITY,
        description="Default body for all diagrams",
    ),
    CentralBody(
        name="Moon",
        mass=7.342e22,
        radius=1.7374e6,
        surface_gravity=1.62,
        description="Weak-field comparison body",
    ),
    CentralBody(
        name="Sun",
        mass=1.98847e30,
        radius=6.957e8,
        surface_gravity=274.0,
        description="Strong-field comparison body",
    ),
]

BODIES_DICT: Dict[str, CentralBody] = {body.name.lower(): body for body in BODIES}

EARTH = BODIES_DICT["earth"]
MOON = BODIES_DICT["moon"]
SUN = BODIES_DICT["sun"]


def get_body(name: str) -> CentralBody:
    """Return the registered body called `name` (case-insensitive)."""
    try:
        return BODIES_DICT[name.lower()]
    except KeyError:
        raise KeyError(
            f"Unknown body '{name}'. Known bodies: {', '.join(b.name for b in BODIES)}"
        ) from None
