# src/freefall/geometry/funnel.py
"""
Funnel shape configuration for the Jonsson embedding.

Following R. Jonsson, Gen. Rel. Grav. 33, 1207 (2001), Eqs. 46-47: the
user picks the slope of the funnel wall at the bottom (sin theta_0), the
radius there (r_0) and the proper time represented by one turn around the
funnel (Delta tau). Together with the body's radius and
Schwarzschild radius these fix the three shape constants k, delta and alpha.

A FunnelShape is immutable. Changing a slider means building a new one, which
recomputes every derived constant at once.
"""

import math
from functools import cached_property
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from freefall.core.constants import EARTH, LIGHT_SPEED, CentralBody
from freefall.core.exceptions import InvalidDomain

__all__ = [
    "ShapeParameters",
    "FunnelShape",
    "SLOPE_SINE_RANGE",
    "MIN_PROPER_TIME",
]

# Slider ranges; setters clamp into these.
SLOPE_SINE_RANGE = (0.001, 0.999)
MIN_PROPER_TIME = 1e-3


class ShapeParameters(NamedTuple):
    k: float
    delta: float
    alpha: float
    sqrt_alpha: float


class FunnelShape(BaseModel):
    """
    Shape of the embedding funnel for one central body.

    Attributes:
        slope_sine: sin(theta_0), slope of the wall at the bottom; in (0, 1).
        proper_time_per_revolution: Delta tau, seconds per turn; > 0.
        base_radius: r_0, funnel radius at the body's surface; > 0.
        body_radius: physical radius of the body (m).
        schwarzschild_radius: Schwarzschild radius of the body (m).
    """
    model_config = ConfigDict(frozen=True)

    slope_sine: float = Field(0.8, gt=0.0, lt=1.0)
    proper_time_per_revolution: float = Field(1.0, gt=0.0)
    base_radius: float = Field(1.0, gt=0.0)
    body_radius: float = Field(EARTH.radius, gt=0.0)
    schwarzschild_radius: float = Field(EARTH.schwarzschild_radius, gt=0.0)

    @classmethod
    def create(
        cls,
        slope_sine: float,
        proper_time_per_revolution: float,
        base_radius: float,
        body_physical_radius: float,
        body_schwarzschild_radius: float,
    ) -> "FunnelShape":
        """Validated constructor; raises InvalidDomain instead of a pydantic error."""
        if not 0.0 < slope_sine < 1.0:
            raise InvalidDomain(f"slope_sine must lie in (0, 1), got {slope_sine}")
        if not proper_time_per_revolution > 0.0:
            raise InvalidDomain(
                f"proper_time_per_revolution must be positive, got {proper_time_per_revolution}"
            )
        if not base_radius > 0.0:
            raise InvalidDomain(f"base_radius must be positive, got {base_radius}")
        if not 0.0 < body_schwarzschild_radius < body_physical_radius:
            raise InvalidDomain(
                "The body must be larger than its Schwarzschild radius "
                f"(radius={body_physical_radius}, R_s={body_schwarzschild_radius})"
            )
        return cls(
            slope_sine=slope_sine,
            proper_time_per_revolution=proper_time_per_revolution,
            base_radius=base_radius,
            body_radius=body_physical_radius,
            schwarzschild_radius=body_schwarzschild_radius,
        )

    @classmethod
    def for_body(
        cls,
        body: CentralBody,
        slope_sine: float = 0.8,
        proper_time_per_revolution: float = 1.0,
        base_radius: float = 1.0,
    ) -> "FunnelShape":
        return cls.create(
            slope_sine, proper_time_per_revolution, base_radius,
            body.radius, body.schwarzschild_radius,
        )

    def with_slope(self, slope_sine: float) -> "FunnelShape":
        """Copy with a new slope, clamped into SLOPE_SINE_RANGE."""
        lo, hi = SLOPE_SINE_RANGE
        return self._replace(slope_sine=min(hi, max(lo, float(slope_sine))))

    def with_proper_time(self, proper_time_per_revolution: float) -> "FunnelShape":
        """Copy with a new Delta tau, clamped to at least MIN_PROPER_TIME."""
        value = max(MIN_PROPER_TIME, float(proper_time_per_revolution))
        return self._replace(proper_time_per_revolution=value)

    def _replace(self, **changes) -> "FunnelShape":
        # Rebuild rather than model_copy so cached derived constants are not carried over
        return type(self)(**{**self.model_dump(), **changes})

    # --- Derived constants -------------------------------------------------

    @cached_property
    def x_0(self) -> float:
        """Body radius in Schwarzschild units."""
        return self.body_radius / self.schwarzschild_radius

    @cached_property
    def sqr_x_0(self) -> float:
        return self.x_0**2

    @cached_property
    def a_e0(self) -> float:
        # Exterior metric at the surface (Eq. 14)
        return 1.0 - 1.0 / self.x_0

    @cached_property
    def parameters(self) -> ShapeParameters:
        # Eq. 47
        s = self.slope_sine
        k = (
            self.proper_time_per_revolution * LIGHT_SPEED
            / (2.0 * math.pi * math.sqrt(self.a_e0) * self.schwarzschild_radius)
        )
        delta = (k / (2.0 * s * self.sqr_x_0))**2
        alpha = self.base_radius**2 / (4.0 * self.x_0**4 * s**2 + k**2)
        return ShapeParameters(k, delta, alpha, math.sqrt(alpha))

    @property
    def delta_x_min(self) -> float:
        """
        Lower (exclusive) bound of delta_x where both the radius profile and the
        height integrand are real. The radius alone extends down to
        -delta * x_0^2; the height needs the extra cos^2(theta_0) factor.
        """
        return -self.parameters.delta * self.sqr_x_0 * (1.0 - self.slope_sine**2)

    @property
    def delta_x_max(self) -> float:
        """delta_x at twice the body's radius; upper end of the inverse search."""
        return 2.0 * self.body_radius / self.schwarzschild_radius - self.x_0
