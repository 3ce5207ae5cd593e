"""
Validated run configuration.

A SimulationConfig is what a YAML file under `configs/` parses into. It picks
the central body, the funnel shape, the geodesic walk and the gravity model
used for free-fall curves. Altitudes in this file are metres above the body's
surface; the physics modules work with radial distances from the centre.
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freefall.core.constants import CentralBody, get_body
from freefall.core.enums import GravityKind
from freefall.core.kinematics import GravityModel
from freefall.core.utils import load_config
from freefall.core.vectors import SpacetimePoint
from freefall.geometry.funnel import FunnelShape
from freefall.geometry.jonsson import JonssonEmbedding

__all__ = [
    "FunnelConfig",
    "WalkConfig",
    "FallConfig",
    "SimulationConfig",
    "load_simulation_config",
]


class FunnelConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    slope_sine: float = Field(0.8, gt=0.0, lt=1.0)
    proper_time_per_revolution: float = Field(1.0, gt=0.0)
    base_radius: float = Field(1.0, gt=0.0)
    n_steps: int = Field(1000, gt=0, description="Simpson subintervals for the height integral")

    @field_validator("n_steps")
    @classmethod
    def even_steps(cls, v):
        if v % 2:
            raise ValueError("n_steps must be even")
        return v


class WalkConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    start: Tuple[float, float] = Field((0.0, 2.6), description="(time s, altitude m) of the first anchor")
    end: Tuple[float, float] = Field((0.001, 2.6), description="(time s, altitude m) of the second anchor")
    max_points: int = Field(50, ge=0)
    tolerance: float = Field(1e-6, gt=0.0)
    max_iterations: int = Field(200, gt=0)


class FallConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    model: GravityKind = GravityKind.CONSTANT
    acceleration: Optional[float] = Field(None, ge=0.0, description="Uniform g; defaults to the body's surface gravity")
    mass: Optional[float] = Field(None, gt=0.0, description="Planet mass; defaults to the body's mass")


class SimulationConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    body: str = "earth"
    funnel: FunnelConfig = FunnelConfig()
    walk: WalkConfig = WalkConfig()
    fall: FallConfig = FallConfig()

    @field_validator("body")
    @classmethod
    def known_body(cls, v):
        try:
            get_body(v)
        except KeyError as exc:
            raise ValueError(str(exc)) from None
        return v

    @property
    def central_body(self) -> CentralBody:
        return get_body(self.body)

    def to_spacetime(self, event: Tuple[float, float]) -> SpacetimePoint:
        """(time, altitude) -> (time, radial distance from the centre)."""
        return SpacetimePoint(event[0], self.central_body.radius + event[1])

    def build_shape(self) -> FunnelShape:
        return FunnelShape.for_body(
            self.central_body,
            slope_sine=self.funnel.slope_sine,
            proper_time_per_revolution=self.funnel.proper_time_per_revolution,
            base_radius=self.funnel.base_radius,
        )

    def build_embedding(self) -> JonssonEmbedding:
        return JonssonEmbedding(self.build_shape(), n_steps=self.funnel.n_steps)

    def build_gravity(self) -> GravityModel:
        body = self.central_body
        if self.fall.model is GravityKind.CONSTANT:
            g = self.fall.acceleration if self.fall.acceleration is not None else body.surface_gravity
            return GravityModel.constant(g)
        return GravityModel.for_planet(self.fall.mass if self.fall.mass is not None else body.mass)


def load_simulation_config(path: Path, overrides: Optional[Iterable[str]] = None) -> SimulationConfig:
    """Read a YAML file (plus dot-notation overrides) into a SimulationConfig."""
    data, _ = load_config(path, overrides)
    return SimulationConfig.model_validate(data)
