import math

import numpy as np
import pytest

from freefall.core.constants import EARTH
from freefall.core.exceptions import InvalidDomain
from freefall.core.vectors import dot, length, normalize
from freefall.geometry.funnel import FunnelShape
from freefall.geometry.jonsson import JonssonEmbedding

R = EARTH.radius


@pytest.fixture
def embedding():
    return JonssonEmbedding()


@pytest.mark.parametrize("slope, tau", [(0.8, 1.0), (0.3, 2.0), (0.95, 0.1)])
def test_radius_decreases_with_height(slope, tau):
    emb = JonssonEmbedding(FunnelShape.for_body(EARTH, slope_sine=slope, proper_time_per_revolution=tau))
    lo = 0.9 * emb.shape.delta_x_min
    radii = [emb.radius_at(x) for x in np.linspace(lo, 1e4, 200)]
    assert np.all(np.diff(radii) < 0)


def test_base_radius_at_surface(embedding):
    assert embedding.radius_at(0.0) == pytest.approx(1.0, rel=1e-9)
    assert embedding.delta_z_at(0.0) == 0.0


def test_height_increases_with_delta_x(embedding):
    heights = [embedding.delta_z_at(x) for x in (0.0, 1.0, 10.0, 100.0, 1000.0)]
    assert np.all(np.diff(heights) > 0)


@pytest.mark.parametrize("delta_x", [0.0, 1.0, 50.0, 1127.0, 5000.0])
def test_height_inversion_round_trip(embedding, delta_x):
    z = embedding.delta_z_at(delta_x)
    assert embedding.delta_x_from_delta_z(z) == pytest.approx(delta_x, abs=1e-5)


@pytest.mark.parametrize("fraction", [1e-4, 0.5, 1.0])
def test_height_inversion_round_trip_up_to_twice_the_body_radius(embedding, fraction):
    delta_x = fraction * embedding.shape.delta_x_max
    z = embedding.delta_z_at(delta_x)
    assert embedding.delta_x_from_delta_z(z) == pytest.approx(delta_x, abs=1e-5)


def test_surface_event_lands_on_the_rim(embedding):
    point = embedding.embedding_point((0.0, embedding.shape.x_0 * EARTH.schwarzschild_radius))
    np.testing.assert_allclose(point, [embedding.radius_at(0.0), 0.0, embedding.delta_z_at(0.0)], atol=1e-6)


def test_time_wraps_around_the_axis(embedding):
    quarter = embedding.embedding_point((0.25, R + 1.0))
    start = embedding.embedding_point((0.0, R + 1.0))
    assert quarter[0] == pytest.approx(0.0, abs=1e-12)
    assert quarter[1] == pytest.approx(start[0])
    assert quarter[2] == start[2]
    full = embedding.embedding_point((1.0, R + 1.0))
    np.testing.assert_allclose(full, start, atol=1e-12)


@pytest.mark.parametrize("delta_x", [0.0, 3.0, 112.7, 1e4])
@pytest.mark.parametrize("theta", [0.0, 1.0, -2.5])
def test_surface_normal_is_unit_and_points_up_and_out(embedding, delta_x, theta):
    n = embedding.surface_normal_at(delta_x, theta)
    assert length(n) == pytest.approx(1.0, abs=1e-9)
    assert n[2] > 0.0
    outward = np.array([math.cos(theta), math.sin(theta), 0.0])
    assert dot(n, outward) > 0.0


def test_surface_normal_is_perpendicular_to_the_profile(embedding):
    p1 = embedding.embedding_point((0.1, R + 1.0))
    p2 = embedding.embedding_point((0.1, R + 1.001))
    n = embedding.surface_normal_at_spacetime((0.1, R + 1.0005))
    assert abs(dot(normalize(p2 - p1), n)) < 1e-4


def test_normal_from_embedded_point_matches_spacetime_normal(embedding):
    event = (0.1, R + 1.0)
    point = embedding.embedding_point(event)
    np.testing.assert_allclose(
        embedding.surface_normal_at_embedding_point(point),
        embedding.surface_normal_at_spacetime(event),
        atol=1e-6,
    )


def test_radial_inside_schwarzschild_radius_rejected(embedding):
    with pytest.raises(InvalidDomain):
        embedding.embedding_point((0.0, 0.5 * EARTH.schwarzschild_radius))


def test_radial_below_funnel_bottom_rejected(embedding):
    with pytest.raises(InvalidDomain):
        embedding.delta_x_from_radial(R - 10.0)
    with pytest.raises(InvalidDomain):
        embedding.radius_at(-2.0 * embedding.parameters.delta * embedding.shape.sqr_x_0)


def test_reconfiguration_swaps_shape(embedding):
    before = embedding.parameters
    embedding.set_slope(0.5)
    assert embedding.shape.slope_sine == 0.5
    assert embedding.parameters.delta != before.delta
    embedding.set_slope(2.0)
    assert embedding.shape.slope_sine == 0.999
    embedding.set_proper_time(0.0)
    assert embedding.shape.proper_time_per_revolution == 1e-3
    assert embedding.angle_from_time(1e-3) == pytest.approx(2.0 * math.pi)


def test_odd_step_count_rejected():
    with pytest.raises(ValueError):
        JonssonEmbedding(n_steps=999)
