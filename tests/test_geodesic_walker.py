import math

import numpy as np
import pytest

from freefall.core.constants import EARTH
from freefall.core.enums import WalkState
from freefall.core.exceptions import InvalidDomain
from freefall.core.geodesic_walker import GeodesicWalker
from freefall.core.vectors import cross, dot, normalize
from freefall.geometry.jonsson import JonssonEmbedding

R = EARTH.radius
A = (0.0, R + 2.6)
B = (0.001, R + 2.6)


@pytest.fixture(scope="module")
def embedding():
    return JonssonEmbedding()


@pytest.fixture(scope="module")
def short_walk(embedding):
    return GeodesicWalker(embedding).walk(A, B, 5)


def test_zero_budget_returns_the_anchors(embedding):
    path = embedding.geodesic_walk(A, B, 0)
    assert len(path) == 2
    np.testing.assert_array_equal(path.points[0], embedding.embedding_point(A))
    np.testing.assert_array_equal(path.points[1], embedding.embedding_point(B))
    assert path.state is WalkState.TERMINATED_MAXPOINTS


def test_walk_respects_the_point_budget(short_walk):
    assert 2 <= len(short_walk) <= 7
    if len(short_walk) < 7:
        assert short_walk.hit_boundary
    else:
        assert short_walk.state is WalkState.TERMINATED_MAXPOINTS
    assert short_walk.requested_points == 5


def test_walk_never_goes_below_the_rim(short_walk):
    assert np.all(short_walk.points[:, 2] >= 0.0)


def test_points_are_read_only(short_walk):
    with pytest.raises(ValueError):
        short_walk.points[0, 0] = 1.0


def test_steps_keep_their_length(short_walk):
    """Each new point is a rotation of the previous one about the current one."""
    steps = np.linalg.norm(np.diff(short_walk.points, axis=0), axis=1)
    np.testing.assert_allclose(steps, steps[0], rtol=1e-9)
    assert short_walk.path_length == pytest.approx(steps.sum())


def test_new_points_lie_on_the_funnel(embedding, short_walk):
    for point in short_walk.points[2:]:
        delta_x = embedding.delta_x_from_delta_z(point[2])
        assert math.hypot(point[0], point[1]) == pytest.approx(embedding.radius_at(delta_x), abs=1e-6)


def test_steps_do_not_turn_sideways(embedding, short_walk):
    pts = short_walk.points
    for ja, jb, jc in zip(pts[:-2], pts[1:-1], pts[2:]):
        n = embedding.surface_normal_at_embedding_point(jb)
        axis = normalize(cross(jb - ja, n))
        assert dot(jc - jb, axis) == pytest.approx(0.0, abs=1e-12)


def test_walk_down_a_meridian_leaves_through_the_rim(embedding):
    path = GeodesicWalker(embedding).walk((0.0, R + 0.5), (0.0, R + 0.4), 50)
    assert path.hit_boundary
    assert len(path) < 52
    assert np.all(path.points[:, 2] >= 0.0)
    # Stays in the starting meridian plane
    np.testing.assert_allclose(path.points[:, 1], 0.0, atol=1e-9)


def test_coincident_anchors_rejected(embedding):
    with pytest.raises(InvalidDomain):
        embedding.geodesic_walk(A, A, 3)


def test_negative_budget_rejected(embedding):
    with pytest.raises(ValueError):
        embedding.geodesic_walk(A, B, -1)
