import pytest
from pydantic import ValidationError

from freefall.core.constants import (
    BODIES,
    BODIES_DICT,
    EARTH,
    G,
    LIGHT_SPEED,
    get_body,
)


def test_bodies_registry_is_not_empty():
    """Sanity check that the registry exists and has entries."""
    assert BODIES is not None
    assert len(BODIES) > 0


def test_bodies_dict_no_duplicates():
    """Ensure there are no duplicate names and dict is consistent with the list."""
    names = [b.name.lower() for b in BODIES]
    assert len(names) == len(set(names)), "Duplicate body names found"
    assert set(BODIES_DICT.keys()) == set(names)


def test_earth_schwarzschild_radius():
    """R_s = 2GM/c^2 is just under 9 mm for the Earth."""
    assert EARTH.schwarzschild_radius == pytest.approx(2 * G * EARTH.mass / LIGHT_SPEED**2, rel=1e-12)
    assert EARTH.schwarzschild_radius == pytest.approx(8.87e-3, rel=1e-3)
    assert EARTH.x_0 == pytest.approx(EARTH.radius / EARTH.schwarzschild_radius)


def test_get_body_is_case_insensitive():
    assert get_body("EARTH") is EARTH
    assert get_body("moon").name == "Moon"


def test_get_body_unknown_name():
    with pytest.raises(KeyError, match="Unknown body"):
        get_body("Vulcan")


def test_bodies_are_frozen():
    with pytest.raises(ValidationError):
        EARTH.mass = 1.0
