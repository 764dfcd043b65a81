import math

import numpy as np
import pytest

from orrery.glmath import identity, rotate, scale, translate
from orrery.scene import BODIES, Orbit, compute_transforms, ship_model, update_scene


def test_orbit_expands_single_values():
    orbit = Orbit(4.0, (3.8, 0.0, 0.0), 0.1, 0.4)
    assert orbit.speed == (4.0, 4.0, 4.0)
    assert orbit.size == (0.4, 0.4, 0.4)
    assert orbit.rotation_axis == (0.0, 1.0, 0.0)


def test_orbit_rejects_wrong_length():
    with pytest.raises(ValueError):
        Orbit((1.0, 2.0), 0.0, 0.0, 1.0)


def test_compute_transforms_at_time_zero():
    orbit = Orbit(0.5, (8.0, 0.0, 8.0), 1.0, (1.0, 2.0, 3.0))
    tmat, rmat, smat = compute_transforms(0.0, orbit)
    np.testing.assert_allclose(tmat, translate((8.0, 0.0, 0.0)))
    np.testing.assert_allclose(rmat, identity())
    np.testing.assert_allclose(smat, scale((1.0, 2.0, 3.0)))


def test_compute_transforms_follows_formula():
    orbit = Orbit((1.0, 2.0, 3.0), (4.0, 5.0, 6.0), 0.7, 1.0, (0.0, 0.0, 1.0))
    t = 1.3
    tmat, rmat, _ = compute_transforms(t, orbit)
    expected = (math.cos(t) * 4.0, math.sin(2.0 * t) * 5.0, math.sin(3.0 * t) * 6.0)
    np.testing.assert_allclose(tmat[:3, 3], expected)
    np.testing.assert_allclose(rmat, rotate(0.7 * t, (0.0, 0.0, 1.0)))


@pytest.mark.parametrize("t", [0.0, 1.0, 12.5])
def test_sun_stays_at_origin(t):
    models = update_scene(t)
    np.testing.assert_allclose(models["sun"][:3, 3], (0.0, 0.0, 0.0), atol=1e-12)


@pytest.mark.parametrize("t", [0.0, 2.3])
def test_children_are_composed_with_parent(t):
    models = update_scene(t)
    for name, parent, orbit in BODIES:
        if parent is None:
            continue
        tmat, rmat, smat = compute_transforms(t, orbit)
        np.testing.assert_allclose(models[name], models[parent] @ tmat @ rmat @ smat)


def test_scene_has_every_body_and_the_ship():
    models = update_scene(0.5)
    assert set(models) == {name for name, _, _ in BODIES} | {"ship"}


def test_mercury_position_relative_to_sun():
    models = update_scene(0.0)
    local = np.array([3.8, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(models["mercury"][:, 3], models["sun"] @ local)


@pytest.mark.parametrize("t", [0.4, 1.0, 2.0, 4.0])
def test_ship_position_and_facing(t):
    model = ship_model(t)
    pos = model[:3, 3]
    np.testing.assert_allclose(pos, (0.0, 5.0 * math.sin(t), 5.0 * math.sin(t)), atol=1e-12)
    x_axis = model[:3, 0]
    np.testing.assert_allclose(x_axis / np.linalg.norm(x_axis), pos / np.linalg.norm(pos))
    np.testing.assert_allclose(np.linalg.norm(model[:3, :3], axis=0), [0.04] * 3)


def test_ship_at_sun_is_finite():
    model = ship_model(0.0)
    assert np.all(np.isfinite(model))
    np.testing.assert_allclose(model[:3, 3], (0.0, 0.0, 0.0), atol=1e-12)