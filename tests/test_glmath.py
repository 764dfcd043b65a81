import math

import numpy as np
import pytest

from orrery.glmath import (
    Vertex,
    identity,
    look_at,
    normalize,
    pack_vertices,
    perspective,
    rotate,
    scale,
    translate,
)


def _apply(m, p):
    return (m @ np.append(np.asarray(p, dtype=float), 1.0))[:3]


def test_identity_leaves_points_alone():
    assert np.allclose(_apply(identity(), (3.0, -2.0, 7.5)), (3.0, -2.0, 7.5))


def test_normalize_gives_unit_length():
    v = normalize((3.0, 4.0, 12.0))
    assert math.isclose(float(np.linalg.norm(v)), 1.0)
    assert np.allclose(np.cross(v, (3.0, 4.0, 12.0)), 0.0)


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize((0.0, 0.0, 0.0))


def test_translate_then_inverse_round_trip():
    offset = (1.5, -2.0, 8.0)
    m = translate(offset) @ translate(tuple(-c for c in offset))
    assert np.allclose(m, identity())
    assert np.allclose(_apply(translate(offset), (0, 0, 0)), offset)


def test_translate_rejects_wrong_shape():
    with pytest.raises(ValueError):
        translate((1.0, 2.0))


@pytest.mark.parametrize("angle", [0.3, 1.2, -2.5])
@pytest.mark.parametrize("axis", [(0, 1, 0), (1, 1, 0), (0.1736, 0.0, 0.9848)])
def test_rotate_is_orthonormal_and_invertible(angle, axis):
    r = rotate(angle, axis)
    assert np.allclose(r[:3, :3] @ r[:3, :3].T, np.eye(3))
    assert math.isclose(float(np.linalg.det(r)), 1.0, rel_tol=1e-9)
    assert np.allclose(r @ rotate(-angle, axis), identity())
    assert np.allclose(_apply(r, axis), axis)


def test_rotate_quarter_turn_about_y():
    r = rotate(math.pi / 2, (0, 1, 0))
    assert np.allclose(_apply(r, (1, 0, 0)), (0, 0, -1))


def test_scale_multiplies_components():
    p = _apply(scale((2.0, 3.0, 0.5)), (1.0, 1.0, 4.0))
    assert np.allclose(p, (2.0, 3.0, 2.0))


def test_look_at_maps_eye_to_origin_and_center_down_negative_z():
    eye = np.array([0.0, 10.0, -16.0])
    center = np.zeros(3)
    view = look_at(eye, center, (0, 1, 0))
    assert np.allclose(_apply(view, eye), 0.0)
    mapped = _apply(view, center)
    assert np.allclose(mapped[:2], 0.0)
    assert math.isclose(mapped[2], -float(np.linalg.norm(center - eye)))
    assert np.allclose(view[:3, :3] @ view[:3, :3].T, np.eye(3))


@pytest.mark.parametrize("near,far", [(0.01, 100.0), (1.0, 10.0)])
def test_perspective_maps_near_and_far_planes_to_ndc_bounds(near, far):
    proj = perspective(math.radians(40.0), 4 / 3, near, far)
    for depth, expected in ((near, -1.0), (far, 1.0)):
        clip = proj @ np.array([0.0, 0.0, -depth, 1.0])
        assert math.isclose(clip[2] / clip[3], expected, rel_tol=1e-9)


def test_perspective_invalid_arguments():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)
    with pytest.raises(ValueError):
        perspective(1.0, 1.0, 5.0, 5.0)


def test_pack_vertices_interleaves_fields():
    verts = [
        Vertex((1.0, 2.0, 3.0), (0.0, 1.0, 0.0), (0.25, 0.75)),
        Vertex((-1.0, 0.5, 2.0), (1.0, 0.0, 0.0), (1.0, 0.0)),
    ]
    packed = pack_vertices(verts)
    assert packed.shape == (2, 8)
    assert packed.dtype == np.float32
    assert np.allclose(packed[1], (-1.0, 0.5, 2.0, 1.0, 0.0, 0.0, 1.0, 0.0))


def test_pack_vertices_empty():
    assert pack_vertices([]).shape == (0, 8)