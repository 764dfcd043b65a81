import pytest

from orrery.objloader import ObjError, load_obj, parse_obj

TRIANGLE = [
    "# a single triangle",
    "v 0 0 0",
    "v 1 0 0",
    "v 0 1 0",
    "vt 0 0",
    "vt 1 0",
    "vt 0 1",
    "vn 0 0 1",
    "f 1/1/1 2/2/1 3/3/1",
]


def test_triangle_vertices_carry_all_attributes():
    mesh = parse_obj(TRIANGLE)
    assert [v.position for v in mesh.vertices] == [
        (0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 0.0),
    ]
    assert all(v.normal == (0.0, 0.0, 1.0) for v in mesh.vertices)
    assert [v.texcoord for v in mesh.vertices] == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]
    assert mesh.indices == [0, 1, 2]


def test_quad_is_split_into_a_fan():
    lines = ["v 0 0 0", "v 1 0 0", "v 1 1 0", "v 0 1 0", "f 1 2 3 4"]
    mesh = parse_obj(lines)
    positions = [v.position for v in mesh.vertices]
    p = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    assert positions == [p[0], p[1], p[2], p[0], p[2], p[3]]
    assert mesh.indices == list(range(6))


def test_missing_normals_and_texcoords_are_zero():
    mesh = parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3"])
    assert all(v.normal == (0.0, 0.0, 0.0) for v in mesh.vertices)
    assert all(v.texcoord == (0.0, 0.0) for v in mesh.vertices)


def test_position_and_normal_without_texcoord():
    lines = ["v 0 0 0", "v 1 0 0", "v 0 1 0", "vn 1 0 0", "f 1//1 2//1 3//1"]
    mesh = parse_obj(lines)
    assert all(v.normal == (1.0, 0.0, 0.0) for v in mesh.vertices)
    assert all(v.texcoord == (0.0, 0.0) for v in mesh.vertices)


def test_negative_indices_are_relative():
    absolute = parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3"])
    relative = parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f -3 -2 -1"])
    assert relative.vertices == absolute.vertices


def test_other_statements_are_ignored():
    lines = ["mtllib x.mtl", "o thing", "g part", "s off", "usemtl m"] + TRIANGLE
    assert parse_obj(lines).vertices == parse_obj(TRIANGLE).vertices


def test_empty_input_gives_empty_mesh():
    mesh = parse_obj([])
    assert mesh.vertices == []
    assert mesh.indices == []


@pytest.mark.parametrize(
    "lines",
    [
        ["v 0 0 0", "f 1 2 3"],
        ["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 0 1 2"],
        ["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1/5 2 3"],
        ["v 0 0 0", "v 1 0 0", "f 1 2"],
        ["v 0 zero 0"],
        ["v 0 0"],
        ["v 0 0 0", "v 1 0 0", "v 0 1 0", "f a b c"],
    ],
)
def test_malformed_input_raises(lines):
    with pytest.raises(ObjError):
        parse_obj(lines)


def test_load_obj_reads_file(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text("\n".join(TRIANGLE) + "\n", encoding="utf-8")
    assert load_obj(path).vertices == parse_obj(TRIANGLE).vertices


def test_load_obj_missing_file(tmp_path):
    with pytest.raises(ObjError):
        load_obj(tmp_path / "absent.obj")