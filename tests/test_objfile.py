import pytest

from mcraytrace.core import Ray
from mcraytrace.objfile import (
    ObjError,
    ObjIndex,
    load_obj,
    parse_mtl,
    parse_obj,
)
from mcraytrace.vecmath import Vec2, Vec3

MTL = """\
# test materials
newmtl red
Kd 0.5 0.1 0.1
Ks 0.2 0.2 0.2
map_Kd red.png

newmtl lamp
Ke 4 4 4
"""


def test_parse_mtl_reads_colours_and_textures():
    red, lamp = parse_mtl(MTL)
    assert red.name == "red"
    assert red.diffuse == Vec3(0.5, 0.1, 0.1)
    assert red.specular == Vec3(0.2, 0.2, 0.2)
    assert red.diffuse_texname == "red.png"
    assert red.emission == Vec3()
    assert lamp.name == "lamp"
    assert lamp.emission == Vec3(4.0, 4.0, 4.0)
    assert lamp.diffuse_texname == ""


def test_parse_mtl_single_value_colour_replicates():
    (material,) = parse_mtl("newmtl grey\nKd 0.3\n")
    assert material.diffuse == Vec3(0.3, 0.3, 0.3)


def test_parse_mtl_rejects_bad_number():
    with pytest.raises(ObjError):
        parse_mtl("newmtl x\nKd a b c\n")


def test_parse_obj_simple_triangle():
    model = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    assert model.vertices == [Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0)]
    assert len(model.faces) == 1
    assert model.faces[0].indices == (ObjIndex(0), ObjIndex(1), ObjIndex(2))
    assert model.faces[0].material_id == -1


def test_parse_obj_fan_triangulates_quads():
    model = parse_obj("v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n")
    assert [[c.vertex for c in f.indices] for f in model.faces] == [[0, 1, 2], [0, 2, 3]]


def test_parse_obj_negative_and_slash_indices():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0.5 0.25\nvn 0 0 1\nf -3/1/1 -2//1 -1/1\n"
    model = parse_obj(text)
    a, b, c = model.faces[0].indices
    assert a == ObjIndex(0, 0, 0)
    assert b == ObjIndex(1, -1, 0)
    assert c == ObjIndex(2, 0, -1)
    assert model.texcoords == [Vec2(0.5, 0.25)]
    assert model.normals == [Vec3(0, 0, 1)]


@pytest.mark.parametrize(
    "text",
    [
        "v 0 0 0\nv 1 0 0\nf 1 2 3\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n",
        "v 0 0 0\nv 1 0 0\nf 1 2\n",
        "v 0 0\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1/x 2 3\n",
    ],
)
def test_parse_obj_rejects_malformed(text):
    with pytest.raises(ObjError):
        parse_obj(text)


def test_parse_obj_uses_material_library(tmp_path):
    (tmp_path / "scene.mtl").write_text(MTL)
    text = "mtllib scene.mtl\nv 0 0 0\nv 1 0 0\nv 0 1 0\nusemtl lamp\nf 1 2 3\nusemtl red\nf 3 2 1\n"
    model = parse_obj(text, tmp_path)
    assert [m.name for m in model.materials] == ["red", "lamp"]
    assert [f.material_id for f in model.faces] == [1, 0]
    assert model.warnings == []


def test_parse_obj_missing_library_warns():
    model = parse_obj("mtllib nowhere.mtl\nusemtl ghost\n", None)
    assert len(model.warnings) == 2
    assert any("ghost" in warning for warning in model.warnings)


def test_load_obj_computes_face_normals(tmp_path):
    (tmp_path / "m.mtl").write_text(MTL)
    obj = tmp_path / "tri.obj"
    obj.write_text("mtllib m.mtl\nusemtl red\nv 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    triangles, materials = load_obj(obj)
    assert len(triangles) == len(materials) == 1
    tri = triangles[0]
    assert tri.n0 == tri.n1 == tri.n2
    assert tri.n0.length() == pytest.approx(1.0)
    assert tri.n0.dot(tri.v1 - tri.v0) == pytest.approx(0.0)
    assert tri.n0.dot(tri.v2 - tri.v0) == pytest.approx(0.0)
    assert materials[0].kd == Vec3(0.5, 0.1, 0.1)
    assert materials[0].ks == Vec3(0.2, 0.2, 0.2)
    assert materials[0].roughness == 0.01

    hit = tri.intersect(Ray(Vec3(0.2, 0.2, 1.0), Vec3(0.0, 0.0, -1.0)))
    assert hit is not None
    assert hit.t == pytest.approx(1.0)


def test_load_obj_uses_file_normals(tmp_path):
    (tmp_path / "m.mtl").write_text(MTL)
    obj = tmp_path / "tri.obj"
    obj.write_text("mtllib m.mtl\nusemtl lamp\nv 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 1 0\nf 1//1 2//1 3//1\n")
    triangles, materials = load_obj(obj)
    assert triangles[0].n0 == Vec3(0, 1, 0)
    assert materials[0].ke == Vec3(4.0, 4.0, 4.0)


def test_load_obj_face_without_material(tmp_path):
    obj = tmp_path / "bare.obj"
    obj.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    with pytest.raises(ObjError):
        load_obj(obj)


def test_load_obj_missing_file(tmp_path):
    with pytest.raises(ObjError):
        load_obj(tmp_path / "absent.obj")