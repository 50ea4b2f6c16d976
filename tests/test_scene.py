import pytest
from PIL import Image as PILImage

from mcraytrace.core import Ray
from mcraytrace.objfile import ObjError, ObjMaterial
from mcraytrace.primitive import LinearIntersector
from mcraytrace.scene import Scene
from mcraytrace.vecmath import Vec2, Vec3

MTL = """\
newmtl white
Kd 0.8 0.8 0.8
Ks 0 0 0
newmtl light
Kd 0 0 0
Ke 17 12 4
"""

TRIANGLE = """\
mtllib scene.mtl
v 0 0 0
v 1 0 0
v 0 1 0
usemtl white
f 1 2 3
"""


def _write(tmp_path, obj_text, mtl_text=MTL):
    (tmp_path / "scene.mtl").write_text(mtl_text)
    obj = tmp_path / "scene.obj"
    obj.write_text(obj_text)
    return obj


def _png(path, colour):
    PILImage.new("RGBA", (1, 1), colour).save(path)


def test_single_triangle_gets_its_material(tmp_path):
    scene = Scene()
    scene.load_obj(_write(tmp_path, TRIANGLE))
    assert len(scene.primitives) == 1
    assert len(scene.materials) == 2
    assert scene.material_ids == [0]
    assert scene.primitives[0].material is scene.materials[0]
    assert scene.materials[0].kd == Vec3(0.8, 0.8, 0.8)
    assert scene.primitives[0].has_emission() is False


def test_emissive_material(tmp_path):
    text = TRIANGLE.replace("usemtl white", "usemtl light")
    scene = Scene()
    scene.load_obj(_write(tmp_path, text))
    assert scene.primitives[0].material.ke == Vec3(17.0, 12.0, 4.0)
    assert scene.primitives[0].has_emission() is True


def test_face_normal_used_without_vertex_normals(tmp_path):
    scene = Scene()
    scene.load_obj(_write(tmp_path, TRIANGLE))
    tri = scene.triangles[0]
    assert tri.n0 == Vec3(0.0, 0.0, 1.0)
    assert tri.n0 == tri.n1 == tri.n2


def test_vertex_normals_are_kept(tmp_path):
    text = TRIANGLE.replace("f 1 2 3", "vn 0 1 0\nf 1//1 2//1 3//1")
    scene = Scene()
    scene.load_obj(_write(tmp_path, text))
    tri = scene.triangles[0]
    assert tri.n0 == tri.n1 == tri.n2 == Vec3(0.0, 1.0, 0.0)


def test_default_texcoords_without_vt(tmp_path):
    scene = Scene()
    scene.load_obj(_write(tmp_path, TRIANGLE))
    tri = scene.triangles[0]
    assert (tri.t0, tri.t1, tri.t2) == (Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0))


def test_texcoords_are_flipped_vertically(tmp_path):
    text = TRIANGLE.replace("f 1 2 3", "vt 0.25 0.25\nvt 1 1\nvt 0 0\nf 1/1 2/2 3/3")
    scene = Scene()
    scene.load_obj(_write(tmp_path, text))
    tri = scene.triangles[0]
    assert tri.t0 == Vec2(0.25, 0.75)
    assert tri.t1 == Vec2(1.0, 0.0)
    assert tri.t2 == Vec2(0.0, 1.0)


def test_quad_becomes_two_primitives(tmp_path):
    text = TRIANGLE.replace("f 1 2 3", "v 1 1 0\nf 1 2 4 3")
    scene = Scene()
    scene.load_obj(_write(tmp_path, text))
    assert len(scene.primitives) == 2
    assert len(scene.triangles) == len(scene.material_ids) == 2


def test_textures_are_shared_between_materials(tmp_path):
    _png(tmp_path / "tex.png", (255, 0, 0, 255))
    mtl = "newmtl a\nKd 1 1 1\nmap_Kd tex.png\nnewmtl b\nmap_Kd tex.png\n"
    scene = Scene()
    scene.load_obj(_write(tmp_path, TRIANGLE.replace("usemtl white", "usemtl a"), mtl))
    assert len(scene.textures) == 1
    assert scene.materials[0].kd_tex is scene.materials[1].kd_tex
    assert scene.materials[0].kd_tex.fetch(Vec2(0.5, 0.5)) == (1.0, 0.0, 0.0, 1.0)
    assert scene.materials[0].ks_tex is None


def test_missing_texture_file_raises(tmp_path):
    mtl = "newmtl white\nmap_Kd absent.png\n"
    with pytest.raises(OSError):
        Scene().load_obj(_write(tmp_path, TRIANGLE, mtl))


def test_missing_obj_file_raises(tmp_path):
    with pytest.raises(ObjError):
        Scene().load_obj(tmp_path / "nothing.obj")


def test_face_without_material_raises(tmp_path):
    text = TRIANGLE.replace("usemtl white\n", "")
    scene = Scene()
    with pytest.raises(ObjError):
        scene.load_obj(_write(tmp_path, text))
    assert scene.primitives == []


def test_partial_normals_raise(tmp_path):
    text = TRIANGLE.replace("f 1 2 3", "vn 0 1 0\nf 1//1 2 3")
    with pytest.raises(ObjError):
        Scene().load_obj(_write(tmp_path, text))


def test_degenerate_face_raises(tmp_path):
    text = TRIANGLE.replace("v 0 1 0", "v 2 0 0")
    with pytest.raises(ObjError):
        Scene().load_obj(_write(tmp_path, text))


def test_load_material_with_unloaded_texture(tmp_path):
    scene = Scene()
    with pytest.raises(KeyError):
        scene.load_material(ObjMaterial("m", diffuse_texname="tex.png"), tmp_path)


def test_load_material_copies_colours(tmp_path):
    source = ObjMaterial("m", diffuse=Vec3(0.1, 0.2, 0.3), emission=Vec3(1.0, 1.0, 1.0))
    material = Scene().load_material(source, tmp_path)
    assert material.kd == source.diffuse
    assert material.ke == source.emission
    assert material.kd_tex is None


def test_primitives_are_hit_by_rays(tmp_path):
    scene = Scene()
    scene.load_obj(_write(tmp_path, TRIANGLE))
    intersector = LinearIntersector(scene.primitives)
    hit = intersector.intersect(Ray(Vec3(0.25, 0.25, 1.0), Vec3(0.0, 0.0, -1.0)))
    assert hit is not None
    assert hit.t == pytest.approx(1.0)
    assert hit.primitive is scene.primitives[0]
    assert intersector.intersect(Ray(Vec3(2.0, 2.0, 1.0), Vec3(0.0, 0.0, -1.0))) is None


def test_second_load_appends(tmp_path):
    scene = Scene()
    first = _write(tmp_path, TRIANGLE)
    scene.load_obj(first)
    other = tmp_path / "other.obj"
    other.write_text(TRIANGLE.replace("usemtl white", "usemtl light"))
    scene.load_obj(other)
    assert len(scene.primitives) == 2
    assert len(scene.materials) == 4
    assert scene.material_ids == [0, 3]
    assert scene.primitives[1].material is scene.materials[3]
    assert scene.primitives[1].has_emission() is True