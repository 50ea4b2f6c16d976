"""Reading Wavefront OBJ meshes and their MTL materials."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core import Material
from .shape import Triangle
from .vecmath import Vec2, Vec3

logger = logging.getLogger(__name__)

_ROUGHNESS = 0.01
_DEFAULT_TEXCOORDS = (Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0))


class ObjError(ValueError):
    """Raised when an OBJ or MTL file cannot be read or is malformed."""


@dataclass(frozen=True)
class ObjIndex:
    """Zero-based attribute indices of one face corner; -1 means absent."""

    vertex: int
    texcoord: int = -1
    normal: int = -1


@dataclass(frozen=True)
class ObjFace:
    """A triangle and the index of its material, -1 when it has none."""

    indices: tuple[ObjIndex, ObjIndex, ObjIndex]
    material_id: int = -1


@dataclass
class ObjMaterial:
    """A material as declared in an MTL file."""

    name: str
    diffuse: Vec3 = field(default_factory=Vec3)
    specular: Vec3 = field(default_factory=Vec3)
    emission: Vec3 = field(default_factory=Vec3)
    diffuse_texname: str = ""
    specular_texname: str = ""
    emissive_texname: str = ""


@dataclass
class ObjModel:
    """Attributes, triangulated faces and materials of an OBJ file."""

    vertices: list[Vec3] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    texcoords: list[Vec2] = field(default_factory=list)
    faces: list[ObjFace] = field(default_factory=list)
    materials: list[ObjMaterial] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _lines(text: str):
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            yield lineno, line.split()


def _numbers(tokens: list[str], lineno: int) -> list[float]:
    try:
        return [float(token) for token in tokens]
    except ValueError as exc:
        raise ObjError(f"line {lineno}: invalid number") from exc


def _colour(tokens: list[str], lineno: int) -> Vec3:
    values = _numbers(tokens, lineno)
    if len(values) == 1:
        return Vec3(values[0], values[0], values[0])
    if len(values) != 3:
        raise ObjError(f"line {lineno}: expected 1 or 3 colour values")
    return Vec3(*values)


def parse_mtl(text: str) -> list[ObjMaterial]:
    """Parse MTL text into materials in declaration order."""
    materials: list[ObjMaterial] = []
    current: ObjMaterial | None = None
    colours = {"Kd": "diffuse", "Ks": "specular", "Ke": "emission"}
    textures = {"map_Kd": "diffuse_texname", "map_Ks": "specular_texname", "map_Ke": "emissive_texname"}

    for lineno, tokens in _lines(text):
        keyword, args = tokens[0], tokens[1:]
        if keyword == "newmtl":
            if not args:
                raise ObjError(f"line {lineno}: newmtl without a name")
            current = ObjMaterial(" ".join(args))
            materials.append(current)
        elif current is None:
            continue
        elif keyword in colours:
            setattr(current, colours[keyword], _colour(args, lineno))
        elif keyword in textures:
            if not args:
                raise ObjError(f"line {lineno}: {keyword} without a file name")
            setattr(current, textures[keyword], args[-1])
    return materials


def _resolve(token: str, count: int, lineno: int) -> int:
    try:
        number = int(token)
    except ValueError as exc:
        raise ObjError(f"line {lineno}: invalid index {token!r}") from exc
    if number == 0:
        raise ObjError(f"line {lineno}: index 0 is not allowed")
    index = number - 1 if number > 0 else count + number
    if not 0 <= index < count:
        raise ObjError(f"line {lineno}: index {number} out of range")
    return index


def _corner(token: str, model: ObjModel, lineno: int) -> ObjIndex:
    parts = token.split("/")
    if len(parts) > 3 or not parts[0]:
        raise ObjError(f"line {lineno}: malformed face vertex {token!r}")
    vertex = _resolve(parts[0], len(model.vertices), lineno)
    texcoord = _resolve(parts[1], len(model.texcoords), lineno) if len(parts) > 1 and parts[1] else -1
    normal = _resolve(parts[2], len(model.normals), lineno) if len(parts) > 2 and parts[2] else -1
    return ObjIndex(vertex, texcoord, normal)


def _load_library(name: str, base_dir: Path | None, model: ObjModel, by_name: dict[str, int]) -> None:
    if base_dir is None:
        model.warnings.append(f"material file {name} not found: no search directory")
        return
    try:
        text = (base_dir / name).read_text(encoding="utf-8")
    except OSError:
        model.warnings.append(f"material file {name} not found")
        return
    for material in parse_mtl(text):
        by_name.setdefault(material.name, len(model.materials))
        model.materials.append(material)


def parse_obj(text: str, base_dir: str | os.PathLike[str] | None = None) -> ObjModel:
    """Parse OBJ text, fan-triangulating polygons; material libraries are read from base_dir."""
    model = ObjModel()
    directory = Path(base_dir) if base_dir is not None else None
    by_name: dict[str, int] = {}
    material_id = -1

    for lineno, tokens in _lines(text):
        keyword, args = tokens[0], tokens[1:]
        if keyword == "v":
            values = _numbers(args, lineno)
            if len(values) < 3:
                raise ObjError(f"line {lineno}: vertex needs three coordinates")
            model.vertices.append(Vec3(*values[:3]))
        elif keyword == "vn":
            values = _numbers(args, lineno)
            if len(values) < 3:
                raise ObjError(f"line {lineno}: normal needs three components")
            model.normals.append(Vec3(*values[:3]))
        elif keyword == "vt":
            values = _numbers(args, lineno)
            if not values:
                raise ObjError(f"line {lineno}: texture coordinate needs a value")
            model.texcoords.append(Vec2(values[0], values[1] if len(values) > 1 else 0.0))
        elif keyword == "f":
            if len(args) < 3:
                raise ObjError(f"line {lineno}: face needs at least three vertices")
            corners = [_corner(token, model, lineno) for token in args]
            for second, third in zip(corners[1:], corners[2:]):
                model.faces.append(ObjFace((corners[0], second, third), material_id))
        elif keyword == "mtllib":
            for name in args:
                _load_library(name, directory, model, by_name)
        elif keyword == "usemtl":
            name = " ".join(args)
            if name in by_name:
                material_id = by_name[name]
            else:
                model.warnings.append(f"material [{name}] not found")
                material_id = -1
    return model


def _face_normal(vertices: list[Vec3]) -> Vec3:
    try:
        e1 = (vertices[1] - vertices[0]).normalized()
        e2 = (vertices[2] - vertices[0]).normalized()
        return e1.cross(e2).normalized()
    except ValueError as exc:
        raise ObjError("degenerate face has no normal") from exc


def load_obj(path: str | os.PathLike[str]) -> tuple[list[Triangle], list[Material]]:
    """Load an OBJ file as triangles and one material per triangle."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ObjError(f"failed to load {path}") from exc

    model = parse_obj(text, path.parent)
    for warning in model.warnings:
        logger.warning("[obj] %s", warning)

    triangles: list[Triangle] = []
    materials: list[Material] = []
    for face in model.faces:
        vertices = [model.vertices[corner.vertex] for corner in face.indices]

        if any(corner.normal >= 0 for corner in face.indices):
            normals = [model.normals[c.normal] if c.normal >= 0 else Vec3() for c in face.indices]
        else:
            normals = [_face_normal(vertices)] * 3

        if all(corner.texcoord >= 0 for corner in face.indices):
            texcoords = [model.texcoords[c.texcoord] for c in face.indices]
        else:
            texcoords = list(_DEFAULT_TEXCOORDS)

        triangles.append(Triangle(*vertices, *normals, *texcoords))

        if not 0 <= face.material_id < len(model.materials):
            raise ObjError(f"face in {path} has no material")
        source = model.materials[face.material_id]
        materials.append(
            Material(kd=source.diffuse, ks=source.specular, ke=source.emission, roughness=_ROUGHNESS)
        )

    logger.info("number of triangles: %d", len(triangles))
    return triangles, materials