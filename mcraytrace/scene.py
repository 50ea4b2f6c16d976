"""Scenes assembled from OBJ meshes: triangles, materials, textures and primitives."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .core import Material
from .objfile import ObjError, ObjFace, ObjMaterial, ObjModel, parse_obj
from .primitive import Primitive
from .shape import Triangle
from .texture import Texture
from .vecmath import Vec2, Vec3

logger = logging.getLogger(__name__)

_DEFAULT_TEXCOORDS = (Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0))


def _texture_key(base_dir: str | os.PathLike[str], name: str) -> str:
    return os.fspath(Path(base_dir) / name)


def _texture_names(material: ObjMaterial) -> tuple[str, str, str]:
    return material.diffuse_texname, material.specular_texname, material.emissive_texname


class Scene:
    """Geometry and materials ready to be handed to an intersector."""

    def __init__(self) -> None:
        self.triangles: list[Triangle] = []
        self.texture_ids: dict[str, int] = {}
        self.textures: list[Texture] = []
        self.materials: list[Material] = []
        self.material_ids: list[int] = []
        self.primitives: list[Primitive] = []

    def _load_texture(self, key: str) -> None:
        if key not in self.texture_ids:
            self.texture_ids[key] = len(self.textures)
            self.textures.append(Texture.load(key))

    def _texture(self, name: str, base_dir: str | os.PathLike[str]) -> Texture | None:
        if not name:
            return None
        return self.textures[self.texture_ids[_texture_key(base_dir, name)]]

    def load_material(self, material: ObjMaterial, base_dir: str | os.PathLike[str]) -> Material:
        """Build a Material; its textures must already be loaded (KeyError otherwise)."""
        return Material(
            kd=material.diffuse,
            kd_tex=self._texture(material.diffuse_texname, base_dir),
            ks=material.specular,
            ks_tex=self._texture(material.specular_texname, base_dir),
            ke=material.emission,
            ke_tex=self._texture(material.emissive_texname, base_dir),
        )

    @staticmethod
    def _triangle(model: ObjModel, face: ObjFace) -> Triangle:
        corners = face.indices
        vertices = [model.vertices[c.vertex] for c in corners]

        with_normal = [c for c in corners if c.normal >= 0]
        if not with_normal:
            try:
                face_normal = (vertices[1] - vertices[0]).cross(vertices[2] - vertices[0]).normalized()
            except ValueError as exc:
                raise ObjError("degenerate face has no normal") from exc
            normals = [face_normal] * 3
        elif len(with_normal) == len(corners):
            normals = [model.normals[c.normal] for c in corners]
        else:
            raise ObjError("face has normals on only some of its vertices")

        with_texcoord = [c for c in corners if c.texcoord >= 0]
        if not with_texcoord:
            texcoords = list(_DEFAULT_TEXCOORDS)
        elif len(with_texcoord) == len(corners):
            texcoords = [
                Vec2(model.texcoords[c.texcoord].x, 1.0 - model.texcoords[c.texcoord].y)
                for c in corners
            ]
        else:
            raise ObjError("face has texture coordinates on only some of its vertices")

        return Triangle(*vertices, *normals, *texcoords)

    def load_obj(self, path: str | os.PathLike[str]) -> None:
        """Add every triangle of an OBJ file, with its materials and textures, to the scene."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("[obj] %s", exc)
            raise ObjError(f"failed to load {path}") from exc

        base_dir = path.parent
        model = parse_obj(text, base_dir)
        for warning in model.warnings:
            logger.warning("[obj] %s", warning)

        for obj_material in model.materials:
            for name in _texture_names(obj_material):
                if name:
                    self._load_texture(_texture_key(base_dir, name))

        new_materials = [self.load_material(m, base_dir) for m in model.materials]

        new_triangles: list[Triangle] = []
        new_ids: list[int] = []
        for face in model.faces:
            if not 0 <= face.material_id < len(new_materials):
                raise ObjError(f"face in {path} has no material")
            new_triangles.append(self._triangle(model, face))
            new_ids.append(face.material_id)

        offset = len(self.materials)
        self.materials.extend(new_materials)
        self.triangles.extend(new_triangles)
        self.material_ids.extend(offset + mid for mid in new_ids)
        self.primitives.extend(
            Primitive(triangle, self.materials[offset + mid])
            for triangle, mid in zip(new_triangles, new_ids)
        )

        logger.info("[Scene] number of primitives: %d", len(self.primitives))
        logger.info("[Scene] number of materials: %d", len(self.materials))
        logger.info("[Scene] number of textures: %d", len(self.textures))