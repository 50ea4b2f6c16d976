"""Rendering pipelines and the command-line entry point."""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time
from pathlib import Path
from typing import Iterator, Sequence

from .camera import Camera
from .core import Material, Ray
from .image import Image
from .imageio import write_png, write_ppm
from .integrator import PathTracing
from .objfile import ObjError
from .primitive import Intersector, LinearIntersector, Primitive
from .sampler import Sampler, sample_cosine_weighted_hemisphere
from .scene import Scene
from .shape import Sphere
from .vecmath import Vec2, Vec3, local_to_world, orthonormal_basis

logger = logging.getLogger(__name__)

SHADOW_RAY_EPS = 0.001
AO_RAY_EPS = 0.01
DEFAULT_SEED = 12
_WHITE = Vec3(1.0, 1.0, 1.0)
_BLACK = Vec3()
_SPHERE_CAMERA_ORIGIN = Vec3(0.0, 0.0, 3.0)
_CAMERA_FORWARD = Vec3(0.0, 0.0, -1.0)
_SUN_DIRECTION = Vec3(1.0, 1.0, 1.0).normalized()


def sphere_scene() -> LinearIntersector:
    """A green glossy unit sphere resting above a large white floor sphere."""
    sphere = Sphere(Vec3(), 1.0)
    floor = Sphere(Vec3(0.0, -10001.0, 0.0), 10000.0)
    white = Material(kd=Vec3(0.8, 0.8, 0.8), ks=Vec3(), ke=Vec3(), roughness=1.0)
    green = Material(kd=Vec3(0.2, 0.8, 0.2), ks=Vec3(0.8, 0.8, 0.8), ke=Vec3(), roughness=0.01)
    return LinearIntersector([Primitive(sphere, green), Primitive(floor, white)])


def _check_samples(samples: int) -> None:
    if samples <= 0:
        raise ValueError("samples must be positive")


def _pixels(width: int, height: int) -> Iterator[tuple[int, int]]:
    for j in range(height):
        for i in range(width):
            yield i, j


def _ndc(x: float, y: float, width: int, height: int) -> Vec2:
    """Map a position on the pixel grid to device coordinates with y pointing up."""
    return Vec2((2.0 * x - width) / height, -(2.0 * y - height) / height)


def _jittered_ndc(i: int, j: int, width: int, height: int, sampler: Sampler) -> Vec2:
    x = i + sampler.next_1d()
    y = j + sampler.next_1d()
    return _ndc(x, y, width, height)


def render_mandelbrot(width: int = 512, height: int = 512, iterations: int = 100) -> Image:
    """Paint points of the Mandelbrot set white and everything else black."""
    image = Image(width, height)
    for i, j in _pixels(width, height):
        c = complex((2.0 * i - width) / height, (2.0 * j - height) / height)
        z = 0j
        diverged = False
        for _ in range(iterations):
            z = z * z + c
            if abs(z) > 2.0:
                diverged = True
                break
        image.set_pixel(i, j, _BLACK if diverged else _WHITE)
    return image


def render_normal(width: int = 512, height: int = 512) -> Image:
    """Shade a unit sphere by its surface normal."""
    image = Image(width, height)
    camera = Camera(_SPHERE_CAMERA_ORIGIN, _CAMERA_FORWARD)
    sphere = Sphere(Vec3(), 1.0)
    for i, j in _pixels(width, height):
        hit = sphere.intersect(camera.sample_ray(_ndc(i, j, width, height)))
        if hit is not None:
            image.add_pixel(i, j, (hit.normal + _WHITE) * 0.5)
    return image


def render_shadow(
    width: int = 512, height: int = 512, samples: int = 100, seed: int = DEFAULT_SEED
) -> Image:
    """Render the sphere scene lit by a sun with Blinn-Phong shading and hard shadows."""
    _check_samples(samples)
    image = Image(width, height)
    camera = Camera(_SPHERE_CAMERA_ORIGIN, _CAMERA_FORWARD)
    intersector = sphere_scene()
    sampler = Sampler(seed)
    wi = _SUN_DIRECTION

    for i, j in _pixels(width, height):
        for _ in range(samples):
            ray = camera.sample_ray(_jittered_ndc(i, j, width, height, sampler))
            hit = intersector.intersect(ray)
            if hit is None or hit.primitive is None:
                continue
            wh = (-ray.direction + wi).normalized()
            shadow_ray = Ray(hit.position + hit.normal * SHADOW_RAY_EPS, wi)
            if intersector.intersect(shadow_ray) is not None:
                continue
            material = hit.primitive.material
            diffuse = material.kd * max(wi.dot(hit.normal), 0.0)
            specular = material.ks * (max(wh.dot(hit.normal), 0.0) ** (1.0 / material.roughness))
            image.add_pixel(i, j, diffuse + specular)

    image.divide(samples)
    image.post_process()
    return image


def render_ambient_occlusion(
    width: int = 512, height: int = 512, samples: int = 100, seed: int = DEFAULT_SEED
) -> Image:
    """Render ambient occlusion of the sphere scene under a white sky."""
    _check_samples(samples)
    image = Image(width, height)
    camera = Camera(_SPHERE_CAMERA_ORIGIN, _CAMERA_FORWARD)
    intersector = sphere_scene()
    sampler = Sampler(seed)

    for i, j in _pixels(width, height):
        for _ in range(samples):
            ray = camera.sample_ray(_jittered_ndc(i, j, width, height, sampler))
            hit = intersector.intersect(ray)
            if hit is None:
                image.add_pixel(i, j, _WHITE)
                continue
            tangent, bitangent = orthonormal_basis(hit.normal)
            wi = sample_cosine_weighted_hemisphere(sampler.next_2d())
            pdf = abs(wi.y) / math.pi
            wi_world = local_to_world(wi, tangent, hit.normal, bitangent)
            shadow_ray = Ray(hit.position + hit.normal * AO_RAY_EPS, wi_world)
            if pdf > 0.0 and intersector.intersect(shadow_ray) is None:
                f = 1.0 / math.pi
                image.add_pixel(i, j, _WHITE * (f * abs(wi.y) / pdf))

    image.divide(samples)
    image.post_process()
    return image


def render_path_traced(
    intersector: Intersector,
    camera: Camera,
    width: int = 512,
    height: int = 512,
    samples: int = 100,
    max_depth: int = 10,
    seed: int = DEFAULT_SEED,
    sky: Vec3 = _WHITE,
) -> Image:
    """Render a scene with the path tracer, averaging `samples` paths per pixel."""
    _check_samples(samples)
    image = Image(width, height)
    sampler = Sampler(seed)
    integrator = PathTracing(max_depth, sky)

    for i, j in _pixels(width, height):
        for _ in range(samples):
            ray = camera.sample_ray(_jittered_ndc(i, j, width, height, sampler))
            image.add_pixel(i, j, integrator.integrate(ray, intersector, sampler))

    image.divide(samples)
    image.post_process()
    return image


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--width", type=int, default=512)
    common.add_argument("--height", type=int, default=512)
    common.add_argument("--output", type=Path, default=Path("output.png"),
                        help="output file; a .ppm suffix writes ASCII PPM, anything else PNG")

    sampling = argparse.ArgumentParser(add_help=False)
    sampling.add_argument("--samples", type=int, default=100)
    sampling.add_argument("--seed", type=int, default=DEFAULT_SEED)

    tracing = argparse.ArgumentParser(add_help=False)
    tracing.add_argument("--max-depth", type=int, default=10)
    tracing.add_argument("--sky", type=float, default=1.0, help="constant sky radiance")

    parser = argparse.ArgumentParser(prog="mcraytrace", description="Monte Carlo ray tracer.")
    commands = parser.add_subparsers(dest="command", required=True)

    mandelbrot = commands.add_parser("mandelbrot", parents=[common], help="Mandelbrot set")
    mandelbrot.add_argument("--iterations", type=int, default=100)
    commands.add_parser("normal", parents=[common], help="sphere shaded by normal")
    commands.add_parser("shadow", parents=[common, sampling], help="sun-lit sphere with shadows")
    commands.add_parser("ao", parents=[common, sampling], help="ambient occlusion")
    commands.add_parser("pt", parents=[common, sampling, tracing], help="path-traced sphere scene")

    obj = commands.add_parser("obj", parents=[common, sampling, tracing], help="path-trace an OBJ file")
    obj.add_argument("path", type=Path)
    obj.add_argument("--origin", type=float, nargs=3, default=[0.0, 1.0, 3.0], metavar=("X", "Y", "Z"))
    obj.add_argument("--forward", type=float, nargs=3, default=[0.0, 0.0, -1.0], metavar=("X", "Y", "Z"))
    obj.add_argument("--focal-length", type=float, default=1.0)
    return parser


def _render(args: argparse.Namespace) -> Image:
    if args.command == "mandelbrot":
        return render_mandelbrot(args.width, args.height, args.iterations)
    if args.command == "normal":
        return render_normal(args.width, args.height)
    if args.command == "shadow":
        return render_shadow(args.width, args.height, args.samples, args.seed)
    if args.command == "ao":
        return render_ambient_occlusion(args.width, args.height, args.samples, args.seed)

    sky = Vec3(args.sky, args.sky, args.sky)
    if args.command == "pt":
        camera = Camera(_SPHERE_CAMERA_ORIGIN, _CAMERA_FORWARD)
        intersector: Intersector = sphere_scene()
    else:
        scene = Scene()
        scene.load_obj(args.path)
        camera = Camera(Vec3(*args.origin), Vec3(*args.forward), args.focal_length)
        intersector = LinearIntersector(scene.primitives)
    return render_path_traced(
        intersector, camera, args.width, args.height, args.samples, args.max_depth, args.seed, sky
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Render the chosen scene and write it to an image file."""
    args = _build_parser().parse_args(argv)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    started = time.perf_counter()
    if hasattr(args, "samples"):
        logger.info("[Main] Sample: %d", args.samples)
    try:
        image = _render(args)
        if args.output.suffix.lower() == ".ppm":
            write_ppm(args.output, image)
        else:
            write_png(args.output, image)
    except (ObjError, OSError, ValueError) as exc:
        print(f"mcraytrace: {exc}", file=sys.stderr)
        return 1
    logger.info("[Main] Time: %.1f [s]", time.perf_counter() - started)
    return 0