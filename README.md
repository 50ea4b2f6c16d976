# mcraytrace

A small Monte Carlo renderer in pure Python. It offers:

- a Mandelbrot set image and a sphere shaded by its surface normal,
- a sun-lit scene with Blinn-Phong shading and hard shadows,
- ambient occlusion,
- a path tracer with Russian roulette and cosine-weighted hemisphere sampling,
- loading of Wavefront OBJ/MTL scenes, with diffuse textures,
- PNG and ASCII PPM output.

Random numbers come from a seeded PCG32 generator, so every render is
reproducible for a given seed.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The `mcraytrace` command renders one scene and writes it to an image file.
Choose the scene with a subcommand:

| Subcommand   | What it renders                                              |
|--------------|--------------------------------------------------------------|
| `mandelbrot` | the Mandelbrot set, white inside and black outside           |
| `normal`     | a unit sphere coloured by its surface normal                 |
| `shadow`     | a green sphere on a white floor, lit by a sun, with shadows  |
| `ao`         | ambient occlusion of the same sphere scene under a white sky |
| `pt`         | the sphere scene path-traced                                 |
| `obj PATH`   | an OBJ file path-traced                                      |

Options shared by all subcommands:

- `--width`, `--height` (default 512 each)
- `--output` (default `output.png`); a `.ppm` suffix writes ASCII PPM,
  anything else PNG

Further options:

- `mandelbrot`: `--iterations` (default 100)
- `shadow`, `ao`, `pt`, `obj`: `--samples` per pixel (default 100), `--seed`
  (default 12)
- `pt`, `obj`: `--max-depth` (default 10), `--sky` constant sky radiance
  (default 1.0; use 0 for a scene lit only by its emissive surfaces)
- `obj`: `--origin X Y Z` (default `0 1 3`), `--forward X Y Z` (default
  `0 0 -1`), `--focal-length` (default 1.0)

For example:

```
mcraytrace shadow --width 64 --height 64 --samples 4 --output shadow.png
mcraytrace obj CornellBox-Original.obj --width 64 --height 64 --samples 16 --sky 0
```

Progress and timing go to the log. If a file cannot be read or written, or an
argument is invalid, the command prints the error and exits with status 1.

## Library use

```python
from mcraytrace.camera import Camera
from mcraytrace.imageio import write_png
from mcraytrace.primitive import LinearIntersector
from mcraytrace.render import render_path_traced
from mcraytrace.scene import Scene
from mcraytrace.vecmath import Vec3

scene = Scene()
scene.load_obj("CornellBox-Original.obj")

camera = Camera(Vec3(0.0, 1.0, 3.0), Vec3(0.0, 0.0, -1.0), 1.0)
intersector = LinearIntersector(scene.primitives)

image = render_path_traced(
    intersector, camera, width=64, height=64, samples=16, max_depth=10, seed=12, sky=Vec3(0.0, 0.0, 0.0)
)
write_png("output.png", image)
```

`mcraytrace.render` also has `render_mandelbrot`, `render_normal`,
`render_shadow`, `render_ambient_occlusion` and `sphere_scene`, which returns
the built-in sphere scene as a `LinearIntersector`.

The building blocks can be used on their own:

- `mcraytrace.vecmath`: immutable `Vec2` and `Vec3`, `spherical_to_cartesian`,
  and the tangent-space helpers `orthonormal_basis`, `world_to_local` and
  `local_to_world`.
- `mcraytrace.core`: `Ray`, `HitInfo` and `Material`.
- `mcraytrace.sampler`: the PCG32-based `Sampler` (`next_u32`, `next_1d`,
  `next_2d`), `sample_hemisphere` and `sample_cosine_weighted_hemisphere`.
- `mcraytrace.shape`: `Sphere` and `Triangle`; `intersect(ray)` returns a
  `HitInfo`, or `None` when the ray misses.
- `mcraytrace.primitive`: `Primitive`, which pairs a shape with a material,
  and `LinearIntersector`, which finds the closest hit.
- `mcraytrace.bxdf`: `Lambert`, `IdealSpecularReflection` and `LambertOnly`,
  whose `sample_direction(u, wo)` returns a `BxDFSample`.
- `mcraytrace.integrator`: the `PathTracing` integrator.
- `mcraytrace.image` and `mcraytrace.imageio`: the float RGB `Image`,
  `linear_to_srgb`, `quantize`, `write_png` and `write_ppm`.
- `mcraytrace.texture`: RGBA `Texture` with nearest-texel `fetch`.
- `mcraytrace.objfile`: `parse_obj`, `parse_mtl` and `load_obj`; errors raise
  `ObjError`.
- `mcraytrace.scene`: `Scene`, which gathers triangles, materials, textures
  and primitives from OBJ files.

## OBJ scenes

- Polygons are split into triangles as a fan.
- Material libraries and texture files are looked up next to the OBJ file.
- A face without vertex normals gets its face normal; a face without texture
  coordinates gets `(0, 0)`, `(1, 0)`, `(0, 1)`.
- Every face must have a material (`usemtl`); otherwise loading fails.
- A material with any positive `Ke` component is treated as a light.

## Limitations

- Rendering is single-threaded plain Python and tests every primitive for
  every ray; there is no acceleration structure. Keep images small and sample
  counts low.
- The path tracer shades every non-emissive surface as a Lambert diffuse
  surface. `Ks`, specular and emission textures are read but do not affect the
  path-traced image.
- There is no interactive viewer; results are only written to image files.