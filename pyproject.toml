[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "mcraytrace"
version = "0.1.0"
description = "A small Monte Carlo ray tracer and path tracer with OBJ scene loading"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["ray tracing", "path tracing", "rendering", "monte carlo", "obj", "ambient occlusion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
mcraytrace = "mcraytrace.render:main"

[tool.setuptools.packages.find]
include = ["mcraytrace*"]

[tool.pytest.ini_options]
addopts = "-ra"
