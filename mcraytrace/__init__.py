"""Monte Carlo ray tracing, ambient occlusion and path tracing of sphere and OBJ scenes in pure Python."""

__version__ = "0.1.0"