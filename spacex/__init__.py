"""Lit, spinning cubes in an OpenGL scene with a free-flying camera."""

__version__ = "1.0.0"