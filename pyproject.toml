[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacex"
version = "1.0.0"
description = "A small OpenGL scene of lit, rotating cubes with a free-flying camera"
requires-python = ">=3.10"
keywords = ["opengl", "3d", "camera", "shader", "pyglet", "rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
spacex = "spacex.app:main"

[tool.hatch.build.targets.wheel]
packages = ["spacex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
