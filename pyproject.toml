[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pointfitting"
version = "0.1.0"
description = "Local surface fitting on point clouds: distance weighting, algebraic spheres, weighted means and curvature storage"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "point cloud",
    "surface fitting",
    "algebraic sphere",
    "pratt norm",
    "curvature",
    "geometry processing",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pointfitting"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
