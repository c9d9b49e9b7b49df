"""Weighted local fitting of algebraic spheres on point clouds, with mean and curvature helpers."""

__version__ = "0.1.0"

__all__ = [
    "algebraic_sphere",
    "curvature",
    "means",
    "sphere_fit",
    "weighting",
]