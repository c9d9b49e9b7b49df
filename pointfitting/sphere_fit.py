"""Algebraic sphere fitting on point sets without normals."""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from .algebraic_sphere import AlgebraicSphere, FitResult
from .weighting import DistWeightFunc


def _position(point: Any) -> np.ndarray:
    return np.asarray(getattr(point, "pos", point), dtype=float)


class SphereFit(AlgebraicSphere):
    """Fit an algebraic sphere by minimising the Pratt-constrained algebraic distance.

    Points are plain coordinate arrays or objects with a ``pos`` attribute.
    """

    def __init__(self, weight_func: DistWeightFunc) -> None:
        super().__init__(weight_func)
        self.sum_w = 0.0
        size = np.shape(self.ul)[0] + 2
        self.mat_a = np.zeros((size, size))

    def init(self, eval_pos) -> None:
        """Reset the fit around the evaluation position ``eval_pos``."""
        super().init(eval_pos)
        self.sum_w = 0.0
        size = np.shape(self.ul)[0] + 2
        self.mat_a = np.zeros((size, size))

    def add_local_neighbor(self, w: float, local_q, attributes: Any) -> bool:
        """Accumulate ``w * a a^T`` with ``a = [1, q, |q|^2]`` for a local point."""
        local_q = np.asarray(local_q, dtype=float)
        self.nb_neighbors += 1
        self.sum_w += float(w)
        a = np.concatenate(([1.0], local_q, [local_q @ local_q]))
        self.mat_a = self.mat_a + float(w) * np.outer(a, a)
        return True

    def add_neighbor(self, point: Any) -> bool:
        """Weight a global point and add it when its weight is positive."""
        w, local_q = self.weight_func.w(_position(point), point)
        if w > 0.0:
            return self.add_local_neighbor(w, local_q, point)
        return False

    def finalize(self) -> FitResult:
        """Solve for the sphere coefficients and return the fitting state."""
        if self.nb_neighbors == 0 or self.sum_w <= 0.0 or self.nb_neighbors < 3:
            self.current_state = FitResult.UNDEFINED
            return self.current_state
        if self.is_valid():
            self.current_state = FitResult.CONFLICT_ERROR_FOUND
        elif self.nb_neighbors < 6:
            self.current_state = FitResult.UNSTABLE
        else:
            self.current_state = FitResult.STABLE

        size = self.mat_a.shape[0]
        inv_c_pratt = np.eye(size)
        inv_c_pratt[0, size - 1] = -0.5
        inv_c_pratt[size - 1, 0] = -0.5
        inv_c_pratt[0, 0] = 0.0
        inv_c_pratt[size - 1, size - 1] = 0.0

        m = inv_c_pratt @ self.mat_a
        # M^T M is positive semi-definite; the eigenvector order is unchanged.
        eigenvalues, eigenvectors = np.linalg.eigh(m.T @ m)
        positive = [i for i, ev in enumerate(eigenvalues) if ev > 0.0]
        if not positive:
            self.current_state = FitResult.UNDEFINED
            return self.current_state
        min_id = min(positive, key=lambda i: eigenvalues[i])

        vec_u = eigenvectors[:, min_id]
        self.uq = float(vec_u[size - 1])
        self.ul = np.array(vec_u[1 : size - 1], dtype=float)
        self.uc = float(vec_u[0])
        self._is_normalized = False
        return self.current_state

    def compute(self, points: Iterable[Any]) -> FitResult:
        """Add every point of ``points`` and finalize the fit."""
        for point in points:
            self.add_neighbor(point)
        return self.finalize()