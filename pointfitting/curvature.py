"""Storage of principal curvatures and directions for 3D estimators."""

from __future__ import annotations

import numpy as np

_DIM = 3


class CurvatureEstimator:
    """Holds ``k1``, ``k2`` and their directions, with ``|k1| >= |k2|``."""

    def __init__(self) -> None:
        self.init()

    def init(self) -> None:
        """Reset the curvatures and directions to zero and mark them invalid."""
        self._k1 = 0.0
        self._k2 = 0.0
        self._v1 = np.zeros(_DIM)
        self._v2 = np.zeros(_DIM)
        self._is_valid = False

    def is_valid(self) -> bool:
        """True once curvature values have been set."""
        return self._is_valid

    def k1(self) -> float:
        """Principal curvature with the greatest absolute value."""
        return self._k1

    def k2(self) -> float:
        """Principal curvature with the smallest absolute value."""
        return self._k2

    def k1_direction(self) -> np.ndarray:
        """Direction associated with :meth:`k1`."""
        return self._v1.copy()

    def k2_direction(self) -> np.ndarray:
        """Direction associated with :meth:`k2`."""
        return self._v2.copy()

    def k_mean(self) -> float:
        """Mean curvature."""
        return (self._k1 + self._k2) / 2.0

    def gaussian_curvature(self) -> float:
        """Gaussian curvature."""
        return self._k1 * self._k2

    def set_curvature_values(self, k1: float, k2: float, v1, v2) -> None:
        """Store the curvatures, ordered so that ``|k1| >= |k2|``."""
        v1 = np.array(v1, dtype=float)
        v2 = np.array(v2, dtype=float)
        if v1.shape != (_DIM,) or v2.shape != (_DIM,):
            raise ValueError("curvature directions must be 3D vectors")
        if abs(k1) < abs(k2):
            k1, k2, v1, v2 = k2, k1, v2, v1
        self._k1 = float(k1)
        self._k2 = float(k2)
        self._v1 = v1
        self._v2 = v2
        self._is_valid = True