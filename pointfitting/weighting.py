"""Distance based weighting of neighbours around an evaluation position."""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np


class WeightKernel(Protocol):
    """A 1D weighting function defined on the unit interval, with derivatives."""

    def f(self, x: float) -> float:
        """Kernel value at ``x``."""
        ...

    def df(self, x: float) -> float:
        """First derivative of the kernel at ``x``."""
        ...

    def ddf(self, x: float) -> float:
        """Second derivative of the kernel at ``x``."""
        ...


class DistWeightFunc:
    """Weight queries by their euclidean distance to a basis center, at scale ``t``.

    Queries are given in global coordinates and converted to the local frame
    centred on the evaluation position set by :meth:`init`. Points farther
    than ``t`` get a zero weight and zero derivatives. ``t`` must be positive.
    """

    def __init__(self, kernel: WeightKernel, t: float = 1.0) -> None:
        self.kernel = kernel
        self._t = float(t)
        self._p: np.ndarray | None = None

    def init(self, eval_pos) -> None:
        """Set the basis center (evaluation position)."""
        self._p = np.array(eval_pos, dtype=float)

    def basis_center(self) -> np.ndarray | None:
        """The basis center, or None before :meth:`init`."""
        return self._p

    def eval_pos(self) -> np.ndarray | None:
        """The evaluation position set by :meth:`init`."""
        return self._p

    def eval_scale(self) -> float:
        """The evaluation scale ``t``."""
        return self._t

    def convert_to_local_basis(self, q) -> np.ndarray:
        """Express a global query relatively to the basis center."""
        q = np.asarray(q, dtype=float)
        if self._p is None:
            return q.copy()
        return q - self._p

    def _local(self, q) -> tuple[np.ndarray, float]:
        lq = self.convert_to_local_basis(q)
        return lq, float(np.linalg.norm(lq))

    def w(self, q, attributes: Any = None) -> tuple[float, np.ndarray]:
        """Weight of ``q`` and ``q`` expressed in the local basis."""
        lq, d = self._local(q)
        weight = float(self.kernel.f(d / self._t)) if d <= self._t else 0.0
        return weight, lq

    def spacedw(self, q, attributes: Any = None) -> np.ndarray:
        """First order spatial derivative of the weight."""
        lq, d = self._local(q)
        t = self._t
        if d == 0.0 or d > t:
            return np.zeros_like(lq)
        return lq / (t * d) * self.kernel.df(d / t)

    def spaced2w(self, q, attributes: Any = None) -> np.ndarray:
        """Second order spatial derivative of the weight."""
        lq, d = self._local(q)
        t = self._t
        dim = lq.shape[0]
        if d == 0.0 or d > t:
            return np.zeros((dim, dim))
        qqt = np.outer(lq, lq) / (d * d)
        x = d / t
        return (np.eye(dim) - qqt) * (self.kernel.df(x) / (t * d)) + qqt * (
            self.kernel.ddf(x) / (t * t)
        )

    def scaledw(self, q, attributes: Any = None) -> float:
        """First order derivative of the weight with respect to the scale."""
        _, d = self._local(q)
        t = self._t
        if d > t:
            return 0.0
        return float(-d / (t * t) * self.kernel.df(d / t))

    def scaled2w(self, q, attributes: Any = None) -> float:
        """Second order derivative of the weight with respect to the scale."""
        _, d = self._local(q)
        t = self._t
        if d > t:
            return 0.0
        x = d / t
        return float(
            2.0 * d / t**3 * self.kernel.df(x) + d * d / t**4 * self.kernel.ddf(x)
        )

    def scale_spaced2w(self, q, attributes: Any = None) -> np.ndarray:
        """Cross derivative of the weight in scale and space."""
        lq, d = self._local(q)
        t = self._t
        if d == 0.0 or d > t:
            return np.zeros_like(lq)
        x = d / t
        return -lq / (t * t) * (self.kernel.df(x) / d + self.kernel.ddf(x) / t)