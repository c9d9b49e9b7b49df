"""Weighted sums of neighbour positions and normals, with their derivatives.

The classes are cooperative mixins: each one calls ``super()`` in
:meth:`init` and :meth:`add_local_neighbor`, so several of them can be
combined by multiple inheritance and every sum is accumulated once per
neighbour.
"""

from __future__ import annotations

from typing import Any

import numpy as np


def _accumulate(total: np.ndarray, term: np.ndarray) -> np.ndarray:
    """Add ``term`` to ``total``; an empty ``total`` takes the shape of ``term``."""
    if total.size == 0:
        return np.array(term, dtype=float)
    return total + term


def _normal_of(attributes: Any) -> np.ndarray:
    return np.asarray(attributes.normal, dtype=float)


class _WeightedSums:
    """Counts the accepted neighbours and sums their weights."""

    def init(self, eval_pos) -> None:
        self.eval_pos = np.array(eval_pos, dtype=float)
        self.sum_w = 0.0
        self.nb_neighbors = 0

    def add_local_neighbor(self, w: float, local_q, attributes: Any) -> bool:
        self.sum_w += float(w)
        self.nb_neighbors += 1
        return True


class MeanPosition(_WeightedSums):
    """Weighted sum of the neighbour positions, expressed in the local frame."""

    def init(self, eval_pos) -> None:
        """Reset the sums around the evaluation position ``eval_pos``."""
        super().init(eval_pos)
        self.sum_p = np.zeros_like(self.eval_pos)

    def add_local_neighbor(self, w: float, local_q, attributes: Any) -> bool:
        """Add a neighbour at local position ``local_q`` with weight ``w``."""
        if super().add_local_neighbor(w, local_q, attributes):
            self.sum_p = self.sum_p + float(w) * np.asarray(local_q, dtype=float)
            return True
        return False


class MeanNormal(_WeightedSums):
    """Weighted sum of the neighbour normals (read from ``attributes.normal``)."""

    def init(self, eval_pos) -> None:
        """Reset the sums around the evaluation position ``eval_pos``."""
        super().init(eval_pos)
        self.sum_n = np.zeros_like(self.eval_pos)

    def add_local_neighbor(self, w: float, local_q, attributes: Any) -> bool:
        """Add the normal of ``attributes`` with weight ``w``."""
        if super().add_local_neighbor(w, local_q, attributes):
            self.sum_n = self.sum_n + float(w) * _normal_of(attributes)
            return True
        return False


class _DerivativeSums(_WeightedSums):
    """Sums the weight derivatives ``dw`` of the accepted neighbours."""

    def init(self, eval_pos) -> None:
        super().init(eval_pos)
        self.d_sum_w = np.zeros(0)

    def add_local_neighbor(self, w: float, local_q, attributes: Any, dw) -> bool:
        if super().add_local_neighbor(w, local_q, attributes):
            self.d_sum_w = _accumulate(self.d_sum_w, np.asarray(dw, dtype=float))
            return True
        return False


class MeanPositionDer(_DerivativeSums, MeanPosition):
    """Derivatives of the weighted position sum; one column per derivative."""

    def init(self, eval_pos) -> None:
        """Reset the sums and their derivatives."""
        super().init(eval_pos)
        self.d_sum_p = np.zeros((self.eval_pos.shape[0], 0))

    def add_local_neighbor(self, w: float, local_q, attributes: Any, dw) -> bool:
        """Add a neighbour with weight ``w`` and weight derivatives ``dw``."""
        if super().add_local_neighbor(w, local_q, attributes, dw):
            term = np.outer(np.asarray(local_q, dtype=float), np.asarray(dw, dtype=float))
            self.d_sum_p = _accumulate(self.d_sum_p, term)
            return True
        return False


class MeanNormalDer(_DerivativeSums, MeanNormal):
    """Derivatives of the weighted normal sum; one column per derivative."""

    def init(self, eval_pos) -> None:
        """Reset the sums and their derivatives."""
        super().init(eval_pos)
        self.d_sum_n = np.zeros((self.eval_pos.shape[0], 0))

    def add_local_neighbor(self, w: float, local_q, attributes: Any, dw) -> bool:
        """Add a neighbour with weight ``w`` and weight derivatives ``dw``."""
        if super().add_local_neighbor(w, local_q, attributes, dw):
            term = np.outer(_normal_of(attributes), np.asarray(dw, dtype=float))
            self.d_sum_n = _accumulate(self.d_sum_n, term)
            return True
        return False