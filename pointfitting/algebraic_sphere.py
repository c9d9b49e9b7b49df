"""Algebraic hyper-sphere primitive expressed in a local frame."""

from __future__ import annotations

import enum

import numpy as np

from .weighting import DistWeightFunc

DUMMY_PRECISION = 1e-12


class FitResult(enum.Enum):
    """State of a fitting procedure."""

    STABLE = enum.auto()
    UNSTABLE = enum.auto()
    UNDEFINED = enum.auto()
    CONFLICT_ERROR_FOUND = enum.auto()


def _is_approx(a: np.ndarray, b: np.ndarray, eps: float = DUMMY_PRECISION) -> bool:
    return float(np.linalg.norm(a - b)) <= eps * min(
        float(np.linalg.norm(a)), float(np.linalg.norm(b))
    )


class AlgebraicSphere:
    """The 0-isosurface of ``s(x) = uc + x.ul + uq x.x``.

    The coefficients are stored relatively to the basis center of the weight
    function; public queries are given in global coordinates.
    """

    def __init__(self, weight_func: DistWeightFunc) -> None:
        self.weight_func = weight_func
        self.current_state = FitResult.UNDEFINED
        self.nb_neighbors = 0
        self.uc = 0.0
        self.uq = 0.0
        center = weight_func.basis_center()
        self.ul = np.zeros(0) if center is None else np.zeros_like(center, dtype=float)
        self._is_normalized = False

    def init(self, basis_center) -> None:
        """Set the basis center, reset the coefficients and the fitting state."""
        basis_center = np.asarray(basis_center, dtype=float)
        self.weight_func.init(basis_center)
        self.current_state = FitResult.UNDEFINED
        self.nb_neighbors = 0
        self.uc = 0.0
        self.ul = np.zeros_like(basis_center)
        self.uq = 0.0
        self._is_normalized = False

    def is_ready(self) -> bool:
        """True once a fit produced a usable (stable or unstable) result."""
        return self.current_state in (FitResult.STABLE, FitResult.UNSTABLE)

    def is_stable(self) -> bool:
        """True when the fit is stable."""
        return self.current_state is FitResult.STABLE

    def is_valid(self) -> bool:
        """False while all coefficients are zero, as straight after :meth:`init`."""
        return not (
            not np.any(self.ul) and self.uc == 0.0 and self.uq == 0.0
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlgebraicSphere):
            return NotImplemented
        sq_eps = DUMMY_PRECISION * DUMMY_PRECISION
        return (
            (self.uc - other.uc) ** 2 < sq_eps
            and (self.uq - other.uq) ** 2 < sq_eps
            and _is_approx(np.asarray(self.ul), np.asarray(other.ul))
        )

    __hash__ = None

    def change_basis(self, new_basis) -> None:
        """Express the scalar field relatively to ``new_basis`` and renormalize it."""
        new_basis = np.asarray(new_basis, dtype=float)
        diff = self.weight_func.basis_center() - new_basis
        self.weight_func.init(new_basis)
        self.uc = float(self.uc - self.ul @ diff + self.uq * (diff @ diff))
        self.ul = self.ul - 2.0 * self.uq * diff
        self._is_normalized = False
        self.apply_pratt_norm()

    def pratt_norm(self) -> float:
        """Pratt norm of the scalar field."""
        return float(np.sqrt(self.pratt_norm2()))

    def pratt_norm2(self) -> float:
        """Squared Pratt norm of the scalar field."""
        return float(self.ul @ self.ul - 4.0 * self.uc * self.uq)

    def apply_pratt_norm(self) -> bool:
        """Divide the coefficients by the Pratt norm unless already normalized."""
        if not self._is_normalized:
            pn = self.pratt_norm()
            self.uc /= pn
            self.ul = self.ul * (1.0 / pn)
            self.uq /= pn
            self._is_normalized = True
        return True

    def radius(self) -> float:
        """Radius of the sphere; infinite when the primitive is planar."""
        if self.is_plane():
            return float("inf")
        b = 1.0 / self.uq
        scaled = (-0.5 * b) * self.ul
        return float(np.sqrt(scaled @ scaled - self.uc * b))

    def center(self) -> np.ndarray:
        """Center of the sphere in global coordinates; infinite when planar."""
        if self.is_plane():
            return np.full(np.shape(self.ul), np.inf)
        b = 1.0 / self.uq
        return (-0.5 * b) * self.ul + self.weight_func.basis_center()

    def is_normalized(self) -> bool:
        """True when the field has been normalized by the Pratt norm."""
        return self._is_normalized

    def potential(self, q=None) -> float:
        """Scalar field value at global ``q``, or at the basis center if omitted."""
        if q is None:
            return float(self.uc)
        lq = self.weight_func.convert_to_local_basis(q)
        return float(self.uc + lq @ self.ul + self.uq * (lq @ lq))

    def primitive_gradient(self) -> np.ndarray:
        """Normalized field gradient at the basis center."""
        norm = float(np.linalg.norm(self.ul))
        return self.ul.copy() if norm == 0.0 else self.ul / norm

    def is_plane(self) -> bool:
        """True when a fit is ready and the quadratic term is negligible."""
        planar = abs(self.uq) <= DUMMY_PRECISION
        return self.is_ready() and planar