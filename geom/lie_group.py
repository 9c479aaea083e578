"""Matrix Lie groups: identity, multiplication and inverse over square matrices.

Invariants
- Matrix size is supplied per call; the group only fixes its name, parameter
  dimension and (optional) Lie-algebra generators.
- All operations are pure: outputs never alias inputs.
- Inverse is hardened: singular input raises SingularMatrixError instead of
  returning NaN/Inf.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from geom.config import DEFAULT_NUMERICS
from geom.errors import DimensionMismatchError, SingularMatrixError
from utils.fingerprint import fingerprint as _fingerprint
from utils.logging import get_logger

_log = get_logger("gauge.lie_group")


def _as_square(M: object, name: str) -> np.ndarray:
    M = np.array(M, dtype=float)
    if M.ndim != 2 or M.shape[0] != M.shape[1] or M.shape[0] == 0:
        raise DimensionMismatchError(f"{name} must be a non-empty square 2D array; got shape {M.shape}.")
    return M


@dataclass(frozen=True, eq=False)
class LieGroup:
    name: str
    dimension: int
    generators: Tuple[np.ndarray, ...] = ()
    fingerprint: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        gens = []
        for k, g in enumerate(() if self.generators is None else self.generators):
            G = _as_square(g, f"generator {k}")
            G.setflags(write=False)
            gens.append(G)
        object.__setattr__(self, "generators", tuple(gens))
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint(
                "LieGroup",
                {"name": self.name, "dimension": int(self.dimension), "generators": list(gens)},
            ),
        )

    @property
    def algebra_dimension(self) -> int:
        """Number of supplied Lie-algebra generators."""
        return len(self.generators)

    def identity(self, n: int) -> np.ndarray:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ValueError(f"matrix size n must be an integer, got {n!r}")
        if n < 1:
            raise ValueError("matrix size n must be >= 1")
        return np.eye(int(n), dtype=float)

    def multiply(self, a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> np.ndarray:
        """
        Group multiplication (matrix product a @ b).

        Raises
        ------
        DimensionMismatchError
            If either operand is not square or the sizes differ.
        """
        A = _as_square(a, "a")
        B = _as_square(b, "b")
        if A.shape != B.shape:
            raise DimensionMismatchError(f"operands must have equal size; got {A.shape} and {B.shape}.")
        return A @ B

    def inverse(self, a: Sequence[Sequence[float]], pivot_tolerance: Optional[float] = None) -> np.ndarray:
        """
        Group inverse.

        Closed forms for 1x1 and 2x2; Gauss–Jordan elimination with partial
        pivoting (largest |entry| in the remaining column) for n >= 3.

        Parameters
        ----------
        a : array-like
            Square matrix.
        pivot_tolerance : float, optional
            Relative threshold: with s = max|a_ij|, a pivot at or below tol * s
            (a 2x2 determinant at or below tol * s**2) is treated as singular.
            Defaults to DEFAULT_NUMERICS.pivot_tolerance.

        Returns
        -------
        np.ndarray
            The inverse matrix (a fresh array).

        Raises
        ------
        DimensionMismatchError
            If `a` is not square.
        SingularMatrixError
            On a zero/near-zero determinant or pivot, or non-finite input.
        """
        tol = DEFAULT_NUMERICS.pivot_tolerance if pivot_tolerance is None else float(pivot_tolerance)
        A = _as_square(a, "a")
        if not np.all(np.isfinite(A)):
            raise SingularMatrixError("matrix must contain only finite values.")
        n = A.shape[0]
        scale = float(np.max(np.abs(A)))

        if n == 1:
            if A[0, 0] == 0.0:
                raise SingularMatrixError("1x1 matrix is singular.")
            return np.array([[1.0 / A[0, 0]]], dtype=float)

        if n == 2:
            det = A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0]
            if abs(det) <= tol * scale * scale:
                raise SingularMatrixError(f"2x2 matrix is singular (det={det}).")
            return np.array(
                [[A[1, 1] / det, -A[0, 1] / det], [-A[1, 0] / det, A[0, 0] / det]],
                dtype=float,
            )

        return self._gauss_jordan(A, tol * scale)

    @staticmethod
    def _gauss_jordan(A: np.ndarray, tol: float) -> np.ndarray:
        n = A.shape[0]
        aug = np.hstack([A, np.eye(n, dtype=float)])

        for col in range(n):
            # Partial pivoting on the remaining rows of this column
            pivot_row = col + int(np.argmax(np.abs(aug[col:, col])))
            if pivot_row != col:
                aug[[col, pivot_row]] = aug[[pivot_row, col]]

            pivot = aug[col, col]
            if abs(pivot) <= tol:
                _log.debug("singular pivot %.3g at column %d (n=%d)", pivot, col, n)
                raise SingularMatrixError(f"matrix is singular: pivot {pivot} at column {col}.")
            aug[col] = aug[col] / pivot

            factors = aug[:, col].copy()
            factors[col] = 0.0
            aug -= np.outer(factors, aug[col])

        return aug[:, n:].copy()


__all__ = ["LieGroup"]
