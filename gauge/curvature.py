"""Curvature two-form F = dA + A ∧ A as a stateless view on a Connection.

Values are recomputed from the connection on every call; nothing is stored.
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from geom.errors import DimensionMismatchError
from gauge.connection import Connection
from utils.fingerprint import fingerprint as _fingerprint


class Curvature2Form:
    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._fingerprint = _fingerprint("Curvature2Form", {"connection": connection.fingerprint})

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    def at(self, point: Sequence[float], mu: int, nu: int) -> np.ndarray:
        """F_μν(point)."""
        return self._connection.curvature(point, mu, nu)

    def trace(self, point: Sequence[float], mu: int, nu: int) -> float:
        return float(np.trace(self.at(point, mu, nu)))

    def components(self, point: Sequence[float]) -> np.ndarray:
        """
        All components stacked as F[μ, ν] with shape (d, d, k, k).

        Only μ < ν is evaluated; the diagonal is zero and F[ν, μ] = −F[μ, ν].
        """
        bundle = self._connection.bundle
        d = bundle.base.dimension
        k = bundle.fiber.dimension
        F = np.zeros((d, d, k, k), dtype=float)
        for mu in range(d):
            for nu in range(mu + 1, d):
                F_munu = self.at(point, mu, nu)
                F[mu, nu] = F_munu
                F[nu, mu] = -F_munu
        return F

    def curvature_scalar(self, point: Sequence[float], metric: Optional[Sequence[Sequence[float]]] = None) -> float:
        """
        Doubly contracted invariant

            Σ_{μνρσ} g^{μρ} g^{νσ} Tr(F_μν F_ρσ)

        with `metric` supplying g^{μρ} (identity over the base dimension by default).

        Raises
        ------
        DimensionMismatchError
            If metric is not (d, d).
        """
        d = self._connection.bundle.base.dimension
        if metric is None:
            g = np.eye(d, dtype=float)
        else:
            g = np.asarray(metric, dtype=float)
            if g.shape != (d, d):
                raise DimensionMismatchError(f"metric must have shape ({d}, {d}); got {g.shape}")
        F = self.components(point)
        # Tr(F_μν F_ρσ) = F_μν[i, j] F_ρσ[j, i]
        return float(np.einsum("mr,ns,mnij,rsji->", g, g, F, F))


__all__ = ["Curvature2Form"]
