"""Connections (gauge potentials) on a fiber bundle.

Invariants
- A_μ(p) is a (k, k) matrix, k = fiber dimension, for every base direction μ.
- Covariant derivative: D_μ s = ∂_μ s + A_μ s.
- Curvature: F_μν = ∂_μ A_ν − ∂_ν A_μ + [A_μ, A_ν], antisymmetric in (μ, ν).
- Partial derivatives are central finite differences with step ε; the commutator is exact.
- Nothing is cached: every query re-evaluates the field.
"""
from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from geom.bundle import FiberBundle, Section
from geom.config import DEFAULT_NUMERICS, NumericsConfig
from geom.errors import DimensionMismatchError, DirectionRangeError
from gauge.fields import BaseField, CallableField, GaugeTransformedField, GroupFn, PotentialFn
from utils.fingerprint import fingerprint as _fingerprint


class Connection:
    """
    Connection one-form A on `bundle`, given by a BaseField or a plain function
    (point, direction) -> (k, k) matrix.
    """

    def __init__(
        self,
        bundle: FiberBundle,
        field: Union[BaseField, PotentialFn],
        config: Optional[NumericsConfig] = None,
    ) -> None:
        if not isinstance(field, BaseField):
            field = CallableField(field)
        self._bundle = bundle
        self._field = field
        self._config = config if config is not None else DEFAULT_NUMERICS
        self._fingerprint = _fingerprint(
            "Connection", {"bundle": bundle.fingerprint, "field": field.describe()}
        )

    @property
    def bundle(self) -> FiberBundle:
        return self._bundle

    @property
    def field(self) -> BaseField:
        return self._field

    @property
    def config(self) -> NumericsConfig:
        return self._config

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    def __repr__(self) -> str:
        return f"Connection(bundle={self._bundle.name!r}, field={type(self._field).__name__}, fingerprint={self._fingerprint})"

    # --- validation helpers ---

    def _point(self, point: Sequence[float]) -> np.ndarray:
        p = np.array(point, dtype=float)
        d = self._bundle.base.dimension
        if p.shape != (d,):
            raise DimensionMismatchError(f"base point must have shape ({d},); got {p.shape}")
        return p

    def _direction(self, index: int, name: str = "direction") -> int:
        d = self._bundle.base.dimension
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise DirectionRangeError(f"{name} index must be an integer, got {index!r}")
        if not (0 <= index < d):
            raise DirectionRangeError(f"{name} index {index} must be in [0, {d}) for base dimension {d}")
        return int(index)

    def _epsilon(self, epsilon: Optional[float]) -> float:
        eps = self._config.epsilon if epsilon is None else float(epsilon)
        if not (np.isfinite(eps) and eps > 0.0):
            raise ValueError("epsilon must be a positive finite float")
        return eps

    def _evaluate(self, p: np.ndarray, direction: int) -> np.ndarray:
        A = np.asarray(self._field.evaluate(p, direction), dtype=float)
        k = self._bundle.fiber.dimension
        if A.shape != (k, k):
            raise DimensionMismatchError(
                f"connection component A_{direction} must have shape ({k}, {k}); got {A.shape}"
            )
        return A

    def _partial(self, p: np.ndarray, wrt: int, component: int, eps: float) -> np.ndarray:
        """Central difference ∂_wrt A_component at p."""
        p_plus = p.copy()
        p_minus = p.copy()
        p_plus[wrt] += eps
        p_minus[wrt] -= eps
        return (self._evaluate(p_plus, component) - self._evaluate(p_minus, component)) / (2.0 * eps)

    # --- public API ---

    def component(self, point: Sequence[float], direction: int) -> np.ndarray:
        """A_direction(point) as a fresh (k, k) array."""
        return self._evaluate(self._point(point), self._direction(direction)).copy()

    def covariant_derivative(
        self,
        section: Section,
        point: Sequence[float],
        direction: int,
        epsilon: Optional[float] = None,
    ) -> np.ndarray:
        """
        Covariant derivative D_μ s = ∂_μ s + A_μ s at `point`.

        Parameters
        ----------
        section : Section
            Section of this connection's bundle.
        point : array-like, shape (d,)
            Base point.
        direction : int
            Base direction μ in [0, d).
        epsilon : float, optional
            Central-difference step; defaults to config.epsilon (1e-6).

        Returns
        -------
        np.ndarray
            Vector of shape (k,).

        Raises
        ------
        DirectionRangeError
            If direction is outside [0, d).
        DimensionMismatchError
            On a wrong-length point or a section/field of the wrong size.
        """
        p = self._point(point)
        mu = self._direction(direction)
        eps = self._epsilon(epsilon)

        p_plus = p.copy()
        p_minus = p.copy()
        p_plus[mu] += eps
        p_minus[mu] -= eps
        ordinary = (section.at(p_plus) - section.at(p_minus)) / (2.0 * eps)

        A = self._evaluate(p, mu)
        return ordinary + A @ section.at(p)

    def curvature(
        self,
        point: Sequence[float],
        mu: int,
        nu: int,
        epsilon: Optional[float] = None,
    ) -> np.ndarray:
        """
        Curvature two-form component F_μν = ∂_μ A_ν − ∂_ν A_μ + [A_μ, A_ν].

        Raises
        ------
        DirectionRangeError
            If mu or nu is outside [0, base dimension).
        """
        mu = self._direction(mu, "mu")
        nu = self._direction(nu, "nu")
        p = self._point(point)
        eps = self._epsilon(epsilon)

        d_mu_A_nu = self._partial(p, mu, nu, eps)
        d_nu_A_mu = self._partial(p, nu, mu, eps)

        A_mu = self._evaluate(p, mu)
        A_nu = self._evaluate(p, nu)
        commutator = A_mu @ A_nu - A_nu @ A_mu

        return d_mu_A_nu - d_nu_A_mu + commutator

    def is_flat(self, point: Sequence[float], tolerance: Optional[float] = None) -> bool:
        """True iff every entry of every F_μν (μ < ν) at `point` is within tolerance of zero."""
        tol = self._config.flat_tolerance if tolerance is None else float(tolerance)
        d = self._bundle.base.dimension
        for mu in range(d):
            for nu in range(mu + 1, d):
                F = self.curvature(point, mu, nu)
                if np.any(np.abs(F) > tol):
                    return False
        return True

    def gauge_transform(self, group_fn: GroupFn, label: Optional[str] = None) -> "Connection":
        """
        Connection obtained by the gauge transformation s -> g(p) s:

            A'_μ = g A_μ g⁻¹ − (∂_μ g) g⁻¹

        g(p) must be an invertible (k, k) matrix; inversion goes through the
        bundle's structure group and raises SingularMatrixError otherwise.
        """
        transformed = GaugeTransformedField(
            self._field,
            group_fn,
            self._bundle.structure_group,
            epsilon=self._config.epsilon,
            pivot_tolerance=self._config.pivot_tolerance,
            label=label,
        )
        return Connection(self._bundle, transformed, self._config)


__all__ = ["Connection"]
