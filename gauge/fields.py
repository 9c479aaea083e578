"""Gauge-potential fields A_μ(p) behind a single evaluate(point, index) interface.

A Connection never stores a discretized field: every curvature or transport
computation calls `evaluate` again. Concrete fields must therefore be pure
functions of their arguments.

Fields
- ZeroField: A_μ ≡ 0 (flat)
- ConstantField: A_μ(p) = components[μ]
- InstantonField: simplified BPST-type ansatz on a 4D base with 2D fiber
- CallableField: wraps a plain function (point, direction) -> matrix
- GaugeTransformedField: A'_μ = g A_μ g⁻¹ − (∂_μ g) g⁻¹
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Sequence

import numpy as np

from geom.errors import ConstructionError, DimensionMismatchError
from geom.lie_group import LieGroup
from utils.fingerprint import callable_label

PotentialFn = Callable[[np.ndarray, int], Sequence[Sequence[float]]]
GroupFn = Callable[[np.ndarray], Sequence[Sequence[float]]]


class BaseField(ABC):
    """Matrix-valued one-form on the base: (point, direction) -> (k, k) matrix."""

    @abstractmethod
    def evaluate(self, point: np.ndarray, index: int) -> np.ndarray:
        ...

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """JSON-serializable description used for fingerprinting."""


class ZeroField(BaseField):
    def __init__(self, fiber_dim: int) -> None:
        if int(fiber_dim) < 1:
            raise ConstructionError("fiber_dim must be >= 1")
        self.fiber_dim = int(fiber_dim)

    def evaluate(self, point: np.ndarray, index: int) -> np.ndarray:
        return np.zeros((self.fiber_dim, self.fiber_dim), dtype=float)

    def describe(self) -> Dict[str, Any]:
        return {"field": "zero", "fiber_dim": self.fiber_dim}


class ConstantField(BaseField):
    def __init__(self, components: Sequence[Sequence[Sequence[float]]]) -> None:
        comps = np.array(components, dtype=float)
        if comps.ndim != 3 or comps.shape[1] != comps.shape[2]:
            raise DimensionMismatchError(
                f"components must stack square matrices with shape (d, k, k); got {comps.shape}"
            )
        comps.setflags(write=False)
        self.components = comps

    def evaluate(self, point: np.ndarray, index: int) -> np.ndarray:
        return self.components[index].copy()

    def describe(self) -> Dict[str, Any]:
        return {"field": "constant", "components": self.components}


# η-symbols of the simplified self-dual ansatz (directions 0..2; direction 3 carries no potential)
_ETA = np.array(
    [
        [[0.0, 1.0], [-1.0, 0.0]],
        [[0.0, 0.0], [0.0, 0.0]],
        [[1.0, 0.0], [0.0, -1.0]],
    ],
    dtype=float,
)


class InstantonField(BaseField):
    """
    Simplified instanton ansatz on a 4D base with 2D fiber.

    A_μ(x) = ρ² / (|x − c|² + ρ²) · η_μ · (x₃ − c₃)   for μ < 3
    A_3(x) = 0
    """

    def __init__(self, center: Sequence[float], scale: float) -> None:
        c = np.array(center, dtype=float)
        if c.shape != (4,):
            raise DimensionMismatchError(f"instanton center must have shape (4,); got {c.shape}")
        if not (np.isfinite(scale) and float(scale) > 0.0):
            raise ConstructionError("instanton scale must be a positive finite float")
        c.setflags(write=False)
        self.center = c
        self.scale = float(scale)

    def evaluate(self, point: np.ndarray, index: int) -> np.ndarray:
        x = np.asarray(point, dtype=float)
        if index >= 3:
            return np.zeros((2, 2), dtype=float)
        d = x - self.center
        rho2 = self.scale * self.scale
        factor = rho2 / (float(d @ d) + rho2)
        return factor * _ETA[index] * d[3]

    def describe(self) -> Dict[str, Any]:
        return {"field": "instanton", "center": self.center, "scale": self.scale}


class CallableField(BaseField):
    """Adapter for a plain function (point, direction) -> matrix."""

    def __init__(self, fn: PotentialFn, label: str | None = None) -> None:
        if not callable(fn):
            raise TypeError("fn must be callable")
        self.fn = fn
        self.label = label if label is not None else callable_label(fn)

    def evaluate(self, point: np.ndarray, index: int) -> np.ndarray:
        return np.array(self.fn(point, index), dtype=float)

    def describe(self) -> Dict[str, Any]:
        return {"field": "callable", "fn": self.label}


class GaugeTransformedField(BaseField):
    """
    Gauge transform of `source` by a group-valued function g(p):

        A'_μ = g A_μ g⁻¹ − (∂_μ g) g⁻¹

    so that D' = ∂ + A' satisfies D'(g s) = g (D s) and F' = g F g⁻¹.
    ∂_μ g is a central difference with step `epsilon`.
    """

    def __init__(
        self,
        source: BaseField,
        group_fn: GroupFn,
        group: LieGroup,
        epsilon: float,
        pivot_tolerance: float,
        label: str | None = None,
    ) -> None:
        self.source = source
        self.group_fn = group_fn
        self.group = group
        self.epsilon = float(epsilon)
        self.pivot_tolerance = float(pivot_tolerance)
        self.label = label if label is not None else callable_label(group_fn)

    def evaluate(self, point: np.ndarray, index: int) -> np.ndarray:
        p = np.asarray(point, dtype=float)
        g = np.array(self.group_fn(p), dtype=float)
        g_inv = self.group.inverse(g, pivot_tolerance=self.pivot_tolerance)

        p_plus = p.copy()
        p_minus = p.copy()
        p_plus[index] += self.epsilon
        p_minus[index] -= self.epsilon
        dg = (np.array(self.group_fn(p_plus), dtype=float) - np.array(self.group_fn(p_minus), dtype=float)) / (
            2.0 * self.epsilon
        )

        A = self.source.evaluate(p, index)
        return g @ A @ g_inv - dg @ g_inv

    def describe(self) -> Dict[str, Any]:
        return {"field": "gauge_transform", "source": self.source.describe(), "g": self.label}


__all__ = [
    "BaseField",
    "ZeroField",
    "ConstantField",
    "InstantonField",
    "CallableField",
    "GaugeTransformedField",
]
