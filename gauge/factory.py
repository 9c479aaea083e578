"""Canonical bundles and connections.

Bundles
- trivial_bundle(d, k): R^d × R^k with GL(k)
- tangent_bundle(d), cotangent_bundle(d): rank-d vector bundles with GL(d)
- principal_u1_bundle(d), principal_su2_bundle(d), principal_su3_bundle(d)
- line_bundle(d): complex line bundle as a real rank-2 associated bundle

Connections
- flat_connection(bundle): A ≡ 0
- constant_connection(bundle, components): A_μ = components[μ]
- instanton_connection(bundle, center, scale): 4D base, 2D fiber only
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from geom.bundle import FiberBundle
from geom.config import NumericsConfig
from geom.errors import ConstructionError, DimensionMismatchError
from geom.fiber import Fiber, FiberType
from geom.lie_group import LieGroup
from geom.manifold import Manifold
from gauge.connection import Connection
from gauge.fields import ConstantField, InstantonField, ZeroField

# Generators as used by the canonical principal bundles (real 2x2 forms)
U1_GENERATORS = (np.array([[0.0, -1.0], [1.0, 0.0]]),)
SU2_GENERATORS = (
    np.array([[0.0, 1.0], [1.0, 0.0]]),
    np.array([[0.0, -1.0], [1.0, 0.0]]),
    np.array([[1.0, 0.0], [0.0, -1.0]]),
)


def _general_linear(k: int) -> LieGroup:
    return LieGroup(f"GL({k})", k * k)


def _vector_bundle(name: str, base: Manifold, k: int) -> FiberBundle:
    group = _general_linear(k)
    return FiberBundle(name, base, Fiber(k, FiberType.VECTOR, group), group)


def trivial_bundle(base_dim: int, fiber_dim: int) -> FiberBundle:
    return _vector_bundle("Trivial", Manifold(f"R{base_dim}", base_dim), fiber_dim)


def tangent_bundle(base_dim: int) -> FiberBundle:
    return _vector_bundle("Tangent", Manifold(f"M{base_dim}", base_dim), base_dim)


def cotangent_bundle(base_dim: int) -> FiberBundle:
    return _vector_bundle("Cotangent", Manifold(f"M{base_dim}", base_dim), base_dim)


def principal_u1_bundle(base_dim: int) -> FiberBundle:
    group = LieGroup("U(1)", 1, U1_GENERATORS)
    return FiberBundle("U(1)-bundle", Manifold(f"M{base_dim}", base_dim), Fiber(1, FiberType.PRINCIPAL, group), group)


def principal_su2_bundle(base_dim: int) -> FiberBundle:
    group = LieGroup("SU(2)", 3, SU2_GENERATORS)
    return FiberBundle("SU(2)-bundle", Manifold(f"M{base_dim}", base_dim), Fiber(2, FiberType.PRINCIPAL, group), group)


def principal_su3_bundle(base_dim: int) -> FiberBundle:
    # Gell-Mann generators are complex; this real engine carries none
    group = LieGroup("SU(3)", 8)
    return FiberBundle("SU(3)-bundle", Manifold(f"M{base_dim}", base_dim), Fiber(3, FiberType.PRINCIPAL, group), group)


def line_bundle(base_dim: int) -> FiberBundle:
    group = LieGroup("U(1)", 1)
    return FiberBundle("LineBundle", Manifold(f"M{base_dim}", base_dim), Fiber(2, FiberType.ASSOCIATED, group), group)


def flat_connection(bundle: FiberBundle, config: Optional[NumericsConfig] = None) -> Connection:
    return Connection(bundle, ZeroField(bundle.fiber.dimension), config)


def constant_connection(
    bundle: FiberBundle,
    components: Sequence[Sequence[Sequence[float]]],
    config: Optional[NumericsConfig] = None,
) -> Connection:
    """
    Constant connection A_μ(p) = components[μ].

    Raises
    ------
    ConstructionError
        If the number of components differs from the base dimension.
    DimensionMismatchError
        If a component is not (k, k), k = fiber dimension.
    """
    d = bundle.base.dimension
    if len(components) != d:
        raise ConstructionError(f"need {d} connection components, got {len(components)}")
    k = bundle.fiber.dimension
    field = ConstantField(components)
    if field.components.shape[1:] != (k, k):
        raise DimensionMismatchError(
            f"connection components must be ({k}, {k}); got {field.components.shape[1:]}"
        )
    return Connection(bundle, field, config)


def instanton_connection(
    bundle: FiberBundle,
    center: Sequence[float],
    scale: float,
    config: Optional[NumericsConfig] = None,
) -> Connection:
    """
    Simplified SU(2) instanton ansatz (see gauge.fields.InstantonField).

    Raises
    ------
    ConstructionError
        Unless the base is 4-dimensional and the fiber 2-dimensional, or if scale <= 0.
    """
    if bundle.base.dimension != 4 or bundle.fiber.dimension != 2:
        raise ConstructionError(
            "instanton requires a 4D base and 2D fiber (SU(2)); "
            f"got base {bundle.base.dimension}, fiber {bundle.fiber.dimension}"
        )
    return Connection(bundle, InstantonField(center, scale), config)


__all__ = [
    "trivial_bundle",
    "tangent_bundle",
    "cotangent_bundle",
    "principal_u1_bundle",
    "principal_su2_bundle",
    "principal_su3_bundle",
    "line_bundle",
    "flat_connection",
    "constant_connection",
    "instanton_connection",
]
