"""Bundle scaffolding: manifolds, charts, matrix Lie groups, fibers, bundles and sections.

Modules
- errors: construction / dimension / range / singular-matrix error kinds
- config: NumericsConfig (finite-difference step, tolerances, transport steps)
- manifold: Manifold, Chart
- lie_group: LieGroup (identity, multiply, inverse)
- fiber: FiberType, Fiber, FiberPoint
- bundle: FiberBundle, Section
"""
from .errors import (
    ConstructionError,
    DimensionMismatchError,
    DirectionRangeError,
    SingularMatrixError,
)
from .config import NumericsConfig, DEFAULT_NUMERICS
from .manifold import Manifold, Chart
from .lie_group import LieGroup
from .fiber import FiberType, Fiber, FiberPoint
from .bundle import FiberBundle, Section

__all__ = [
    "ConstructionError",
    "DimensionMismatchError",
    "DirectionRangeError",
    "SingularMatrixError",
    "NumericsConfig",
    "DEFAULT_NUMERICS",
    "Manifold",
    "Chart",
    "LieGroup",
    "FiberType",
    "Fiber",
    "FiberPoint",
    "FiberBundle",
    "Section",
]
