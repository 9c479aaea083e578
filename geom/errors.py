"""Error taxonomy for bundle construction and numerical preconditions."""
from __future__ import annotations


class ConstructionError(ValueError):
    """Invalid arguments when building a manifold, fiber, bundle or connection."""


class DimensionMismatchError(ValueError):
    """A coordinate vector or matrix does not have the size its owner requires."""


class DirectionRangeError(IndexError):
    """A base-direction index lies outside [0, base dimension)."""


class SingularMatrixError(ValueError):
    """Matrix inversion met a zero determinant or a pivot below tolerance."""


__all__ = [
    "ConstructionError",
    "DimensionMismatchError",
    "DirectionRangeError",
    "SingularMatrixError",
]
