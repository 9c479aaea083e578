"""Fibers and points in a fiber, with the structure-group action."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union

import numpy as np

from geom.errors import ConstructionError, DimensionMismatchError
from geom.lie_group import LieGroup
from utils.fingerprint import fingerprint as _fingerprint


class FiberType(str, Enum):
    VECTOR = "vector"
    PRINCIPAL = "principal"
    ASSOCIATED = "associated"


@dataclass(frozen=True, eq=False)
class Fiber:
    """Fiber of a given dimension and type, acted on by `structure_group`."""

    dimension: int
    type: Union[FiberType, str]
    structure_group: LieGroup
    fingerprint: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.dimension, bool) or not isinstance(self.dimension, (int, np.integer)):
            raise ConstructionError("fiber dimension must be an integer")
        if self.dimension < 1:
            raise ConstructionError(f"fiber dimension must be >= 1, got {self.dimension}")
        try:
            ftype = FiberType(self.type)
        except ValueError as e:
            raise ConstructionError(
                f"fiber type must be one of {[t.value for t in FiberType]}, got {self.type!r}"
            ) from e
        object.__setattr__(self, "dimension", int(self.dimension))
        object.__setattr__(self, "type", ftype)
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint(
                "Fiber",
                {"dimension": self.dimension, "type": ftype.value, "group": self.structure_group.fingerprint},
            ),
        )

    def point(self, coords: Sequence[float]) -> "FiberPoint":
        if len(coords) != self.dimension:
            raise DimensionMismatchError(
                f"coordinates dimension ({len(coords)}) must equal fiber dimension ({self.dimension})"
            )
        return FiberPoint(self, coords)


@dataclass(frozen=True, eq=False)
class FiberPoint:
    fiber: Fiber
    coordinates: np.ndarray
    fingerprint: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        coords = np.array(self.coordinates, dtype=float)
        if coords.shape != (self.fiber.dimension,):
            raise DimensionMismatchError(
                f"coordinates must have shape ({self.fiber.dimension},); got {coords.shape}"
            )
        coords.setflags(write=False)
        object.__setattr__(self, "coordinates", coords)
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint("FiberPoint", {"fiber": self.fiber.fingerprint, "coordinates": coords}),
        )

    def act(self, g: Sequence[Sequence[float]]) -> "FiberPoint":
        """Left action g · p by matrix-vector product; returns a new point."""
        g = np.asarray(g, dtype=float)
        n = self.fiber.dimension
        if g.shape != (n, n):
            raise DimensionMismatchError(f"group element must have shape ({n}, {n}); got {g.shape}")
        return FiberPoint(self.fiber, g @ self.coordinates)


__all__ = ["FiberType", "Fiber", "FiberPoint"]
