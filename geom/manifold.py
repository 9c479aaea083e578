"""Base manifolds and local charts.

A Manifold is described only by a name, a coordinate dimension and coordinate
labels. Points are plain coordinate vectors of that dimension.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from geom.errors import ConstructionError, DimensionMismatchError
from utils.fingerprint import fingerprint as _fingerprint


@dataclass(frozen=True)
class Manifold:
    name: str
    dimension: int
    coordinates: Optional[Tuple[str, ...]] = None
    fingerprint: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.dimension, bool) or not isinstance(self.dimension, (int, np.integer)):
            raise ConstructionError("dimension must be an integer")
        if self.dimension <= 0:
            raise ConstructionError(f"dimension must be positive, got {self.dimension}")
        coords = self.coordinates
        if coords is None:
            coords = tuple(f"x{i}" for i in range(int(self.dimension)))
        else:
            coords = tuple(str(c) for c in coords)
        if len(coords) != self.dimension:
            raise DimensionMismatchError(
                f"number of coordinates ({len(coords)}) must equal dimension ({self.dimension})"
            )
        object.__setattr__(self, "dimension", int(self.dimension))
        object.__setattr__(self, "coordinates", coords)
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint("Manifold", {"name": self.name, "dimension": self.dimension, "coordinates": coords}),
        )

    def contains_point(self, point: Sequence[float]) -> bool:
        return len(point) == self.dimension

    def create_chart(self, center: Sequence[float]) -> "Chart":
        """Chart centered at `center`; raises DimensionMismatchError on a wrong-length point."""
        if len(center) != self.dimension:
            raise DimensionMismatchError(
                f"point dimension ({len(center)}) must equal manifold dimension ({self.dimension})"
            )
        return Chart(self, center)


@dataclass(frozen=True, eq=False)
class Chart:
    """Local coordinate patch: coordinates measured relative to `center`."""

    manifold: Manifold
    center: np.ndarray
    fingerprint: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        center = np.array(self.center, dtype=float)
        if center.shape != (self.manifold.dimension,):
            raise DimensionMismatchError(
                f"center must have shape ({self.manifold.dimension},); got {center.shape}"
            )
        center.setflags(write=False)
        object.__setattr__(self, "center", center)
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint("Chart", {"manifold": self.manifold.fingerprint, "center": center}),
        )

    def local_coordinates(self, point: Sequence[float]) -> np.ndarray:
        point = np.asarray(point, dtype=float)
        if point.shape != self.center.shape:
            raise DimensionMismatchError(
                f"point must have shape {self.center.shape}; got {point.shape}"
            )
        return point - self.center


__all__ = ["Manifold", "Chart"]
