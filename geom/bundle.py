"""Fiber bundles E = M ×_G F and their sections.

Invariants
- Total dimension = base dimension + fiber dimension.
- Locally trivial by construction: no transition functions are modeled, so the
  fiber over every base point is the same Fiber object.
- Sections are pure functions of the base point; add/scale compose new sections
  without evaluating anything eagerly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Callable, Sequence, Union

import numpy as np

from geom.errors import DimensionMismatchError
from geom.fiber import Fiber
from geom.lie_group import LieGroup
from geom.manifold import Manifold
from utils.fingerprint import callable_label, fingerprint as _fingerprint

SectionFn = Callable[[np.ndarray], Sequence[float]]
ScaleFn = Callable[[np.ndarray], float]


@dataclass(frozen=True, eq=False)
class FiberBundle:
    name: str
    base: Manifold
    fiber: Fiber
    structure_group: LieGroup
    fingerprint: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint(
                "FiberBundle",
                {
                    "name": self.name,
                    "base": self.base.fingerprint,
                    "fiber": self.fiber.fingerprint,
                    "group": self.structure_group.fingerprint,
                },
            ),
        )

    @property
    def total_dimension(self) -> int:
        return self.base.dimension + self.fiber.dimension

    def project(self, total_point: Sequence[float]) -> np.ndarray:
        """π: E → M, the first base.dimension coordinates of a total-space point."""
        total_point = np.asarray(total_point, dtype=float)
        if total_point.ndim != 1 or total_point.shape[0] < self.base.dimension:
            raise DimensionMismatchError(
                f"total-space point needs at least {self.base.dimension} coordinates; got shape {total_point.shape}"
            )
        return total_point[: self.base.dimension].copy()

    def fiber_at(self, base_point: Sequence[float]) -> Fiber:
        # All fibers are isomorphic
        return self.fiber

    def create_section(self, fn: SectionFn, label: str | None = None) -> "Section":
        return Section(self, fn, label if label is not None else callable_label(fn))

    def is_locally_trivial(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class Section:
    """
    A section s: M → E given by a function base point -> fiber coordinates.

    `label` identifies the function for fingerprinting; composed sections build
    their label from the operands' fingerprints.
    """

    bundle: FiberBundle
    fn: SectionFn
    label: str = ""
    fingerprint: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        label = self.label or callable_label(self.fn)
        object.__setattr__(self, "label", label)
        object.__setattr__(
            self,
            "fingerprint",
            _fingerprint("Section", {"bundle": self.bundle.fingerprint, "fn": label}),
        )

    def at(self, base_point: Sequence[float]) -> np.ndarray:
        p = np.array(base_point, dtype=float)
        if p.shape != (self.bundle.base.dimension,):
            raise DimensionMismatchError(
                f"base point must have shape ({self.bundle.base.dimension},); got {p.shape}"
            )
        value = np.array(self.fn(p), dtype=float)
        k = self.bundle.fiber.dimension
        if value.shape != (k,):
            raise DimensionMismatchError(f"section value must have shape ({k},); got {value.shape}")
        return value

    def __call__(self, base_point: Sequence[float]) -> np.ndarray:
        return self.at(base_point)

    def add(self, other: "Section") -> "Section":
        """Pointwise sum (s1 + s2)(p) = s1(p) + s2(p)."""
        if other.bundle.fingerprint != self.bundle.fingerprint:
            raise ValueError("sections must belong to the same bundle to be added")
        first, second = self, other
        return Section(
            self.bundle,
            lambda p: first.at(p) + second.at(p),
            f"add({first.fingerprint},{second.fingerprint})",
        )

    def scale(self, factor: Union[float, ScaleFn]) -> "Section":
        """Pointwise scaling by a constant or by a function f(p)."""
        src = self
        if isinstance(factor, Real):
            c = float(factor)
            return Section(self.bundle, lambda p: c * src.at(p), f"scale({src.fingerprint},{c!r})")
        if not callable(factor):
            raise TypeError("factor must be a real number or a callable of the base point")
        return Section(
            self.bundle,
            lambda p: float(factor(p)) * src.at(p),
            f"scale({src.fingerprint},{callable_label(factor)})",
        )


__all__ = ["FiberBundle", "Section"]
