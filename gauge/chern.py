"""Chern numbers and a truncated Chern character from the curvature two-form.

Definitions (pointwise densities, no integration over the base)
- c₁(μ, ν) = Tr(F_μν) / (2π)
- c₂ = (1 / 8π²) Σ_{μ<ν} Tr(F_μν F_μν)
- ch = rank + c₁ + (c₁² − 2 c₂) / 2, truncated at order 0, 1 or 2;
  c₁ is taken in the (0, 1) plane.

Invariant: a flat connection gives c₁ = c₂ = 0 and ch = rank.
"""
from __future__ import annotations

import math
from typing import Dict, Sequence

import numpy as np

from gauge.curvature import Curvature2Form
from utils.fingerprint import fingerprint as _fingerprint


class ChernClass:
    def __init__(self, curvature: Curvature2Form) -> None:
        self._curvature = curvature
        self._fingerprint = _fingerprint("ChernClass", {"curvature": curvature.fingerprint})

    @property
    def curvature(self) -> Curvature2Form:
        return self._curvature

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    @property
    def rank(self) -> int:
        return self._curvature.connection.bundle.fiber.dimension

    def first_chern_number(self, point: Sequence[float], mu: int, nu: int) -> float:
        return self._curvature.trace(point, mu, nu) / (2.0 * math.pi)

    def second_chern_number(self, point: Sequence[float]) -> float:
        d = self._curvature.connection.bundle.base.dimension
        total = 0.0
        for mu in range(d):
            for nu in range(mu + 1, d):
                F = self._curvature.at(point, mu, nu)
                total += float(np.trace(F @ F))
        return total / (8.0 * math.pi * math.pi)

    def chern_character(self, point: Sequence[float], order: int = 2) -> float:
        """
        Truncated Chern character rank + c₁ + (c₁² − 2c₂)/2.

        Raises
        ------
        ValueError
            If order is not 0, 1 or 2.
        """
        if order not in (0, 1, 2):
            raise ValueError(f"order must be 0, 1 or 2, got {order!r}")
        ch = float(self.rank)
        d = self._curvature.connection.bundle.base.dimension
        if order == 0 or d < 2:
            return ch
        c1 = self.first_chern_number(point, 0, 1)
        ch += c1
        if order >= 2:
            c2 = self.second_chern_number(point)
            ch += (c1 * c1 - 2.0 * c2) / 2.0
        return ch

    def summary(self, point: Sequence[float]) -> Dict[str, float]:
        """c1 (0,1 plane), c2 and ch at `point`, keyed for log_metrics."""
        d = self._curvature.connection.bundle.base.dimension
        c1 = self.first_chern_number(point, 0, 1) if d >= 2 else 0.0
        return {
            "c1": c1,
            "c2": self.second_chern_number(point),
            "ch": self.chern_character(point, order=2),
        }


__all__ = ["ChernClass"]
