"""Numerical knobs shared by connections, transport and group inversion."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

import numpy as np


INTEGRATORS = ("euler", "rk4")


# ---- Public configuration ----

@dataclass(frozen=True)
class NumericsConfig:
    # Central finite-difference step for ∂_μ
    epsilon: float = 1e-6
    # Entrywise bound on F_μν for is_flat
    flat_tolerance: float = 1e-10
    # Default number of transport/holonomy steps over t ∈ [0, 1]
    transport_steps: int = 100
    # |pivot| at or below this raises SingularMatrixError
    pivot_tolerance: float = 1e-12
    # Transport stepping rule, one of INTEGRATORS
    integrator: str = "euler"

    def __post_init__(self) -> None:
        if not (np.isfinite(self.epsilon) and float(self.epsilon) > 0.0):
            raise ValueError("epsilon must be a positive finite float")
        if not (np.isfinite(self.flat_tolerance) and float(self.flat_tolerance) > 0.0):
            raise ValueError("flat_tolerance must be a positive finite float")
        if isinstance(self.transport_steps, bool) or not isinstance(self.transport_steps, int):
            raise ValueError("transport_steps must be an integer")
        if self.transport_steps < 1:
            raise ValueError("transport_steps must be >= 1")
        if not (np.isfinite(self.pivot_tolerance) and float(self.pivot_tolerance) >= 0.0):
            raise ValueError("pivot_tolerance must be a nonnegative finite float")
        if self.integrator not in INTEGRATORS:
            raise ValueError(f"integrator must be one of {INTEGRATORS}, got {self.integrator!r}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "NumericsConfig":
        """Build a config from a plain dict; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"unknown numerics keys: {unknown}")
        return cls(**dict(values))


DEFAULT_NUMERICS = NumericsConfig()


__all__ = ["NumericsConfig", "DEFAULT_NUMERICS", "INTEGRATORS"]
