"""Fixed-step integrators for the transport equation dU/dt = −M(t) U.

Invariants
- Deterministic; no step-size control.
- EulerIntegrator is first-order: U ← U − dt · M(t) · U.
- RK4Integrator is the classical fourth-order Runge–Kutta step.

Integrators are strategies: ParallelTransport only calls `step`, so a new
scheme needs no change to connections or curvature.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, Type

import numpy as np

GeneratorFn = Callable[[float], np.ndarray]


class TransportIntegrator(ABC):
    name: str = ""

    @abstractmethod
    def step(self, U: np.ndarray, generator: GeneratorFn, t: float, dt: float) -> np.ndarray:
        """Advance U from t to t + dt; must return a new array."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EulerIntegrator(TransportIntegrator):
    name = "euler"

    def step(self, U: np.ndarray, generator: GeneratorFn, t: float, dt: float) -> np.ndarray:
        M = generator(t)
        return U - dt * (M @ U)


class RK4Integrator(TransportIntegrator):
    name = "rk4"

    def step(self, U: np.ndarray, generator: GeneratorFn, t: float, dt: float) -> np.ndarray:
        M0 = generator(t)
        M_half = generator(t + 0.5 * dt)
        M1 = generator(t + dt)
        k1 = -(M0 @ U)
        k2 = -(M_half @ (U + 0.5 * dt * k1))
        k3 = -(M_half @ (U + 0.5 * dt * k2))
        k4 = -(M1 @ (U + dt * k3))
        return U + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


_REGISTRY: Dict[str, Type[TransportIntegrator]] = {
    EulerIntegrator.name: EulerIntegrator,
    RK4Integrator.name: RK4Integrator,
}


def get_integrator(name: str) -> TransportIntegrator:
    """Instantiate an integrator by name ("euler" | "rk4")."""
    try:
        return _REGISTRY[name]()
    except KeyError:
        raise ValueError(f"unknown integrator {name!r}; expected one of {sorted(_REGISTRY)}") from None


__all__ = [
    "TransportIntegrator",
    "EulerIntegrator",
    "RK4Integrator",
    "get_integrator",
]
