"""Self-check of a connection against the structural identities of the engine.

validate_bundle(connection, base_point) -> (ok, meta) where meta contains:
  - 'checks': dict[str, bool] per identity
  - 'reasons': list[str] of failure reasons (empty if ok)
  - 'fingerprint': the connection fingerprint the checks were run against

Checks
- projection: π(p, 0) = p
- antisymmetry: F_μν = −F_νμ
- gauge_covariance: Tr F_μν unchanged under a constant gauge rotation
- flat_transport: the flat connection on the same bundle has trivial holonomy
- flat_chern: the flat connection has c₁ = c₂ = 0 and ch = rank
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from geom.errors import SingularMatrixError
from gauge.chern import ChernClass
from gauge.connection import Connection
from gauge.curvature import Curvature2Form
from gauge.factory import flat_connection
from gauge.transport import ParallelTransport
from utils.fingerprint import fingerprint as _fingerprint
from utils.logging import get_logger

_log = get_logger("gauge.audit")

EXPORTED_CLASSES = (
    "Manifold",
    "Chart",
    "LieGroup",
    "Fiber",
    "FiberPoint",
    "FiberBundle",
    "Section",
    "Connection",
    "Curvature2Form",
    "ParallelTransport",
    "ChernClass",
)


@dataclass(frozen=True)
class AuditConfig:
    antisymmetry_atol: float = 1e-8
    trace_atol: float = 1e-6
    holonomy_atol: float = 1e-9
    chern_atol: float = 1e-12
    loop_size: float = 0.1
    loop_steps: int = 40


def _square_loop(base_point: np.ndarray, size: float):
    """Counter-clockwise square of side `size` in the (0, 1) plane (axis 0 only if d == 1)."""
    d = base_point.shape[0]
    e0 = np.zeros(d)
    e0[0] = size
    e1 = np.zeros(d)
    if d > 1:
        e1[1] = size

    def loop(t: float) -> np.ndarray:
        s = 4.0 * min(max(t, 0.0), 1.0)
        if s <= 1.0:
            return base_point + s * e0
        if s <= 2.0:
            return base_point + e0 + (s - 1.0) * e1
        if s <= 3.0:
            return base_point + (3.0 - s) * e0 + e1
        return base_point + (4.0 - s) * e1

    return loop


def _constant_rotation(k: int) -> np.ndarray:
    g = np.eye(k, dtype=float)
    if k == 1:
        return 2.0 * g
    c, s = np.cos(0.3), np.sin(0.3)
    g[:2, :2] = [[c, -s], [s, c]]
    return g


def validate_bundle(
    connection: Connection,
    base_point: Sequence[float],
    cfg: AuditConfig | None = None,
) -> Tuple[bool, Dict[str, Any]]:
    """Run every structural check at `base_point`; never raises for a failed check."""
    _cfg = cfg or AuditConfig()
    bundle = connection.bundle
    p = np.asarray(base_point, dtype=float)
    d = bundle.base.dimension
    k = bundle.fiber.dimension
    reasons: List[str] = []
    checks: Dict[str, bool] = {}

    # --- Projection ---
    total = np.concatenate([p, np.zeros(k)])
    checks["projection"] = bool(np.array_equal(bundle.project(total), p))
    if not checks["projection"]:
        reasons.append("projection: π(p, 0) != p")

    # --- Antisymmetry of F ---
    curv = Curvature2Form(connection)
    worst = 0.0
    for mu in range(d):
        for nu in range(mu + 1, d):
            diff = curv.at(p, mu, nu) + curv.at(p, nu, mu)
            worst = max(worst, float(np.max(np.abs(diff))))
    checks["antisymmetry"] = worst <= _cfg.antisymmetry_atol
    if not checks["antisymmetry"]:
        reasons.append(f"antisymmetry: max |F_μν + F_νμ| = {worst:.3g} exceeds {_cfg.antisymmetry_atol}")

    # --- Gauge covariance of Tr F ---
    g = _constant_rotation(k)
    try:
        rotated = Curvature2Form(connection.gauge_transform(lambda _p: g, label="constant_rotation"))
        drift = 0.0
        for mu in range(d):
            for nu in range(mu + 1, d):
                drift = max(drift, abs(rotated.trace(p, mu, nu) - curv.trace(p, mu, nu)))
        checks["gauge_covariance"] = drift <= _cfg.trace_atol
        if not checks["gauge_covariance"]:
            reasons.append(f"gauge_covariance: Tr F drift {drift:.3g} exceeds {_cfg.trace_atol}")
    except SingularMatrixError as e:
        checks["gauge_covariance"] = False
        reasons.append(f"gauge_covariance: {e}")

    # --- Flat transport ---
    flat = flat_connection(bundle, connection.config)
    H = ParallelTransport(flat).holonomy(p, _square_loop(p, _cfg.loop_size), steps=_cfg.loop_steps)
    dev = float(np.max(np.abs(H - np.eye(k))))
    checks["flat_transport"] = dev <= _cfg.holonomy_atol
    if not checks["flat_transport"]:
        reasons.append(f"flat_transport: max |H − I| = {dev:.3g} exceeds {_cfg.holonomy_atol}")

    # --- Vanishing Chern data for the flat connection ---
    chern = ChernClass(Curvature2Form(flat))
    summary = chern.summary(p)
    chern_ok = (
        abs(summary["c1"]) <= _cfg.chern_atol
        and abs(summary["c2"]) <= _cfg.chern_atol
        and abs(summary["ch"] - k) <= _cfg.chern_atol
    )
    checks["flat_chern"] = chern_ok
    if not chern_ok:
        reasons.append(f"flat_chern: expected c1=c2=0, ch={k}; got {summary}")

    ok = all(checks.values())
    if not ok:
        _log.debug("audit failed for %s: %s", connection.fingerprint, "; ".join(reasons))
    meta: Dict[str, Any] = {"reasons": reasons, "checks": checks, "fingerprint": connection.fingerprint}
    return ok, meta


def module_manifest() -> Dict[str, Any]:
    """Names of the exported geometry classes with a fingerprint over them."""
    return {
        "module": "gauge",
        "classes": list(EXPORTED_CLASSES),
        "fingerprint": _fingerprint("Manifest", {"module": "gauge", "classes": list(EXPORTED_CLASSES)}),
    }


__all__ = ["AuditConfig", "validate_bundle", "module_manifest", "EXPORTED_CLASSES"]
