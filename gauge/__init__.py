"""Gauge fields on fiber bundles.

Modules
- fields: BaseField interface and canonical potentials (zero, constant, instanton)
- connection: Connection (covariant derivative, curvature, flatness, gauge transforms)
- curvature: Curvature2Form (components, trace, curvature scalar)
- integrators: Euler / RK4 stepping strategies for transport
- transport: ParallelTransport (transport matrices, holonomy)
- chern: ChernClass (c₁, c₂, truncated Chern character)
- factory: canonical bundles and connections
- audit: structural self-check and module manifest
"""
from .fields import (
    BaseField,
    ZeroField,
    ConstantField,
    InstantonField,
    CallableField,
    GaugeTransformedField,
)
from .connection import Connection
from .curvature import Curvature2Form
from .integrators import TransportIntegrator, EulerIntegrator, RK4Integrator, get_integrator
from .transport import ParallelTransport
from .chern import ChernClass
from .factory import (
    trivial_bundle,
    tangent_bundle,
    cotangent_bundle,
    principal_u1_bundle,
    principal_su2_bundle,
    principal_su3_bundle,
    line_bundle,
    flat_connection,
    constant_connection,
    instanton_connection,
)
from .audit import AuditConfig, validate_bundle, module_manifest

__all__ = [
    "BaseField",
    "ZeroField",
    "ConstantField",
    "InstantonField",
    "CallableField",
    "GaugeTransformedField",
    "Connection",
    "Curvature2Form",
    "TransportIntegrator",
    "EulerIntegrator",
    "RK4Integrator",
    "get_integrator",
    "ParallelTransport",
    "ChernClass",
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
    "AuditConfig",
    "validate_bundle",
    "module_manifest",
]
