"""Canonical bundles and connections."""

import numpy as np
import pytest

from geom.errors import ConstructionError, DimensionMismatchError
from geom.fiber import FiberType
from gauge.factory import (
    SU2_GENERATORS,
    constant_connection,
    cotangent_bundle,
    flat_connection,
    instanton_connection,
    line_bundle,
    principal_su2_bundle,
    principal_su3_bundle,
    principal_u1_bundle,
    tangent_bundle,
    trivial_bundle,
)


def test_tangent_bundle_dimensions() -> None:
    TM = tangent_bundle(3)
    assert TM.total_dimension == 6
    assert TM.fiber.dimension == 3
    assert TM.base.dimension == 3
    assert TM.fiber.type is FiberType.VECTOR
    assert TM.structure_group.name == "GL(3)"
    assert TM.structure_group.dimension == 9


def test_cotangent_differs_from_tangent_only_by_name() -> None:
    T, C = tangent_bundle(2), cotangent_bundle(2)
    assert C.total_dimension == T.total_dimension == 4
    assert C.fingerprint != T.fingerprint


def test_trivial_bundle() -> None:
    E = trivial_bundle(4, 2)
    assert (E.base.dimension, E.fiber.dimension, E.total_dimension) == (4, 2, 6)
    assert E.is_locally_trivial()


@pytest.mark.parametrize(
    "factory, group, group_dim, fiber_dim, n_generators",
    [
        (principal_u1_bundle, "U(1)", 1, 1, 1),
        (principal_su2_bundle, "SU(2)", 3, 2, 3),
        (principal_su3_bundle, "SU(3)", 8, 3, 0),
    ],
)
def test_principal_bundles(factory, group, group_dim, fiber_dim, n_generators) -> None:
    P = factory(4)
    assert P.structure_group.name == group
    assert P.structure_group.dimension == group_dim
    assert P.structure_group.algebra_dimension == n_generators
    assert P.fiber.dimension == fiber_dim
    assert P.fiber.type is FiberType.PRINCIPAL
    assert P.total_dimension == 4 + fiber_dim


def test_su2_generators_traceless() -> None:
    for G in principal_su2_bundle(4).structure_group.generators:
        assert abs(np.trace(G)) == 0.0
    assert len(SU2_GENERATORS) == 3


def test_line_bundle() -> None:
    L = line_bundle(2)
    assert L.fiber.dimension == 2
    assert L.fiber.type is FiberType.ASSOCIATED
    assert L.structure_group.name == "U(1)"


def test_flat_connection_components_zero() -> None:
    conn = flat_connection(tangent_bundle(3))
    for mu in range(3):
        np.testing.assert_array_equal(conn.component([1.0, 2.0, 3.0], mu), np.zeros((3, 3)))
    assert conn.fingerprint == flat_connection(tangent_bundle(3)).fingerprint


def test_constant_connection_errors() -> None:
    bundle = trivial_bundle(2, 2)
    with pytest.raises(ConstructionError):
        constant_connection(bundle, [np.eye(2)])
    with pytest.raises(DimensionMismatchError):
        constant_connection(bundle, [np.eye(3), np.eye(3)])
    with pytest.raises(DimensionMismatchError):
        constant_connection(bundle, [[1.0, 2.0], [3.0, 4.0]])


def test_constant_connection_components_are_copies() -> None:
    conn = constant_connection(trivial_bundle(1, 2), [np.eye(2)])
    A = conn.component([0.0], 0)
    A[0, 0] = 99.0
    np.testing.assert_array_equal(conn.component([0.0], 0), np.eye(2))


def test_instanton_requires_4d_base_and_2d_fiber() -> None:
    with pytest.raises(ConstructionError):
        instanton_connection(tangent_bundle(4), [0.0] * 4, 1.0)
    with pytest.raises(ConstructionError):
        instanton_connection(principal_su2_bundle(3), [0.0] * 4, 1.0)
    with pytest.raises(ConstructionError):
        instanton_connection(principal_su2_bundle(4), [0.0] * 4, 0.0)
    with pytest.raises(DimensionMismatchError):
        instanton_connection(principal_su2_bundle(4), [0.0] * 3, 1.0)


def test_instanton_potential_profile() -> None:
    conn = instanton_connection(principal_su2_bundle(4), [0.0] * 4, 1.0)
    # Potential vanishes on the x₃ = c₃ hyperplane and along direction 3
    np.testing.assert_array_equal(conn.component([0.5, 0.5, 0.5, 0.0], 0), np.zeros((2, 2)))
    np.testing.assert_array_equal(conn.component([0.5, 0.5, 0.5, 1.0], 3), np.zeros((2, 2)))
    # |x|² = 1, ρ = 1, x₃ = 1: factor 1/2
    np.testing.assert_allclose(
        conn.component([0.0, 0.0, 0.0, 1.0], 2), [[0.5, 0.0], [0.0, -0.5]], atol=0.0
    )
    assert not conn.is_flat([0.3, -0.2, 0.1, 0.5])
