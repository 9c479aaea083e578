"""Parallel transport, holonomy and the integrator strategies."""

import math

import numpy as np
import pytest

from geom.config import NumericsConfig
from geom.errors import DimensionMismatchError
from gauge.connection import Connection
from gauge.factory import constant_connection, flat_connection, principal_u1_bundle, trivial_bundle
from gauge.integrators import EulerIntegrator, RK4Integrator, get_integrator
from gauge.transport import ParallelTransport

J = np.array([[0.0, -1.0], [1.0, 0.0]])


def _unit_square(t: float) -> list:
    s = 4.0 * t
    if s <= 1.0:
        return [s, 0.0]
    if s <= 2.0:
        return [1.0, s - 1.0]
    if s <= 3.0:
        return [3.0 - s, 1.0]
    return [0.0, 4.0 - s]


def _square(side: float):
    return lambda t: [side * c for c in _unit_square(t)]


def _unit_field_strength(p, mu):
    return [[p[0]]] if mu == 1 else [[0.0]]


def _rotation_connection(theta: float, **cfg) -> Connection:
    bundle = trivial_bundle(2, 2)
    return constant_connection(bundle, [theta * J, np.zeros((2, 2))], NumericsConfig(**cfg))


def _expected_rotation(theta: float) -> np.ndarray:
    # U = exp(−θJ) for a unit-speed straight path along axis 0
    c, s = math.cos(theta), math.sin(theta)
    return np.array([[c, s], [-s, c]])


def test_flat_holonomy_is_identity() -> None:
    pt = ParallelTransport(flat_connection(trivial_bundle(2, 2)))
    H = pt.holonomy([0.0, 0.0], _unit_square, steps=100)
    np.testing.assert_array_equal(H, np.eye(2))
    assert math.isclose(float(np.trace(H)), 2.0, abs_tol=0.1)


def test_flat_transport_any_path_rk4() -> None:
    pt = ParallelTransport(flat_connection(trivial_bundle(3, 2)), integrator="rk4")
    U = pt.transport(lambda t: [math.sin(t), t * t, -t], steps=17)
    np.testing.assert_array_equal(U, np.eye(2))


def test_rk4_beats_euler_on_constant_rotation() -> None:
    theta = 1.0
    conn = _rotation_connection(theta)
    path = lambda t: [t, 0.0]  # noqa: E731
    expected = _expected_rotation(theta)

    U_euler = ParallelTransport(conn, EulerIntegrator()).transport(path, steps=20)
    U_rk4 = ParallelTransport(conn, RK4Integrator()).transport(path, steps=20)
    err_euler = float(np.max(np.abs(U_euler - expected)))
    err_rk4 = float(np.max(np.abs(U_rk4 - expected)))

    assert err_rk4 < 1e-6
    assert err_euler > 1e-3
    assert err_euler > 100.0 * err_rk4


def test_abelian_holonomy_matches_enclosed_flux() -> None:
    # F_01 = 1, so the loop picks up exp(−area)
    conn = Connection(principal_u1_bundle(2), _unit_field_strength)
    side = 0.5
    expected = math.exp(-side * side)
    pt = ParallelTransport(conn)

    coarse = abs(pt.holonomy([0.0, 0.0], _square(side), steps=40)[0, 0] - expected)
    fine = abs(pt.holonomy([0.0, 0.0], _square(side), steps=2000)[0, 0] - expected)
    assert fine < 5e-3
    assert fine < coarse

    rk4 = ParallelTransport(conn, "rk4").holonomy([0.0, 0.0], _square(side), steps=2000)
    assert abs(rk4[0, 0] - expected) < 5e-3


def test_integrator_from_config() -> None:
    assert ParallelTransport(_rotation_connection(0.5)).integrator.name == "euler"
    assert ParallelTransport(_rotation_connection(0.5, integrator="rk4")).integrator.name == "rk4"
    assert isinstance(ParallelTransport(_rotation_connection(0.5), "rk4").integrator, RK4Integrator)


def test_unknown_integrator() -> None:
    with pytest.raises(ValueError):
        get_integrator("midpoint")
    with pytest.raises(ValueError):
        ParallelTransport(_rotation_connection(0.5), "leapfrog")


def test_default_steps_from_config() -> None:
    theta = 0.5
    conn = _rotation_connection(theta, transport_steps=7)
    path = lambda t: [t, 0.0]  # noqa: E731
    pt = ParallelTransport(conn)
    np.testing.assert_array_equal(pt.transport(path), pt.transport(path, steps=7))


@pytest.mark.parametrize("steps", [0, -3, 2.5, True])
def test_steps_validation(steps) -> None:
    pt = ParallelTransport(flat_connection(trivial_bundle(2, 1)))
    with pytest.raises(ValueError):
        pt.transport(lambda t: [t, t], steps=steps)


def test_path_dimension_checked() -> None:
    pt = ParallelTransport(flat_connection(trivial_bundle(2, 1)))
    with pytest.raises(DimensionMismatchError):
        pt.transport(lambda t: [t, t, t], steps=4)
    with pytest.raises(DimensionMismatchError):
        pt.holonomy([0.0], _unit_square, steps=4)


def test_open_loop_is_not_rejected() -> None:
    pt = ParallelTransport(flat_connection(trivial_bundle(2, 1)))
    H = pt.holonomy([0.0, 0.0], lambda t: [t, 0.0], steps=4)
    np.testing.assert_array_equal(H, np.eye(1))


def test_transport_point() -> None:
    theta = 0.8
    conn = _rotation_connection(theta)
    fiber = conn.bundle.fiber
    moved = ParallelTransport(conn, "rk4").transport_point(fiber.point([1.0, 0.0]), lambda t: [t, 0.0], steps=50)
    np.testing.assert_allclose(moved.coordinates, [math.cos(theta), -math.sin(theta)], atol=1e-7)
    assert moved.fiber is fiber


def test_transport_fingerprint_follows_connection() -> None:
    a = ParallelTransport(_rotation_connection(0.5))
    b = ParallelTransport(_rotation_connection(0.5), "rk4")
    c = ParallelTransport(_rotation_connection(0.6))
    assert a.fingerprint == b.fingerprint
    assert a.fingerprint != c.fingerprint
