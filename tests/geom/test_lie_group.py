"""Group axioms and hardened inverse for matrix Lie groups."""

import numpy as np
import pytest

from geom.errors import DimensionMismatchError, SingularMatrixError
from geom.lie_group import LieGroup


def test_identity_matrix() -> None:
    G = LieGroup("GL(3)", 9)
    np.testing.assert_array_equal(G.identity(3), np.eye(3))


def test_multiply_known_product() -> None:
    G = LieGroup("GL(2)", 4)
    AB = G.multiply([[1, 2], [3, 4]], [[5, 6], [7, 8]])
    np.testing.assert_array_equal(AB, [[19, 22], [43, 50]])


def test_identity_is_left_neutral() -> None:
    G = LieGroup("GL(4)", 16)
    rng = np.random.default_rng(0)
    A = rng.standard_normal((4, 4))
    np.testing.assert_allclose(G.multiply(G.identity(4), A), A, rtol=0.0, atol=0.0)


def test_inverse_2x2_closed_form() -> None:
    G = LieGroup("GL(2)", 4)
    A = [[1.0, 2.0], [3.0, 4.0]]
    Ainv = G.inverse(A)
    np.testing.assert_allclose(Ainv, [[-2.0, 1.0], [1.5, -0.5]], atol=1e-12)
    np.testing.assert_allclose(G.multiply(A, Ainv), np.eye(2), atol=1e-12)


def test_inverse_1x1() -> None:
    G = LieGroup("U(1)", 1)
    np.testing.assert_allclose(G.inverse([[4.0]]), [[0.25]])


def test_inverse_3x3_gauss_jordan() -> None:
    G = LieGroup("GL(3)", 9)
    A = np.array([[1.0, 2.0, 1.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0]])
    np.testing.assert_allclose(G.multiply(A, G.inverse(A)), np.eye(3), atol=1e-12)


def test_inverse_needs_pivoting() -> None:
    # Zero in the leading position forces a row swap
    G = LieGroup("GL(3)", 9)
    A = np.array([[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [4.0, -3.0, 8.0]])
    np.testing.assert_allclose(G.inverse(A), np.linalg.inv(A), atol=1e-12)


def test_inverse_random_matches_numpy() -> None:
    G = LieGroup("GL(6)", 36)
    rng = np.random.default_rng(1)
    A = rng.standard_normal((6, 6)) + 6.0 * np.eye(6)
    np.testing.assert_allclose(G.inverse(A), np.linalg.inv(A), atol=1e-10)
    np.testing.assert_allclose(A @ G.inverse(A), np.eye(6), atol=1e-10)


def test_inverse_does_not_alias_input() -> None:
    G = LieGroup("GL(3)", 9)
    A = np.array([[2.0, 0.0, 0.0], [0.0, 3.0, 0.0], [0.0, 0.0, 4.0]])
    before = A.copy()
    Ainv = G.inverse(A)
    Ainv[0, 0] = 99.0
    np.testing.assert_array_equal(A, before)


@pytest.mark.parametrize(
    "A",
    [
        [[0.0]],
        [[1.0, 2.0], [2.0, 4.0]],
        [[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [0.0, 1.0, 1.0]],
    ],
)
def test_singular_inverse_raises(A) -> None:
    G = LieGroup("GL", 1)
    with pytest.raises(SingularMatrixError):
        G.inverse(A)


def test_multiply_size_mismatch_raises() -> None:
    G = LieGroup("GL(2)", 4)
    with pytest.raises(DimensionMismatchError):
        G.multiply(np.eye(2), np.eye(3))
    with pytest.raises(DimensionMismatchError):
        G.multiply(np.ones((2, 3)), np.ones((3, 2)))
    with pytest.raises(DimensionMismatchError):
        G.inverse(np.ones((2, 3)))


def test_generators_and_fingerprint() -> None:
    sigma = [[[0, 1], [1, 0]], [[0, -1], [1, 0]], [[1, 0], [0, -1]]]
    G = LieGroup("SU(2)", 3, sigma)
    assert G.algebra_dimension == 3
    assert G.generators[0].shape == (2, 2)
    with pytest.raises(ValueError):
        G.generators[0][0, 0] = 5.0  # read-only
    assert G.fingerprint == LieGroup("SU(2)", 3, sigma).fingerprint
    assert G.fingerprint != LieGroup("SU(2)", 3).fingerprint


@pytest.mark.parametrize("n", [1, 2, 3, 4])
@pytest.mark.parametrize("magnitude", [1e-7, 1e-13, 1e8])
def test_inverse_is_scale_invariant(n, magnitude) -> None:
    G = LieGroup("GL", n * n)
    A = magnitude * (np.eye(n) + 0.25 * np.tri(n, k=-1))
    A_inv = G.inverse(A)
    np.testing.assert_allclose(G.multiply(A, A_inv), np.eye(n), atol=1e-9)


def test_scaled_singular_still_raises() -> None:
    G = LieGroup("GL", 4)
    with pytest.raises(SingularMatrixError):
        G.inverse(1e-7 * np.array([[1.0, 2.0], [2.0, 4.0]]))
    with pytest.raises(SingularMatrixError):
        G.inverse(np.zeros((2, 2)))
    with pytest.raises(SingularMatrixError):
        G.inverse(1e-9 * np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [0.0, 1.0, 1.0]]))


@pytest.mark.parametrize("n", [2.0, 2.5, True, "3"])
def test_identity_rejects_non_integer_size(n) -> None:
    with pytest.raises(ValueError):
        LieGroup("GL", 4).identity(n)
