import numpy as np
import pytest
import scipy.sparse as sps

from arnoldi_toolbox import DimensionMismatch, KrylovSubspace
from arnoldi_toolbox.iterations import arnoldi, arnoldi_step


def check_arnoldi_relation(A, Ks, tol=1e-10):
    V, H = Ks.get_V(), Ks.get_H()
    m = Ks.m
    assert np.linalg.norm(V.conj().T @ V - np.eye(m + 1)) < tol
    assert np.linalg.norm(A @ V[:, :m] - V @ H) < tol * max(np.linalg.norm(A, np.inf), 1)
    assert np.all(np.tril(H, -2) == 0)


@pytest.mark.parametrize('m', [1, 4, 10])
def test_arnoldi_real(m, rng):
    n = 30
    A = rng.standard_normal((n, n))
    b = rng.standard_normal(n)
    Ks = arnoldi(KrylovSubspace(n, 10), A, b, m=m)
    assert Ks.m == m
    assert not Ks.breakdown
    assert np.isclose(Ks.beta, np.linalg.norm(b))
    np.testing.assert_allclose(Ks.V[:, 0], b / np.linalg.norm(b))
    check_arnoldi_relation(A, Ks)


def test_arnoldi_complex(rng):
    n = 20
    A = rng.standard_normal((n, n)) + 1j * rng.standard_normal((n, n))
    b = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    Ks = arnoldi(KrylovSubspace(n, 8, dtype=np.complex128), A, b)
    assert Ks.m == 8
    assert Ks.H.dtype == np.complex128
    assert isinstance(Ks.beta, np.float64)
    check_arnoldi_relation(A, Ks)


def test_arnoldi_sparse(rng):
    n = 50
    A = sps.diags([1, -2, 0.5], [-1, 0, 1], shape=(n, n), format='csc')
    b = rng.standard_normal(n)
    Ks = arnoldi(KrylovSubspace(n, 12), A, b)
    check_arnoldi_relation(A.toarray(), Ks)


def test_default_m_is_bounded_by_n(rng):
    A = rng.standard_normal((5, 5))
    Ks = arnoldi(KrylovSubspace(5, 10), A, rng.standard_normal(5), tol=0)
    assert Ks.maxiter == 10
    assert Ks.m <= 5


def test_iop_full_depth_matches_full_orthogonalization(rng):
    n, m = 25, 8
    A = rng.standard_normal((n, n))
    b = rng.standard_normal(n)
    Ks_full = arnoldi(KrylovSubspace(n, m), A, b)
    Ks_iop = arnoldi(KrylovSubspace(n, m), A, b, iop=m)
    np.testing.assert_allclose(Ks_iop.get_H(), Ks_full.get_H(), atol=1e-12)
    np.testing.assert_allclose(Ks_iop.get_V(), Ks_full.get_V(), atol=1e-12)


def test_iop_band_structure(rng):
    n, m, iop = 25, 8, 2
    A = rng.standard_normal((n, n))
    b = rng.standard_normal(n)
    Ks = arnoldi(KrylovSubspace(n, m), A, b, iop=iop)
    H = Ks.get_H()
    # only the last iop vectors are used: H is banded
    assert np.all(np.triu(H, iop) == 0)
    assert np.all(np.tril(H, -2) == 0)
    # the recurrence still holds, but the basis is only locally orthogonal
    V = Ks.get_V()
    np.testing.assert_allclose(A @ V[:, :m], V @ H, atol=1e-10)
    for j in range(m):
        assert abs(np.vdot(V[:, j], V[:, j + 1])) < 1e-10


def test_iop_on_symmetric_matrix_is_exact(rng):
    # for a symmetric matrix, the IOP with iop=2 is the Lanczos recurrence
    n, m = 20, 6
    A = rng.standard_normal((n, n))
    A = A + A.T
    b = rng.standard_normal(n)
    Ks = arnoldi(KrylovSubspace(n, m), A, b, iop=2)
    check_arnoldi_relation(A, Ks, tol=1e-8)


def test_happy_breakdown_identity():
    A = np.eye(3)
    b = np.array([1.0, 0.0, 0.0])
    Ks = arnoldi(KrylovSubspace(3, 2), A, b, m=2)
    assert Ks.m == 1
    assert Ks.breakdown
    H = Ks.get_H()
    assert H.shape == (2, 1)
    assert H[0, 0] == 1.0
    assert H[1, 0] == 0.0
    assert np.all(np.isfinite(Ks.get_V()))


def test_happy_breakdown_invariant_subspace():
    n = 10
    A = np.diag(np.arange(1.0, n + 1))
    b = np.zeros(n)
    b[:3] = 1.0
    Ks = arnoldi(KrylovSubspace(n, 8), A, b)
    assert Ks.m == 3
    assert Ks.breakdown
    eigenvalues = np.sort(np.linalg.eigvals(Ks.get_H()[:3, :3]).real)
    np.testing.assert_allclose(eigenvalues, [1.0, 2.0, 3.0], atol=1e-8)


def test_automatic_resize(rng):
    n = 20
    A = rng.standard_normal((n, n))
    Ks = KrylovSubspace(n, 3)
    arnoldi(Ks, A, rng.standard_normal(n), m=7)
    assert Ks.maxiter == 7
    assert Ks.m == 7
    check_arnoldi_relation(A, Ks)


def test_reuse_smaller_m(rng):
    n = 20
    A = rng.standard_normal((n, n))
    Ks = KrylovSubspace(n, 10)
    arnoldi(Ks, A, rng.standard_normal(n))
    arnoldi(Ks, A, rng.standard_normal(n), m=4)
    assert Ks.maxiter == 10
    assert Ks.m == 4
    check_arnoldi_relation(A, Ks)


def test_opnorm_variants(rng):
    n = 10
    A = rng.standard_normal((n, n))
    b = rng.standard_normal(n)
    Ks1 = arnoldi(KrylovSubspace(n, 5), A, b, opnorm=np.linalg.norm(A, np.inf))
    Ks2 = arnoldi(KrylovSubspace(n, 5), A, b, opnorm=lambda: np.linalg.norm(A, np.inf))
    np.testing.assert_allclose(Ks1.get_H(), Ks2.get_H())


def test_large_tolerance_stops_immediately(rng):
    n = 10
    A = rng.standard_normal((n, n))
    Ks = arnoldi(KrylovSubspace(n, 5), A, rng.standard_normal(n), tol=1e10)
    assert Ks.m == 1
    assert Ks.breakdown


def test_dimension_mismatch_before_mutation(rng):
    Ks = KrylovSubspace(5, 3)
    Ks.H[:] = 1.0
    with pytest.raises(DimensionMismatch):
        arnoldi(Ks, np.eye(5), np.ones(4))
    with pytest.raises(DimensionMismatch):
        arnoldi(Ks, np.eye(6), np.ones(6), m=5)
    assert Ks.maxiter == 3
    assert np.all(Ks.H == 1.0)


def test_invalid_arguments():
    Ks = KrylovSubspace(3, 2)
    with pytest.raises(ValueError):
        arnoldi(Ks, np.eye(3), np.ones(3), iop=-1)
    with pytest.raises(ValueError):
        arnoldi(Ks, np.eye(3), np.zeros(3))
    with pytest.raises(ValueError):
        arnoldi(Ks, np.eye(3), np.ones(3), tol=-1)
    with pytest.raises(TypeError):
        arnoldi(Ks, np.eye(3), 1j * np.ones(3))


def test_m_larger_than_n_warns(rng):
    A = rng.standard_normal((3, 3))
    with pytest.warns(UserWarning):
        Ks = arnoldi(KrylovSubspace(3, 2), A, rng.standard_normal(3), m=5)
    assert Ks.m <= 5


def test_arnoldi_step(rng):
    n = 6
    A = rng.standard_normal((n, n))
    V = np.zeros((n, 3))
    H = np.zeros((3, 2))
    V[:, 0] = rng.standard_normal(n)
    V[:, 0] /= np.linalg.norm(V[:, 0])
    beta = arnoldi_step(0, 1, A, V, H)
    assert beta == H[1, 0]
    assert np.isclose(H[0, 0], V[:, 0] @ A @ V[:, 0])
    assert np.isclose(np.linalg.norm(V[:, 1]), 1.0)
    assert abs(V[:, 0] @ V[:, 1]) < 1e-12


def test_arnoldi_monitor(rng, capsys):
    n = 10
    A = rng.standard_normal((n, n))
    Ks = arnoldi(KrylovSubspace(n, 4), A, rng.standard_normal(n), monitor=True)
    assert Ks.m == 4
    assert 'Arnoldi iterations' in capsys.readouterr().err


def test_real_coefficients_with_complex_basis_are_rejected(rng):
    n = 8
    A = rng.standard_normal((n, n)) + 1j * rng.standard_normal((n, n))
    b = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    Ks = KrylovSubspace(n, 3, dtype=np.complex128, coeff_dtype=np.float64)
    Ks.H[:] = 1.0
    with pytest.raises(TypeError):
        arnoldi(Ks, A, b, m=5)
    assert Ks.maxiter == 3
    assert np.all(Ks.H == 1.0)
