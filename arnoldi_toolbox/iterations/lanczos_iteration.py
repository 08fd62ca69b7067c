"""
Author: Benjamin Carrel, University of Geneva, 2023

This module contains the Lanczos iteration, the variation of the Arnoldi iteration for symmetric/Hermitian operators.
"""

#%% Imports
import warnings
import numpy as np
from numpy import ndarray
from arnoldi_toolbox.spaces import KrylovSubspace
from arnoldi_toolbox.operators import apply_operator
from .utils import coefficient_extractor, is_happy_breakdown, iteration_range, prepare_run


#%% LANCZOS STEP
def lanczos_step(j: int, A, V: ndarray, alpha: ndarray, beta: ndarray, coeff: callable = None) -> float:
    """
    Take the j-th step of the Lanczos iteration (j starts at 0).

    Three-term recurrence: A V[:, j] = beta[j-1] V[:, j-1] + alpha[j] V[:, j] + beta[j] V[:, j+1].

    Parameters
    ----------
    j : int
        Index of the step
    A : operator
        The symmetric/Hermitian operator
    V : ndarray
        The basis, modified in place
    alpha : ndarray
        The diagonal coefficients, modified in place
    beta : ndarray
        The sub-diagonal coefficients (real), modified in place
    coeff : callable, optional
        Conversion of the inner products to the type of alpha, by default chosen from alpha.dtype

    Returns
    -------
    float
        beta[j], the norm of the new vector. If it is zero, V[:, j+1] is left unnormalized (zero).
    """
    if coeff is None:
        coeff = coefficient_extractor(alpha.dtype)
    x, y = V[:, j], V[:, j + 1]
    y[:] = apply_operator(A, x)
    alpha[j] = coeff(np.vdot(x, y))
    y -= alpha[j] * x
    if j > 0:
        y -= beta[j - 1] * V[:, j - 1]
    beta[j] = np.linalg.norm(y)
    if beta[j] > 0:
        y /= beta[j]
    return beta[j]


#%% LANCZOS ITERATION
def lanczos(Ks: KrylovSubspace,
            A,
            b: ndarray,
            tol: float = 1e-7,
            m: int = None,
            opnorm=None,
            monitor: bool = False) -> KrylovSubspace:
    """
    Lanczos iteration for a symmetric/Hermitian operator A. Fills Ks in place.
    A variation of `arnoldi` where the coefficients Ks.get_H() are tridiagonal.

    The diagonal and the sub-diagonal are written directly into H during the iterations.
    The super-diagonal is copied from the sub-diagonal at the end.

    Parameters
    ----------
    Ks : KrylovSubspace
        The storage, resized if m > Ks.maxiter
    A : operator
        The symmetric/Hermitian operator of shape (n, n)
    b : ndarray
        The seed vector of length n
    tol : float, optional
        Tolerance for the happy-breakdown, by default 1e-7
    m : int, optional
        Number of iterations, by default min(Ks.maxiter, n)
    opnorm : None | float | callable, optional
        Norm of A; by default the infinity norm of A is computed
    monitor : bool, optional
        Whether to show a progress bar, by default False

    Returns
    -------
    KrylovSubspace
        The filled subspace Ks
    """
    m, vtol = prepare_run(Ks, A, b, m, tol, opnorm)
    V = Ks.get_V()
    alpha = Ks.diagonal(0)
    # beta is always real, even though alpha may (in general) be complex.
    beta = Ks.diagonal(-1)
    if np.iscomplexobj(beta):
        beta = beta.real
    coeff = coefficient_extractor(Ks.coeff_dtype)

    # Lanczos iterations
    for j in iteration_range(m, monitor, desc="Lanczos iterations"):
        if is_happy_breakdown(lanczos_step(j, A, V, alpha, beta, coeff), vtol):
            Ks.m = j + 1
            Ks.breakdown = True
            break

    if np.iscomplexobj(alpha) and np.any(np.abs(alpha.imag[: Ks.m]) > 1e-10 * np.maximum(np.abs(alpha[: Ks.m]), 1)):
        warnings.warn("The diagonal coefficients are not real. Is the operator Hermitian?", RuntimeWarning)

    # Symmetric tridiagonal structure
    Ks.diagonal(1)[:] = beta[: Ks.m - 1]
    return Ks
