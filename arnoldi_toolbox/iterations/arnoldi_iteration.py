"""
Author: Benjamin Carrel, University of Geneva, 2023

This module contains the Arnoldi iteration with incomplete orthogonalization procedure (IOP).

Reference for the IOP:
Koskela, A. (2015). Approximating the matrix exponential of an advection-diffusion operator using the incomplete orthogonalization method.
In Numerical Mathematics and Advanced Applications-ENUMATH 2013 (pp. 345-353). Springer, Cham.
"""

#%% Imports
from numpy import ndarray
import numpy as np
from arnoldi_toolbox.spaces import KrylovSubspace
from arnoldi_toolbox.operators import apply_operator
from .utils import coefficient_extractor, is_happy_breakdown, iteration_range, prepare_run


#%% ARNOLDI STEP
def arnoldi_step(j: int, iop: int, A, V: ndarray, H: ndarray, coeff: callable = None) -> float:
    """
    Take the j-th step of the Arnoldi iteration (j starts at 0).

    The new vector A V[:, j] is orthogonalized with modified Gram-Schmidt against the last iop vectors V[:, j-iop+1:j+1].
    If iop > j, this is the full Arnoldi iteration.
    The coefficients are stored in the column j of H, and the normalized vector in V[:, j+1].

    Parameters
    ----------
    j : int
        Index of the step
    iop : int
        Length of the incomplete orthogonalization
    A : operator
        The operator
    V : ndarray
        The basis, modified in place
    H : ndarray
        The coefficients, modified in place
    coeff : callable, optional
        Conversion of the inner products to the type of H, by default chosen from H.dtype

    Returns
    -------
    float
        The norm of the orthogonalized vector, H[j+1, j]. If it is zero, V[:, j+1] is left unnormalized (zero).
    """
    if coeff is None:
        coeff = coefficient_extractor(H.dtype)
    x, y = V[:, j], V[:, j + 1]
    y[:] = apply_operator(A, x)
    for i in range(max(0, j - iop + 1), j + 1):
        alpha = coeff(np.vdot(V[:, i], y))
        H[i, j] = alpha
        y -= alpha * V[:, i]
    beta = np.linalg.norm(y)
    H[j + 1, j] = beta
    if beta > 0:
        y /= beta
    return beta


#%% ARNOLDI ITERATION
def arnoldi(Ks: KrylovSubspace,
            A,
            b: ndarray,
            tol: float = 1e-7,
            m: int = None,
            opnorm=None,
            iop: int = 0,
            monitor: bool = False) -> KrylovSubspace:
    """
    Arnoldi iteration for a general operator A. Fills Ks in place.

    The n x (m+1) basis Ks.get_V() and the (m+1) x m upper Hessenberg matrix Ks.get_H() satisfy
        A V[:, :m] = V[:, :m+1] H
    Happy-breakdown occurs whenever the norm of the new vector is smaller than tol * opnorm. In this case, the dimension Ks.m is smaller than m.

    Parameters
    ----------
    Ks : KrylovSubspace
        The storage, resized if m > Ks.maxiter
    A : operator
        The operator of shape (n, n)
    b : ndarray
        The seed vector of length n
    tol : float, optional
        Tolerance for the happy-breakdown, by default 1e-7
    m : int, optional
        Number of iterations, by default min(Ks.maxiter, n)
    opnorm : None | float | callable, optional
        Norm of A; by default the infinity norm of A is computed
    iop : int, optional
        Length of the incomplete orthogonalization, by default 0 (full orthogonalization)
    monitor : bool, optional
        Whether to show a progress bar, by default False

    Returns
    -------
    KrylovSubspace
        The filled subspace Ks
    """
    if iop < 0:
        raise ValueError(f"iop must be non-negative, not {iop}.")
    if np.issubdtype(Ks.dtype, np.complexfloating) and not np.issubdtype(Ks.coeff_dtype, np.complexfloating):
        raise TypeError(f"The Arnoldi iteration needs complex coefficients for a complex basis, not {Ks.coeff_dtype}.")
    m, vtol = prepare_run(Ks, A, b, m, tol, opnorm)
    if iop == 0:
        iop = m
    V, H = Ks.get_V(), Ks.get_H()
    coeff = coefficient_extractor(Ks.coeff_dtype)

    # Arnoldi iterations (with IOP)
    for j in iteration_range(m, monitor, desc="Arnoldi iterations"):
        beta = arnoldi_step(j, iop, A, V, H, coeff)
        if is_happy_breakdown(beta, vtol):
            Ks.m = j + 1
            Ks.breakdown = True
            break
    return Ks
