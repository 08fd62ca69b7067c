"""
Author: Benjamin Carrel, University of Geneva, 2023

Utility functions shared by the Arnoldi and Lanczos iterations.
"""

#%% Imports
import warnings
import numpy as np
from numpy import ndarray
from tqdm import tqdm
from arnoldi_toolbox.spaces import KrylovSubspace
from arnoldi_toolbox.operators import check_dimensions, operator_shape, resolve_opnorm


#%% FUNCTIONS
def _identity(z):
    return z


def coefficient_extractor(dtype) -> callable:
    """
    Return the function that converts an inner product into a coefficient of type dtype.
    For a real dtype, this is the real part (the basis can still be complex). For a complex dtype, this is the identity.
    """
    if np.issubdtype(np.dtype(dtype), np.complexfloating):
        return _identity
    return np.real


def is_happy_breakdown(beta: float, vtol: float) -> bool:
    "Happy-breakdown test. An exactly zero norm is always a breakdown, even when vtol is zero."
    return beta < vtol or beta == 0


def iteration_range(m: int, monitor: bool = False, desc: str = "Krylov iterations"):
    "Loop over the iterations, with a progress bar if monitor is True."
    if monitor:
        return tqdm(range(m), desc=desc)
    return range(m)


def prepare_run(Ks: KrylovSubspace, A, b: ndarray, m: int, tol: float, opnorm) -> tuple:
    """
    Common initialization of the Arnoldi and Lanczos iterations.

    Checks the inputs (before touching the storage), sets the dimension of Ks (resizing if needed),
    zeros the active coefficients, and stores the normalized seed vector in the first column of V.

    Parameters
    ----------
    Ks : KrylovSubspace
        The storage
    A : operator
        The operator of shape (n, n)
    b : ndarray
        The seed vector of length n
    m : int
        Requested dimension, None for min(Ks.maxiter, n)
    tol : float
        Tolerance for the happy-breakdown
    opnorm : None | float | callable
        Norm of A, see resolve_opnorm

    Returns
    -------
    m : int
        The requested dimension
    vtol : float
        The happy-breakdown threshold tol * opnorm
    """
    # Safe checks
    b = np.asarray(b)
    check_dimensions(Ks.n, A, b)
    n = operator_shape(A)[0]
    for name, dtype in (("A", A.dtype), ("b", b.dtype)):
        if not np.can_cast(dtype, Ks.dtype, casting="same_kind"):
            raise TypeError(f"The subspace of type {Ks.dtype} cannot hold the data of {name} of type {dtype}.")
    if m is None:
        m = min(Ks.maxiter, n)
    if m < 1:
        raise ValueError(f"m must be a positive integer, not {m}.")
    if tol < 0:
        raise ValueError(f"tol must be non-negative, not {tol}.")
    if m > n:
        warnings.warn(f"m={m} exceeds the dimension n={n} of the problem, a breakdown is expected before m iterations.")
    b = b.reshape(-1)
    beta = np.linalg.norm(b)
    if beta == 0:
        raise ValueError("The seed vector b must be nonzero.")
    vtol = tol * resolve_opnorm(opnorm, A)

    # Storage
    if m > Ks.maxiter:
        Ks.resize(m)
    else:
        Ks.m = m # might change if happy-breakdown occurs
    Ks.breakdown = False
    Ks.get_H().fill(0)
    Ks.beta = Ks.real_dtype.type(beta)
    Ks.V[:, 0] = b / beta
    return m, vtol
