"""
Author: Benjamin Carrel, University of Geneva, 2023

This file contains the high-level functions for computing a Krylov subspace with the Arnoldi or Lanczos iteration.
"""

#%% Imports
import numpy as np
from numpy import ndarray
from arnoldi_toolbox.spaces import KrylovSubspace
from arnoldi_toolbox.iterations import arnoldi, lanczos
from arnoldi_toolbox.operators import check_dimensions, common_dtype, is_hermitian, operator_shape, resolve_opnorm


available_methods = {'arnoldi': arnoldi,
                     'lanczos': lanczos}


#%% NON-ALLOCATING INTERFACE
def fill_krylov_subspace(Ks: KrylovSubspace,
                         A,
                         b: ndarray,
                         method: str = 'automatic',
                         ishermitian: bool = None,
                         opnorm=None,
                         iop: int = 0,
                         monitor: bool = False,
                         **kwargs) -> KrylovSubspace:
    """
    Fill the Krylov subspace Ks in place with K_m(A, b).
    Non-allocating version of `build_krylov_subspace`, unless m > Ks.maxiter.

    Parameters
    ----------
    Ks : KrylovSubspace
        The storage
    A : operator
        The operator of shape (n, n)
    b : ndarray
        The seed vector of length n
    method : str, optional
        'arnoldi', 'lanczos' or 'automatic', by default 'automatic'. Automatic uses Lanczos for symmetric/Hermitian operators.
    ishermitian : bool, optional
        Overrides the detection of symmetric/Hermitian operators, by default None (detect)
    opnorm : None | float | callable, optional
        Norm of A, by default the infinity norm of A
    iop : int, optional
        Length of the incomplete orthogonalization, by default 0 (full). Ignored by Lanczos.
    monitor : bool, optional
        Whether to monitor the iterations, by default False
    kwargs : dict
        tol and m, see `arnoldi`

    Returns
    -------
    KrylovSubspace
        The filled subspace Ks
    """
    # Get the correct method
    if method == 'automatic':
        if ishermitian is None:
            ishermitian = is_hermitian(A)
        method = 'lanczos' if ishermitian else 'arnoldi'
    elif method not in available_methods:
        raise ValueError(f'Unknown method {method}.')

    # Monitor
    if monitor:
        print('----------------------------------------')
        print(f'{method.capitalize()} iteration on an operator of shape {operator_shape(A)}')

    if method == 'lanczos':
        return lanczos(Ks, A, b, opnorm=opnorm, monitor=monitor, **kwargs)
    return arnoldi(Ks, A, b, opnorm=opnorm, iop=iop, monitor=monitor, **kwargs)


#%% ALLOCATING INTERFACE
def build_krylov_subspace(A,
                          b: ndarray,
                          m: int = None,
                          tol: float = 1e-7,
                          iop: int = 0,
                          ishermitian: bool = None,
                          opnorm=None,
                          method: str = 'automatic',
                          monitor: bool = False) -> KrylovSubspace:
    """
    Perform m Arnoldi (or Lanczos) iterations to obtain the Krylov subspace K_m(A, b).

    The n x (m+1) basis vectors V = Ks.get_V() and the (m+1) x m upper Hessenberg matrix H = Ks.get_H() are related by the recurrence formula
        v_1 = b / ||b||,    A v_j = sum_{i=1}^{j+1} h_{ij} v_i    (j = 1, ..., m)

    `iop` determines the length of the incomplete orthogonalization procedure. The default value of 0 indicates full Arnoldi.
    For symmetric/Hermitian A, `iop` is ignored and the Lanczos iteration is used instead; H is then real and tridiagonal.

    Happy-breakdown occurs whenever the norm of the new vector is smaller than tol * opnorm. In this case, Ks.m is smaller than m.

    Parameters
    ----------
    A : operator
        The operator of shape (n, n)
    b : ndarray
        The seed vector of length n
    m : int, optional
        Number of iterations, by default min(30, n)
    tol : float, optional
        Tolerance for the happy-breakdown, by default 1e-7
    iop : int, optional
        Length of the incomplete orthogonalization, by default 0 (full)
    ishermitian : bool, optional
        Overrides the detection of symmetric/Hermitian operators, by default None (detect)
    opnorm : None | float | callable, optional
        Norm of A. A callable is called without arguments. By default, the infinity norm of A.
    method : str, optional
        'arnoldi', 'lanczos' or 'automatic', by default 'automatic'
    monitor : bool, optional
        Whether to monitor the iterations, by default False

    Returns
    -------
    KrylovSubspace
        The Krylov subspace
    """
    # Check inputs
    b = np.asarray(b)
    n = operator_shape(A)[0]
    check_dimensions(n, A, b)
    if m is None:
        m = min(30, n)

    # Scalar types: the coefficients are real only when the Lanczos iteration runs
    T = common_dtype(A, b)
    if ishermitian is None and method == 'automatic':
        ishermitian = is_hermitian(A)
    if method == 'lanczos':
        ishermitian = True
    U = np.finfo(T).dtype if ishermitian and method != 'arnoldi' else T

    # Compute the default norm once
    opnorm = resolve_opnorm(opnorm, A)

    Ks = KrylovSubspace(n, m, dtype=T, coeff_dtype=U)
    return fill_krylov_subspace(Ks, A, b, method=method, ishermitian=ishermitian, opnorm=opnorm, iop=iop, monitor=monitor, tol=tol, m=m)
