"""
Author: Benjamin Carrel, University of Geneva, 2023

This module contains the functions that the Krylov iterations need from the operator A.

Supported operators are dense arrays, scipy sparse matrices, scipy LinearOperators, and any object with the attributes
- shape: the shape (n, n) of the operator
- dtype: the scalar type of the operator
- dot(x): the matrix-vector product
and optionally
- is_hermitian: a boolean, or a method returning a boolean
- norm(ord): a method returning the operator norm
"""

#%% Imports
from __future__ import annotations
import numpy as np
from numpy import ndarray
import scipy.sparse as sps
import scipy.sparse.linalg as spsla
from .errors import DimensionMismatch


#%% OPERATOR CAPABILITIES
def operator_shape(A) -> tuple:
    "Shape of the operator A."
    return tuple(A.shape)


def apply_operator(A, x: ndarray) -> ndarray:
    "Matrix-vector product A x, always returned as a 1D array."
    return np.asarray(A.dot(x)).reshape(-1)


def is_hermitian(A) -> bool:
    """
    Check if A is symmetric (real case) or Hermitian (complex case).
    The check is exact for dense and sparse matrices.
    Other operators are trusted if they define `is_hermitian` (or `is_symmetric` for real operators), and are assumed non-Hermitian otherwise.
    """
    n, k = operator_shape(A)
    if n != k:
        return False
    if isinstance(A, ndarray):
        return bool(np.array_equal(A, A.conj().T))
    if sps.issparse(A):
        return (A != A.conj().T).nnz == 0
    flag = getattr(A, "is_hermitian", None)
    if flag is None and not np.issubdtype(A.dtype, np.complexfloating):
        flag = getattr(A, "is_symmetric", None)
    if flag is None:
        return False
    if callable(flag):
        flag = flag()
    return bool(flag)


def operator_norm(A, ord=np.inf) -> float:
    """
    Norm of the operator A, by default the infinity norm.
    For a LinearOperator, the infinity norm is estimated with onenormest on the adjoint, which requires rmatvec.
    """
    if isinstance(A, ndarray):
        return float(np.linalg.norm(A, ord))
    if sps.issparse(A):
        return float(spsla.norm(A, ord))
    if callable(getattr(A, "norm", None)):
        return float(A.norm(ord))
    if isinstance(A, spsla.LinearOperator):
        if ord == np.inf:
            return float(spsla.onenormest(A.H))
        if ord == 1:
            return float(spsla.onenormest(A))
        raise ValueError(f"Only the 1-norm and the infinity norm can be estimated for a LinearOperator, not {ord}.")
    raise TypeError(f"Cannot compute the norm of an operator of type {type(A)}. Provide opnorm explicitly.")


def resolve_opnorm(opnorm, A) -> float:
    """
    Resolve the operator norm option once.

    Parameters
    ----------
    opnorm : None | float | callable
        None computes the infinity norm of A, a scalar is used as is, a callable is called without arguments.
    A : operator
        The operator
    """
    if opnorm is None:
        return operator_norm(A, np.inf)
    if callable(opnorm):
        return float(opnorm())
    return float(opnorm)


def common_dtype(A, b: ndarray) -> np.dtype:
    "Promoted scalar type of A and b. Integer types are promoted to float64."
    dtype = np.result_type(A.dtype, b.dtype)
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.result_type(dtype, np.float64)
    return dtype


def check_dimensions(n: int, A, b: ndarray) -> None:
    "Raise DimensionMismatch if A is not square of size n or if b is not of length n."
    shape = operator_shape(A)
    if len(shape) != 2 or shape[0] != shape[1]:
        raise DimensionMismatch(f"A must be a square operator, not of shape {shape}.")
    if b.ndim != 1 and not (b.ndim == 2 and b.shape[1] == 1):
        raise DimensionMismatch(f"b must be a vector, not of shape {b.shape}.")
    if not (b.shape[0] == shape[0] == n):
        raise DimensionMismatch(f"Dimension mismatch: A is {shape}, b has length {b.shape[0]}, the subspace has size {n}.")
