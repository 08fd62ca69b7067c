"""
Author: Benjamin Carrel, University of Geneva, 2023

This module contains the KrylovSubspace class.
"""

#%% Imports
from __future__ import annotations
import numpy as np
from numpy import ndarray


#%% Class definition
class KrylovSubspace:
    """
    Storage for a Krylov subspace computed by the Arnoldi or Lanczos iteration.
    The Krylov subspace of size $m$ is
        K_m(A,b) = span{b, A b, A^2 b, ..., A^(m-1) b}
    and its orthonormal basis V and its coefficients H are related by
        A V[:, :m] = V[:, :m+1] H[:m+1, :m]

    How to use
    ----------
    1. Initialize the storage with the size n of the problem and the maximal number of iterations.
    2. Fill the storage with `fill_krylov_subspace` (or directly with `arnoldi` / `lanczos`).
    3. Read the active basis with `get_V()` and the active coefficients with `get_H()`.

    The dimension m can shrink during a run if a happy-breakdown occurs, so always read `m` after a run.
    Columns of V and entries of H outside of the active block are stale.

    Attributes
    ----------
    n : int
        Size of the ambient space
    maxiter : int
        Maximal number of iterations that the storage can hold
    m : int
        Dimension of the subspace, 0 < m <= maxiter
    beta : float
        Norm of the seed vector b
    V : ndarray
        Storage of shape (n, maxiter+1) for the orthonormal basis
    H : ndarray
        Storage of shape (maxiter+1, maxiter) for the Gram-Schmidt coefficients (real for Hermitian operators)
    breakdown : bool
        True if the last run stopped on a happy-breakdown
    """

    #%% INITIALIZATION
    def __init__(self, n: int, maxiter: int = 30, dtype=np.float64, coeff_dtype=None) -> None:
        """
        Initialize an empty Krylov subspace.

        Parameters
        ----------
        n : int
            Size of the ambient space
        maxiter : int, optional
            Maximal number of iterations, by default 30
        dtype : dtype, optional
            Scalar type of the basis, by default float64
        coeff_dtype : dtype, optional
            Scalar type of the coefficients, by default the same as dtype
        """
        if n < 1:
            raise ValueError(f"n must be a positive integer, not {n}.")
        if maxiter < 1:
            raise ValueError(f"maxiter must be a positive integer, not {maxiter}.")
        dtype = np.dtype(dtype)
        coeff_dtype = dtype if coeff_dtype is None else np.dtype(coeff_dtype)
        for name, dt in (("dtype", dtype), ("coeff_dtype", coeff_dtype)):
            if not np.issubdtype(dt, np.inexact):
                raise TypeError(f"{name} must be a floating point or complex type, not {dt}.")
        self.n = int(n)
        self.breakdown = False
        self._dtype = dtype
        self._coeff_dtype = coeff_dtype
        self._allocate(int(maxiter))
        self.beta = self.real_dtype.type(0)

    def _allocate(self, maxiter: int) -> None:
        # V is column-major so that each basis vector is contiguous.
        # H is row-major, the diagonal views rely on it.
        self.V = np.empty((self.n, maxiter + 1), dtype=self._dtype, order="F")
        self.H = np.zeros((maxiter + 1, maxiter), dtype=self._coeff_dtype, order="C")
        self._maxiter = maxiter
        self._m = maxiter

    def __repr__(self) -> str:
        return f"{self.__class__.__name__} of dimension {self.m} (maxiter={self.maxiter}) in a space of size {self.n}"

    def __str__(self) -> str:
        with np.printoptions(threshold=50, edgeitems=3):
            info = f"{self.m}-dimensional Krylov subspace with fields\n"
            info += f"beta: {self.beta}\n"
            info += f"V: {self.get_V()}\n"
            info += f"H: {self.get_H()}"
        return info

    #%% PROPERTIES
    @property
    def m(self) -> int:
        """Dimension of the subspace."""
        return self._m

    @m.setter
    def m(self, value: int) -> None:
        if not 0 < value <= self._maxiter:
            raise ValueError(f"m must satisfy 0 < m <= maxiter={self._maxiter}, not {value}.")
        self._m = int(value)

    @property
    def maxiter(self) -> int:
        return self._maxiter

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def coeff_dtype(self) -> np.dtype:
        return self._coeff_dtype

    @property
    def real_dtype(self) -> np.dtype:
        """Real counterpart of dtype, used for the norms."""
        return np.finfo(self._dtype).dtype

    @property
    def basis(self) -> ndarray:
        return self.get_V()

    @property
    def hessenberg(self) -> ndarray:
        return self.get_H()

    #%% ACCESS METHODS
    def get_V(self) -> ndarray:
        """View of shape (n, m+1) on the (extended) orthonormal basis."""
        return self.V[:, : self._m + 1]

    def get_H(self) -> ndarray:
        """View of shape (m+1, m) on the (extended) Gram-Schmidt coefficients."""
        return self.H[: self._m + 1, : self._m]

    def diagonal(self, offset: int = 0) -> ndarray:
        """
        Writable view on a diagonal of the active block get_H().

        Unlike np.diagonal, the returned view can be written to, and writing to it changes H.
        The view has the length of the diagonal for the current m; it is not updated if m changes later.

        Parameters
        ----------
        offset : int, optional
            0 for the main diagonal, -1 for the sub-diagonal, 1 for the super-diagonal, by default 0

        Returns
        -------
        ndarray
            Strided view into H
        """
        m, step = self._m, self._maxiter + 1
        if offset >= 0:
            start, length = offset, max(m - offset, 0)
        else:
            start, length = -offset * self._maxiter, max(min(m + 1 + offset, m), 0)
        flat = self.H.reshape(-1)
        return flat[start : start + length * step : step]

    #%% RESIZE
    def resize(self, maxiter: int) -> KrylovSubspace:
        """
        Resize the storage to a different maxiter, destroying its contents.
        After the call, m = maxiter.

        This is an expensive operation and should be used scarcely.
        """
        if maxiter < 1:
            raise ValueError(f"maxiter must be a positive integer, not {maxiter}.")
        self._allocate(int(maxiter))
        return self
