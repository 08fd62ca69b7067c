"""
Author: Benjamin Carrel, University of Geneva, 2023

The module arnoldi_toolbox computes Krylov subspaces with the Arnoldi iteration (general operators),
the Arnoldi iteration with incomplete orthogonalization (IOP), and the Lanczos iteration (symmetric/Hermitian operators).
"""
from .errors import DimensionMismatch
from .spaces import *
from .operators import is_hermitian, operator_norm
from .iterations import *
from .build_krylov_subspace import build_krylov_subspace, fill_krylov_subspace, available_methods
