"""
Author: Benjamin Carrel, University of Geneva, 2023

The module spaces contains the definition of the KrylovSubspace class.
"""

from .krylov_subspace import KrylovSubspace
