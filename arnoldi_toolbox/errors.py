"""
Author: Benjamin Carrel, University of Geneva, 2023

This module contains the exceptions raised by the arnoldi_toolbox.
"""


class DimensionMismatch(ValueError):
    """Raised when the operator, the seed vector and the Krylov subspace do not have compatible sizes."""
    pass
