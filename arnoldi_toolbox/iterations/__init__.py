"""
Author: Benjamin Carrel, University of Geneva, 2023

The module iterations contains the Arnoldi and Lanczos iterations.
"""

from .arnoldi_iteration import arnoldi, arnoldi_step
from .lanczos_iteration import lanczos, lanczos_step
