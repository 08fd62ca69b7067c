"""
File for toy operators used in the IOP experiments.

Author: Benjamin Carrel, University of Geneva, 2023
"""

# %% IMPORTATIONS
import numpy as np
import scipy.sparse as sps


#%% Advection-diffusion on the square [0,1]x[0,1]
def make_advection_diffusion_square(size: int = 32, peclet: float = 10.0):
    """
    Generate the 2D advection-diffusion operator on the square [0,1]x[0,1] with Dirichlet BC.
    Centered finite differences, the operator is not symmetric when peclet > 0.

    Parameters
    ----------
    size: int
        Number of points in each direction
    peclet: float
        Strength of the advection

    Returns
    -------
    A: spmatrix
        The operator of shape (size**2, size**2) in csc format
    b: ndarray
        A smooth vector that can be used as seed
    """
    xs = np.linspace(0, 1, size + 2)[1:-1]
    dx = xs[1] - xs[0]

    ## 1D OPERATORS: Laplacian as stencil 1/dx^2 [1 -2 1], advection as stencil 1/(2dx) [-1 0 1]
    L = (1/dx)**2 * sps.diags([1, -2, 1], [-1, 0, 1], shape=(size, size), format="csc")
    D = 1/(2*dx) * sps.diags([-1, 0, 1], [-1, 0, 1], shape=(size, size), format="csc")
    I = sps.eye(size, format="csc")

    ## 2D OPERATOR
    A = sps.kron(L, I) + sps.kron(I, L) - peclet * (sps.kron(D, I) + sps.kron(I, D))
    A = A.tocsc()

    ## SEED
    X, Y = np.meshgrid(xs, xs)
    b = (np.sin(np.pi * X) * np.sin(np.pi * Y) * np.exp(X)).reshape(-1)
    return A, b
