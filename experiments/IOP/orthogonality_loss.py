"""
File for the loss of orthogonality of the incomplete orthogonalization procedure.

Author: Benjamin Carrel, University of Geneva, 2023
"""

#%% Importations
from graphics_parameters import *
from problems import make_advection_diffusion_square
import numpy as np
import time
from arnoldi_toolbox import build_krylov_subspace

#%% SETUP THE OPERATOR
A, b = make_advection_diffusion_square(size=48, peclet=20.0)
m = 80

#%% METHODS PARAMETERS
iops = [0, 2, 4, 8]
labels = ['Full Arnoldi' if iop == 0 else f'IOP ({iop})' for iop in iops]
styles = ['-', '--', '-.', ':']

#%% COMPUTE THE BASES
orthogonality = np.zeros((len(iops), m))
residuals = np.zeros((len(iops), m))
times = np.zeros(len(iops))
for i, iop in enumerate(iops):
    print('*********************************************************************************')
    print(f'{labels[i]}')
    t0 = time.time()
    Ks = build_krylov_subspace(A, b, m=m, iop=iop, ishermitian=False, monitor=True)
    times[i] = time.time() - t0
    V, H = Ks.get_V(), Ks.get_H()
    for k in np.arange(1, Ks.m + 1):
        Vk = V[:, :k + 1]
        orthogonality[i, k - 1] = np.linalg.norm(Vk.T.dot(Vk) - np.eye(k + 1))
        residuals[i, k - 1] = np.linalg.norm(A.dot(V[:, :k]) - V[:, :k + 1].dot(H[:k + 1, :k])) / np.linalg.norm(H[:k + 1, :k])
    print(f'Computation time: {times[i]:.3f}s, final dimension: {Ks.m}')

# %% LOSS OF ORTHOGONALITY - PLOT
fig = plt.figure()
for i, iop in enumerate(iops):
    plt.semilogy(np.arange(1, m + 1), orthogonality[i] + np.finfo(float).eps, styles[i], label=labels[i])
plt.legend()
plt.xlabel("Dimension of the Krylov subspace")
plt.ylabel(r"$\|V^T V - I\|_F$")
plt.show()

timestamp = time.strftime("%Y_%m_%d-%H_%M_%S")
if do_save:
    fig.savefig(f'{path}orthogonality_iops_{iops}_{timestamp}.pdf', bbox_inches='tight')

# %% ARNOLDI RELATION - PLOT
fig = plt.figure()
for i, iop in enumerate(iops):
    plt.semilogy(np.arange(1, m + 1), residuals[i] + np.finfo(float).eps, styles[i], label=labels[i])
plt.legend()
plt.xlabel("Dimension of the Krylov subspace")
plt.ylabel(r"$\|A V_k - V_{k+1} H_k\|_F / \|H_k\|_F$")
plt.show()

timestamp = time.strftime("%Y_%m_%d-%H_%M_%S")
if do_save:
    fig.savefig(f'{path}arnoldi_relation_iops_{iops}_{timestamp}.pdf', bbox_inches='tight')

# %%
