"""
Graphics parameters for the IOP experiments.

Author: Benjamin Carrel, University of Geneva, 2023
"""

#%% GRAPHICS PARAMETERS
import matplotlib.pyplot as plt

# Custom parameters
plt.rcParams['font.size'] = 14
plt.rcParams['figure.figsize'] = (8, 6)
plt.rcParams['figure.dpi'] = 125
plt.rcParams['lines.linewidth'] = 2
plt.rcParams['lines.markersize'] = 8
plt.rcParams['axes.grid'] = True
plt.rcParams['legend.fontsize'] = 12
plt.rcParams['legend.loc'] = 'best'
plt.rcParams['figure.autolayout'] = True

# Parameters for saving the plots
path = 'figures/'
do_save = True

# Make directory if it does not exist
import os
if do_save:
    if not os.path.exists(path):
        os.makedirs(path)
