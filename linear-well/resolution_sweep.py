# -*- coding: utf-8 -*-
"""
Runs the same system at several spatial and temporal resolutions, and plots the
deviation of the expectation value of the position from the classical
trajectory for each of them. Runs are done concurrently.
"""

#%% Setup

import logging
from itertools import product

import matplotlib.pyplot as plt

from ehrenfest import run_many, setup

from linear_well import params

setup(logging.INFO)

Ms = [50, 100, 200, 400]
Ks = [25, 100, 400]

#%% Run

sweep = [dict(params, M=M, K=K) for M, K in product(Ms, Ks)]
results = run_many(sweep, n_jobs=-1, method='banded')

#%% Plot

fig, axes = plt.subplots(1, len(Ks), sharey=True, figsize=(12, 4))
for p, res in zip(sweep, results):
    ax = axes[Ks.index(p['K'])]
    ax.plot(res.time_points, res.quantum_positions - res.classical_positions,
            label=f"M={p['M']}")

for ax, K in zip(axes, Ks):
    ax.set_title(f'K={K}')
    ax.set_xlabel('t')
    ax.legend()
axes[0].set_ylabel(r'$\langle x \rangle - x_{cl}$')

plt.show()
