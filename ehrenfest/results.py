# -*- coding: utf-8 -*-
"""
Results of a propagation.

A propagation produces several parallel time series, one entry per recorded
timestep. The results object holds them in memory, exposing copies of each
series, a pandas DataFrame of the whole dataset via get_results(), and a plot
comparing the quantum and classical trajectories.
"""

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
import pandas as pd
import matplotlib.pyplot as plt

class EhrenfestResults:
    """
    A class for propagation results. Holds the recorded time series of a single
    run. The series are not changed after creation, and accessing them returns
    copies.

    Parameters
    ----------
    time_points : 1D ArrayLike of float
        Simulated time at each recorded timestep.
    quantum_positions : 1D ArrayLike of float
        Expectation value of the position of the wavefunction at each
        recorded timestep.
    classical_positions : 1D ArrayLike of float
        Position of the classical particle at each recorded timestep.
    norms : 1D ArrayLike of float, optional
        Norm of the wavefunction at each recorded timestep. The default is
        None, on which the norms are not available.
    """

    def __init__(self, time_points: ArrayLike, quantum_positions: ArrayLike,
                 classical_positions: ArrayLike, norms: Optional[ArrayLike] = None):
        self._t = np.array(time_points, dtype=np.float64)
        self._quantum = np.array(quantum_positions, dtype=np.float64)
        self._classical = np.array(classical_positions, dtype=np.float64)
        self._norms = None if norms is None else np.array(norms, dtype=np.float64)

        sizes = {self._t.size, self._quantum.size, self._classical.size}
        if self._norms is not None:
            sizes.add(self._norms.size)
        if len(sizes) != 1:
            raise ValueError('All time series should have the same length')

    def __len__(self):
        return self._t.size

    def __repr__(self):
        return f"Ehrenfest results dataset in memory with {len(self)} timesteps"

    @property
    def time_points(self) -> ArrayLike:
        """Simulated time at each recorded timestep"""
        return self._t.copy()

    @property
    def quantum_positions(self) -> ArrayLike:
        """Expectation value of the position at each recorded timestep"""
        return self._quantum.copy()

    @property
    def classical_positions(self) -> ArrayLike:
        """Classical position at each recorded timestep"""
        return self._classical.copy()

    @property
    def norms(self) -> Optional[ArrayLike]:
        """Norm of the wavefunction at each recorded timestep, if recorded"""
        return None if self._norms is None else self._norms.copy()

    def get_results(self) -> pd.DataFrame:
        """
        Retrieves the results as a single dataset.

        Returns
        -------
        dataset : pandas.DataFrame
            The recorded series, indexed by timestep. Consists of the
            following fields:

            t : float
                Simulated time
            quantum : float
                Expectation value of the position
            classical : float
                Classical position
            norm : float
                Norm of the wavefunction. Only present if recorded.
        """
        data = {'t': self._t, 'quantum': self._quantum,
                'classical': self._classical}
        if self._norms is not None:
            data['norm'] = self._norms

        index = pd.RangeIndex(len(self), name='timestep')
        return pd.DataFrame(data, index=index)

    def plot(self, ax: Optional[plt.Axes] = None) -> plt.Axes:
        """
        Plots the quantum expectation value of the position and the classical
        position against time.

        Parameters
        ----------
        ax : matplotlib.axes.Axes, optional
            Axes to plot on. If None, the current axes are used.

        Returns
        -------
        ax : matplotlib.axes.Axes
            The axes plotted on.
        """
        if ax is None:
            ax = plt.gca()

        ax.plot(self._t, self._quantum, label=r'$\langle x \rangle$')
        ax.plot(self._t, self._classical, '--', label=r'$x_{cl}$')
        ax.set_xlabel('t')
        ax.set_ylabel('x')
        ax.legend()

        return ax
