# -*- coding: utf-8 -*-
"""
General utilities for observables of the wavefunction and the classical particle
"""

import numpy as np
from numpy.typing import ArrayLike

def norm(psi: ArrayLike, dx: float) -> float:
    """
    Discrete norm of a wavefunction, sum(|psi|^2) * dx. Approximates the
    integral of the probability density.

    Parameters
    ----------
    psi : ArrayLike of complex
        Wavefunction samples.
    dx : float
        Grid spacing.

    Returns
    -------
    norm : float
        The discrete norm.
    """
    return np.sum(np.abs(psi)**2) * dx

def expectation_position(psi: ArrayLike, x: ArrayLike, dx: float) -> float:
    """
    Riemann sum approximation of the expectation value of the position,
    sum(|psi_j|^2 * x_j) * dx.

    Parameters
    ----------
    psi : ArrayLike of complex
        Wavefunction samples.
    x : ArrayLike of float
        Positions of the samples. Should have the same shape as psi.
    dx : float
        Grid spacing.

    Returns
    -------
    x_mean : float
        The expectation value of the position.
    """
    return np.sum(np.abs(psi)**2 * x) * dx

def classical_position(t: ArrayLike, x0: float, f: float) -> ArrayLike:
    """Analytic classical position x0 - f*t^2, decelerating toward the origin"""
    return x0 - f * t**2
