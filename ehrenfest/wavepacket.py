# -*- coding: utf-8 -*-
"""
Initial state preparation. The initial state is a real Gaussian wave packet at
rest, restricted to the well and normalized on the grid.
"""

import numpy as np
from numpy.typing import ArrayLike

from .errors import NumericalError
from .grid import full_grid, grid_spacing
from .utils import norm

def gaussian(x: ArrayLike, x0: float, sigma: float) -> ArrayLike:
    """
    Normalized Gaussian of width sigma centered at x0,

    .. math::
        \\psi_0(x) = \\frac{1}{\\pi^{1/4}\\sqrt{\\sigma}}
                     e^{-(x-x_0)^2 / 2\\sigma^2}

    Parameters
    ----------
    x : ArrayLike of float
        Positions to sample the Gaussian at.
    x0 : float
        Gaussian's center.
    sigma : float
        Gaussian's width.

    Returns
    -------
    psi : ArrayLike of float in the shape of x
        The sampled Gaussian.
    """
    normalization = 1 / (np.pi**0.25 * np.sqrt(sigma))
    exponent = (-1 / (2 * sigma**2)) * (x - x0)**2
    return normalization * np.exp(exponent)

def initial_state(L: float, M: int, x0: float, sigma: float) -> ArrayLike:
    """
    Creates the initial wavefunction on the full grid of the well, including
    the two boundary points.

    The Gaussian is sampled on the grid, its boundary values are set to zero
    and the result is renormalized such that sum(|psi|^2)*dx = 1.

    Parameters
    ----------
    L : float
        Length of the well.
    M : int
        Number of spatial intervals.
    x0 : float
        Gaussian's center.
    sigma : float
        Gaussian's width.

    Returns
    -------
    psi : ArrayLike of complex of length M+1
        The normalized initial wavefunction.
    """
    dx = grid_spacing(L, M)
    psi = gaussian(full_grid(L, M), x0, sigma).astype(np.complex128)

    psi[0] = 0
    psi[-1] = 0

    psi_norm = norm(psi, dx)
    if not psi_norm > 0:
        raise NumericalError('Initial wave packet vanishes on the grid. '
                             f'Is x0={x0} too far from the well?')

    psi /= np.sqrt(psi_norm)
    return psi

def interior(psi: ArrayLike) -> ArrayLike:
    """Returns a copy of the wavefunction without its two boundary points"""
    return np.array(psi[1:-1], copy=True)
