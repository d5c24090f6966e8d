# -*- coding: utf-8 -*-
"""
Spatial grid and potential of the infinite well.

The well spans [0, L] and is divided into M intervals. The two boundary points
x=0 and x=L have zero amplitude at all times, so the propagation is done only
on the M-1 interior points x_i = (i+1)*dx.
"""

import numpy as np
from numpy.typing import ArrayLike

def grid_spacing(L: float, M: int) -> float:
    """Spatial step of a well of length L divided to M intervals"""
    return L / M

def full_grid(L: float, M: int) -> ArrayLike:
    """
    Returns all M+1 grid points of the well, boundaries included.

    Parameters
    ----------
    L : float
        Length of the well.
    M : int
        Number of spatial intervals.

    Returns
    -------
    x : ArrayLike of float
        Grid points j*dx for j=0,...,M
    """
    return np.arange(M + 1) * grid_spacing(L, M)

def interior_grid(L: float, M: int) -> ArrayLike:
    """
    Returns the M-1 interior grid points of the well, (i+1)*dx for i=0,...,M-2
    """
    return np.arange(1, M) * grid_spacing(L, M)

def linear_potential(x: ArrayLike, f: float) -> ArrayLike:
    """Linear potential V(x) = f*x of a uniform field with strength f"""
    return f * x
