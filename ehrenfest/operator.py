# -*- coding: utf-8 -*-
"""
Crank-Nicolson evolution operator for the wavefunction on the interior points
of the well.

The scheme advances the state by solving

.. math::
    G \\psi_{n+1} = H \\psi_n

where G and H are the implicit and explicit halves of the discretized
Hamiltonian. With :math:`\\alpha = \\Delta t / 2\\Delta x^2` the matrices are
tridiagonal, with

    - G: diagonal :math:`1 + 2i\\alpha + i\\Delta t V_i / 2`, off-diagonals
      :math:`-i\\alpha`
    - H: diagonal :math:`1 - 2i\\alpha - i\\Delta t V_i / 2`, off-diagonals
      :math:`+i\\alpha`

The kinetic term is the second difference with unit coefficient, meaning units
of hbar=1 and m=1/2. In these units a constant force -f gives the classical
trajectory x0 - f*t^2.

The one-step propagator :math:`U = G^{-1} H` is computed once per run. Two
solvers are available, selected by name:

    1. 'dense' - inverts G as a dense matrix. O(N^3)
    2. 'banded' - solves the tridiagonal system G U = H column by column. O(N^2)

Both give the same propagator up to floating point order of operations.
"""

import logging
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike
import scipy.linalg
from scipy import sparse

from .errors import InvalidParameter, NumericalError

def crank_nicolson_matrices(V: ArrayLike, dx: float,
                            dt: float) -> Tuple[sparse.csc_matrix, sparse.csc_matrix]:
    """
    Builds the implicit and explicit Crank-Nicolson matrices.

    Parameters
    ----------
    V : 1D ArrayLike of float
        Potential sampled on the interior points.
    dx : float
        Spatial step.
    dt : float
        Time step.

    Returns
    -------
    G : scipy.sparse.csc_matrix of complex
        Implicit side matrix, of shape (N, N) for N samples in V.
    H : scipy.sparse.csc_matrix of complex
        Explicit side matrix, of shape (N, N).
    """
    V = np.asarray(V, dtype=np.float64)
    n = V.size
    alpha = dt / (2 * dx**2)

    diag_g = 1 + 2j * alpha + (1j * dt / 2) * V
    diag_h = 1 - 2j * alpha - (1j * dt / 2) * V
    off_g = np.full(n - 1, -1j * alpha)
    off_h = np.full(n - 1, 1j * alpha)

    G = sparse.diags([off_g, diag_g, off_g], [-1, 0, 1], shape=(n, n),
                     format='csc', dtype=np.complex128)
    H = sparse.diags([off_h, diag_h, off_h], [-1, 0, 1], shape=(n, n),
                     format='csc', dtype=np.complex128)
    return G, H

def _to_banded(G: sparse.spmatrix) -> ArrayLike:
    """Packs a tridiagonal matrix into the (3, N) layout of solve_banded()"""
    n = G.shape[0]
    ab = np.zeros((3, n), dtype=np.complex128)
    ab[0, 1:] = G.diagonal(1)
    ab[1] = G.diagonal()
    ab[2, :-1] = G.diagonal(-1)
    return ab

def dense_propagator(G: sparse.spmatrix, H: sparse.spmatrix) -> ArrayLike:
    """
    Computes U = G^-1 H by inverting G as a dense matrix.

    Raises
    ------
    NumericalError
        If G is singular.
    """
    try:
        G_inv = scipy.linalg.inv(G.toarray())
    except np.linalg.LinAlgError as E:
        raise NumericalError('Matrix G is not invertible') from E

    return G_inv @ H.toarray()

def banded_propagator(G: sparse.spmatrix, H: sparse.spmatrix) -> ArrayLike:
    """
    Computes U = G^-1 H by solving the tridiagonal system G U = H, using the
    columns of H as right hand sides.

    Raises
    ------
    NumericalError
        If G is singular.
    """
    try:
        return scipy.linalg.solve_banded((1, 1), _to_banded(G), H.toarray())
    except np.linalg.LinAlgError as E:
        raise NumericalError('Matrix G is not invertible') from E

PROPAGATORS = {'dense': dense_propagator,
               'banded': banded_propagator}

def build_evolution_operator(V: ArrayLike, dx: float, dt: float,
                             method: str = 'dense') -> ArrayLike:
    """
    Builds the one-step propagator U = G^-1 H for the interior points.

    Parameters
    ----------
    V : 1D ArrayLike of float
        Potential sampled on the interior points.
    dx : float
        Spatial step.
    dt : float
        Time step.
    method : str, optional
        Name of the solver to use, one of PROPAGATORS. The default is 'dense'.

    Returns
    -------
    U : ArrayLike of complex of shape (N, N)
        The dense propagator.

    Raises
    ------
    InvalidParameter
        If the method is unknown.
    NumericalError
        If G is singular, or the resulting propagator is not finite.
    """
    logger = logging.getLogger('ehrenfest.operator')

    if method not in PROPAGATORS:
        raise InvalidParameter(f'Unknown propagator method {method}. '
                               f'Available methods: {list(PROPAGATORS)}')

    G, H = crank_nicolson_matrices(V, dx, dt)
    logger.debug("Building %dx%d propagator using '%s' solver",
                 G.shape[0], G.shape[1], method)

    U = PROPAGATORS[method](G, H)

    # solve_banded() divides by a zero pivot silently for a single point
    if not np.all(np.isfinite(U)):
        raise NumericalError('Propagator contains non-finite values')

    return U
