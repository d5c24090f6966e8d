# -*- coding: utf-8 -*-
"""
The main module in ehrenfest. Contains the propagation of a Gaussian wave packet
in an infinite well under a uniform field, alongside the matching classical
trajectory.

The wave packet starts at rest, centered at x0, inside the well [0, L]. The
field pulls it toward the origin with a linear potential V(x) = f*x. The
propagation is done using the Crank-Nicolson scheme with a fixed time step, up
to the time the classical particle reaches the origin, T = sqrt(x0 / f). At
each timestep the expectation value of the position is recorded next to the
classical position x0 - f*t^2.

All the propagation functions share the same parameters, given here:

    Required Parameters
    -------------------
    L : positive float
        Length of the well.
    M : int, at least 2
        Number of spatial intervals. The wavefunction is propagated on the M-1
        interior points.
    K : non-negative int
        Number of timesteps. K=0 gives empty results.
    x0 : positive float
        Initial position of the wave packet's center and the classical particle.
    f : positive float
        Field strength.
    sigma : positive float
        Initial width of the wave packet.

    Optional Parameters
    -------------------
    method : str
        Solver used to build the propagator, 'dense' or 'banded'. Refer to
        ehrenfest.operator for details. The default is 'dense'.
    verbose : bool
        Whether to print progress information or not. The default is False.
"""

import faulthandler
import logging
from numbers import Integral, Real
from typing import Iterable, List, Mapping, Optional

import numpy as np
from numpy.typing import ArrayLike
from joblib import Parallel, delayed
from tqdm import tqdm

from .errors import InvalidParameter
from .grid import grid_spacing, interior_grid, linear_potential
from .operator import PROPAGATORS, build_evolution_operator
from .results import EhrenfestResults
from .utils import classical_position, expectation_position, norm
from .wavepacket import initial_state, interior

_setup_done = False

def setup(level: int = logging.WARNING):
    """
    One-time initialization for programs embedding the package. Enables
    tracebacks on fatal errors via faulthandler, configures a logging handler
    and sets the level of the package's loggers.

    Further calls only update the logging level.

    Parameters
    ----------
    level : int, optional
        Logging level for the 'ehrenfest' logger. The default is
        logging.WARNING.
    """
    global _setup_done

    if not _setup_done:
        faulthandler.enable()
        logging.basicConfig()
        _setup_done = True

    logging.getLogger('ehrenfest').setLevel(level)


class EhrenfestConf:
    """
    Wrapper class for the configuration of a propagation.

    The class manages the default values for optional parameters, makes sure all
    required arguments were provided, no unknown arguments were passed and all
    values are in range, and allows simple value retrieval as attributes from
    the kwargs dictionary.

    Raises
    ------
    InvalidParameter
        If an argument is missing, unknown or out of range.
    """
    required_args = ['L', 'M', 'K', 'x0', 'f', 'sigma']
    optional_args = ['method', 'verbose']

    def __init__(self, **kwargs):
        # Make sure all required args are there
        for arg in self.required_args:
            if arg not in kwargs:
                raise InvalidParameter(f'Configuration missing required argument {arg}')

        # Make sure no unknown args are there
        for arg in kwargs:
            if arg not in self.required_args + self.optional_args:
                raise InvalidParameter(f'Configuration got unknown argument {arg}')

        self._args = {'method': 'dense',
                      'verbose': False}
        self._args.update(kwargs)

        self._validate()

    def _validate(self):
        for arg in ['L', 'x0', 'f', 'sigma']:
            val = self._args[arg]
            if isinstance(val, bool) or not isinstance(val, Real) or not np.isfinite(val):
                raise InvalidParameter(f'{arg} should be a finite real number, got {val!r}')
            if val <= 0:
                raise InvalidParameter(f'{arg} should be positive, got {val}')

        for arg, minimum in [('M', 2), ('K', 0)]:
            val = self._args[arg]
            if isinstance(val, bool) or not isinstance(val, Integral):
                raise InvalidParameter(f'{arg} should be an integer, got {val!r}')
            if val < minimum:
                raise InvalidParameter(f'{arg} should be at least {minimum}, got {val}')

        if self._args['method'] not in PROPAGATORS:
            raise InvalidParameter(f"Unknown propagator method {self._args['method']}. "
                                   f'Available methods: {list(PROPAGATORS)}')

        if self._args['x0'] >= self._args['L']:
            logging.getLogger('ehrenfest.configuration').warning(
                'Wave packet center x0=%g is outside the well of length %g',
                self._args['x0'], self._args['L'])

    def __repr__(self):
        """
        Return the canonical string representation of the object.
        In this case, the dictionary's representation is returned
        """
        return repr(self._args)

    def __getattr__(self, name):
        """Convenience value retrieval from the dictionary as attribute"""
        try:
            return self.__dict__['_args'][name]
        except KeyError as E:
            raise AttributeError(name) from E

    def __getstate__(self):
        return self.__dict__

    def __setstate__(self, d):
        self.__dict__ = d

    @property
    def dx(self) -> float:
        """Spatial step"""
        return grid_spacing(self.L, self.M)

    @property
    def n_interior(self) -> int:
        """Number of interior grid points"""
        return self.M - 1

    @property
    def t_final(self) -> float:
        """Time for the classical particle to reach the origin"""
        return np.sqrt(self.x0 / self.f)

    @property
    def dt(self) -> Optional[float]:
        """Time step. None if there are no timesteps"""
        return self.t_final / self.K if self.K > 0 else None


def propagate(psi: ArrayLike, U: ArrayLike, x: ArrayLike, dx: float, dt: float,
              x0: float, f: float, n_steps: int,
              verbose: bool = False) -> EhrenfestResults:
    """
    Propagates the wavefunction in time, recording the observables before
    each step.

    Used as a utility function. Users should use the 'run' function.

    Parameters
    ----------
    psi : 1D ArrayLike of complex
        Initial wavefunction on the interior points. Not modified.
    U : 2D ArrayLike of complex
        One-step propagator.
    x : 1D ArrayLike of float
        Interior grid points.
    dx : float
        Spatial step.
    dt : float
        Time step.
    x0 : float
        Initial classical position.
    f : float
        Field strength.
    n_steps : int
        Number of timesteps to take and record.
    verbose : bool, optional
        Whether to show a progress bar. The default is False.

    Returns
    -------
    results : EhrenfestResults
        The recorded series, n_steps entries each. The state after the last
        step is not recorded.
    """
    t = np.arange(n_steps) * dt
    quantum = np.empty(n_steps)
    norms = np.empty(n_steps)

    for i in tqdm(range(n_steps), disable=not verbose):
        quantum[i] = expectation_position(psi, x, dx)
        norms[i] = norm(psi, dx)
        psi = U @ psi

    return EhrenfestResults(t, quantum, classical_position(t, x0, f), norms)

def _run(conf: EhrenfestConf) -> EhrenfestResults:
    logger = logging.getLogger('ehrenfest.propagation')

    if conf.K == 0:
        logger.debug('No timesteps requested, returning empty results')
        return EhrenfestResults([], [], [], [])

    x = interior_grid(conf.L, conf.M)
    U = build_evolution_operator(linear_potential(x, conf.f), conf.dx, conf.dt,
                                 method=conf.method)
    psi = interior(initial_state(conf.L, conf.M, conf.x0, conf.sigma))

    logger.debug('Starting propagation of %d steps on %d points, dt=%g, dx=%g',
                 conf.K, conf.n_interior, conf.dt, conf.dx)

    return propagate(psi, U, x, conf.dx, conf.dt, conf.x0, conf.f, conf.K,
                     verbose=conf.verbose)

def run(L: float, M: int, K: int, x0: float, f: float, sigma: float,
        **kwargs) -> EhrenfestResults:
    """
    Runs a single propagation of the wave packet.

    Parameter list is specified at the module documentation

    Returns
    -------
    results : EhrenfestResults
        The propagation results, K timesteps.

    Raises
    ------
    InvalidParameter
        If the parameters are invalid. Raised before any computation.
    NumericalError
        If the propagator cannot be built.
    """
    conf = EhrenfestConf(L=L, M=M, K=K, x0=x0, f=f, sigma=sigma, **kwargs)
    return _run(conf)

def run_many(params: Iterable[Mapping], n_jobs: int = 1,
             **kwargs) -> List[EhrenfestResults]:
    """
    Runs several independent propagations, possibly using concurrent workers.

    Parameters
    ----------
    params : Iterable of mappings
        Required parameters of each run, as keyword arguments to run().
    n_jobs : int, optional
        Number of concurrent workers to use. Refer to joblib's documentation
        for more details. The default is 1.

    The rest of the parameters are passed to every run.

    Returns
    -------
    results : list of EhrenfestResults
        The results of each run, in the order of params.
    """
    logger = logging.getLogger('ehrenfest.propagation')

    # Validate everything before starting any of the runs
    confs = [EhrenfestConf(**{**kwargs, **p}) for p in params]
    logger.debug('Starting %d runs with %d workers', len(confs), n_jobs)

    with Parallel(n_jobs=n_jobs) as parallel:
        return parallel(delayed(_run)(conf) for conf in confs)
