# -*- coding: utf-8 -*-
"""
ehrenfest - Crank-Nicolson propagation of a Gaussian wave packet in an infinite
well under a uniform field, compared with the classical trajectory.
"""

from .errors import EhrenfestError, InvalidParameter, NumericalError
from .ehrenfest import EhrenfestConf, propagate, run, run_many, setup
from .results import EhrenfestResults
