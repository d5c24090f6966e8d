# -*- coding: utf-8 -*-
"""
Exceptions raised by the ehrenfest package.
"""

class EhrenfestError(Exception):
    """Baseclass for all errors raised by the package"""


class InvalidParameter(EhrenfestError, ValueError):
    """
    Raised when the simulation is configured with missing, unknown or
    out-of-range parameters. Always raised before any numerics are done.
    """


class NumericalError(EhrenfestError, ArithmeticError):
    """
    Raised when the discretization degenerates, e.g. when the implicit
    Crank-Nicolson matrix cannot be inverted or the propagator contains
    non-finite entries.
    """
