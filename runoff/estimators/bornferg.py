"""
This module contains the class definition of ``BornhuetterFerguson``, along
with the diagonal fill shared with ``CapeCod``.
"""
import warnings
import numpy as np
from .base import FactorBasedMethod
from ..utils import _render_vector



def _fill_diagonals(sq, factors, expected):
    """
    Project the lower right part of ``sq`` calendar period by calendar
    period. Each unknown cell is its predecessor in the same accident period
    plus the share of ``expected`` ultimate claims emerging in between:

        cell(r, c) = cell(r, c - 1) + (factors[c] - factors[c - 1]) * expected[r]

    Parameters
    ----------
    sq: runoff.square.Square
        Writeable square initialized from the cumulative triangle.

    factors: np.ndarray
        Cumulative development pattern, one value per development period.

    expected: np.ndarray
        Expected ultimate claims, one value per accident period.

    Returns
    -------
    runoff.square.Square
    """
    n = sq.periods
    for kk in range(n - 1):
        diagonal = n + kk
        prior = sq.diagonal(diagonal - 1)[:n - 1 - kk]
        rows = np.arange(n - 1, kk, -1)
        columns = diagonal - rows
        sq.set_diagonal(
            prior + (factors[columns] - factors[columns - 1]) * expected[rows], diagonal
            )
    return(sq)



def _check_pattern(factors):
    if any(factors[ii + 1] < factors[ii] for ii in range(factors.size - 1)):
        warnings.warn(
            "Development pattern decreases: factors are expected to be non-decreasing."
            )



class BornhuetterFerguson(FactorBasedMethod):
    """
    The Bornhuetter-Ferguson method combines an external cumulative
    development pattern with a priori expected ultimate claims ``alpha``.
    Future claims emerge in proportion to the increase of the pattern,
    independently of the claims observed so far.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Run-off triangle with the claims observed so far.

    factors: sequence
        Cumulative development pattern, one value per development period,
        non-decreasing and ending at (or near) 1.

    alpha: sequence
        Expected ultimate claims, one value per accident period.

    References
    ----------
    1. Bornhuetter, R. and Ferguson, R., *The Actuary and IBNR*,
       Proceedings of the Casualty Actuarial Society, 1972.
    """
    title = "Claims reserving - Bornhuetter-Ferguson method"

    def __init__(self, tri, factors, alpha):
        super().__init__(tri)
        self._pattern = self._vector(factors, "factors")
        self._alpha = self._vector(alpha, "alpha")
        _check_pattern(self._pattern)


    @property
    def alpha(self):
        return(self._alpha)


    def _compute_factors(self):
        return(self._pattern)


    def _compute_projection(self):
        return(_fill_diagonals(self._new_square(), self.factors, self._alpha))


    def _vector_line(self):
        return("Alpha:\t{}".format(_render_vector(self._alpha)))
