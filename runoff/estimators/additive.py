"""
This module contains the class definition of ``AdditiveMethod``.
"""
import numpy as np
from .base import FactorBasedMethod
from ..utils import _dsum, _render_vector



class AdditiveMethod(FactorBasedMethod):
    """
    The additive (incremental loss ratio) method. For every development
    period the incremental claims are related to the premiums earned by
    the accident periods observed at that lag:

        factor[i] = sum(incremental column i) / sum(premiums[:periods - i])

    Unknown cells of development period ``i + 1`` are the prior cumulative
    value plus ``factor[i + 1] * premium``.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Run-off triangle with the claims observed so far.

    premiums: sequence
        One premium (volume measure) per accident period.
    """
    title = "Claims reserving - Additive method"

    def __init__(self, tri, premiums):
        super().__init__(tri)
        self._premiums = self._vector(premiums, "premiums")


    @property
    def premiums(self):
        return(self._premiums)


    def _compute_factors(self):
        n, premiums = self.periods, self._premiums
        incrtri = self.tri.to_incr()
        factors = np.empty(n, dtype=object)
        for ii in range(n):
            factors[ii] = _dsum(incrtri.column(ii)) / _dsum(premiums[:n - ii])
        return(factors)


    def _compute_projection(self):
        n, factors, premiums = self.periods, self.factors, self._premiums
        sq = self._new_square()
        for ii in range(n - 1):
            column = sq.column(ii + 1)
            column[n - 1 - ii:] = sq.column(ii)[n - 1 - ii:] + factors[ii + 1] * premiums[n - 1 - ii:]
            sq.set_column(column, ii + 1)
        return(sq)


    def _vector_line(self):
        return("Premiums:\t{}".format(_render_vector(self._premiums)))
