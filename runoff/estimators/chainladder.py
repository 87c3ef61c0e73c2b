"""
This module contains the class definition of ``ChainLadder``.
"""
import numpy as np
from .base import FactorBasedMethod
from ..utils import _dsum



class ChainLadder(FactorBasedMethod):
    """
    The chain-ladder method develops each accident period by volume
    weighted age-to-age factors estimated from the cumulative triangle:

        factor[i] = sum(column i + 1) / sum(column i without its last cell)

    Unknown cells of development period ``i + 1`` are the prior
    development period's value times ``factor[i]``.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Run-off triangle with the claims observed so far.

    References
    ----------
    1. Friedland, J., *Estimating Unpaid Claims Using Basic Techniques*,
       Casualty Actuarial Society, 2010.
    """
    title = "Claims reserving - Chain-ladder method"

    def _compute_factors(self):
        n, tri = self.periods, self.tri
        factors = np.empty(max(n - 1, 0), dtype=object)
        for ii in range(n - 1):
            factors[ii] = _dsum(tri.column(ii + 1)) / _dsum(tri.column(ii)[:n - 1 - ii])
        return(factors)


    def _compute_projection(self):
        n, factors = self.periods, self.factors
        sq = self._new_square()
        for ii in range(n - 1):
            column = sq.column(ii + 1)
            column[n - 1 - ii:] = sq.column(ii)[n - 1 - ii:] * factors[ii]
            sq.set_column(column, ii + 1)
        return(sq)
