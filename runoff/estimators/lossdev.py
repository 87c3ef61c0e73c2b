"""
This module contains the class definition of ``LossDevelopment``.
"""
from .base import FactorBasedMethod



class LossDevelopment(FactorBasedMethod):
    """
    The loss development method. The latest cumulative claims of each
    accident period are regressed to an ultimate level using the external
    cumulative development pattern,

        ultimate[r] = latest[r] / factors[periods - 1 - r],

    and unknown cells of development period ``c`` are ``ultimate[r] *
    factors[c]``.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Run-off triangle with the claims observed so far.

    factors: sequence
        Cumulative development pattern, one value per development period.
    """
    title = "Claims reserving - Loss development method"

    def __init__(self, tri, factors):
        super().__init__(tri)
        self._pattern = self._vector(factors, "factors")


    def _compute_factors(self):
        return(self._pattern)


    def _compute_projection(self):
        n, factors = self.periods, self.factors
        sq = self._new_square()
        if n == 0:
            return(sq)
        levels = self.tri.latest[::-1] / factors[::-1]
        for cc in range(n - 1, 0, -1):
            column = sq.column(cc)
            column[n - cc:] = levels[n - cc:] * factors[cc]
            sq.set_column(column, cc)
        return(sq)
