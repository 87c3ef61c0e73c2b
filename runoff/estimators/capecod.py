"""
This module contains the class definition of ``CapeCod``.
"""
from .base import FactorBasedMethod
from .bornferg import _check_pattern, _fill_diagonals
from ..utils import _dsum, _render_vector



class CapeCod(FactorBasedMethod):
    """
    The Cape Cod (Stanard-Buehlmann) method. Expected ultimate claims are
    volume measures scaled by an overall loss ratio ``kappa`` estimated
    from the triangle:

        kappa = sum(latest) / sum(volume[r] * factors[periods - 1 - r])

    The square is then filled as in the Bornhuetter-Ferguson method with
    ``kappa * volume`` as expected ultimate claims.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Run-off triangle with the claims observed so far.

    factors: sequence
        Cumulative development pattern, one value per development period.

    volume_measures: sequence
        Volume measure (e.g. premiums), one value per accident period.
    """
    title = "Claims reserving - Cape Cod method"

    def __init__(self, tri, factors, volume_measures):
        super().__init__(tri)
        self._pattern = self._vector(factors, "factors")
        self._volume_measures = self._vector(volume_measures, "volume measures")
        self._kappa = None
        _check_pattern(self._pattern)


    @property
    def volume_measures(self):
        return(self._volume_measures)


    def _compute_kappa(self):
        used_up = _dsum(self._volume_measures * self._pattern[::-1])
        return(_dsum(self.latest) / used_up)


    @property
    def kappa(self):
        """
        Overall loss ratio applied to the volume measures.

        Returns
        -------
        decimal.Decimal
        """
        return(self._memoized("_kappa", self._compute_kappa, "kappa"))


    def _compute_factors(self):
        return(self._pattern)


    def _compute_projection(self):
        if self.periods == 0:
            return(self._new_square())
        expected = self.kappa * self._volume_measures
        return(_fill_diagonals(self._new_square(), self.factors, expected))


    def _vector_line(self):
        return("Volume measures:\t{}".format(_render_vector(self._volume_measures)))
