"""
Run-off square. A ``Square`` holds the completed claims of ``periods``
accident periods developed over ``periods`` development periods: the
historical cells copied from a triangle plus the projected future cells
produced by a reserving method.
"""
from decimal import Decimal
import numpy as np
import pandas as pd
from .errors import (
    DimensionMismatchError, NegativePeriodError, ObservationPeriodExceededError,
    )
from .utils import _render_rows, _to_decimal, _to_decimals



class Square:
    """
    Square of claims indexed by accident period (row) and development
    period (column). Diagonal ``d`` runs from ``(d, 0)`` to ``(0, d)`` for
    ``d < periods`` and from ``(periods - 1, d - periods + 1)`` to
    ``(d - periods + 1, periods - 1)`` otherwise.

    Parameters
    ----------
    periods: int
        Number of accident periods. The square is initialized with zeros.
    """
    def __init__(self, periods):
        if periods < 0:
            raise NegativePeriodError()
        self._periods = periods
        self._claims = np.full((periods, periods), Decimal(0), dtype=object)
        self._readonly = False


    @property
    def periods(self):
        return(self._periods)


    @property
    def readonly(self):
        return(self._readonly)


    def _check_writeable(self):
        if self._readonly:
            raise TypeError("Read-only square cannot be modified.")


    def _check_period(self, period, last=None):
        if last is None:
            last = self._periods - 1
        if period < 0:
            raise NegativePeriodError()
        if period > last:
            raise ObservationPeriodExceededError()


    def _diagonal_index(self, diagonal):
        """
        Row and column indices of the cells on ``diagonal``, starting from
        the lower left.
        """
        first_row = min(diagonal, self._periods - 1)
        rows = np.arange(first_row, diagonal - first_row - 1, -1)
        return(rows, diagonal - rows)


    def __getitem__(self, key):
        row, column = key
        self._check_period(row)
        self._check_period(column)
        return(self._claims[row, column])


    def __setitem__(self, key, value):
        self._check_writeable()
        row, column = key
        self._check_period(row)
        self._check_period(column)
        self._claims[row, column] = _to_decimal(value)


    def row(self, row):
        """
        Return the claims of accident period ``row`` (``periods`` values).
        """
        self._check_period(row)
        return(self._claims[row, :].copy())


    def column(self, column):
        """
        Return the claims of development period ``column`` (``periods`` values).
        """
        self._check_period(column)
        return(self._claims[:, column].copy())


    def diagonal(self, diagonal):
        """
        Return the claims of calendar period ``diagonal``, read from the
        lower left to the upper right. Valid diagonals range over
        ``[0, 2 * periods - 2]``.

        Parameters
        ----------
        diagonal: int
            Index of the calendar period.

        Returns
        -------
        np.ndarray
        """
        self._check_period(diagonal, last=2 * self._periods - 2)
        rows, columns = self._diagonal_index(diagonal)
        return(self._claims[rows, columns])


    def set_row(self, values, row):
        self._check_writeable()
        self._check_period(row)
        vals = _to_decimals(values)
        if vals.size != self._periods:
            raise DimensionMismatchError(self._periods, vals.size)
        self._claims[row, :] = vals


    def set_column(self, values, column):
        self._check_writeable()
        self._check_period(column)
        vals = _to_decimals(values)
        if vals.size != self._periods:
            raise DimensionMismatchError(self._periods, vals.size)
        self._claims[:, column] = vals


    def set_diagonal(self, values, diagonal):
        """
        Overwrite the claims of calendar period ``diagonal``.

        Parameters
        ----------
        values: sequence
            Amounts ordered from the lower left to the upper right. The
            length must equal the number of cells on ``diagonal``.

        diagonal: int
            Index of the calendar period.
        """
        self._check_writeable()
        self._check_period(diagonal, last=2 * self._periods - 2)
        rows, columns = self._diagonal_index(diagonal)
        vals = _to_decimals(values)
        if vals.size != rows.size:
            raise DimensionMismatchError(rows.size, vals.size)
        self._claims[rows, columns] = vals


    def init_from_triangle(self, triangle):
        """
        Copy all historical cells of ``triangle`` into the square.

        Parameters
        ----------
        triangle: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
            Triangle with the same number of periods as the square.
        """
        self._check_writeable()
        if triangle.periods != self._periods:
            raise DimensionMismatchError(self._periods, triangle.periods)
        for ii in range(self._periods):
            self._claims[ii, :self._periods - ii] = triangle.row(ii)


    def copy(self):
        """
        Return a writeable deep copy of the square.
        """
        sq = Square(self._periods)
        sq._claims[:, :] = self._claims
        return(sq)


    def as_readonly(self):
        """
        Return a read-only snapshot of the square.
        """
        sq = self.copy()
        sq._readonly = True
        return(sq)


    def to_frame(self):
        """
        Return the square as a ``periods`` x ``periods`` DataFrame indexed by
        accident period, with one column per development period.

        Returns
        -------
        pd.DataFrame
        """
        return(pd.DataFrame(
            self._claims.copy(), index=range(self._periods), columns=range(self._periods)
            ))


    def __eq__(self, other):
        if not isinstance(other, Square):
            return(NotImplemented)
        if self._periods != other._periods:
            return(False)
        return(bool(np.all(self._claims == other._claims)))


    __hash__ = None


    def __str__(self):
        return(_render_rows(self._claims[ii, :] for ii in range(self._periods)))


    def __repr__(self):
        return(self.__str__())
