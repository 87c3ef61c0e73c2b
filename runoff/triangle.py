"""
This module contains the definitions of both the ``IncrTriangle`` and
``CumTriangle`` classes. Triangles can be grown one calendar period at a
time via ``add_claims``, or created in a single step by passing the loss
data to ``totri``, which will return either an instance of ``CumTriangle``
or ``IncrTriangle``, depending on the argument specified for ``tri_type``.

Claims are held as ``decimal.Decimal`` in a single flat numpy object array.
Cells are laid out diagonal by diagonal, so that cell ``(row, column)``
lives at offset ``d * (d + 1) / 2 + column`` where ``d = row + column``.
Appending a calendar period therefore only ever writes past the end of the
occupied region, and growing the capacity is a plain copy.
"""
import logging
from decimal import Decimal
import numpy as np
import pandas as pd
from .errors import (
    DimensionMismatchError, NegativePeriodError, ObservationPeriodExceededError,
    )
from .estimators import (
    AdditiveMethod, BornhuetterFerguson, CapeCod, ChainLadder, LossDevelopment,
    )
from .utils import _render_rows, _to_decimal, _to_decimals

logger = logging.getLogger(__name__)

# Number of periods the claims array is sized for at construction.
INITIAL_CAPACITY = 8

_ZERO = Decimal(0)



def _nbr_cells(periods):
    return(periods * (periods + 1) // 2)



class _BaseTriangle:
    """
    Run-off triangle base class. Row ``i`` represents the ``i``-th accident
    period, column ``j`` the ``j``-th development period and diagonal
    ``i + j`` the calendar period in which the claims were settled.

    Parameters
    ----------
    periods: int
        Number of periods under observation. The triangle is initialized
        with zeros. Defaults to 0.
    """
    tri_type = None

    def __init__(self, periods=0):
        if periods < 0:
            raise NegativePeriodError()

        capacity = INITIAL_CAPACITY
        while capacity < periods:
            capacity *= 2

        self._capacity = capacity
        self._claims = np.full(_nbr_cells(capacity), _ZERO, dtype=object)
        self._periods = periods
        self._readonly = False


    @property
    def periods(self):
        """
        Number of accident periods under observation.

        Returns
        -------
        int
        """
        return(self._periods)


    @property
    def nbr_cells(self):
        """
        Return the number of valid cells, ``periods * (periods + 1) / 2``.

        Returns
        -------
        int
        """
        return(_nbr_cells(self._periods))


    @property
    def readonly(self):
        return(self._readonly)


    @property
    def latest(self):
        """
        Return the values on the triangle's main (latest) diagonal, ordered
        from the most recent accident period to the oldest.

        Returns
        -------
        np.ndarray
        """
        return(self.diagonal())


    @staticmethod
    def _offsets(rows, columns):
        diagonals = rows + columns
        return(diagonals * (diagonals + 1) // 2 + columns)


    def _check_writeable(self):
        if self._readonly:
            raise TypeError("Read-only triangle cannot be modified.")


    def _check_cell(self, row, column):
        if row < 0 or column < 0:
            raise NegativePeriodError()
        if row + column > self._periods - 1:
            raise ObservationPeriodExceededError()


    def _check_period(self, period):
        if period < 0:
            raise NegativePeriodError()
        if period > self._periods - 1:
            raise ObservationPeriodExceededError()


    def __getitem__(self, key):
        row, column = key
        self._check_cell(row, column)
        return(self._claims[self._offsets(row, column)])


    def __setitem__(self, key, value):
        self._check_writeable()
        row, column = key
        self._check_cell(row, column)
        self._claims[self._offsets(row, column)] = _to_decimal(value)


    def _row_offsets(self, row):
        columns = np.arange(self._periods - row)
        return(self._offsets(row, columns))


    def _column_offsets(self, column):
        rows = np.arange(self._periods - column)
        return(self._offsets(rows, column))


    def _diagonal_slice(self, diagonal):
        start = _nbr_cells(diagonal)
        return(slice(start, start + diagonal + 1))


    def row(self, row):
        """
        Return the claims of accident period ``row``, ordered by development
        period. Row ``i`` holds ``periods - i`` values.

        Parameters
        ----------
        row: int
            Index of the accident period.

        Returns
        -------
        np.ndarray
        """
        self._check_period(row)
        return(self._claims[self._row_offsets(row)])


    def column(self, column):
        """
        Return the claims of development period ``column``, ordered by
        accident period. Column ``j`` holds ``periods - j`` values.

        Parameters
        ----------
        column: int
            Index of the development period.

        Returns
        -------
        np.ndarray
        """
        self._check_period(column)
        return(self._claims[self._column_offsets(column)])


    def diagonal(self, diagonal=None):
        """
        Return triangle values along calendar period ``diagonal``. Diagonals
        are read from the lower left to the upper right, i.e. from
        ``(diagonal, 0)`` to ``(0, diagonal)``. When ``diagonal`` is None,
        returns the latest diagonal.

        Parameters
        ----------
        diagonal: int
            Index of the calendar period. Defaults to ``periods - 1``.

        Returns
        -------
        np.ndarray
        """
        if diagonal is None:
            diagonal = self._periods - 1
        self._check_period(diagonal)
        return(self._claims[self._diagonal_slice(diagonal)].copy())


    def set_row(self, values, row):
        """
        Overwrite the claims of accident period ``row``.

        Parameters
        ----------
        values: sequence
            Exactly ``periods - row`` amounts, ordered by development period.

        row: int
            Index of the accident period.
        """
        self._check_writeable()
        self._check_period(row)
        vals = _to_decimals(values)
        if vals.size != self._periods - row:
            raise DimensionMismatchError(self._periods - row, vals.size)
        self._claims[self._row_offsets(row)] = vals


    def set_column(self, values, column):
        """
        Overwrite the claims of development period ``column``.

        Parameters
        ----------
        values: sequence
            Exactly ``periods - column`` amounts, ordered by accident period.

        column: int
            Index of the development period.
        """
        self._check_writeable()
        self._check_period(column)
        vals = _to_decimals(values)
        if vals.size != self._periods - column:
            raise DimensionMismatchError(self._periods - column, vals.size)
        self._claims[self._column_offsets(column)] = vals


    def set_diagonal(self, values, diagonal=None):
        """
        Overwrite the claims of calendar period ``diagonal``.

        Parameters
        ----------
        values: sequence
            Exactly ``diagonal + 1`` amounts, ordered from the lower left to
            the upper right of the triangle.

        diagonal: int
            Index of the calendar period. Defaults to ``periods - 1``.
        """
        self._check_writeable()
        if diagonal is None:
            diagonal = self._periods - 1
        self._check_period(diagonal)
        vals = _to_decimals(values)
        if vals.size != diagonal + 1:
            raise DimensionMismatchError(diagonal + 1, vals.size)
        self._claims[self._diagonal_slice(diagonal)] = vals


    def _grow(self):
        """
        Double the capacity of the claims array. Since cells are stored
        diagonal-major, existing offsets remain valid.
        """
        capacity = 2 * self._capacity
        claims = np.full(_nbr_cells(capacity), _ZERO, dtype=object)
        claims[:self._claims.size] = self._claims
        logger.debug(
            "Grew %s capacity from %d to %d periods.",
            type(self).__name__, self._capacity, capacity
            )
        self._claims = claims
        self._capacity = capacity


    def _accumulate(self, vals):
        return(vals)


    def add_claims(self, values):
        """
        Append the claims settled in a new calendar period. The claims are
        ordered by development period in ascending order, e.g. for the
        fourth calendar period of observation:

            1. Claim occured in period 3, settled in period 3 (lag 0).
            2. Claim occured in period 2, settled in period 3 (lag 1).
            3. Claim occured in period 1, settled in period 3 (lag 2).
            4. Claim occured in period 0, settled in period 3 (lag 3).

        Parameters
        ----------
        values: sequence
            Exactly ``periods + 1`` amounts paid in the new calendar period.
        """
        self._check_writeable()
        vals = _to_decimals(values)
        if vals.size != self._periods + 1:
            raise DimensionMismatchError(self._periods + 1, vals.size)

        if self._periods + 1 > self._capacity:
            self._grow()

        self._claims[self._diagonal_slice(self._periods)] = self._accumulate(vals)
        self._periods += 1


    def shift(self, shift_factor):
        """
        Shift claims partially to the future. Row ``i`` of the returned
        triangle is ``(1 - s) * row_i + s * row_(i + 1)``, truncated to the
        length of the shorter row, so the returned triangle has one period
        less than ``self``.

        Parameters
        ----------
        shift_factor: Decimal
            The share of claims shifted to the following accident period.
            Must lie within [0, 1].

        Returns
        -------
        Triangle of the same type as ``self``.
        """
        s = _to_decimal(shift_factor)
        if s < 0 or s > 1:
            raise ValueError("shift_factor must fall between [0, 1], not `{}`.".format(shift_factor))
        if self._periods < 1:
            raise ValueError("Cannot shift a triangle without observed periods.")

        shifted = _new_triangle(self.tri_type, self._periods - 1)
        for ii in range(self._periods - 1):
            row_ii = self.row(ii)[:self._periods - ii - 1]
            shifted.set_row((1 - s) * row_ii + s * self.row(ii + 1), ii)
        return(shifted)


    def copy(self):
        """
        Return a writeable deep copy of the triangle.
        """
        tri = _new_triangle(self.tri_type, self._periods)
        ncells = self.nbr_cells
        tri._claims[:ncells] = self._claims[:ncells]
        return(tri)


    def as_readonly(self):
        """
        Return a read-only snapshot of the triangle. Setters and
        ``add_claims`` raise ``TypeError`` on the snapshot.
        """
        tri = self.copy()
        tri._readonly = True
        return(tri)


    def to_tbl(self):
        """
        Transform triangle instance into a tabular representation, one record
        per valid cell.

        Returns
        -------
        pd.DataFrame
        """
        records = [
            (ii, jj, self._claims[self._offsets(ii, jj)])
                for ii in range(self._periods) for jj in range(self._periods - ii)
            ]
        return(pd.DataFrame.from_records(records, columns=["origin", "dev", "value"]))


    def to_frame(self):
        """
        Return the triangle as a DataFrame indexed by accident period with
        one column per development period. Unobserved cells are NaN.

        Returns
        -------
        pd.DataFrame
        """
        df = pd.DataFrame(
            np.nan, index=range(self._periods), columns=range(self._periods), dtype=object
            )
        for ii in range(self._periods):
            df.iloc[ii, :self._periods - ii] = self.row(ii)
        return(df)


    def chain_ladder(self):
        """
        Produce chain ladder reserve estimates based on the triangle.

        Returns
        -------
        runoff.estimators.ChainLadder
        """
        return(ChainLadder(self))


    def additive(self, premiums):
        """
        Produce additive method reserve estimates based on the triangle and
        one premium per accident period.

        Returns
        -------
        runoff.estimators.AdditiveMethod
        """
        return(AdditiveMethod(self, premiums))


    def bornhuetter_ferguson(self, factors, alpha):
        """
        Produce Bornhuetter-Ferguson reserve estimates from a development
        pattern and the a priori expected ultimate claims ``alpha``.

        Returns
        -------
        runoff.estimators.BornhuetterFerguson
        """
        return(BornhuetterFerguson(self, factors, alpha))


    def cape_cod(self, factors, volume_measures):
        """
        Produce Cape Cod reserve estimates from a development pattern and
        volume measures (e.g. premiums) by accident period.

        Returns
        -------
        runoff.estimators.CapeCod
        """
        return(CapeCod(self, factors, volume_measures))


    def loss_development(self, factors):
        """
        Produce loss development reserve estimates from a development pattern.

        Returns
        -------
        runoff.estimators.LossDevelopment
        """
        return(LossDevelopment(self, factors))


    def __eq__(self, other):
        if not isinstance(other, _BaseTriangle):
            return(NotImplemented)
        if self.tri_type != other.tri_type or self._periods != other._periods:
            return(False)
        ncells = self.nbr_cells
        return(bool(np.all(self._claims[:ncells] == other._claims[:ncells])))


    __hash__ = None


    def __str__(self):
        return(_render_rows(self.row(ii) for ii in range(self._periods)))


    def __repr__(self):
        return(_render_rows(self.row(ii) for ii in range(self._periods)))



class IncrTriangle(_BaseTriangle):
    """
    Incremental triangle class definition. The value at ``(i, j)`` is the
    amount paid for accident period ``i`` in development period ``j``.
    """
    tri_type = "incr"

    def to_cum(self):
        """
        Transform triangle instance into cumulative representation.

        Returns
        -------
        runoff.triangle.CumTriangle
        """
        cumtri = CumTriangle(self.periods)
        if self.periods == 0:
            return(cumtri)

        cumtri.set_column(self.column(0), 0)
        for ii in range(self.periods - 1):
            prior = cumtri.column(ii)[:self.periods - 1 - ii]
            cumtri.set_column(prior + self.column(ii + 1), ii + 1)
        return(cumtri)


    def to_incr(self):
        """
        Return a copy of the triangle.

        Returns
        -------
        runoff.triangle.IncrTriangle
        """
        return(self.copy())



class CumTriangle(_BaseTriangle):
    """
    Cumulative triangle class definition. The value at ``(i, j)`` is the
    total amount paid for accident period ``i`` up to and including
    development period ``j``.
    """
    tri_type = "cum"

    def _accumulate(self, vals):
        # Payments of the new calendar period are added to the prior
        # cumulative values of each accident period (previous diagonal).
        prior = self._claims[self._diagonal_slice(self._periods - 1)] \
                if self._periods > 0 else np.empty(0, dtype=object)
        cumvals = vals.copy()
        cumvals[1:] = vals[1:] + prior
        return(cumvals)


    def to_incr(self):
        """
        Obtain incremental triangle based on cumulative triangle instance.

        Returns
        -------
        runoff.triangle.IncrTriangle
        """
        incrtri = IncrTriangle(self.periods)
        if self.periods == 0:
            return(incrtri)

        incrtri.set_column(self.column(0), 0)
        for ii in range(self.periods - 1):
            prior = self.column(ii)[:self.periods - 1 - ii]
            incrtri.set_column(self.column(ii + 1) - prior, ii + 1)
        return(incrtri)


    def to_cum(self):
        """
        Return a copy of the triangle.

        Returns
        -------
        runoff.triangle.CumTriangle
        """
        return(self.copy())



_TRIANGLE_TYPES = {"incr": IncrTriangle, "cum": CumTriangle}



def _tri_type(tri_type, argname="tri_type"):
    """
    Normalize a triangle type specification to one of ``{"incr", "cum"}``.
    """
    label = str(tri_type).lower().strip()
    if label.startswith("i"):
        return("incr")
    elif label.startswith("c"):
        return("cum")
    raise ValueError("Invalid {} argument: `{}`.".format(argname, tri_type))



def _new_triangle(tri_type, periods=0):
    """
    Create an empty (zero-filled) triangle of the requested type.

    Parameters
    ----------
    tri_type: {"incr", "cum"}

    periods: int
        Number of periods of the new triangle. Defaults to 0.

    Returns
    -------
    {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
    """
    return(_TRIANGLE_TYPES[_tri_type(tri_type)](periods))



def convert(tri, tri_type):
    """
    Convert ``tri`` into a new triangle of type ``tri_type``.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Triangle to convert.

    tri_type: {"incr", "cum"}
        Representation of the returned triangle.

    Returns
    -------
    {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
    """
    if _tri_type(tri_type) == "cum":
        return(tri.to_cum())
    return(tri.to_incr())



def _validate(data, origin="origin", dev="dev", value="value"):
    """
    Ensure data has requisite columns.

    Parameters
    ----------
    data: pd.DataFrame
        Initial dataset to be coerced to triangle.

    origin: str
        The fieldname in ``data`` representing origin period.

    dev: str
        The fieldname in ``data`` representing development period.

    value: str
        The fieldname in ``data`` representing loss amounts.
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError("`data` must be an instance of pd.DataFrame.")

    for field in (origin, dev, value):
        if field not in data.columns:
            raise KeyError("`{}` not present in data.".format(field))



def _from_records(data, tri_type, origin="origin", dev="dev", value="value"):
    """
    Populate a triangle of ``tri_type`` from tabular loss records. Origin
    and development periods are ranked in ascending order to obtain the
    row and column indices. Amounts for duplicate ``(origin, dev)`` pairs
    are summed.
    """
    data = data[data[value].notna()]
    origins = sorted(data[origin].unique())
    devps = sorted(data[dev].unique())
    origin_indx = {jj:ii for ii, jj in enumerate(origins)}
    dev_indx = {jj:ii for ii, jj in enumerate(devps)}

    tri = _new_triangle(tri_type, len(origins))
    for origin_, dev_, value_ in zip(data[origin], data[dev], data[value]):
        ii, jj = origin_indx[origin_], dev_indx[dev_]
        tri[ii, jj] = tri[ii, jj] + _to_decimal(value_)
    return(tri)



def totri(data, tri_type="cum", data_format="incr", data_shape=None,
          origin="origin", dev="dev", value="value"):
    """
    Create a triangle object based on ``data``. ``tri_type`` can be one of
    "incr" or "cum", determining whether the resulting triangle represents
    incremental or cumulative losses.

    If ``data_shape="diagonals"``, ``data`` is a sequence of calendar
    periods, each holding the amounts ordered from development period 0
    to the latest development period (the ``add_claims`` layout).
    If ``data_shape="tabular"``, data is assumed to be a DataFrame with at
    minimum columns ``origin``, ``dev`` and ``value``, which represent
    origin period, development period and amount respectively.
    If ``data_shape="triangle"``, ``data`` is a DataFrame indexed by origin
    with columns representing development periods, NaN marking cells not
    yet observed.

    Parameters
    ----------
    data: pd.DataFrame or sequence of sequences
        The dataset to be coerced into a triangle instance.

    tri_type: {"cum", "incr"}
        Specifies how the amounts should be represented in the returned
        triangle instance. Default value is "cum".

    data_format: {"cum", "incr"}
        Specifies the representation of the amounts in ``data``. Default
        value is "incr".

    data_shape: {None, "diagonals", "tabular", "triangle"}
        Indicates how ``data`` is structured. If None, "tabular" is assumed
        for DataFrames and "diagonals" otherwise. Default value is None.

    origin: str
        The field in ``data`` representing origin period. Only used when
        ``data_shape="tabular"``. Default value is "origin".

    dev: str
        The field in ``data`` representing development period. Only used
        when ``data_shape="tabular"``. Default value is "dev".

    value: str
        The field in ``data`` representing amounts. Only used when
        ``data_shape="tabular"``. Default value is "value".

    Returns
    -------
    {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}

    Examples
    --------
    Create a cumulative triangle from three calendar periods of payments::

        In [1]: from runoff import totri
        In [2]: tri = totri([[100], [110, 50], [120, 55, 20]])
        In [3]: print(tri)
        100.00	150.00	170.00
        110.00	165.00
        120.00
    """
    tri_type = _tri_type(tri_type)
    data_format = _tri_type(data_format, argname="data_format")

    if data_shape is None:
        data_shape = "tabular" if isinstance(data, pd.DataFrame) else "diagonals"

    if data_shape == "diagonals":
        diagonals = list(data)
        tri = _new_triangle(data_format, len(diagonals))
        for ii, diagonal in enumerate(diagonals):
            tri.set_diagonal(diagonal, ii)

    elif data_shape == "tabular":
        _validate(data, origin=origin, dev=dev, value=value)
        tri = _from_records(data, data_format, origin=origin, dev=dev, value=value)

    elif data_shape == "triangle":
        if not isinstance(data, pd.DataFrame):
            raise TypeError("`data` must be an instance of pd.DataFrame.")
        df = data.copy(deep=True)
        df.index.name, df.columns.name = "origin", None
        df = pd.melt(
            df.reset_index(drop=False), id_vars=["origin"], var_name="dev", value_name="value"
            )
        tri = _from_records(df, data_format)

    else:
        raise ValueError("Invalid data_shape argument: `{}`.".format(data_shape))

    if tri.tri_type == tri_type:
        return(tri)
    return(convert(tri, tri_type))
