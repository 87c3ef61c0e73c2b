"""
This module contains the class definition of ``FactorBasedMethod``, the
base class of all reserving methods which develop a run-off triangle into
a square by means of development factors.
"""
import logging
import threading
import warnings
import numpy as np
import pandas as pd
from ..errors import (
    DimensionMismatchError, NegativePeriodError, ObservationPeriodExceededError,
    )
from ..square import Square
from ..utils import _dsum, _fmt, _frozen, _render_vector, _to_decimals

logger = logging.getLogger(__name__)

_SEPARATOR = "--------------------"



class FactorBasedMethod:
    """
    Base class of the factor based reserving methods. A method owns a
    read-only cumulative copy of the triangle passed in at construction.
    Development factors, the projected square, reserves and cashflows are
    computed on first access and cached for the lifetime of the instance.

    Subclasses implement ``_compute_factors`` and ``_compute_projection``.

    Parameters
    ----------
    tri: {runoff.triangle.IncrTriangle, runoff.triangle.CumTriangle}
        Run-off triangle with the claims observed so far.
    """
    title = None

    def __init__(self, tri):
        self._tri = tri.to_cum().as_readonly()
        self._lock = threading.RLock()
        self._factors = None
        self._projection = None
        self._reserves = None
        self._total_reserve = None
        self._cashflows = None
        self._summary = None


    @property
    def tri(self):
        """
        Read-only cumulative triangle the method is based on.
        """
        return(self._tri)


    @property
    def periods(self):
        return(self._tri.periods)


    def _vector(self, values, name):
        """
        Coerce ``values`` to a read-only Decimal array holding one entry
        per accident (or development) period.
        """
        vals = _to_decimals(values)
        if vals.size != self.periods:
            raise DimensionMismatchError(self.periods, vals.size)
        logger.debug("Validated %d %s for %s.", vals.size, name, type(self).__name__)
        return(_frozen(vals))


    def _memoized(self, attr, compute, name):
        value = getattr(self, attr)
        if value is None:
            with self._lock:
                value = getattr(self, attr)
                if value is None:
                    logger.debug("Computing %s for %s.", name, type(self).__name__)
                    value = compute()
                    setattr(self, attr, value)
        return(value)


    def _compute_factors(self):
        raise NotImplementedError


    def _compute_projection(self):
        raise NotImplementedError


    def _new_square(self):
        """
        Return a writeable square holding the historical cells of ``tri``.
        """
        sq = Square(self.periods)
        sq.init_from_triangle(self._tri)
        return(sq)


    @property
    def factors(self):
        """
        Development factors used by the method.

        Returns
        -------
        np.ndarray
        """
        return(self._memoized(
            "_factors", lambda: _frozen(self._compute_factors()), "factors"
            ))


    @property
    def projection(self):
        """
        Triangle developed into a square of cumulative claims.

        Returns
        -------
        runoff.square.Square
        """
        return(self._memoized(
            "_projection", lambda: self._compute_projection().as_readonly(), "projection"
            ))


    def _compute_reserves(self):
        n = self.periods
        if n == 0:
            return(_frozen(np.empty(0, dtype=object)))
        sq = self.projection
        return(_frozen(sq.column(n - 1) - sq.diagonal(n - 1)[::-1]))


    @property
    def reserves(self):
        """
        Reserve by accident period, computed as the projected ultimate less
        the claims paid to date.

        Returns
        -------
        np.ndarray
        """
        return(self._memoized("_reserves", self._compute_reserves, "reserves"))


    def reserve(self, period):
        """
        Return the reserve of accident period ``period``.

        Parameters
        ----------
        period: int
            Index of the accident period.

        Returns
        -------
        decimal.Decimal
        """
        if period < 0:
            raise NegativePeriodError()
        if period > self.periods - 1:
            raise ObservationPeriodExceededError()
        return(self.reserves[period])


    @property
    def total_reserve(self):
        """
        Sum of the reserves over all accident periods.

        Returns
        -------
        decimal.Decimal
        """
        return(self._memoized(
            "_total_reserve", lambda: _dsum(self.reserves), "total reserve"
            ))


    def _compute_cashflows(self):
        n = self.periods
        sq = self.projection
        cashflows = np.empty(max(n - 1, 0), dtype=object)
        for kk in range(n - 1):
            curr = sq.diagonal(n + kk)
            prev = sq.diagonal(n + kk - 1)[:curr.size]
            cashflows[kk] = _dsum(curr - prev)
        return(_frozen(cashflows))


    @property
    def cashflows(self):
        """
        Expected payments per future calendar period, summed over all
        accident periods. A triangle of ``periods`` periods yields
        ``periods - 1`` cashflows.

        Returns
        -------
        np.ndarray
        """
        return(self._memoized("_cashflows", self._compute_cashflows, "cashflows"))


    @property
    def latest(self):
        """
        Cumulative claims paid to date by accident period.

        Returns
        -------
        np.ndarray
        """
        if self.periods == 0:
            return(np.empty(0, dtype=object))
        return(self._tri.latest[::-1])


    @property
    def ultimates(self):
        """
        Projected ultimate claims by accident period.

        Returns
        -------
        np.ndarray
        """
        if self.periods == 0:
            return(np.empty(0, dtype=object))
        return(self.projection.column(self.periods - 1))


    def _compute_summary(self):
        latest, ultimates, reserves = self.latest, self.ultimates, self.reserves
        dfsumm = pd.DataFrame(
            {"latest":latest, "ultimate":ultimates, "reserve":reserves},
            index=range(self.periods), dtype=object,
            )
        dfsumm.loc["total"] = [_dsum(latest), _dsum(ultimates), self.total_reserve]
        return(dfsumm)


    @property
    def summary(self):
        """
        Summary of latest, ultimate and reserve by accident period, with an
        additional ``total`` row.

        Returns
        -------
        pd.DataFrame
        """
        return(self._memoized("_summary", self._compute_summary, "summary").copy())


    def _vector_line(self):
        """
        Rendering of the method specific input vector. None for methods
        without one.
        """
        return(None)


    def _data_transform(self):
        """
        Transform the projected square into a tabular dataset for use in a
        FacetGrid plot by origin. Actual cells carry rectype "actual",
        projected cells rectype "forecast". The latest diagonal appears in
        both cohorts so that the forecast line joins the actuals.

        Returns
        -------
        pd.DataFrame
        """
        n, sq = self.periods, self.projection
        records = []
        for ii in range(n):
            row_ii = sq.row(ii)
            for jj in range(n):
                loss = float(row_ii[jj])
                if jj <= n - 1 - ii:
                    records.append((ii, jj, loss, "actual"))
                if jj >= n - 1 - ii:
                    records.append((ii, jj, loss, "forecast"))
        return(pd.DataFrame.from_records(
            records, columns=["origin", "dev", "loss", "rectype"]
            ))


    def plot(self, actuals_color="#334488", forecasts_color="#FFFFFF", axes_style="darkgrid",
             context="notebook", col_wrap=4, exhibit_path=None):
        """
        Visualize actual losses along with projected development by origin.

        Parameters
        ----------
        actuals_color: str
            A color name or hexidecimal code used to represent actual
            observations. Defaults to "#334488".

        forecasts_color: str
            A color name or hexidecimal code used to represent forecast
            observations. Defaults to "#FFFFFF".

        axes_style: str
            Aesthetic style of plots. Defaults to "darkgrid". Other options
            include: {whitegrid, dark, white, ticks}.

        context: str
            Set the plotting context parameters. Defaults to ``"notebook"``.
            Additional options include {paper, talk, poster}.

        col_wrap: int
            The maximum number of origin period axes to have on a single row
            of the resulting FacetGrid. Defaults to 4.

        exhibit_path: str
            Path to which exhibit should be written. If None, exhibit will be
            rendered via ``plt.show()``.
        """
        import matplotlib.pyplot as plt
        import seaborn as sns
        sns.set_context(context)

        data = self._data_transform()

        with sns.axes_style(axes_style):

            huekwargs = dict(
                marker=["o", "o",], markersize=[6, 6,],
                color=["#000000", "#000000",],
                markerfacecolor=[forecasts_color, actuals_color,],
                markeredgecolor=["#000000", "#000000",],
                linestyle=["-", "-",], linewidth=[.475, .475,],
                )

            grid = sns.FacetGrid(
                data, col="origin", hue="rectype", hue_kws=huekwargs,
                col_wrap=col_wrap, margin_titles=False, despine=True, sharex=False,
                sharey=False, hue_order=["forecast", "actual",]
                )
            grid.map(plt.plot, "dev", "loss",)

            with warnings.catch_warnings():

                warnings.simplefilter("ignore")

                for origin, ax_ii in zip(sorted(data["origin"].unique()), grid.axes):
                    ax_ii.annotate(
                        origin, xy=(.075, .90), xytext=(.075, .90), xycoords='axes fraction',
                        textcoords='axes fraction', fontsize=9, rotation=0, color="#000000",
                        )
                    ax_ii.set_title(""); ax_ii.set_xlabel(""); ax_ii.set_ylabel("")

            if exhibit_path is not None:
                plt.savefig(exhibit_path)
            else:
                plt.show()
            plt.close(grid.figure)


    def __str__(self):
        lines = [self.title, _SEPARATOR]
        vector_line = self._vector_line()
        if vector_line is not None:
            lines.extend([vector_line, _SEPARATOR])
        lines.extend([
            str(self.projection), _SEPARATOR,
            "Factors:\t{}".format(_render_vector(self.factors)),
            "Total reserve:\t{}".format(_fmt(self.total_reserve)),
            ])
        return("\n".join(lines))


    def __repr__(self):
        return(self.__str__())
