"""
Various runoff utilities. Contains the decimal coercion helpers shared by
triangles, squares and reserving methods, the diagnostic text rendering and
convenience functions in support of the bundled sample datasets.
"""
import decimal
from decimal import Decimal
import numpy as np
import pandas as pd


# Number of decimal places used in diagnostic renderings.
DISPLAY_PLACES = 2



def _to_decimal(value):
    """
    Coerce ``value`` to ``decimal.Decimal``. Floats are converted through
    their shortest string representation, so that ``0.1`` becomes
    ``Decimal("0.1")`` rather than its binary approximation.

    Parameters
    ----------
    value: Decimal, int, float, str or numpy scalar
        The value to convert.

    Returns
    -------
    decimal.Decimal
    """
    if isinstance(value, Decimal):
        return(value)

    if isinstance(value, (bool, np.bool_)):
        raise TypeError("Boolean values cannot be used as claim amounts.")

    if isinstance(value, (int, np.integer)):
        return(Decimal(int(value)))

    if isinstance(value, (float, np.floating)):
        if not np.isfinite(value):
            raise ValueError("`{}` is not a finite amount.".format(value))
        return(Decimal(repr(float(value))))

    if isinstance(value, str):
        try:
            return(Decimal(value.strip()))
        except decimal.InvalidOperation as exc:
            raise ValueError("`{}` cannot be converted to Decimal.".format(value)) from exc

    raise TypeError(
        "Unsupported type for claim amounts: `{}`.".format(type(value).__name__)
        )



def _to_decimals(values):
    """
    Coerce an iterable of values to a one-dimensional numpy object array
    of ``decimal.Decimal``.

    Parameters
    ----------
    values: iterable

    Returns
    -------
    np.ndarray
    """
    if isinstance(values, (str, bytes)):
        raise TypeError("`values` must be a sequence of amounts, not a string.")
    vals = [_to_decimal(ii) for ii in values]
    arr = np.empty(len(vals), dtype=object)
    arr[:] = vals
    return(arr)



def _dsum(values):
    """
    Sum ``values`` starting from ``Decimal(0)``, so that an empty slice
    sums to a Decimal rather than to the integer 0.
    """
    return(sum(values, Decimal(0)))



def _frozen(arr):
    """
    Flag ``arr`` as read-only and return it.
    """
    arr.flags.writeable = False
    return(arr)



def _fmt(value):
    return("{:.{}f}".format(value, DISPLAY_PLACES))



def _render_vector(values):
    """
    Tab-separated rendering of ``values`` with ``DISPLAY_PLACES`` decimals.
    """
    return("\t".join(_fmt(ii) for ii in values))



def _render_rows(rows):
    """
    Render a sequence of rows as tab-separated lines.
    """
    return("\n".join(_render_vector(ii) for ii in rows))



def _load(dataset, tri_type=None, dataref=None):
    """
    Load the specified sample dataset. If ``tri_type`` is not None, return
    sample dataset as specified triangle (one of ``{"cum", "incr"}``).

    Parameters
    ----------
    dataset: str
        Specifies which sample dataset to load. The complete set of sample
        datasets can be obtained by calling ``get_datasets``.

    tri_type: ``None`` or {"incr", "cum"}
        If ``None``, the dataset is returned as pd.DataFrame with fields
        ``origin``, ``dev`` and (incremental) ``value``. Otherwise, return
        the dataset as either incremental or cumulative triangle type.
        Default value is None.

    dataref: dict
        Mapping of dataset names to csv file paths.

    Returns
    -------
    Either pd.DataFrame, runoff.triangle.IncrTriangle or runoff.triangle.CumTriangle.
    """
    if dataset not in dataref.keys():
        raise KeyError("Specified dataset does not exist: `{}`".format(dataset))

    loss_data = pd.read_csv(dataref[dataset], delimiter=",")
    loss_data = loss_data[["origin", "dev", "value"]].reset_index(drop=True)

    if tri_type is not None:
        if not tri_type.startswith(("c", "i")):
            raise ValueError("tri_type must be one of {{'cum', 'incr'}}, not `{}`.".format(tri_type))
        from .triangle import totri
        loss_data = totri(loss_data, tri_type=tri_type, data_shape="tabular")

    return(loss_data)



def _get_datasets(dataref):
    """
    Generate a list containing the names of available sample datasets.

    Parameters
    ----------
    dataref: dict
        Mapping of dataset names to csv file paths.

    Returns
    -------
    list
        Names of available sample datasets.
    """
    return(sorted(dataref.keys()))



def _get_volumes(dataset, volref=None):
    """
    Return the volume measures (premiums) bundled with ``dataset``, ordered
    by ascending origin period.

    Parameters
    ----------
    dataset: str
        Name of a sample dataset shipping volume measures.

    volref: dict
        Mapping of dataset names to csv file paths holding origin and volume.

    Returns
    -------
    pd.Series
    """
    if dataset not in volref.keys():
        raise KeyError("No volume measures available for dataset `{}`.".format(dataset))

    dfvol = pd.read_csv(volref[dataset], delimiter=",").sort_values("origin")
    return(pd.Series(
        _to_decimals(dfvol["volume"]), index=dfvol["origin"].values, name="volume"
        ))
