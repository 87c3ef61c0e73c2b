r"""
                         __  __
  _ __ _   _ _ __   ___  / _|/ _|
 | '__| | | | '_ \ / _ \| |_| |_
 | |  | |_| | | | | (_) |  _|  _|
 |_|   \__,_|_| |_|\___/|_| |_|

Factor Based Claims Reserving on Run-off Triangles
"""
from functools import partial
import pandas as pd
from .datasets import dataref, volref
from .errors import (
    DimensionMismatchError, NegativePeriodError, ObservationPeriodExceededError,
    )
from .estimators import (
    AdditiveMethod, BornhuetterFerguson, CapeCod, ChainLadder, FactorBasedMethod,
    LossDevelopment,
    )
from .square import Square
from .triangle import CumTriangle, IncrTriangle, convert, totri
from .utils import _load, _get_datasets, _get_volumes


pd.set_option('display.max_columns', 1000)
pd.set_option('display.width', 500)

# Initialize dataset loading utilities.
load = partial(_load, dataref=dataref)
get_datasets = partial(_get_datasets, dataref=dataref)
get_volumes = partial(_get_volumes, volref=volref)

__version__ = '0.1.0'
