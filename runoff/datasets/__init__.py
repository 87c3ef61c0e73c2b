"""
runoff sample datasets. Loss data are stored as incremental amounts in
tabular form (origin, dev, value). Volume measures, where available, are
stored by origin period.
"""
from pathlib import Path

datasets_dir = Path(__file__).parent

dataref = {
    "raa": str(datasets_dir.joinpath("RAA.csv")),
    "sample": str(datasets_dir.joinpath("sample.csv")),
    }

volref = {
    "sample": str(datasets_dir.joinpath("sample_volumes.csv")),
    }
