"""
runoff.utils and sample dataset tests.
"""
import unittest
import warnings
from decimal import Decimal
from pathlib import Path
import numpy as np
import pandas as pd
import runoff
from runoff.triangle import CumTriangle, IncrTriangle
from runoff.utils import _dsum, _to_decimal, _to_decimals



# Decimal coercion unit tests -------------------------------------------------

class DecimalCoercionTestCase(unittest.TestCase):

    def test_float_uses_shortest_repr(self):
        self.assertEqual(_to_decimal(0.1), Decimal("0.1"))

    def test_integers(self):
        self.assertEqual(_to_decimal(np.int64(7)), Decimal(7))
        self.assertEqual(_to_decimal("12.50"), Decimal("12.50"))

    def test_invalid_values(self):
        with self.assertRaises(TypeError):
            _to_decimal(True)
        with self.assertRaises(TypeError):
            _to_decimal(None)
        with self.assertRaises(ValueError):
            _to_decimal("abc")
        with self.assertRaises(ValueError):
            _to_decimal(float("nan"))

    def test_sequences(self):
        vals = _to_decimals([1, "2", 3.5])
        self.assertEqual(vals.dtype, object)
        self.assertTrue(np.all(vals == [Decimal(1), Decimal(2), Decimal("3.5")]))
        with self.assertRaises(TypeError):
            _to_decimals("123")

    def test_dsum_empty(self):
        self.assertIsInstance(_dsum([]), Decimal)



# Ensure sample datasets have been properly loaded ----------------------------

class DatasetsTestCase(unittest.TestCase):

    def setUp(self):
        self.dactual = {"raa":160987, "sample":20334,}


    def test_get_datasets(self):
        self.assertEqual(runoff.get_datasets(), ["raa", "sample"])

    def test_load(self):
        for dataset in self.dactual:
            df = runoff.load(dataset)
            self.assertIsInstance(df, pd.DataFrame)
            self.assertEqual(list(df.columns), ["origin", "dev", "value"])
            self.assertEqual(
                df["value"].sum(), self.dactual[dataset],
                "Dataset `{}` total mismatch.".format(dataset)
                )

    def test_load_triangles(self):
        self.assertIsInstance(runoff.load("raa", tri_type="incr"), IncrTriangle)
        self.assertIsInstance(runoff.load("raa", tri_type="cum"), CumTriangle)
        self.assertEqual(runoff.load("raa", tri_type="cum").periods, 10)

    def test_raa_latest(self):
        tri = runoff.load("raa", tri_type="cum")
        latest = [18834, 16704, 23466, 27067, 26180, 15852, 12314, 13112, 5395, 2063]
        self.assertTrue(np.all(tri.latest[::-1] == [Decimal(ii) for ii in latest]))

    def test_load_invalid(self):
        with self.assertRaises(KeyError):
            runoff.load("nonexistent")
        with self.assertRaises(ValueError):
            runoff.load("raa", tri_type="paid")

    def test_package_source_compiles_cleanly(self):
        source = Path(runoff.__file__).read_text(encoding="utf-8")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, runoff.__file__, "exec")

    def test_get_volumes(self):
        volumes = runoff.get_volumes("sample")
        self.assertEqual(list(volumes.index), list(range(2013, 2019)))
        self.assertEqual(volumes.iloc[-1], Decimal(8200))
        with self.assertRaises(KeyError):
            runoff.get_volumes("raa")



if __name__ == "__main__":

    unittest.main()
