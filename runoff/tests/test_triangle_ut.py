"""
runoff.triangle tests.
"""
import unittest
from decimal import Decimal
import pandas as pd
import numpy as np
import runoff
from runoff.errors import (
    DimensionMismatchError, NegativePeriodError, ObservationPeriodExceededError,
    )
from runoff.triangle import CumTriangle, IncrTriangle, convert, totri


SAMPLE_DIAGONALS = [
    [1001],
    [1113, 854],
    [1265, 990, 568],
    [1490, 1168, 671, 565],
    [1725, 1383, 800, 648, 347],
    [1889, 1536, 1007, 744, 422, 148],
    ]



# IncrTriangle unit tests -----------------------------------------------------

class IncrTriangleTestCase(unittest.TestCase):
    def setUp(self):
        self.tri = totri(SAMPLE_DIAGONALS, tri_type="incr")


    def test_periods(self):
        self.assertEqual(self.tri.periods, 6)

    def test_nbr_cells(self):
        self.assertEqual(self.tri.nbr_cells, 21)

    def test_getitem(self):
        self.assertEqual(self.tri[0, 5], Decimal(148))
        self.assertEqual(self.tri[5, 0], Decimal(1889))
        self.assertEqual(self.tri[2, 2], Decimal(800))
        self.assertEqual(self.tri[3, 2], Decimal(1007))

    def test_row(self):
        self.assertTrue(
            np.all(self.tri.row(1) == [Decimal(ii) for ii in (1113, 990, 671, 648, 422)]),
            "Row mismatch."
            )

    def test_column(self):
        self.assertTrue(
            np.all(self.tri.column(4) == [Decimal(347), Decimal(422)]),
            "Column mismatch."
            )

    def test_diagonal(self):
        self.assertTrue(
            np.all(self.tri.diagonal(3) == [Decimal(ii) for ii in (1490, 1168, 671, 565)]),
            "Diagonal mismatch."
            )

    def test_latest(self):
        self.assertTrue(
            np.all(self.tri.latest == [Decimal(ii) for ii in SAMPLE_DIAGONALS[-1]]),
            "Latest diagonal mismatch."
            )

    def test_slice_lengths(self):
        for ii in range(self.tri.periods):
            self.assertEqual(self.tri.row(ii).size, self.tri.periods - ii)
            self.assertEqual(self.tri.column(ii).size, self.tri.periods - ii)
            self.assertEqual(self.tri.diagonal(ii).size, ii + 1)

    def test_returned_slices_are_copies(self):
        row = self.tri.row(0)
        row[0] = Decimal(0)
        self.assertEqual(self.tri[0, 0], Decimal(1001))

    def test_setitem(self):
        self.tri[1, 1] = 0.1
        self.assertEqual(self.tri[1, 1], Decimal("0.1"))

    def test_set_row(self):
        self.tri.set_row([1, 2, 3], 3)
        self.assertTrue(np.all(self.tri.row(3) == [Decimal(1), Decimal(2), Decimal(3)]))
        self.assertEqual(self.tri[3, 2], Decimal(3))

    def test_set_column(self):
        self.tri.set_column(["7", "8"], 4)
        self.assertEqual(self.tri[0, 4], Decimal(7))
        self.assertEqual(self.tri[1, 4], Decimal(8))

    def test_set_diagonal(self):
        self.tri.set_diagonal([1, 2, 3, 4, 5, 6])
        self.assertEqual(self.tri[5, 0], Decimal(1))
        self.assertEqual(self.tri[0, 5], Decimal(6))

    def test_negative_index(self):
        with self.assertRaises(NegativePeriodError):
            self.tri[-1, 0]
        with self.assertRaises(NegativePeriodError):
            self.tri.column(-2)
        with self.assertRaises(NegativePeriodError):
            self.tri.set_row([1], -1)

    def test_index_exceeds_observation_period(self):
        with self.assertRaises(ObservationPeriodExceededError):
            self.tri[3, 3]
        with self.assertRaises(ObservationPeriodExceededError):
            self.tri.row(6)
        with self.assertRaises(ObservationPeriodExceededError):
            self.tri.diagonal(6)

    def test_period_errors_are_index_errors(self):
        with self.assertRaises(IndexError):
            self.tri.row(10)

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError) as ctx:
            self.tri.set_row([1, 2], 0)
        self.assertEqual(ctx.exception.expected, 6)
        self.assertEqual(ctx.exception.given, 2)
        self.assertIn("Expected: 6, given: 2", str(ctx.exception))

    def test_add_claims_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError):
            self.tri.add_claims([1, 2, 3])
        self.assertEqual(self.tri.periods, 6)

    def test_add_claims_growth(self):
        tri = IncrTriangle()
        for ii in range(20):
            tri.add_claims([1] * (ii + 1))
        self.assertEqual(tri.periods, 20)
        self.assertEqual(tri.nbr_cells, 210)
        self.assertEqual(tri[19, 0], Decimal(1))
        self.assertEqual(tri[0, 19], Decimal(1))
        self.assertEqual(sum(tri.row(0), Decimal(0)), Decimal(20))

    def test_initial_periods(self):
        tri = IncrTriangle(12)
        self.assertEqual(tri.periods, 12)
        self.assertEqual(tri[11, 0], Decimal(0))
        with self.assertRaises(NegativePeriodError):
            IncrTriangle(-1)

    def test_readonly(self):
        tri = self.tri.as_readonly()
        self.assertTrue(tri.readonly)
        with self.assertRaises(TypeError):
            tri[0, 0] = 1
        with self.assertRaises(TypeError):
            tri.set_column([1], 5)
        with self.assertRaises(TypeError):
            tri.add_claims([1] * 7)
        self.assertEqual(tri, self.tri)

    def test_copy(self):
        tri = self.tri.copy()
        self.assertEqual(tri, self.tri)
        tri[0, 0] = 0
        self.assertNotEqual(tri, self.tri)

    def test_shift(self):
        tri = totri([[100], [110, 50], [120, 55, 20]], tri_type="incr")
        shifted = tri.shift(Decimal("0.5"))
        self.assertIsInstance(shifted, IncrTriangle)
        self.assertEqual(shifted.periods, 2)
        self.assertEqual(shifted[0, 0], Decimal(105))
        self.assertEqual(shifted[0, 1], Decimal("52.5"))
        self.assertEqual(shifted[1, 0], Decimal(115))

    def test_shift_bounds(self):
        with self.assertRaises(ValueError):
            self.tri.shift(Decimal("1.5"))
        with self.assertRaises(ValueError):
            self.tri.shift(-1)
        with self.assertRaises(ValueError):
            IncrTriangle().shift(0)

    def test_to_tbl(self):
        dftbl = self.tri.to_tbl()
        self.assertEqual(dftbl.shape[0], self.tri.nbr_cells)
        self.assertEqual(list(dftbl.columns), ["origin", "dev", "value"])
        self.assertEqual(sum(dftbl["value"], Decimal(0)), Decimal(20334))

    def test_to_frame(self):
        df = self.tri.to_frame()
        self.assertEqual(df.shape, (6, 6))
        self.assertEqual(df.iloc[1, 4], Decimal(422))
        self.assertTrue(pd.isna(df.iloc[1, 5]))

    def test_str(self):
        tri = totri([[100], [110, 50]], tri_type="incr")
        self.assertEqual(str(tri), "100.00\t50.00\n110.00")



# CumTriangle unit tests ------------------------------------------------------

class CumTriangleTestCase(unittest.TestCase):
    def setUp(self):
        self.tri = totri(SAMPLE_DIAGONALS, tri_type="cum")
        self.rows = [
            [1001, 1855, 2423, 2988, 3335, 3483],
            [1113, 2103, 2774, 3422, 3844],
            [1265, 2433, 3233, 3977],
            [1490, 2873, 3880],
            [1725, 3261],
            [1889],
            ]


    def test_rows(self):
        for ii, row in enumerate(self.rows):
            self.assertTrue(
                np.all(self.tri.row(ii) == [Decimal(jj) for jj in row]),
                "Cumulative row {} mismatch.".format(ii)
                )

    def test_latest(self):
        self.assertTrue(
            np.all(self.tri.latest == [Decimal(ii) for ii in (1889, 3261, 3880, 3977, 3844, 3483)])
            )

    def test_add_claims_accumulates(self):
        tri = CumTriangle()
        tri.add_claims([1])
        tri.add_claims([2, 3])
        tri.add_claims([4, 5, 6])
        self.assertEqual(tri[0, 1], Decimal(4))
        self.assertEqual(tri[0, 2], Decimal(10))
        self.assertEqual(tri[1, 1], Decimal(7))

    def test_add_claims_matches_totri(self):
        tri = CumTriangle()
        for diagonal in SAMPLE_DIAGONALS:
            tri.add_claims(diagonal)
        self.assertEqual(tri, self.tri)

    def test_shift_keeps_type(self):
        self.assertIsInstance(self.tri.shift(0), CumTriangle)
        self.assertEqual(self.tri.shift(0).periods, 5)



# Conversion unit tests -------------------------------------------------------

class ConversionTestCase(unittest.TestCase):
    def setUp(self):
        self.incrtri = totri(SAMPLE_DIAGONALS, tri_type="incr")
        self.cumtri = totri(SAMPLE_DIAGONALS, tri_type="cum")


    def test_incr_to_cum(self):
        self.assertEqual(self.incrtri.to_cum(), self.cumtri)

    def test_cum_to_incr(self):
        self.assertEqual(self.cumtri.to_incr(), self.incrtri)

    def test_round_trip(self):
        tri = self.incrtri.copy()
        tri[2, 1] = Decimal("0.1")
        self.assertEqual(tri.to_cum().to_incr(), tri)

    def test_conversion_returns_new_object(self):
        self.assertIsNot(self.incrtri.to_incr(), self.incrtri)
        self.assertIsNot(self.cumtri.to_cum(), self.cumtri)

    def test_convert(self):
        self.assertIsInstance(convert(self.incrtri, "cumulative"), CumTriangle)
        self.assertIsInstance(convert(self.cumtri, "incremental"), IncrTriangle)
        with self.assertRaises(ValueError):
            convert(self.cumtri, "paid")

    def test_types_not_equal(self):
        self.assertNotEqual(self.incrtri, self.incrtri.to_cum())

    def test_empty(self):
        self.assertEqual(IncrTriangle().to_cum().periods, 0)
        self.assertEqual(CumTriangle().to_incr().periods, 0)



# totri unit tests ------------------------------------------------------------

class ToTriTestCase(unittest.TestCase):
    def setUp(self):
        self.cumtri = totri(SAMPLE_DIAGONALS, tri_type="cum", data_shape="diagonals")


    def test_tabular(self):
        data = runoff.load("sample")
        self.assertEqual(totri(data, tri_type="cum"), self.cumtri)

    def test_tabular_custom_fields(self):
        data = runoff.load("sample").rename(
            {"origin":"ay", "dev":"lag", "value":"paid"}, axis=1
            )
        tri = totri(data, tri_type="cum", origin="ay", dev="lag", value="paid")
        self.assertEqual(tri, self.cumtri)

    def test_tabular_duplicates_summed(self):
        data = pd.DataFrame({
            "origin":[2000, 2000, 2000, 2001], "dev":[1, 1, 2, 1],
            "value":[10, 5, 3, 7],
            })
        tri = totri(data, tri_type="incr")
        self.assertEqual(tri[0, 0], Decimal(15))
        self.assertEqual(tri[0, 1], Decimal(3))
        self.assertEqual(tri[1, 0], Decimal(7))

    def test_tabular_cumulative_input(self):
        data = self.cumtri.to_tbl()
        tri = totri(data, tri_type="incr", data_format="cum")
        self.assertEqual(tri, self.cumtri.to_incr())

    def test_triangle_shape(self):
        data = self.cumtri.to_frame()
        tri = totri(data, tri_type="cum", data_format="cum", data_shape="triangle")
        self.assertEqual(tri, self.cumtri)

    def test_invalid_arguments(self):
        data = runoff.load("sample")
        with self.assertRaises(ValueError):
            totri(data, tri_type="paid")
        with self.assertRaises(ValueError):
            totri(data, data_format="paid")
        with self.assertRaises(ValueError):
            totri(data, data_shape="square")
        with self.assertRaises(KeyError):
            totri(data.drop("dev", axis=1))
        with self.assertRaises(TypeError):
            totri(SAMPLE_DIAGONALS, data_shape="tabular")

    def test_diagonals_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError):
            totri([[1], [2, 3, 4]])



if __name__ == "__main__":

    unittest.main()
