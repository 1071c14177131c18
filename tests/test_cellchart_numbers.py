from __future__ import annotations

import math
import unittest

from cellchart.numbers import round_half_away, round_to_non_zero_places, split_by_ratio


class RoundToNonZeroPlacesTests(unittest.TestCase):
    def test_rounds_up_after_skipping_zero_places(self) -> None:
        cases = [
            (0.00012345, 2, 0.00013, 3),
            (0.00012345, 3, 0.000124, 3),
            (-1.234567, 2, -1.23, 0),
            (1.234567, 2, 1.24, 0),
            (1099.0000234567, 3, 1099.0000235, 4),
            (-1099.0000234567, 3, -1099.0000234, 4),
            (0.12345, -2, 0.13, 0),
            (-0.00012345, 10, -0.00012345, 3),
        ]
        for value, places, want, want_zeros in cases:
            with self.subTest(value=value, places=places):
                got, zeros = round_to_non_zero_places(value, places)
                self.assertAlmostEqual(got, want, places=12)
                self.assertEqual(zeros, want_zeros)

    def test_zero_places_keeps_value(self) -> None:
        self.assertEqual(round_to_non_zero_places(1.1, 0), (1.1, 0))

    def test_whole_and_zero_values_are_unchanged(self) -> None:
        self.assertEqual(round_to_non_zero_places(0.0, 2), (0.0, 0))
        self.assertEqual(round_to_non_zero_places(42.0, 2), (42.0, 0))
        self.assertEqual(round_to_non_zero_places(-7.0, 3), (-7.0, 0))

    def test_non_finite_values_pass_through(self) -> None:
        got, zeros = round_to_non_zero_places(math.nan, 2)
        self.assertTrue(math.isnan(got))
        self.assertEqual(zeros, 0)
        self.assertEqual(round_to_non_zero_places(math.inf, 2), (math.inf, 0))


class RoundHalfAwayTests(unittest.TestCase):
    def test_halves_round_away_from_zero(self) -> None:
        self.assertEqual(round_half_away(0.5), 1.0)
        self.assertEqual(round_half_away(-0.5), -1.0)
        self.assertEqual(round_half_away(2.5), 3.0)
        self.assertEqual(round_half_away(-2.5), -3.0)
        self.assertEqual(round_half_away(1.49), 1.0)
        self.assertEqual(round_half_away(-1.49), -1.0)
        self.assertEqual(round_half_away(2.0), 2.0)

    def test_nan_passes_through(self) -> None:
        self.assertTrue(math.isnan(round_half_away(math.nan)))


class SplitByRatioTests(unittest.TestCase):
    def test_splits_proportionally(self) -> None:
        self.assertEqual(split_by_ratio(15, (1, 2)), (5, 10))
        self.assertEqual(split_by_ratio(19, (78, 121)), (7, 12))
        self.assertEqual(split_by_ratio(2, (2, 2)), (1, 1))

    def test_zero_anywhere_yields_zero(self) -> None:
        self.assertEqual(split_by_ratio(0, (1, 2)), (0, 0))
        self.assertEqual(split_by_ratio(10, (0, 2)), (0, 0))
        self.assertEqual(split_by_ratio(10, (2, 0)), (0, 0))


if __name__ == "__main__":
    unittest.main()
