from __future__ import annotations

import unittest

import numpy as np

from pathviz.ticks import format_tick, format_ticks_for_axis, nice_number, ticks


class NiceNumberTests(unittest.TestCase):
    def test_span_mode_rounds_up_to_ladder(self) -> None:
        self.assertEqual(nice_number(1, round_result=False), 1.0)
        self.assertEqual(nice_number(2.5, round_result=False), 5.0)
        self.assertEqual(nice_number(7, round_result=False), 10.0)
        self.assertEqual(nice_number(230, round_result=False), 500.0)

    def test_step_mode_picks_nearest_ladder_value(self) -> None:
        self.assertEqual(nice_number(1.2, round_result=True), 1.0)
        self.assertEqual(nice_number(4, round_result=True), 5.0)
        self.assertEqual(nice_number(25, round_result=True), 20.0)
        self.assertEqual(nice_number(8, round_result=True), 10.0)

    def test_fractional_magnitudes(self) -> None:
        self.assertAlmostEqual(nice_number(0.034, round_result=True), 0.05, places=12)
        self.assertAlmostEqual(nice_number(0.0012, round_result=False), 0.002, places=12)


class TicksTests(unittest.TestCase):
    def test_zero_to_hundred(self) -> None:
        values = ticks(0, 100, 5)
        self.assertEqual(values.tolist(), [0.0, 20.0, 40.0, 60.0, 80.0, 100.0])

    def test_tight_mode_pins_endpoints(self) -> None:
        values = ticks(0, 100, 5, tight=True)
        self.assertEqual(values[0], 0.0)
        self.assertEqual(values[-1], 100.0)
        self.assertEqual(values.tolist(), [0.0, 20.0, 40.0, 60.0, 80.0, 100.0])

    def test_tight_mode_keeps_only_interior_ticks(self) -> None:
        values = ticks(3, 97, 5, tight=True)
        self.assertEqual(values.tolist(), [3.0, 20.0, 40.0, 60.0, 80.0, 97.0])

    def test_loose_mode_extends_to_step_boundaries(self) -> None:
        values = ticks(3, 97, 5)
        self.assertEqual(values.tolist(), [0.0, 20.0, 40.0, 60.0, 80.0, 100.0])

    def test_reversed_arguments_still_ascending(self) -> None:
        self.assertEqual(ticks(100, 0, 5).tolist(), ticks(0, 100, 5).tolist())

    def test_equal_endpoints_yield_single_tick(self) -> None:
        self.assertEqual(ticks(5, 5, 3).tolist(), [5.0])

    def test_negative_interval_has_positive_zero(self) -> None:
        values = ticks(-7, 13, 5)
        self.assertEqual(values.tolist(), [-10.0, -5.0, 0.0, 5.0, 10.0, 15.0])
        self.assertFalse(bool(np.signbit(values[2])))

    def test_values_are_rounded_to_suppress_float_noise(self) -> None:
        values = ticks(0, 1, 11)
        self.assertEqual(values[3], 0.3)
        self.assertEqual(values[-1], 1.0)
        self.assertEqual(values.size, 11)

    def test_steps_are_even(self) -> None:
        values = ticks(-0.37, 12.9, 7)
        diffs = np.diff(values)
        self.assertTrue(np.allclose(diffs, diffs[0]))
        self.assertLessEqual(values[0], -0.37)
        self.assertGreaterEqual(values[-1], 12.9)

    def test_count_below_two_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ticks(0, 10, 1)


class TickFormattingTests(unittest.TestCase):
    def test_tick_formatting_uses_consistent_decimals_from_step(self) -> None:
        labels = format_ticks_for_axis(np.asarray([1.5, 2.0, 2.5, 3.0], dtype=np.float64))
        self.assertEqual(labels, ["1.5", "2", "2.5", "3"])

    def test_tick_formatting_preserves_integer_trailing_zeros(self) -> None:
        labels = format_ticks_for_axis(np.asarray([20.0, 30.0, 40.0], dtype=np.float64))
        self.assertEqual(labels, ["20", "30", "40"])

    def test_tight_tick_labels(self) -> None:
        labels = format_ticks_for_axis(ticks(3, 97, 5, tight=True))
        self.assertEqual(labels, ["3", "20", "40", "60", "80", "97"])

    def test_tick_formatting_snaps_near_zero(self) -> None:
        labels = format_ticks_for_axis(np.asarray([-1.0, -4.4409e-16, 1.0], dtype=np.float64))
        self.assertEqual(labels[1], "0")

    def test_large_values_use_exponent_notation(self) -> None:
        self.assertEqual(format_tick(2.5e7, step=5e6), "2.5000e+07")

    def test_fine_steps_stay_in_fixed_point(self) -> None:
        labels = format_ticks_for_axis(np.asarray([1e-5, 2e-5, 3e-5], dtype=np.float64))
        self.assertEqual(labels, ["0.00001", "0.00002", "0.00003"])

    def test_tight_set_with_fine_gap(self) -> None:
        labels = format_ticks_for_axis(np.asarray([0.0, 0.0002, 0.0003], dtype=np.float64))
        self.assertEqual(labels, ["0", "0.0002", "0.0003"])

    def test_steps_beyond_label_precision_use_exponent_notation(self) -> None:
        labels = format_ticks_for_axis(np.asarray([0.0, 1e-15, 2e-15], dtype=np.float64))
        self.assertEqual(labels, ["0", "1.0000e-15", "2.0000e-15"])

    def test_single_value_without_step(self) -> None:
        self.assertEqual(format_tick(0.125), "0.125")
        self.assertEqual(format_tick(-0.0), "0")
        self.assertEqual(format_tick(float("nan")), "nan")


if __name__ == "__main__":
    unittest.main()
