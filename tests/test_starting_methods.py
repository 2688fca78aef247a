"""
Starting Method Tests
=====================

Verifies starting current and torque coefficients for every starting
method, including the square law for reduced-voltage starters.
"""

import sys
from pathlib import Path
import unittest

# Add scripts to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from motor_models import StartingMethod, StartingMethodType
from starting_methods import STARTING_METHOD_CALCULATORS, compute_starting_parameters


LRC = 395.4
FLC = 65.0


class TestStartingMethods(unittest.TestCase):

    def test_every_method_has_a_calculator(self):
        self.assertEqual(set(STARTING_METHOD_CALCULATORS), set(StartingMethodType))

    def test_across_the_line(self):
        self.assertEqual(compute_starting_parameters("across_the_line", LRC, FLC), (LRC, 150.0))

    def test_star_delta_exact(self):
        for lrc in [12.7, 395.4, 1234.5]:
            with self.subTest(lrc=lrc):
                current, torque = compute_starting_parameters({"type": "starDelta"}, lrc, FLC)
                self.assertEqual(current, lrc / 3)
                self.assertEqual(torque, 50)

    def test_autotransformer_default_tap(self):
        current, torque = compute_starting_parameters("autotransformer", LRC, FLC)
        self.assertAlmostEqual(current, LRC * 0.64, places=9)
        self.assertAlmostEqual(torque, 96, places=9)

    def test_autotransformer_square_law(self):
        for tap in [50, 65, 80, 100]:
            with self.subTest(tap=tap):
                method = StartingMethod(type="autotransformer", tap_setting=tap)
                current, torque = compute_starting_parameters(method, LRC, FLC)
                self.assertAlmostEqual(current, LRC * (tap / 100) ** 2, places=9)
                self.assertAlmostEqual(torque, 150 * (tap / 100) ** 2, places=9)

    def test_soft_starter(self):
        current, torque = compute_starting_parameters("soft_starter", LRC, FLC)
        self.assertAlmostEqual(current, LRC * 0.3, places=9)
        self.assertAlmostEqual(torque, 150 * 0.09, places=9)

        method = StartingMethod(type="soft_starter", initial_voltage=50, ramp_time=12)
        current, torque = compute_starting_parameters(method, LRC, FLC)
        self.assertAlmostEqual(current, LRC * 0.5, places=9)
        self.assertAlmostEqual(torque, 37.5, places=9)

    def test_vfd_uses_flc(self):
        current, torque = compute_starting_parameters("vfd", LRC, FLC)
        self.assertAlmostEqual(current, FLC * 1.1, places=9)
        self.assertEqual(torque, 150)

    def test_resistor_part_winding_reduced_voltage(self):
        cases = {
            "resistor": (0.65, 150 * 0.65),
            "part_winding": (0.65, 75.0),
            "reduced_voltage": (0.64, 96.0),
        }
        for name, (current_factor, expected_torque) in cases.items():
            with self.subTest(method=name):
                current, torque = compute_starting_parameters(name, LRC, FLC)
                self.assertAlmostEqual(current, LRC * current_factor, places=9)
                self.assertAlmostEqual(torque, expected_torque, places=9)

    def test_reduced_methods_never_exceed_across_the_line(self):
        for method_type in StartingMethodType:
            if method_type == StartingMethodType.VFD:
                continue
            with self.subTest(method=method_type.value):
                current, torque = compute_starting_parameters(method_type, LRC, FLC)
                self.assertLessEqual(current, LRC)
                self.assertLessEqual(torque, 150)
                self.assertGreater(current, 0)


if __name__ == "__main__":
    unittest.main()
