"""
Power Factor Correction Tests
=============================

Validates capacitor kVAR sizing and standard size selection.
"""

import math
import sys
from pathlib import Path
import unittest

# Add scripts to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from motor_models import CalculationError, MotorSpecification
from power_factor_correction import calc_power_factor_correction
from reference_tables import next_capacitor_size


class TestPowerFactorCorrection(unittest.TestCase):

    def test_fifty_hp(self):
        motor = MotorSpecification(hp=50, voltage=460, efficiency=0.93, power_factor=0.82)
        pfc = calc_power_factor_correction(motor)
        kw = 50 * 0.746 / 0.93
        kvar = kw * (math.tan(math.acos(0.82)) - math.tan(math.acos(0.95)))
        self.assertAlmostEqual(pfc["kvar"], kvar, places=9)
        self.assertEqual(pfc["capacitor_size_kvar"], 15)
        self.assertAlmostEqual(pfc["improvement_pct"], (0.95 - 0.82) / 0.82 * 100, places=9)
        self.assertGreater(pfc["corrected_power_factor"], 0.95)

    def test_no_op_when_target_equals_current(self):
        motor = MotorSpecification(hp=20, voltage=460, power_factor=0.88)
        pfc = calc_power_factor_correction(motor, target_pf=0.88)
        self.assertEqual(pfc["kvar"], 0)
        self.assertEqual(pfc["capacitor_size_kvar"], 0)
        self.assertEqual(pfc["improvement_pct"], 0)

    def test_target_below_current(self):
        motor = MotorSpecification(hp=20, voltage=460, power_factor=0.97)
        pfc = calc_power_factor_correction(motor, target_pf=0.95)
        self.assertEqual(pfc["kvar"], 0)
        self.assertEqual(pfc["capacitor_size_kvar"], 0)

    def test_above_standard_sizes(self):
        motor = MotorSpecification(hp=500, voltage=4160, efficiency=0.95, power_factor=0.80)
        pfc = calc_power_factor_correction(motor)
        self.assertGreater(pfc["kvar"], 50)
        self.assertEqual(pfc["capacitor_size_kvar"], 170)

    def test_invalid_target(self):
        motor = MotorSpecification(hp=20, voltage=460)
        for target in [0, 1.2, -0.5]:
            with self.subTest(target=target):
                with self.assertRaises(CalculationError):
                    calc_power_factor_correction(motor, target_pf=target)

    def test_capacitor_ladder(self):
        self.assertEqual(next_capacitor_size(0), 0)
        self.assertEqual(next_capacitor_size(0.1), 2.5)
        self.assertEqual(next_capacitor_size(7.5), 7.5)
        self.assertEqual(next_capacitor_size(7.6), 10)
        self.assertEqual(next_capacitor_size(50), 50)
        self.assertEqual(next_capacitor_size(51), 55)


if __name__ == "__main__":
    unittest.main()
