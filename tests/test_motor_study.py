"""
Motor Study Tests
=================

End-to-end study for a single motor.
"""

import json
import sys
from pathlib import Path
import unittest

# Add scripts to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from motor_models import InvalidMotorSpecification, InvalidStartingMethodSettings
from motor_study import run_motor_study


class TestRunMotorStudy(unittest.TestCase):

    def setUp(self):
        self.study = run_motor_study(
            {"hp": 50, "voltage": 460, "code": "G", "rpm": 1775},
            starting_method={"type": "autotransformer", "tap_setting": 80},
            source_impedance={"r": 0.01, "x": 0.03},
            load_type="pump",
            length_ft=250,
            ambient_temp_c=40,
        )

    def test_sections(self):
        self.assertEqual(
            set(self.study),
            {"analysis", "protection", "conductor", "power_factor_correction"}
        )

    def test_consistent_flc(self):
        flc = self.study["analysis"]["full_load_current_a"]
        self.assertEqual(flc, 65)
        self.assertEqual(self.study["protection"]["flc_a"], flc)
        self.assertEqual(self.study["conductor"]["flc_a"], flc)

    def test_autotransformer_values(self):
        analysis = self.study["analysis"]
        self.assertAlmostEqual(
            analysis["starting_current_a"], analysis["locked_rotor_current_a"] * 0.64, places=9
        )
        self.assertAlmostEqual(analysis["starting_torque_pct"], 96, places=9)

    def test_json_serializable(self):
        text = json.dumps(self.study)
        self.assertEqual(json.loads(text)["conductor"]["size"], "3")

    def test_application_reaches_analysis(self):
        # VFD on an infinite bus: 1.1 × |0.02 + j0.17| ≈ 18.8% dip
        lighting = run_motor_study(
            {"hp": 50, "voltage": 460}, starting_method="vfd", application="lighting"
        )
        general = run_motor_study({"hp": 50, "voltage": 460}, starting_method="vfd")
        self.assertAlmostEqual(lighting["analysis"]["voltage_dip_pct"], 18.83, places=1)
        self.assertEqual(lighting["analysis"]["voltage_dip_impact"], "EXCESSIVE")
        self.assertEqual(general["analysis"]["voltage_dip_impact"], "HIGH")
        self.assertFalse(general["analysis"]["voltage_dip_acceptable"])

    def test_invalid_inputs_propagate(self):
        with self.assertRaises(InvalidMotorSpecification):
            run_motor_study({"hp": 50, "voltage": 460, "phases": 2})
        with self.assertRaises(InvalidStartingMethodSettings):
            run_motor_study({"hp": 50, "voltage": 460}, {"type": "soft_starter", "initial_voltage": 0})


if __name__ == "__main__":
    unittest.main()
