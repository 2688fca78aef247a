"""
Reference Table Tests
=====================

Verifies catalog contents and that loaded tables are read-only.
"""

import copy
import sys
from pathlib import Path
import unittest
from unittest import mock

# Add scripts to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import reference_tables
from motor_models import CalculationError
from reference_tables import (
    get_code_letter_table,
    get_flc_table,
    get_inertia_constant,
    get_load_curve,
    get_standard_capacitor_sizes,
    get_standard_ocpd_sizes,
)


class TestCatalogContents(unittest.TestCase):

    def test_code_letters(self):
        letters = get_code_letter_table()
        self.assertEqual(len(letters), 19)
        self.assertNotIn("I", letters)
        self.assertNotIn("O", letters)
        self.assertNotIn("Q", letters)
        values = list(letters.values())
        self.assertEqual(values, sorted(values))

    def test_ladders_ascending(self):
        ocpd = get_standard_ocpd_sizes()
        self.assertEqual(ocpd[0], 15)
        self.assertEqual(ocpd[-1], 2500)
        self.assertEqual(list(ocpd), sorted(ocpd))
        caps = get_standard_capacitor_sizes()
        self.assertEqual((caps[0], caps[-1]), (2.5, 50))

    def test_inertia_bases(self):
        self.assertEqual(get_inertia_constant("pump"), 30)
        self.assertEqual(get_inertia_constant("pump", basis="load_profile"), 20)
        self.assertEqual(get_inertia_constant("crusher"), 200)
        with self.assertRaises(CalculationError):
            get_inertia_constant("pump", basis="nameplate")

    def test_load_curves(self):
        self.assertEqual(get_load_curve("fan")["curve"], "quadratic")
        self.assertEqual(get_load_curve("conveyor")["factor"], 0.5)
        self.assertEqual(get_load_curve("compressor")["curve"], "constant")


class TestReadOnly(unittest.TestCase):

    def test_flc_table_is_read_only(self):
        table = get_flc_table()
        with self.assertRaises(TypeError):
            table[480.0] = {}
        with self.assertRaises(TypeError):
            table[460.0][10.0] = 99

    def test_code_letters_read_only(self):
        with self.assertRaises(TypeError):
            get_code_letter_table()["G"] = 1.0

    def test_same_object_each_call(self):
        self.assertIs(get_flc_table(), get_flc_table())


class TestLazyLoading(unittest.TestCase):
    """A table is only marked loaded once its companion values are set."""

    GLOBALS = [
        "_FLC_TABLE", "_ESTIMATE_DEFAULTS", "_CODE_LETTERS", "_DEFAULT_CODE_LETTER",
        "_LOAD_INERTIA", "_LOAD_CURVES", "_AMPACITY_TABLE", "_CABLE_CONSTANTS",
    ]

    def setUp(self):
        self.saved = {name: getattr(reference_tables, name) for name in self.GLOBALS}
        for name in self.GLOBALS:
            setattr(reference_tables, name, None)

    def tearDown(self):
        for name, value in self.saved.items():
            setattr(reference_tables, name, value)

    def _load_without(self, catalog_name, *path):
        """Catalog loader that drops one nested key from one catalog."""
        real_load = reference_tables._load_catalog

        def load(name):
            data = copy.deepcopy(real_load(name))
            if name == catalog_name:
                parent = data
                for key in path[:-1]:
                    parent = parent[key]
                del parent[path[-1]]
            return data

        return mock.patch.object(reference_tables, "_load_catalog", side_effect=load)

    def test_estimate_defaults_set_with_flc_table(self):
        reference_tables.get_flc_table()
        self.assertIsNotNone(reference_tables._ESTIMATE_DEFAULTS)
        self.assertEqual(reference_tables.get_estimate_defaults()["efficiency"], 0.90)

    def test_flc_table_unset_when_defaults_fail(self):
        with self._load_without("motor_fla_tables", "estimate_defaults"):
            with self.assertRaises(KeyError):
                reference_tables.get_flc_table()
        self.assertIsNone(reference_tables._FLC_TABLE)

    def test_code_letters_unset_when_default_letter_fails(self):
        with self._load_without("motor_standards", "nema_code_letters", "default_letter"):
            with self.assertRaises(KeyError):
                reference_tables.get_code_letter_table()
        self.assertIsNone(reference_tables._CODE_LETTERS)

    def test_load_inertia_unset_when_curves_fail(self):
        with self._load_without("motor_standards", "load_torque_curves"):
            with self.assertRaises(KeyError):
                reference_tables.get_inertia_constant("pump")
        self.assertIsNone(reference_tables._LOAD_INERTIA)

    def test_ampacity_table_unset_when_constants_fail(self):
        with self._load_without("cable_ampacity", "nec_310", "voltage_drop"):
            with self.assertRaises(KeyError):
                reference_tables.get_ampacity_table()
        self.assertIsNone(reference_tables._AMPACITY_TABLE)

    def test_reload_after_failure(self):
        with self._load_without("cable_ampacity", "nec_310", "voltage_drop"):
            with self.assertRaises(KeyError):
                reference_tables.get_cable_constants()
        self.assertEqual(reference_tables.get_ampacity_table()[0], ("14", 20.0))
        self.assertIsNotNone(reference_tables.get_cable_constants())


if __name__ == "__main__":
    unittest.main()
