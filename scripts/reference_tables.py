#!/usr/bin/env python3
"""
Reference Data Tables
Read-only lookup tables for motor starting and protection studies.

Tables are loaded from the YAML catalogs on first use and cached for the
life of the process as read-only mappings and tuples:
- NEC 430.250 full-load current (voltage -> hp -> A)
- NEMA code letter locked-rotor kVA/hp
- Load inertia constants and load torque curve factors
- Standard OCPD ladder (NEC 240.6) and capacitor ratings
- NEC 310.16 75°C copper ampacities

Author: Motor Starting Skill
"""

import math
from pathlib import Path
from types import MappingProxyType
from typing import Optional

import yaml

from motor_models import CalculationError, LoadType, normalize_load_type


CATALOGS_DIR = Path(__file__).parent.parent / "catalogs"


def _load_catalog(name: str) -> dict:
    """Load a YAML catalog file."""
    path = CATALOGS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f)


# Lazy-loaded tables
_FLC_TABLE: Optional[MappingProxyType] = None
_ESTIMATE_DEFAULTS: Optional[MappingProxyType] = None
_CODE_LETTERS: Optional[MappingProxyType] = None
_DEFAULT_CODE_LETTER: Optional[str] = None
_LOAD_INERTIA: Optional[MappingProxyType] = None
_LOAD_CURVES: Optional[MappingProxyType] = None
_OCPD_SIZES: Optional[tuple] = None
_OCPD_OVERFLOW_STEP: Optional[float] = None
_CAPACITOR_SIZES: Optional[tuple] = None
_CAPACITOR_OVERFLOW_STEP: Optional[float] = None
_AMPACITY_TABLE: Optional[tuple] = None
_CABLE_CONSTANTS: Optional[MappingProxyType] = None


# ============================================================================
# Motor tables
# ============================================================================

def get_flc_table() -> MappingProxyType:
    """NEC Table 430.250 as {voltage: {hp: amperes}} with float keys."""
    global _FLC_TABLE, _ESTIMATE_DEFAULTS
    if _FLC_TABLE is None:
        catalog = _load_catalog("motor_fla_tables")
        table = catalog["nec_430_250"]["three_phase"]
        flc_table = MappingProxyType({
            float(voltage): MappingProxyType({float(hp): float(amps) for hp, amps in by_hp.items()})
            for voltage, by_hp in table.items()
        })
        # Companions first; _FLC_TABLE marks the whole catalog as loaded
        _ESTIMATE_DEFAULTS = MappingProxyType({
            k: float(v) for k, v in catalog["estimate_defaults"].items()
        })
        _FLC_TABLE = flc_table
    return _FLC_TABLE


def get_estimate_defaults() -> MappingProxyType:
    """Efficiency and power factor assumed for untabulated ratings."""
    get_flc_table()
    return _ESTIMATE_DEFAULTS


def get_code_letter_table() -> MappingProxyType:
    """NEMA code letter -> locked-rotor kVA per hp."""
    global _CODE_LETTERS, _DEFAULT_CODE_LETTER
    if _CODE_LETTERS is None:
        letters = _load_catalog("motor_standards")["nema_code_letters"]
        code_letters = MappingProxyType({
            str(letter).upper(): float(kva) for letter, kva in letters["kva_per_hp"].items()
        })
        _DEFAULT_CODE_LETTER = str(letters["default_letter"]).upper()
        _CODE_LETTERS = code_letters
    return _CODE_LETTERS


def get_code_letter_multiplier(code: Optional[str]) -> float:
    """
    Locked-rotor kVA/hp for a NEMA code letter.

    Missing or unrecognized letters fall back to the default letter (G).
    """
    table = get_code_letter_table()
    letter = str(code).strip().upper() if code else ""
    return table.get(letter, table[_DEFAULT_CODE_LETTER])


def _get_load_standards() -> None:
    global _LOAD_INERTIA, _LOAD_CURVES
    if _LOAD_INERTIA is None:
        standards = _load_catalog("motor_standards")
        inertia = standards["load_inertia"]
        load_inertia = MappingProxyType({
            basis: MappingProxyType({str(k): float(v) for k, v in inertia[basis].items()})
            for basis in ("acceleration", "load_profile")
        })
        _LOAD_CURVES = MappingProxyType({
            str(load): MappingProxyType({"curve": data["curve"], "factor": float(data["factor"])})
            for load, data in standards["load_torque_curves"].items()
            if isinstance(data, dict)
        })
        _LOAD_INERTIA = load_inertia


def get_inertia_constant(load_type, basis: str = "acceleration") -> float:
    """
    Load WK² per hp (lb·ft²/hp).

    Args:
        load_type: LoadType or name
        basis: "acceleration" (pump = 30) or "load_profile" (pump = 20)
    """
    _get_load_standards()
    load = normalize_load_type(load_type)
    if basis not in _LOAD_INERTIA:
        raise CalculationError(f"Unknown inertia basis: {basis!r}")
    return _LOAD_INERTIA[basis][load.value]


def get_load_curve(load_type) -> MappingProxyType:
    """Load torque curve shape and average accelerating torque factor."""
    _get_load_standards()
    load: LoadType = normalize_load_type(load_type)
    return _LOAD_CURVES[load.value]


# ============================================================================
# Standard device sizes
# ============================================================================

def _get_device_tables() -> None:
    global _OCPD_SIZES, _OCPD_OVERFLOW_STEP, _CAPACITOR_SIZES, _CAPACITOR_OVERFLOW_STEP
    if _OCPD_SIZES is None:
        devices = _load_catalog("protection_devices")
        ocpd = devices["standard_ocpd_sizes"]
        caps = devices["standard_capacitor_sizes"]
        _OCPD_OVERFLOW_STEP = float(ocpd["overflow_step"])
        _CAPACITOR_SIZES = tuple(sorted(float(s) for s in caps["sizes"]))
        _CAPACITOR_OVERFLOW_STEP = float(caps["overflow_step"])
        _OCPD_SIZES = tuple(sorted(float(s) for s in ocpd["sizes"]))


def get_standard_ocpd_sizes() -> tuple:
    _get_device_tables()
    return _OCPD_SIZES


def get_standard_capacitor_sizes() -> tuple:
    _get_device_tables()
    return _CAPACITOR_SIZES


def _round_up_to_ladder(value: float, ladder: tuple, step: float) -> float:
    if not math.isfinite(value):
        raise CalculationError(f"Cannot select a standard size for {value}")
    for size in ladder:
        if size >= value:
            return size
    return math.ceil(value / step) * step


def next_standard_size(amps: float) -> float:
    """
    Smallest standard OCPD rating ≥ amps (NEC 240.6(A)).

    Above 2500 A the rating rounds up to the next multiple of 100 A.

    Example:
        >>> next_standard_size(100), next_standard_size(101)
        (100.0, 110.0)
    """
    _get_device_tables()
    return _round_up_to_ladder(amps, _OCPD_SIZES, _OCPD_OVERFLOW_STEP)


def next_capacitor_size(kvar: float) -> float:
    """
    Smallest standard capacitor rating ≥ kvar.

    Above 50 kVAR the rating rounds up to the next multiple of 5 kVAR.
    Zero (or negative) compensation needs no capacitor and returns 0.
    """
    _get_device_tables()
    if kvar <= 0:
        return 0.0
    return _round_up_to_ladder(kvar, _CAPACITOR_SIZES, _CAPACITOR_OVERFLOW_STEP)


# ============================================================================
# Conductor tables
# ============================================================================

def _get_cable_tables() -> None:
    global _AMPACITY_TABLE, _CABLE_CONSTANTS
    if _AMPACITY_TABLE is None:
        nec = _load_catalog("cable_ampacity")["nec_310"]
        # YAML mappings keep file order, smallest size first
        ampacities = nec["table_310_16_75c_copper"]["ampacities"]
        ampacity_table = tuple((str(size), float(amps)) for size, amps in ampacities.items())

        correction = nec["ambient_correction"]
        drop = nec["voltage_drop"]
        _CABLE_CONSTANTS = MappingProxyType({
            "base_ambient_c": float(correction["base_ambient_c"]),
            "factor_above_base": float(correction["factor_above_base"]),
            "resistance_ohm_per_kft": float(drop["resistance_ohm_per_kft"]),
            "reactance_ohm_per_kft": float(drop["reactance_ohm_per_kft"]),
            "conduit_materials": tuple(str(m).lower() for m in nec["conduit_materials"]),
        })
        _AMPACITY_TABLE = ampacity_table


def get_ampacity_table() -> tuple:
    """NEC 310.16 75°C copper as ((size, amperes), ...), smallest first."""
    _get_cable_tables()
    return _AMPACITY_TABLE


def get_cable_constants() -> MappingProxyType:
    """Ambient correction and voltage drop constants for conductor sizing."""
    _get_cable_tables()
    return _CABLE_CONSTANTS


if __name__ == "__main__":
    print("Testing reference_tables module...")
    print("=" * 60)

    print("\n1. NEC 430.250 lookup")
    print(f"   460V, 10 HP: {get_flc_table()[460.0][10.0]}A")

    print("\n2. Code letters")
    for letter in ["A", "G", "V", "Z"]:
        print(f"   {letter}: {get_code_letter_multiplier(letter)} kVA/hp")

    print("\n3. Standard sizes")
    for amps in [14, 100, 101, 2600]:
        print(f"   {amps}A -> {next_standard_size(amps)}A")

    print("\n" + "=" * 60)
    print("All tests completed!")
