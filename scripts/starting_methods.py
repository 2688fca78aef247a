#!/usr/bin/env python3
"""
Starting Method Analysis
Starting current and starting torque for each motor starting method.

Each method has its own computation function with the signature
    (lrc, flc, method) -> (starting_current_a, starting_torque_pct)
registered in STARTING_METHOD_CALCULATORS. Reduced-voltage methods follow
the square law: current scales with the applied voltage fraction and
torque with its square.

Torque is expressed as % of full-load torque, with an across-the-line
locked-rotor torque of 150% (NEMA Design B).

Author: Motor Starting Skill
Standards: IEEE 3002.7, NEMA MG-1
"""

from types import MappingProxyType
from typing import Callable, Tuple

from motor_models import StartingMethod, StartingMethodType


# Across-the-line locked-rotor torque, % of full-load torque (Design B)
BASE_STARTING_TORQUE_PCT = 150.0

# Autotransformer tap and soft starter initial voltage defaults (%)
DEFAULT_TAP_SETTING_PCT = 80.0
DEFAULT_INITIAL_VOLTAGE_PCT = 30.0

# VFD current limit during acceleration, × FLC
VFD_CURRENT_LIMIT = 1.1

# Primary resistor starter: current and torque fraction of across-the-line
RESISTOR_CURRENT_FACTOR = 0.65

# Part winding: half the winding energized
PART_WINDING_CURRENT_FACTOR = 0.65
PART_WINDING_TORQUE_FACTOR = 0.5

# Reduced-voltage (reactor) starter at 80% voltage: 0.8² = 0.64
REDUCED_VOLTAGE_FACTOR = 0.64

StartingCalculator = Callable[[float, float, StartingMethod], Tuple[float, float]]


def _across_the_line(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    return lrc, BASE_STARTING_TORQUE_PCT


def _star_delta(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    # Winding voltage is 1/√3 of line: line current and torque both drop to 1/3
    return lrc / 3, BASE_STARTING_TORQUE_PCT / 3


def _autotransformer(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    # Line current is reduced by tap² (motor current × tap, reflected through the transformer)
    tap = (method.tap_setting if method.tap_setting is not None else DEFAULT_TAP_SETTING_PCT) / 100
    return lrc * tap ** 2, BASE_STARTING_TORQUE_PCT * tap ** 2


def _soft_starter(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    v0 = (method.initial_voltage if method.initial_voltage is not None
          else DEFAULT_INITIAL_VOLTAGE_PCT) / 100
    return lrc * v0, BASE_STARTING_TORQUE_PCT * v0 ** 2


def _vfd(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    # Full torque is available at low frequency within the drive current limit
    return flc * VFD_CURRENT_LIMIT, BASE_STARTING_TORQUE_PCT


def _resistor(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    return lrc * RESISTOR_CURRENT_FACTOR, BASE_STARTING_TORQUE_PCT * RESISTOR_CURRENT_FACTOR


def _part_winding(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    return lrc * PART_WINDING_CURRENT_FACTOR, BASE_STARTING_TORQUE_PCT * PART_WINDING_TORQUE_FACTOR


def _reduced_voltage(lrc: float, flc: float, method: StartingMethod) -> Tuple[float, float]:
    return lrc * REDUCED_VOLTAGE_FACTOR, BASE_STARTING_TORQUE_PCT * REDUCED_VOLTAGE_FACTOR


STARTING_METHOD_CALCULATORS = MappingProxyType({
    StartingMethodType.ACROSS_THE_LINE: _across_the_line,
    StartingMethodType.STAR_DELTA: _star_delta,
    StartingMethodType.AUTOTRANSFORMER: _autotransformer,
    StartingMethodType.SOFT_STARTER: _soft_starter,
    StartingMethodType.VFD: _vfd,
    StartingMethodType.RESISTOR: _resistor,
    StartingMethodType.PART_WINDING: _part_winding,
    StartingMethodType.REDUCED_VOLTAGE: _reduced_voltage,
})

METHOD_DESCRIPTIONS = MappingProxyType({
    StartingMethodType.ACROSS_THE_LINE: "Full voltage (across-the-line / DOL)",
    StartingMethodType.STAR_DELTA: "Star-delta (wye-delta) open transition",
    StartingMethodType.AUTOTRANSFORMER: "Autotransformer reduced voltage",
    StartingMethodType.SOFT_STARTER: "Solid-state soft starter",
    StartingMethodType.VFD: "Variable frequency drive",
    StartingMethodType.RESISTOR: "Primary resistor",
    StartingMethodType.PART_WINDING: "Part winding",
    StartingMethodType.REDUCED_VOLTAGE: "Reactor reduced voltage",
})


def compute_starting_parameters(
    method,
    lrc: float,
    flc: float
) -> Tuple[float, float]:
    """
    Starting current and torque for a starting method.

    Args:
        method: StartingMethod, method name, or settings mapping
        lrc: Locked rotor current (A)
        flc: Full load current (A)

    Returns:
        (starting_current_a, starting_torque_pct)
    """
    method = StartingMethod.from_value(method)
    calculator: StartingCalculator = STARTING_METHOD_CALCULATORS[method.type]
    return calculator(lrc, flc, method)


if __name__ == "__main__":
    print("Testing starting_methods module...")
    print("=" * 60)

    lrc, flc = 396.1, 65.0
    print(f"\nLRC = {lrc}A, FLC = {flc}A")
    for method_type in StartingMethodType:
        current, torque = compute_starting_parameters(method_type, lrc, flc)
        print(f"   {method_type.value:16s} {current:7.1f}A  {torque:6.1f}%")

    print("\n" + "=" * 60)
    print("All tests completed!")
