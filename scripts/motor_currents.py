#!/usr/bin/env python3
"""
Motor Current Calculations
Full-load current (FLC) lookup and locked-rotor current (LRC) derivation.

Key Distinction (NEC 430.6(A)(1)):
- TABLE FLC (NEC 430.250) is used for conductor and protection sizing
- Untabulated ratings fall back to a formula estimate; the result is
  tagged with its source so callers can tell the two apart

Author: Motor Starting Skill
Standards: NEC 2023 Article 430, NEMA MG-1 Table 10-2
"""

import logging
import math
from typing import NamedTuple, Optional

from motor_models import InvalidMotorSpecification, MotorSpecification, coerce_motor
from reference_tables import get_code_letter_multiplier, get_estimate_defaults, get_flc_table

logger = logging.getLogger(__name__)

# Watts per horsepower
WATTS_PER_HP = 746

TABULATED_SOURCE = "NEC-430.250"
ESTIMATED_SOURCE = "estimated"


def _check_rating(hp, voltage, phases) -> None:
    if not hp > 0:
        raise InvalidMotorSpecification(f"Horsepower must be positive, got {hp}")
    if not voltage > 0:
        raise InvalidMotorSpecification(f"Voltage must be positive, got {voltage}")
    if phases not in (1, 3):
        raise InvalidMotorSpecification(f"Phases must be 1 or 3, got {phases}")


class FullLoadCurrent(NamedTuple):
    """
    Full-load current with its provenance.

    source is "NEC-430.250" for a tabulated value, or "estimated" when the
    formula fallback was used with assumed_efficiency/assumed_power_factor.
    """
    value: float
    source: str
    assumed_efficiency: Optional[float] = None
    assumed_power_factor: Optional[float] = None

    @property
    def tabulated(self) -> bool:
        return self.source == TABULATED_SOURCE

    def to_dict(self) -> dict:
        return {
            "flc_a": self.value,
            "source": self.source,
            "assumed_efficiency": self.assumed_efficiency,
            "assumed_power_factor": self.assumed_power_factor,
        }


def estimate_full_load_current(
    hp: float,
    voltage: float,
    phases: int = 3,
    efficiency: float = 0.90,
    power_factor: float = 0.85
) -> float:
    """
    Formula FLC estimate.

    I = (hp × 746) / (√3 × V × η × pf)  for 3-phase
    I = (hp × 746) / (V × η × pf)       for 1-phase
    """
    _check_rating(hp, voltage, phases)
    if phases == 3:
        return (hp * WATTS_PER_HP) / (math.sqrt(3) * voltage * efficiency * power_factor)
    return (hp * WATTS_PER_HP) / (voltage * efficiency * power_factor)


def resolve_full_load_current(
    hp: float,
    voltage: float,
    phases: int = 3
) -> FullLoadCurrent:
    """
    Look up motor FLC from NEC Table 430.250.

    Only exact (voltage, hp) pairs are used; there is no interpolation and
    no rounding to the next hp. Single-phase requests and untabulated pairs
    use the formula estimate with the catalog's assumed efficiency (0.90)
    and power factor (0.85).

    Args:
        hp: Motor horsepower
        voltage: Motor voltage
        phases: 1 or 3

    Returns:
        FullLoadCurrent tagged with its source
    """
    _check_rating(hp, voltage, phases)

    if phases == 3:
        by_hp = get_flc_table().get(float(voltage))
        if by_hp is not None and float(hp) in by_hp:
            return FullLoadCurrent(by_hp[float(hp)], TABULATED_SOURCE)

    defaults = get_estimate_defaults()
    eff = defaults["efficiency"]
    pf = defaults["power_factor"]
    flc = estimate_full_load_current(hp, voltage, phases, eff, pf)

    logger.info(
        "FLC for %s hp, %s V, %s-phase not tabulated; estimated %.2f A "
        "(efficiency %.2f, pf %.2f)", hp, voltage, phases, flc, eff, pf
    )
    return FullLoadCurrent(flc, ESTIMATED_SOURCE, eff, pf)


def get_full_load_current(hp: float, voltage: float, phases: int = 3) -> float:
    """FLC in amperes (tabulated or estimated)."""
    return resolve_full_load_current(hp, voltage, phases).value


def calc_locked_rotor_kva(motor: MotorSpecification) -> float:
    """Locked-rotor kVA = hp × code letter kVA/hp."""
    motor = coerce_motor(motor)
    return motor.hp * get_code_letter_multiplier(motor.code)


def calc_locked_rotor_current(motor: MotorSpecification) -> float:
    """
    Calculate Locked Rotor Current from the NEMA code letter.

    I = (kVA × 1000) / (√3 × V)  for 3-phase
    I = (kVA × 1000) / V         for 1-phase

    A missing or unrecognized code letter is treated as letter G.

    Args:
        motor: MotorSpecification (uses hp, voltage, phases, code)

    Returns:
        Locked rotor current in amperes
    """
    motor = coerce_motor(motor)
    kva = calc_locked_rotor_kva(motor)

    if motor.phases == 3:
        lrc = (kva * 1000) / (math.sqrt(3) * motor.voltage)
    else:
        lrc = (kva * 1000) / motor.voltage

    logger.debug("LRC for %s hp code %s: %.1f kVA, %.2f A", motor.hp, motor.code, kva, lrc)
    return lrc


if __name__ == "__main__":
    print("Testing motor_currents module...")
    print("=" * 60)

    print("\n1. Tabulated FLC")
    flc = resolve_full_load_current(50, 460)
    print(f"   50 HP @ 460V: {flc.value}A ({flc.source})")

    print("\n2. Estimated FLC")
    flc = resolve_full_load_current(5, 120, phases=1)
    print(f"   5 HP @ 120V 1-phase: {flc.value:.1f}A ({flc.source})")

    print("\n3. Locked Rotor Current")
    motor = MotorSpecification(hp=50, voltage=460, code="G")
    print(f"   50 HP code G @ 460V: {calc_locked_rotor_current(motor):.1f}A")

    print("\n" + "=" * 60)
    print("All tests completed!")
