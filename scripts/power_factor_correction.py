#!/usr/bin/env python3
"""
Power Factor Correction Module
Capacitor sizing for individual motor power factor correction.

kVAR = kW × (tan(acos(pf_current)) − tan(acos(pf_target)))

Author: Motor Starting Skill
Standards: IEEE 141 (Red Book) Chapter 8
"""

import math

from motor_models import CalculationError, coerce_motor
from reference_tables import next_capacitor_size

DEFAULT_TARGET_PF = 0.95

# kW per horsepower
KW_PER_HP = 0.746


def _tan_phi(power_factor: float) -> float:
    if not 0 < power_factor <= 1:
        raise CalculationError(f"Power factor must be in (0, 1], got {power_factor}")
    return math.tan(math.acos(power_factor))


def calc_power_factor_correction(motor, target_pf: float = DEFAULT_TARGET_PF) -> dict:
    """
    Size a correction capacitor to raise the motor power factor.

    The capacitor is the smallest standard rating ≥ the required kVAR
    (next multiple of 5 kVAR above 50). No correction is sized when the
    target is at or below the nameplate power factor.

    Args:
        motor: MotorSpecification or mapping (uses hp, efficiency, power_factor)
        target_pf: Target power factor

    Returns:
        dict with kvar, capacitor_size_kvar and improvement_pct
    """
    motor = coerce_motor(motor)
    current_pf = motor.power_factor

    kw = motor.hp * KW_PER_HP / motor.efficiency
    kvar = kw * (_tan_phi(current_pf) - _tan_phi(target_pf))
    if kvar <= 0:
        kvar = 0.0

    capacitor = next_capacitor_size(kvar)

    # Power factor reached with the standard capacitor installed
    residual_kvar = kw * _tan_phi(current_pf) - capacitor
    corrected_pf = kw / math.hypot(kw, residual_kvar)

    improvement = (target_pf - current_pf) / current_pf * 100 if kvar > 0 else 0.0

    return {
        "kw": kw,
        "current_power_factor": current_pf,
        "target_power_factor": target_pf,
        "kvar": kvar,
        "capacitor_size_kvar": capacitor,
        "corrected_power_factor": corrected_pf,
        "improvement_pct": improvement,
        "notes": (
            f"{capacitor:g} kVAR capacitor raises pf from {current_pf:.2f} to {corrected_pf:.3f}"
            if capacitor else "No correction required"
        )
    }


if __name__ == "__main__":
    from motor_models import MotorSpecification

    print("Testing power_factor_correction module...")
    print("=" * 60)

    motor = MotorSpecification(hp=50, voltage=460, efficiency=0.93, power_factor=0.82)
    pfc = calc_power_factor_correction(motor)
    print(f"\n   50 HP, pf 0.82 -> 0.95")
    print(f"   Required: {pfc['kvar']:.1f} kVAR")
    print(f"   Capacitor: {pfc['capacitor_size_kvar']} kVAR")
    print(f"   Notes: {pfc['notes']}")

    print("\n" + "=" * 60)
    print("All tests completed!")
