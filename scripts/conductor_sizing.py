#!/usr/bin/env python3
"""
Conductor Sizing Module
Motor branch circuit conductor selection per NEC 430.22 and NEC 310.16.

Implements conductor sizing for a single motor including:
- Minimum ampacity (125% × table FLC)
- Ambient temperature correction
- Size selection from the 75°C copper ampacity table
- Voltage drop estimate for the run

Author: Motor Starting Skill
Standards: NEC 2023 Articles 310 and 430, NEC 210.19 Informational Note
"""

import logging
import math

from motor_currents import get_full_load_current
from motor_models import CalculationError, coerce_motor
from reference_tables import get_ampacity_table, get_cable_constants

logger = logging.getLogger(__name__)

# NEC 430.22(A): conductor ampacity ≥ 125% × motor FLC
BRANCH_CONDUCTOR_MULTIPLIER = 1.25


def calc_branch_conductor_ampacity(motor_flc: float) -> float:
    """Minimum branch circuit conductor ampacity per NEC 430.22(A)."""
    return BRANCH_CONDUCTOR_MULTIPLIER * motor_flc


def get_ambient_correction(ambient_temp_c: float) -> float:
    """Temperature correction for 75°C conductors (0.88 above 30°C)."""
    constants = get_cable_constants()
    if ambient_temp_c > constants["base_ambient_c"]:
        return constants["factor_above_base"]
    return 1.0


def select_conductor_for_ampacity(
    required_ampacity: float,
    ambient_temp_c: float = 30
) -> dict:
    """
    Select the smallest 75°C copper conductor for a required ampacity.

    A size qualifies when table ampacity × temperature correction ≥
    required ampacity. When no size qualifies the largest (500 kcmil) is
    returned with meets_requirement False.

    Args:
        required_ampacity: Required conductor ampacity (A)
        ambient_temp_c: Ambient temperature (°C)

    Returns:
        dict with selected size and ampacity
    """
    if not math.isfinite(required_ampacity):
        raise CalculationError(f"Required ampacity is not finite: {required_ampacity}")

    table = get_ampacity_table()
    correction = get_ambient_correction(ambient_temp_c)

    selected_size, selected_ampacity = table[-1]
    meets = False
    for size, ampacity in table:
        if ampacity * correction >= required_ampacity:
            selected_size, selected_ampacity = size, ampacity
            meets = True
            break

    if not meets:
        logger.debug(
            "Required ampacity %.1f A exceeds the 75°C copper table; using %s",
            required_ampacity, selected_size
        )

    return {
        "size": selected_size,
        "ampacity_a": selected_ampacity,
        "corrected_ampacity_a": selected_ampacity * correction,
        "required_ampacity_a": required_ampacity,
        "ambient_temp_c": ambient_temp_c,
        "temp_correction": correction,
        "meets_requirement": meets,
        "table_reference": "NEC 310.16, 75°C copper"
    }


def calc_voltage_drop_pct(
    current_a: float,
    length_ft: float,
    voltage: float,
    phases: int = 3,
    power_factor: float = 0.85
) -> float:
    """
    Voltage drop for a conductor run.

    z = √((R × pf)² + (X × sin φ)²), R and X per 1000 ft
    Vd% = k × I × z × L / (1000 × V) × 100, k = √3 (3-phase) or 2 (1-phase)

    Args:
        current_a: Load current (A)
        length_ft: One-way run length (ft)
        voltage: System voltage
        phases: 1 or 3
        power_factor: Load power factor

    Returns:
        Voltage drop in percent
    """
    constants = get_cable_constants()
    r = constants["resistance_ohm_per_kft"]
    x = constants["reactance_ohm_per_kft"]

    try:
        sin_phi = math.sin(math.acos(power_factor))
    except ValueError:
        raise CalculationError(f"Power factor outside [-1, 1]: {power_factor}") from None

    z = math.sqrt((r * power_factor) ** 2 + (x * sin_phi) ** 2)
    k = math.sqrt(3) if phases == 3 else 2

    return (k * current_a * z * length_ft) / (1000 * voltage) * 100


def select_conductor(
    motor,
    length_ft: float = 100,
    ambient_temp_c: float = 30,
    conduit_material: str = "steel",
    flc: float = None
) -> dict:
    """
    Size the branch circuit conductor for a motor.

    Args:
        motor: MotorSpecification or mapping
        length_ft: One-way run length (ft)
        ambient_temp_c: Ambient temperature (°C)
        conduit_material: steel, aluminum or pvc
        flc: Full load current (A); looked up from the motor when omitted

    Returns:
        dict with size, ampacity_a, voltage_drop_pct and sizing basis
    """
    motor = coerce_motor(motor)
    if not length_ft > 0:
        raise CalculationError(f"Run length must be positive, got {length_ft}")

    material = str(conduit_material).lower()
    if material not in get_cable_constants()["conduit_materials"]:
        raise CalculationError(f"Unknown conduit material: {conduit_material!r}")

    if flc is None:
        flc = get_full_load_current(motor.hp, motor.voltage, motor.phases)

    required = calc_branch_conductor_ampacity(flc)
    result = select_conductor_for_ampacity(required, ambient_temp_c)
    vd_pct = calc_voltage_drop_pct(flc, length_ft, motor.voltage, motor.phases, motor.power_factor)

    result.update({
        "flc_a": flc,
        "length_ft": length_ft,
        "conduit_material": material,
        "voltage_drop_pct": vd_pct,
        "compliant_branch": vd_pct <= 3.0,
        "code_reference": "NEC 430.22(A), NEC 310.16"
    })
    return result


if __name__ == "__main__":
    from motor_models import MotorSpecification

    print("Testing conductor_sizing module...")
    print("=" * 60)

    print("\n1. Conductor for 50 HP @ 460V")
    motor = MotorSpecification(hp=50, voltage=460)
    cond = select_conductor(motor, length_ft=250, ambient_temp_c=40)
    print(f"   Required: {cond['required_ampacity_a']:.1f}A")
    print(f"   Selected: {cond['size']} ({cond['ampacity_a']}A x {cond['temp_correction']})")
    print(f"   Voltage drop: {cond['voltage_drop_pct']:.2f}%")

    print("\n2. Ampacity sweep")
    for amps in [15, 60, 200, 500]:
        print(f"   {amps}A -> {select_conductor_for_ampacity(amps)['size']}")

    print("\n" + "=" * 60)
    print("All tests completed!")
