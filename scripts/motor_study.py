#!/usr/bin/env python3
"""
Motor Study
Run the complete starting, protection, conductor and power factor study
for one motor.

Workflow:
1. Resolve FLC and LRC
2. Analyze starting (current, torque, voltage dip, acceleration, heating)
3. Select protection from the starting analysis
4. Size the branch conductor
5. Size power factor correction

Author: Motor Starting Skill
"""

import logging

from conductor_sizing import select_conductor
from motor_models import LoadType, coerce_motor
from motor_protection import select_motor_protection
from motor_starting import analyze_motor_starting
from power_factor_correction import DEFAULT_TARGET_PF, calc_power_factor_correction

logger = logging.getLogger(__name__)


def run_motor_study(
    motor,
    starting_method=None,
    source_impedance=None,
    load_type=LoadType.PUMP,
    length_ft: float = 100,
    ambient_temp_c: float = 30,
    conduit_material: str = "steel",
    target_pf: float = DEFAULT_TARGET_PF,
    application: str = "general"
) -> dict:
    """
    Complete study for one motor.

    Args:
        motor: MotorSpecification or mapping
        starting_method: StartingMethod, name or settings mapping
        source_impedance: Source impedance (per-unit r, x)
        load_type: Driven load type
        length_ft: Branch conductor one-way length (ft)
        ambient_temp_c: Conductor ambient temperature (°C)
        conduit_material: steel, aluminum or pvc
        target_pf: Power factor correction target
        application: Bus the starting dip is judged against

    Returns:
        dict with analysis, protection, conductor and power_factor_correction
    """
    motor = coerce_motor(motor)

    analysis = analyze_motor_starting(
        motor, starting_method, source_impedance, load_type, application=application
    )
    protection = select_motor_protection(motor, analysis)
    conductor = select_conductor(
        motor, length_ft, ambient_temp_c, conduit_material,
        flc=analysis["full_load_current_a"]
    )
    pfc = calc_power_factor_correction(motor, target_pf)

    logger.debug(
        "Study for %s hp %s V: OL %s A, SCPD %s A, conductor %s, capacitor %s kVAR",
        motor.hp, motor.voltage, protection["overload"]["rating_a"],
        protection["short_circuit"]["rating_a"], conductor["size"],
        pfc["capacitor_size_kvar"]
    )

    return {
        "analysis": analysis,
        "protection": protection,
        "conductor": conductor,
        "power_factor_correction": pfc
    }


if __name__ == "__main__":
    import json

    print("Testing motor_study module...")
    print("=" * 60)

    study = run_motor_study(
        {"hp": 50, "voltage": 460, "code": "G", "rpm": 1775},
        starting_method="softStarter",
        source_impedance={"r": 0.01, "x": 0.03},
        load_type="pump",
        length_ft=250,
        ambient_temp_c=40
    )
    print(json.dumps(study, indent=2))

    print("\n" + "=" * 60)
    print("All tests completed!")
