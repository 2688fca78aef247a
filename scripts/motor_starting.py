#!/usr/bin/env python3
"""
Motor Starting Analysis Module
Analyze motor starting current, voltage dip, acceleration and heating.

Includes:
- Starting current/torque per starting method
- Voltage dip estimation from source and motor impedance
- Voltage dip impact per bus application
- Acceleration time from load inertia and torque
- I²t thermal limit check
- Starting method recommendations

Author: Motor Starting Skill
Standards: IEEE 141 (Red Book), IEEE 399 (Brown Book), NEMA MG-1
"""

import logging
import math
from types import MappingProxyType

from motor_currents import calc_locked_rotor_current, resolve_full_load_current
from motor_models import (
    CalculationError,
    LoadType,
    MotorSpecification,
    SourceImpedance,
    StartingMethod,
    StartingMethodType,
    coerce_motor,
    normalize_load_type,
)
from reference_tables import get_inertia_constant, get_load_curve
from starting_methods import compute_starting_parameters

logger = logging.getLogger(__name__)

# Typical motor impedance at standstill (per-unit on motor base).
# Fixed estimate; not a per-motor measurement.
MOTOR_SUBTRANSIENT_REACTANCE_PU = 0.17
MOTOR_STATOR_RESISTANCE_PU = 0.02

# Acceleration time constant: t = WK² × rpm / (308 × T)
ACCELERATION_CONSTANT = 308

# Thermal withstand: a motor survives 6× FLC for 10 s (I²t scaled)
THERMAL_REFERENCE_MULTIPLE = 6.0
THERMAL_REFERENCE_TIME_S = 10.0


def _ratio(numerator: float, denominator: float, label: str) -> float:
    if not denominator > 0:
        raise CalculationError(f"{label}: denominator must be positive, got {denominator}")
    value = numerator / denominator
    if not math.isfinite(value):
        raise CalculationError(f"{label} is not finite ({numerator}/{denominator})")
    return value


def calc_voltage_dip(
    starting_current: float,
    flc: float,
    source_impedance=None
) -> dict:
    """
    Calculate voltage dip during motor starting.

    Formula: Vdip% = (Ist / FLC) × |Zsource + Zmotor| × 100

    Args:
        starting_current: Starting current (A)
        flc: Full load current (A)
        source_impedance: SourceImpedance (per-unit r, x)

    Returns:
        dict with voltage dip analysis
    """
    source = SourceImpedance.from_value(source_impedance)

    r_total = source.r + MOTOR_STATOR_RESISTANCE_PU
    x_total = source.x + MOTOR_SUBTRANSIENT_REACTANCE_PU
    z_total = math.sqrt(r_total ** 2 + x_total ** 2)

    current_ratio = _ratio(starting_current, flc, "Starting current ratio")
    vdip_pct = current_ratio * z_total * 100

    return {
        "starting_current_a": starting_current,
        "flc_a": flc,
        "current_ratio": current_ratio,
        "source_impedance_pu": source.to_dict(),
        "motor_impedance_pu": {
            "r": MOTOR_STATOR_RESISTANCE_PU,
            "x": MOTOR_SUBTRANSIENT_REACTANCE_PU
        },
        "total_impedance_pu": z_total,
        "voltage_dip_pct": vdip_pct
    }


# Dip limits (%) per bus application: upper bound of LOW, MODERATE, HIGH
DIP_IMPACT_THRESHOLDS = MappingProxyType({
    "general": (10.0, 15.0, 20.0),
    "critical": (8.0, 12.0, 15.0),
    "lighting": (5.0, 8.0, 10.0),
})

DIP_IMPACT_ACTIONS = (
    ("LOW", "None required"),
    ("MODERATE", "Verify no sensitive loads on same bus"),
    ("HIGH", "Consider soft starter, VFD, or stiffer source"),
)


def assess_voltage_dip_impact(
    voltage_dip_pct: float,
    application: str = "general"
) -> dict:
    """
    Classify a starting voltage dip for the loads sharing the bus.

    A dip is acceptable up to the MODERATE limit of its application.
    Anything above the HIGH limit is EXCESSIVE.

    Args:
        voltage_dip_pct: Calculated voltage dip percentage
        application: general, critical or lighting

    Returns:
        dict with impact_level, recommended_action and acceptable
    """
    key = str(application).lower()
    if key not in DIP_IMPACT_THRESHOLDS:
        raise CalculationError(f"Unknown bus application: {application!r}")
    limits = DIP_IMPACT_THRESHOLDS[key]

    impact, action = "EXCESSIVE", "Mitigation required - reduced voltage start or VFD"
    for limit, (level, level_action) in zip(limits, DIP_IMPACT_ACTIONS):
        if voltage_dip_pct <= limit:
            impact, action = level, level_action
            break

    return {
        "voltage_dip_pct": voltage_dip_pct,
        "impact_level": impact,
        "recommended_action": action,
        "application": key,
        "acceptable": voltage_dip_pct <= limits[1]
    }


def calc_acceleration_time(
    motor: MotorSpecification,
    starting_torque_pct: float,
    load_type=LoadType.PUMP,
    inertia_basis: str = "acceleration"
) -> dict:
    """
    Estimate time to accelerate the load to full speed.

    t = (WK² × rpm) / (308 × hp × Tavg/100)

    WK² = hp × load inertia constant. The average accelerating torque is
    the starting torque scaled by the load curve factor (0.75 quadratic,
    0.5 linear, 0.3 constant torque).

    Args:
        motor: MotorSpecification (uses hp, rpm)
        starting_torque_pct: Starting torque (% of full-load torque)
        load_type: Driven load type
        inertia_basis: Inertia table, "acceleration" or "load_profile"

    Returns:
        dict with acceleration time and the values it was derived from
    """
    motor = coerce_motor(motor)
    load = normalize_load_type(load_type)
    curve = get_load_curve(load)

    wk2 = motor.hp * get_inertia_constant(load, inertia_basis)
    avg_torque_pct = starting_torque_pct * curve["factor"]

    acceleration_time = _ratio(
        wk2 * motor.rpm,
        ACCELERATION_CONSTANT * motor.hp * (avg_torque_pct / 100),
        "Acceleration time"
    )

    return {
        "load_type": load.value,
        "load_curve": curve["curve"],
        "load_curve_factor": curve["factor"],
        "wk2_lb_ft2": wk2,
        "acceleration_torque_pct": avg_torque_pct,
        "acceleration_time_s": acceleration_time
    }


def calc_allowable_thermal_time(starting_current: float, flc: float) -> float:
    """
    Allowable stall time by the I²t rule: 10 s at 6× FLC.

    allowable = 10 × (6 / (Ist/FLC))²
    """
    current_ratio = _ratio(starting_current, flc, "Starting current ratio")
    return _ratio(
        THERMAL_REFERENCE_TIME_S * THERMAL_REFERENCE_MULTIPLE ** 2,
        current_ratio ** 2,
        "Allowable thermal time"
    )


def check_thermal_limit(
    starting_current: float,
    flc: float,
    acceleration_time: float
) -> bool:
    """True if the motor accelerates before its I²t limit is reached."""
    return acceleration_time < calc_allowable_thermal_time(starting_current, flc)


def analyze_motor_starting(
    motor,
    starting_method=None,
    source_impedance=None,
    load_type=LoadType.PUMP,
    inertia_basis: str = "acceleration",
    application: str = "general"
) -> dict:
    """
    Complete motor starting analysis.

    Args:
        motor: MotorSpecification or mapping
        starting_method: StartingMethod, method name or settings mapping
            (default across-the-line)
        source_impedance: SourceImpedance, mapping {r, x} or (r, x)
        load_type: Driven load type
        inertia_basis: Inertia table, "acceleration" or "load_profile"
        application: Bus the dip is judged against (general, critical, lighting)

    Returns:
        dict with complete starting analysis
    """
    motor = coerce_motor(motor)
    method = StartingMethod.from_value(starting_method)
    source = SourceImpedance.from_value(source_impedance)

    flc = resolve_full_load_current(motor.hp, motor.voltage, motor.phases)
    lrc = calc_locked_rotor_current(motor)

    starting_current, starting_torque = compute_starting_parameters(method, lrc, flc.value)

    vdip = calc_voltage_dip(starting_current, flc.value, source)
    impact = assess_voltage_dip_impact(vdip["voltage_dip_pct"], application)
    accel = calc_acceleration_time(motor, starting_torque, load_type, inertia_basis)
    allowable = calc_allowable_thermal_time(starting_current, flc.value)
    within_limit = accel["acceleration_time_s"] < allowable

    logger.debug(
        "%s start of %s hp: Ist %.1f A, T %.1f%%, dip %.1f%%, t %.2f s (allowable %.2f s)",
        method.type.value, motor.hp, starting_current, starting_torque,
        vdip["voltage_dip_pct"], accel["acceleration_time_s"], allowable
    )

    return {
        "motor": motor.to_dict(),
        "starting_method": method.to_dict(),
        "load_type": accel["load_type"],
        "full_load_current_a": flc.value,
        "full_load_current_source": flc.source,
        "locked_rotor_current_a": lrc,
        "starting_current_a": starting_current,
        "starting_torque_pct": starting_torque,
        "starting_time_s": accel["acceleration_time_s"],
        "acceleration_torque_pct": accel["acceleration_torque_pct"],
        "wk2_lb_ft2": accel["wk2_lb_ft2"],
        "voltage_dip_pct": vdip["voltage_dip_pct"],
        "voltage_dip_impact": impact["impact_level"],
        "voltage_dip_acceptable": impact["acceptable"],
        "source_impedance_pu": source.to_dict(),
        "allowable_thermal_time_s": allowable,
        "thermal_limit_ok": within_limit
    }


def recommend_starting_method(
    motor,
    source_impedance=None,
    load_type=LoadType.PUMP,
    max_voltage_dip_pct: float = 15
) -> dict:
    """
    Recommend motor starting method based on voltage dip and heating.

    Methods are tested from simplest to most expensive; the first one within
    the dip limit that also passes the thermal check is recommended.

    Args:
        motor: MotorSpecification or mapping
        source_impedance: Source impedance (per-unit)
        load_type: Driven load type
        max_voltage_dip_pct: Maximum acceptable voltage dip

    Returns:
        dict with starting method recommendation
    """
    motor = coerce_motor(motor)

    methods_to_test = [
        StartingMethodType.ACROSS_THE_LINE,
        StartingMethodType.AUTOTRANSFORMER,
        StartingMethodType.SOFT_STARTER,
        StartingMethodType.VFD,
    ]
    # Star-delta needs a delta-run three-phase winding
    if motor.phases == 3:
        methods_to_test.insert(1, StartingMethodType.STAR_DELTA)

    results = []
    recommended = None

    for method in methods_to_test:
        analysis = analyze_motor_starting(motor, method, source_impedance, load_type)
        acceptable = (
            analysis["voltage_dip_pct"] <= max_voltage_dip_pct
            and analysis["thermal_limit_ok"]
        )
        results.append({
            "method": method.value,
            "voltage_dip_pct": analysis["voltage_dip_pct"],
            "starting_time_s": analysis["starting_time_s"],
            "thermal_limit_ok": analysis["thermal_limit_ok"],
            "acceptable": acceptable
        })

        if recommended is None and acceptable:
            recommended = method.value

    return {
        "motor_hp": motor.hp,
        "max_voltage_dip_pct": max_voltage_dip_pct,
        "recommended_method": recommended or StartingMethodType.VFD.value,
        "analysis_results": results,
        "load_type": normalize_load_type(load_type).value,
        "notes": (
            f"Across-the-line starting causes {results[0]['voltage_dip_pct']:.1f}% dip. " +
            (f"{recommended} recommended." if recommended
             else "No method meets the limits; VFD recommended.")
        )
    }


if __name__ == "__main__":
    print("Testing motor_starting module...")
    print("=" * 60)

    motor = MotorSpecification(hp=50, voltage=460, code="G", rpm=1775)

    print("\n1. Across-the-line Start")
    analysis = analyze_motor_starting(motor, "across_the_line", {"r": 0.01, "x": 0.03}, "pump")
    print(f"   FLC: {analysis['full_load_current_a']}A ({analysis['full_load_current_source']})")
    print(f"   LRC: {analysis['locked_rotor_current_a']:.1f}A")
    print(f"   Voltage dip: {analysis['voltage_dip_pct']:.1f}% ({analysis['voltage_dip_impact']})")
    print(f"   Acceleration: {analysis['starting_time_s']:.1f}s")
    print(f"   Thermal OK: {analysis['thermal_limit_ok']}")

    print("\n2. Voltage Dip Impact")
    impact = assess_voltage_dip_impact(18, "general")
    print(f"   18% dip impact: {impact['impact_level']}")
    print(f"   Action: {impact['recommended_action']}")

    print("\n3. Starting Method Recommendation")
    rec = recommend_starting_method(motor, {"r": 0.01, "x": 0.03}, "fan", max_voltage_dip_pct=15)
    print(f"   Recommended: {rec['recommended_method']}")
    print(f"   Notes: {rec['notes']}")

    print("\n" + "=" * 60)
    print("All tests completed!")
