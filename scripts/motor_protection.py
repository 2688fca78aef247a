#!/usr/bin/env python3
"""
Motor Protection Selection Module
Overload relay, short-circuit device and ground-fault settings.

Implements motor protection sizing per:
- NEC 430.32: Continuous-duty motor overload protection
- NEC 430.52: Branch circuit short-circuit and ground-fault protection
- NEC 240.6(A): Standard ampere ratings
- IEC 60947-4-1: Overload relay trip classes

All ratings are based on the TABLE FLC (NEC 430.6(A)(1)) carried in the
starting analysis.

Author: Motor Starting Skill
Standards: NEC 2023 Article 430, IEC 60947-4-1
"""

import logging

from motor_models import StartingMethodType, coerce_motor
from reference_tables import next_standard_size

logger = logging.getLogger(__name__)

# Overload relay rating, × FLC (1.15 service factor motor)
OVERLOAD_MULTIPLIER = 1.15

# Starting times above this need a Class 20 relay
TRIP_CLASS_TIME_LIMIT_S = 10.0

# Short-circuit device rating, × FLC
SEMICONDUCTOR_FUSE_MULTIPLIER = 1.5    # VFD input protection
INVERSE_TIME_CB_MULTIPLIER = 2.5       # NEC Table 430.52

# Instantaneous pickup: above starting inrush and 8× FLC
INSTANTANEOUS_STARTING_MARGIN = 1.1
INSTANTANEOUS_FLC_MULTIPLE = 8.0

# Ground fault protection (medium voltage motors only)
GROUND_FAULT_VOLTAGE_THRESHOLD = 1000
GROUND_FAULT_PICKUP_MULTIPLIER = 0.25
GROUND_FAULT_DELAY_MS = 100


def calc_overload_max_setting(
    fla: float,
    service_factor: float = 1.0,
    temp_rise_40c_or_less: bool = False
) -> dict:
    """
    Calculate maximum overload relay setting per NEC 430.32(A)(1).

    - SF ≥ 1.15 OR temp rise ≤ 40°C: 125% of FLA
    - All other motors: 115% of FLA

    Args:
        fla: Motor full load amps
        service_factor: Motor service factor (1.0 IEC, 1.15 typical NEMA)
        temp_rise_40c_or_less: Whether motor temp rise marking is ≤40°C

    Returns:
        dict with maximum setting and basis
    """
    if service_factor >= 1.15 or temp_rise_40c_or_less:
        percentage = 125
        basis = "SF ≥ 1.15" if service_factor >= 1.15 else "Temp rise ≤ 40°C"
    else:
        percentage = 115
        basis = "SF < 1.15 and temp rise > 40°C"

    max_setting = fla * (percentage / 100)

    return {
        "max_setting_a": max_setting,
        "fla_a": fla,
        "service_factor": service_factor,
        "percentage": percentage,
        "basis": basis,
        "code_reference": "NEC 430.32(A)(1)"
    }


def select_trip_class(starting_time_s: float) -> int:
    """Class 20 for starts longer than 10 s, otherwise Class 10."""
    return 20 if starting_time_s > TRIP_CLASS_TIME_LIMIT_S else 10


def select_overload_relay(
    flc: float,
    starting_time_s: float,
    service_factor: float = 1.15,
    vfd_application: bool = False
) -> dict:
    """
    Size the overload relay.

    Setting = 115% × FLC; the relay rating is the next standard size.

    Args:
        flc: Motor full load current (A)
        starting_time_s: Motor acceleration time (s)
        service_factor: Motor service factor (for the code maximum check)
        vfd_application: Motor is VFD driven

    Returns:
        dict with overload relay selection
    """
    setting = flc * OVERLOAD_MULTIPLIER
    code_max = calc_overload_max_setting(flc, service_factor)

    if vfd_application:
        relay_type = "VFD_INTEGRAL"
    else:
        relay_type = "ELECTRONIC" if flc > 100 else "THERMAL"

    return {
        "type": relay_type,
        "rating_a": next_standard_size(setting),
        "trip_class": select_trip_class(starting_time_s),
        "setting_a": setting,
        "code_max_setting_a": code_max["max_setting_a"],
        "within_code_max": setting <= code_max["max_setting_a"],
        "code_reference": "NEC 430.32, IEC 60947-4-1"
    }


def select_short_circuit_device(
    flc: float,
    starting_current: float,
    method_type: StartingMethodType = StartingMethodType.ACROSS_THE_LINE
) -> dict:
    """
    Size the branch circuit short-circuit protective device.

    VFD circuits use semiconductor fuses at 150% × FLC; all other starters
    an inverse time breaker at 250% × FLC (NEC Table 430.52). The rating is
    the next standard size up. Instantaneous pickup is the larger of
    110% × starting current and 8 × FLC.

    Args:
        flc: Motor full load current (A)
        starting_current: Starting current for the selected method (A)
        method_type: Starting method

    Returns:
        dict with short-circuit device selection
    """
    if method_type == StartingMethodType.VFD:
        device_type = "SEMICONDUCTOR_FUSE"
        multiplier = SEMICONDUCTOR_FUSE_MULTIPLIER
    else:
        device_type = "INVERSE_TIME_CB"
        multiplier = INVERSE_TIME_CB_MULTIPLIER

    calculated = flc * multiplier
    instantaneous = max(
        starting_current * INSTANTANEOUS_STARTING_MARGIN,
        flc * INSTANTANEOUS_FLC_MULTIPLE
    )

    return {
        "type": device_type,
        "rating_a": next_standard_size(calculated),
        "calculated_a": calculated,
        "multiplier": multiplier,
        "instantaneous_pickup_a": instantaneous,
        "code_reference": "NEC 430.52, Table 430.52"
    }


def select_ground_fault(flc: float, voltage: float):
    """
    Ground fault relay settings for motors above 1000 V.

    Returns:
        dict with settings, or None at or below 1000 V
    """
    if voltage <= GROUND_FAULT_VOLTAGE_THRESHOLD:
        return None
    return {
        "enabled": True,
        "setting_a": flc * GROUND_FAULT_PICKUP_MULTIPLIER,
        "delay_ms": GROUND_FAULT_DELAY_MS
    }


def select_motor_protection(motor, analysis: dict) -> dict:
    """
    Complete protection selection for a motor from its starting analysis.

    Args:
        motor: MotorSpecification or mapping
        analysis: Result of motor_starting.analyze_motor_starting

    Returns:
        dict with overload and short_circuit; ground_fault only above 1000 V
    """
    motor = coerce_motor(motor)
    flc = analysis["full_load_current_a"]
    method_type = StartingMethodType(analysis["starting_method"]["type"])

    overload = select_overload_relay(
        flc,
        analysis["starting_time_s"],
        service_factor=motor.service_factor,
        vfd_application=method_type == StartingMethodType.VFD
    )
    short_circuit = select_short_circuit_device(flc, analysis["starting_current_a"], method_type)
    ground_fault = select_ground_fault(flc, motor.voltage)

    logger.debug(
        "Protection for %s hp: OL %s A class %s, SCPD %s A, inst %.0f A",
        motor.hp, overload["rating_a"], overload["trip_class"],
        short_circuit["rating_a"], short_circuit["instantaneous_pickup_a"]
    )

    protection = {
        "flc_a": flc,
        "overload": overload,
        "short_circuit": short_circuit
    }
    if ground_fault is not None:
        protection["ground_fault"] = ground_fault
    return protection


if __name__ == "__main__":
    from motor_models import MotorSpecification
    from motor_starting import analyze_motor_starting

    print("Testing motor_protection module...")
    print("=" * 60)

    print("\n1. Overload Setting - NEMA Motor (SF=1.15)")
    relay = select_overload_relay(65, 4.0)
    print(f"   FLC = 65A: setting {relay['setting_a']:.1f}A, rating {relay['rating_a']}A")
    print(f"   Class {relay['trip_class']}, type {relay['type']}")

    print("\n2. Short-Circuit Device")
    for method in [StartingMethodType.ACROSS_THE_LINE, StartingMethodType.VFD]:
        scpd = select_short_circuit_device(65, 396.1, method)
        print(f"   {method.value}: {scpd['type']} {scpd['rating_a']}A, "
              f"inst {scpd['instantaneous_pickup_a']:.0f}A")

    print("\n3. Complete Protection - 4160V motor")
    motor = MotorSpecification(hp=500, voltage=4160, code="G")
    protection = select_motor_protection(motor, analyze_motor_starting(motor))
    print(f"   Ground fault: {protection.get('ground_fault')}")

    print("\n" + "=" * 60)
    print("All tests completed!")
