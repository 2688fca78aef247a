#!/usr/bin/env python3
"""
Motor Study Data Model
Input value objects and error types for motor starting studies.

Includes:
- MotorSpecification (nameplate data)
- StartingMethod (tagged starting method with its settings)
- SourceImpedance (upstream per-unit impedance)
- LoadType and StartingMethodType enumerations
- Error hierarchy raised by all calculation modules

Author: Motor Starting Skill
Standards: NEMA MG-1, NEC 2023 Article 430
"""

import re
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Optional


# ============================================================================
# Errors
# ============================================================================

class MotorAnalysisError(ValueError):
    """Base class for motor study input and calculation errors."""


class InvalidMotorSpecification(MotorAnalysisError):
    """Nameplate data outside its physical range."""


class InvalidStartingMethodSettings(MotorAnalysisError):
    """Unknown starting method or a method setting outside its range."""


class CalculationError(MotorAnalysisError):
    """An intermediate value is zero, non-finite or outside its domain."""


# ============================================================================
# Enumerations
# ============================================================================

class LoadType(str, Enum):
    """Driven load; selects inertia constant and load torque curve."""
    FAN = "fan"
    PUMP = "pump"
    COMPRESSOR = "compressor"
    CONVEYOR = "conveyor"
    CRUSHER = "crusher"


class StartingMethodType(str, Enum):
    ACROSS_THE_LINE = "across_the_line"
    STAR_DELTA = "star_delta"
    AUTOTRANSFORMER = "autotransformer"
    SOFT_STARTER = "soft_starter"
    VFD = "vfd"
    RESISTOR = "resistor"
    PART_WINDING = "part_winding"
    REDUCED_VOLTAGE = "reduced_voltage"


_METHOD_ALIASES = {
    "dol": "across_the_line",
    "direct_on_line": "across_the_line",
    "atl": "across_the_line",
    "wye_delta": "star_delta",
    "y_delta": "star_delta",
    "soft_start": "soft_starter",
    "variable_frequency_drive": "vfd",
}


def normalize_starting_method(name: str) -> StartingMethodType:
    """
    Normalize a starting method name to a StartingMethodType.

    Accepts snake_case, camelCase ("starDelta"), kebab or space separated
    names ("Star-Delta", "soft starter") and the aliases DOL / wye-delta.

    Raises:
        InvalidStartingMethodSettings: If the name is not a known method
    """
    if isinstance(name, StartingMethodType):
        return name
    if not isinstance(name, str) or not name.strip():
        raise InvalidStartingMethodSettings(f"Starting method must be a name, got {name!r}")

    key = name.strip()
    if not key.isupper():
        # camelCase -> snake_case
        key = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", key)
    key = key.lower().replace("-", "_").replace(" ", "_")
    key = _METHOD_ALIASES.get(key, key)

    try:
        return StartingMethodType(key)
    except ValueError:
        raise InvalidStartingMethodSettings(f"Unknown starting method: {name!r}") from None


def normalize_load_type(load_type) -> LoadType:
    """Normalize a load type name to a LoadType."""
    if isinstance(load_type, LoadType):
        return load_type
    try:
        return LoadType(str(load_type).strip().lower())
    except ValueError:
        raise CalculationError(f"Unknown load type: {load_type!r}") from None


# ============================================================================
# Value objects
# ============================================================================

@dataclass(frozen=True)
class MotorSpecification:
    """
    Motor nameplate specifications.

    Attributes:
        hp: Rated horsepower
        voltage: Rated line voltage [V]
        phases: Number of phases (1 or 3)
        frequency: Supply frequency [Hz]
        poles: Number of poles
        rpm: Nameplate full-load speed [rpm]
        efficiency: Full-load efficiency (0-1)
        power_factor: Full-load power factor (0-1]
        service_factor: NEMA service factor
        enclosure: Enclosure type (TEFC, ODP, ...)
        insulation_class: Insulation class letter
        design: NEMA design letter (A, B, C, D)
        code: NEMA locked-rotor code letter (A-V)
    """

    hp: float
    voltage: float
    phases: int = 3
    frequency: float = 60.0
    poles: int = 4
    rpm: float = 1775.0
    efficiency: float = 0.90
    power_factor: float = 0.85
    service_factor: float = 1.15
    enclosure: str = "TEFC"
    insulation_class: str = "F"
    design: str = "B"
    code: Optional[str] = "G"

    def __post_init__(self):
        if not self.hp > 0:
            raise InvalidMotorSpecification(f"Horsepower must be positive, got {self.hp}")
        if not self.voltage > 0:
            raise InvalidMotorSpecification(f"Voltage must be positive, got {self.voltage}")
        if self.phases not in (1, 3):
            raise InvalidMotorSpecification(f"Phases must be 1 or 3, got {self.phases}")
        if not self.frequency > 0:
            raise InvalidMotorSpecification(f"Frequency must be positive, got {self.frequency}")
        if self.poles < 2 or self.poles % 2:
            raise InvalidMotorSpecification(f"Poles must be an even number >= 2, got {self.poles}")
        if not self.rpm > 0:
            raise InvalidMotorSpecification(f"Speed must be positive, got {self.rpm}")
        if not 0 < self.efficiency <= 1:
            raise InvalidMotorSpecification(f"Efficiency must be in (0, 1], got {self.efficiency}")
        if not 0 < self.power_factor <= 1:
            raise InvalidMotorSpecification(f"Power factor must be in (0, 1], got {self.power_factor}")
        if not self.service_factor >= 1.0:
            raise InvalidMotorSpecification(f"Service factor must be >= 1.0, got {self.service_factor}")

    @classmethod
    def from_dict(cls, data: dict) -> "MotorSpecification":
        """
        Build a specification from a plain mapping (e.g. a YAML equipment record).

        Unknown keys are ignored; "rated_hp" and "voltage_v" are accepted
        as aliases for "hp" and "voltage".
        """
        data = dict(data)
        if "hp" not in data and "rated_hp" in data:
            data["hp"] = data["rated_hp"]
        if "voltage" not in data and "voltage_v" in data:
            data["voltage"] = data["voltage_v"]

        missing = [name for name in ("hp", "voltage") if name not in data]
        if missing:
            raise InvalidMotorSpecification(f"Missing motor fields: {', '.join(missing)}")

        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StartingMethod:
    """
    Starting method with its method-specific settings.

    Only the settings relevant to ``type`` are used:
    - autotransformer: tap_setting (% of line voltage, default 80)
    - soft_starter: initial_voltage (% of line voltage, default 30), ramp_time (s)
    - resistor: resistance_steps
    """

    type: StartingMethodType = StartingMethodType.ACROSS_THE_LINE
    tap_setting: Optional[float] = None
    ramp_time: Optional[float] = None
    initial_voltage: Optional[float] = None
    resistance_steps: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "type", normalize_starting_method(self.type))

        for name in ("tap_setting", "initial_voltage"):
            value = getattr(self, name)
            if value is not None and not 0 < value <= 100:
                raise InvalidStartingMethodSettings(
                    f"{name} must be in (0, 100] percent, got {value}"
                )
        if self.ramp_time is not None and not self.ramp_time >= 0:
            raise InvalidStartingMethodSettings(f"ramp_time must be >= 0 s, got {self.ramp_time}")
        if self.resistance_steps is not None and self.resistance_steps < 1:
            raise InvalidStartingMethodSettings(
                f"resistance_steps must be >= 1, got {self.resistance_steps}"
            )

    @classmethod
    def from_value(cls, value) -> "StartingMethod":
        """Coerce a StartingMethod, method name or settings mapping."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, (str, StartingMethodType)):
            return cls(type=value)
        if isinstance(value, dict):
            names = {f.name for f in fields(cls)}
            return cls(**{k: v for k, v in value.items() if k in names})
        raise InvalidStartingMethodSettings(f"Cannot build a starting method from {value!r}")

    def to_dict(self) -> dict:
        result = {"type": self.type.value}
        for name in ("tap_setting", "ramp_time", "initial_voltage", "resistance_steps"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result


@dataclass(frozen=True)
class SourceImpedance:
    """Upstream utility/transformer impedance in per-unit on the motor base."""

    r: float = 0.0
    x: float = 0.0

    def __post_init__(self):
        if not (self.r >= 0 and self.x >= 0):
            raise CalculationError(
                f"Source impedance must be non-negative, got r={self.r}, x={self.x}"
            )

    @classmethod
    def from_value(cls, value) -> "SourceImpedance":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, dict):
            return cls(r=value.get("r", 0.0), x=value.get("x", 0.0))
        r, x = value
        return cls(r=r, x=x)

    def to_dict(self) -> dict:
        return {"r": self.r, "x": self.x}


def coerce_motor(motor) -> MotorSpecification:
    """Accept a MotorSpecification or a plain mapping."""
    if isinstance(motor, MotorSpecification):
        return motor
    if isinstance(motor, dict):
        return MotorSpecification.from_dict(motor)
    raise InvalidMotorSpecification(f"Cannot build a motor specification from {motor!r}")
