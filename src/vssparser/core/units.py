#!/usr/bin/env python3
"""
VSSPARSER UNIT REGISTRY
-----------------------
The closed set of physical units a sensor or attribute may declare, with the
descriptive metadata (label, description, quantity class) published in the
COVESA units catalogue. Lookup is case-insensitive and symbol-aware, so
'KM/H', 'km/h' and 'Km/h' all resolve to the same member.

Reference: vehicle_signal_specification/spec/units.yaml

Author: VssParser Team
Date: 2026-01-16
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from vssparser.core.types import InvalidToken


class UnitClass(Enum):
    """Physical quantity a unit measures."""

    ACCELERATION = "acceleration"
    ANGLE = "angle"
    ANGULAR_SPEED = "angular-speed"
    DISTANCE = "distance"
    DISTANCE_VOLUME = "distance-per-volume"
    ELECTRIC_CHARGE = "electric-charge"
    ELECTRIC_CURRENT = "electric-current"
    ELECTRIC_POTENTIAL = "electric-potential"
    ENERGY_CONSUMPTION = "energy-consumption"
    ENERGY = "energy"
    FLOW = "flow"
    FORCE = "force"
    FREQUENCY = "frequency"
    MASS = "mass"
    MASS_DISTANCE = "mass-per-distance"
    MASS_PER_TIME = "mass-per-time"
    POWER = "power"
    PRESSURE = "pressure"
    RATING = "rating"
    RELATION = "relation"
    ROTATIONAL_SPEED = "rotational-speed"
    SPEED = "speed"
    TEMPERATURE = "temperature"
    TIME = "time"
    TORQUE = "torque"
    VOLUME = "volume"
    VOLUME_DISTANCE = "volume-per-distance"
    NONE = "none"


@dataclass(frozen=True)
class UnitInfo:
    """Introspection record attached to a unit."""
    label: str
    description: str
    domain: UnitClass


class Unit(Enum):
    """
    Canonical unit symbols. The enum value is the rendered form; parsing
    folds case before matching so mixed-case symbols ('kW', 'dBm') are
    accepted in any spelling.
    """

    UNITS = "units"
    MM = "mm"
    CM = "cm"
    M = "m"
    KM = "km"
    INCH = "inch"
    KM_H = "km/h"
    M_S = "m/s"
    M_S2 = "m/s^2"
    CM_S2 = "cm/s^2"
    ML = "ml"
    L = "l"
    CM3 = "cm^3"
    CELSIUS = "celsius"
    DEGREES = "degrees"
    DEGREES_S = "degrees/s"
    W = "W"
    KW = "kW"
    PS = "PS"
    KWH = "kWh"
    G = "g"
    KG = "kg"
    LBS = "lbs"
    V = "V"
    A = "A"
    AH = "Ah"
    MS = "ms"
    S = "s"
    MIN = "min"
    H = "h"
    DAY = "day"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"
    TIMESTAMP = "Timestamp"
    MBAR = "mbar"
    PA = "Pa"
    KPA = "kPa"
    STARS = "stars"
    G_S = "g/s"
    G_KM = "g/km"
    KWH_100KM = "kWh/100km"
    ML_100KM = "ml/100km"
    L_100KM = "l/100km"
    L_H = "l/h"
    MPG = "mpg"
    N = "N"
    NM = "Nm"
    RPM = "rpm"
    HZ = "Hz"
    RATIO = "ratio"
    PERCENT = "percent"
    NM_KM = "nm/km"
    DBM = "dBm"
    KN = "kN"
    UNSET = "Unset"

    @classmethod
    def parse(cls, token: str) -> "Unit":
        unit = _BY_SYMBOL.get(token.strip().lower())
        if unit is None:
            raise InvalidToken("unit", token)
        return unit

    def render(self) -> str:
        return self.value

    @property
    def info(self) -> UnitInfo:
        return UNIT_POOL.get(self, _NO_INFO)

    @classmethod
    def by_class(cls, domain: UnitClass) -> List["Unit"]:
        return [unit for unit, info in UNIT_POOL.items() if info.domain is domain]


# UNSET marks "no unit declared"; it is rendered but never parsed.
_BY_SYMBOL: Dict[str, Unit] = {
    unit.value.lower(): unit for unit in Unit if unit is not Unit.UNSET
}

_NO_INFO = UnitInfo("unset", "No unit declared", UnitClass.NONE)

UNIT_POOL: Dict[Unit, UnitInfo] = {
    Unit.UNITS: UnitInfo("units", "Count of items", UnitClass.RELATION),
    Unit.MM: UnitInfo("millimeter", "Distance measured in millimeters", UnitClass.DISTANCE),
    Unit.CM: UnitInfo("centimeter", "Distance measured in centimeters", UnitClass.DISTANCE),
    Unit.M: UnitInfo("meter", "Distance measured in meters", UnitClass.DISTANCE),
    Unit.KM: UnitInfo("kilometer", "Distance measured in kilometers", UnitClass.DISTANCE),
    Unit.INCH: UnitInfo("inch", "Distance measured in inches", UnitClass.DISTANCE),
    Unit.KM_H: UnitInfo("kilometer per hour", "Speed measured in kilometers per hours", UnitClass.SPEED),
    Unit.M_S: UnitInfo("meters per second", "Speed measured in meters per second", UnitClass.SPEED),
    Unit.M_S2: UnitInfo("meters per second squared",
                        "Acceleration measured in meters per second squared", UnitClass.ACCELERATION),
    Unit.CM_S2: UnitInfo("centimeters per second squared",
                         "Acceleration measured in centimeters per second squared", UnitClass.ACCELERATION),
    Unit.ML: UnitInfo("milliliter", "Volume measured in milliliters", UnitClass.VOLUME),
    Unit.L: UnitInfo("liter", "Volume measured in liters", UnitClass.VOLUME),
    Unit.CM3: UnitInfo("cubic centimeters", "Volume measured in cubic centimeters", UnitClass.VOLUME),
    Unit.CELSIUS: UnitInfo("degree celsius", "Temperature measured in degree celsius", UnitClass.TEMPERATURE),
    Unit.DEGREES: UnitInfo("degree", "Angle measured in degrees", UnitClass.ANGLE),
    Unit.DEGREES_S: UnitInfo("degree per second",
                             "Angular speed measured in degrees per second", UnitClass.ANGULAR_SPEED),
    Unit.W: UnitInfo("watt", "Power measured in watts", UnitClass.POWER),
    Unit.KW: UnitInfo("kilowatt", "Power measured in kilowatts", UnitClass.POWER),
    Unit.PS: UnitInfo("horsepower", "Power measured in horsepower", UnitClass.POWER),
    Unit.KWH: UnitInfo("kilowatt hours",
                       "Energy consumption measured in kilowatt hours", UnitClass.ENERGY_CONSUMPTION),
    Unit.G: UnitInfo("gram", "Mass measured in grams", UnitClass.MASS),
    Unit.KG: UnitInfo("kilogram", "Mass measured in kilograms", UnitClass.MASS),
    Unit.LBS: UnitInfo("pound", "Mass measured in pounds", UnitClass.MASS),
    Unit.V: UnitInfo("volt", "Electric potential measured in volts", UnitClass.ELECTRIC_POTENTIAL),
    Unit.A: UnitInfo("ampere", "Electric current measured in amperes", UnitClass.ELECTRIC_CURRENT),
    Unit.AH: UnitInfo("ampere hours", "Electric charge measured in ampere hours", UnitClass.ELECTRIC_CHARGE),
    Unit.MS: UnitInfo("millisecond", "Time measured in milliseconds", UnitClass.TIME),
    Unit.S: UnitInfo("second", "Time measured in seconds", UnitClass.TIME),
    Unit.MIN: UnitInfo("minute", "Time measured in minutes", UnitClass.TIME),
    Unit.H: UnitInfo("hour", "Time measured in hours", UnitClass.TIME),
    Unit.DAY: UnitInfo("days", "Time measured in days", UnitClass.TIME),
    Unit.WEEKS: UnitInfo("weeks", "Time measured in weeks", UnitClass.TIME),
    Unit.MONTHS: UnitInfo("months", "Time measured in months", UnitClass.TIME),
    Unit.YEARS: UnitInfo("years", "Time measured in years", UnitClass.TIME),
    Unit.TIMESTAMP: UnitInfo(
        "Timestamp",
        "Unix time is a system for describing a point in time. It is the number of seconds "
        "that have elapsed since the Unix epoch, excluding leap seconds.",
        UnitClass.TIME,
    ),
    Unit.MBAR: UnitInfo("millibar", "Pressure measured in millibars", UnitClass.PRESSURE),
    Unit.PA: UnitInfo("pascal", "Pressure measured in pascal", UnitClass.PRESSURE),
    Unit.KPA: UnitInfo("kilopascal", "Pressure measured in kilopascal", UnitClass.PRESSURE),
    Unit.STARS: UnitInfo("stars", "Rating measured in stars", UnitClass.RATING),
    Unit.G_S: UnitInfo("grams per second", "Mass per time measured in grams per second", UnitClass.MASS_PER_TIME),
    Unit.G_KM: UnitInfo("grams per kilometer",
                        "Mass per distance measured in grams per kilometers", UnitClass.MASS_DISTANCE),
    Unit.KWH_100KM: UnitInfo(
        "kilowatt hours per 100 kilometers",
        "Energy consumption per distance measured in kilowatt hours per 100 kilometers",
        UnitClass.ENERGY,
    ),
    Unit.ML_100KM: UnitInfo("milliliter per 100 kilometers",
                            "Volume per distance measured in milliliters per 100 kilometers",
                            UnitClass.VOLUME_DISTANCE),
    Unit.L_100KM: UnitInfo("liter per 100 kilometers",
                           "Volume per distance measured in liters per 100 kilometers",
                           UnitClass.VOLUME_DISTANCE),
    Unit.L_H: UnitInfo("liter per hour", "Flow measured in liters per hour", UnitClass.FLOW),
    Unit.MPG: UnitInfo("miles per gallon", "Distance per volume measured in miles per gallon",
                       UnitClass.DISTANCE_VOLUME),
    Unit.N: UnitInfo("newton", "Force measured in newton", UnitClass.FORCE),
    Unit.NM: UnitInfo("newton meter", "Torque measured in newton meters", UnitClass.TORQUE),
    Unit.RPM: UnitInfo("revolutions per minute",
                       "Rotational speed measured in revolutions per minute", UnitClass.ROTATIONAL_SPEED),
    Unit.HZ: UnitInfo("frequency", "Frequency measured in hertz", UnitClass.FREQUENCY),
    Unit.RATIO: UnitInfo("ratio", "Relation measured as ratio", UnitClass.RELATION),
    Unit.PERCENT: UnitInfo("percent", "Relation measured in percent", UnitClass.RELATION),
    Unit.NM_KM: UnitInfo("nano meter per kilometer", "nm_km", UnitClass.NONE),
    Unit.DBM: UnitInfo("decibel milliwatt",
                       "Power level expressed in decibels with reference to one milliwatt",
                       UnitClass.RELATION),
    Unit.KN: UnitInfo("kilo newton", "Force measured in kilo newton", UnitClass.FORCE),
}
