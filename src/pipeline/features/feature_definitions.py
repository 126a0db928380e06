#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Sensor feature catalog for the EV control model.

This module defines every sensor channel the model consumes, its
documented operating domain and the fixed min/span constants used to
normalize it.
"""

from enum import Enum
from typing import Dict, List, Tuple
from dataclasses import dataclass


class FeatureGroup(Enum):
    """Feature groups for organization."""
    DRIVER_INPUT = "driver_input"
    POWERTRAIN = "powertrain"
    DYNAMICS = "dynamics"
    ENVIRONMENT = "environment"


@dataclass(frozen=True)
class FeatureDefinition:
    """Definition of a single sensor feature."""
    name: str
    key: str  # camelCase key used in dict/JSON form
    group: FeatureGroup
    description: str
    minimum: float
    span: float
    unit: str = ""

    @property
    def maximum(self) -> float:
        return self.minimum + self.span

    @property
    def midpoint(self) -> float:
        return self.minimum + self.span / 2.0


# Feature Catalog (insertion order is the canonical feature order)
SENSOR_CATALOG: Dict[str, FeatureDefinition] = {
    "throttle": FeatureDefinition(
        name="throttle",
        key="throttle",
        group=FeatureGroup.DRIVER_INPUT,
        description="Accelerator pedal position",
        minimum=0.0,
        span=100.0,
        unit="%",
    ),

    "rpm": FeatureDefinition(
        name="rpm",
        key="rpm",
        group=FeatureGroup.POWERTRAIN,
        description="Motor speed",
        minimum=1000.0,
        span=5000.0,
        unit="RPM",
    ),

    "wheel_speed": FeatureDefinition(
        name="wheel_speed",
        key="wheelSpeed",
        group=FeatureGroup.DYNAMICS,
        description="Wheel speed",
        minimum=0.0,
        span=120.0,
        unit="km/h",
    ),

    "battery_soc": FeatureDefinition(
        name="battery_soc",
        key="batterySoc",
        group=FeatureGroup.POWERTRAIN,
        description="Battery state of charge",
        minimum=20.0,
        span=80.0,
        unit="%",
    ),

    "brake_pressure": FeatureDefinition(
        name="brake_pressure",
        key="brakePressure",
        group=FeatureGroup.DRIVER_INPUT,
        description="Brake pedal pressure",
        minimum=0.0,
        span=100.0,
        unit="%",
    ),

    "acceleration": FeatureDefinition(
        name="acceleration",
        key="acceleration",
        group=FeatureGroup.DYNAMICS,
        description="Longitudinal acceleration",
        minimum=-2.0,
        span=7.0,
        unit="m/s²",
    ),

    "temperature": FeatureDefinition(
        name="temperature",
        key="temperature",
        group=FeatureGroup.ENVIRONMENT,
        description="Ambient temperature",
        minimum=10.0,
        span=40.0,
        unit="°C",
    ),

    "humidity": FeatureDefinition(
        name="humidity",
        key="humidity",
        group=FeatureGroup.ENVIRONMENT,
        description="Relative humidity",
        minimum=30.0,
        span=50.0,
        unit="%",
    ),

    "road_grade": FeatureDefinition(
        name="road_grade",
        key="roadGrade",
        group=FeatureGroup.ENVIRONMENT,
        description="Road grade, negative is downhill",
        minimum=-10.0,
        span=20.0,
        unit="%",
    ),

    "vehicle_weight": FeatureDefinition(
        name="vehicle_weight",
        key="vehicleWeight",
        group=FeatureGroup.DYNAMICS,
        description="Vehicle mass including load",
        minimum=1500.0,
        span=500.0,
        unit="kg",
    ),
}


def get_features_by_group(group: FeatureGroup) -> Dict[str, FeatureDefinition]:
    """Get all features in a specific group."""
    return {
        name: feature
        for name, feature in SENSOR_CATALOG.items()
        if feature.group == group
    }


def get_feature_names() -> List[str]:
    """Get list of all feature names in canonical order."""
    return list(SENSOR_CATALOG.keys())


def get_feature_by_key(key: str) -> FeatureDefinition:
    """Look up a feature by python name or camelCase key."""
    if key in SENSOR_CATALOG:
        return SENSOR_CATALOG[key]
    for feature in SENSOR_CATALOG.values():
        if feature.key == key:
            return feature
    raise KeyError(key)


def get_domain(name: str) -> Tuple[float, float]:
    """Documented (min, max) operating range of a feature."""
    feature = SENSOR_CATALOG[name]
    return feature.minimum, feature.maximum
