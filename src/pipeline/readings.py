#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Sensor reading record.

A SensorReading is one snapshot of the ten vehicle sensors the model
consumes. Readings are immutable; a fresh one is built per scoring
request.
"""

import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping

from .errors import InvalidReadingError
from .features.feature_definitions import SENSOR_CATALOG, get_feature_by_key


@dataclass(frozen=True)
class SensorReading:
    """Raw sensor values in physical units (see SENSOR_CATALOG for domains)."""
    throttle: float         # %
    rpm: float              # RPM
    wheel_speed: float      # km/h
    battery_soc: float      # %
    brake_pressure: float   # %
    acceleration: float     # m/s²
    temperature: float      # °C
    humidity: float         # %
    road_grade: float       # %, negative = downhill
    vehicle_weight: float   # kg

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidReadingError(
                    f"{f.name} must be a real number, got {type(value).__name__}"
                )
            if not math.isfinite(value):
                raise InvalidReadingError(f"{f.name} must be finite, got {value}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SensorReading":
        """
        Build a reading from a mapping.

        Keys may be python names (``wheel_speed``) or the camelCase keys
        used by the JSON form (``wheelSpeed``).

        Raises:
            InvalidReadingError: unknown or missing fields, bad values
        """
        values: Dict[str, Any] = {}
        for key, value in data.items():
            try:
                feature = get_feature_by_key(key)
            except KeyError:
                raise InvalidReadingError(f"Unknown sensor field: {key}") from None
            if feature.name in values:
                raise InvalidReadingError(f"Duplicate sensor field: {key}")
            values[feature.name] = value

        missing = [name for name in SENSOR_CATALOG if name not in values]
        if missing:
            raise InvalidReadingError(f"Missing sensor fields: {', '.join(missing)}")

        return cls(**values)

    def to_dict(self, wire_keys: bool = True) -> Dict[str, float]:
        """Field values in canonical order, keyed by camelCase or python names."""
        return {
            (feature.key if wire_keys else name): getattr(self, name)
            for name, feature in SENSOR_CATALOG.items()
        }

    def out_of_domain_fields(self) -> List[str]:
        """Names of fields outside their documented operating range."""
        return [
            name for name, feature in SENSOR_CATALOG.items()
            if not feature.minimum <= getattr(self, name) <= feature.maximum
        ]

    def is_within_domain(self) -> bool:
        return not self.out_of_domain_fields()
