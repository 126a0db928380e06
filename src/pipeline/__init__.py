#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
EV Control Model Pipeline Package.

This package provides sensor normalization and sigmoid scoring of drive
torque, regenerative braking and traction control. The ControlEngine in
``pipeline.engine`` combines it with the explanation layer.
"""

__version__ = "0.1.0"
__all__ = [
    "SensorReading",
    "normalize",
    "predict",
    "Channel",
    "PredictionTriple",
    "Scorer",
    "DEFAULT_MODEL",
    "ScenarioGenerator",
    "EVControlError",
    "ConfigurationError",
    "InvalidReadingError"
]

from .errors import EVControlError, ConfigurationError, InvalidReadingError
from .readings import SensorReading
from .features import normalize
from .scoring import Channel, PredictionTriple, Scorer, DEFAULT_MODEL, predict
from .scenarios import ScenarioGenerator
