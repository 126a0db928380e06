#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Scoring for the EV control model.

Weight tables per output channel and the sigmoid scorer that turns
normalized features into control recommendations.
"""

from .weights import (
    Channel,
    WeightTable,
    ModelConfig,
    TORQUE_WEIGHTS,
    REGEN_BRAKING_WEIGHTS,
    TRACTION_CONTROL_WEIGHTS,
    DEFAULT_MODEL,
    build_model
)

from .scorer import (
    Scorer,
    PredictionTriple,
    DEFAULT_SCORER,
    sigmoid,
    to_fixed,
    predict
)

__all__ = [
    'Channel',
    'WeightTable',
    'ModelConfig',
    'TORQUE_WEIGHTS',
    'REGEN_BRAKING_WEIGHTS',
    'TRACTION_CONTROL_WEIGHTS',
    'DEFAULT_MODEL',
    'build_model',
    'Scorer',
    'PredictionTriple',
    'DEFAULT_SCORER',
    'sigmoid',
    'to_fixed',
    'predict'
]
