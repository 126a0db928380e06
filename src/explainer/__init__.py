#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Explanation layer for the EV control model.

This package turns raw sensor readings into natural language rationale
and formats recommendations as reports.
"""

from .rules import (
    ExplanationRule,
    RuleChain,
    TORQUE_RULES,
    REGEN_BRAKING_RULES,
    TRACTION_CONTROL_RULES,
    DEFAULT_CHAINS
)

from .explainer import (
    Explainer,
    ExplanationTriple,
    DEFAULT_EXPLAINER,
    explain
)

from .report import (
    format_recommendation,
    format_run,
    FORMAT_TYPES
)

__all__ = [
    'ExplanationRule',
    'RuleChain',
    'TORQUE_RULES',
    'REGEN_BRAKING_RULES',
    'TRACTION_CONTROL_RULES',
    'DEFAULT_CHAINS',
    'Explainer',
    'ExplanationTriple',
    'DEFAULT_EXPLAINER',
    'explain',
    'format_recommendation',
    'format_run',
    'FORMAT_TYPES'
]
