#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Exception types for the EV control model.
"""


class EVControlError(Exception):
    """Base class for all EV control model errors."""


class ConfigurationError(EVControlError):
    """Model, rule or run configuration is inconsistent.

    Raised when the weight tables and the feature catalog disagree on
    their key sets, or when a rule chain is missing. These are defects
    in the constant tables, so they surface at construction time.
    """


class InvalidReadingError(EVControlError, ValueError):
    """Sensor data could not be turned into a SensorReading."""
