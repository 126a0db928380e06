#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Feature module for the EV control model.

Provides the sensor catalog and the normalization of raw readings into
the [0, 1] feature space the scorer works in.
"""

from .feature_definitions import SENSOR_CATALOG, FeatureDefinition, FeatureGroup, get_feature_names
from .normalizer import NormalizedFeatures, normalize, normalize_batch, normalize_value

__all__ = [
    'SENSOR_CATALOG',
    'FeatureDefinition',
    'FeatureGroup',
    'get_feature_names',
    'NormalizedFeatures',
    'normalize',
    'normalize_batch',
    'normalize_value',
]
