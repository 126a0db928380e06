#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Normalizer for raw sensor readings.

Each feature is rescaled with the affine map ``(raw - min) / span`` from
SENSOR_CATALOG. Values are not clamped, so out-of-domain readings map
outside [0, 1].
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

import numpy as np

from .feature_definitions import SENSOR_CATALOG

logger = logging.getLogger(__name__)

# Read-only mapping of feature name -> normalized value
NormalizedFeatures = Mapping[str, float]


def normalize_value(name: str, raw: float) -> float:
    """Normalize a single feature value."""
    feature = SENSOR_CATALOG[name]
    return (raw - feature.minimum) / feature.span


def normalize(reading) -> NormalizedFeatures:
    """
    Normalize a sensor reading.

    Args:
        reading: SensorReading

    Returns:
        Read-only mapping with one entry per catalog feature
    """
    features = {
        name: (getattr(reading, name) - feature.minimum) / feature.span
        for name, feature in SENSOR_CATALOG.items()
    }
    return MappingProxyType(features)


def normalize_batch(readings: Iterable) -> np.ndarray:
    """
    Normalize many readings at once.

    Returns:
        Array of shape (n, 10), columns in catalog order
    """
    raw = np.array(
        [[getattr(r, name) for name in SENSOR_CATALOG] for r in readings],
        dtype=float,
    ).reshape(-1, len(SENSOR_CATALOG))

    minimums = np.array([f.minimum for f in SENSOR_CATALOG.values()])
    spans = np.array([f.span for f in SENSOR_CATALOG.values()])

    logger.debug(f"Normalizing batch of {raw.shape[0]} readings")
    return (raw - minimums) / spans
