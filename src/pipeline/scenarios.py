#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""Random sensor scenarios for demos and tests."""

import random
from typing import List, Optional

from .features.feature_definitions import SENSOR_CATALOG
from .readings import SensorReading


class ScenarioGenerator:
    """Draws every sensor uniformly from its documented domain."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def generate(self) -> SensorReading:
        """Generate one reading."""
        values = {
            name: feature.minimum + self._rng.random() * feature.span
            for name, feature in SENSOR_CATALOG.items()
        }
        return SensorReading(**values)

    def generate_many(self, count: int) -> List[SensorReading]:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.generate() for _ in range(count)]
