#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Scorer for the EV control model.

For every channel the scorer starts from the channel bias, adds
``normalized_value * weight`` once per feature and squashes the sum with
the logistic function. Outputs lie in (0, 1).
"""

import math
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping

import numpy as np

from ..errors import ConfigurationError
from .weights import Channel, ModelConfig, DEFAULT_MODEL

logger = logging.getLogger(__name__)


def sigmoid(x: float) -> float:
    """Logistic function 1 / (1 + e^-x), stable for large |x|."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def _sigmoid_array(x: np.ndarray) -> np.ndarray:
    out = np.empty_like(x, dtype=float)
    positive = x >= 0
    out[positive] = 1.0 / (1.0 + np.exp(-x[positive]))
    z = np.exp(x[~positive])
    out[~positive] = z / (1.0 + z)
    return out


def to_fixed(value: float, places: int = 2) -> str:
    """
    Fixed-point text of a float, ties rounded away from zero.

    Rounds the exact binary value, so 0.125 gives "0.13" while 1.005
    (stored just below 1.005) gives "1.00". Plain ``round`` and ``:.2f``
    round exact ties to even instead.
    """
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PredictionTriple:
    """Scorer output, one value in (0, 1) per channel."""
    torque: float
    regen_braking: float
    traction_control: float

    def get(self, channel: Channel) -> float:
        return {
            Channel.TORQUE: self.torque,
            Channel.REGEN_BRAKING: self.regen_braking,
            Channel.TRACTION_CONTROL: self.traction_control,
        }[channel]

    def as_dict(self) -> Dict[str, float]:
        return {channel.value: self.get(channel) for channel in Channel}

    def as_percentages(self) -> Dict[str, float]:
        """Values scaled to percent and rounded to two decimals."""
        return {channel.value: float(to_fixed(self.get(channel) * 100)) for channel in Channel}

    def format_percent(self, channel: Channel) -> str:
        return f"{to_fixed(self.get(channel) * 100)}%"


class Scorer:
    """
    Linear-weight scorer with sigmoid activation.

    The model configuration is validated when it is built; the scorer only
    holds a reference to it.
    """

    def __init__(self, model: ModelConfig = DEFAULT_MODEL):
        self.model = model
        self._features = frozenset(model.feature_names)

    def _check_features(self, features: Mapping[str, float]):
        keys = set(features)
        if keys != self._features:
            raise ConfigurationError(
                f"Feature set does not match model "
                f"(missing={sorted(self._features - keys)}, "
                f"unexpected={sorted(keys - self._features)})"
            )

    def weighted_sums(self, features: Mapping[str, float]) -> Dict[Channel, float]:
        """Bias plus weighted features for each channel, before activation."""
        self._check_features(features)

        sums = {}
        for channel, table in self.model.tables().items():
            total = table.bias
            for name in self.model.feature_names:
                total += features[name] * table.weights[name]
            sums[channel] = total
        return sums

    def contributions(self, features: Mapping[str, float],
                      channel: Channel) -> Dict[str, float]:
        """Per-feature terms of a channel's weighted sum (bias excluded)."""
        self._check_features(features)
        table = self.model.table(channel)
        return {
            name: features[name] * table.weights[name]
            for name in self.model.feature_names
        }

    def predict(self, features: Mapping[str, float]) -> PredictionTriple:
        """
        Score normalized features.

        Args:
            features: NormalizedFeatures from the normalizer

        Returns:
            PredictionTriple with each value in (0, 1)
        """
        sums = self.weighted_sums(features)
        prediction = PredictionTriple(
            torque=sigmoid(sums[Channel.TORQUE]),
            regen_braking=sigmoid(sums[Channel.REGEN_BRAKING]),
            traction_control=sigmoid(sums[Channel.TRACTION_CONTROL]),
        )
        logger.debug(f"Weighted sums {sums} -> {prediction}")
        return prediction

    def predict_batch(self, matrix: np.ndarray) -> np.ndarray:
        """
        Score a batch of normalized feature rows.

        Args:
            matrix: Array of shape (n, n_features) in model feature order

        Returns:
            Array of shape (n, 3), columns in Channel order
        """
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[1] != len(self.model.feature_names):
            raise ConfigurationError(
                f"Expected (n, {len(self.model.feature_names)}) feature matrix, "
                f"got shape {matrix.shape}"
            )
        weights, biases = self.model.weight_matrix()
        return _sigmoid_array(matrix @ weights.T + biases)


DEFAULT_SCORER = Scorer(DEFAULT_MODEL)


def predict(features: Mapping[str, float]) -> PredictionTriple:
    """Score normalized features with the default model."""
    return DEFAULT_SCORER.predict(features)
