#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Weight tables for the EV control model.

Each output channel has a fixed linear weight per normalized feature
plus a bias. The weights are hand-specified, not learned. They are
bundled into an immutable ModelConfig that is validated once against
the sensor catalog and then passed by reference to the scorer.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
from dataclasses import dataclass, field

import numpy as np

from ..errors import ConfigurationError
from ..features.feature_definitions import SENSOR_CATALOG, get_feature_by_key


class Channel(Enum):
    """Output channels of the model."""
    TORQUE = "torque"
    REGEN_BRAKING = "regenBraking"
    TRACTION_CONTROL = "tractionControl"

    @property
    def label(self) -> str:
        return _CHANNEL_LABELS[self]


_CHANNEL_LABELS = {
    Channel.TORQUE: "Torque",
    Channel.REGEN_BRAKING: "Regenerative Braking",
    Channel.TRACTION_CONTROL: "Traction Control",
}


@dataclass(frozen=True)
class WeightTable:
    """Linear weights for one output channel."""
    channel: Channel
    weights: Mapping[str, float] = field(hash=False)
    bias: float

    def __post_init__(self):
        # Freeze the mapping so the table cannot be altered after construction
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    @classmethod
    def from_dict(cls, channel: Channel, table: Mapping[str, float]) -> "WeightTable":
        """
        Build a table from a flat mapping with a ``bias`` entry.

        Feature keys may be python names or camelCase keys.
        """
        table = dict(table)
        if "bias" not in table:
            raise ConfigurationError(f"{channel.value} weights have no bias")
        bias = table.pop("bias")

        weights: Dict[str, float] = {}
        for key, weight in table.items():
            try:
                name = get_feature_by_key(key).name
            except KeyError:
                raise ConfigurationError(
                    f"{channel.value} weights reference unknown feature: {key}"
                ) from None
            weights[name] = float(weight)

        return cls(channel=channel, weights=weights, bias=float(bias))

    def as_vector(self) -> np.ndarray:
        """Weights in catalog order."""
        return np.array([self.weights[name] for name in SENSOR_CATALOG], dtype=float)


@dataclass(frozen=True)
class ModelConfig:
    """
    The three channel weight tables.

    Construction fails with ConfigurationError if any table's feature set
    differs from the sensor catalog.
    """
    torque: WeightTable
    regen_braking: WeightTable
    traction_control: WeightTable
    feature_names: Tuple[str, ...] = field(default_factory=lambda: tuple(SENSOR_CATALOG))

    def __post_init__(self):
        expected = set(self.feature_names)
        for channel, table in self.tables().items():
            if table.channel is not channel:
                raise ConfigurationError(
                    f"Table for {channel.value} is labelled {table.channel.value}"
                )
            keys = set(table.weights)
            if keys != expected:
                missing = sorted(expected - keys)
                extra = sorted(keys - expected)
                raise ConfigurationError(
                    f"{channel.value} weights do not match features "
                    f"(missing={missing}, unexpected={extra})"
                )

    def tables(self) -> Dict[Channel, WeightTable]:
        return {
            Channel.TORQUE: self.torque,
            Channel.REGEN_BRAKING: self.regen_braking,
            Channel.TRACTION_CONTROL: self.traction_control,
        }

    def table(self, channel: Channel) -> WeightTable:
        return self.tables()[channel]

    def weight_matrix(self) -> Tuple[np.ndarray, np.ndarray]:
        """(3, n_features) weight matrix and (3,) bias vector in channel order."""
        tables = list(self.tables().values())
        matrix = np.array(
            [[t.weights[name] for name in self.feature_names] for t in tables],
            dtype=float,
        )
        biases = np.array([t.bias for t in tables], dtype=float)
        return matrix, biases


TORQUE_WEIGHTS = WeightTable.from_dict(Channel.TORQUE, {
    "throttle": 0.7,
    "rpm": -0.2,
    "wheelSpeed": -0.1,
    "batterySoc": 0.3,
    "brakePressure": -0.5,
    "acceleration": 0.4,
    "temperature": -0.1,
    "humidity": -0.05,
    "roadGrade": 0.3,
    "vehicleWeight": -0.2,
    "bias": 0.2,
})

REGEN_BRAKING_WEIGHTS = WeightTable.from_dict(Channel.REGEN_BRAKING, {
    "throttle": -0.6,
    "rpm": 0.1,
    "wheelSpeed": 0.3,
    "batterySoc": -0.4,
    "brakePressure": 0.8,
    "acceleration": -0.5,
    "temperature": 0.05,
    "humidity": 0.0,
    "roadGrade": -0.4,
    "vehicleWeight": 0.2,
    "bias": 0.1,
})

TRACTION_CONTROL_WEIGHTS = WeightTable.from_dict(Channel.TRACTION_CONTROL, {
    "throttle": 0.3,
    "rpm": 0.2,
    "wheelSpeed": -0.3,
    "batterySoc": 0.0,
    "brakePressure": 0.2,
    "acceleration": 0.6,
    "temperature": 0.1,
    "humidity": 0.2,
    "roadGrade": 0.5,
    "vehicleWeight": 0.1,
    "bias": 0.3,
})

DEFAULT_MODEL = ModelConfig(
    torque=TORQUE_WEIGHTS,
    regen_braking=REGEN_BRAKING_WEIGHTS,
    traction_control=TRACTION_CONTROL_WEIGHTS,
)


def build_model(tables: Mapping[str, Mapping[str, float]],
                feature_names: Optional[Tuple[str, ...]] = None) -> ModelConfig:
    """
    Build a ModelConfig from flat per-channel mappings keyed by channel value.

    Example:
        build_model({"torque": {...}, "regenBraking": {...}, "tractionControl": {...}})
    """
    try:
        built = {
            channel: WeightTable.from_dict(channel, tables[channel.value])
            for channel in Channel
        }
    except KeyError as e:
        raise ConfigurationError(f"No weights for channel {e.args[0]}") from None

    kwargs = {}
    if feature_names is not None:
        kwargs["feature_names"] = tuple(feature_names)
    return ModelConfig(
        torque=built[Channel.TORQUE],
        regen_braking=built[Channel.REGEN_BRAKING],
        traction_control=built[Channel.TRACTION_CONTROL],
        **kwargs,
    )
