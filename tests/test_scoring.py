#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Tests for the weight tables and the sigmoid scorer.
"""

import sys
import math
import random
import unittest
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from pipeline.errors import ConfigurationError
from pipeline.features import normalize, normalize_batch
from pipeline.scoring import (
    Channel, Scorer, PredictionTriple, WeightTable, ModelConfig, DEFAULT_MODEL,
    TORQUE_WEIGHTS, REGEN_BRAKING_WEIGHTS, TRACTION_CONTROL_WEIGHTS,
    build_model, sigmoid, to_fixed, predict
)
from pipeline.scenarios import ScenarioGenerator
from generate_test_data import reference_reading, make_reading

FLAT_WEIGHTS = {
    "torque": {
        "throttle": 0.7, "rpm": -0.2, "wheelSpeed": -0.1, "batterySoc": 0.3,
        "brakePressure": -0.5, "acceleration": 0.4, "temperature": -0.1,
        "humidity": -0.05, "roadGrade": 0.3, "vehicleWeight": -0.2, "bias": 0.2,
    },
    "regenBraking": {
        "throttle": -0.6, "rpm": 0.1, "wheelSpeed": 0.3, "batterySoc": -0.4,
        "brakePressure": 0.8, "acceleration": -0.5, "temperature": 0.05,
        "humidity": 0.0, "roadGrade": -0.4, "vehicleWeight": 0.2, "bias": 0.1,
    },
    "tractionControl": {
        "throttle": 0.3, "rpm": 0.2, "wheelSpeed": -0.3, "batterySoc": 0.0,
        "brakePressure": 0.2, "acceleration": 0.6, "temperature": 0.1,
        "humidity": 0.2, "roadGrade": 0.5, "vehicleWeight": 0.1, "bias": 0.3,
    },
}


class TestSigmoid(unittest.TestCase):
    """Test the logistic activation."""

    def test_zero_is_half(self):
        self.assertEqual(sigmoid(0.0), 0.5)

    def test_open_interval(self):
        for x in (-30.0, -5.0, -0.1, 0.1, 5.0, 30.0):
            y = sigmoid(x)
            self.assertGreater(y, 0.0)
            self.assertLess(y, 1.0)

    def test_monotonic(self):
        xs = [x / 4.0 for x in range(-40, 41)]
        ys = [sigmoid(x) for x in xs]
        for a, b in zip(ys, ys[1:]):
            self.assertLess(a, b)

    def test_matches_logistic_formula(self):
        for x in (-3.0, -1.2545, 0.7, 2.5):
            self.assertAlmostEqual(sigmoid(x), 1 / (1 + math.exp(-x)), places=12)

    def test_symmetry(self):
        for x in (0.3, 1.7, 4.2):
            self.assertAlmostEqual(sigmoid(-x), 1 - sigmoid(x), places=12)

    def test_large_magnitude_does_not_overflow(self):
        self.assertEqual(sigmoid(-1000.0), 0.0)
        self.assertEqual(sigmoid(1000.0), 1.0)


class TestWeightTables(unittest.TestCase):
    """Test the constant weight tables."""

    def test_exact_weights(self):
        tables = {
            "torque": TORQUE_WEIGHTS,
            "regenBraking": REGEN_BRAKING_WEIGHTS,
            "tractionControl": TRACTION_CONTROL_WEIGHTS,
        }
        for channel, table in tables.items():
            expected = FLAT_WEIGHTS[channel]
            self.assertEqual(table.bias, expected["bias"], channel)
            rebuilt = WeightTable.from_dict(table.channel, expected)
            self.assertEqual(dict(table.weights), dict(rebuilt.weights), channel)

    def test_spot_check_weights(self):
        self.assertEqual(TORQUE_WEIGHTS.weights["brake_pressure"], -0.5)
        self.assertEqual(REGEN_BRAKING_WEIGHTS.weights["humidity"], 0.0)
        self.assertEqual(TRACTION_CONTROL_WEIGHTS.weights["acceleration"], 0.6)

    def test_default_model_tables(self):
        self.assertIs(DEFAULT_MODEL.table(Channel.TORQUE), TORQUE_WEIGHTS)
        self.assertIs(DEFAULT_MODEL.table(Channel.REGEN_BRAKING), REGEN_BRAKING_WEIGHTS)
        self.assertIs(DEFAULT_MODEL.table(Channel.TRACTION_CONTROL), TRACTION_CONTROL_WEIGHTS)

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            TORQUE_WEIGHTS.weights["throttle"] = 1.0
        with self.assertRaises(AttributeError):
            TORQUE_WEIGHTS.bias = 0.0

    def test_build_model_matches_default(self):
        model = build_model(FLAT_WEIGHTS)
        self.assertEqual(model, DEFAULT_MODEL)

    def test_tables_and_model_hashable(self):
        model = build_model(FLAT_WEIGHTS)
        self.assertEqual(hash(model), hash(DEFAULT_MODEL))
        self.assertEqual(hash(model.torque), hash(TORQUE_WEIGHTS))
        self.assertEqual(len({TORQUE_WEIGHTS, model.torque, REGEN_BRAKING_WEIGHTS}), 2)

    def test_weight_matrix(self):
        matrix, biases = DEFAULT_MODEL.weight_matrix()
        self.assertEqual(matrix.shape, (3, 10))
        np.testing.assert_array_equal(biases, [0.2, 0.1, 0.3])
        np.testing.assert_array_equal(matrix[0], TORQUE_WEIGHTS.as_vector())


class TestModelValidation(unittest.TestCase):
    """Key-set mismatches are rejected when the model is built."""

    def test_missing_feature_weight(self):
        tables = {k: dict(v) for k, v in FLAT_WEIGHTS.items()}
        del tables["regenBraking"]["humidity"]
        with self.assertRaises(ConfigurationError) as ctx:
            build_model(tables)
        self.assertIn("humidity", str(ctx.exception))

    def test_unknown_feature_weight(self):
        tables = {k: dict(v) for k, v in FLAT_WEIGHTS.items()}
        tables["torque"]["tyrePressure"] = 0.1
        with self.assertRaises(ConfigurationError):
            build_model(tables)

    def test_missing_bias(self):
        tables = {k: dict(v) for k, v in FLAT_WEIGHTS.items()}
        del tables["tractionControl"]["bias"]
        with self.assertRaises(ConfigurationError):
            build_model(tables)

    def test_missing_channel(self):
        tables = {k: dict(v) for k, v in FLAT_WEIGHTS.items()}
        del tables["regenBraking"]
        with self.assertRaises(ConfigurationError):
            build_model(tables)

    def test_mislabelled_table(self):
        with self.assertRaises(ConfigurationError):
            ModelConfig(
                torque=REGEN_BRAKING_WEIGHTS,
                regen_braking=REGEN_BRAKING_WEIGHTS,
                traction_control=TRACTION_CONTROL_WEIGHTS,
            )

    def test_feature_names_mismatch(self):
        with self.assertRaises(ConfigurationError):
            build_model(FLAT_WEIGHTS, feature_names=("throttle", "rpm"))


class TestScorer(unittest.TestCase):
    """Test weighted sums and predictions."""

    def setUp(self):
        self.scorer = Scorer()

    def test_reference_weighted_sums(self):
        features = normalize(reference_reading())
        sums = self.scorer.weighted_sums(features)

        # Independent reference computation
        for channel, table in FLAT_WEIGHTS.items():
            expected = table["bias"]
            expected += 0.9 * table["throttle"]
            expected += 0.6 * table["rpm"]
            expected += (10 / 120) * table["wheelSpeed"]
            expected += 0.625 * table["batterySoc"]
            expected += 0.0 * table["brakePressure"]
            expected += (6 / 7) * table["acceleration"]
            expected += 0.375 * table["temperature"]
            expected += 0.2 * table["humidity"]
            expected += 0.5 * table["roadGrade"]
            expected += 0.4 * table["vehicleWeight"]
            self.assertAlmostEqual(sums[Channel(channel)], expected, places=9, msg=channel)

        self.assertAlmostEqual(sums[Channel.TORQUE], 1.2545238095, places=6)

    def test_reference_prediction(self):
        prediction = self.scorer.predict(normalize(reference_reading()))
        self.assertAlmostEqual(prediction.torque, 1 / (1 + math.exp(-1.2545238095)), places=6)
        self.assertAlmostEqual(prediction.torque, 0.77808, places=4)

    def test_outputs_in_open_interval(self):
        generator = ScenarioGenerator(seed=7)
        for reading in generator.generate_many(50):
            prediction = self.scorer.predict(normalize(reading))
            for channel in Channel:
                value = prediction.get(channel)
                self.assertGreater(value, 0.0)
                self.assertLess(value, 1.0)

    def test_order_invariance(self):
        features = dict(normalize(reference_reading()))
        expected = self.scorer.weighted_sums(features)

        rng = random.Random(3)
        for _ in range(10):
            items = list(features.items())
            rng.shuffle(items)
            shuffled = dict(items)
            sums = self.scorer.weighted_sums(shuffled)
            for channel in Channel:
                self.assertAlmostEqual(sums[channel], expected[channel], places=12)

            for channel in Channel:
                table = DEFAULT_MODEL.table(channel)
                total = table.bias
                for name, value in items:
                    total += value * table.weights[name]
                self.assertAlmostEqual(total, expected[channel], places=12)

    def test_contributions_sum_to_weighted_sum(self):
        features = normalize(reference_reading())
        sums = self.scorer.weighted_sums(features)
        for channel in Channel:
            terms = self.scorer.contributions(features, channel)
            self.assertEqual(len(terms), 10)
            total = DEFAULT_MODEL.table(channel).bias + sum(terms.values())
            self.assertAlmostEqual(total, sums[channel], places=12)
        torque_terms = self.scorer.contributions(features, Channel.TORQUE)
        self.assertAlmostEqual(torque_terms["throttle"], 0.63)

    def test_feature_mismatch_rejected(self):
        features = dict(normalize(reference_reading()))
        del features["humidity"]
        with self.assertRaises(ConfigurationError):
            self.scorer.predict(features)

        features = dict(normalize(reference_reading()), tyre_pressure=0.5)
        with self.assertRaises(ConfigurationError):
            self.scorer.predict(features)

    def test_idempotent(self):
        features = normalize(reference_reading())
        self.assertEqual(self.scorer.predict(features), self.scorer.predict(features))

    def test_module_predict_uses_default_model(self):
        features = normalize(make_reading(brake_pressure=90))
        self.assertEqual(predict(features), Scorer(DEFAULT_MODEL).predict(features))

    def test_batch_matches_single(self):
        readings = ScenarioGenerator(seed=11).generate_many(20)
        batch = self.scorer.predict_batch(normalize_batch(readings))
        self.assertEqual(batch.shape, (20, 3))
        for row, reading in zip(batch, readings):
            single = self.scorer.predict(normalize(reading))
            np.testing.assert_allclose(
                row, [single.torque, single.regen_braking, single.traction_control],
                rtol=1e-12,
            )

    def test_batch_shape_checked(self):
        with self.assertRaises(ConfigurationError):
            self.scorer.predict_batch(np.zeros((4, 9)))


class TestPredictionTriple(unittest.TestCase):
    """Test the output record."""

    def test_percentages_two_decimals(self):
        prediction = PredictionTriple(torque=0.778081, regen_braking=0.5, traction_control=0.123456)
        self.assertEqual(prediction.as_percentages(), {
            "torque": 77.81,
            "regenBraking": 50.0,
            "tractionControl": 12.35,
        })

    def test_format_percent(self):
        prediction = PredictionTriple(torque=0.778081, regen_braking=0.5, traction_control=0.05)
        self.assertEqual(prediction.format_percent(Channel.TORQUE), "77.81%")
        self.assertEqual(prediction.format_percent(Channel.REGEN_BRAKING), "50.00%")
        self.assertEqual(prediction.format_percent(Channel.TRACTION_CONTROL), "5.00%")

    def test_exact_ties_round_up(self):
        # 0.125 and 12.125 are exact binary values; 1.005 is stored below the tie
        self.assertEqual(to_fixed(0.125), "0.13")
        self.assertEqual(to_fixed(12.125), "12.13")
        self.assertEqual(to_fixed(1.005), "1.00")
        self.assertEqual(to_fixed(50.0), "50.00")
        self.assertEqual(round(12.125, 2), 12.12)

    def test_as_dict_uses_channel_keys(self):
        prediction = PredictionTriple(torque=0.1, regen_braking=0.2, traction_control=0.3)
        self.assertEqual(list(prediction.as_dict()), ["torque", "regenBraking", "tractionControl"])


if __name__ == '__main__':
    unittest.main()
