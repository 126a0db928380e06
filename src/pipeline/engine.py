#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Control engine.

Runs a raw reading through the normalizer and scorer, and independently
through the explainer, and bundles the results.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from explainer.explainer import Explainer, ExplanationTriple, DEFAULT_EXPLAINER
from .features.normalizer import NormalizedFeatures, normalize
from .readings import SensorReading
from .scoring.scorer import PredictionTriple, Scorer
from .scoring.weights import ModelConfig, DEFAULT_MODEL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    """Everything derived from one reading."""
    reading: SensorReading
    features: NormalizedFeatures = field(hash=False)
    prediction: PredictionTriple
    explanation: ExplanationTriple


class ControlEngine:
    """Normalizer -> Scorer, plus Explainer, over the same raw reading."""

    def __init__(self, model: ModelConfig = DEFAULT_MODEL,
                 explainer: Optional[Explainer] = None):
        self.scorer = Scorer(model)
        self.explainer = explainer or DEFAULT_EXPLAINER
        logger.debug("ControlEngine initialized")

    def evaluate(self, reading: SensorReading) -> Recommendation:
        out_of_domain = reading.out_of_domain_fields()
        if out_of_domain:
            logger.warning(f"Reading outside documented domain: {', '.join(out_of_domain)}")

        features = normalize(reading)
        prediction = self.scorer.predict(features)
        explanation = self.explainer.explain(reading)

        logger.debug(f"Evaluated reading -> {prediction.as_percentages()}")
        return Recommendation(
            reading=reading,
            features=features,
            prediction=prediction,
            explanation=explanation,
        )

    def evaluate_many(self, readings: Iterable[SensorReading]) -> List[Recommendation]:
        return [self.evaluate(reading) for reading in readings]
