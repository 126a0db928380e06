#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Explainer - natural language rationale for control recommendations.

Runs one rule chain per channel over the raw reading. The explainer does
not look at the scorer's output, so its narrative can disagree with the
numeric prediction.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from pipeline.errors import ConfigurationError
from pipeline.readings import SensorReading
from pipeline.scoring.weights import Channel
from .rules import RuleChain, DEFAULT_CHAINS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplanationTriple:
    """One optional sentence per channel (None = no rule matched)."""
    torque: Optional[str] = None
    regen_braking: Optional[str] = None
    traction_control: Optional[str] = None

    def get(self, channel: Channel) -> Optional[str]:
        return {
            Channel.TORQUE: self.torque,
            Channel.REGEN_BRAKING: self.regen_braking,
            Channel.TRACTION_CONTROL: self.traction_control,
        }[channel]

    def lines(self) -> List[str]:
        """Matched sentences in channel order."""
        return [text for text in (self.get(c) for c in Channel) if text]

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {channel.value: self.get(channel) for channel in Channel}


class Explainer:
    """
    Evaluates the explanation rule chains.

    Exactly one chain per channel is required.
    """

    def __init__(self, chains: Iterable[RuleChain] = DEFAULT_CHAINS):
        by_channel: Dict[Channel, RuleChain] = {}
        for chain in chains:
            if chain.channel in by_channel:
                raise ConfigurationError(f"Duplicate rule chain for {chain.channel.value}")
            by_channel[chain.channel] = chain

        missing = [c.value for c in Channel if c not in by_channel]
        if missing:
            raise ConfigurationError(f"No rule chain for: {', '.join(missing)}")

        self.chains = by_channel

    def matched_rules(self, reading: SensorReading) -> Dict[Channel, Optional[str]]:
        """Name of the matched rule per channel, or None."""
        matched = {}
        for channel, chain in self.chains.items():
            rule = chain.evaluate(reading)
            matched[channel] = rule.name if rule else None
        return matched

    def explain(self, reading: SensorReading) -> ExplanationTriple:
        messages = {}
        for channel, chain in self.chains.items():
            rule = chain.evaluate(reading)
            messages[channel] = rule.message if rule else None
            if rule:
                logger.debug(f"{channel.value}: matched {rule.name} ({rule.condition})")

        return ExplanationTriple(
            torque=messages[Channel.TORQUE],
            regen_braking=messages[Channel.REGEN_BRAKING],
            traction_control=messages[Channel.TRACTION_CONTROL],
        )


DEFAULT_EXPLAINER = Explainer(DEFAULT_CHAINS)


def explain(reading: SensorReading) -> ExplanationTriple:
    """Explain a raw reading with the default rule chains."""
    return DEFAULT_EXPLAINER.explain(reading)
