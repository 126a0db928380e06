#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Explanation rule chains.

Each output channel has an ordered chain of (predicate, message) rules
evaluated against the raw sensor reading. The first rule whose predicate
holds supplies the channel's explanation; later rules are not evaluated.

Thresholds are in raw sensor units, not normalized values.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from pipeline.readings import SensorReading
from pipeline.scoring.weights import Channel

Predicate = Callable[[SensorReading], bool]


@dataclass(frozen=True)
class ExplanationRule:
    """A single explanation: when ``predicate`` holds, report ``message``."""
    name: str
    predicate: Predicate
    message: str
    condition: str = ""  # Human-readable form of the predicate

    def matches(self, reading: SensorReading) -> bool:
        return bool(self.predicate(reading))


@dataclass(frozen=True)
class RuleChain:
    """Ordered rules for one channel, first match wins."""
    channel: Channel
    rules: Tuple[ExplanationRule, ...]

    def evaluate(self, reading: SensorReading) -> Optional[ExplanationRule]:
        for rule in self.rules:
            if rule.matches(reading):
                return rule
        return None


# ========== Torque ==========
TORQUE_RULES = RuleChain(Channel.TORQUE, (
    ExplanationRule(
        name="torque_high_throttle",
        predicate=lambda r: r.throttle > 70 and r.battery_soc > 50,
        message="High torque due to high throttle input and sufficient battery charge",
        condition="throttle > 70 and batterySoc > 50",
    ),
    ExplanationRule(
        name="torque_braking",
        predicate=lambda r: r.brake_pressure > 50,
        message="Low torque due to brake application",
        condition="brakePressure > 50",
    ),
    ExplanationRule(
        name="torque_uphill",
        predicate=lambda r: r.road_grade > 5,
        message="Increased torque to handle uphill grade",
        condition="roadGrade > 5",
    ),
))

# ========== Regenerative Braking ==========
REGEN_BRAKING_RULES = RuleChain(Channel.REGEN_BRAKING, (
    ExplanationRule(
        name="regen_charge_room",
        predicate=lambda r: r.brake_pressure > 60 and r.battery_soc < 80,
        message="High regenerative braking due to brake application and room for battery charging",
        condition="brakePressure > 60 and batterySoc < 80",
    ),
    ExplanationRule(
        name="regen_decelerating",
        predicate=lambda r: r.acceleration < 0 and r.throttle < 20,
        message="Moderate regenerative braking during deceleration",
        condition="acceleration < 0 and throttle < 20",
    ),
    ExplanationRule(
        name="regen_downhill",
        predicate=lambda r: r.road_grade < -5,
        message="Increased regenerative braking on downhill to recover energy",
        condition="roadGrade < -5",
    ),
))

# ========== Traction Control ==========
TRACTION_CONTROL_RULES = RuleChain(Channel.TRACTION_CONTROL, (
    ExplanationRule(
        name="traction_slip_risk",
        predicate=lambda r: r.acceleration > 3 or (r.throttle > 80 and r.wheel_speed < 20),
        message="High traction control to prevent wheel slip during rapid acceleration",
        condition="acceleration > 3 or (throttle > 80 and wheelSpeed < 20)",
    ),
    ExplanationRule(
        name="traction_steep_grade",
        predicate=lambda r: r.road_grade > 8 or r.road_grade < -8,
        message="Increased traction control on steep grade for stability",
        condition="roadGrade > 8 or roadGrade < -8",
    ),
    ExplanationRule(
        name="traction_slippery",
        predicate=lambda r: r.humidity > 70,
        message="Moderate traction control due to potentially slippery conditions",
        condition="humidity > 70",
    ),
))

DEFAULT_CHAINS: Tuple[RuleChain, ...] = (
    TORQUE_RULES,
    REGEN_BRAKING_RULES,
    TRACTION_CONTROL_RULES,
)
