#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Run configuration for the evcontrol demo.

Settings come from the environment and are overridden by command-line
flags:

    EVCONTROL_SCENARIOS   number of random scenarios (default 5)
    EVCONTROL_SEED        RNG seed (default: unseeded)
    EVCONTROL_FORMAT      full | summary | markdown (default full)
    EVCONTROL_LOG_LEVEL   logging level name (default INFO)
"""

import os
import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigurationError

OUTPUT_FORMATS = ("full", "summary", "markdown")


@dataclass(frozen=True)
class RunConfig:
    """Settings for one demo run."""
    scenarios: int = 5
    seed: Optional[int] = None
    output_format: str = "full"
    log_level: str = "INFO"
    plain: bool = False

    def __post_init__(self):
        if self.scenarios < 0:
            raise ConfigurationError(f"scenarios must be non-negative, got {self.scenarios}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unknown output format: {self.output_format} (expected one of {OUTPUT_FORMATS})"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunConfig":
        env = os.environ if environ is None else environ

        try:
            scenarios = int(env.get('EVCONTROL_SCENARIOS', cls.scenarios))
        except ValueError:
            raise ConfigurationError(
                f"EVCONTROL_SCENARIOS must be an integer, got {env.get('EVCONTROL_SCENARIOS')!r}"
            ) from None

        seed = env.get('EVCONTROL_SEED')
        if seed is not None:
            try:
                seed = int(seed)
            except ValueError:
                raise ConfigurationError(
                    f"EVCONTROL_SEED must be an integer, got {seed!r}"
                ) from None

        return cls(
            scenarios=scenarios,
            seed=seed,
            output_format=env.get('EVCONTROL_FORMAT', cls.output_format),
            log_level=env.get('EVCONTROL_LOG_LEVEL', cls.log_level),
        )

    def override(self, **changes) -> "RunConfig":
        """Copy with the given settings replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
