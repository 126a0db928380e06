#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
evcontrol - EV control model demo

Runs sensor scenarios through the control engine and prints the
predicted torque, regenerative braking and traction control levels with
their explanations:
  1. Random scenarios drawn from the documented sensor domains (default)
  2. A single reading passed as JSON with --reading
"""

import sys
import json
import argparse
import logging
from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pipeline.config import RunConfig, OUTPUT_FORMATS
from pipeline.engine import ControlEngine, Recommendation
from pipeline.errors import EVControlError, InvalidReadingError
from pipeline.features.feature_definitions import SENSOR_CATALOG
from pipeline.readings import SensorReading
from pipeline.scenarios import ScenarioGenerator
from pipeline.scoring.weights import Channel
from explainer.report import format_run, RUN_HEADER, RUN_FOOTER

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - [%(name)s] - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evcontrol",
        description="Predict torque, regenerative braking and traction control from EV sensor data",
    )
    parser.add_argument('-n', '--scenarios', type=int, default=None,
                        help='Number of random scenarios (default: 5)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for reproducible scenarios')
    parser.add_argument('--format', dest='output_format', choices=OUTPUT_FORMATS, default=None,
                        help='Report format (default: full)')
    parser.add_argument('--reading', default=None,
                        help='Evaluate one reading given as a JSON object instead of random scenarios')
    parser.add_argument('--plain', action='store_true',
                        help='Plain text output without rich formatting')
    parser.add_argument('--log-level', default=None,
                        help='Logging level (default: INFO)')
    return parser


def parse_reading(text: str) -> SensorReading:
    """Parse a --reading JSON object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidReadingError(f"--reading is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidReadingError("--reading must be a JSON object")
    return SensorReading.from_dict(data)


def render_rich(recommendations: Sequence[Recommendation], console: Console):
    """Render a run as rich panels."""
    console.print(f"[bold green]{RUN_HEADER}[/bold green]")

    for i, rec in enumerate(recommendations, 1):
        inputs = Table(title="Input Features", show_header=True, header_style="bold cyan")
        inputs.add_column("Feature")
        inputs.add_column("Value", justify="right")
        inputs.add_column("Unit")
        inputs.add_column("Description", style="dim")
        for name, feature in SENSOR_CATALOG.items():
            inputs.add_row(feature.key, f"{getattr(rec.reading, name):.2f}", feature.unit,
                           feature.description)

        outputs = Table(title="Predicted Optimal Parameters", show_header=True,
                        header_style="bold magenta")
        outputs.add_column("Output")
        outputs.add_column("Level", justify="right")
        for channel in Channel:
            outputs.add_row(channel.label, rec.prediction.format_percent(channel))

        console.print(Panel(inputs, title=f"🚗 Scenario {i}", border_style="blue"))
        console.print(outputs)

        lines = rec.explanation.lines()
        if lines:
            console.print("[bold]Explanation:[/bold]")
            for line in lines:
                console.print(f"  - {line}")
        else:
            console.print("[dim]No explanation rule matched.[/dim]")
        console.print()

    console.print(f"[bold green]{RUN_FOOTER}[/bold green]")


def run(config: RunConfig, reading: Optional[SensorReading] = None,
        console: Optional[Console] = None) -> List[Recommendation]:
    """Evaluate the configured scenarios and print the report."""
    engine = ControlEngine()

    if reading is not None:
        readings = [reading]
    else:
        generator = ScenarioGenerator(seed=config.seed)
        readings = generator.generate_many(config.scenarios)
    logger.info(f"Evaluating {len(readings)} scenario(s)")

    recommendations = engine.evaluate_many(readings)

    if config.plain or config.output_format != "full":
        print(format_run(recommendations, config.output_format))
    else:
        render_rich(recommendations, console or Console())

    return recommendations


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = RunConfig.from_env().override(
            scenarios=args.scenarios,
            seed=args.seed,
            output_format=args.output_format,
            log_level=args.log_level,
            plain=args.plain or None,
        )
    except EVControlError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        return 2

    logging.basicConfig(level=config.level, format=LOG_FORMAT)

    reading = None
    if args.reading is not None:
        try:
            reading = parse_reading(args.reading)
        except InvalidReadingError as e:
            logger.error(str(e))
            return 2

    run(config, reading)
    return 0


if __name__ == '__main__':
    sys.exit(main())
