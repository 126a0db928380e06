#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 EVControl
"""
Report Formatter - human-readable output for control recommendations.

Converts a Recommendation into plain text:
- full: console report with inputs, predictions and explanation
- summary: one line per scenario
- markdown: tables for documentation
"""

import json
from typing import Iterable, List, Optional

from pipeline.scoring.weights import Channel

FORMAT_TYPES = ("full", "summary", "markdown")

RUN_HEADER = "=== EV Neural Network System ==="
RUN_FOOTER = "=== Model Execution Complete ==="


def format_recommendation(recommendation, format_type: str = "full",
                          index: Optional[int] = None) -> str:
    """
    Convert a recommendation to text.

    Args:
        recommendation: Recommendation from ControlEngine.evaluate()
        format_type: "full", "summary", or "markdown"
        index: Scenario number for the header, if any

    Returns:
        Formatted report string
    """
    if format_type == "summary":
        return _format_summary(recommendation, index)
    elif format_type == "markdown":
        return _format_markdown(recommendation, index)
    elif format_type == "full":
        return _format_full(recommendation, index)
    raise ValueError(f"Unknown format type: {format_type} (expected one of {FORMAT_TYPES})")


def format_run(recommendations: Iterable, format_type: str = "full") -> str:
    """Format a whole run of scenarios, numbered from 1."""
    sections = [RUN_HEADER, ""]
    for i, rec in enumerate(recommendations, 1):
        sections.append(format_recommendation(rec, format_type, index=i))
    sections.append("")
    sections.append(RUN_FOOTER)
    return "\n".join(sections)


def _format_full(rec, index: Optional[int]) -> str:
    """Full console report."""

    sections = []

    if index is not None:
        sections.append(f"\n--- Scenario {index} ---")

    sections.append("Input Features:")
    sections.append(json.dumps(rec.reading.to_dict(), indent=2))

    sections.append("\nPredicted Optimal Parameters:")
    for channel in Channel:
        sections.append(f"{channel.label}: {rec.prediction.format_percent(channel)}")

    sections.append("\nExplanation:")
    for line in rec.explanation.lines():
        sections.append(f"- {line}")

    sections.append("\n" + "-" * 50)

    return "\n".join(sections)


def _format_summary(rec, index: Optional[int]) -> str:
    """Concise one-line summary."""

    prefix = f"[{index}] " if index is not None else ""
    outputs = ", ".join(
        f"{channel.label} {rec.prediction.format_percent(channel)}" for channel in Channel
    )
    matched = len(rec.explanation.lines())
    return f"{prefix}{outputs} ({matched}/{len(Channel)} explained)"


def _format_markdown(rec, index: Optional[int]) -> str:
    """Markdown format for documentation/reports."""

    md: List[str] = []

    title = f"Scenario {index}" if index is not None else "Scenario"
    md.append(f"## {title}\n")

    md.append("| Feature | Value |")
    md.append("|---|---|")
    for key, value in rec.reading.to_dict().items():
        md.append(f"| {key} | {value:.2f} |")
    md.append("")

    md.append("| Output | Level |")
    md.append("|---|---|")
    for channel in Channel:
        md.append(f"| {channel.label} | {rec.prediction.format_percent(channel)} |")
    md.append("")

    lines = rec.explanation.lines()
    if lines:
        for line in lines:
            md.append(f"- {line}")
    else:
        md.append("_No explanation rule matched._")
    md.append("")

    return "\n".join(md)
