# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""Structured logger with per-stage counters and final summary.

The build step collects expanded/rejected counts per stage so it can
print a CI-friendly summary at the end.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

_FMT = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger configured with a consistent format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


@dataclass
class StageCounter:
    """Tracks success/fail counts for a single build stage."""

    name: str
    ok: int = 0
    failed: int = 0


@dataclass
class BuildSummary:
    """Accumulates counters across all build stages."""

    stages: dict[str, StageCounter] = field(default_factory=dict)

    def counter(self, name: str) -> StageCounter:
        """Get or create a counter for a named stage."""
        if name not in self.stages:
            self.stages[name] = StageCounter(name=name)
        return self.stages[name]

    @property
    def failed(self) -> int:
        return sum(stage.failed for stage in self.stages.values())

    def report(self) -> str:
        """Format a human-readable summary block."""
        lines: list[str] = ["", "Build Summary", "=" * 40]
        for stage in self.stages.values():
            parts = [f"{stage.name}: {stage.ok} ok"]
            if stage.failed:
                parts.append(f"{stage.failed} failed")
            lines.append("  ".join(parts))
        lines.append("=" * 40)
        return "\n".join(lines)
