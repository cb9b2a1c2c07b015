"""
Analysis layer: derived quantities for plots and tuning.

IMPORTANT: This is NOT seen by the simulation. One-way derivation only.

- MatchTrace: per-tick series recorded from a MatchState
- rope_stretch: segment length deviation from rest length
- pull_duty_cycle: how often a side pulled
- fit_settling: exponential settling fit of the midpoint offset
"""

from tugsim.analysis.trace import MatchTrace
from tugsim.analysis.metrics import (
    SettlingFit,
    StretchStats,
    fit_settling,
    pull_duty_cycle,
    rope_stretch,
)

__all__ = [
    "MatchTrace",
    "SettlingFit",
    "StretchStats",
    "fit_settling",
    "pull_duty_cycle",
    "rope_stretch",
]
