"""
Derived quantities from rope state and match traces.

Nothing here feeds back into the simulation. One-way derivation only.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import curve_fit

from tugsim.core.match import Winner

if TYPE_CHECKING:
    from tugsim.core.rope import RopeSimulator
    from tugsim.analysis.trace import MatchTrace


@dataclass
class StretchStats:
    """How far the rope segments are from their rest length."""

    mean_length: float
    max_deviation: float  # max |length - rest| / rest
    mean_deviation: float  # mean |length - rest| / rest


@dataclass
class SettlingFit:
    """Fit of offset(t) = amplitude * exp(-t / tau) + offset."""

    amplitude: float
    tau: float
    offset: float
    rmse: float

    def predict(self, t: np.ndarray) -> np.ndarray:
        return _exp_decay(np.asarray(t, dtype=np.float64), self.amplitude, self.tau, self.offset)


def rope_stretch(rope: "RopeSimulator") -> StretchStats:
    """Segment length statistics relative to the configured rest length."""
    lengths = rope.segment_lengths()
    rest = rope.config.rest_length
    deviation = np.abs(lengths - rest) / rest
    return StretchStats(
        mean_length=float(lengths.mean()),
        max_deviation=float(deviation.max()),
        mean_deviation=float(deviation.mean()),
    )


def pull_duty_cycle(trace: "MatchTrace", side: Winner | str = Winner.RED) -> float:
    """
    Fraction of recorded ticks in which the given side pulled.

    Raises:
        ValueError: If side is not "blue" or "red"
    """
    flags = trace.red_pulling if Winner(side) is Winner.RED else trace.blue_pulling
    if not flags:
        return 0.0
    return float(np.mean(flags))


def _exp_decay(t, amplitude, tau, offset):
    return amplitude * np.exp(-t / tau) + offset


def fit_settling(offsets, dt: float = 1.0) -> SettlingFit:
    """
    Fit an exponential settling curve to a midpoint offset series.

    Args:
        offsets: Midpoint offsets, one per tick
        dt: Time between samples (ticks or ms; tau comes back in the same unit)

    Returns:
        SettlingFit with amplitude, time constant, asymptote and residual
    """
    y = np.asarray(offsets, dtype=np.float64)
    if y.size < 4:
        raise ValueError("Need at least 4 samples to fit a settling curve")
    t = np.arange(y.size, dtype=np.float64) * dt

    # Initial guess: start-to-end drop over a third of the window
    p0 = (y[0] - y[-1], max(t[-1] / 3.0, dt), y[-1])
    params, _ = curve_fit(
        _exp_decay,
        t,
        y,
        p0=p0,
        bounds=([-np.inf, 1e-9, -np.inf], [np.inf, np.inf, np.inf]),
        maxfev=10000,
    )
    amplitude, tau, offset = (float(p) for p in params)
    rmse = float(np.sqrt(np.mean((_exp_decay(t, *params) - y) ** 2)))
    return SettlingFit(amplitude=amplitude, tau=tau, offset=offset, rmse=rmse)
