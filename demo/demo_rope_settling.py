#!/usr/bin/env python3
"""
Demo: How Fast the Rope Settles

Blue pulls for a short burst, then both sides let go. The midpoint
relaxes back as the pullers walk home to their stations; an
exponential fit gives the settling time constant.

Output: output/demo_settling/settling.png
"""

import matplotlib.pyplot as plt
import numpy as np

from tugsim.analysis import MatchTrace, fit_settling
from tugsim.core import MatchState, OpponentController
from tugsim.viz import plot_midpoint_trace, plot_rope, save_figure


def main():
    print("=" * 60)
    print("  ROPE SETTLING")
    print("=" * 60)

    match = MatchState(opponent=OpponentController(enabled=False))
    dt = 16.0
    burst, release = 60, 600

    print(f"\n1. Blue pulls for {burst} ticks, then releases for {release}...")
    trace = MatchTrace()
    for i in range(burst + release):
        result = match.step(dt, i < burst)
        trace.record(match, result, dt)

    offsets = np.asarray(trace.midpoint_offset)
    print(f"   Peak offset: {offsets.min():.1f}")
    print(f"   Final offset: {offsets[-1]:.1f}")

    print("\n2. Fitting exponential settling after release...")
    fit = fit_settling(offsets[burst:], dt=dt)
    print(f"   tau = {fit.tau:.0f} ms, asymptote = {fit.offset:.1f}, rmse = {fit.rmse:.2f}")

    print("\n3. Plotting...")
    fig, (ax_rope, ax_trace) = plt.subplots(
        1, 2, figsize=(13, 6), gridspec_kw={"width_ratios": [1, 2.5]}
    )
    plot_rope(match.rope, threshold=match.config.victory_threshold,
              title="Rope after release", ax=ax_rope)
    plot_midpoint_trace(trace, threshold=match.config.victory_threshold, ax=ax_trace)

    t_fit = trace.elapsed[burst:] / 1000.0
    ax_trace.plot(t_fit, fit.predict(np.arange(release) * dt), "r--", label="Fit")
    ax_trace.legend(loc="upper right", fontsize="small")

    save_figure(fig, "output/demo_settling/settling.png")
    print("   Saved output/demo_settling/settling.png")


if __name__ == "__main__":
    main()
