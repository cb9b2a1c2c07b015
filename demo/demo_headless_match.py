#!/usr/bin/env python3
"""
Demo: A Headless Match Against the AI

A scripted human pulls in a steady rhythm against the red opponent.
No renderer: the match is ticked at 60fps and recorded.

1. Blue pulls 12 frames, rests 8, repeat
2. Red decides on its own reaction timer
3. The first side to drag the midpoint past the threshold wins

Output: output/demo_match/summary.png
"""

import logging

from tugsim.analysis import pull_duty_cycle, rope_stretch
from tugsim.core import create_default_match
from tugsim.experiments import RhythmPolicy, run_headless_match, run_series
from tugsim.logging_config import setup_logging
from tugsim.viz import plot_match_summary, save_figure


def main():
    setup_logging(logging.INFO)

    print("=" * 60)
    print("  HEADLESS TUG OF ROPE")
    print("=" * 60)

    match = create_default_match(seed=2024, difficulty=0.5)
    policy = RhythmPolicy(on_ticks=12, off_ticks=8)

    print("\n1. Playing one match (difficulty 0.5)...")
    trace = run_headless_match(match, policy, dt=16.0, max_ticks=4000)
    winner = trace.winner.value.upper() if trace.winner else "nobody"
    print(f"   Winner: {winner} after {len(trace)} ticks")
    print(f"   Red pulled {100 * pull_duty_cycle(trace):.0f}% of the time")

    stretch = rope_stretch(match.rope)
    print(f"   Final mean segment length: {stretch.mean_length:.1f}")
    print(f"   Max stretch vs rest length: {100 * stretch.max_deviation:.0f}%")

    print("\n2. Saving summary figure...")
    fig = plot_match_summary(trace, match.rope, threshold=match.config.victory_threshold)
    save_figure(fig, "output/demo_match/summary.png")
    print("   Saved output/demo_match/summary.png")

    print("\n3. Best of 10 at each difficulty...")
    for difficulty in (0.2, 0.5, 0.86):
        series_match = create_default_match(seed=7, difficulty=difficulty)
        traces = run_series(series_match, policy, n_matches=10, max_ticks=4000)
        blue, red = series_match.score
        undecided = sum(t.winner is None for t in traces)
        print(f"   difficulty={difficulty:.2f}: blue {blue} - {red} red ({undecided} undecided)")


if __name__ == "__main__":
    main()
