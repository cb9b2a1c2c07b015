"""Smoke tests for offline figures."""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt

from tugsim.core.rope import create_rope
from tugsim.experiments import run_headless_match, always_pull
from tugsim.viz import plot_match_summary, plot_midpoint_trace, plot_rope, save_figure


def test_plot_rope_and_save(tmp_path):
    rope = create_rope()
    fig, ax = plot_rope(rope, threshold=120.0)
    assert ax.get_ylim()[0] > ax.get_ylim()[1]  # Screen orientation

    out = tmp_path / "figs" / "rope.png"
    save_figure(fig, out)
    assert out.exists()
    plt.close(fig)


def test_trace_plots(idle_match):
    trace = run_headless_match(idle_match, always_pull, max_ticks=2000)

    fig, _ = plot_midpoint_trace(trace, threshold=120.0)
    plt.close(fig)

    fig = plot_match_summary(trace, idle_match.rope, threshold=120.0)
    assert len(fig.axes) == 3
    plt.close(fig)
