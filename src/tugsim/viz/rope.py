"""
Offline figures of rope state and match traces.

This is for inspecting runs from scripts, not the game renderer.
Plots use screen orientation (y axis inverted) so blue is on top.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from matplotlib.patches import Rectangle

if TYPE_CHECKING:
    from tugsim.core.field import FieldConfig
    from tugsim.core.rope import RopeSimulator
    from tugsim.analysis.trace import MatchTrace

BLUE = "#009ee6"
RED = "#e03434"
ROPE = "#b58f6a"
MARKER = "#f2d43b"


def plot_rope(
    rope: "RopeSimulator",
    field: "FieldConfig | None" = None,
    threshold: float | None = None,
    title: str = "Rope",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (4, 7),
) -> tuple[Figure, Axes]:
    """
    Draw the rope particles inside the play field.

    Args:
        rope: Rope to draw
        field: Field geometry (defaults to the rope's own)
        threshold: If given, draw the two victory lines at centre ± threshold
        title: Plot title
        ax: Existing axes (creates new if None)

    Returns:
        (fig, ax) tuple
    """
    if field is None:
        field = rope.field

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    xmin, xmax, ymin, ymax = field.bounds
    ax.add_patch(
        Rectangle(
            (xmin, ymin), xmax - xmin, ymax - ymin,
            fill=False, linestyle="--", edgecolor="gray", linewidth=1,
        )
    )

    pos = rope.positions
    ax.plot(pos[:, 0], pos[:, 1], color=ROPE, linewidth=4, zorder=2)
    ax.scatter(pos[:, 0], pos[:, 1], color=ROPE, s=12, zorder=3)
    ax.scatter([pos[0, 0]], [pos[0, 1]], color=BLUE, s=80, zorder=4, label="Blue end")
    ax.scatter([pos[-1, 0]], [pos[-1, 1]], color=RED, s=80, zorder=4, label="Red end")

    mx, my = rope.midpoint
    ax.scatter([mx], [my], color=MARKER, marker="D", s=90, zorder=5, label="Midpoint")

    _, cy = field.center
    ax.axhline(cy, color="gray", linewidth=0.8)
    if threshold is not None:
        ax.axhline(cy - threshold, color=BLUE, linewidth=0.8, linestyle=":")
        ax.axhline(cy + threshold, color=RED, linewidth=0.8, linestyle=":")

    ax.set_xlim(0, field.width)
    ax.set_ylim(field.height, 0)  # Screen orientation
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize="small")

    return fig, ax


def plot_midpoint_trace(
    trace: "MatchTrace",
    threshold: float | None = None,
    title: str = "Midpoint Offset",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (9, 4),
) -> tuple[Figure, Axes]:
    """
    Plot midpoint offset over time, shading ticks where each side pulled.

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    data = trace.as_arrays()
    t = data["elapsed"] / 1000.0
    offset = data["midpoint_offset"]

    ax.plot(t, offset, color="black", linewidth=1.5, label="Offset")
    if len(t) > 0:
        lo, hi = (offset.min(), offset.max()) if threshold is None else (-threshold, threshold)
        ax.fill_between(t, lo, hi, where=data["blue_pulling"], color=BLUE, alpha=0.15,
                        step="pre", label="Blue pulling")
        ax.fill_between(t, lo, hi, where=data["red_pulling"], color=RED, alpha=0.15,
                        step="pre", label="Red pulling")

    if threshold is not None:
        ax.axhline(-threshold, color=BLUE, linestyle="--", linewidth=1)
        ax.axhline(threshold, color=RED, linestyle="--", linewidth=1)

    if trace.winning_tick is not None:
        ax.axvline(t[trace.winning_tick], color="gray", linestyle=":", linewidth=1)

    ax.invert_yaxis()  # Blue side up
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Offset from centre")
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize="small")

    return fig, ax


def plot_match_summary(
    trace: "MatchTrace",
    rope: "RopeSimulator",
    threshold: float | None = None,
    figsize: tuple[float, float] = (13, 6),
) -> Figure:
    """Final rope snapshot beside the midpoint trace and opponent stamina."""
    fig = plt.figure(figsize=figsize)
    grid = fig.add_gridspec(2, 2, width_ratios=[1, 2.5])

    ax_rope = fig.add_subplot(grid[:, 0])
    ax_trace = fig.add_subplot(grid[0, 1])
    ax_stamina = fig.add_subplot(grid[1, 1], sharex=ax_trace)

    winner = trace.winner.value.upper() if trace.winner is not None else "nobody"
    plot_rope(rope, threshold=threshold, title=f"Final rope ({winner} won)", ax=ax_rope)
    plot_midpoint_trace(trace, threshold=threshold, ax=ax_trace)

    data = trace.as_arrays()
    ax_stamina.plot(data["elapsed"] / 1000.0, data["stamina"], color=RED)
    ax_stamina.set_ylim(0, 1.05)
    ax_stamina.set_xlabel("Time (s)")
    ax_stamina.set_ylabel("Opponent stamina")

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
