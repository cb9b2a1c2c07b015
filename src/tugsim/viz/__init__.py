"""
Visualization utilities.

- Rope snapshots inside the play field
- Midpoint offset traces with pull shading
- Match summaries
"""

from tugsim.viz.rope import (
    plot_rope,
    plot_midpoint_trace,
    plot_match_summary,
    save_figure,
)

__all__ = [
    "plot_rope",
    "plot_midpoint_trace",
    "plot_match_summary",
    "save_figure",
]
