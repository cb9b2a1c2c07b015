"""
PlayField: the rectangular arena the rope lives in.

The field stores ONLY geometry:
- Width and height of the play area
- The clamp region (safe rectangle inset from the edges)
- Where the rope is laid out on reset
- Where the two pullers stand

Coordinates follow screen convention: y grows downward, so the blue
puller stands at the top (small y) and the red puller at the bottom.
"""

from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class FieldConfig:
    """Configuration for the play field."""

    width: float = 480.0  # Field width
    height: float = 800.0  # Field height
    clamp_inset_x: float = 40.0  # Particles never closer than this to left/right edges
    clamp_inset_y: float = 60.0  # Particles never closer than this to top/bottom edges
    rope_margin: float = 80.0  # Rope ends sit this far from top/bottom on reset
    puller_offset: float = 52.0  # Puller centre distance from top/bottom edge
    puller_radius: float = 36.0  # Visual radius of a puller

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Field dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.clamp_inset_x < 0 or self.clamp_inset_y < 0:
            raise ValueError("Clamp insets must be non-negative")
        if 2 * self.clamp_inset_x > self.width or 2 * self.clamp_inset_y > self.height:
            raise ValueError("Clamp insets leave no room inside the field")
        if self.rope_margin < 0:
            raise ValueError(f"rope_margin must be non-negative, got {self.rope_margin}")
        if 2 * self.rope_margin >= self.height:
            raise ValueError("Rope margin leaves no room for the rope")
        if self.puller_radius <= 0:
            raise ValueError(f"puller_radius must be positive, got {self.puller_radius}")
        if self.puller_offset < 0:
            raise ValueError("puller_offset must be non-negative")

    @property
    def center(self) -> tuple[float, float]:
        """Field centre (x, y)."""
        return self.width / 2, self.height / 2

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Safe region as (xmin, xmax, ymin, ymax)."""
        return (
            self.clamp_inset_x,
            self.width - self.clamp_inset_x,
            self.clamp_inset_y,
            self.height - self.clamp_inset_y,
        )

    @property
    def rope_span(self) -> tuple[float, float]:
        """Top and bottom y of the rope when laid out straight."""
        return self.rope_margin, self.height - self.rope_margin

    def resize(self, width: float, height: float) -> "FieldConfig":
        """Return a copy of this config with new dimensions."""
        return replace(self, width=width, height=height)

    def contains(self, x: float, y: float) -> bool:
        """Whether (x, y) lies inside the safe region (inclusive)."""
        xmin, xmax, ymin, ymax = self.bounds
        return xmin <= x <= xmax and ymin <= y <= ymax
