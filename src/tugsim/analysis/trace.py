"""
MatchTrace: per-tick recording of a match for offline analysis.

The trace observes a MatchState after each step and stores scalar
series only (no particle arrays), so long runs stay cheap.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tugsim.core.match import MatchState, TickResult, Winner


@dataclass
class MatchTrace:
    """Recorded time series of one match."""

    dt: list[float] = field(default_factory=list)
    midpoint_offset: list[float] = field(default_factory=list)
    blue_pulling: list[bool] = field(default_factory=list)
    red_pulling: list[bool] = field(default_factory=list)
    stamina: list[float] = field(default_factory=list)
    winner: "Winner | None" = None
    winning_tick: int | None = None

    def record(self, match: "MatchState", result: "TickResult", dt: float) -> None:
        """Append one tick's observations."""
        self.dt.append(dt)
        self.midpoint_offset.append(result.midpoint_offset)
        self.blue_pulling.append(result.blue_pulling)
        self.red_pulling.append(result.red_pulling)
        self.stamina.append(match.opponent.state.stamina)
        if result.winner is not None and self.winner is None:
            self.winner = result.winner
            self.winning_tick = len(self.midpoint_offset) - 1

    def __len__(self) -> int:
        return len(self.midpoint_offset)

    @property
    def elapsed(self) -> np.ndarray:
        """Elapsed time at the end of each tick (ms)."""
        return np.cumsum(np.asarray(self.dt, dtype=np.float64))

    def as_arrays(self) -> dict[str, np.ndarray]:
        """Return every series as a numpy array."""
        return {
            "elapsed": self.elapsed,
            "midpoint_offset": np.asarray(self.midpoint_offset, dtype=np.float64),
            "blue_pulling": np.asarray(self.blue_pulling, dtype=bool),
            "red_pulling": np.asarray(self.red_pulling, dtype=bool),
            "stamina": np.asarray(self.stamina, dtype=np.float64),
        }
