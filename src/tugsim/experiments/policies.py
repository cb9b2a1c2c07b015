"""
Scripted stand-ins for the human player.

A policy is called once per tick and returns whether blue pulls.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from tugsim.core.match import MatchState


class HumanPolicy(Protocol):
    """Decides the human pull flag for a tick."""

    def __call__(self, tick_index: int, match: "MatchState") -> bool:
        ...


def always_pull(tick_index: int, match: "MatchState") -> bool:
    return True


def never_pull(tick_index: int, match: "MatchState") -> bool:
    return False


@dataclass
class RhythmPolicy:
    """Pull for on_ticks, release for off_ticks, repeat."""

    on_ticks: int = 10
    off_ticks: int = 5

    def __post_init__(self):
        if self.on_ticks < 0 or self.off_ticks < 0 or self.on_ticks + self.off_ticks == 0:
            raise ValueError("RhythmPolicy needs a positive period")

    def __call__(self, tick_index: int, match: "MatchState") -> bool:
        return tick_index % (self.on_ticks + self.off_ticks) < self.on_ticks
