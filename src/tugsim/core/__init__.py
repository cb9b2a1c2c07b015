"""
Core simulation primitives.

This layer knows NOTHING about drawing, input devices or UI elements.
It only knows:
- The play field geometry and its safe region
- The rope: a Verlet particle chain with soft distance constraints
- The opponent: timed stochastic pull decisions
- The match: tick order, victory, score

The presentation layer reads particle positions and outcomes from a
MatchState and feeds it elapsed time plus the human pull flag.
"""

from tugsim.core.field import FieldConfig
from tugsim.core.rope import Particle, RopeConfig, RopeSimulator, create_rope
from tugsim.core.opponent import (
    OpponentAIState,
    OpponentConfig,
    OpponentController,
    RandomSource,
    create_opponent,
)
from tugsim.core.match import (
    MatchConfig,
    MatchRecord,
    MatchState,
    Puller,
    TickResult,
    Winner,
    create_default_match,
    place_pullers,
)

__all__ = [
    "FieldConfig",
    "Particle",
    "RopeConfig",
    "RopeSimulator",
    "create_rope",
    "OpponentAIState",
    "OpponentConfig",
    "OpponentController",
    "RandomSource",
    "create_opponent",
    "MatchConfig",
    "MatchRecord",
    "MatchState",
    "Puller",
    "TickResult",
    "Winner",
    "create_default_match",
    "place_pullers",
]
