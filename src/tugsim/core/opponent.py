"""
OpponentController: the red side's pull decisions.

The opponent does not decide every tick. It commits to PULLING or
RESTING for a randomised dwell time (its reaction timer) and only
re-decides when that timer runs out:

    desire = -centre_bias * sensitivity + difficulty * weight + noise

- centre_bias: midpoint offset from field centre (negative = toward blue)
- noise: fresh uniform sample, symmetric around 0

High desire with enough stamina starts a pull; anything else rests.
Pulling costs stamina, resting recovers it. At low difficulty this gives
a slow, exploitable rhythm; at high difficulty near-continuous pressure.

All durations are in milliseconds.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Protocol, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tugsim.core.rope import RopeSimulator

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1). numpy Generators qualify."""

    def random(self) -> float:
        ...


@dataclass
class OpponentConfig:
    """Tuning constants for the opponent."""

    difficulty: float = 0.86  # 0.0 (easy) .. 1.0 (very hard)

    # Desire score
    sensitivity: float = 0.012  # Weight of rope displacement
    difficulty_weight: float = 0.6  # Weight of difficulty
    noise_width: float = 0.3  # Noise is uniform in [-width/2, width/2)
    desire_threshold: float = 0.4  # Desire above this starts a pull
    stamina_gate: float = 0.15  # Stamina must exceed this to start a pull

    # Dwell times (ms)
    pull_base: float = 180.0
    pull_span: float = 220.0  # Random part, scaled by (1 + difficulty)
    rest_base: float = 120.0
    rest_span: float = 400.0  # Random part, scaled by (1 - difficulty + rest_slack)
    rest_slack: float = 0.2

    # Stamina economy
    stamina_cost: float = 0.06  # Per pull, scaled by (1 + difficulty)
    stamina_floor: float = 0.25  # Pull cost never takes stamina below this
    stamina_recovery: float = 0.03  # Per rest, scaled by (1 - difficulty + recovery_slack)
    recovery_slack: float = 0.3
    stamina_ceiling: float = 1.0

    def __post_init__(self):
        if not 0.0 <= self.difficulty <= 1.0:
            raise ValueError(f"difficulty must be in [0, 1], got {self.difficulty}")
        if self.noise_width < 0:
            raise ValueError("noise_width must be non-negative")
        if not 0.0 <= self.stamina_floor <= self.stamina_ceiling <= 1.0:
            raise ValueError("Need 0 <= stamina_floor <= stamina_ceiling <= 1")
        if not 0.0 <= self.stamina_gate <= 1.0:
            raise ValueError(f"stamina_gate must be in [0, 1], got {self.stamina_gate}")
        # A negative dwell would leave the timer expired and re-decide every tick
        for name in (
            "pull_base", "pull_span", "rest_base", "rest_span",
            "stamina_cost", "stamina_recovery",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


@dataclass
class OpponentAIState:
    """Mutable per-match state of the opponent."""

    difficulty: float
    reaction_timer: float = 0.0  # ms until next decision
    pulling: bool = False
    stamina: float = 1.0
    pull_duration: float = 0.0  # Last chosen pull dwell (ms)
    rest_duration: float = 0.0  # Last chosen rest dwell (ms)
    decisions: int = 0


class OpponentController:
    """
    Reaction-timer-driven stochastic pull decisions.

    Randomness comes only from the injected RandomSource, so a seeded
    generator makes every decision reproducible.
    """

    def __init__(
        self,
        config: OpponentConfig | None = None,
        rng: RandomSource | None = None,
        enabled: bool = True,
    ):
        self.config = config if config is not None else OpponentConfig()
        self.rng: RandomSource = rng if rng is not None else np.random.default_rng()
        self.enabled = enabled  # When False, never pulls and draws no randomness
        self.state = OpponentAIState(difficulty=self.config.difficulty)

    @property
    def pulling(self) -> bool:
        return self.state.pulling

    def reset(self) -> None:
        """Restore the start-of-match state. Difficulty is kept."""
        self.state = OpponentAIState(difficulty=self.state.difficulty)

    def set_difficulty(self, difficulty: float) -> None:
        if not 0.0 <= difficulty <= 1.0:
            raise ValueError(f"difficulty must be in [0, 1], got {difficulty}")
        self.state.difficulty = difficulty

    def update(self, dt: float, rope: "RopeSimulator") -> bool:
        """
        Advance the reaction timer and re-decide if it has run out.

        Args:
            dt: Elapsed time in ms
            rope: Rope to read the midpoint displacement from

        Returns:
            Whether the opponent is pulling this tick
        """
        if not self.enabled:
            self.state.pulling = False
            return False

        state = self.state
        state.reaction_timer -= dt
        if state.reaction_timer > 0:
            return state.pulling

        self._decide(rope.midpoint_offset)
        return state.pulling

    def desire(self, centre_bias: float, noise_sample: float) -> float:
        """
        Desire score for a given displacement and uniform sample in [0, 1).
        """
        cfg = self.config
        noise = (noise_sample - 0.5) * cfg.noise_width
        return (
            -centre_bias * cfg.sensitivity
            + self.state.difficulty * cfg.difficulty_weight
            + noise
        )

    def _decide(self, centre_bias: float) -> None:
        cfg = self.config
        state = self.state
        difficulty = state.difficulty

        desire = self.desire(centre_bias, float(self.rng.random()))
        state.decisions += 1

        if desire > cfg.desire_threshold and state.stamina > cfg.stamina_gate:
            state.pulling = True
            state.pull_duration = (
                cfg.pull_base + float(self.rng.random()) * cfg.pull_span * (1 + difficulty)
            )
            state.reaction_timer = state.pull_duration
            state.stamina = max(
                cfg.stamina_floor, state.stamina - cfg.stamina_cost * (1 + difficulty)
            )
        else:
            state.pulling = False
            state.rest_duration = (
                cfg.rest_base
                + float(self.rng.random()) * cfg.rest_span * (1 - difficulty + cfg.rest_slack)
            )
            state.reaction_timer = state.rest_duration
            state.stamina = min(
                cfg.stamina_ceiling,
                state.stamina + cfg.stamina_recovery * (1 - difficulty + cfg.recovery_slack),
            )

        logger.debug(
            "Opponent %s (desire=%.3f, stamina=%.2f, dwell=%.0fms)",
            "pulls" if state.pulling else "rests",
            desire,
            state.stamina,
            state.reaction_timer,
        )


def create_opponent(
    difficulty: float = 0.86,
    seed: int | None = None,
) -> OpponentController:
    """
    Factory for an opponent with default tuning.

    Args:
        difficulty: 0.0 (easy) .. 1.0 (very hard)
        seed: Seed for the decision noise. None draws fresh OS entropy.
    """
    config = OpponentConfig(difficulty=difficulty)
    return OpponentController(config, rng=np.random.default_rng(seed))
