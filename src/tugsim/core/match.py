"""
MatchState: one tug-of-rope match, advanced a tick at a time.

Per tick, in fixed order:
1. Opponent decides (forced idle once the match is decided)
2. Rope integrates with both pull flags
3. Pullers follow the rope, then the rope ends ease toward their grips
4. Victory check on the rope midpoint (only while undecided)

While either side pulls, both pullers are dragged along with their rope
ends, so grip easing never holds the rope back. Once both rest they
walk back to their stations and the eased ends bring the rope with them.

Sign convention: blue stands at the top. Pulling up moves the midpoint
to smaller y, so an offset below -threshold is a blue win and above
+threshold a red win.

Scores are cumulative across reset(); game_over is not.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field

import numpy as np

from tugsim.core.field import FieldConfig
from tugsim.core.rope import RopeConfig, RopeSimulator
from tugsim.core.opponent import OpponentConfig, OpponentController

logger = logging.getLogger(__name__)


class Winner(str, enum.Enum):
    BLUE = "blue"
    RED = "red"


@dataclass
class MatchConfig:
    """Configuration for match rules."""

    victory_threshold: float = 120.0  # Midpoint offset that decides the match
    grip_inset: float = 6.0  # Grip point sits this far inside the puller's edge
    puller_recovery: float = 0.1  # Fraction of the way back to station per idle tick

    def __post_init__(self):
        if self.victory_threshold <= 0:
            raise ValueError(
                f"victory_threshold must be positive, got {self.victory_threshold}"
            )
        if self.grip_inset < 0:
            raise ValueError(f"grip_inset must be non-negative, got {self.grip_inset}")
        if not 0.0 <= self.puller_recovery <= 1.0:
            raise ValueError(
                f"puller_recovery must be in [0, 1], got {self.puller_recovery}"
            )


@dataclass
class MatchRecord:
    """Cumulative score and the current match's outcome flag."""

    blue_score: int = 0
    red_score: int = 0
    game_over: bool = False


@dataclass
class Puller:
    """A character holding one end of the rope."""

    side: Winner
    x: float
    y: float
    radius: float
    grip_inset: float
    station: tuple[float, float] = field(init=False)  # Where the puller stands when idle

    def __post_init__(self):
        self.station = (self.x, self.y)

    @property
    def reach(self) -> float:
        """Distance from the puller's centre to its grip."""
        return self.radius - self.grip_inset

    @property
    def grip(self) -> tuple[float, float]:
        """Where the rope end is anchored, on the side facing the rope."""
        if self.side is Winner.BLUE:
            return self.x, self.y + self.reach
        return self.x, self.y - self.reach

    def move_to(self, x: float, y: float) -> None:
        """Place the puller and make that spot its station."""
        self.x = x
        self.y = y
        self.station = (x, y)

    def drag_to(self, end: tuple[float, float]) -> None:
        """Follow the rope end so the grip sits exactly on it."""
        x, y = end
        self.x = x
        self.y = y - self.reach if self.side is Winner.BLUE else y + self.reach

    def return_to_station(self) -> None:
        self.x, self.y = self.station

    def recover(self, rate: float) -> None:
        """Step back toward the station."""
        sx, sy = self.station
        self.x += (sx - self.x) * rate
        self.y += (sy - self.y) * rate


@dataclass
class TickResult:
    """What the presentation layer needs after one tick."""

    positions: np.ndarray  # (N, 2) copy of particle positions
    blue_pulling: bool
    red_pulling: bool
    winner: Winner | None
    score: tuple[int, int]  # (blue, red)
    midpoint_offset: float


def place_pullers(
    field_config: FieldConfig, config: MatchConfig | None = None
) -> tuple[Puller, Puller]:
    """
    Blue centred near the top edge, red near the bottom.

    Raises:
        ValueError: If the grip inset does not fit inside the puller radius
    """
    config = config if config is not None else MatchConfig()
    radius = field_config.puller_radius
    if config.grip_inset > radius:
        raise ValueError(
            f"grip_inset {config.grip_inset} exceeds puller radius {radius}"
        )

    cx, _ = field_config.center
    blue = Puller(Winner.BLUE, cx, field_config.puller_offset, radius, config.grip_inset)
    red = Puller(
        Winner.RED,
        cx,
        field_config.height - field_config.puller_offset,
        radius,
        config.grip_inset,
    )
    return blue, red


class MatchState:
    """
    Owns the rope, the opponent, the pullers and the score for one session.

    Nothing here is global: construct one MatchState per session and call
    tick() once per frame.
    """

    def __init__(
        self,
        field_config: FieldConfig | None = None,
        rope_config: RopeConfig | None = None,
        opponent: OpponentController | None = None,
        config: MatchConfig | None = None,
    ):
        self.field = field_config if field_config is not None else FieldConfig()
        self.config = config if config is not None else MatchConfig()
        self.rope = RopeSimulator(rope_config, self.field)
        self.opponent = opponent if opponent is not None else OpponentController()
        self.record = MatchRecord()
        self.blue, self.red = place_pullers(self.field, self.config)

        self.blue_pulling = False
        self.red_pulling = False
        self.current_tick = 0
        self.last_result: TickResult | None = None

    @property
    def game_over(self) -> bool:
        return self.record.game_over

    @property
    def score(self) -> tuple[int, int]:
        """(blue, red) cumulative score."""
        return self.record.blue_score, self.record.red_score

    def tick(self, dt: float, human_pulling: bool) -> Winner | None:
        """
        Advance the match by one frame.

        Args:
            dt: Elapsed time in ms
            human_pulling: Blue (human) is pulling this frame

        Returns:
            The winner if this tick decided the match, else None
        """
        return self.step(dt, human_pulling).winner

    def step(self, dt: float, human_pulling: bool) -> TickResult:
        """Same as tick() but returns the full TickResult."""
        self.blue_pulling = bool(human_pulling)

        if not self.record.game_over:
            self.red_pulling = self.opponent.update(dt, self.rope)
        else:
            self.red_pulling = False

        self.rope.integrate(dt, self.blue_pulling, self.red_pulling)
        self._follow_rope()
        self.rope.ease_ends(self.blue.grip, self.red.grip)

        winner = None
        if not self.record.game_over:
            winner = self.check_victory()
            if winner is not None:
                self._declare(winner)

        self.current_tick += 1
        self.last_result = TickResult(
            positions=self.rope.positions,
            blue_pulling=self.blue_pulling,
            red_pulling=self.red_pulling,
            winner=winner,
            score=self.score,
            midpoint_offset=self.rope.midpoint_offset,
        )
        return self.last_result

    def run(self, n_ticks: int, dt: float, human_pulling: bool) -> Winner | None:
        """
        Tick n times with constant input, stopping early on a decision.

        Returns:
            The winner, if one was declared during the run
        """
        for _ in range(n_ticks):
            winner = self.tick(dt, human_pulling)
            if winner is not None:
                return winner
        return None

    def _follow_rope(self) -> None:
        if self.blue_pulling or self.red_pulling:
            positions = self.rope.positions
            self.blue.drag_to(tuple(positions[0]))
            self.red.drag_to(tuple(positions[-1]))
        else:
            self.blue.recover(self.config.puller_recovery)
            self.red.recover(self.config.puller_recovery)

    def check_victory(self) -> Winner | None:
        """At most one winner: the two thresholds cannot both be crossed."""
        offset = self.rope.midpoint_offset
        threshold = self.config.victory_threshold
        if offset < -threshold:
            return Winner.BLUE
        if offset > threshold:
            return Winner.RED
        return None

    def _declare(self, winner: Winner) -> None:
        self.record.game_over = True
        if winner is Winner.BLUE:
            self.record.blue_score += 1
        else:
            self.record.red_score += 1
        logger.info(
            "%s wins at tick %d (score blue %d - %d red)",
            winner.value.upper(),
            self.current_tick,
            self.record.blue_score,
            self.record.red_score,
        )

    def reset(self) -> None:
        """Start a new match. Scores carry over."""
        self.rope.reset()
        self.blue.return_to_station()
        self.red.return_to_station()
        self.opponent.reset()
        self.record.game_over = False
        self.blue_pulling = False
        self.red_pulling = False
        self.current_tick = 0
        self.last_result = None
        logger.info("Match reset (score blue %d - %d red)", *self.score)

    def resize(self, width: float, height: float) -> None:
        """Adopt new field dimensions: re-place pullers and restart the rope."""
        self.field = self.field.resize(width, height)
        self.blue, self.red = place_pullers(self.field, self.config)
        self.rope.set_field(self.field)
        self.reset()


def create_default_match(
    seed: int | None = None,
    difficulty: float = 0.86,
    field_config: FieldConfig | None = None,
) -> MatchState:
    """
    Factory for a match with default tuning.

    Args:
        seed: Seed for the opponent's decision noise (None = unseeded)
        difficulty: Opponent difficulty in [0, 1]
        field_config: Play field geometry (defaults to FieldConfig())
    """
    opponent = OpponentController(
        OpponentConfig(difficulty=difficulty), rng=np.random.default_rng(seed)
    )
    return MatchState(field_config=field_config, opponent=opponent)
