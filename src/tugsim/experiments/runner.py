"""
Headless match runner: drives a MatchState the way a render loop would.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from tugsim.analysis.trace import MatchTrace

if TYPE_CHECKING:
    from tugsim.core.match import MatchState
    from tugsim.experiments.policies import HumanPolicy

logger = logging.getLogger(__name__)


def run_headless_match(
    match: "MatchState",
    policy: "HumanPolicy",
    dt: float = 16.0,
    max_ticks: int = 3000,
) -> MatchTrace:
    """
    Tick a match with a scripted human until someone wins.

    Args:
        match: Match to drive (not reset first)
        policy: Human pull policy, called once per tick
        dt: Fixed frame time in ms (16ms is roughly 60fps)
        max_ticks: Give up after this many ticks

    Returns:
        MatchTrace of every tick that ran
    """
    trace = MatchTrace()
    for i in range(max_ticks):
        result = match.step(dt, policy(i, match))
        trace.record(match, result, dt)
        if result.winner is not None:
            break
    else:
        logger.info("No winner after %d ticks", max_ticks)
    return trace


def run_series(
    match: "MatchState",
    policy: "HumanPolicy",
    n_matches: int,
    dt: float = 16.0,
    max_ticks: int = 3000,
) -> list[MatchTrace]:
    """Play several matches back to back, resetting between them."""
    traces = []
    for _ in range(n_matches):
        match.reset()
        traces.append(run_headless_match(match, policy, dt=dt, max_ticks=max_ticks))
    return traces
