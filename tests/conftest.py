"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


class FixedRandom:
    """RandomSource that always returns the same sample."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def field_config():
    """Default 480x800 portrait field."""
    from tugsim.core import FieldConfig
    return FieldConfig()


@pytest.fixture
def slack_rope_config():
    """
    Short rope (y 350..450) whose spacing equals its rest length, with
    grip easing off: it sits motionless until pulled.

    25 particles so the middle one starts exactly at field centre.
    """
    from tugsim.core import RopeConfig
    top, bottom = 350.0, 450.0
    n = 25
    return RopeConfig(
        particle_count=n,
        rest_length=(bottom - top) / (n - 1),
        grip_easing=0.0,
    )


@pytest.fixture
def slack_field_config():
    """Default field with the rope laid out between y=350 and y=450."""
    from tugsim.core import FieldConfig
    return FieldConfig(rope_margin=350.0)


@pytest.fixture
def idle_match(slack_field_config, slack_rope_config):
    """Match on the slack rope with the opponent switched off."""
    from tugsim.core import MatchState, OpponentController
    opponent = OpponentController(rng=np.random.default_rng(0), enabled=False)
    return MatchState(
        field_config=slack_field_config,
        rope_config=slack_rope_config,
        opponent=opponent,
    )


@pytest.fixture
def fixed_random():
    """RandomSource pinned at 0.5 (zero noise)."""
    return FixedRandom(0.5)


@pytest.fixture
def make_fixed_random():
    """Factory for RandomSources pinned at a chosen sample."""
    return FixedRandom


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
