"""Unit tests for the headless experiment harness."""

import pytest

from tugsim.core.match import Winner, create_default_match
from tugsim.experiments import (
    RhythmPolicy,
    always_pull,
    never_pull,
    run_headless_match,
    run_series,
)


class TestPolicies:
    """Tests for scripted human policies."""

    def test_constant_policies(self):
        assert always_pull(0, None) is True
        assert never_pull(0, None) is False

    def test_rhythm_policy(self):
        policy = RhythmPolicy(on_ticks=3, off_ticks=2)
        flags = [policy(i, None) for i in range(10)]
        assert flags == [True, True, True, False, False] * 2

    def test_rhythm_needs_period(self):
        with pytest.raises(ValueError):
            RhythmPolicy(on_ticks=0, off_ticks=0)


class TestHeadlessRunner:
    """Tests for run_headless_match and run_series."""

    def test_stops_at_max_ticks_without_winner(self, idle_match):
        trace = run_headless_match(idle_match, never_pull, max_ticks=100)
        assert len(trace) == 100
        assert trace.winner is None
        assert trace.winning_tick is None

    def test_stops_on_winner(self, idle_match):
        trace = run_headless_match(idle_match, always_pull, max_ticks=3000)
        assert trace.winner is Winner.BLUE
        assert len(trace) < 3000
        assert idle_match.score == (1, 0)

    def test_series_resets_between_matches(self, idle_match):
        traces = run_series(idle_match, always_pull, n_matches=3)
        assert [t.winner for t in traces] == [Winner.BLUE] * 3
        assert idle_match.score == (3, 0)

    def test_default_match_records_opponent(self):
        match = create_default_match(seed=4)
        trace = run_headless_match(match, RhythmPolicy(), max_ticks=300)
        assert len(trace) <= 300
        assert all(0.0 <= s <= 1.0 for s in trace.stamina)
