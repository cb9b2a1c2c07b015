"""Unit tests for RopeSimulator and RopeConfig."""

import dataclasses

import numpy as np
import pytest

from tugsim.core.field import FieldConfig
from tugsim.core.rope import Particle, RopeConfig, RopeSimulator, create_rope


def in_bounds(rope: RopeSimulator) -> bool:
    xmin, xmax, ymin, ymax = rope.field.bounds
    pos = rope.positions
    return bool(
        np.all(pos[:, 0] >= xmin) and np.all(pos[:, 0] <= xmax)
        and np.all(pos[:, 1] >= ymin) and np.all(pos[:, 1] <= ymax)
    )


class TestRopeConfig:
    """Tests for RopeConfig."""

    def test_default_config(self):
        cfg = RopeConfig()
        assert cfg.particle_count == 24
        assert cfg.rest_length == 18.0
        assert cfg.damping == 0.995
        assert cfg.gravity == 0.0
        assert cfg.pull_strength == 1.6
        assert cfg.iterations == 6
        assert cfg.end_bias == 0.25
        assert cfg.grip_easing == 0.22

    @pytest.mark.parametrize("count", [-1, 0, 1, 2])
    def test_rejects_too_few_particles(self, count):
        with pytest.raises(ValueError):
            RopeConfig(particle_count=count)

    def test_minimum_particle_count(self):
        rope = RopeSimulator(RopeConfig(particle_count=3))
        assert rope.mid_index == 1

    @pytest.mark.parametrize("rest", [0.0, -5.0])
    def test_rejects_non_positive_rest_length(self, rest):
        with pytest.raises(ValueError):
            RopeConfig(rest_length=rest)

    def test_rejects_bad_tuning(self):
        with pytest.raises(ValueError):
            RopeConfig(damping=0.0)
        with pytest.raises(ValueError):
            RopeConfig(iterations=0)
        with pytest.raises(ValueError):
            RopeConfig(grip_easing=1.5)
        with pytest.raises(ValueError):
            RopeConfig(end_bias=-0.1)

    def test_config_is_frozen(self):
        cfg = RopeConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.end_bias = 0.5


class TestLayout:
    """Tests for reset() and read access."""

    def test_reset_is_straight_vertical_line(self):
        rope = create_rope()
        pos = rope.positions

        assert pos.shape == (24, 2)
        assert np.allclose(pos[:, 0], 240.0)
        assert pos[0, 1] == pytest.approx(80.0)
        assert pos[-1, 1] == pytest.approx(720.0)
        assert np.allclose(np.diff(pos[:, 1]), 640.0 / 23)

    def test_reset_leaves_rope_motionless(self):
        rope = create_rope()
        assert np.array_equal(rope.positions, rope.previous_positions)

    def test_reset_is_idempotent(self):
        rope = create_rope()
        rope.reset()
        once = rope.positions
        rope.reset()
        assert np.array_equal(rope.positions, once)

    def test_reset_after_motion(self):
        rope = create_rope()
        initial = rope.positions
        for _ in range(30):
            rope.integrate(16.0, True, False)
        assert not np.array_equal(rope.positions, initial)

        rope.reset()
        assert np.array_equal(rope.positions, initial)
        assert np.array_equal(rope.previous_positions, initial)

    def test_positions_is_a_copy(self):
        rope = create_rope()
        pos = rope.positions
        pos[:] = 0.0
        assert rope.positions[0, 1] == pytest.approx(80.0)

    def test_particles_snapshot(self):
        rope = create_rope()
        particles = rope.particles
        assert len(particles) == 24
        assert isinstance(particles[0], Particle)
        assert particles[0].position == pytest.approx((240.0, 80.0))
        assert particles[0].velocity == (0.0, 0.0)

    def test_midpoint(self):
        rope = create_rope()
        assert rope.mid_index == 12
        _, y = rope.midpoint
        assert y == pytest.approx(80.0 + 12 / 23 * 640.0)
        assert rope.midpoint_offset == pytest.approx(y - 400.0)

    def test_set_positions_rejects_wrong_shape(self):
        rope = create_rope()
        with pytest.raises(ValueError):
            rope.set_positions(np.zeros((10, 2)))

    def test_set_field_relays_rope(self):
        rope = create_rope()
        rope.set_field(FieldConfig(width=600, height=1000))
        pos = rope.positions
        assert np.allclose(pos[:, 0], 300.0)
        assert pos[-1, 1] == pytest.approx(920.0)

    def test_segment_lengths(self):
        rope = create_rope()
        lengths = rope.segment_lengths()
        assert lengths.shape == (23,)
        assert np.allclose(lengths, 640.0 / 23)


class TestIntegration:
    """Tests for integrate()."""

    def test_rope_at_rest_length_stays_put(self, slack_field_config, slack_rope_config):
        rope = RopeSimulator(slack_rope_config, slack_field_config)
        initial = rope.positions

        for _ in range(300):
            rope.integrate(16.0, False, False)

        assert np.allclose(rope.positions, initial, atol=1e-6)
        assert rope.midpoint_offset == pytest.approx(0.0, abs=1e-6)

    def test_verlet_carries_damped_velocity(self, slack_field_config, slack_rope_config):
        rope = RopeSimulator(slack_rope_config, slack_field_config)
        start = rope.positions

        # Whole rope moving up 2 units per tick
        moving_prev = start.copy()
        moving_prev[:, 1] += 2.0
        rope.set_positions(start, previous=moving_prev)

        rope.integrate(16.0, False, False)

        assert np.allclose(rope.previous_positions, start)
        assert np.allclose(rope.positions[:, 1], start[:, 1] - 2.0 * 0.995)

    def test_gravity_hook(self, slack_field_config):
        cfg = RopeConfig(particle_count=25, rest_length=100.0 / 24, gravity=1000.0)
        rope = RopeSimulator(cfg, slack_field_config)
        start = rope.positions

        rope.integrate(16.0, False, False)

        # gravity * dt * 0.001 = 16 units down for every particle
        assert np.allclose(rope.positions[:, 1], start[:, 1] + 16.0)

    def test_blue_pull_moves_top_end_up(self, slack_field_config, slack_rope_config):
        rope = RopeSimulator(slack_rope_config, slack_field_config)
        start = rope.positions

        rope.integrate(16.0, True, False)

        assert rope.positions[0, 1] < start[0, 1]
        assert rope.positions[1, 1] < start[1, 1]

    def test_red_pull_moves_bottom_end_down(self, slack_field_config, slack_rope_config):
        rope = RopeSimulator(slack_rope_config, slack_field_config)
        start = rope.positions

        rope.integrate(16.0, False, True)

        assert rope.positions[-1, 1] > start[-1, 1]
        assert rope.positions[-2, 1] > start[-2, 1]

    def test_pull_direction_on_default_rope(self):
        """Blue pulling drags the midpoint up, red pulling drags it down."""
        idle, blue, red = create_rope(), create_rope(), create_rope()
        grips = ((240.0, 82.0), (240.0, 718.0))

        offsets = {"idle": [], "blue": [], "red": []}
        for _ in range(200):
            idle.integrate(16.0, False, False, *grips)
            blue.integrate(16.0, True, False, *grips)
            red.integrate(16.0, False, True, *grips)
            offsets["idle"].append(idle.midpoint_offset)
            offsets["blue"].append(blue.midpoint_offset)
            offsets["red"].append(red.midpoint_offset)

        late = {side: np.mean(values[100:]) for side, values in offsets.items()}
        assert late["blue"] < late["idle"] < late["red"]

    def test_disturbed_rope_settles_back(self):
        """With nobody pulling, a knocked rope returns to the undisturbed layout."""
        grips = ((240.0, 82.0), (240.0, 718.0))
        undisturbed = create_rope()
        for _ in range(3000):
            undisturbed.integrate(16.0, False, False, *grips)
        rest_offset = undisturbed.midpoint_offset

        rope = create_rope()
        knocked = rope.positions
        knocked[:, 0] += 25.0
        knocked[:, 1] -= 40.0
        rope.set_positions(knocked)

        gaps = []
        for _ in range(3000):
            rope.integrate(16.0, False, False, *grips)
            gaps.append(abs(rope.midpoint_offset - rest_offset))

        assert np.mean(gaps[-100:]) < np.mean(gaps[:100])
        assert gaps[-1] < 1.0
        assert np.allclose(rope.positions[:, 0], 240.0, atol=0.5)

    def test_centering_pulls_toward_field_centre(self, slack_field_config, slack_rope_config):
        rope = RopeSimulator(slack_rope_config, slack_field_config)
        shifted = rope.positions
        shifted[:, 0] += 30.0
        rope.set_positions(shifted)

        rope.integrate(16.0, False, False)

        x = rope.positions[:, 0]
        assert np.all(x < 270.0)
        assert np.all(x > 240.0)

    def test_coincident_particles_stay_finite(self):
        rope = create_rope(particle_count=5)
        rope.set_positions(np.full((5, 2), [240.0, 400.0]))

        for _ in range(20):
            rope.integrate(16.0, True, True)

        assert np.all(np.isfinite(rope.positions))

    def test_clamps_outside_particles(self):
        rope = create_rope()
        wild = rope.positions
        wild[0] = (-500.0, -500.0)
        wild[5] = (2000.0, 400.0)
        wild[-1] = (240.0, 5000.0)
        rope.set_positions(wild)

        rope.integrate(16.0, False, False)

        assert in_bounds(rope)

    def test_bounds_hold_under_random_input(self, rng):
        rope = create_rope()
        grips = ((240.0, 82.0), (240.0, 718.0))

        for _ in range(1000):
            blue, red = rng.random(2) < 0.5
            rope.integrate(float(rng.uniform(5, 40)), bool(blue), bool(red), *grips)
            assert in_bounds(rope)

    def test_bounds_hold_with_grips_outside_field(self):
        rope = create_rope()
        for _ in range(100):
            rope.integrate(16.0, True, True, (-1000.0, -1000.0), (1000.0, 5000.0))
            assert in_bounds(rope)


class TestGripEasing:
    """Tests for ease_ends()."""

    def test_ends_blend_toward_grips(self):
        rope = create_rope()
        pos = rope.positions
        rope.ease_ends((340.0, 80.0), (240.0, 760.0))
        eased = rope.positions

        assert eased[0, 0] == pytest.approx(pos[0, 0] + 100.0 * 0.22)
        assert eased[-1, 1] == pytest.approx(pos[-1, 1] + 40.0 * 0.22)
        assert np.array_equal(eased[1:-1], pos[1:-1])

    def test_easing_respects_bounds(self):
        rope = create_rope()
        rope.ease_ends((240.0, -1000.0), (240.0, 5000.0))
        assert in_bounds(rope)

    def test_none_grip_skips_that_end(self):
        rope = create_rope()
        pos = rope.positions
        rope.ease_ends(None, (240.0, 820.0))
        assert np.array_equal(rope.positions[0], pos[0])
