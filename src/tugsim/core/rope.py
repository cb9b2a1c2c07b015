"""
RopeSimulator: a particle chain integrated with Verlet steps.

The rope is N point masses from the blue end (index 0, top) to the red
end (index N-1, bottom). Each tick:

1. Verlet step with damping (velocity is implicit: position - previous)
2. Pull impulses on the two particles nearest each pulling end
3. Relaxation passes over adjacent pairs toward the rest length,
   each pass followed by a weak horizontal centring pull
4. Clamp every particle into the field's safe region
5. Ease the two end particles toward the pullers' grip points

NOTE: The relaxation is a sequential Gauss-Seidel sweep (left to right,
fixed iteration count) with stiffer ends. It is order dependent and only
approximately satisfies the constraints. Victory thresholds are tuned
against this exact behaviour, so it must stay as is.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from tugsim.core.field import FieldConfig


@dataclass(frozen=True)
class RopeConfig:
    """Configuration for the rope solver."""

    particle_count: int = 24  # Fixed number of particles in the chain
    rest_length: float = 18.0  # Target distance between neighbours
    damping: float = 0.995  # Fraction of implicit velocity kept per tick
    gravity: float = 0.0  # Vertical acceleration hook (scaled by dt * 0.001)
    pull_strength: float = 1.6  # Displacement applied to a pulling end particle
    pull_propagation: float = 0.8  # Fraction of the pull applied to the next particle in
    iterations: int = 6  # Relaxation passes per tick
    end_bias: float = 0.25  # Correction weight for the two end particles
    centering: float = 0.002  # Horizontal pull toward field centre, per pass
    epsilon: float = 1e-4  # Floor for pair distance in the constraint division
    grip_easing: float = 0.22  # Blend factor of end particles toward grip points

    def __post_init__(self):
        if self.particle_count < 3:
            raise ValueError(
                f"Rope needs at least 3 particles, got {self.particle_count}"
            )
        if self.rest_length <= 0:
            raise ValueError(f"rest_length must be positive, got {self.rest_length}")
        if not 0.0 < self.damping <= 1.0:
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.pull_strength < 0:
            raise ValueError("pull_strength must be non-negative")
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        for name in ("end_bias", "grip_easing", "pull_propagation"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True)
class Particle:
    """Snapshot of one rope particle."""

    x: float
    y: float
    px: float  # Previous x
    py: float  # Previous y

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> tuple[float, float]:
        """Implicit per-tick velocity."""
        return self.x - self.px, self.y - self.py


class RopeSimulator:
    """
    Owns the rope chain and advances it one tick at a time.

    State is two (N, 2) arrays: current and previous positions.
    Both are mutated in place by integrate() and restored by reset().
    """

    def __init__(self, config: RopeConfig | None = None, field: FieldConfig | None = None):
        self.config = config if config is not None else RopeConfig()
        self.field = field if field is not None else FieldConfig()

        n = self.config.particle_count
        self._pos = np.zeros((n, 2), dtype=np.float64)
        self._prev = np.zeros((n, 2), dtype=np.float64)

        # Per-particle relaxation weights: ends are stiffer
        self._bias = np.ones(n, dtype=np.float64)
        self._bias[0] = self.config.end_bias
        self._bias[-1] = self.config.end_bias

        self.reset()

    def reset(self) -> None:
        """Lay the rope out as a straight, motionless vertical line."""
        n = self.config.particle_count
        cx, _ = self.field.center
        top, bottom = self.field.rope_span

        t = np.arange(n, dtype=np.float64) / (n - 1)
        self._pos[:, 0] = cx
        self._pos[:, 1] = top + t * (bottom - top)
        np.copyto(self._prev, self._pos)

    def set_field(self, field: FieldConfig) -> None:
        """Switch to a new field geometry and re-lay the rope."""
        self.field = field
        self.reset()

    def set_positions(self, positions, previous=None) -> None:
        """
        Place every particle at the given positions.

        Args:
            positions: (N, 2) array-like of x, y coordinates
            previous: Optional (N, 2) previous positions. Defaults to
                      positions, i.e. the rope is placed at rest.
        """
        arr = self._as_layout(positions)
        prev = arr if previous is None else self._as_layout(previous)
        np.copyto(self._pos, arr)
        np.copyto(self._prev, prev)

    def _as_layout(self, values) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != self._pos.shape:
            raise ValueError(
                f"Expected positions of shape {self._pos.shape}, got {arr.shape}"
            )
        return arr

    @property
    def particle_count(self) -> int:
        return self.config.particle_count

    @property
    def positions(self) -> np.ndarray:
        """Copy of current positions, shape (N, 2)."""
        return self._pos.copy()

    @property
    def previous_positions(self) -> np.ndarray:
        """Copy of previous positions, shape (N, 2)."""
        return self._prev.copy()

    @property
    def particles(self) -> list[Particle]:
        """Ordered particle snapshots, blue end first."""
        return [
            Particle(float(x), float(y), float(px), float(py))
            for (x, y), (px, py) in zip(self._pos, self._prev)
        ]

    @property
    def mid_index(self) -> int:
        return self.config.particle_count // 2

    @property
    def midpoint(self) -> tuple[float, float]:
        """Position of the middle particle."""
        x, y = self._pos[self.mid_index]
        return float(x), float(y)

    @property
    def midpoint_offset(self) -> float:
        """
        Vertical offset of the middle particle from field centre.

        Negative: rope has moved toward blue (top).
        Positive: rope has moved toward red (bottom).
        """
        return self.midpoint[1] - self.field.center[1]

    def segment_lengths(self) -> np.ndarray:
        """Distances between consecutive particles, shape (N-1,)."""
        return np.hypot(*np.diff(self._pos, axis=0).T)

    def integrate(
        self,
        dt: float,
        blue_pulling: bool,
        red_pulling: bool,
        grip_blue: tuple[float, float] | None = None,
        grip_red: tuple[float, float] | None = None,
    ) -> None:
        """
        Advance the rope by one tick.

        Args:
            dt: Elapsed time in milliseconds (only feeds the gravity hook)
            blue_pulling: Blue end is pulling up this tick
            red_pulling: Red end is pulling down this tick
            grip_blue, grip_red: Grip points the end particles ease toward.
                                 Easing is skipped for an end when None.
        """
        self._verlet(dt)
        self._apply_pulls(blue_pulling, red_pulling)
        self._relax()
        self._clamp()
        if grip_blue is not None or grip_red is not None:
            self.ease_ends(grip_blue, grip_red)

    def ease_ends(
        self,
        grip_blue: tuple[float, float] | None,
        grip_red: tuple[float, float] | None,
    ) -> None:
        """Blend the end particles toward the grip points, then re-clamp."""
        k = self.config.grip_easing
        if grip_blue is not None:
            self._pos[0] += (np.asarray(grip_blue, dtype=np.float64) - self._pos[0]) * k
        if grip_red is not None:
            self._pos[-1] += (np.asarray(grip_red, dtype=np.float64) - self._pos[-1]) * k
        self._clamp()

    def _verlet(self, dt: float) -> None:
        cfg = self.config
        new = self._pos + (self._pos - self._prev) * cfg.damping
        new[:, 1] += cfg.gravity * dt * 0.001

        # Previous must take the pre-step value before positions move
        np.copyto(self._prev, self._pos)
        np.copyto(self._pos, new)

    def _apply_pulls(self, blue_pulling: bool, red_pulling: bool) -> None:
        strength = self.config.pull_strength
        spill = strength * self.config.pull_propagation
        if blue_pulling:
            self._pos[0, 1] -= strength
            self._pos[1, 1] -= spill
        if red_pulling:
            self._pos[-1, 1] += strength
            self._pos[-2, 1] += spill

    def _relax(self) -> None:
        cfg = self.config
        pos = self._pos
        bias = self._bias
        n = cfg.particle_count
        rest = cfg.rest_length
        eps = cfg.epsilon
        cx = self.field.center[0]

        for _ in range(cfg.iterations):
            # Sequential sweep: each pair sees the corrections made before it
            for i in range(n - 1):
                dx = pos[i + 1, 0] - pos[i, 0]
                dy = pos[i + 1, 1] - pos[i, 1]
                d = max(np.hypot(dx, dy), eps)
                diff = (d - rest) / d
                mx = dx * 0.5 * diff
                my = dy * 0.5 * diff
                pos[i, 0] += mx * bias[i]
                pos[i, 1] += my * bias[i]
                pos[i + 1, 0] -= mx * bias[i + 1]
                pos[i + 1, 1] -= my * bias[i + 1]

            pos[:, 0] += (cx - pos[:, 0]) * cfg.centering

    def _clamp(self) -> None:
        xmin, xmax, ymin, ymax = self.field.bounds
        np.clip(self._pos[:, 0], xmin, xmax, out=self._pos[:, 0])
        np.clip(self._pos[:, 1], ymin, ymax, out=self._pos[:, 1])


def create_rope(
    field: FieldConfig | None = None,
    particle_count: int = 24,
    rest_length: float = 18.0,
) -> RopeSimulator:
    """
    Convenience factory for a rope with default tuning.

    Args:
        field: Play field geometry (defaults to FieldConfig())
        particle_count: Number of particles in the chain
        rest_length: Target neighbour distance

    Returns:
        RopeSimulator laid out straight between the rope margins
    """
    config = RopeConfig(particle_count=particle_count, rest_length=rest_length)
    return RopeSimulator(config, field)
