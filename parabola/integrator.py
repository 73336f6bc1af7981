"""
Numerical Integration Engine
=============================
Fixed-step explicit Euler integration of a point mass under gravity and
quadratic drag, with a vertical wall at a set distance from the launch
point.

Each step:
    v_{n+1} = v_n + a(v_n) * dt
    x_{n+1} = x_n + v_{n+1} * dt

A run ends on the first of:
  - wall collision  (x reaches the wall, checked before the step)
  - landing         (y drops below 0; the last point is moved onto y = 0)
  - timeout         (time exceeds max_time; no event)

Output: TrajectoryResult dataclass with the sample list and the event.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

import numpy as np

from .projectile import ProjectileBody, analytic_max_height, compute_acceleration


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationControls:
    """Step size, time limit and wall position for one run."""
    time_step: float = 0.01                 # s
    max_time: float = 10.0                  # s
    obstacle_distance: float = math.inf     # m  (inf = no wall)

    def __post_init__(self):
        if not self.time_step > 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if not self.max_time > 0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")
        if not self.obstacle_distance >= 0:
            raise ValueError(
                f"obstacle_distance must be non-negative, got {self.obstacle_distance}"
            )


@dataclass(frozen=True)
class TrajectorySample:
    """Position of the body at one instant."""
    time: float
    x: float
    y: float


@dataclass(frozen=True)
class ObstacleCollision:
    """The body reached the wall at (x, y)."""
    x: float
    y: float
    time: float


@dataclass(frozen=True)
class Landed:
    """The body came down at x (y is 0 by definition)."""
    x: float
    time: float


TerminalEvent = Union[ObstacleCollision, Landed]


class Outcome(enum.Enum):
    COLLISION = 'collision'
    LANDED = 'landed'
    TIMED_OUT = 'timed_out'


@dataclass
class TrajectoryResult:
    """Complete trajectory output."""
    body: ProjectileBody
    controls: SimulationControls
    samples: List[TrajectorySample] = field(default_factory=list)
    event: Optional[TerminalEvent] = None

    # ── array views ───────────────────────────────────────────────────────
    @property
    def time(self) -> np.ndarray:
        return np.array([s.time for s in self.samples])

    @property
    def x(self) -> np.ndarray:
        return np.array([s.x for s in self.samples])

    @property
    def y(self) -> np.ndarray:
        return np.array([s.y for s in self.samples])

    # ── outcome ───────────────────────────────────────────────────────────
    @property
    def outcome(self) -> Outcome:
        if isinstance(self.event, ObstacleCollision):
            return Outcome.COLLISION
        if isinstance(self.event, Landed):
            return Outcome.LANDED
        return Outcome.TIMED_OUT

    @property
    def collided(self) -> bool:
        return self.outcome is Outcome.COLLISION

    @property
    def landed(self) -> bool:
        return self.outcome is Outcome.LANDED

    @property
    def final_sample(self) -> TrajectorySample:
        return self.samples[-1]

    @property
    def range_total(self) -> float:
        """Horizontal displacement at the last sample (m)."""
        return self.final_sample.x

    @property
    def max_height(self) -> float:
        """Highest point reached (m)."""
        return float(np.max(self.y))

    @property
    def flight_time(self) -> float:
        """Time of the last sample (s)."""
        return self.final_sample.time

    def summary(self) -> str:
        """Human-readable summary string."""
        body = self.body
        wall = self.controls.obstacle_distance
        wall_text = f"{wall:.2f} m" if math.isfinite(wall) else "none"
        lines = [
            f"  Launch vel   : {body.initial_velocity:>10.2f} m/s",
            f"  Angle        : {body.launch_angle_deg:>10.2f} °",
            f"  Cd / mass    : {body.drag_coefficient:>10.3f} / {body.mass:.3f} kg",
            f"  Timestep     : {self.controls.time_step:>10.4f} s",
            f"  Wall         : {wall_text:>10s}",
            f"  Outcome      : {self.outcome.value:>10s}",
            f"  Samples      : {len(self.samples):>10d}",
            f"  Range        : {self.range_total:>10.2f} m",
            f"  Max height   : {self.max_height:>10.2f} m",
            f"  No-drag apex : {analytic_max_height(body):>10.2f} m",
            f"  Flight time  : {self.flight_time:>10.2f} s",
        ]
        return '\n'.join(lines)


def simulate_euler(body: ProjectileBody,
                   controls: Optional[SimulationControls] = None,
                   on_event: Optional[Callable[[TerminalEvent], None]] = None
                   ) -> TrajectoryResult:
    """
    Forward Euler integration with wall and landing detection.

    The current position is recorded before the wall check and before the
    physics update, so the position at which the wall is hit is the last
    sample. On landing the overshooting point is corrected linearly onto
    y = 0 using the post-step velocity and appended as the last sample.

    ``on_event``, if given, is called once with the terminal event before
    returning. A timed-out run has no event and does not call it.
    """
    if controls is None:
        controls = SimulationControls()

    dt = controls.time_step
    vx, vy = body.initial_velocity_components()
    x = 0.0
    y = 0.0
    t = 0.0

    samples = []
    event = None

    while y >= 0 and t <= controls.max_time:
        samples.append(TrajectorySample(t, x, y))

        if x >= controls.obstacle_distance:
            event = ObstacleCollision(x, y, t)
            break

        ax, ay = compute_acceleration(vx, vy, body)

        vx += ax * dt
        vy += ay * dt
        x += vx * dt
        y += vy * dt
        t += dt

        if y < 0:
            time_to_land = -y / vy
            x -= vx * time_to_land
            y = 0.0
            t -= time_to_land
            samples.append(TrajectorySample(t, x, y))
            event = Landed(x, t)
            break

    result = TrajectoryResult(body=body, controls=controls,
                              samples=samples, event=event)
    logger.debug("Euler run finished: %s after %d samples (t=%.4f s, x=%.4f m)",
                 result.outcome.value, len(samples), t, x)

    if event is not None and on_event is not None:
        on_event(event)
    return result
