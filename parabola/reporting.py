"""
Text Report
===========
Plain-text listing of a run, as shown in the output box of the launch
window and printed by the command-line runner:

    Range without drag: 40.77 m.

    Wall collision! X=5.02, Y=4.41

    Body coordinates over time (with drag):
    t=0.00s; X=0.00m; Y=0.00m
    ...
"""

from typing import List

from .integrator import (
    TrajectoryResult, TrajectorySample, ObstacleCollision, Landed,
)
from .projectile import analytic_range


def format_range(range_m: float) -> str:
    return f"Range without drag: {range_m:.2f} m."


def format_sample(sample: TrajectorySample) -> str:
    return f"t={sample.time:.2f}s; X={sample.x:.2f}m; Y={sample.y:.2f}m"


def format_collision(event: ObstacleCollision) -> str:
    return f"Wall collision! X={event.x:.2f}, Y={event.y:.2f}"


def format_landing(event: Landed) -> str:
    return f"Landed at X={event.x:.2f} m after {event.time:.2f} s."


def format_timeout(max_time: float) -> str:
    return f"Simulation stopped at max time {max_time:.2f} s."


def trajectory_report(result: TrajectoryResult,
                      include_samples: bool = True) -> List[str]:
    """
    Build the report lines for a finished run.

    The drag-free range comes first, then the collision message (if any),
    then the sample listing and finally how the flight ended.
    """
    lines = [format_range(analytic_range(result.body))]

    if isinstance(result.event, ObstacleCollision):
        lines.append("")
        lines.append(format_collision(result.event))

    if include_samples:
        lines.append("")
        lines.append("Body coordinates over time (with drag):")
        lines.extend(format_sample(s) for s in result.samples)

    if isinstance(result.event, Landed):
        lines.append("")
        lines.append(format_landing(result.event))
    elif result.event is None:
        lines.append("")
        lines.append(format_timeout(result.controls.max_time))

    return lines


def render_report(result: TrajectoryResult, include_samples: bool = True) -> str:
    return '\n'.join(trajectory_report(result, include_samples))

