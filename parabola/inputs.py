"""
Launch input parsing.

Turns the free-text fields of the launch form (or CLI) into numbers and
rejects anything the simulator cannot use.
"""

import math
from dataclasses import dataclass


MIN_ANGLE_DEG = 0.0
MAX_ANGLE_DEG = 90.0


class InputError(ValueError):
    """User-entered launch parameters are not usable."""


@dataclass(frozen=True)
class LaunchInput:
    velocity: float          # m/s, before any bird bonus
    angle_deg: float
    wall_distance: float     # m


def parse_number(text: str, field_name: str) -> float:
    try:
        value = float(str(text).strip().replace(',', '.'))
    except ValueError:
        raise InputError(f"{field_name} must be a number, got {text!r}") from None
    if not math.isfinite(value):
        raise InputError(f"{field_name} must be finite, got {text!r}")
    return value


def validate_angle(angle_deg: float) -> float:
    if not MIN_ANGLE_DEG <= angle_deg <= MAX_ANGLE_DEG:
        raise InputError(
            f"Launch angle must be between {MIN_ANGLE_DEG:.0f} and "
            f"{MAX_ANGLE_DEG:.0f} degrees, got {angle_deg:g}"
        )
    return angle_deg


def parse_launch_inputs(velocity_text: str, angle_text: str,
                        wall_text: str) -> LaunchInput:
    """
    Parse the three launch fields.

    Raises InputError for non-numeric text, an angle outside [0, 90]
    or a negative wall distance.
    """
    velocity = parse_number(velocity_text, "Initial velocity")
    angle = validate_angle(parse_number(angle_text, "Launch angle"))
    wall = parse_number(wall_text, "Wall distance")
    if wall < 0:
        raise InputError(f"Wall distance must not be negative, got {wall:g}")
    return LaunchInput(velocity=velocity, angle_deg=angle, wall_distance=wall)
