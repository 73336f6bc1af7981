"""
Projectile Definition & Forces
===============================
Defines the ProjectileBody dataclass and the equations of motion for a
point mass under:
  - Gravity (constant, acting straight down)
  - Quadratic aerodynamic drag (constant Cd and air density)

Also provides the closed-form drag-free estimates (range, apex height,
flight time) that are shown next to the simulated trajectory.

Coordinate system:
  x = horizontal displacement from the launch point
  y = height above ground (up positive)
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .drag_model import drag_force, SPHERE_DRAG_COEFFICIENT


# ── Physical defaults ─────────────────────────────────────────────────────
GRAVITY = 9.81               # m/s²
DEFAULT_DRAG_COEFFICIENT = SPHERE_DRAG_COEFFICIENT
DEFAULT_AIR_DENSITY = 1.225       # kg/m³ at sea level
DEFAULT_AREA = 0.01               # m²
DEFAULT_MASS = 0.1                # kg


@dataclass(frozen=True)
class ProjectileBody:
    """
    Physical parameters of a simulated body.

    Values are taken as given: range checks (angle in [0, 90], positive
    mass, ...) belong to whoever builds the body.
    """
    initial_velocity: float           # m/s
    launch_angle_deg: float           # degrees above horizontal
    gravity: float = GRAVITY          # m/s²
    drag_coefficient: float = DEFAULT_DRAG_COEFFICIENT
    air_density: float = DEFAULT_AIR_DENSITY    # kg/m³
    area: float = DEFAULT_AREA                  # m²  cross-section
    mass: float = DEFAULT_MASS                  # kg

    @property
    def launch_angle_rad(self) -> float:
        return self.launch_angle_deg * math.pi / 180

    def initial_velocity_components(self) -> Tuple[float, float]:
        """Split the launch speed into (vx, vy)."""
        angle = self.launch_angle_rad
        return (self.initial_velocity * math.cos(angle),
                self.initial_velocity * math.sin(angle))


def analytic_range(body: ProjectileBody) -> float:
    """
    Drag-free range on flat ground.

        R = v0² · sin(2θ) / g

    Reference value only; the integrator's landing point includes drag.
    """
    return body.initial_velocity ** 2 * math.sin(2 * body.launch_angle_rad) / body.gravity


def analytic_max_height(body: ProjectileBody) -> float:
    """Drag-free apex height: v0² sin²θ / 2g."""
    vy = body.initial_velocity * math.sin(body.launch_angle_rad)
    return vy ** 2 / (2 * body.gravity)


def analytic_flight_time(body: ProjectileBody) -> float:
    """Drag-free time of flight: 2 v0 sinθ / g."""
    return 2 * body.initial_velocity * math.sin(body.launch_angle_rad) / body.gravity


def compute_acceleration(vx: float, vy: float,
                         body: ProjectileBody) -> Tuple[float, float]:
    """
    Acceleration (ax, ay) of the body moving at (vx, vy).

    Drag opposes the velocity; gravity always pulls down regardless of drag.
    """
    fdx, fdy = drag_force(vx, vy, body.drag_coefficient,
                          body.air_density, body.area)
    ax = -fdx / body.mass
    ay = -body.gravity - fdy / body.mass
    return ax, ay
