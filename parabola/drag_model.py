"""
Aerodynamic Drag Model
======================
Quadratic drag with a constant drag coefficient and air density:

    F_drag = ½ · Cd · ρ · A · |v|²

directed against the velocity. The bird presets all fly as smooth
spheres (SPHERE_DRAG_COEFFICIENT).
"""

import math
from typing import Tuple


# Subsonic sphere (Hoerner, "Fluid Dynamic Drag")
SPHERE_DRAG_COEFFICIENT = 0.47


def drag_magnitude(speed: float, cd: float, rho: float, area: float) -> float:
    """Drag force magnitude (N) at the given speed."""
    return 0.5 * cd * rho * area * speed * speed


def drag_force(vx: float, vy: float, cd: float, rho: float,
               area: float) -> Tuple[float, float]:
    """
    Drag force components (Fdx, Fdy) in the direction of motion (N).

    The returned vector points along the velocity; callers subtract it.
    A body at rest has no direction of motion, so it feels no drag.

    Parameters
    ----------
    vx, vy : float
        Velocity components (m/s)
    cd : float
        Drag coefficient (dimensionless)
    rho : float
        Air density (kg/m³)
    area : float
        Reference cross-sectional area (m²)
    """
    speed = math.sqrt(vx * vx + vy * vy)
    if speed == 0.0:
        return 0.0, 0.0

    f_mag = drag_magnitude(speed, cd, rho, area)
    return f_mag * (vx / speed), f_mag * (vy / speed)
