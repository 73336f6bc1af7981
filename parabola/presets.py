"""
Bird Presets
============
The fixed catalog of launchable birds. Each preset carries the physical
parameters of the body plus presentation-only attributes (display name,
colour) and a launch bonus added to the entered velocity.

The integrator never sees a preset, only the ProjectileBody it projects to.
"""

from dataclasses import dataclass

from .drag_model import SPHERE_DRAG_COEFFICIENT
from .projectile import ProjectileBody, GRAVITY, DEFAULT_AIR_DENSITY


@dataclass(frozen=True)
class BirdPreset:
    name: str
    velocity_modifier: float     # m/s added to the entered launch speed
    drag_coefficient: float
    air_density: float           # kg/m³
    area: float                  # m²
    mass: float                  # kg
    color: str = '#ffffff'

    def to_body(self, initial_velocity: float, launch_angle_deg: float,
                gravity: float = GRAVITY) -> ProjectileBody:
        """Build the physical body for a launch at the entered speed and angle."""
        return ProjectileBody(
            initial_velocity=initial_velocity + self.velocity_modifier,
            launch_angle_deg=launch_angle_deg,
            gravity=gravity,
            drag_coefficient=self.drag_coefficient,
            air_density=self.air_density,
            area=self.area,
            mass=self.mass,
        )

    def __str__(self):
        return self.name


REGULAR_BIRD = BirdPreset(
    name='Regular',
    velocity_modifier=0.0,
    drag_coefficient=SPHERE_DRAG_COEFFICIENT,
    air_density=DEFAULT_AIR_DENSITY,
    area=0.01,
    mass=0.1,
    color='#00d4ff',
)

RED_BIRD = BirdPreset(
    name='Red',
    velocity_modifier=5.0,
    drag_coefficient=SPHERE_DRAG_COEFFICIENT,
    air_density=DEFAULT_AIR_DENSITY,
    area=0.01,
    mass=0.1,
    color='#ff5252',
)

YELLOW_BIRD = BirdPreset(
    name='Yellow',
    velocity_modifier=10.0,
    drag_coefficient=SPHERE_DRAG_COEFFICIENT,
    air_density=DEFAULT_AIR_DENSITY,
    area=0.01,
    mass=0.15,
    color='#ffeb3b',
)

# Display order matters: the first entry is the default selection
ALL_BIRDS = {
    'regular': REGULAR_BIRD,
    'red': RED_BIRD,
    'yellow': YELLOW_BIRD,
}


def get_preset(key: str) -> BirdPreset:
    """Look up a bird by catalog key ('regular', 'red', 'yellow')."""
    if key not in ALL_BIRDS:
        raise ValueError(
            f"Unknown bird '{key}'. "
            f"Available: {list(ALL_BIRDS.keys())}"
        )
    return ALL_BIRDS[key]
